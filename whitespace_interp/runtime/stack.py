from typing import List, Iterator

from ..core.errors import StackUnderflow


class Stack:
    """
    LIFO of integers. Indexing is from the top: get(0) is the most
    recently pushed value.
    """

    def __init__(self, values: List[int] = None):
        self._items = list(values) if values else []

    def push(self, value: int) -> None:
        self._items.append(value)

    def pop(self) -> int:
        if not self._items:
            raise StackUnderflow("Pop from empty stack")
        return self._items.pop()

    def get(self, index: int = 0) -> int:
        """Access an item without popping (0 is top)."""
        if index < 0 or index >= len(self._items):
            raise StackUnderflow(f"Stack index {index} out of range for depth {len(self._items)}")
        return self._items[-(index + 1)]

    def swap(self) -> None:
        if len(self._items) < 2:
            raise StackUnderflow(f"Swap needs 2 items, stack has {len(self._items)}")
        self._items[-1], self._items[-2] = self._items[-2], self._items[-1]

    def slide(self, count: int) -> None:
        """Drop `count` items from under the top item, keeping the top."""
        if count < 0 or count + 1 > len(self._items):
            raise StackUnderflow(f"Slide {count} out of range for depth {len(self._items)}")
        if count:
            del self._items[-(count + 1):-1]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        """Iterate bottom to top."""
        return iter(self._items)

    def to_list(self) -> List[int]:
        return list(self._items)

    def __str__(self) -> str:
        return str(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items})"
