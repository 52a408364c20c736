from typing import List

from ..core.errors import HeapIndexOutOfRange

DEFAULT_HEAP_CAPACITY = 128


class Heap:
    """
    Dense, growable array of integer cells.

    Writes past the end grow the array; reads past the end fail.
    """

    def __init__(self, capacity: int = DEFAULT_HEAP_CAPACITY):
        if capacity < 0:
            raise ValueError(f"Heap capacity must be non-negative, got {capacity}")
        self._cells: List[int] = [0] * capacity

    def get(self, address: int) -> int:
        if address < 0 or address >= len(self._cells):
            raise HeapIndexOutOfRange(f"Heap read at {address} outside 0..{len(self._cells) - 1}")
        return self._cells[address]

    def put(self, address: int, value: int) -> None:
        if address < 0:
            raise HeapIndexOutOfRange(f"Heap write at negative address {address}")
        if address >= len(self._cells):
            self._grow(address)
        self._cells[address] = value

    def _grow(self, address: int) -> None:
        new_size = max(address + 1, 2 * len(self._cells))
        self._cells.extend([0] * (new_size - len(self._cells)))

    def __len__(self) -> int:
        return len(self._cells)
