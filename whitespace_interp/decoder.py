import io
from typing import Iterator, Union, BinaryIO

from .core.instruction import Symbol

SIGNIFICANT_BYTES = {
    Symbol.SPACE.value: Symbol.SPACE,
    Symbol.TAB.value: Symbol.TAB,
    Symbol.LINEFEED.value: Symbol.LINEFEED,
}

Source = Union[bytes, bytearray, memoryview, str, BinaryIO]


def open_source(source: Source) -> BinaryIO:
    """Wrap raw program text in a binary stream; streams pass through unchanged."""
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if hasattr(source, "read"):
        return source
    raise TypeError(f"Cannot read program source of type {type(source).__name__}")


class SymbolReader:
    """
    Cursor over the significant symbols of a program source.

    Every byte other than space, tab and linefeed is skipped. After the
    source is exhausted END_OF_INPUT is returned on every call.
    """

    def __init__(self, source: Source):
        self.stream = open_source(source)
        self.position = 0  # significant symbols consumed
        self.offset = 0  # raw bytes consumed
        self.exhausted = False

    def next_symbol(self) -> Symbol:
        while not self.exhausted:
            chunk = self.stream.read(1)
            if not chunk:
                self.exhausted = True
                break
            self.offset += 1
            byte = chunk[0]
            if isinstance(byte, str):
                # text streams
                byte = ord(byte)
            symbol = SIGNIFICANT_BYTES.get(byte)
            if symbol is not None:
                self.position += 1
                return symbol
        return Symbol.END_OF_INPUT

    def __iter__(self) -> Iterator[Symbol]:
        while True:
            symbol = self.next_symbol()
            if symbol == Symbol.END_OF_INPUT:
                return
            yield symbol


def iter_symbols(source: Source) -> Iterator[Symbol]:
    """Yield every significant symbol in the source."""
    return iter(SymbolReader(source))
