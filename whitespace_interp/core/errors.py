"""Error types raised while assembling or running a Whitespace program."""
from typing import Optional


class WhitespaceError(Exception):
    """Base class for every interpreter error."""


class MalformedProgram(WhitespaceError):
    """The symbol stream is truncated or does not follow the grammar."""

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        if position is not None:
            message = f"{message} (at symbol {position})"
        super().__init__(message)


class UnexpectedEndOfInput(MalformedProgram):
    pass


class UnrecognizedGroupPrefix(MalformedProgram):
    """Kept for completeness; every symbol sequence selects a group, so the parser never raises it."""


class UnrecognizedCommand(MalformedProgram):
    pass


class ExecutionError(WhitespaceError):
    """
    Raised while a program runs.

    The machine fills in `pc` and `instruction` for the step that failed
    before the error leaves `Machine.run`.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.detail = message
        self.pc = None
        self.instruction = None

    def locate(self, pc: int, instruction) -> None:
        self.pc = pc
        self.instruction = instruction
        self.args = (f"{self.detail} (pc={pc}, instruction={instruction.display})",)


class StackUnderflow(ExecutionError):
    pass


class HeapIndexOutOfRange(ExecutionError):
    pass


class ArithmeticFault(ExecutionError):
    pass


class UndefinedLabel(ExecutionError):
    def __init__(self, label: int):
        super().__init__(f"Undefined label {label}")
        self.label = label


class ReturnWithoutCall(ExecutionError):
    pass


class InputOutputError(ExecutionError):
    pass
