from .instruction import Symbol, Group, Opcode, Instruction
from .program import Program
from .errors import (
    WhitespaceError,
    MalformedProgram,
    UnexpectedEndOfInput,
    UnrecognizedGroupPrefix,
    UnrecognizedCommand,
    ExecutionError,
    StackUnderflow,
    HeapIndexOutOfRange,
    ArithmeticFault,
    UndefinedLabel,
    ReturnWithoutCall,
    InputOutputError,
)
