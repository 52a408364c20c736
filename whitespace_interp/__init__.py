"""
Whitespace interpreter: assembles the space/tab/linefeed encoding into a
Program and runs it on a stack machine.
"""

from .logging_config import route_to_stdlib
from .core import (
    Symbol,
    Group,
    Opcode,
    Instruction,
    Program,
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
from .decoder import SymbolReader, iter_symbols
from .assembler import Parser, parse_program
from .runtime import Machine, Stack, Heap
from .config import InterpreterConfig
from .interpreter import WhitespaceInterpreter, run_source
from .export import export_program

route_to_stdlib()

__all__ = [
    # Data model
    "Symbol",
    "Group",
    "Opcode",
    "Instruction",
    "Program",
    # Errors
    "WhitespaceError",
    "MalformedProgram",
    "UnexpectedEndOfInput",
    "UnrecognizedGroupPrefix",
    "UnrecognizedCommand",
    "ExecutionError",
    "StackUnderflow",
    "HeapIndexOutOfRange",
    "ArithmeticFault",
    "UndefinedLabel",
    "ReturnWithoutCall",
    "InputOutputError",
    # Pipeline
    "SymbolReader",
    "iter_symbols",
    "Parser",
    "parse_program",
    "Machine",
    "Stack",
    "Heap",
    "InterpreterConfig",
    "WhitespaceInterpreter",
    "run_source",
    "export_program",
]
