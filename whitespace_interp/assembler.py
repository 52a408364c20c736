"""
Instruction assembler: decodes the symbol stream into a Program.

The grammar is a prefix code. A one or two symbol prefix selects the
instruction group, a further one or two symbols select the command, and
some commands are followed by a number literal.
"""
import sys
from typing import Dict, Tuple, Optional, TextIO

import structlog

from .core.instruction import Symbol, Group, Opcode, Instruction, OPCODES_WITH_OPERAND
from .core.program import Program
from .core.errors import UnexpectedEndOfInput, UnrecognizedGroupPrefix, UnrecognizedCommand
from .decoder import SymbolReader, Source

logger = structlog.get_logger()

S = Symbol.SPACE
T = Symbol.TAB
L = Symbol.LINEFEED

SymbolKey = Tuple[Symbol, ...]

GROUP_PREFIXES: Dict[SymbolKey, Group] = {
    (S,): Group.STACK,
    (L,): Group.FLOW,
    (T, S): Group.ARITH,
    (T, T): Group.HEAP,
    (T, L): Group.IO,
}

GROUP_COMMANDS: Dict[Group, Dict[SymbolKey, Opcode]] = {
    Group.STACK: {
        (S,): Opcode.PUSH,
        (L, S): Opcode.DUP,
        (T, S): Opcode.COPY,
        (L, T): Opcode.SWAP,
        (L, L): Opcode.DISCARD,
        (T, L): Opcode.SLIDE,
    },
    Group.ARITH: {
        (S, S): Opcode.ADD,
        (S, T): Opcode.SUB,
        (S, L): Opcode.MUL,
        (T, S): Opcode.DIV,
        (T, T): Opcode.MOD,
    },
    Group.HEAP: {
        (S,): Opcode.STORE,
        (T,): Opcode.RETRIEVE,
    },
    Group.FLOW: {
        (S, S): Opcode.MARK,
        (S, T): Opcode.CALL,
        (S, L): Opcode.JMP,
        (T, S): Opcode.JMP_IF0,
        (T, T): Opcode.JMP_NEG,
        (T, L): Opcode.RET,
        (L, L): Opcode.FINISH,
    },
    Group.IO: {
        (S, S): Opcode.PUTCHAR,
        (S, T): Opcode.PUTNUM,
        (T, S): Opcode.READCHAR,
        (T, T): Opcode.READNUM,
    },
}


def _proper_prefixes(table) -> set:
    return {key[:i] for key in table for i in range(1, len(key))}


GROUP_PARTIALS = _proper_prefixes(GROUP_PREFIXES)
COMMAND_PARTIALS = {group: _proper_prefixes(table) for group, table in GROUP_COMMANDS.items()}

SYMBOL_NAMES = {S: "S", T: "T", L: "L"}


def _spell(key: SymbolKey) -> str:
    return "".join(SYMBOL_NAMES.get(sym, "?") for sym in key)


class Parser:
    def __init__(self, source: Source, verbose: bool = False, trace: Optional[TextIO] = None):
        self.reader = SymbolReader(source)
        self.program = Program()
        self.verbose = verbose
        self.trace = trace

    def _read(self, context: str) -> Symbol:
        """Read a symbol that must exist because an instruction is incomplete."""
        symbol = self.reader.next_symbol()
        if symbol == Symbol.END_OF_INPUT:
            raise UnexpectedEndOfInput(f"Input ended inside {context}", self.reader.position)
        return symbol

    def parse_number(self) -> int:
        """
        Read a signed binary literal.

        The first symbol is the sign (space positive, tab negative), then
        bits most significant first (space 0, tab 1), ended by a linefeed.
        """
        sign = self._read("number literal")
        if sign == L:
            return 0
        value = 0
        while True:
            bit = self._read("number literal")
            if bit == L:
                break
            value = value * 2 + (1 if bit == T else 0)
        return -value if sign == T else value

    def parse_group(self, first: Symbol, start: int) -> Group:
        key = (first,)
        while key not in GROUP_PREFIXES:
            if key not in GROUP_PARTIALS:
                raise UnrecognizedGroupPrefix(f"Unrecognized group prefix {_spell(key)}", start)
            key += (self._read("group prefix"),)
        return GROUP_PREFIXES[key]

    def parse_command(self, group: Group, start: int) -> Opcode:
        table = GROUP_COMMANDS[group]
        partials = COMMAND_PARTIALS[group]
        key = ()
        while True:
            key += (self._read(f"{group.name} command"),)
            if key in table:
                return table[key]
            if key not in partials:
                raise UnrecognizedCommand(
                    f"Unrecognized {group.name} command {_spell(key)}", start
                )

    def parse_instruction(self) -> Optional[Instruction]:
        """Decode one instruction, or return None at a clean end of input."""
        start = self.reader.position
        first = self.reader.next_symbol()
        if first == Symbol.END_OF_INPUT:
            return None
        group = self.parse_group(first, start)
        opcode = self.parse_command(group, start)
        operand = self.parse_number() if opcode in OPCODES_WITH_OPERAND else None
        return Instruction.create(opcode, operand, position=start)

    def write(self, instr: Instruction) -> None:
        self.program.append(instr)
        if self.verbose:
            print(instr.display, file=self.trace or sys.stderr)

    def parse(self) -> Program:
        while True:
            instr = self.parse_instruction()
            if instr is None:
                break
            self.write(instr)
        logger.debug(
            "Program assembled",
            instructions=len(self.program),
            labels=len(self.program.labels),
            symbols=self.reader.position,
        )
        return self.program


def parse_program(source: Source, verbose: bool = False, trace: Optional[TextIO] = None) -> Program:
    """Assemble a complete program from raw source."""
    return Parser(source, verbose=verbose, trace=trace).parse()
