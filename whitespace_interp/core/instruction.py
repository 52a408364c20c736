"""
Symbol, group and opcode definitions for the Whitespace instruction set.
"""

from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Optional, Dict, Any


class Symbol(IntEnum):
    """The three significant source bytes, plus an end marker."""

    SPACE = 0x20
    TAB = 0x09
    LINEFEED = 0x0A
    END_OF_INPUT = -1


class Group(IntEnum):
    """Instruction groups selected by the leading symbol(s)."""

    STACK = 1
    ARITH = 2
    HEAP = 3
    FLOW = 4
    IO = 5


class Opcode(IntEnum):
    """Whitespace opcodes"""

    # Stack manipulation
    PUSH = 0
    DUP = 1
    COPY = 2
    SWAP = 3
    DISCARD = 4
    SLIDE = 5

    # Arithmetic
    ADD = 6
    SUB = 7
    MUL = 8
    DIV = 9
    MOD = 10

    # Heap access
    STORE = 11
    RETRIEVE = 12

    # Flow control
    MARK = 13
    CALL = 14
    JMP = 15
    JMP_IF0 = 16
    JMP_NEG = 17
    RET = 18
    FINISH = 19

    # I/O
    PUTCHAR = 20
    PUTNUM = 21
    READCHAR = 22
    READNUM = 23


OPCODE_GROUPS = {
    Opcode.PUSH: Group.STACK,
    Opcode.DUP: Group.STACK,
    Opcode.COPY: Group.STACK,
    Opcode.SWAP: Group.STACK,
    Opcode.DISCARD: Group.STACK,
    Opcode.SLIDE: Group.STACK,
    Opcode.ADD: Group.ARITH,
    Opcode.SUB: Group.ARITH,
    Opcode.MUL: Group.ARITH,
    Opcode.DIV: Group.ARITH,
    Opcode.MOD: Group.ARITH,
    Opcode.STORE: Group.HEAP,
    Opcode.RETRIEVE: Group.HEAP,
    Opcode.MARK: Group.FLOW,
    Opcode.CALL: Group.FLOW,
    Opcode.JMP: Group.FLOW,
    Opcode.JMP_IF0: Group.FLOW,
    Opcode.JMP_NEG: Group.FLOW,
    Opcode.RET: Group.FLOW,
    Opcode.FINISH: Group.FLOW,
    Opcode.PUTCHAR: Group.IO,
    Opcode.PUTNUM: Group.IO,
    Opcode.READCHAR: Group.IO,
    Opcode.READNUM: Group.IO,
}

# Opcodes that carry a number literal operand
OPCODES_WITH_OPERAND = frozenset({
    Opcode.PUSH, Opcode.COPY, Opcode.SLIDE,
    Opcode.MARK, Opcode.CALL, Opcode.JMP, Opcode.JMP_IF0, Opcode.JMP_NEG,
})

# Flow opcodes whose operand names a label that must be marked somewhere
LABEL_REFERENCES = frozenset({
    Opcode.CALL, Opcode.JMP, Opcode.JMP_IF0, Opcode.JMP_NEG,
})


@dataclass(frozen=True)
class Instruction:
    """A single decoded instruction. Never mutated after assembly."""
    group: Group
    opcode: Opcode
    operand: Optional[int]
    display: str
    position: int = 0

    @classmethod
    def create(cls, opcode: Opcode, operand: Optional[int] = None, position: int = 0) -> 'Instruction':
        """Build an instruction, deriving its group and mnemonic text."""
        if (operand is not None) != (opcode in OPCODES_WITH_OPERAND):
            raise ValueError(f"{opcode.name} operand mismatch: {operand!r}")
        display = opcode.name if operand is None else f"{opcode.name} {operand}"
        return cls(
            group=OPCODE_GROUPS[opcode],
            opcode=opcode,
            operand=operand,
            display=display,
            position=position,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["group"] = self.group.name
        data["opcode"] = self.opcode.name
        return data

    def __str__(self) -> str:
        return self.display
