"""
Helpers for writing test programs as mnemonics instead of raw whitespace.

    ws("PUSH 1", "PUSH 2", "ADD", "PUTNUM", "FINISH")
"""

from whitespace_interp.core.instruction import Opcode

COMMAND_CODES = {
    Opcode.PUSH: "  ",
    Opcode.DUP: " \n ",
    Opcode.COPY: " \t ",
    Opcode.SWAP: " \n\t",
    Opcode.DISCARD: " \n\n",
    Opcode.SLIDE: " \t\n",
    Opcode.ADD: "\t   ",
    Opcode.SUB: "\t  \t",
    Opcode.MUL: "\t  \n",
    Opcode.DIV: "\t \t ",
    Opcode.MOD: "\t \t\t",
    Opcode.STORE: "\t\t ",
    Opcode.RETRIEVE: "\t\t\t",
    Opcode.MARK: "\n  ",
    Opcode.CALL: "\n \t",
    Opcode.JMP: "\n \n",
    Opcode.JMP_IF0: "\n\t ",
    Opcode.JMP_NEG: "\n\t\t",
    Opcode.RET: "\n\t\n",
    Opcode.FINISH: "\n\n\n",
    Opcode.PUTCHAR: "\t\n  ",
    Opcode.PUTNUM: "\t\n \t",
    Opcode.READCHAR: "\t\n\t ",
    Opcode.READNUM: "\t\n\t\t",
}


def number(n: int) -> str:
    sign = "\t" if n < 0 else " "
    bits = format(abs(n), "b") if n else ""
    return sign + bits.replace("0", " ").replace("1", "\t") + "\n"


def command(text: str) -> str:
    """Encode one mnemonic such as 'PUSH -3' or 'DUP'."""
    parts = text.split()
    code = COMMAND_CODES[Opcode[parts[0]]]
    if len(parts) > 1:
        code += number(int(parts[1]))
    return code


def ws(*lines: str) -> str:
    return "".join(command(line) for line in lines)
