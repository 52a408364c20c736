import re
import sys
from typing import Dict, Optional, TextIO, Tuple

import structlog

from ..core.instruction import Group, Opcode, Instruction
from ..core.program import Program
from ..core.errors import (
    ExecutionError,
    StackUnderflow,
    ArithmeticFault,
    ReturnWithoutCall,
    InputOutputError,
)
from ..utils.int_ops import trunc_div, trunc_mod
from .stack import Stack
from .heap import Heap, DEFAULT_HEAP_CAPACITY

logger = structlog.get_logger()

# Mapping from opcode to (pops, pushes)
STACK_EFFECTS: Dict[Opcode, Tuple[int, int]] = {
    Opcode.PUSH: (0, 1),
    Opcode.DUP: (1, 2),
    Opcode.COPY: (0, 1),  # depth checked against the operand
    Opcode.SWAP: (2, 2),
    Opcode.DISCARD: (1, 0),
    Opcode.SLIDE: (1, 1),  # depth checked against the operand
    Opcode.ADD: (2, 1),
    Opcode.SUB: (2, 1),
    Opcode.MUL: (2, 1),
    Opcode.DIV: (2, 1),
    Opcode.MOD: (2, 1),
    Opcode.STORE: (2, 0),
    Opcode.RETRIEVE: (1, 1),
    Opcode.MARK: (0, 0),
    Opcode.CALL: (0, 0),
    Opcode.JMP: (0, 0),
    Opcode.JMP_IF0: (1, 0),
    Opcode.JMP_NEG: (1, 0),
    Opcode.RET: (0, 0),
    Opcode.FINISH: (0, 0),
    Opcode.PUTCHAR: (1, 0),
    Opcode.PUTNUM: (1, 0),
    Opcode.READCHAR: (1, 0),
    Opcode.READNUM: (1, 0),
}

DECIMAL = re.compile(r"[+-]?[0-9]+")


class Machine:
    """
    Executes an assembled Program.

    A Machine owns its value stack, frame stack and heap for exactly one
    run; state is left in place afterwards so it can be inspected.
    """

    def __init__(self, heap_capacity: int = DEFAULT_HEAP_CAPACITY,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 verbose: bool = False, trace: Optional[TextIO] = None):
        self.stack = Stack()
        self.frames = Stack()
        self.heap = Heap(heap_capacity)
        self.pc = 0
        self.halted = False
        self.stdin = stdin
        self.stdout = stdout
        self.verbose = verbose
        self.trace = trace

    def debug_output(self, text: str) -> None:
        if self.verbose:
            print(f"{text} [stack] {self.stack}", file=self.trace or sys.stderr)

    def run(self, program: Program) -> int:
        """Run until FINISH or until the pc falls off the end. Returns the step count."""
        steps = 0
        logger.debug("Run started", instructions=len(program))
        try:
            while self.pc < len(program):
                instr = program[self.pc]
                self.debug_output(instr.display)
                current = self.pc
                self.pc += 1
                steps += 1
                try:
                    self.execute(instr, program)
                except ExecutionError as e:
                    e.locate(current, instr)
                    logger.debug("Execution error", pc=current, instruction=instr.display, error=e.detail)
                    raise
                if self.halted:
                    break
        finally:
            self._out().flush()
        logger.debug("Run finished", steps=steps, halted=self.halted, pc=self.pc)
        return steps

    def _out(self) -> TextIO:
        return self.stdout or sys.stdout

    def _in(self) -> TextIO:
        return self.stdin or sys.stdin

    def check_depth(self, instr: Instruction) -> None:
        pops, _ = STACK_EFFECTS[instr.opcode]
        needed = pops
        if instr.opcode in (Opcode.COPY, Opcode.SLIDE):
            if instr.operand < 0:
                raise StackUnderflow(f"{instr.opcode.name} with negative operand {instr.operand}")
            needed = instr.operand + 1
        if len(self.stack) < needed:
            raise StackUnderflow(f"{instr.opcode.name} needs {needed} items, stack has {len(self.stack)}")

    def execute(self, instr: Instruction, program: Program) -> None:
        self.check_depth(instr)
        opcode = instr.opcode

        if instr.group == Group.ARITH:
            b = self.stack.pop()
            a = self.stack.pop()
            self.stack.push(self.arithmetic(opcode, a, b))
        elif opcode == Opcode.PUSH:
            self.stack.push(instr.operand)
        elif opcode == Opcode.DUP:
            self.stack.push(self.stack.get(0))
        elif opcode == Opcode.COPY:
            self.stack.push(self.stack.get(instr.operand))
        elif opcode == Opcode.SWAP:
            self.stack.swap()
        elif opcode == Opcode.DISCARD:
            self.stack.pop()
        elif opcode == Opcode.SLIDE:
            self.stack.slide(instr.operand)
        elif opcode == Opcode.STORE:
            value = self.stack.pop()
            address = self.stack.pop()
            self.debug_output(f"value:{value} address:{address}")
            self.heap.put(address, value)
        elif opcode == Opcode.RETRIEVE:
            address = self.stack.pop()
            self.stack.push(self.heap.get(address))
        elif opcode == Opcode.MARK:
            pass
        elif opcode == Opcode.CALL:
            target = program.resolve(instr.operand)
            self.frames.push(self.pc)
            self.pc = target
        elif opcode == Opcode.JMP:
            self.pc = program.resolve(instr.operand)
        elif opcode == Opcode.JMP_IF0:
            if self.stack.pop() == 0:
                self.pc = program.resolve(instr.operand)
        elif opcode == Opcode.JMP_NEG:
            if self.stack.pop() < 0:
                self.pc = program.resolve(instr.operand)
        elif opcode == Opcode.RET:
            if not len(self.frames):
                raise ReturnWithoutCall("Return with empty frame stack")
            self.pc = self.frames.pop()
        elif opcode == Opcode.FINISH:
            self.halted = True
        elif opcode == Opcode.PUTCHAR:
            self.put_char(self.stack.pop())
        elif opcode == Opcode.PUTNUM:
            self._out().write(str(self.stack.pop()))
        elif opcode == Opcode.READCHAR:
            char = self.read_char()
            self.heap.put(self.stack.pop(), ord(char))
        elif opcode == Opcode.READNUM:
            number = self.read_number()
            self.heap.put(self.stack.pop(), number)
        else:
            raise ExecutionError(f"Unknown opcode {opcode!r}")

    @staticmethod
    def arithmetic(opcode: Opcode, a: int, b: int) -> int:
        if opcode == Opcode.ADD:
            return a + b
        if opcode == Opcode.SUB:
            return a - b
        if opcode == Opcode.MUL:
            return a * b
        if b == 0:
            raise ArithmeticFault(f"{opcode.name} by zero")
        if opcode == Opcode.DIV:
            return trunc_div(a, b)
        return trunc_mod(a, b)

    def put_char(self, value: int) -> None:
        try:
            char = chr(value)
        except (ValueError, OverflowError):
            raise InputOutputError(f"Cannot write {value} as a character") from None
        self._out().write(char)

    def read_char(self) -> str:
        char = self._in().read(1)
        if not char:
            raise InputOutputError("End of input while reading a character")
        return char

    def read_number(self) -> int:
        """Read one whitespace-delimited decimal integer."""
        stream = self._in()
        char = stream.read(1)
        while char and char.isspace():
            char = stream.read(1)
        token = ""
        while char and not char.isspace():
            token += char
            char = stream.read(1)
        if not token:
            raise InputOutputError("End of input while reading a number")
        if not DECIMAL.fullmatch(token):
            raise InputOutputError(f"Invalid number {token!r}")
        return int(token)
