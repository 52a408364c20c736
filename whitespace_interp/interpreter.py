import io
import sys
from typing import Optional, TextIO

import structlog

from .assembler import parse_program
from .config import InterpreterConfig
from .core.program import Program
from .decoder import Source
from .logging_config import configure_logging
from .runtime.machine import Machine

logger = structlog.get_logger()


class WhitespaceInterpreter:
    """
    Runs a program in two strictly sequential phases: the whole source is
    assembled first, then the resulting Program is executed.
    """

    def __init__(self, config: Optional[InterpreterConfig] = None,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 trace: Optional[TextIO] = None):
        self.config = config or InterpreterConfig()
        self.stdin = stdin
        self.stdout = stdout
        self.trace = trace
        configure_logging(self.config.log_level)

    def _section(self, title: str) -> None:
        if self.config.verbose:
            print(f"\n* {title}:\n", file=self.trace or sys.stderr)

    def assemble(self, source: Source) -> Program:
        self._section("Parsing the program")
        program = parse_program(source, verbose=self.config.verbose, trace=self.trace)
        missing = program.undefined_labels()
        if missing:
            logger.info("Program references unmarked labels", labels=sorted(missing))
        return program

    def execute(self, program: Program) -> Optional[Machine]:
        """Run an assembled program; returns None in dry-run mode."""
        if self.config.dry_run:
            logger.info("Dry run, skipping execution", instructions=len(program))
            return None
        self._section("Running the program")
        machine = Machine(
            heap_capacity=self.config.heap_capacity,
            stdin=self.stdin,
            stdout=self.stdout,
            verbose=self.config.verbose,
            trace=self.trace,
        )
        machine.run(program)
        return machine

    def run(self, source: Source) -> Optional[Machine]:
        program = self.assemble(source)
        return self.execute(program)


def run_source(source: Source, stdin_text: str = "", **options) -> str:
    """Run a program against the given input text and return everything it printed."""
    stdout = io.StringIO()
    interpreter = WhitespaceInterpreter(
        InterpreterConfig(**options),
        stdin=io.StringIO(stdin_text),
        stdout=stdout,
    )
    interpreter.run(source)
    return stdout.getvalue()
