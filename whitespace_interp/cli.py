#!/usr/bin/env python3
"""
Command line entry point for the Whitespace interpreter.

Loads a program file (or stdin), assembles it and runs it against the
process's standard streams.
"""

import argparse
import os
import sys
from typing import List, Optional

import structlog

from .config import InterpreterConfig, LOG_LEVELS
from .core.errors import WhitespaceError
from .export import export_program, EXPORT_FORMATS
from .interpreter import WhitespaceInterpreter
from .logging_config import configure_logging

logger = structlog.get_logger()


def load_source(path: str) -> bytes:
    """Read program bytes from a file, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.buffer.read()
    if not os.path.exists(path):
        raise FileNotFoundError(f"Program file not found: {path}")
    with open(path, "rb") as f:
        return f.read()


def build_parser(defaults: InterpreterConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a Whitespace program")
    parser.add_argument("file", help="Program file, or '-' to read the program from stdin")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=defaults.verbose,
        help="Trace every decoded and executed instruction to stderr",
    )
    parser.add_argument(
        "--dry-run", "--dry_run",
        dest="dry_run",
        action="store_true",
        default=defaults.dry_run,
        help="Assemble the program but do not run it",
    )
    parser.add_argument(
        "--dump",
        choices=EXPORT_FORMATS,
        help="Write the assembled program listing to stdout before running",
    )
    parser.add_argument(
        "--heap-capacity",
        type=int,
        default=defaults.heap_capacity,
        help=f"Initial number of heap cells (default: {defaults.heap_capacity})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=defaults.log_level,
        help=f"Logging level (default: {defaults.log_level})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        defaults = InterpreterConfig.from_env()
    except ValueError as e:
        print(f"Invalid environment configuration: {e}", file=sys.stderr)
        return 2

    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    try:
        config = InterpreterConfig(
            verbose=args.verbose,
            dry_run=args.dry_run,
            heap_capacity=args.heap_capacity,
            log_level=args.log_level,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(config.log_level)

    try:
        source = load_source(args.file)
        interpreter = WhitespaceInterpreter(config, trace=sys.stderr)
        program = interpreter.assemble(source)
        if args.dump:
            export_program(program, args.dump, sys.stdout)
            sys.stdout.flush()
        interpreter.execute(program)
        return 0

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except WhitespaceError as e:
        logger.error("Program failed", error_type=type(e).__name__, error=str(e))
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    except OSError as e:
        logger.error("I/O error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
