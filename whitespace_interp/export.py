"""Export an assembled program listing as text, JSON or YAML."""
import json
from typing import TextIO

import yaml

from .core.program import Program

EXPORT_FORMATS = ("text", "json", "yaml")


def export_to_text(program: Program, stream: TextIO) -> None:
    for line in program.listing():
        stream.write(line + "\n")


def export_to_json(program: Program, stream: TextIO) -> None:
    json.dump(program.to_dict(), stream, indent=2)
    stream.write("\n")


def export_to_yaml(program: Program, stream: TextIO) -> None:
    yaml.safe_dump(program.to_dict(), stream, default_flow_style=False, sort_keys=False)


def export_program(program: Program, fmt: str, stream: TextIO) -> None:
    if fmt == "text":
        export_to_text(program, stream)
    elif fmt == "json":
        export_to_json(program, stream)
    elif fmt == "yaml":
        export_to_yaml(program, stream)
    else:
        raise ValueError(f"Unknown export format {fmt!r}, expected one of {EXPORT_FORMATS}")
