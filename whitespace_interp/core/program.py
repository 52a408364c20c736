from typing import Dict, List, Set, Iterator, Any

import structlog

from .errors import UndefinedLabel
from .instruction import Instruction, Opcode, LABEL_REFERENCES

logger = structlog.get_logger()


class Program:
    """
    Assembled instruction list plus the label table.

    Labels map a MARK value to the index of the MARK instruction itself.
    A later MARK with the same value replaces the earlier entry.
    """

    def __init__(self, instructions: List[Instruction] = None, labels: Dict[int, int] = None):
        self.instructions = []
        self.labels = {}
        for instr in instructions or []:
            self.append(instr)
        if labels is not None:
            self.labels.update(labels)

    def append(self, instr: Instruction) -> int:
        """Add an instruction, registering it in the label table if it is a MARK."""
        index = len(self.instructions)
        self.instructions.append(instr)
        if instr.opcode == Opcode.MARK:
            previous = self.labels.get(instr.operand)
            if previous is not None:
                logger.debug("Label redefined", label=instr.operand, previous=previous, index=index)
            self.labels[instr.operand] = index
        return index

    def resolve(self, label: int) -> int:
        try:
            return self.labels[label]
        except KeyError:
            raise UndefinedLabel(label) from None

    def undefined_labels(self) -> Set[int]:
        """Labels referenced by jumps or calls that no MARK defines."""
        return {
            instr.operand for instr in self.instructions
            if instr.opcode in LABEL_REFERENCES and instr.operand not in self.labels
        }

    def listing(self) -> List[str]:
        return [f"{index}: {instr.display}" for index, instr in enumerate(self.instructions)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instructions": [instr.to_dict() for instr in self.instructions],
            "labels": dict(self.labels),
        }

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self.instructions == other.instructions and self.labels == other.labels

    def __repr__(self) -> str:
        return f"Program(instructions={len(self.instructions)}, labels={self.labels})"
