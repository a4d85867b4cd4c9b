"""Turns an ordered list of program items into an instruction sequence."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence

from codecrawl.domain import catalog
from codecrawl.domain.instructions import Declare, Instruction, RawInstruction
from codecrawl.domain.inventory import NodeItem

logger = logging.getLogger(__name__)

PRELUDE: tuple[Instruction, ...] = (Declare("n", 0), Declare("enemyType", None))


@dataclass(slots=True)
class Program:
    """Flat, order-preserving instruction list; the prelude is always first."""

    instructions: List[Instruction] = field(default_factory=list)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def render(self) -> str:
        return "\n".join(instruction.render() for instruction in self.instructions)


def transpile_item(item: NodeItem) -> Instruction:
    if item.instruction is not None:
        return item.instruction
    definition = catalog.resolve(item.label)
    if definition is not None:
        return definition.instruction(catalog.extract_parameters(item.label))
    return RawInstruction(item.code or "")


def transpile(items: Sequence[NodeItem]) -> Program:
    """Build the program for one turn; no reordering or elimination happens here."""
    instructions = list(PRELUDE)
    instructions.extend(transpile_item(item) for item in items)
    program = Program(instructions)
    logger.debug("transpiled %d items into:\n%s", len(items), program.render())
    return program
