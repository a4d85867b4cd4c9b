"""Validation and execution of transpiled programs."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Sequence

from codecrawl.domain.combat import CombatContext
from codecrawl.domain.instructions import (
    EndBlock,
    IfEnemyType,
    Instruction,
    InstructionError,
    RepeatCounter,
    SenseEnemyType,
    normalize,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

ENEMY_TYPE_UNSET_MESSAGE = "enemyType is read before searchEnemyTypes() sets it."
UNEXPECTED_END_MESSAGE = "Unexpected 'end': there is no open block to close."
MISSING_END_MESSAGE = "Missing 'end': {count} block(s) are never closed."
MAX_STEPS = 10_000


def validate(instructions: Sequence[Instruction]) -> str | None:
    """Return the first structural problem in the program, or None when it may run."""
    normalized = [normalize(instruction) for instruction in instructions]

    sensed = False
    for instruction in normalized:
        if isinstance(instruction, SenseEnemyType):
            sensed = True
        elif isinstance(instruction, IfEnemyType) and not sensed:
            return ENEMY_TYPE_UNSET_MESSAGE

    depth = 0
    for instruction in normalized:
        if instruction.opens_block:
            depth += 1
        elif instruction.closes_block:
            depth -= 1
            if depth < 0:
                return UNEXPECTED_END_MESSAGE
    if depth != 0:
        return MISSING_END_MESSAGE.format(count=depth)
    return None


def build_jump_table(instructions: Sequence[Instruction]) -> Dict[int, int]:
    """Pair every block opener with its closer, in both directions."""
    jumps: Dict[int, int] = {}
    open_blocks: List[int] = []
    for index, instruction in enumerate(instructions):
        if instruction.opens_block:
            open_blocks.append(index)
        elif instruction.closes_block:
            if not open_blocks:
                raise InstructionError(UNEXPECTED_END_MESSAGE)
            opener = open_blocks.pop()
            jumps[opener] = index
            jumps[index] = opener
    if open_blocks:
        raise InstructionError(MISSING_END_MESSAGE.format(count=len(open_blocks)))
    return jumps


class Interpreter:
    """Runs a validated program one instruction at a time.

    Each instruction finishes before the next starts. Timed instructions
    await the injected ``sleep`` afterwards; a ``delay_scale`` of 0 still
    awaits so the event loop gets a turn without effects interleaving.
    """

    def __init__(self, *, sleep: Sleep = asyncio.sleep, delay_scale: float = 1.0) -> None:
        self._sleep = sleep
        self._delay_scale = delay_scale

    async def pause(self, seconds: float) -> None:
        await self._sleep(seconds * self._delay_scale)

    async def run(self, instructions: Sequence[Instruction], context: CombatContext) -> None:
        program = [normalize(instruction) for instruction in instructions]
        jumps = build_jump_table(program)
        iterations: Dict[int, int] = {}
        pc = 0
        steps = 0
        while pc < len(program):
            steps += 1
            if steps > MAX_STEPS:
                raise InstructionError(f"Program exceeded {MAX_STEPS} steps.")
            instruction = program[pc]

            if isinstance(instruction, RepeatCounter):
                done = iterations.setdefault(pc, 0)
                if done < context.counter():
                    pc += 1
                else:
                    del iterations[pc]
                    pc = jumps[pc] + 1
                continue

            if isinstance(instruction, IfEnemyType):
                pc = pc + 1 if instruction.matches(context) else jumps[pc] + 1
                continue

            if isinstance(instruction, EndBlock):
                opener = jumps[pc]
                if isinstance(program[opener], RepeatCounter):
                    iterations[opener] += 1
                    pc = opener
                else:
                    pc += 1
                continue

            instruction.apply(context)
            if instruction.delay:
                await self.pause(instruction.delay)
            pc += 1
