"""Instruction variants produced by the transpiler and run by the interpreter.

Every variant renders to exactly one line of program text. Variants with a
combat effect implement ``apply``; block openers and closers carry no effect
and are handled by the interpreter's dispatch loop.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, ClassVar, List, Tuple

from codecrawl.core.types import ElementType
from codecrawl.domain.combat import CombatContext, VariableValue
from codecrawl.domain.elements import element_name, type_multiplier

ATTACK_DELAY = 0.5
STAT_DELAY = 0.2


class InstructionError(Exception):
    """Raised when an instruction cannot be executed."""


@dataclass(frozen=True, slots=True)
class Instruction:
    """Base class for all instruction variants."""

    opens_block: ClassVar[bool] = False
    closes_block: ClassVar[bool] = False
    delay: ClassVar[float] = 0.0

    def render(self) -> str:
        raise NotImplementedError

    def apply(self, context: CombatContext) -> None:
        """Apply the combat effect; control-flow variants do nothing here."""


@dataclass(frozen=True, slots=True)
class Declare(Instruction):
    name: str
    value: VariableValue = None

    def render(self) -> str:
        if self.value is None:
            return f"let {self.name};"
        return f"let {self.name} = {self.value};"

    def apply(self, context: CombatContext) -> None:
        context.variables[self.name] = self.value


@dataclass(frozen=True, slots=True)
class AssignCounter(Instruction):
    value: int = 1

    def render(self) -> str:
        return f"n = {self.value};"

    def apply(self, context: CombatContext) -> None:
        context.variables["n"] = self.value


@dataclass(frozen=True, slots=True)
class RepeatCounter(Instruction):
    opens_block: ClassVar[bool] = True

    def render(self) -> str:
        return "for (let i = 0; i < n; i++) {"


@dataclass(frozen=True, slots=True)
class IfEnemyType(Instruction):
    opens_block: ClassVar[bool] = True

    element: ElementType = "water"

    def render(self) -> str:
        return f"if (enemyType === '{self.element}') {{"

    def matches(self, context: CombatContext) -> bool:
        return context.variables.get("enemyType") == self.element


@dataclass(frozen=True, slots=True)
class EndBlock(Instruction):
    closes_block: ClassVar[bool] = True

    def render(self) -> str:
        return "}"


@dataclass(frozen=True, slots=True)
class Attack(Instruction):
    delay: ClassVar[float] = ATTACK_DELAY

    def render(self) -> str:
        return "await atk();"

    def apply(self, context: CombatContext) -> None:
        player = context.player
        enemy = context.enemy
        player.bp -= 1
        if player.bp < 0:
            penalty = abs(player.bp)
            context.log.append(f"Not enough BP! The enemy gains {penalty} BP.")
            enemy.bp += penalty

        multiplier = type_multiplier(player.atk_type, enemy.type)
        damage = math.floor(player.atk * multiplier)
        if multiplier > 1.0:
            context.log.append("It's super effective!")
        elif multiplier < 1.0:
            context.log.append("It's not very effective...")

        context.log.append(f"Player attacks! {damage} damage.")
        enemy.hp = max(0, enemy.hp - damage)
        context.stats.total_damage_dealt += damage


@dataclass(frozen=True, slots=True)
class IncreaseAttack(Instruction):
    delay: ClassVar[float] = STAT_DELAY

    value: int = 1

    def render(self) -> str:
        return f"atk_inc({self.value});"

    def apply(self, context: CombatContext) -> None:
        context.player.atk += self.value
        context.log.append(f"Attack rose by {self.value}! (ATK: {context.player.atk})")


@dataclass(frozen=True, slots=True)
class IncreaseBehavior(Instruction):
    delay: ClassVar[float] = STAT_DELAY

    value: int = 1

    def render(self) -> str:
        return f"bp_inc({self.value});"

    def apply(self, context: CombatContext) -> None:
        context.player.bp += self.value
        context.log.append(f"BP+{self.value} (BP: {context.player.bp})")


@dataclass(frozen=True, slots=True)
class Heal(Instruction):
    delay: ClassVar[float] = STAT_DELAY

    value: int = 1

    def render(self) -> str:
        return f"heal({self.value});"

    def apply(self, context: CombatContext) -> None:
        player = context.player
        player.set_hp(player.hp + self.value)
        context.log.append(f"Recovered {self.value} HP! (HP: {player.hp}/{player.max_hp})")


@dataclass(frozen=True, slots=True)
class SenseEnemyType(Instruction):
    delay: ClassVar[float] = STAT_DELAY

    def render(self) -> str:
        return "enemyType = searchEnemyTypes();"

    def apply(self, context: CombatContext) -> None:
        context.variables["enemyType"] = context.enemy.type
        context.log.append(f"Enemy type sensed: {element_name(context.enemy.type)}")


@dataclass(frozen=True, slots=True)
class SetAttackType(Instruction):
    delay: ClassVar[float] = STAT_DELAY

    element: ElementType = "water"

    def render(self) -> str:
        return f"setAtkType('{self.element}');"

    def apply(self, context: CombatContext) -> None:
        context.player.atk_type = self.element
        context.log.append(f"Attack type set to {element_name(self.element)}.")


@dataclass(frozen=True, slots=True)
class RawInstruction(Instruction):
    """Opaque instruction text carried over from an item no catalog entry matches."""

    text: str = ""

    def render(self) -> str:
        return self.text

    def apply(self, context: CombatContext) -> None:
        raise InstructionError(f"Unknown instruction: {self.text!r}")


def _int_or_default(raw: str) -> int:
    return int(raw) if raw else 1


_DECODERS: List[Tuple[re.Pattern[str], Callable[[re.Match[str]], Instruction]]] = [
    (re.compile(r"^let\s+n\s*=\s*(\d+)\s*;?$"), lambda m: Declare("n", int(m.group(1)))),
    (re.compile(r"^let\s+enemyType\s*;?$"), lambda m: Declare("enemyType", None)),
    (re.compile(r"^n\s*=\s*(\d+)\s*;?$"), lambda m: AssignCounter(int(m.group(1)))),
    (
        re.compile(r"^for\s*\(\s*let\s+i\s*=\s*0\s*;\s*i\s*<\s*n\s*;\s*i\+\+\s*\)\s*\{$"),
        lambda m: RepeatCounter(),
    ),
    (re.compile(r"^n\.times\s+do$"), lambda m: RepeatCounter()),
    (re.compile(r"^(?:await\s+)?atk\(\)\s*;?$"), lambda m: Attack()),
    (re.compile(r"^atk_inc\((\d*)\)\s*;?$"), lambda m: IncreaseAttack(_int_or_default(m.group(1)))),
    (re.compile(r"^bp_inc\((\d*)\)\s*;?$"), lambda m: IncreaseBehavior(_int_or_default(m.group(1)))),
    (re.compile(r"^heal\((\d*)\)\s*;?$"), lambda m: Heal(_int_or_default(m.group(1)))),
    (re.compile(r"^(?:\}|end)$"), lambda m: EndBlock()),
    (re.compile(r"^enemyType\s*=\s*searchEnemyTypes\(\)\s*;?$"), lambda m: SenseEnemyType()),
    (
        re.compile(r"^if\s*\(\s*enemyType\s*===?\s*'(water|fire|grass)'\s*\)\s*\{$"),
        lambda m: IfEnemyType(m.group(1)),
    ),
    (re.compile(r"^setAtkType\('(water|fire|grass)'\)\s*;?$"), lambda m: SetAttackType(m.group(1))),
]


def decode_instruction(text: str) -> Instruction | None:
    """Map a rendered instruction line back to its variant, or None if unknown."""
    stripped = text.strip()
    for pattern, build in _DECODERS:
        match = pattern.match(stripped)
        if match:
            return build(match)
    return None


def normalize(instruction: Instruction) -> Instruction:
    """Replace decodable raw text with the variant it spells out."""
    if isinstance(instruction, RawInstruction):
        decoded = decode_instruction(instruction.text)
        if decoded is not None:
            return decoded
    return instruction
