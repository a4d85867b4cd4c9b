"""Mutable context handed to instructions while a turn executes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from codecrawl.domain.entities import Entity
from codecrawl.domain.narration import NarrationLog
from codecrawl.domain.play_stats import GamePlayStats

VariableValue = int | str | None


@dataclass(slots=True)
class CombatContext:
    """Player, enemy and program variables owned by the executing turn."""

    player: Entity
    enemy: Entity
    log: NarrationLog
    stats: GamePlayStats
    variables: Dict[str, VariableValue] = field(default_factory=dict)

    def counter(self) -> int:
        value = self.variables.get("n", 0)
        if not isinstance(value, int):
            raise TypeError(f"Loop counter n must be an integer, got {value!r}.")
        return value
