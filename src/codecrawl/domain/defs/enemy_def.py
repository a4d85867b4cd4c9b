"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from codecrawl.core.types import ElementType


@dataclass(frozen=True, slots=True)
class EnemyDef:
    """Base stats for a spawned enemy; ``type`` None means rolled per spawn."""

    id: str
    name: str
    hp: int
    atk: int
    bp: int
    type: ElementType | None = None


@dataclass(frozen=True, slots=True)
class EnemyScalingDef:
    """Linear growth coefficients applied on top of the base enemy."""

    hp_per_battle: int
    atk_per_battle: int
    battles_per_bp: int
    hp_per_cycle: int
    atk_per_cycle: int
