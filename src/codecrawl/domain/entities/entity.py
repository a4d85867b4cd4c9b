"""Combat participant model shared by the player and enemies."""
from __future__ import annotations

from dataclasses import dataclass

from codecrawl.core.types import ElementType


@dataclass(slots=True)
class Entity:
    """Stores combat stats for one side of a battle."""

    hp: int
    max_hp: int
    atk: int
    bp: int
    max_bp: int
    type: ElementType | None = None
    atk_type: ElementType | None = None

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def set_hp(self, value: int) -> None:
        """Assign hp clamped to [0, max_hp]."""
        self.hp = max(0, min(self.max_hp, value))
