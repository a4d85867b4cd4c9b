"""Cumulative per-run counters used for reporting."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(slots=True)
class GamePlayStats:
    """Counters only ever increase during a run; a new game starts from zero."""

    total_damage_dealt: int = 0
    total_damage_taken: int = 0
    total_turns: int = 0
    item_swap_count: int = 0
    execution_failure_count: int = 0
    shop_trade_count: int = 0

    def to_payload(self) -> Dict[str, int]:
        return {
            "totalDamageDealt": self.total_damage_dealt,
            "totalDamageTaken": self.total_damage_taken,
            "totalTurns": self.total_turns,
            "itemSwapCount": self.item_swap_count,
            "executionFailureCount": self.execution_failure_count,
            "shopTradeCount": self.shop_trade_count,
        }
