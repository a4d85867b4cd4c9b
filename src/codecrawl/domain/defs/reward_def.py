"""Reward and shop rarity table structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from codecrawl.core.types import ItemType, Rarity


@dataclass(frozen=True, slots=True)
class RewardCandidateDef:
    label: str
    type: ItemType


@dataclass(frozen=True, slots=True)
class RarityTierDef:
    """One rarity band; ``threshold`` is the cumulative upper bound of the roll."""

    rarity: Rarity
    threshold: float
    candidates: Tuple[RewardCandidateDef, ...]


@dataclass(frozen=True, slots=True)
class RewardTableDef:
    tiers: Tuple[RarityTierDef, ...]
    shop_stock_size: int
    fixed_rewards: Dict[int, Tuple[RewardCandidateDef, ...]]
    default_fixed_reward: Tuple[RewardCandidateDef, ...]

    def tier(self, rarity: Rarity) -> RarityTierDef:
        for tier in self.tiers:
            if tier.rarity == rarity:
                return tier
        raise KeyError(rarity)

    def floor_of(self, rarity: Rarity) -> float:
        """Cumulative probability mass below the given tier."""
        previous = 0.0
        for tier in self.tiers:
            if tier.rarity == rarity:
                return previous
            previous = tier.threshold
        raise KeyError(rarity)

    def fixed_reward_for_cycle(self, cycle: int) -> Tuple[RewardCandidateDef, ...]:
        return self.fixed_rewards.get(cycle, self.default_fixed_reward)
