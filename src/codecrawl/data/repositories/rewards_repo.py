"""Reward rarity table repository."""
from __future__ import annotations

from typing import Dict, List

from codecrawl.core.types import RARITIES
from codecrawl.data.errors import DataValidationError
from codecrawl.data.repositories.base import RepositoryBase
from codecrawl.domain.defs import RarityTierDef, RewardTableDef

REWARD_TABLE_ID = "default"


class RewardsRepository(RepositoryBase[RewardTableDef]):
    """Loads the weighted rarity table, shop size and fixed reward pairs."""

    def __init__(self, base_path=None) -> None:
        super().__init__("rewards.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RewardTableDef]:
        tiers: List[RarityTierDef] = []
        previous = 0.0
        for index, entry in enumerate(self._require_list(raw.get("tiers"), "tiers")):
            context = f"tiers[{index}]"
            tier_data = self._require_mapping(entry, context)
            if index >= len(RARITIES):
                raise DataValidationError(f"{context} exceeds the {len(RARITIES)} known rarities.")
            rarity = tier_data.get("rarity")
            if rarity != RARITIES[index]:
                raise DataValidationError(f"{context}.rarity must be '{RARITIES[index]}'.")
            threshold = self._require_float(tier_data.get("threshold"), f"{context}.threshold")
            if not previous < threshold <= 1.0:
                raise DataValidationError(f"{context}.threshold must increase and stay within (0, 1].")
            candidates = self._require_reward_candidates(tier_data.get("candidates"), f"{context}.candidates")
            if not candidates:
                raise DataValidationError(f"{context}.candidates must not be empty.")
            tiers.append(RarityTierDef(rarity=rarity, threshold=threshold, candidates=candidates))  # type: ignore[arg-type]
            previous = threshold
        if len(tiers) != len(RARITIES) or tiers[-1].threshold != 1.0:
            raise DataValidationError("tiers must cover every rarity and end at threshold 1.0.")

        shop_stock_size = self._require_int(raw.get("shop_stock_size"), "shop_stock_size")
        if shop_stock_size < 1:
            raise DataValidationError("shop_stock_size must be positive.")

        fixed_raw = self._require_mapping(raw.get("fixed_rewards", {}), "fixed_rewards")
        fixed_rewards = {}
        for raw_cycle, entries in fixed_raw.items():
            if not raw_cycle.isdigit():
                raise DataValidationError(f"fixed_rewards key '{raw_cycle}' must be a cycle number.")
            fixed_rewards[int(raw_cycle)] = self._require_reward_candidates(entries, f"fixed_rewards.{raw_cycle}")
        default_fixed = self._require_reward_candidates(raw.get("default_fixed_reward"), "default_fixed_reward")

        table = RewardTableDef(
            tiers=tuple(tiers),
            shop_stock_size=shop_stock_size,
            fixed_rewards=fixed_rewards,
            default_fixed_reward=default_fixed,
        )
        return {REWARD_TABLE_ID: table}

    def table(self) -> RewardTableDef:
        return self.get(REWARD_TABLE_ID)
