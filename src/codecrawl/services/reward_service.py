"""Weighted item generation for battle rewards, reward events and shop stock."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Set

from codecrawl.core.types import Rarity
from codecrawl.data.repositories import RewardsRepository
from codecrawl.domain.defs import RewardCandidateDef, RewardTableDef
from codecrawl.domain.inventory import NodeItem
from codecrawl.domain.state import MAX_CYCLES, RunState
from codecrawl.services.factories import create_item

logger = logging.getLogger(__name__)

RARE: Rarity = "rare"


@dataclass(slots=True)
class RewardEvent:
    """Base class for reward-related events."""


@dataclass(slots=True)
class RewardPresentedEvent(RewardEvent):
    labels: List[str]
    fixed: bool


@dataclass(slots=True)
class RewardCollectedEvent(RewardEvent):
    labels: List[str]
    inventory_size: int


class RewardService:
    """Rolls rarities and turns reward candidates into owned items."""

    def __init__(self, *, rewards_repo: RewardsRepository) -> None:
        self._rewards_repo = rewards_repo

    @property
    def table(self) -> RewardTableDef:
        return self._rewards_repo.table()

    def roll_rarity(self, state: RunState, min_rarity: Rarity | None = None) -> Rarity:
        """Draw a rarity; a floor redraws uniformly above the floor's lower bound."""
        table = self.table
        if min_rarity is None:
            roll = state.rng.random()
        else:
            roll = state.rng.uniform(table.floor_of(min_rarity), 1.0)
        for tier in table.tiers:
            if roll < tier.threshold:
                return tier.rarity
        return table.tiers[-1].rarity

    def generate_item(
        self,
        state: RunState,
        min_rarity: Rarity | None = None,
        *,
        taken: Set[str] | None = None,
    ) -> NodeItem:
        rarity = self.roll_rarity(state, min_rarity)
        candidate = state.rng.choice(self.table.tier(rarity).candidates)
        item = self._create(state, candidate, taken)
        logger.debug("generated %s item %s (%s)", rarity, item.id, item.label)
        return item

    def generate_shop_stock(self, state: RunState) -> List[NodeItem]:
        """Fresh stock; slot 0 is guaranteed rare or better."""
        taken = state.item_ids()
        stock: List[NodeItem] = []
        for slot in range(self.table.shop_stock_size):
            item = self.generate_item(state, RARE if slot == 0 else None, taken=taken)
            taken.add(item.id)
            stock.append(item)
        return stock

    def grant_battle_reward(self, state: RunState) -> RewardPresentedEvent:
        """One random item after a regular win; the final cycle floors it at rare."""
        min_rarity = RARE if state.progress.cycle_count >= MAX_CYCLES else None
        state.reward_items = [self.generate_item(state, min_rarity)]
        state.show_item_reward = True
        return RewardPresentedEvent(labels=[item.label for item in state.reward_items], fixed=False)

    def present_fixed_reward(self, state: RunState) -> RewardPresentedEvent:
        taken = state.item_ids()
        items: List[NodeItem] = []
        for candidate in self.table.fixed_reward_for_cycle(state.progress.cycle_count):
            item = self._create(state, candidate, taken)
            taken.add(item.id)
            items.append(item)
        state.reward_items = items
        state.show_item_reward = True
        return RewardPresentedEvent(labels=[item.label for item in items], fixed=True)

    def collect_rewards(self, state: RunState) -> RewardCollectedEvent:
        """Move the presented items into the inventory and clear the chosen attack type."""
        labels = [item.label for item in state.reward_items]
        state.inventory.extend(item.copy() for item in state.reward_items)
        state.reward_items = []
        state.show_item_reward = False
        state.player.atk_type = None
        return RewardCollectedEvent(labels=labels, inventory_size=len(state.inventory))

    @staticmethod
    def _create(state: RunState, candidate: RewardCandidateDef, taken: Set[str] | None) -> NodeItem:
        return create_item(
            candidate.label,
            candidate.type,
            state.rng,
            taken=taken if taken is not None else state.item_ids(),
        )
