"""Shop trades: swap one shop item for one inventory item."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from codecrawl.domain.inventory import swap_items
from codecrawl.domain.state import RunState
from codecrawl.services.errors import ProgressionError
from codecrawl.services.progression_service import AdvanceResult, ProgressionService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ShopEvent:
    """Base class for shop-related events."""


@dataclass(slots=True)
class ShopItemSelectedEvent(ShopEvent):
    shop_index: int
    label: str


@dataclass(slots=True)
class ShopTradeEvent(ShopEvent):
    received_label: str
    given_label: str
    trade_count: int


@dataclass(slots=True)
class ShopActionFailedEvent(ShopEvent):
    reason: str
    message: str


class ShopService:
    """Shop interactions while the run is in ``SHOP`` mode."""

    def __init__(self, *, progression_service: ProgressionService) -> None:
        self._progression = progression_service

    def select_item(self, state: RunState, shop_index: int) -> List[ShopEvent]:
        self._require_shop(state)
        if not 0 <= shop_index < len(state.shop_items):
            return [ShopActionFailedEvent(reason="invalid_index", message="That shelf slot is empty.")]
        state.selected_shop_index = shop_index
        return [ShopItemSelectedEvent(shop_index=shop_index, label=state.shop_items[shop_index].label)]

    def swap(self, state: RunState, inventory_index: int) -> List[ShopEvent]:
        """Exchange the selected shop item with an inventory item."""
        self._require_shop(state)
        shop_index = state.selected_shop_index
        if shop_index is None:
            return [ShopActionFailedEvent(reason="no_selection", message="Pick an item from the shelf first.")]
        if not 0 <= inventory_index < len(state.inventory):
            return [ShopActionFailedEvent(reason="invalid_index", message="That inventory slot is empty.")]

        received, given = swap_items(state.inventory, inventory_index, state.shop_items, shop_index)
        state.selected_shop_index = None
        state.stats.shop_trade_count += 1
        state.shop_log.append(f"Traded '{given.label}' for '{received.label}'!")
        logger.debug("shop trade %s -> %s", given.id, received.id)
        return [
            ShopTradeEvent(
                received_label=received.label,
                given_label=given.label,
                trade_count=state.stats.shop_trade_count,
            )
        ]

    def leave(self, state: RunState) -> AdvanceResult:
        self._require_shop(state)
        state.selected_shop_index = None
        return self._progression.advance(state)

    @staticmethod
    def _require_shop(state: RunState) -> None:
        if state.progress.game_state != "SHOP":
            raise ProgressionError("The shop is not open.")
