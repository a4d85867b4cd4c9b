"""Upgrade events: raise the value of one stat item by a step."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from codecrawl.domain.inventory import ContainerName, NodeItem, find_index
from codecrawl.domain.state import RunState
from codecrawl.services.errors import ProgressionError
from codecrawl.services.factories import create_item
from codecrawl.services.progression_service import AdvanceResult, ProgressionService

logger = logging.getLogger(__name__)

UPGRADE_CHAIN: Dict[str, str] = {
    "atk+=1": "atk+=2",
    "atk+=2": "atk+=3",
    "hp+=1": "hp+=2",
    "hp+=2": "hp+=3",
    "bp+=1": "bp+=2",
    "bp+=2": "bp+=3",
}


@dataclass(slots=True)
class UpgradeCandidate:
    source: ContainerName
    item: NodeItem
    upgraded_label: str


@dataclass(slots=True)
class ItemUpgradedEvent:
    source: ContainerName
    old_label: str
    new_item: NodeItem
    advance: AdvanceResult


class UpgradeService:
    def __init__(self, *, progression_service: ProgressionService) -> None:
        self._progression = progression_service

    def upgradable_items(self, state: RunState) -> List[UpgradeCandidate]:
        """Inventory items first, then program items, in container order."""
        candidates: List[UpgradeCandidate] = []
        for source, container in (("inventory", state.inventory), ("program", state.program)):
            for item in container:
                upgraded = UPGRADE_CHAIN.get(item.label)
                if upgraded is not None:
                    candidates.append(UpgradeCandidate(source=source, item=item, upgraded_label=upgraded))  # type: ignore[arg-type]
        return candidates

    def upgrade(self, state: RunState, item_id: str, source: ContainerName) -> ItemUpgradedEvent:
        """Replace the item in place with a freshly created stronger one, then advance."""
        self._require_open(state)
        if source == "inventory":
            container = state.inventory
        elif source == "program":
            container = state.program
        else:
            raise ProgressionError(f"Items cannot be upgraded from '{source}'.")
        index = find_index(container, item_id)
        old_item = container[index]
        upgraded_label = UPGRADE_CHAIN.get(old_item.label)
        if upgraded_label is None:
            raise ProgressionError(f"'{old_item.label}' cannot be upgraded further.")
        new_item = create_item(upgraded_label, old_item.type, state.rng, taken=state.item_ids())
        container[index] = new_item
        state.log.append(f"Upgraded '{old_item.label}' to '{new_item.label}'!")
        logger.debug("upgraded %s to %s", old_item.id, new_item.id)
        state.show_upgrade = False
        return ItemUpgradedEvent(
            source=source,
            old_label=old_item.label,
            new_item=new_item,
            advance=self._progression.advance(state),
        )

    def skip(self, state: RunState) -> AdvanceResult:
        self._require_open(state)
        state.show_upgrade = False
        return self._progression.advance(state)

    @staticmethod
    def _require_open(state: RunState) -> None:
        if not state.show_upgrade:
            raise ProgressionError("No upgrade is being offered.")
