"""Starting loadout repository."""
from __future__ import annotations

from typing import Dict

from codecrawl.data.errors import DataValidationError
from codecrawl.data.repositories.base import RepositoryBase
from codecrawl.domain.defs import LoadoutDef

LOADOUT_ID = "default"


class LoadoutRepository(RepositoryBase[LoadoutDef]):
    """Loads the player stats and item cards a fresh run starts with."""

    def __init__(self, base_path=None) -> None:
        super().__init__("loadout.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, LoadoutDef]:
        player = self._require_mapping(raw.get("player"), "player")
        hp = self._require_int(player.get("hp"), "player.hp")
        if hp <= 0:
            raise DataValidationError("player.hp must be positive.")
        loadout = LoadoutDef(
            player_hp=hp,
            player_atk=self._require_non_negative_int(player.get("atk"), "player.atk"),
            player_bp=self._require_non_negative_int(player.get("bp"), "player.bp"),
            program=self._require_loadout_items(raw.get("program", []), "program"),
            inventory=self._require_loadout_items(raw.get("inventory", []), "inventory"),
            shop_greeting=self._require_str(raw.get("shop_greeting"), "shop_greeting"),
        )
        return {LOADOUT_ID: loadout}

    def loadout(self) -> LoadoutDef:
        return self.get(LOADOUT_ID)
