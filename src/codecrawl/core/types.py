"""Shared type aliases for the core and domain layers."""
from typing import Literal

GameMode = Literal["MAP", "BATTLE", "SHOP", "BOSS"]
EventType = Literal["select", "battle", "shop", "reward", "upgrade"]
ElementType = Literal["water", "fire", "grass"]
ItemType = Literal["attack", "heal", "behavior", "syntax", "element", "debuff"]
RunStatus = Literal["IN_PROGRESS", "COMPLETED", "GAME_OVER"]
RunResult = Literal["COMPLETED", "GAME_OVER"]
Direction = Literal[1, -1]
Rarity = Literal["common", "uncommon", "rare", "epic", "legendary", "mythic"]

ELEMENT_TYPES: tuple[ElementType, ...] = ("water", "fire", "grass")
GAME_MODES: tuple[GameMode, ...] = ("MAP", "BATTLE", "SHOP", "BOSS")
EVENT_TYPES: tuple[EventType, ...] = ("select", "battle", "shop", "reward", "upgrade")
ITEM_TYPES: tuple[ItemType, ...] = ("attack", "heal", "behavior", "syntax", "element", "debuff")
RARITIES: tuple[Rarity, ...] = ("common", "uncommon", "rare", "epic", "legendary", "mythic")

__all__ = [
    "Direction",
    "ELEMENT_TYPES",
    "EVENT_TYPES",
    "ElementType",
    "EventType",
    "GAME_MODES",
    "GameMode",
    "ITEM_TYPES",
    "ItemType",
    "RARITIES",
    "Rarity",
    "RunResult",
    "RunStatus",
]
