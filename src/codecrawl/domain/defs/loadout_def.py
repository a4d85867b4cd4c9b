"""Starting loadout structures for a new run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from codecrawl.core.types import ItemType


@dataclass(frozen=True, slots=True)
class LoadoutItemDef:
    label: str
    type: ItemType


@dataclass(frozen=True, slots=True)
class LoadoutDef:
    player_hp: int
    player_atk: int
    player_bp: int
    program: Tuple[LoadoutItemDef, ...]
    inventory: Tuple[LoadoutItemDef, ...]
    shop_greeting: str
