"""Factory helpers for runtime entities and items."""

from .enemy_factory import create_battle_enemy, create_boss
from .id_factory import make_instance_id
from .item_factory import build_item, create_item

__all__ = [
    "build_item",
    "create_battle_enemy",
    "create_boss",
    "create_item",
    "make_instance_id",
]
