"""Definition model exports."""

from .enemy_def import EnemyDef, EnemyScalingDef
from .event_track_def import EventTrackDef
from .item_def import ItemCategory, ItemDef, ItemParameterDef, ItemParams, ParameterKind
from .loadout_def import LoadoutDef, LoadoutItemDef
from .reward_def import RarityTierDef, RewardCandidateDef, RewardTableDef

__all__ = [
    "EnemyDef",
    "EnemyScalingDef",
    "EventTrackDef",
    "ItemCategory",
    "ItemDef",
    "ItemParameterDef",
    "ItemParams",
    "LoadoutDef",
    "LoadoutItemDef",
    "ParameterKind",
    "RarityTierDef",
    "RewardCandidateDef",
    "RewardTableDef",
]
