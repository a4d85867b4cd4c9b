"""Repository exports."""

from .enemies_repo import EnemiesRepository
from .event_tracks_repo import EVENTS_COUNT, EventTracksRepository
from .loadout_repo import LoadoutRepository
from .rewards_repo import RewardsRepository

__all__ = [
    "EVENTS_COUNT",
    "EnemiesRepository",
    "EventTracksRepository",
    "LoadoutRepository",
    "RewardsRepository",
]
