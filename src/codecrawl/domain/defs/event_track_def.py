"""Event track layout structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from codecrawl.core.types import EventType


@dataclass(frozen=True, slots=True)
class EventTrackDef:
    """Track layout used from ``from_cycle`` onward until a later layout takes over."""

    id: str
    from_cycle: int
    events: Tuple[EventType, ...]
