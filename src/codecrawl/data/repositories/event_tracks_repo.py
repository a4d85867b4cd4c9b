"""Event track layouts repository."""
from __future__ import annotations

from typing import Dict, List

from codecrawl.core.types import EVENT_TYPES, EventType
from codecrawl.data.errors import DataValidationError
from codecrawl.data.repositories.base import RepositoryBase
from codecrawl.domain.defs import EventTrackDef

EVENTS_COUNT = 8


class EventTracksRepository(RepositoryBase[EventTrackDef]):
    """Loads track layouts and picks the one in force for a cycle."""

    def __init__(self, base_path=None) -> None:
        super().__init__("event_tracks.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EventTrackDef]:
        tracks: Dict[str, EventTrackDef] = {}
        for raw_id, payload in raw.items():
            context = f"event track '{raw_id}'"
            track_data = self._require_mapping(payload, context)
            from_cycle = self._require_int(track_data.get("from_cycle"), f"{context} from_cycle")
            if from_cycle < 1:
                raise DataValidationError(f"{context} from_cycle must be at least 1.")
            events: List[EventType] = []
            for index, entry in enumerate(self._require_list(track_data.get("events"), f"{context} events")):
                if entry not in EVENT_TYPES:
                    raise DataValidationError(f"{context} events[{index}] '{entry}' is not a known event.")
                events.append(entry)  # type: ignore[arg-type]
            if len(events) != EVENTS_COUNT:
                raise DataValidationError(f"{context} must list exactly {EVENTS_COUNT} events.")
            if events[0] != "select" or events.count("select") != 1:
                raise DataValidationError(f"{context} needs a single 'select' slot at index 0.")
            tracks[raw_id] = EventTrackDef(id=raw_id, from_cycle=from_cycle, events=tuple(events))
        if not any(track.from_cycle == 1 for track in tracks.values()):
            raise DataValidationError("event_tracks.json needs a layout starting at cycle 1.")
        return tracks

    def for_cycle(self, cycle: int) -> EventTrackDef:
        """Return the latest layout whose ``from_cycle`` has been reached."""
        eligible = [track for track in self.all() if track.from_cycle <= max(1, cycle)]
        return max(eligible, key=lambda track: track.from_cycle)
