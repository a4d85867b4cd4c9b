"""Serialization of runs to the versioned snapshot format and back."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from codecrawl.core.rng import RNG
from codecrawl.core.types import ELEMENT_TYPES, EVENT_TYPES, GAME_MODES, ITEM_TYPES, ElementType, RunStatus
from codecrawl.domain.entities import Entity
from codecrawl.domain.inventory import NodeItem
from codecrawl.domain.play_stats import GamePlayStats
from codecrawl.domain.state import BOSS_INDEX_SENTINEL, MAX_CYCLES, ProgressState
from codecrawl.services.errors import FactoryError, SaveLoadError
from codecrawl.services.factories import build_item

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]

_PROGRESS_KEYS = (
    "battleCount",
    "currentEventIndex",
    "gameState",
    "eventTrack",
    "cycleCount",
    "traversalDirection",
)
_PLAYER_KEYS = ("hp", "maxHp", "atk", "bp", "maxBp", "type", "atkType")
_STATUS_ALIASES: Dict[str, RunStatus] = {
    "IN_PROGRESS": "IN_PROGRESS",
    "SAVED": "IN_PROGRESS",
    "COMPLETED": "COMPLETED",
    "GAME_OVER": "GAME_OVER",
}
_STATS_FIELDS = {
    "totalDamageDealt": "total_damage_dealt",
    "totalDamageTaken": "total_damage_taken",
    "totalTurns": "total_turns",
    "itemSwapCount": "item_swap_count",
    "executionFailureCount": "execution_failure_count",
    "shopTradeCount": "shop_trade_count",
}


@dataclass(slots=True)
class Snapshot:
    player: Entity
    progress: ProgressState
    seed: int | None = None
    rng: RNG | None = None


class SaveService:
    """Converts runtime objects to/from validated, versioned payloads.

    Older snapshot shapes are upgraded exactly once, in ``migrate_snapshot``;
    everything past that point only ever sees version 2.
    """

    SNAPSHOT_VERSION = 2

    # -- items -----------------------------------------------------------

    @staticmethod
    def serialize_items(items: Sequence[NodeItem]) -> List[SavePayload]:
        return [{"id": item.id, "label": item.label, "type": item.type, "code": item.code} for item in items]

    def deserialize_items(self, value: Any, context: str) -> List[NodeItem]:
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        items: List[NodeItem] = []
        seen: set[str] = set()
        for index, entry in enumerate(value):
            entry_ctx = f"{context}[{index}]"
            mapping = self._require_dict(entry, entry_ctx)
            item_id = self._require_str(mapping.get("id"), f"{entry_ctx}.id")
            if item_id in seen:
                raise SaveLoadError(f"{entry_ctx}.id '{item_id}' is duplicated.")
            seen.add(item_id)
            item_type = mapping.get("type")
            if item_type not in ITEM_TYPES:
                raise SaveLoadError(f"{entry_ctx}.type '{item_type}' is not a known item type.")
            code = mapping.get("code")
            if code is not None and not isinstance(code, str):
                raise SaveLoadError(f"{entry_ctx}.code must be a string.")
            try:
                items.append(
                    build_item(item_id, self._require_str(mapping.get("label"), f"{entry_ctx}.label"), item_type, code)
                )
            except FactoryError as exc:
                raise SaveLoadError(f"{entry_ctx}: {exc}") from exc
        return items

    # -- snapshot --------------------------------------------------------

    def build_snapshot(
        self,
        player: Entity,
        progress: ProgressState,
        *,
        seed: int | None = None,
        rng: RNG | None = None,
    ) -> SavePayload:
        snapshot: SavePayload = {
            "version": self.SNAPSHOT_VERSION,
            "player": self.serialize_player(player),
            "progress": self.serialize_progress(progress),
        }
        if rng is not None:
            snapshot["seed"] = seed
            snapshot["rng"] = rng.export_state()
        return snapshot

    @staticmethod
    def serialize_player(player: Entity) -> SavePayload:
        return {
            "hp": player.hp,
            "maxHp": player.max_hp,
            "atk": player.atk,
            "bp": player.bp,
            "maxBp": player.max_bp,
            "type": player.type,
            "atkType": player.atk_type,
        }

    @staticmethod
    def serialize_progress(progress: ProgressState) -> SavePayload:
        return {
            "battleCount": progress.battle_count,
            "currentEventIndex": progress.current_event_index,
            "gameState": progress.game_state,
            "eventTrack": list(progress.event_track),
            "cycleCount": progress.cycle_count,
            "traversalDirection": progress.traversal_direction,
        }

    def migrate_snapshot(self, raw: Any) -> SavePayload:
        """Bring any known snapshot shape to version 2."""
        snapshot = dict(self._require_dict(raw, "snapshot"))
        version = snapshot.get("version")
        if version == self.SNAPSHOT_VERSION:
            return snapshot
        if version is not None:
            raise SaveLoadError(f"Unsupported snapshot version: {version!r}")

        if "player" in snapshot:
            player = self._require_dict(snapshot["player"], "snapshot.player")
            progress_source = snapshot.get("progress", snapshot)
            shape = "structured"
        else:
            player = {key: snapshot[key] for key in _PLAYER_KEYS if key in snapshot}
            progress_source = snapshot
            shape = "bare player"
        progress_source = dict(self._require_dict(progress_source, "snapshot.progress"))
        if "eventTrack" not in progress_source and "events" in progress_source:
            progress_source["eventTrack"] = progress_source["events"]
        progress = {key: progress_source[key] for key in _PROGRESS_KEYS if key in progress_source}
        logger.info("migrated %s snapshot to version %d", shape, self.SNAPSHOT_VERSION)
        return {"version": self.SNAPSHOT_VERSION, "player": dict(player), "progress": progress}

    def load_snapshot(self, raw: Any) -> Snapshot:
        snapshot = self.migrate_snapshot(raw)
        seed, rng = self.deserialize_rng(snapshot)
        return Snapshot(
            player=self.deserialize_player(snapshot.get("player")),
            progress=self.deserialize_progress(snapshot.get("progress")),
            seed=seed,
            rng=rng,
        )

    def deserialize_rng(self, snapshot: Mapping[str, Any]) -> tuple[int | None, RNG | None]:
        """Rebuild the saved random stream; snapshots written before it was stored carry none."""
        rng_payload = snapshot.get("rng")
        if rng_payload is None:
            return None, None
        rng_payload = self._require_dict(rng_payload, "snapshot.rng")
        seed = self._require_int(snapshot.get("seed"), "snapshot.seed")
        rng = RNG(seed)
        try:
            rng.restore_state(dict(rng_payload))
        except ValueError as exc:
            raise SaveLoadError(f"Invalid RNG state: {exc}") from exc
        return seed, rng

    def deserialize_player(self, value: Any) -> Entity:
        mapping = self._require_dict(value, "snapshot.player")
        max_hp = self._require_int(mapping.get("maxHp"), "snapshot.player.maxHp")
        if max_hp <= 0:
            raise SaveLoadError("snapshot.player.maxHp must be positive.")
        hp = self._require_int(mapping.get("hp"), "snapshot.player.hp")
        if not 0 <= hp <= max_hp:
            raise SaveLoadError("snapshot.player.hp must be within [0, maxHp].")
        atk = self._require_int(mapping.get("atk"), "snapshot.player.atk")
        if atk < 0:
            raise SaveLoadError("snapshot.player.atk must be non-negative.")
        return Entity(
            hp=hp,
            max_hp=max_hp,
            atk=atk,
            bp=self._require_int(mapping.get("bp"), "snapshot.player.bp"),
            max_bp=self._require_int(mapping.get("maxBp"), "snapshot.player.maxBp"),
            type=self._coerce_element(mapping.get("type"), "snapshot.player.type"),
            atk_type=self._coerce_element(mapping.get("atkType"), "snapshot.player.atkType"),
        )

    def deserialize_progress(self, value: Any) -> ProgressState:
        mapping = self._require_dict(value, "snapshot.progress")
        track_raw = mapping.get("eventTrack", [])
        if not isinstance(track_raw, list) or any(entry not in EVENT_TYPES for entry in track_raw):
            raise SaveLoadError("snapshot.progress.eventTrack must list known events.")
        game_state = mapping.get("gameState", "MAP")
        if game_state not in GAME_MODES:
            raise SaveLoadError(f"Invalid gameState value: {game_state!r}")
        cycle_count = self._coerce_int(mapping.get("cycleCount"), "snapshot.progress.cycleCount", default=1)
        if not 1 <= cycle_count <= MAX_CYCLES:
            raise SaveLoadError(f"snapshot.progress.cycleCount must be between 1 and {MAX_CYCLES}.")
        battle_count = self._coerce_int(mapping.get("battleCount"), "snapshot.progress.battleCount", default=0)
        if battle_count < 0:
            raise SaveLoadError("snapshot.progress.battleCount must be non-negative.")
        index = self._coerce_int(mapping.get("currentEventIndex"), "snapshot.progress.currentEventIndex", default=0)
        if index != BOSS_INDEX_SENTINEL and track_raw and not 0 <= index < len(track_raw):
            raise SaveLoadError("snapshot.progress.currentEventIndex is outside the event track.")
        direction = mapping.get("traversalDirection", 1)
        if direction not in (1, -1):
            raise SaveLoadError("snapshot.progress.traversalDirection must be 1 or -1.")
        return ProgressState(
            event_track=list(track_raw),
            game_state=game_state,
            current_event_index=index,
            traversal_direction=direction,
            direction_chosen=game_state != "MAP",
            cycle_count=cycle_count,
            battle_count=battle_count,
        )

    # -- stats and status ------------------------------------------------

    @staticmethod
    def serialize_stats(stats: GamePlayStats) -> SavePayload:
        return stats.to_payload()

    def deserialize_stats(self, value: Any) -> GamePlayStats:
        if value is None:
            return GamePlayStats()
        mapping = self._require_dict(value, "stats_log")
        stats = GamePlayStats()
        for key, attr in _STATS_FIELDS.items():
            count = self._coerce_int(mapping.get(key), f"stats_log.{key}", default=0)
            if count < 0:
                raise SaveLoadError(f"stats_log.{key} must be non-negative.")
            setattr(stats, attr, count)
        return stats

    @staticmethod
    def normalize_status(value: Any) -> RunStatus:
        try:
            return _STATUS_ALIASES[value]
        except (KeyError, TypeError) as exc:
            raise SaveLoadError(f"Unknown run status: {value!r}") from exc

    # -- helpers ---------------------------------------------------------

    @staticmethod
    def _require_dict(value: Any, context: str) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise SaveLoadError(f"{context} must be an object.")
        return value

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    def _coerce_int(self, value: Any, context: str, *, default: int) -> int:
        if value is None:
            return default
        return self._require_int(value, context)

    @staticmethod
    def _coerce_element(value: Any, context: str) -> ElementType | None:
        if value is None:
            return None
        if value not in ELEMENT_TYPES:
            raise SaveLoadError(f"{context} must be one of {list(ELEMENT_TYPES)}.")
        return value
