"""Saving and resuming runs through a run repository."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Sequence

from codecrawl.core.rng import RNG
from codecrawl.core.types import RunStatus
from codecrawl.data.errors import RunStoreError
from codecrawl.data.run_store import RunRecord, RunRepository
from codecrawl.domain.entities import Entity
from codecrawl.domain.inventory import NodeItem
from codecrawl.domain.play_stats import GamePlayStats
from codecrawl.domain.state import ProgressState, RunState
from codecrawl.services.errors import AuthenticationError, PersistenceError, SaveLoadError
from codecrawl.services.save_service import SaveService

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(slots=True)
class SavedRun:
    """A resumable run as handed back to the game on load."""

    run_id: str
    status: RunStatus
    program_items: List[NodeItem]
    inventory_items: List[NodeItem]
    player: Entity
    progress: ProgressState
    stats: GamePlayStats = field(default_factory=GamePlayStats)
    seed: int | None = None
    rng: RNG | None = None


@dataclass(slots=True)
class SaveAck:
    run_id: str
    status: RunStatus
    created: bool


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PersistenceService:
    """Keeps at most one in-progress record per user; finishing a run flips that record."""

    def __init__(
        self,
        *,
        store: RunRepository,
        save_service: SaveService,
        clock: Clock = _utc_now,
    ) -> None:
        self._store = store
        self._save_service = save_service
        self._clock = clock

    def load_latest_in_progress_run(self, user_id: str | None) -> SavedRun | None:
        """Return the user's most recent run if it is still in progress."""
        user = self._require_user(user_id)
        try:
            runs = self._store.list_runs(user)
        except RunStoreError as exc:
            raise PersistenceError(f"Could not read saved runs: {exc}") from exc
        if not runs:
            return None
        latest = max(enumerate(runs), key=lambda pair: (pair[1].updated_at, pair[0]))[1]
        status = self._save_service.normalize_status(latest.status)
        if status != "IN_PROGRESS":
            logger.info("latest run %s for %s is %s, nothing to resume", latest.run_id, user, status)
            return None
        snapshot = self._save_service.load_snapshot(latest.stats_snapshot)
        return SavedRun(
            run_id=latest.run_id,
            status=status,
            program_items=self._save_service.deserialize_items(latest.program_items, "program_items"),
            inventory_items=self._save_service.deserialize_items(latest.inventory_items, "inventory_items"),
            player=snapshot.player,
            progress=snapshot.progress,
            stats=self._save_service.deserialize_stats(latest.stats_log),
            seed=snapshot.seed,
            rng=snapshot.rng,
        )

    def save_run(
        self,
        user_id: str | None,
        program_items: Sequence[NodeItem],
        inventory_items: Sequence[NodeItem],
        player: Entity,
        status: RunStatus,
        progress: ProgressState,
        stats_log: GamePlayStats | Mapping[str, Any],
        *,
        seed: int | None = None,
        rng: RNG | None = None,
    ) -> SaveAck:
        """Overwrite the open in-progress record, or insert a new one when there is none."""
        user = self._require_user(user_id)
        try:
            normalized = self._save_service.normalize_status(status)
        except SaveLoadError as exc:
            raise PersistenceError(str(exc)) from exc
        stats_payload: Dict[str, Any] = (
            self._save_service.serialize_stats(stats_log)
            if isinstance(stats_log, GamePlayStats)
            else dict(stats_log)
        )
        try:
            existing = self._find_in_progress(user)
            record = RunRecord(
                run_id=existing.run_id if existing else uuid.uuid4().hex,
                user_id=user,
                status=normalized,
                updated_at=self._clock().isoformat(),
                program_items=self._save_service.serialize_items(program_items),
                inventory_items=self._save_service.serialize_items(inventory_items),
                stats_snapshot=self._save_service.build_snapshot(player, progress, seed=seed, rng=rng),
                stats_log=stats_payload,
            )
            if existing:
                self._store.update_run(record)
            else:
                self._store.insert_run(record)
        except (RunStoreError, SaveLoadError) as exc:
            raise PersistenceError(f"Could not save the run: {exc}") from exc
        logger.info("saved run %s for %s as %s", record.run_id, user, normalized)
        return SaveAck(run_id=record.run_id, status=normalized, created=existing is None)

    def save_state(self, user_id: str | None, state: RunState, status: RunStatus = "IN_PROGRESS") -> SaveAck:
        return self.save_run(
            user_id,
            state.program,
            state.inventory,
            state.player,
            status,
            state.progress,
            state.stats,
            seed=state.seed,
            rng=state.rng,
        )

    def _find_in_progress(self, user_id: str) -> RunRecord | None:
        in_progress = [
            run for run in self._store.list_runs(user_id)
            if self._save_service.normalize_status(run.status) == "IN_PROGRESS"
        ]
        return in_progress[-1] if in_progress else None

    @staticmethod
    def _require_user(user_id: str | None) -> str:
        if not user_id:
            raise AuthenticationError("Saving and loading runs requires a signed-in user.")
        return user_id
