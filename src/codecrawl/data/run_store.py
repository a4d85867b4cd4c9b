"""File-system storage for saved runs, one JSON document per user."""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Protocol

from codecrawl.core import config

from .errors import DataLoadError, RunStoreError
from .json_loader import load_json, write_json_atomic

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass(slots=True)
class RunRecord:
    """One saved run exactly as stored; snapshot shapes are migrated by the save service."""

    run_id: str
    user_id: str
    status: str
    updated_at: str
    program_items: List[Dict[str, Any]] = field(default_factory=list)
    inventory_items: List[Dict[str, Any]] = field(default_factory=list)
    stats_snapshot: Dict[str, Any] = field(default_factory=dict)
    stats_log: Dict[str, Any] = field(default_factory=dict)


class RunRepository(Protocol):
    """Storage contract used by the persistence service."""

    def list_runs(self, user_id: str) -> List[RunRecord]:
        ...

    def insert_run(self, record: RunRecord) -> None:
        ...

    def update_run(self, record: RunRecord) -> None:
        ...


class JsonRunStore:
    """Keeps every run of a user in ``<base_dir>/<user>.json``; writes replace the file whole."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()

    def list_runs(self, user_id: str) -> List[RunRecord]:
        """Return the user's runs in insertion order."""
        path = self._user_path(user_id)
        if not path.exists():
            return []
        try:
            payload = load_json(path)
        except DataLoadError as exc:
            raise RunStoreError(str(exc)) from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("runs"), list):
            raise RunStoreError(f"Run file {path} is missing its 'runs' list.")
        return [self._record_from_payload(entry, path) for entry in payload["runs"]]

    def insert_run(self, record: RunRecord) -> None:
        runs = self.list_runs(record.user_id)
        if any(existing.run_id == record.run_id for existing in runs):
            raise RunStoreError(f"Run '{record.run_id}' already exists.")
        runs.append(record)
        self._write(record.user_id, runs)
        logger.debug("inserted run %s for %s", record.run_id, record.user_id)

    def update_run(self, record: RunRecord) -> None:
        runs = self.list_runs(record.user_id)
        for index, existing in enumerate(runs):
            if existing.run_id == record.run_id:
                runs[index] = record
                self._write(record.user_id, runs)
                logger.debug("updated run %s for %s", record.run_id, record.user_id)
                return
        raise RunStoreError(f"Run '{record.run_id}' does not exist.")

    def _write(self, user_id: str, runs: List[RunRecord]) -> None:
        write_json_atomic(self._user_path(user_id), {"runs": [asdict(run) for run in runs]})

    def _user_path(self, user_id: str) -> Path:
        if not user_id:
            raise RunStoreError("A user id is required to locate saved runs.")
        return self._base_dir / f"{_UNSAFE_CHARS.sub('_', user_id)}.json"

    @staticmethod
    def _record_from_payload(entry: object, path: Path) -> RunRecord:
        if not isinstance(entry, dict):
            raise RunStoreError(f"Run entry in {path} must be an object.")
        try:
            return RunRecord(
                run_id=str(entry["run_id"]),
                user_id=str(entry["user_id"]),
                status=str(entry["status"]),
                updated_at=str(entry.get("updated_at", "")),
                program_items=list(entry.get("program_items") or []),
                inventory_items=list(entry.get("inventory_items") or []),
                stats_snapshot=dict(entry.get("stats_snapshot") or {}),
                stats_log=dict(entry.get("stats_log") or {}),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RunStoreError(f"Malformed run entry in {path}: {exc}") from exc
