"""Low-level JSON helpers for repositories and the run store."""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from .errors import DataLoadError, RunStoreError


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read definition file: {path}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc


def write_json_atomic(path: Path, payload: object) -> None:
    """Write JSON next to the target and swap it in with a single rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
        os.replace(tmp_name, path)
    except (OSError, TypeError, ValueError) as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise RunStoreError(f"Unable to write {path}: {exc}") from exc
