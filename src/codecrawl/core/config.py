"""User configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

_DEFAULT_PACING_MODE = "paced"
_PACING_SCALES = {"paced": 1.0, "instant": 0.0}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    override = os.environ.get("CODECRAWL_HOME")
    if override:
        return Path(override)
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "CodeCrawl"
        return Path.home() / "CodeCrawl"
    return Path.home() / ".config" / "codecrawl"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user directory holding saved runs."""
    return get_user_data_dir() / "runs"


def _normalize_pacing_mode(value: object) -> str:
    return "instant" if value == "instant" else _DEFAULT_PACING_MODE


def pacing_scale(config: Dict[str, str]) -> float:
    """Multiplier applied to narration delays for the configured pacing."""
    return _PACING_SCALES[_normalize_pacing_mode(config.get("pacing_mode"))]


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {"pacing_mode": _DEFAULT_PACING_MODE}
    except (OSError, json.JSONDecodeError):
        return {"pacing_mode": _DEFAULT_PACING_MODE}
    if not isinstance(raw, dict):
        return {"pacing_mode": _DEFAULT_PACING_MODE}
    return {"pacing_mode": _normalize_pacing_mode(raw.get("pacing_mode"))}


def save_config(config: Dict[str, str], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"pacing_mode": _normalize_pacing_mode(config.get("pacing_mode"))}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
