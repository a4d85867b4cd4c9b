"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from typing import Collection

from codecrawl.core.rng import RNG
from codecrawl.services.errors import FactoryError

_MAX_ATTEMPTS = 64


def make_instance_id(prefix: str, rng: RNG, taken: Collection[str] = ()) -> str:
    """Generate a deterministic identifier using the provided RNG, avoiding ``taken`` ids."""
    for _ in range(_MAX_ATTEMPTS):
        candidate = f"{prefix}_{rng.randint(100000, 999999)}"
        if candidate not in taken:
            return candidate
    raise FactoryError(f"Could not find a free '{prefix}' id after {_MAX_ATTEMPTS} attempts.")
