"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Any, Dict, List, Sequence, TypeVar

T_co = TypeVar("T_co")

RNGStatePayload = Dict[str, Any]


class RNG:
    """Wrapper around random.Random that provides deterministic helpers."""

    def __init__(self, seed: int) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, low: float, high: float) -> float:
        """Return a float in [low, high) drawn from a single random() call."""
        if high < low:
            raise ValueError("uniform() requires low <= high.")
        return low + (high - low) * self._random.random()

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)

    def export_state(self) -> RNGStatePayload:
        """Return a JSON-friendly snapshot of the generator state."""
        version, internal, gauss_next = self._random.getstate()
        return {"version": version, "internal": list(internal), "gauss_next": gauss_next}

    def restore_state(self, payload: RNGStatePayload) -> None:
        """Restore a snapshot produced by export_state()."""
        try:
            version = payload["version"]
            internal: List[int] = payload["internal"]
            gauss_next = payload.get("gauss_next")
        except (KeyError, TypeError) as exc:
            raise ValueError("RNG payload is missing required fields.") from exc
        if not isinstance(internal, list) or not all(isinstance(value, int) for value in internal):
            raise ValueError("RNG payload 'internal' must be a list of integers.")
        try:
            self._random.setstate((version, tuple(internal), gauss_next))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"RNG payload rejected: {exc}") from exc
