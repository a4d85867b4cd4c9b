"""Ordered narration log that presentation layers can subscribe to."""
from __future__ import annotations

from typing import Callable, Iterable, List

NarrationListener = Callable[[str], None]


class NarrationLog:
    """Append-only list of player-facing log lines with change callbacks."""

    def __init__(self, seed_lines: Iterable[str] = ()) -> None:
        self._lines: List[str] = list(seed_lines)
        self._listeners: List[NarrationListener] = []

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def append(self, line: str) -> None:
        self._lines.append(line)
        for listener in list(self._listeners):
            listener(line)

    def clear(self, seed_lines: Iterable[str] = ()) -> None:
        self._lines = list(seed_lines)

    def subscribe(self, listener: NarrationListener) -> Callable[[], None]:
        """Register a callback for new lines; returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
