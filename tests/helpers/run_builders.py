from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from codecrawl.core.types import ItemType
from codecrawl.domain import catalog
from codecrawl.data.run_store import JsonRunStore
from codecrawl.domain.entities import Entity
from codecrawl.domain.inventory import NodeItem
from codecrawl.domain.state import RunState
from codecrawl.services.factories import build_item
from codecrawl.services.wiring import GameServices, build_services

INSTANT = {"pacing_mode": "instant"}


class SleepRecorder:
    """Stands in for asyncio.sleep and records every requested pause."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_services(tmp_path: Path, *, user_id: str | None = "user-1", sleep: SleepRecorder | None = None) -> GameServices:
    return build_services(
        store=JsonRunStore(tmp_path / "runs"),
        config=INSTANT,
        sleep=sleep or SleepRecorder(),
        user_id=user_id,
    )


def make_item(label: str, item_id: str | None = None, code: str | None = None) -> NodeItem:
    definition = catalog.resolve(label)
    item_type: ItemType = definition.item_type if definition else "syntax"
    return build_item(item_id or f"item_{label}", label, item_type, code)


def make_program(labels: Iterable[str]) -> List[NodeItem]:
    return [make_item(label, item_id=f"p{index}") for index, label in enumerate(labels)]


def start_battle(services: GameServices, *, seed: int = 7) -> RunState:
    """A fresh run that has chosen the right-hand path and is in its first battle."""
    state = services.game.new_game(seed=seed)
    services.progression.choose_direction(state, "right")
    return state


def set_enemy(state: RunState, **stats: object) -> Entity:
    hp = stats.pop("hp", 20)
    bp = stats.pop("bp", 1)
    state.enemy = Entity(
        hp=hp,  # type: ignore[arg-type]
        max_hp=hp,  # type: ignore[arg-type]
        atk=stats.pop("atk", 10),  # type: ignore[arg-type]
        bp=bp,  # type: ignore[arg-type]
        max_bp=bp,  # type: ignore[arg-type]
        type=stats.pop("type", None),  # type: ignore[arg-type]
    )
    return state.enemy
