"""Run-level state aggregate passed to every service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

from codecrawl.core.rng import RNG
from codecrawl.core.types import Direction, EventType, GameMode, RunResult
from codecrawl.domain.entities import Entity
from codecrawl.domain.inventory import NodeItem
from codecrawl.domain.narration import NarrationLog
from codecrawl.domain.play_stats import GamePlayStats

BOSS_INDEX_SENTINEL = -1
MAX_CYCLES = 3


@dataclass(slots=True)
class ProgressState:
    """Where the run is on the event track."""

    event_track: List[EventType] = field(default_factory=list)
    game_state: GameMode = "MAP"
    current_event_index: int = 0
    traversal_direction: Direction = 1
    direction_chosen: bool = False
    cycle_count: int = 1
    battle_count: int = 0
    map_reset_pending: bool = False

    @property
    def current_event(self) -> EventType | None:
        if 0 <= self.current_event_index < len(self.event_track):
            return self.event_track[self.current_event_index]
        return None


@dataclass(slots=True)
class RunState:
    """Everything a single run owns; no service keeps state of its own."""

    seed: int
    rng: RNG
    player: Entity
    enemy: Entity
    program: List[NodeItem] = field(default_factory=list)
    inventory: List[NodeItem] = field(default_factory=list)
    shop_items: List[NodeItem] = field(default_factory=list)
    reward_items: List[NodeItem] = field(default_factory=list)
    show_item_reward: bool = False
    show_upgrade: bool = False
    selected_shop_index: int | None = None
    log: NarrationLog = field(default_factory=NarrationLog)
    shop_log: NarrationLog = field(default_factory=NarrationLog)
    progress: ProgressState = field(default_factory=ProgressState)
    stats: GamePlayStats = field(default_factory=GamePlayStats)
    result: RunResult | None = None

    @property
    def is_over(self) -> bool:
        return self.result is not None

    def item_ids(self) -> Set[str]:
        """Every item id currently owned by any container of this run."""
        ids: Set[str] = set()
        for container in (self.program, self.inventory, self.shop_items, self.reward_items):
            ids.update(item.id for item in container)
        return ids
