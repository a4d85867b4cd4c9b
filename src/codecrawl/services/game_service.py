"""Run lifecycle: fresh runs, resets, and resuming saved runs."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import List

from codecrawl.core.rng import RNG
from codecrawl.data.repositories import LoadoutRepository
from codecrawl.domain.defs import LoadoutItemDef
from codecrawl.domain.entities import Entity
from codecrawl.domain.inventory import NodeItem
from codecrawl.domain.play_stats import GamePlayStats
from codecrawl.domain.state import ProgressState, RunState
from codecrawl.services.errors import PersistenceError, SaveLoadError
from codecrawl.services.factories import create_item
from codecrawl.services.persistence_service import PersistenceService
from codecrawl.services.progression_service import ProgressionService

logger = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31


@dataclass(slots=True)
class LoadResult:
    state: RunState
    resumed: bool
    error: str | None = None


class GameService:
    """Creates run state from the starting loadout and restores saved runs."""

    def __init__(
        self,
        *,
        loadout_repo: LoadoutRepository,
        progression_service: ProgressionService,
        persistence_service: PersistenceService | None = None,
    ) -> None:
        self._loadout_repo = loadout_repo
        self._progression = progression_service
        self._persistence = persistence_service

    def new_game(self, seed: int | None = None) -> RunState:
        """Create a fresh run; a missing seed is drawn at random."""
        if seed is None:
            seed = secrets.randbelow(_MAX_RANDOM_SEED)
        state = RunState(
            seed=seed,
            rng=RNG(seed),
            player=self._starting_player(),
            enemy=Entity(hp=0, max_hp=0, atk=0, bp=0, max_bp=0),
        )
        self.reset_game_state(state, seed=seed)
        return state

    def reset_game_state(self, state: RunState, seed: int | None = None) -> None:
        """Return ``state`` to a fresh run in place so narration subscribers stay attached.

        A missing seed is drawn at random, so a new game never replays the previous run.
        """
        loadout = self._loadout_repo.loadout()
        if seed is None:
            seed = secrets.randbelow(_MAX_RANDOM_SEED)
        state.seed = seed
        state.rng = RNG(state.seed)
        state.player = self._starting_player()
        state.enemy = Entity(hp=0, max_hp=0, atk=0, bp=0, max_bp=0)
        state.program = []
        state.inventory = []
        state.shop_items = []
        state.reward_items = []
        state.program = self._create_items(state, loadout.program)
        state.inventory = self._create_items(state, loadout.inventory)
        state.show_item_reward = False
        state.show_upgrade = False
        state.selected_shop_index = None
        state.log.clear()
        state.shop_log.clear([loadout.shop_greeting])
        state.progress = ProgressState(event_track=self._progression.build_track(1))
        state.stats = GamePlayStats()
        state.result = None
        logger.info("new run started with seed %d", state.seed)

    def load_or_new(self, user_id: str | None, seed: int | None = None) -> LoadResult:
        """Resume the user's in-progress run, or start fresh when there is none or it cannot be read."""
        if self._persistence is None:
            return LoadResult(state=self.new_game(seed), resumed=False)
        try:
            saved = self._persistence.load_latest_in_progress_run(user_id)
        except (PersistenceError, SaveLoadError) as exc:
            logger.warning("could not load saved run, starting fresh: %s", exc)
            return LoadResult(state=self.new_game(seed), resumed=False, error=str(exc))
        if saved is None:
            return LoadResult(state=self.new_game(seed), resumed=False)

        state = self.new_game(saved.seed if saved.rng is not None else seed)
        if saved.rng is not None:
            state.rng = saved.rng
        state.program = saved.program_items
        state.inventory = saved.inventory_items
        state.player = saved.player
        state.progress = saved.progress
        state.stats = saved.stats
        self._resume_encounter(state)
        logger.info("resumed run %s", saved.run_id)
        return LoadResult(state=state, resumed=True)

    def _resume_encounter(self, state: RunState) -> None:
        """Re-enter the saved event; enemies and shop stock are not part of a save."""
        progress = state.progress
        saved_bp = state.player.bp
        if progress.game_state == "BOSS":
            self._progression.enter_event(state, "select")
        elif progress.current_event in ("reward", "upgrade"):
            self._progression.enter_event(state, progress.current_event)
        elif progress.game_state == "SHOP":
            self._progression.enter_event(state, "shop")
        elif progress.game_state == "BATTLE":
            # Re-spawning counts as a spawn; keep the saved counter.
            battle_count = progress.battle_count
            progress.battle_count = max(0, battle_count - 1)
            self._progression.enter_event(state, "battle")
            progress.battle_count = battle_count
        state.player.bp = saved_bp

    def _starting_player(self) -> Entity:
        loadout = self._loadout_repo.loadout()
        return Entity(
            hp=loadout.player_hp,
            max_hp=loadout.player_hp,
            atk=loadout.player_atk,
            bp=loadout.player_bp,
            max_bp=loadout.player_bp,
        )

    @staticmethod
    def _create_items(state: RunState, entries: tuple[LoadoutItemDef, ...]) -> List[NodeItem]:
        items: List[NodeItem] = []
        for entry in entries:
            item = create_item(entry.label, entry.type, state.rng, taken=state.item_ids() | {i.id for i in items})
            items.append(item)
        return items
