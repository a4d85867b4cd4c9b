"""Event-track progression: direction choice, advancing, and entering events."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal

from codecrawl.core.types import EventType
from codecrawl.data.repositories import EnemiesRepository, EventTracksRepository
from codecrawl.domain.elements import element_name
from codecrawl.domain.state import BOSS_INDEX_SENTINEL, MAX_CYCLES, RunState
from codecrawl.services.errors import ProgressionError
from codecrawl.services.factories import create_battle_enemy, create_boss
from codecrawl.services.reward_service import RewardService

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]


@dataclass(slots=True)
class AdvanceResult:
    event: EventType | None
    wrapped: bool


def editing_locked(state: RunState) -> bool:
    """The program and inventory are read-only during regular battles of the final cycle."""
    return state.progress.cycle_count >= MAX_CYCLES and state.progress.game_state == "BATTLE"


class ProgressionService:
    """Owns every transition of ``RunState.progress``."""

    def __init__(
        self,
        *,
        event_tracks_repo: EventTracksRepository,
        enemies_repo: EnemiesRepository,
        reward_service: RewardService,
    ) -> None:
        self._event_tracks_repo = event_tracks_repo
        self._enemies_repo = enemies_repo
        self._reward_service = reward_service

    def build_track(self, cycle: int) -> List[EventType]:
        return list(self._event_tracks_repo.for_cycle(cycle).events)

    def choose_direction(self, state: RunState, side: Side) -> AdvanceResult:
        """Fix the traversal direction and enter the first slot on that side."""
        progress = state.progress
        if progress.direction_chosen:
            raise ProgressionError("The traversal direction is already fixed for this run.")
        if side not in ("left", "right"):
            raise ProgressionError(f"Unknown direction '{side}'.")
        progress.traversal_direction = 1 if side == "right" else -1
        progress.direction_chosen = True
        progress.event_track = self.build_track(progress.cycle_count)
        progress.current_event_index = 1 if progress.traversal_direction == 1 else len(progress.event_track) - 1
        event = progress.event_track[progress.current_event_index]
        logger.info("direction %s chosen, entering %s", side, event)
        self.enter_event(state, event)
        return AdvanceResult(event=event, wrapped=False)

    def advance_to_next_event(self, state: RunState) -> AdvanceResult:
        """Move one slot along the track; reaching either end completes a cycle."""
        progress = state.progress
        track = progress.event_track
        if len(track) <= 1:
            return AdvanceResult(event=None, wrapped=False)

        next_index = progress.current_event_index + progress.traversal_direction
        if 0 < next_index < len(track):
            progress.current_event_index = next_index
            return AdvanceResult(event=track[next_index], wrapped=False)

        if progress.cycle_count >= MAX_CYCLES:
            progress.current_event_index = 0
            logger.info("final cycle finished, routing to the boss")
            return AdvanceResult(event="select", wrapped=True)

        progress.cycle_count += 1
        progress.event_track = self.build_track(progress.cycle_count)
        progress.current_event_index = 1 if progress.traversal_direction == 1 else len(progress.event_track) - 1
        progress.map_reset_pending = True
        logger.info("cycle %d started", progress.cycle_count)
        return AdvanceResult(event=progress.event_track[progress.current_event_index], wrapped=True)

    def enter_event(self, state: RunState, event: EventType) -> None:
        progress = state.progress
        if event == "battle":
            progress.game_state = "BATTLE"
            state.enemy = create_battle_enemy(
                self._enemies_repo,
                state.rng,
                battle_count=progress.battle_count,
                cycle_count=progress.cycle_count,
            )
            progress.battle_count += 1
            state.player.bp = state.player.max_bp
            state.log.append(f"A {element_name(state.enemy.type)} enemy appears! (HP: {state.enemy.hp})")
        elif event == "shop":
            progress.game_state = "SHOP"
            state.shop_items = self._reward_service.generate_shop_stock(state)
            state.selected_shop_index = None
        elif event == "select":
            progress.game_state = "BOSS"
            progress.current_event_index = BOSS_INDEX_SENTINEL
            state.enemy = create_boss(self._enemies_repo)
            state.player.bp = state.player.max_bp
            state.log.append(f"The boss appears! (HP: {state.enemy.hp})")
        elif event == "reward":
            self._reward_service.present_fixed_reward(state)
        elif event == "upgrade":
            state.show_upgrade = True
        else:
            raise ProgressionError(f"Unknown event '{event}'.")
        logger.debug("entered %s at index %d", event, progress.current_event_index)

    def advance(self, state: RunState) -> AdvanceResult:
        if state.is_over:
            raise ProgressionError("The run has ended; start a new game.")
        if state.progress.game_state == "BOSS":
            raise ProgressionError("There is nothing past the boss.")
        result = self.advance_to_next_event(state)
        if result.event is not None:
            self.enter_event(state, result.event)
        return result

    def dismiss_reward(self, state: RunState) -> AdvanceResult:
        """Collect the presented reward items and move on."""
        if not state.show_item_reward:
            raise ProgressionError("No reward is being presented.")
        self._reward_service.collect_rewards(state)
        return self.advance(state)

    def acknowledge_map_reset(self, state: RunState) -> None:
        state.progress.map_reset_pending = False
