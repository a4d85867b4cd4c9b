"""UI-agnostic controller that serializes turns and finalizes finished runs."""
from __future__ import annotations

import logging

from codecrawl.domain.state import RunState
from codecrawl.services.errors import PersistenceError, ProgressionError, TurnInProgressError
from codecrawl.services.game_service import GameService
from codecrawl.services.persistence_service import PersistenceService, SaveAck
from codecrawl.services.progression_service import editing_locked
from codecrawl.services.turn_service import TurnOutcome, TurnService

logger = logging.getLogger(__name__)


class RunController:
    """
    UI-agnostic controller for the run loop.

    Responsibilities:
    - Allow at most one turn in flight
    - Save the run with its final status when a turn ends it
    - Expose the editing-lock flag and new-game reset

    Non-responsibilities (handled by presentation layer):
    - Rendering the program, logs or modals
    - Collecting input
    """

    def __init__(
        self,
        *,
        turn_service: TurnService,
        game_service: GameService,
        persistence_service: PersistenceService | None = None,
        user_id: str | None = None,
    ) -> None:
        self._turn_service = turn_service
        self._game_service = game_service
        self._persistence = persistence_service
        self._user_id = user_id
        self._in_flight = False
        self.last_save_error: str | None = None

    @property
    def is_running(self) -> bool:
        return self._in_flight

    def is_editing_locked(self, state: RunState) -> bool:
        return editing_locked(state)

    async def run_program(self, state: RunState) -> TurnOutcome:
        """Run one turn; a second call while one is running is rejected."""
        if self._in_flight:
            raise TurnInProgressError("A turn is already running.")
        self._in_flight = True
        try:
            outcome = await self._turn_service.execute_turn(state)
        finally:
            self._in_flight = False
        if outcome.is_terminal:
            self._finalize(state)
        return outcome

    def save(self, state: RunState) -> SaveAck:
        """Save the run as in progress; only valid between turns with no reward pending."""
        if self._in_flight:
            raise TurnInProgressError("Cannot save while a turn is running.")
        if state.show_item_reward:
            # Rolled rewards are not part of a save; collect them first.
            raise ProgressionError("Collect the battle reward before saving.")
        if self._persistence is None:
            raise PersistenceError("No run store is configured.")
        status = state.result or "IN_PROGRESS"
        return self._persistence.save_state(self._user_id, state, status)

    def new_game(self, state: RunState, seed: int | None = None) -> None:
        if self._in_flight:
            raise TurnInProgressError("Cannot start a new game while a turn is running.")
        self._game_service.reset_game_state(state, seed=seed)
        self.last_save_error = None

    def _finalize(self, state: RunState) -> None:
        if self._persistence is None or not self._user_id or state.result is None:
            return
        try:
            self._persistence.save_state(self._user_id, state, state.result)
            self.last_save_error = None
        except PersistenceError as exc:
            self.last_save_error = str(exc)
            logger.warning("could not record the finished run: %s", exc)
