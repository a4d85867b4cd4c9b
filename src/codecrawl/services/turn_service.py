"""One combat turn: the player's program followed by the enemy counter-turn."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Literal

from codecrawl.domain.combat import CombatContext
from codecrawl.domain.state import RunState
from codecrawl.services.errors import ProgressionError
from codecrawl.services.interpreter import Interpreter, validate
from codecrawl.services.reward_service import RewardService
from codecrawl.services.transpiler import transpile

logger = logging.getLogger(__name__)

TurnResult = Literal["CONTINUE", "VICTORY", "GAME_OVER", "COMPLETED"]

ENEMY_TURN_DELAY = 0.5
TURN_END_DELAY = 1.0


@dataclass(slots=True)
class TurnOutcome:
    result: TurnResult
    validation_error: str | None = None
    runtime_error: str | None = None
    damage_dealt: int = 0
    damage_taken: int = 0
    log_lines: List[str] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.result in ("GAME_OVER", "COMPLETED")


class TurnService:
    """Validates, runs and resolves a turn against the run state."""

    def __init__(self, *, reward_service: RewardService, interpreter: Interpreter | None = None) -> None:
        self._reward_service = reward_service
        self._interpreter = interpreter or Interpreter()

    async def execute_turn(self, state: RunState) -> TurnOutcome:
        if state.is_over:
            raise ProgressionError("The run has ended; start a new game.")
        if state.progress.game_state not in ("BATTLE", "BOSS"):
            raise ProgressionError("Turns can only run during a battle.")
        if state.show_item_reward or not state.enemy.is_alive:
            raise ProgressionError("The enemy is already defeated.")

        player, enemy = state.player, state.enemy
        log_start = len(state.log)
        player_bp_at_start = player.bp
        enemy_bp_at_start = enemy.bp
        enemy_hp_before = enemy.hp
        dealt_before = state.stats.total_damage_dealt

        program = transpile(state.program)
        outcome = TurnOutcome(result="CONTINUE")
        state.log.append("Running code...")

        problem = validate(program.instructions)
        if problem is not None:
            state.log.append(problem)
            state.stats.execution_failure_count += 1
            outcome.validation_error = problem
            logger.debug("turn skipped: %s", problem)
        else:
            context = CombatContext(player=player, enemy=enemy, log=state.log, stats=state.stats)
            try:
                await self._interpreter.run(program.instructions, context)
            except Exception as exc:  # turn boundary, partial effects stay applied
                state.log.append(f"Error: {exc}")
                outcome.runtime_error = str(exc)
                logger.warning("runtime fault during turn: %s", exc)

        outcome.damage_dealt = state.stats.total_damage_dealt - dealt_before
        logger.debug("player phase dealt %d (enemy hp %d -> %d)", outcome.damage_dealt, enemy_hp_before, enemy.hp)

        await self._enemy_phase(state, outcome)
        if outcome.result == "CONTINUE":
            await self._interpreter.pause(TURN_END_DELAY)
            state.log.append("Turn End. Restoring BP.")
            player.bp = player_bp_at_start
            enemy.bp = enemy_bp_at_start
            state.stats.total_turns += 1

        outcome.log_lines = state.log.lines[log_start:]
        return outcome

    async def _enemy_phase(self, state: RunState, outcome: TurnOutcome) -> None:
        player, enemy = state.player, state.enemy
        if enemy.hp > 0:
            state.log.append(f"Enemy Turn! BP: {enemy.bp}")
            await self._interpreter.pause(ENEMY_TURN_DELAY)
            damage = enemy.atk * enemy.bp
            state.log.append(f"Enemy attacks {enemy.bp} times! Total Damage: {damage}")
            player.set_hp(player.hp - damage)
            state.stats.total_damage_taken += damage
            outcome.damage_taken = damage
            if player.hp <= 0:
                state.log.append("You were defeated...")
                state.result = "GAME_OVER"
                outcome.result = "GAME_OVER"
                logger.info("run lost after %d battles", state.progress.battle_count)
            return

        state.log.append("Enemy Defeated!")
        if state.progress.game_state == "BOSS":
            state.result = "COMPLETED"
            outcome.result = "COMPLETED"
            logger.info("boss defeated, run completed")
            return
        self._reward_service.grant_battle_reward(state)
        outcome.result = "VICTORY"
