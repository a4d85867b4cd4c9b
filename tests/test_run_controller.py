from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import pytest

from codecrawl.data.errors import RunStoreError
from codecrawl.data.run_store import JsonRunStore, RunRecord
from codecrawl.services.controllers import RunController
from codecrawl.services.errors import ProgressionError, TurnInProgressError
from codecrawl.services.persistence_service import PersistenceService
from codecrawl.services.save_service import SaveService
from tests.helpers.run_builders import make_program, make_services, set_enemy, start_battle


class _GatedSleep:
    """Holds every pause until the test opens the gate."""

    def __init__(self) -> None:
        self.gate: asyncio.Event | None = None

    async def __call__(self, seconds: float) -> None:
        if self.gate is None:
            self.gate = asyncio.Event()
        await self.gate.wait()


class _ReadOnlyStore:
    def list_runs(self, user_id: str) -> List[RunRecord]:
        return []

    def insert_run(self, record: RunRecord) -> None:
        raise RunStoreError("read-only")

    def update_run(self, record: RunRecord) -> None:
        raise RunStoreError("read-only")


def test_second_turn_is_rejected_while_one_is_running(tmp_path: Path) -> None:
    sleep = _GatedSleep()
    services = make_services(tmp_path, sleep=sleep)  # type: ignore[arg-type]
    controller = services.controller
    state = start_battle(services)
    set_enemy(state, hp=500, bp=1, atk=1)
    state.program = make_program(["atk()"])

    async def scenario():
        first = asyncio.create_task(controller.run_program(state))
        await asyncio.sleep(0)
        assert controller.is_running is True
        with pytest.raises(TurnInProgressError):
            await controller.run_program(state)
        with pytest.raises(TurnInProgressError):
            controller.save(state)
        assert sleep.gate is not None
        sleep.gate.set()
        return await first

    outcome = asyncio.run(scenario())

    assert outcome.result == "CONTINUE"
    assert controller.is_running is False


def test_losing_turn_records_the_run_as_game_over(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    services.controller.save(state)
    state.player.hp = 5
    set_enemy(state, hp=500, bp=3, atk=10)
    state.program = make_program(["atk()"])

    outcome = asyncio.run(services.controller.run_program(state))

    assert outcome.result == "GAME_OVER"
    runs = JsonRunStore(tmp_path / "runs").list_runs("user-1")
    assert [run.status for run in runs] == ["GAME_OVER"]
    assert services.controller.last_save_error is None


def test_failed_final_save_is_reported_without_raising(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    persistence = PersistenceService(store=_ReadOnlyStore(), save_service=SaveService())
    controller = RunController(
        turn_service=services.turns,
        game_service=services.game,
        persistence_service=persistence,
        user_id="user-1",
    )
    state = start_battle(services)
    state.player.hp = 1
    set_enemy(state, hp=500, bp=1, atk=10)

    outcome = asyncio.run(controller.run_program(state))

    assert outcome.result == "GAME_OVER"
    assert controller.last_save_error is not None


def test_editing_lock_follows_the_final_cycle_battles(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    assert services.controller.is_editing_locked(state) is False
    state.progress.cycle_count = 3
    assert services.controller.is_editing_locked(state) is True


def test_new_game_resets_the_run(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.stats.total_turns = 5

    services.controller.new_game(state, seed=99)

    assert state.seed == 99
    assert state.stats.total_turns == 0
    assert state.progress.game_state == "MAP"


def test_successive_new_games_draw_fresh_seeds(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game()
    seeds = set()
    draws = set()
    for _ in range(3):
        services.controller.new_game(state)
        seeds.add(state.seed)
        draws.add(tuple(state.rng.random() for _ in range(3)))

    assert len(seeds) == 3
    assert len(draws) == 3


def test_explicit_seed_replays_the_same_run(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game()
    services.controller.new_game(state, seed=42)
    first = state.rng.random()
    services.controller.new_game(state, seed=42)
    assert state.rng.random() == first


def test_save_is_refused_while_a_battle_reward_is_pending(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.player.atk = 500
    set_enemy(state, hp=10, bp=1, atk=1)
    state.program = make_program(["atk()"])

    outcome = asyncio.run(services.controller.run_program(state))
    assert outcome.result == "VICTORY"

    with pytest.raises(ProgressionError):
        services.controller.save(state)
    assert JsonRunStore(tmp_path / "runs").list_runs("user-1") == []

    while state.show_item_reward:
        services.progression.dismiss_reward(state)
    assert services.controller.save(state).status == "IN_PROGRESS"
