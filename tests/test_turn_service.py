import asyncio
from pathlib import Path

import pytest

from codecrawl.domain.inventory import NodeItem
from codecrawl.services.errors import ProgressionError
from codecrawl.services.interpreter import ENEMY_TYPE_UNSET_MESSAGE
from tests.helpers.run_builders import make_item, make_program, make_services, set_enemy, start_battle


def test_fire_attack_one_shots_grass_enemy_without_counter_damage(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.player.atk = 20
    state.player.bp = 1
    state.player.atk_type = "fire"
    set_enemy(state, hp=20, bp=1, atk=50, type="grass")
    state.program = make_program(["atk()"])
    hp_before = state.player.hp

    outcome = asyncio.run(services.turns.execute_turn(state))

    assert state.enemy.hp == 0
    assert outcome.result == "VICTORY"
    assert state.player.hp == hp_before
    assert state.stats.total_damage_taken == 0
    assert state.show_item_reward is True
    assert len(state.reward_items) == 1
    assert "It's super effective!" in outcome.log_lines


def test_guard_failure_skips_program_counts_once_and_enemy_still_acts(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    enemy = set_enemy(state, hp=50, bp=2, atk=5)
    state.program = make_program(["atk()", "if enemyType=fire", "atk()", "end"])
    hp_before = state.player.hp

    outcome = asyncio.run(services.turns.execute_turn(state))

    assert outcome.validation_error == ENEMY_TYPE_UNSET_MESSAGE
    assert ENEMY_TYPE_UNSET_MESSAGE in state.log.lines
    assert state.stats.execution_failure_count == 1
    assert enemy.hp == 50
    assert state.player.hp == hp_before - 10
    assert outcome.result == "CONTINUE"


def test_unbalanced_program_is_rejected_before_any_effect(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    enemy = set_enemy(state, hp=50, bp=1, atk=1)
    state.program = make_program(["atk()", "n.times do"])

    outcome = asyncio.run(services.turns.execute_turn(state))

    assert outcome.validation_error is not None
    assert enemy.hp == 50
    assert state.stats.execution_failure_count == 1


def test_runtime_fault_is_logged_and_effects_are_kept(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    enemy = set_enemy(state, hp=100, bp=1, atk=1)
    state.player.atk = 10
    state.program = [
        make_item("atk()", "a1"),
        NodeItem(id="legacy", label="legacy card", type="syntax", code="explode();"),
        make_item("atk()", "a2"),
    ]

    outcome = asyncio.run(services.turns.execute_turn(state))

    assert enemy.hp == 90
    assert outcome.runtime_error is not None
    assert any(line.startswith("Error: Unknown instruction") for line in state.log.lines)
    assert state.stats.execution_failure_count == 0
    assert state.player.hp == state.player.max_hp - 1


def test_end_of_turn_restores_bp_to_turn_start_values(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.player.bp = 3
    enemy = set_enemy(state, hp=500, bp=1, atk=1)
    state.program = make_program(["n=5", "n.times do", "atk()", "end"])

    asyncio.run(services.turns.execute_turn(state))

    assert state.player.bp == 3
    assert enemy.bp == 1
    assert state.stats.total_turns == 1
    # two deficit attacks lifted the enemy to 4 hits before the restore
    assert state.player.hp == state.player.max_hp - 4


def test_enemy_damage_is_atk_times_bp_and_can_end_the_run(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.player.hp = 30
    set_enemy(state, hp=500, bp=4, atk=10)
    state.program = []

    outcome = asyncio.run(services.turns.execute_turn(state))

    assert state.player.hp == 0
    assert outcome.result == "GAME_OVER"
    assert state.result == "GAME_OVER"
    assert state.stats.total_damage_taken == 40
    assert state.stats.total_turns == 0


def test_bp_deficit_penalty_raises_enemy_hits(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.player.bp = 0
    set_enemy(state, hp=500, bp=1, atk=3)
    state.program = make_program(["atk()"])
    hp_before = state.player.hp

    asyncio.run(services.turns.execute_turn(state))

    assert state.player.hp == hp_before - 6
    assert state.enemy.bp == 1


def test_boss_defeat_completes_the_run(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    services.progression.enter_event(state, "select")
    state.enemy.hp = 1
    state.program = make_program(["atk()"])

    outcome = asyncio.run(services.turns.execute_turn(state))

    assert outcome.result == "COMPLETED"
    assert outcome.is_terminal
    assert state.result == "COMPLETED"
    assert state.show_item_reward is False


def test_turn_outside_battle_is_rejected(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=1)
    with pytest.raises(ProgressionError):
        asyncio.run(services.turns.execute_turn(state))
