from pathlib import Path

import pytest

from codecrawl.domain.state import BOSS_INDEX_SENTINEL
from codecrawl.services.errors import ProgressionError
from codecrawl.services.progression_service import editing_locked
from tests.helpers.run_builders import make_services, start_battle

OPENING_TRACK = ["select", "battle", "reward", "battle", "shop", "battle", "reward", "battle"]
FINAL_TRACK = ["select", "battle", "upgrade", "shop", "battle", "battle", "upgrade", "battle"]


def test_new_run_starts_on_map_with_opening_track(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    assert state.progress.game_state == "MAP"
    assert state.progress.event_track == OPENING_TRACK
    assert state.progress.current_event_index == 0
    assert state.progress.cycle_count == 1
    assert state.progress.battle_count == 0


def test_choose_right_enters_first_slot(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    result = services.progression.choose_direction(state, "right")
    assert result.event == "battle"
    assert state.progress.current_event_index == 1
    assert state.progress.traversal_direction == 1
    assert state.progress.game_state == "BATTLE"
    assert state.progress.battle_count == 1
    assert state.enemy.hp == 10
    assert state.enemy.type in ("water", "fire", "grass")


def test_choose_left_starts_from_the_far_end(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    services.progression.choose_direction(state, "left")
    assert state.progress.current_event_index == 7
    assert state.progress.traversal_direction == -1
    with pytest.raises(ProgressionError):
        services.progression.choose_direction(state, "right")


def test_advance_visits_every_slot_then_wraps_past_the_boss(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    state.progress.current_event_index = 1

    visited = [state.progress.current_event_index]
    for _ in range(6):
        result = services.progression.advance_to_next_event(state)
        assert result.wrapped is False
        visited.append(state.progress.current_event_index)
    assert visited == [1, 2, 3, 4, 5, 6, 7]

    result = services.progression.advance_to_next_event(state)
    assert result.wrapped is True
    assert state.progress.current_event_index == 1
    assert state.progress.cycle_count == 2
    assert state.progress.map_reset_pending is True
    assert result.event == "battle"

    services.progression.acknowledge_map_reset(state)
    assert state.progress.map_reset_pending is False


def test_backward_wrap_lands_on_last_slot(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    state.progress.traversal_direction = -1
    state.progress.current_event_index = 1
    result = services.progression.advance_to_next_event(state)
    assert result.wrapped is True
    assert state.progress.current_event_index == 7


def test_third_cycle_uses_final_layout_and_wraps_to_boss(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    state.progress.cycle_count = 2
    state.progress.current_event_index = 7

    services.progression.advance_to_next_event(state)
    assert state.progress.cycle_count == 3
    assert state.progress.event_track == FINAL_TRACK

    state.progress.current_event_index = 7
    result = services.progression.advance_to_next_event(state)
    assert result.event == "select"
    assert result.wrapped is True
    assert state.progress.cycle_count == 3


def test_entering_boss_uses_sentinel_and_fixed_stats(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    services.progression.enter_event(state, "select")
    assert state.progress.game_state == "BOSS"
    assert state.progress.current_event_index == BOSS_INDEX_SENTINEL
    assert (state.enemy.hp, state.enemy.atk, state.enemy.bp, state.enemy.type) == (80, 30, 8, "fire")
    with pytest.raises(ProgressionError):
        services.progression.advance(state)


def test_spawn_scaling_follows_battle_and_cycle_counts(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    state.progress.battle_count = 4
    state.progress.cycle_count = 2
    state.player.bp = -3
    services.progression.enter_event(state, "battle")
    assert state.enemy.hp == 10 + 8 * 4 + 10
    assert state.enemy.atk == 20 + 2 * 4 + 3
    assert state.enemy.bp == 5 + 2
    assert state.progress.battle_count == 5
    assert state.player.bp == state.player.max_bp


def test_shop_event_restocks_and_clears_selection(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=3)
    state.selected_shop_index = 4
    services.progression.enter_event(state, "shop")
    assert state.progress.game_state == "SHOP"
    assert len(state.shop_items) == 9
    assert state.selected_shop_index is None


def test_reward_and_upgrade_events_open_presentations(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    services.progression.enter_event(state, "reward")
    assert state.show_item_reward is True
    assert [item.label for item in state.reward_items] == ["atk()", "end"]
    services.progression.enter_event(state, "upgrade")
    assert state.show_upgrade is True


def test_dismiss_reward_collects_items_and_advances(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.player.atk_type = "water"
    services.rewards.grant_battle_reward(state)
    reward_label = state.reward_items[0].label
    inventory_size = len(state.inventory)

    result = services.progression.dismiss_reward(state)

    assert result.event == "reward"
    assert state.progress.current_event_index == 2
    assert state.player.atk_type is None
    assert len(state.inventory) == inventory_size + 1
    assert state.inventory[-1].label == reward_label
    assert state.show_item_reward is True


def test_dismiss_without_reward_is_rejected(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    with pytest.raises(ProgressionError):
        services.progression.dismiss_reward(state)


def test_editing_lock_only_in_final_cycle_battles(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    assert editing_locked(state) is False
    state.progress.cycle_count = 3
    assert editing_locked(state) is True
    state.progress.game_state = "SHOP"
    assert editing_locked(state) is False
    state.progress.game_state = "BOSS"
    assert editing_locked(state) is False
