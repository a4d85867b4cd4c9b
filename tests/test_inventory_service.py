from pathlib import Path

import pytest

from codecrawl.services.errors import EditingLockedError
from tests.helpers.run_builders import make_services, start_battle


def test_place_item_moves_inventory_item_to_program_end(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=2)
    moved = state.inventory[0]
    program_size = len(state.program)

    event = services.inventory.place_item(state, 0)

    assert state.program[-1] == moved
    assert len(state.program) == program_size + 1
    assert moved.id not in {item.id for item in state.inventory}
    assert event.index == len(state.program) - 1
    assert state.stats.item_swap_count == 1


def test_return_item_moves_program_item_back(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=2)
    moved = state.program[0]

    services.inventory.return_item(state, 0)

    assert state.program == []
    assert state.inventory[-1] == moved


def test_move_program_item_reorders(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=2)
    services.inventory.place_item(state, 0)
    services.inventory.place_item(state, 0)
    labels = [item.label for item in state.program]

    services.inventory.move_program_item(state, 0, 2)

    assert [item.label for item in state.program] == labels[1:] + labels[:1]


def test_each_item_lives_in_exactly_one_container(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=2)
    before = sorted(state.item_ids())
    services.inventory.place_item(state, 2)
    services.inventory.return_item(state, 0)
    program_ids = {item.id for item in state.program}
    inventory_ids = {item.id for item in state.inventory}
    assert not program_ids & inventory_ids
    assert sorted(program_ids | inventory_ids) == before


def test_edits_are_rejected_in_final_cycle_battles(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = start_battle(services)
    state.progress.cycle_count = 3
    with pytest.raises(EditingLockedError):
        services.inventory.place_item(state, 0)
    with pytest.raises(EditingLockedError):
        services.inventory.return_item(state, 0)
    with pytest.raises(EditingLockedError):
        services.inventory.move_program_item(state, 0, 0)


def test_out_of_range_index_raises(tmp_path: Path) -> None:
    services = make_services(tmp_path)
    state = services.game.new_game(seed=2)
    with pytest.raises(IndexError):
        services.inventory.place_item(state, 42)
