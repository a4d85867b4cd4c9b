from pathlib import Path

import pytest

from codecrawl.domain.instructions import IncreaseAttack
from codecrawl.domain.inventory import NodeItem
from codecrawl.services.errors import ProgressionError
from tests.helpers.run_builders import make_services, start_battle


def _build_upgrade_state(tmp_path: Path):
    services = make_services(tmp_path)
    state = start_battle(services)
    state.progress.cycle_count = 3
    state.progress.event_track = ["select", "battle", "upgrade", "shop", "battle", "battle", "upgrade", "battle"]
    state.progress.current_event_index = 2
    services.progression.enter_event(state, "upgrade")
    return services, state


def test_upgradable_items_follow_the_chain(tmp_path: Path) -> None:
    services, state = _build_upgrade_state(tmp_path)
    candidates = services.upgrades.upgradable_items(state)
    labels = {(candidate.item.label, candidate.upgraded_label) for candidate in candidates}
    assert labels == {("atk+=1", "atk+=2"), ("hp+=1", "hp+=2"), ("bp+=1", "bp+=2")}
    assert all(candidate.source == "inventory" for candidate in candidates)


def test_upgrade_replaces_item_in_place_and_advances(tmp_path: Path) -> None:
    services, state = _build_upgrade_state(tmp_path)
    index = next(i for i, item in enumerate(state.inventory) if item.label == "atk+=1")
    old_item = state.inventory[index]

    event = services.upgrades.upgrade(state, old_item.id, "inventory")

    assert state.inventory[index].label == "atk+=2"
    assert state.inventory[index].id != old_item.id
    assert state.inventory[index].instruction == IncreaseAttack(2)
    assert event.advance.event == "shop"
    assert state.show_upgrade is False
    assert state.progress.game_state == "SHOP"


def test_top_of_chain_is_not_upgradable(tmp_path: Path) -> None:
    services, state = _build_upgrade_state(tmp_path)
    state.program.append(NodeItem(id="maxed", label="atk+=3", type="attack"))
    assert all(candidate.item.id != "maxed" for candidate in services.upgrades.upgradable_items(state))
    with pytest.raises(ProgressionError):
        services.upgrades.upgrade(state, "maxed", "program")


def test_skip_closes_upgrade_and_advances(tmp_path: Path) -> None:
    services, state = _build_upgrade_state(tmp_path)
    result = services.upgrades.skip(state)
    assert result.event == "shop"
    assert state.show_upgrade is False
    with pytest.raises(ProgressionError):
        services.upgrades.skip(state)
