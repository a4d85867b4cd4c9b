from __future__ import annotations

import pytest

from codecrawl.core.rng import RNG
from codecrawl.data.repositories import EnemiesRepository
from codecrawl.domain.instructions import Attack, RawInstruction
from codecrawl.services.errors import FactoryError
from codecrawl.services.factories import (
    build_item,
    create_battle_enemy,
    create_boss,
    create_item,
    make_instance_id,
)


def test_make_instance_id_is_deterministic() -> None:
    assert make_instance_id("item", RNG(5)) == make_instance_id("item", RNG(5))
    assert make_instance_id("item", RNG(5)).startswith("item_")


def test_make_instance_id_skips_taken_ids() -> None:
    first = make_instance_id("item", RNG(5))
    second = make_instance_id("item", RNG(5), taken={first})
    assert second != first


def test_make_instance_id_gives_up_when_everything_is_taken() -> None:
    class _StuckRNG(RNG):
        def randint(self, a: int, b: int) -> int:
            return a

    with pytest.raises(FactoryError):
        make_instance_id("item", _StuckRNG(0), taken={"item_100000"})


def test_catalog_items_get_their_canonical_code() -> None:
    item = create_item("atk()", "attack", RNG(1))
    assert item.instruction == Attack()
    assert item.code == Attack().render()


def test_unknown_labels_need_code() -> None:
    opaque = build_item("x", "mystery", "syntax", code="doIt();")
    assert opaque.instruction == RawInstruction("doIt();")
    with pytest.raises(FactoryError):
        build_item("y", "mystery", "syntax")


def test_battle_enemy_uses_scaling_and_rolls_an_element() -> None:
    repo = EnemiesRepository()
    enemy = create_battle_enemy(repo, RNG(3), battle_count=2, cycle_count=1)
    assert enemy.hp == enemy.max_hp == 10 + 16
    assert enemy.atk == 24
    assert enemy.bp == 6
    assert enemy.type in ("water", "fire", "grass")


def test_boss_ignores_scaling() -> None:
    boss = create_boss(EnemiesRepository())
    assert (boss.hp, boss.atk, boss.bp, boss.type) == (80, 30, 8, "fire")
