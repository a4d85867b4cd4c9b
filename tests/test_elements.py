import itertools

import pytest

from codecrawl.core.types import ELEMENT_TYPES
from codecrawl.domain.elements import element_name, type_multiplier


@pytest.mark.parametrize(
    "attacker, defender",
    [("water", "fire"), ("fire", "grass"), ("grass", "water")],
)
def test_winning_matchups_double_and_reverse_halves(attacker: str, defender: str) -> None:
    assert type_multiplier(attacker, defender) == 2.0
    assert type_multiplier(defender, attacker) == 0.5


def test_chart_is_reflexive_and_opposite() -> None:
    for element in ELEMENT_TYPES:
        assert type_multiplier(element, element) == 1.0
    for left, right in itertools.permutations(ELEMENT_TYPES, 2):
        assert type_multiplier(left, right) * type_multiplier(right, left) == 1.0


def test_untyped_side_is_neutral() -> None:
    assert type_multiplier(None, "fire") == 1.0
    assert type_multiplier("water", None) == 1.0
    assert type_multiplier(None, None) == 1.0


def test_element_name() -> None:
    assert element_name("grass") == "Grass"
    assert element_name(None) == "Unknown"
