"""Elemental type chart and narration names."""
from __future__ import annotations

from typing import Dict

from codecrawl.core.types import ElementType

SUPER_EFFECTIVE = 2.0
NEUTRAL = 1.0
NOT_VERY_EFFECTIVE = 0.5

# Attacker type -> defender type -> multiplier.
TYPE_CHART: Dict[ElementType, Dict[ElementType, float]] = {
    "water": {"fire": SUPER_EFFECTIVE, "water": NEUTRAL, "grass": NOT_VERY_EFFECTIVE},
    "fire": {"grass": SUPER_EFFECTIVE, "fire": NEUTRAL, "water": NOT_VERY_EFFECTIVE},
    "grass": {"water": SUPER_EFFECTIVE, "grass": NEUTRAL, "fire": NOT_VERY_EFFECTIVE},
}

ELEMENT_NAMES: Dict[ElementType, str] = {"water": "Water", "fire": "Fire", "grass": "Grass"}


def type_multiplier(atk_type: ElementType | None, def_type: ElementType | None) -> float:
    """Return the damage multiplier; an untyped side is always neutral."""
    if atk_type is None or def_type is None:
        return NEUTRAL
    return TYPE_CHART[atk_type][def_type]


def element_name(element: ElementType | None) -> str:
    if element is None:
        return "Unknown"
    return ELEMENT_NAMES.get(element, "Unknown")
