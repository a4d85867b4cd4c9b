"""Item catalog and label parser.

Catalog order is significant: ``resolve`` returns the first entry whose
label matches, so entries must stay in this order.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Tuple

from codecrawl.core.types import ELEMENT_TYPES
from codecrawl.domain.defs import ItemDef, ItemParameterDef, ItemParams
from codecrawl.domain.instructions import (
    AssignCounter,
    Attack,
    EndBlock,
    Heal,
    IfEnemyType,
    IncreaseAttack,
    IncreaseBehavior,
    Instruction,
    RepeatCounter,
    SenseEnemyType,
    SetAttackType,
)

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description is available for this item."

_VALUE_PARAM = (ItemParameterDef(name="value", kind="value", default=1),)
_TYPE_PARAM = (ItemParameterDef(name="type", kind="element", default="water"),)

ITEM_DEFINITIONS: Tuple[ItemDef, ...] = (
    ItemDef(
        id="n_assign",
        label="n=X",
        description="Declares the variable n.",
        category="syntax",
        item_type="syntax",
        parameters=_VALUE_PARAM,
        build=lambda params: AssignCounter(int(params["value"])),
    ),
    ItemDef(
        id="n_times_do",
        label="n.times do",
        description="Repeats n times. Use together with 'end'.",
        category="syntax",
        item_type="syntax",
        build=lambda params: RepeatCounter(),
    ),
    ItemDef(
        id="atk_call",
        label="atk()",
        description=(
            "Calls the atk function to attack. Damage depends on the player's atk "
            "value and the type matchup."
        ),
        category="attack",
        item_type="attack",
        build=lambda params: Attack(),
    ),
    ItemDef(
        id="atk_increase",
        label="atk+=X",
        description="Raises the player's attack power.",
        category="attack",
        item_type="attack",
        parameters=_VALUE_PARAM,
        build=lambda params: IncreaseAttack(int(params["value"])),
    ),
    ItemDef(
        id="end",
        label="end",
        description="Closes a conditional or a loop.",
        category="syntax",
        item_type="syntax",
        build=lambda params: EndBlock(),
    ),
    ItemDef(
        id="bp_increase",
        label="bp+=X",
        description="Adds behavior points.",
        category="behavior",
        item_type="behavior",
        parameters=_VALUE_PARAM,
        build=lambda params: IncreaseBehavior(int(params["value"])),
    ),
    ItemDef(
        id="hp_increase",
        label="hp+=X",
        description="Raises your own HP. In other words, heals.",
        category="hp",
        item_type="heal",
        parameters=_VALUE_PARAM,
        build=lambda params: Heal(int(params["value"])),
    ),
    ItemDef(
        id="search_enemy_type",
        label="enemyType=searchEnemyTypes()",
        description="Stores the result of searchEnemyTypes, the enemy's type, in enemyType.",
        category="enemy_type",
        item_type="element",
        build=lambda params: SenseEnemyType(),
    ),
    ItemDef(
        id="if_enemy_type",
        label="if enemyType=T",
        description="Branches on the enemy's type.",
        category="syntax",
        item_type="syntax",
        parameters=_TYPE_PARAM,
        build=lambda params: IfEnemyType(params["type"]),  # type: ignore[arg-type]
    ),
    ItemDef(
        id="atk_type_assign",
        label="atkType=T",
        description="Declares the player's attack type.",
        category="attack",
        item_type="element",
        parameters=_TYPE_PARAM,
        build=lambda params: SetAttackType(params["type"]),  # type: ignore[arg-type]
    ),
)

_ELEMENT_ALTERNATION = "|".join(ELEMENT_TYPES)


def _label_pattern(label: str) -> re.Pattern[str]:
    pattern = re.escape(label)
    pattern = re.sub(r"=T\b", f"=({_ELEMENT_ALTERNATION})", pattern)
    pattern = re.sub(r"=X\b", r"=\\d+", pattern)
    return re.compile(f"^{pattern}$")


_PATTERNS: Dict[str, re.Pattern[str]] = {
    definition.id: _label_pattern(definition.label)
    for definition in ITEM_DEFINITIONS
    if definition.is_parameterized
}

_ASSIGN_RE = re.compile(r"^n=(\d+)$")
_INCREMENT_RE = re.compile(r"^(atk|bp|hp)\+=(\d+)$")
_IF_TYPE_RE = re.compile(rf"^if enemyType=({_ELEMENT_ALTERNATION})$")
_ATK_TYPE_RE = re.compile(rf"^atkType=({_ELEMENT_ALTERNATION})$")


def resolve(label: str) -> ItemDef | None:
    """Return the first catalog entry matching the label, or None."""
    for definition in ITEM_DEFINITIONS:
        if definition.label == label:
            logger.debug("label %r matched %s exactly", label, definition.id)
            return definition
        pattern = _PATTERNS.get(definition.id)
        if pattern is not None and pattern.match(label):
            logger.debug("label %r matched pattern of %s", label, definition.id)
            return definition
    logger.debug("label %r matched no catalog entry", label)
    return None


def get_definition(item_def_id: str) -> ItemDef:
    """Return the catalog entry with the given id."""
    for definition in ITEM_DEFINITIONS:
        if definition.id == item_def_id:
            return definition
    raise KeyError(item_def_id)


def extract_parameters(label: str) -> ItemParams:
    """Pull the numeric or elemental argument out of a concrete label."""
    params: ItemParams = {}

    assign_match = _ASSIGN_RE.match(label)
    if assign_match:
        params["value"] = int(assign_match.group(1))
        return params

    increment_match = _INCREMENT_RE.match(label)
    if increment_match:
        params["value"] = int(increment_match.group(2))
        return params

    if_type_match = _IF_TYPE_RE.match(label)
    if if_type_match:
        params["type"] = if_type_match.group(1)  # type: ignore[assignment]
        return params

    atk_type_match = _ATK_TYPE_RE.match(label)
    if atk_type_match:
        params["type"] = atk_type_match.group(1)  # type: ignore[assignment]
        return params

    return params


def instruction_for_label(label: str) -> Instruction | None:
    """Resolve a label straight to its instruction variant."""
    definition = resolve(label)
    if definition is None:
        return None
    return definition.instruction(extract_parameters(label))


def describe(label: str) -> str:
    definition = resolve(label)
    return definition.description if definition else NO_DESCRIPTION
