"""Item catalog definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Literal, Tuple

from codecrawl.core.types import ElementType, ItemType

if TYPE_CHECKING:
    from codecrawl.domain.instructions import Instruction

ItemCategory = Literal["syntax", "attack", "behavior", "hp", "enemy_type"]
ParameterKind = Literal["value", "element"]
ItemParams = Dict[str, "int | ElementType"]


@dataclass(frozen=True, slots=True)
class ItemParameterDef:
    """Describes a placeholder embedded in a parameterized label."""

    name: str
    kind: ParameterKind
    default: int | ElementType


@dataclass(frozen=True, slots=True)
class ItemDef:
    """Catalog entry mapping a label pattern to an instruction builder."""

    id: str
    label: str
    description: str
    category: ItemCategory
    item_type: ItemType
    build: Callable[[ItemParams], "Instruction"]
    parameters: Tuple[ItemParameterDef, ...] = field(default_factory=tuple)

    @property
    def is_parameterized(self) -> bool:
        return bool(self.parameters)

    def with_defaults(self, params: ItemParams) -> ItemParams:
        """Fill missing parameters with their declared defaults."""
        merged: ItemParams = {parameter.name: parameter.default for parameter in self.parameters}
        merged.update(params)
        return merged

    def instruction(self, params: ItemParams | None = None) -> "Instruction":
        return self.build(self.with_defaults(params or {}))