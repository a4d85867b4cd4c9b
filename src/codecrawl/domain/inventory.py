"""Item cards and the ordered containers that own them."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Literal

from codecrawl.core.types import ItemType
from codecrawl.domain.instructions import Instruction

ContainerName = Literal["program", "inventory", "shop"]


@dataclass(frozen=True, slots=True)
class NodeItem:
    """A code-item card placed in the program, held in inventory or stocked in the shop."""

    id: str
    label: str
    type: ItemType
    code: str | None = None
    instruction: Instruction | None = field(default=None, compare=False)

    def copy(self) -> "NodeItem":
        return replace(self)


def find_index(container: List[NodeItem], item_id: str) -> int:
    for index, item in enumerate(container):
        if item.id == item_id:
            return index
    raise KeyError(item_id)


def move_item(source: List[NodeItem], index: int, destination: List[NodeItem], at: int | None = None) -> NodeItem:
    """Splice the item out of ``source`` and insert a copy into ``destination``."""
    if not 0 <= index < len(source):
        raise IndexError(f"Item index {index} is out of range.")
    moved = source.pop(index).copy()
    if at is None:
        destination.append(moved)
    else:
        destination.insert(at, moved)
    return moved


def swap_items(left: List[NodeItem], left_index: int, right: List[NodeItem], right_index: int) -> tuple[NodeItem, NodeItem]:
    """Exchange two items between containers; returns (new_left, new_right)."""
    if not 0 <= left_index < len(left):
        raise IndexError(f"Item index {left_index} is out of range.")
    if not 0 <= right_index < len(right):
        raise IndexError(f"Item index {right_index} is out of range.")
    left_item = left[left_index].copy()
    right_item = right[right_index].copy()
    left[left_index] = right_item
    right[right_index] = left_item
    return right_item, left_item
