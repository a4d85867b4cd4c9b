"""Program editing: moving item cards between the inventory and the program."""
from __future__ import annotations

from dataclasses import dataclass

from codecrawl.domain.inventory import ContainerName, move_item
from codecrawl.domain.state import RunState
from codecrawl.services.errors import EditingLockedError
from codecrawl.services.progression_service import editing_locked


@dataclass(slots=True)
class ItemMovedEvent:
    item_id: str
    label: str
    source: ContainerName
    destination: ContainerName
    index: int


class InventoryService:
    """Edits are rejected while the final cycle's battles lock the program."""

    def place_item(self, state: RunState, inventory_index: int, at: int | None = None) -> ItemMovedEvent:
        """Move an inventory item into the program (appended unless ``at`` is given)."""
        self._require_unlocked(state)
        moved = move_item(state.inventory, inventory_index, state.program, at)
        state.stats.item_swap_count += 1
        index = len(state.program) - 1 if at is None else min(at, len(state.program) - 1)
        return ItemMovedEvent(moved.id, moved.label, "inventory", "program", index)

    def return_item(self, state: RunState, program_index: int) -> ItemMovedEvent:
        self._require_unlocked(state)
        moved = move_item(state.program, program_index, state.inventory)
        state.stats.item_swap_count += 1
        return ItemMovedEvent(moved.id, moved.label, "program", "inventory", len(state.inventory) - 1)

    def move_program_item(self, state: RunState, from_index: int, to_index: int) -> ItemMovedEvent:
        self._require_unlocked(state)
        if not 0 <= to_index < len(state.program):
            raise IndexError(f"Item index {to_index} is out of range.")
        moved = move_item(state.program, from_index, state.program, to_index)
        state.stats.item_swap_count += 1
        return ItemMovedEvent(moved.id, moved.label, "program", "program", to_index)

    @staticmethod
    def _require_unlocked(state: RunState) -> None:
        if editing_locked(state):
            raise EditingLockedError("The program cannot be edited during final-cycle battles.")
