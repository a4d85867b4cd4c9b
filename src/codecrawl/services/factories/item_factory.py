"""Factory for item cards with their instruction resolved up front."""
from __future__ import annotations

import logging
from typing import Collection

from codecrawl.core.rng import RNG
from codecrawl.core.types import ItemType
from codecrawl.domain import catalog
from codecrawl.domain.instructions import RawInstruction, normalize
from codecrawl.domain.inventory import NodeItem
from codecrawl.services.errors import FactoryError

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)


def build_item(item_id: str, label: str, item_type: ItemType, code: str | None = None) -> NodeItem:
    """Create an item with a known id, resolving its label through the catalog.

    Labels the catalog does not know keep their raw ``code``; that text is
    decoded into an instruction variant when it spells out a known line.
    """
    definition = catalog.resolve(label)
    if definition is not None:
        instruction = definition.instruction(catalog.extract_parameters(label))
        return NodeItem(id=item_id, label=label, type=item_type, code=instruction.render(), instruction=instruction)
    if code is None:
        raise FactoryError(f"Item '{label}' matches no catalog entry and carries no code.")
    logger.debug("item %s (%r) kept as opaque code %r", item_id, label, code)
    return NodeItem(
        id=item_id,
        label=label,
        type=item_type,
        code=code,
        instruction=normalize(RawInstruction(code)),
    )


def create_item(
    label: str,
    item_type: ItemType,
    rng: RNG,
    *,
    taken: Collection[str] = (),
    code: str | None = None,
) -> NodeItem:
    """Create a fresh item with an id unique among ``taken``."""
    return build_item(make_instance_id("item", rng, taken), label, item_type, code)
