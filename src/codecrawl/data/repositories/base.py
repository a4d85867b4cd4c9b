"""Base repository implementation for JSON definition data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, List, TypeVar

from codecrawl.core.types import ELEMENT_TYPES, ITEM_TYPES, ElementType, ItemType
from codecrawl.data.errors import DataReferenceError, DataValidationError
from codecrawl.data.json_loader import load_json
from codecrawl.data import paths
from codecrawl.domain import catalog
from codecrawl.domain.defs import LoadoutItemDef, RewardCandidateDef

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        file_path = self._get_file_path()
        raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is None:
            raw = self._load_raw()
            self._definitions = self._build(raw)

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        try:
            return self._definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[key] for key in sorted(self._definitions.keys())]

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_list(value: object, context: str) -> list[object]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_non_negative_int(value: object, context: str) -> int:
        number = RepositoryBase._require_int(value, context)
        if number < 0:
            raise DataValidationError(f"{context} must be zero or greater.")
        return number

    @staticmethod
    def _require_float(value: object, context: str) -> float:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise DataValidationError(f"{context} must be a number.")
        return float(value)

    @staticmethod
    def _require_element(value: object, context: str) -> ElementType:
        if value not in ELEMENT_TYPES:
            raise DataValidationError(f"{context} must be one of {list(ELEMENT_TYPES)}.")
        return value  # type: ignore[return-value]

    @staticmethod
    def _require_item_type(value: object, context: str) -> ItemType:
        if value not in ITEM_TYPES:
            raise DataValidationError(f"{context} must be one of {list(ITEM_TYPES)}.")
        return value  # type: ignore[return-value]

    def _require_item_entries(self, value: object, context: str) -> List[tuple[str, ItemType]]:
        """Parse a list of ``{label, type}`` objects whose labels resolve in the catalog."""
        entries: List[tuple[str, ItemType]] = []
        for index, entry in enumerate(self._require_list(value, context)):
            entry_ctx = f"{context}[{index}]"
            entry_map = self._require_mapping(entry, entry_ctx)
            label = self._require_str(entry_map.get("label"), f"{entry_ctx}.label")
            item_type = self._require_item_type(entry_map.get("type"), f"{entry_ctx}.type")
            if catalog.resolve(label) is None:
                raise DataReferenceError(f"{entry_ctx}.label '{label}' matches no catalog item.")
            entries.append((label, item_type))
        return entries

    def _require_reward_candidates(self, value: object, context: str) -> tuple[RewardCandidateDef, ...]:
        return tuple(
            RewardCandidateDef(label=label, type=item_type)
            for label, item_type in self._require_item_entries(value, context)
        )

    def _require_loadout_items(self, value: object, context: str) -> tuple[LoadoutItemDef, ...]:
        return tuple(
            LoadoutItemDef(label=label, type=item_type)
            for label, item_type in self._require_item_entries(value, context)
        )
