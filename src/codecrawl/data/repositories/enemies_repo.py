"""Enemies repository."""
from __future__ import annotations

from typing import Dict

from codecrawl.data.errors import DataValidationError
from codecrawl.data.repositories.base import RepositoryBase
from codecrawl.domain.defs import EnemyDef, EnemyScalingDef

_SCALING_FIELDS = ("hp_per_battle", "atk_per_battle", "battles_per_bp", "hp_per_cycle", "atk_per_cycle")


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads enemy base stats and the scaling coefficients."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)
        self._scaling: EnemyScalingDef | None = None

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies_raw = self._require_mapping(raw.get("enemies"), "enemies")
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in enemies_raw.items():
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            missing = {"name", "hp", "atk", "bp"} - set(enemy_data.keys())
            if missing:
                raise DataValidationError(f"{context} is missing fields: {sorted(missing)}")
            raw_type = enemy_data.get("type")
            hp = self._require_int(enemy_data["hp"], f"{context} hp")
            if hp <= 0:
                raise DataValidationError(f"{context} hp must be positive.")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                hp=hp,
                atk=self._require_non_negative_int(enemy_data["atk"], f"{context} atk"),
                bp=self._require_non_negative_int(enemy_data["bp"], f"{context} bp"),
                type=None if raw_type is None else self._require_element(raw_type, f"{context} type"),
            )

        scaling_raw = self._require_mapping(raw.get("scaling"), "scaling")
        values = {
            name: self._require_non_negative_int(scaling_raw.get(name), f"scaling.{name}")
            for name in _SCALING_FIELDS
        }
        self._scaling = EnemyScalingDef(**values)
        return enemies

    def scaling(self) -> EnemyScalingDef:
        """Return the growth coefficients applied per battle and per cycle."""
        self._ensure_loaded()
        assert self._scaling is not None
        return self._scaling
