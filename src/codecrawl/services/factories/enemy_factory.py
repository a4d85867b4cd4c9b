"""Factory for spawning scaled battle enemies and the boss."""
from __future__ import annotations

from codecrawl.core.rng import RNG
from codecrawl.core.types import ELEMENT_TYPES
from codecrawl.data.repositories import EnemiesRepository
from codecrawl.domain.enemy_scaling import scale_enemy_stats
from codecrawl.domain.entities import Entity
from codecrawl.services.errors import FactoryError

BATTLE_ENEMY_ID = "bug"
BOSS_ENEMY_ID = "boss"


def create_battle_enemy(
    enemies_repo: EnemiesRepository,
    rng: RNG,
    *,
    battle_count: int,
    cycle_count: int,
) -> Entity:
    """Scale the regular enemy for the current counters and roll its element."""
    base = _require_enemy(enemies_repo, BATTLE_ENEMY_ID)
    enemy = scale_enemy_stats(
        base,
        enemies_repo.scaling(),
        battle_count=battle_count,
        cycle_count=cycle_count,
    )
    enemy.type = rng.choice(ELEMENT_TYPES)
    return enemy


def create_boss(enemies_repo: EnemiesRepository) -> Entity:
    """The boss ignores scaling; its stats and element are fixed."""
    base = _require_enemy(enemies_repo, BOSS_ENEMY_ID)
    if base.type is None:
        raise FactoryError("The boss definition must declare a fixed type.")
    return Entity(hp=base.hp, max_hp=base.hp, atk=base.atk, bp=base.bp, max_bp=base.bp, type=base.type)


def _require_enemy(enemies_repo: EnemiesRepository, enemy_id: str):
    try:
        return enemies_repo.get(enemy_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy '{enemy_id}' not found.") from exc
