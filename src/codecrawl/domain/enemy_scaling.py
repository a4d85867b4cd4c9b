"""Deterministic enemy stat scaling helpers."""
from __future__ import annotations

from codecrawl.domain.defs import EnemyDef, EnemyScalingDef
from codecrawl.domain.entities import Entity

# Battle count is the primary difficulty ruler; every completed cycle adds
# a flat penalty on top. All coefficients are non-negative so stats never
# shrink as either counter grows.


def scale_enemy_stats(
    base: EnemyDef,
    scaling: EnemyScalingDef,
    *,
    battle_count: int,
    cycle_count: int,
) -> Entity:
    battles = max(0, battle_count)
    extra_cycles = max(0, cycle_count - 1)
    hp = base.hp + scaling.hp_per_battle * battles + scaling.hp_per_cycle * extra_cycles
    atk = base.atk + scaling.atk_per_battle * battles + scaling.atk_per_cycle * extra_cycles
    bp = base.bp
    if scaling.battles_per_bp > 0:
        bp += battles // scaling.battles_per_bp
    return Entity(hp=hp, max_hp=hp, atk=atk, bp=bp, max_bp=bp, type=base.type)
