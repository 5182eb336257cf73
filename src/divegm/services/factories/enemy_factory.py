"""Factory for creating enemy instances from definitions."""
from __future__ import annotations

from divegm.core.rng import RNG
from divegm.data.repositories import EnemiesRepository
from divegm.domain.entities import Enemy, EnemyStats
from divegm.services.errors import FactoryError

from .id_factory import make_instance_id


def create_enemy_instance(
    enemy_id: str,
    enemies_repo: EnemiesRepository,
    rng: RNG,
) -> Enemy:
    """Instantiate an enemy using the provided repository."""
    try:
        enemy_def = enemies_repo.get(enemy_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy '{enemy_id}' not found.") from exc

    stats = EnemyStats(
        hp=enemy_def.hp,
        max_hp=enemy_def.max_hp,
        av=enemy_def.av,
        attack=enemy_def.attack,
        radiation=enemy_def.radiation,
    )
    return Enemy(
        id=make_instance_id("enemy", rng),
        enemy_id=enemy_def.id,
        name=enemy_def.name,
        type=enemy_def.type,
        attribute=enemy_def.attribute,
        stats=stats,
        description=enemy_def.description,
        skill_ids=enemy_def.skill_ids,
        weight=enemy_def.weight,
        drop_table=enemy_def.drop_table,
    )
