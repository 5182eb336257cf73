"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Tuple

from divegm.core.types import Attribute, EnemyType
from divegm.domain.defs.enemy_def import DropDef


@dataclass(slots=True)
class EnemyStats:
    hp: int
    max_hp: int
    av: int
    attack: int
    radiation: int = 0


@dataclass(slots=True)
class Enemy:
    """Represents a spawned enemy on the active encounter roster."""

    kind: ClassVar[Literal["Enemy"]] = "Enemy"

    id: str
    enemy_id: str  # bestiary template id
    name: str
    type: EnemyType
    attribute: Attribute
    stats: EnemyStats
    description: str = ""
    skill_ids: Tuple[str, ...] = ()
    weight: int = 1
    drop_table: Tuple[DropDef, ...] = ()

    @property
    def is_alive(self) -> bool:
        return self.stats.hp > 0
