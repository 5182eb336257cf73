"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from divegm.core.types import Attribute, EnemyType


@dataclass(slots=True)
class DropDef:
    item_id: str
    chance: float  # 0-1


@dataclass(slots=True)
class EnemyDef:
    """Bestiary template used to spawn encounter enemies."""

    id: str
    name: str
    type: EnemyType
    attribute: Attribute
    hp: int
    max_hp: int
    av: int
    attack: int
    radiation: int
    description: str = ""
    skill_ids: Tuple[str, ...] = ()
    weight: int = 1
    drop_table: Tuple[DropDef, ...] = ()
