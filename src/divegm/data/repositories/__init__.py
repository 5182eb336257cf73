"""Repository exports."""

from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository
from .nodes_repo import NodesRepository
from .skills_repo import SkillsRepository
from .status_effects_repo import StatusEffectsRepository

__all__ = [
    "EnemiesRepository",
    "ItemsRepository",
    "NodesRepository",
    "SkillsRepository",
    "StatusEffectsRepository",
]
