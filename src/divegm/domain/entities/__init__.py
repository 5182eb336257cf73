"""Runtime entity exports."""

from .character import MAX_LEARNED_SKILLS, ActiveStatusEffect, Character
from .enemy import Enemy, EnemyStats
from .equipment import Equipment
from .item import Item, ItemStats
from .stats import HitPoints, Stats

Combatant = Character | Enemy

__all__ = [
    "ActiveStatusEffect",
    "Character",
    "Combatant",
    "Enemy",
    "EnemyStats",
    "Equipment",
    "HitPoints",
    "Item",
    "ItemStats",
    "MAX_LEARNED_SKILLS",
    "Stats",
]
