"""Effective stat computation for characters."""
from __future__ import annotations

from dataclasses import dataclass

from divegm.domain.entities import Character, Item, Stats

BASE_CARRY_LOAD = 5
CARRY_LOAD_PER_PHY = 2
OVERLOAD_AGILITY_PENALTY = -1


@dataclass(frozen=True, slots=True)
class DerivedStats:
    """Combat-facing view of a character's stats and load."""

    stats: Stats
    av: int
    sr: int
    max_load: int
    current_load: int

    @property
    def PHY(self) -> int:
        return self.stats.PHY

    @property
    def AGI(self) -> int:
        return self.stats.AGI

    @property
    def MND(self) -> int:
        return self.stats.MND

    @property
    def SYN(self) -> int:
        return self.stats.SYN

    @property
    def is_overloaded(self) -> bool:
        return self.current_load > self.max_load

    @property
    def agility_penalty(self) -> int:
        return OVERLOAD_AGILITY_PENALTY if self.is_overloaded else 0

    def can_carry(self, extra_weight: int) -> bool:
        return self.current_load + extra_weight <= self.max_load


def effective_stats(character: Character) -> Stats:
    """Base stats plus AC-core modifiers.

    Status-effect modifiers are intentionally not applied here.
    """
    core = character.equipment.ac_core
    modifiers = core.stats.modifiers if core is not None and core.stats is not None else None
    return character.base_stats.plus(modifiers)


def max_carry_load(stats: Stats) -> int:
    return BASE_CARRY_LOAD + stats.PHY * CARRY_LOAD_PER_PHY


def inventory_load(items: list[Item]) -> int:
    return sum(item.weight for item in items)


def compute_derived_stats(character: Character) -> DerivedStats:
    stats = effective_stats(character)
    armor = character.equipment.armor
    armor_stats = armor.stats if armor is not None else None
    return DerivedStats(
        stats=stats,
        av=(armor_stats.defense or 0) if armor_stats else 0,
        sr=(armor_stats.shielding or 0) if armor_stats else 0,
        max_load=max_carry_load(stats),
        current_load=inventory_load(character.inventory),
    )
