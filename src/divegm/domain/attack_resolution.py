"""Pure attack resolution: profiles, advantage, dice, damage and erosion.

Nothing in this module mutates an entity. The resolver produces an
AttackResolution whose `result` is the pending payload later committed by the
effect application stage.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from divegm.core.rng import RNG
from divegm.core.types import Attribute
from divegm.domain.attributes import advantage_multiplier, beats
from divegm.domain.defs import SkillDef
from divegm.domain.derived_stats import compute_derived_stats
from divegm.domain.dice import DiceRoll, roll_pool
from divegm.domain.entities import Combatant, Enemy
from divegm.domain.skill_formula import resolve_skill_profile

EROSION_THRESHOLD = 50
BERSERK_BONUS = 0.2
CRITICAL_MULTIPLIER = 2
ARMOR_BREAK_FACTOR = 3
HEAVY_IMPACT_PENETRATION = 2
LIGHT_BLADE_POOL_BONUS = 1
MIN_HIT_DAMAGE = 1

Advantage = Literal["advantage", "disadvantage", "neutral"]


@dataclass(frozen=True, slots=True)
class AttackProfile:
    """Everything the attacker contributes to a single attack."""

    attribute: Attribute
    dice_pool: int
    flat_damage: int
    armor_penetration: int = 0
    radiation: int = 0
    berserk: bool = False


@dataclass(frozen=True, slots=True)
class DefenseProfile:
    """Everything the defender contributes to a single attack."""

    attribute: Attribute
    av: int
    sr: int = 0
    erosion: int = 0
    takes_erosion: bool = False


@dataclass(frozen=True, slots=True)
class AttackResult:
    """Pending outcome awaiting operator confirmation."""

    attacker_id: str
    defender_id: str
    damage: int
    erosion_damage: int
    armor_broken: bool
    skill_id: str | None = None


@dataclass(frozen=True, slots=True)
class AttackResolution:
    """Pending result plus the intermediate values used for the combat report."""

    result: AttackResult
    attacker_name: str
    defender_name: str
    skill_name: str | None
    attack: AttackProfile
    defense: DefenseProfile
    effective_av: int
    multiplier: float
    advantage: Advantage
    roll: DiceRoll
    raw_damage: float

    @property
    def successes(self) -> int:
        return self.roll.successes

    @property
    def is_critical(self) -> bool:
        return self.roll.is_critical


def build_attack_profile(attacker: Combatant, skill: SkillDef | None = None) -> AttackProfile:
    """Extract the attack side of a roll; enemies ignore `skill`."""
    if isinstance(attacker, Enemy):
        return AttackProfile(
            attribute=attacker.attribute,
            dice_pool=attacker.stats.attack,
            flat_damage=attacker.stats.attack,
            radiation=attacker.stats.radiation,
        )

    derived = compute_derived_stats(attacker)
    berserk = attacker.erosion > EROSION_THRESHOLD
    if skill is not None:
        profile = resolve_skill_profile(skill, derived.stats)
        return AttackProfile(
            attribute=attacker.attribute,
            dice_pool=profile.dice_pool,
            flat_damage=profile.flat_damage,
            berserk=berserk,
        )

    weapon = attacker.equipment.weapon
    weapon_stats = weapon.stats if weapon is not None else None
    dice_pool = max(1, derived.PHY + derived.AGI + derived.agility_penalty)
    flat_damage = derived.PHY + ((weapon_stats.damage or 0) if weapon_stats else 0)
    penetration = 0
    category = weapon_stats.weapon_category if weapon_stats else None
    if category == "HeavyImpact":
        penetration = HEAVY_IMPACT_PENETRATION
    elif category == "LightBlade":
        dice_pool += LIGHT_BLADE_POOL_BONUS
    attribute = (weapon_stats.attribute if weapon_stats else None) or attacker.attribute
    return AttackProfile(
        attribute=attribute,
        dice_pool=dice_pool,
        flat_damage=flat_damage,
        armor_penetration=penetration,
        berserk=berserk,
    )


def build_defense_profile(defender: Combatant) -> DefenseProfile:
    if isinstance(defender, Enemy):
        return DefenseProfile(attribute=defender.attribute, av=defender.stats.av)
    derived = compute_derived_stats(defender)
    return DefenseProfile(
        attribute=defender.attribute,
        av=derived.av,
        sr=derived.sr,
        erosion=defender.erosion,
        takes_erosion=True,
    )


def compute_multiplier(attack: AttackProfile, defense: DefenseProfile) -> tuple[float, Advantage]:
    multiplier = advantage_multiplier(attack.attribute, defense.attribute)
    if beats(attack.attribute, defense.attribute):
        advantage: Advantage = "advantage"
    elif beats(defense.attribute, attack.attribute):
        advantage = "disadvantage"
    else:
        advantage = "neutral"
    if attack.berserk:
        multiplier += BERSERK_BONUS
    return multiplier, advantage


def compute_damage(
    *,
    flat_damage: int,
    roll: DiceRoll,
    multiplier: float,
    defender_av: int,
    effective_av: int,
) -> tuple[float, int, bool]:
    """Return (raw damage, final damage, armor broken)."""
    if roll.successes == 0:
        return 0.0, 0, False
    raw_damage = (flat_damage + roll.successes) * multiplier
    if roll.is_critical:
        raw_damage *= CRITICAL_MULTIPLIER
    if defender_av > 0 and raw_damage > ARMOR_BREAK_FACTOR * defender_av:
        return raw_damage, math.floor(raw_damage), True
    return raw_damage, max(MIN_HIT_DAMAGE, math.floor(raw_damage - effective_av)), False


def compute_erosion_damage(radiation: int, defense: DefenseProfile) -> int:
    if not defense.takes_erosion:
        return 0
    shield_factor = min(1.0, max(0.0, defense.sr / 100))
    erosion_damage = math.floor(radiation * (1 - shield_factor))
    if defense.erosion > EROSION_THRESHOLD:
        erosion_damage *= 2
    return erosion_damage


def resolve_attack(
    attacker: Combatant,
    defender: Combatant,
    rng: RNG,
    skill: SkillDef | None = None,
) -> AttackResolution:
    """Run the full attack pipeline; only `rng` is advanced."""
    if isinstance(attacker, Enemy):
        skill = None
    attack = build_attack_profile(attacker, skill)
    defense = build_defense_profile(defender)
    effective_av = max(0, defense.av - attack.armor_penetration)
    multiplier, advantage = compute_multiplier(attack, defense)
    roll = roll_pool(rng, attack.dice_pool)
    raw_damage, damage, armor_broken = compute_damage(
        flat_damage=attack.flat_damage,
        roll=roll,
        multiplier=multiplier,
        defender_av=defense.av,
        effective_av=effective_av,
    )
    erosion_damage = compute_erosion_damage(attack.radiation, defense)
    result = AttackResult(
        attacker_id=attacker.id,
        defender_id=defender.id,
        damage=damage,
        erosion_damage=erosion_damage,
        armor_broken=armor_broken,
        skill_id=skill.id if skill is not None else None,
    )
    return AttackResolution(
        result=result,
        attacker_name=attacker.name,
        defender_name=defender.name,
        skill_name=skill.name if skill is not None else None,
        attack=attack,
        defense=defense,
        effective_av=effective_av,
        multiplier=multiplier,
        advantage=advantage,
        roll=roll,
        raw_damage=raw_damage,
    )
