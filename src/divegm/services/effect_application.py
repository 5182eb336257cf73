"""Commit a confirmed attack result to the entities it names."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from divegm.domain.attack_resolution import AttackResult
from divegm.domain.entities import Character, Enemy, EnemyStats, HitPoints, Item
from divegm.domain.status_effects import StatusApplication, stack_status_effect
from divegm.services.campaign_service import MAX_EROSION, CampaignService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppliedAttack:
    """What the effect application stage changed."""

    attacker_id: str
    defender_id: str
    damage: int
    erosion_damage: int
    skill_cost_paid: int = 0
    status_effect_id: str | None = None
    status_application: StatusApplication | None = None
    armor_degraded: bool = False
    defender_defeated: bool = False


def apply_attack_result(campaign: CampaignService, result: AttackResult) -> AppliedAttack | None:
    """Apply a pending result in rules order.

    Skill cost is charged to the attacker, the bound status effect lands on a
    character defender, damage and erosion are subtracted, broken armor loses
    one point and defeated enemies leave the roster. Returns None and changes
    nothing when either side can no longer be found.
    """
    state = campaign.state
    attacker = state.find_combatant(result.attacker_id)
    defender = state.find_combatant(result.defender_id)
    if attacker is None or defender is None:
        logger.debug("Pending result for %s -> %s no longer resolvable", result.attacker_id, result.defender_id)
        return None

    applied = AppliedAttack(
        attacker_id=attacker.id,
        defender_id=defender.id,
        damage=result.damage,
        erosion_damage=result.erosion_damage,
    )
    skill = campaign.registries.skills.find(result.skill_id)

    if isinstance(attacker, Character) and skill is not None and skill.cost:
        campaign.update_character(attacker.id, {"erosion": min(MAX_EROSION, attacker.erosion + skill.cost)})
        campaign.add_log("Combat", f"{attacker.name} pays {skill.cost} erosion for {skill.name}", attacker.id)
        applied.skill_cost_paid = skill.cost

    if isinstance(defender, Character) and skill is not None:
        effect = campaign.registries.status_effects.find(skill.status_effect_id)
        if effect is not None:
            effects, outcome = stack_status_effect(defender.active_status_effects, effect)
            campaign.update_character(defender.id, {"active_status_effects": effects})
            campaign.add_log("Combat", f"{defender.name} is afflicted with: {effect.name}", defender.id)
            applied.status_effect_id = effect.id
            applied.status_application = outcome

    if isinstance(defender, Character):
        _apply_to_character(campaign, defender, result, applied)
    else:
        _apply_to_enemy(campaign, defender, result, applied)
    return applied


def _apply_to_character(
    campaign: CampaignService,
    defender: Character,
    result: AttackResult,
    applied: AppliedAttack,
) -> None:
    updates: dict[str, object] = {
        "hp": HitPoints(current=max(0, defender.hp.current - result.damage), max=defender.hp.max),
        "erosion": min(MAX_EROSION, defender.erosion + result.erosion_damage),
    }
    armor = defender.equipment.armor
    if result.armor_broken and armor is not None and armor.stats is not None and armor.stats.defense:
        equipment = replace(defender.equipment, armor=_degrade_armor(armor))
        updates["equipment"] = equipment
        campaign.add_log("Combat", f"{defender.name}'s armor was damaged!", defender.id)
        applied.armor_degraded = True
    campaign.update_character(defender.id, updates)


def _apply_to_enemy(
    campaign: CampaignService,
    defender: Enemy,
    result: AttackResult,
    applied: AppliedAttack,
) -> None:
    hp = defender.stats.hp - result.damage
    av = defender.stats.av
    if result.armor_broken:
        av = max(0, av - 1)
        campaign.add_log("Combat", f"{defender.name}'s armor shattered!", defender.id)
        applied.armor_degraded = True

    if hp <= 0:
        campaign.remove_enemy(defender.id)
        campaign.add_log("Combat", f"{defender.name} was defeated!", defender.id)
        applied.defender_defeated = True
        return
    stats = EnemyStats(
        hp=hp,
        max_hp=defender.stats.max_hp,
        av=av,
        attack=defender.stats.attack,
        radiation=defender.stats.radiation,
    )
    campaign.update_enemy(defender.id, {"stats": stats})


def _degrade_armor(armor: Item) -> Item:
    assert armor.stats is not None
    defense = max(0, (armor.stats.defense or 0) - 1)
    return replace(armor, stats=replace(armor.stats, defense=defense))
