"""Combat table orchestration: roster, two-phase attacks and rounds."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from divegm.domain.attack_resolution import AttackResolution, AttackResult, resolve_attack
from divegm.domain.combat_report import format_attack_report
from divegm.domain.entities import Enemy, HitPoints
from divegm.domain.status_effects import StatusTick, tick_status_effects
from divegm.services.campaign_service import MAX_EROSION, CampaignService
from divegm.services.effect_application import AppliedAttack, apply_attack_result
from divegm.services.factories import create_enemy_instance

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoundAdvancedEvent:
    round: int
    ticks: Dict[str, StatusTick] = field(default_factory=dict)


class CombatService:
    """Runs the Idle -> Calculated -> Applied attack cycle on the active encounter."""

    def __init__(self, campaign: CampaignService) -> None:
        self._campaign = campaign

    @property
    def enemies(self) -> List[Enemy]:
        return list(self._campaign.state.encounter.enemies)

    @property
    def round(self) -> int:
        return self._campaign.state.encounter.round

    @property
    def pending_result(self) -> AttackResult | None:
        return self._campaign.state.encounter.pending_result

    @property
    def report(self) -> List[str]:
        """Combat report blocks, newest first."""
        return list(self._campaign.state.encounter.report)

    # ---------------------------------------------------------------- Roster
    def spawn_enemy(self, enemy_id: str) -> Enemy | None:
        """Add a fresh instance of a bestiary template to the roster."""
        campaign = self._campaign
        if campaign.registries.enemies.find(enemy_id) is None:
            logger.warning("Unknown enemy template %s", enemy_id)
            return None
        enemy = create_enemy_instance(enemy_id, campaign.registries.enemies, campaign.rng)
        campaign.add_enemy(enemy)
        campaign.add_log("Combat", f"Enemy spawned: {enemy.name}", enemy.id)
        return enemy

    def remove_enemy(self, enemy_id: str) -> bool:
        return self._campaign.remove_enemy(enemy_id)

    # ---------------------------------------------------------- Attack cycle
    def calculate_attack(
        self,
        attacker_id: str,
        defender_id: str,
        skill_id: str | None = None,
    ) -> AttackResolution | None:
        """Roll an attack and hold its outcome as the pending result.

        A new calculation replaces any earlier pending result. Unknown skills
        fall back to a weapon attack.
        """
        campaign = self._campaign
        state = campaign.state
        attacker = state.find_combatant(attacker_id)
        defender = state.find_combatant(defender_id)
        if attacker is None or defender is None:
            logger.debug("Attack %s -> %s skipped: combatant missing", attacker_id, defender_id)
            return None

        skill = campaign.registries.skills.find(skill_id)
        resolution = resolve_attack(attacker, defender, campaign.rng, skill)
        encounter = state.encounter
        encounter.pending_result = resolution.result
        encounter.report.insert(0, format_attack_report(resolution))
        campaign.add_log(
            "Combat",
            f"{attacker.name} deals {resolution.result.damage} damage to {defender.name}",
            attacker.id,
        )
        return resolution

    def apply_pending(self) -> AppliedAttack | None:
        """Commit the pending result; it stays pending when nothing could be applied."""
        encounter = self._campaign.state.encounter
        if encounter.pending_result is None:
            return None
        applied = apply_attack_result(self._campaign, encounter.pending_result)
        if applied is not None:
            encounter.pending_result = None
        return applied

    def clear_selection(self) -> None:
        self._campaign.state.encounter.pending_result = None

    # ---------------------------------------------------------------- Rounds
    def next_round(self) -> RoundAdvancedEvent:
        """Advance the round counter and tick every character's status effects."""
        campaign = self._campaign
        encounter = campaign.state.encounter
        encounter.round += 1
        campaign.add_log("Combat", f"--- Round {encounter.round} Started ---")

        event = RoundAdvancedEvent(round=encounter.round)
        lookup = campaign.registries.status_effects.find
        for character in list(campaign.state.characters):
            if not character.active_status_effects:
                continue
            remaining, tick = tick_status_effects(character.active_status_effects, lookup)
            hp = min(character.hp.max, max(0, character.hp.current + tick.hp_delta))
            erosion = min(MAX_EROSION, max(0, character.erosion + tick.erosion_delta))
            campaign.update_character(
                character.id,
                {
                    "active_status_effects": remaining,
                    "hp": HitPoints(current=hp, max=character.hp.max),
                    "erosion": erosion,
                },
            )
            if tick.had_effect:
                event.ticks[character.id] = tick
            for effect_id in tick.expired:
                effect = campaign.registries.status_effects.find(effect_id)
                name = effect.name if effect is not None else effect_id
                campaign.add_log("Combat", f"{name} wore off {character.name}", character.id)
        return event
