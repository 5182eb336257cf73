"""Human-readable narration of a calculated attack."""
from __future__ import annotations

from typing import List

from divegm.domain.attack_resolution import AttackResolution

_ADVANTAGE_TEXT = {
    "advantage": "advantage (x1.5)",
    "disadvantage": "disadvantage (x0.5)",
    "neutral": "no modifier",
}


def format_attack_report(resolution: AttackResolution) -> str:
    """Summarize attributes, dice, successes, raw/final damage and erosion."""
    attack = resolution.attack
    defense = resolution.defense
    result = resolution.result
    action = f"uses [{resolution.skill_name}] on" if resolution.skill_name else "attacks"

    advantage = _ADVANTAGE_TEXT[resolution.advantage]
    if attack.berserk:
        advantage += " + berserk (erosion > 50)"

    rolls = ", ".join(str(face) for face in resolution.roll.rolls)
    critical = " CRITICAL!" if resolution.is_critical else ""
    base_total = (attack.flat_damage + resolution.successes) * resolution.multiplier

    if result.armor_broken:
        armor_line = f"Armor: BROKEN! (ignores {defense.av} AV)"
    else:
        armor_line = (
            f"Armor: {resolution.effective_av} AV "
            f"({defense.av} base - {attack.armor_penetration} penetration)"
        )

    lines: List[str] = [
        f"[{resolution.attacker_name}] {action} [{resolution.defender_name}]",
        f"Attributes: {attack.attribute} vs {defense.attribute} ({advantage})",
        f"Roll ({attack.dice_pool}d10): [{rolls}] -> {resolution.successes} successes{critical}",
        (
            f"Damage: ({attack.flat_damage} base + {resolution.successes} hits) "
            f"* {resolution.multiplier:.1f} = {base_total:.1f} raw"
        ),
        armor_line,
        f"Result: {result.damage} HP damage",
    ]
    if defense.takes_erosion:
        doubled = " * 2 (critical erosion)" if defense.erosion > 50 else ""
        lines.append(
            f"Erosion: {attack.radiation} radiation * (1 - {defense.sr}%){doubled} "
            f"= {result.erosion_damage} erosion"
        )
    return "\n".join(lines)
