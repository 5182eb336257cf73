"""Attribute advantage cycle."""
from __future__ import annotations

from typing import Dict

from divegm.core.types import Attribute

# Each attribute beats the one it maps to.
BEATS: Dict[Attribute, Attribute] = {
    "Sever": "Stable",
    "Stable": "Flux",
    "Flux": "Precision",
    "Precision": "Sever",
}

ADVANTAGE_MULTIPLIER = 1.5
DISADVANTAGE_MULTIPLIER = 0.5
NEUTRAL_MULTIPLIER = 1.0


def beats(attacker: Attribute, defender: Attribute) -> bool:
    return BEATS[attacker] == defender


def advantage_multiplier(attacker: Attribute, defender: Attribute) -> float:
    """Return the damage multiplier for attacker vs defender attributes."""
    if beats(attacker, defender):
        return ADVANTAGE_MULTIPLIER
    if beats(defender, attacker):
        return DISADVANTAGE_MULTIPLIER
    return NEUTRAL_MULTIPLIER
