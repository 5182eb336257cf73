"""Factory for creating squad members."""
from __future__ import annotations

from divegm.core.rng import RNG
from divegm.domain.entities import Character, HitPoints, Stats

from .id_factory import make_instance_id

HP_PER_PHY = 2


def create_character(name: str, origin: str, base_stats: Stats, rng: RNG) -> Character:
    """Create a fresh character; max HP starts at PHY x 2."""
    max_hp = base_stats.PHY * HP_PER_PHY
    return Character(
        id=make_instance_id("char", rng),
        name=name,
        origin=origin,
        base_stats=base_stats,
        hp=HitPoints(current=max_hp, max=max_hp),
    )
