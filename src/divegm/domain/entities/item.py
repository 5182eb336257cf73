"""Item models shared by registry templates and runtime instances."""
from __future__ import annotations

from dataclasses import dataclass

from divegm.core.types import Attribute, ItemType, Rarity, WeaponCategory

from .stats import Stats


@dataclass(frozen=True, slots=True)
class ItemStats:
    """Optional combat block carried by weapons, armor and AC cores."""

    damage: int | None = None
    defense: int | None = None  # AV
    shielding: int | None = None  # SR %
    range: int | None = None
    attribute: Attribute | None = None
    weapon_category: WeaponCategory | None = None
    modifiers: Stats | None = None
    ac_skill_id: str | None = None


@dataclass(frozen=True, slots=True)
class Item:
    """Immutable item; runtime copies get a fresh id and remember their template."""

    id: str
    name: str
    type: ItemType
    weight: int
    value: int
    rarity: Rarity
    description: str = ""
    effect: str | None = None
    stats: ItemStats | None = None
    template_id: str | None = None

    @property
    def attribute(self) -> Attribute | None:
        return self.stats.attribute if self.stats else None
