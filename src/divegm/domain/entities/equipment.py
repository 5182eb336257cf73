"""Equipment runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from divegm.core.types import EquipmentSlot

from .item import Item


@dataclass(slots=True)
class Equipment:
    """The three equipment slots of a character."""

    weapon: Item | None = None
    armor: Item | None = None
    ac_core: Item | None = None

    def get(self, slot: EquipmentSlot) -> Item | None:
        return getattr(self, slot)

    def set(self, slot: EquipmentSlot, item: Item | None) -> None:
        setattr(self, slot, item)
