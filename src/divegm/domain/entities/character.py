"""Player character models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Literal

from divegm.core.types import Attribute, CharacterLifecycle

from .equipment import Equipment
from .item import Item
from .stats import HitPoints, Stats

MAX_LEARNED_SKILLS = 5
DEFAULT_ATTRIBUTE: Attribute = "Sever"


@dataclass(slots=True)
class ActiveStatusEffect:
    """A status effect currently applied to a character."""

    effect_id: str
    stacks: int
    duration_left: int


@dataclass(slots=True)
class Character:
    """A squad member tracked by the game master."""

    kind: ClassVar[Literal["Character"]] = "Character"

    id: str
    name: str
    origin: str
    base_stats: Stats
    hp: HitPoints
    erosion: int = 0
    inventory: List[Item] = field(default_factory=list)
    equipment: Equipment = field(default_factory=Equipment)
    credits: int = 0
    battery: int = 100
    state: CharacterLifecycle = "Idle"
    active_status_effects: List[ActiveStatusEffect] = field(default_factory=list)
    learned_skills: List[str] = field(default_factory=list)

    @property
    def attribute(self) -> Attribute:
        """Combat attribute granted by the AC core, Sever without one."""
        core = self.equipment.ac_core
        if core is not None and core.attribute:
            return core.attribute
        return DEFAULT_ATTRIBUTE

    def find_status(self, effect_id: str) -> ActiveStatusEffect | None:
        for status in self.active_status_effects:
            if status.effect_id == effect_id:
                return status
        return None
