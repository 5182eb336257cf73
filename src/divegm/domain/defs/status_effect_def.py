"""Status effect definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from divegm.core.types import DotTarget, DotTrigger, EffectPolarity
from divegm.domain.entities.stats import Stats

INFINITE_DURATION = -1


@dataclass(slots=True)
class DamageOverTimeDef:
    target: DotTarget
    value: int  # negative values heal or reduce
    trigger: DotTrigger


@dataclass(slots=True)
class StatusEffectDef:
    """Buff or debuff that can be stacked onto a character."""

    id: str
    name: str
    type: EffectPolarity
    duration: int  # rounds, INFINITE_DURATION for no expiry
    max_stacks: int
    description: str = ""
    modifiers: Stats | None = None
    damage_over_time: DamageOverTimeDef | None = None

    @property
    def is_infinite(self) -> bool:
        return self.duration == INFINITE_DURATION
