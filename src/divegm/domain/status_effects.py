"""Status effect stacking and round ticking helpers."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, List, Literal, Optional, Sequence, Tuple

from divegm.domain.defs import StatusEffectDef
from divegm.domain.entities import ActiveStatusEffect

StatusApplication = Literal["applied", "stacked", "refreshed"]
EffectLookup = Callable[[str], Optional[StatusEffectDef]]


def stack_status_effect(
    effects: Sequence[ActiveStatusEffect],
    effect: StatusEffectDef,
) -> Tuple[List[ActiveStatusEffect], StatusApplication]:
    """
    Return a new effect list with `effect` applied once.

    An existing instance gains a stack (up to max_stacks) and has its duration
    refreshed; at max stacks only the duration is refreshed. Otherwise a new
    instance with one stack is appended.
    """

    updated = [replace(existing) for existing in effects]
    for existing in updated:
        if existing.effect_id != effect.id:
            continue
        existing.duration_left = effect.duration
        if existing.stacks < effect.max_stacks:
            existing.stacks += 1
            return updated, "stacked"
        return updated, "refreshed"
    updated.append(ActiveStatusEffect(effect_id=effect.id, stacks=1, duration_left=effect.duration))
    return updated, "applied"


@dataclass(slots=True)
class StatusTick:
    """Resource deltas and expirations produced by one round boundary."""

    hp_delta: int = 0
    erosion_delta: int = 0
    expired: List[str] = field(default_factory=list)

    @property
    def had_effect(self) -> bool:
        return bool(self.hp_delta or self.erosion_delta or self.expired)


def tick_status_effects(
    effects: Sequence[ActiveStatusEffect],
    lookup: EffectLookup,
) -> Tuple[List[ActiveStatusEffect], StatusTick]:
    """Advance every effect across one round boundary.

    EndTurn damage-over-time fires first, durations then count down and
    expired effects drop off, and StartTurn damage-over-time fires for the
    survivors. Instances whose definition is unknown are kept untouched.
    """

    tick = StatusTick()
    remaining: List[ActiveStatusEffect] = []
    survivors: List[tuple[ActiveStatusEffect, StatusEffectDef]] = []

    for existing in effects:
        definition = lookup(existing.effect_id)
        if definition is None:
            remaining.append(replace(existing))
            continue
        _fire(tick, existing, definition, "EndTurn")
        current = replace(existing)
        if not definition.is_infinite:
            current.duration_left -= 1
            if current.duration_left <= 0:
                tick.expired.append(current.effect_id)
                continue
        remaining.append(current)
        survivors.append((current, definition))

    for current, definition in survivors:
        _fire(tick, current, definition, "StartTurn")
    return remaining, tick


def _fire(tick: StatusTick, instance: ActiveStatusEffect, definition: StatusEffectDef, trigger: str) -> None:
    dot = definition.damage_over_time
    if dot is None or dot.trigger != trigger:
        return
    amount = dot.value * instance.stacks
    if dot.target == "HP":
        tick.hp_delta -= amount
    else:
        tick.erosion_delta += amount
