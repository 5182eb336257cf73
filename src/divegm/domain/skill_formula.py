"""Skill damage formula mini-language.

Grammar::

    formula := term ("+" term)*
    term    := dice | stat | integer | other

``dice`` is any term containing ``d`` (``1d10``); it only marks the formula as
dice-driven, the pool itself comes from stats. ``stat`` is one of PHY, AGI,
MND or SYN and adds the caster's effective value to flat damage while raising
the pool to at least that value. ``integer`` is a leading signed integer and
adds to flat damage. Anything else is ignored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal

from divegm.core.types import STAT_NAMES
from divegm.domain.defs import SkillDef
from divegm.domain.entities import Stats

TermKind = Literal["dice", "stat", "integer", "other"]

_TERM_SEPARATOR = "+"
_DICE_MARKER = "d"
_INTEGER_PREFIX = re.compile(r"^[+-]?\d+")


@dataclass(frozen=True, slots=True)
class FormulaTerm:
    kind: TermKind
    text: str
    value: int = 0


@dataclass(frozen=True, slots=True)
class SkillRollProfile:
    """Dice pool size and flat damage produced by a skill."""

    dice_pool: int
    flat_damage: int
    has_dice_term: bool = False


def parse_formula(formula: str) -> List[FormulaTerm]:
    """Split a formula into classified terms without evaluating stats."""
    return [_classify(raw.strip()) for raw in formula.split(_TERM_SEPARATOR)]


def _classify(text: str) -> FormulaTerm:
    if _DICE_MARKER in text:
        return FormulaTerm(kind="dice", text=text)
    if text in STAT_NAMES:
        return FormulaTerm(kind="stat", text=text)
    match = _INTEGER_PREFIX.match(text)
    if match:
        return FormulaTerm(kind="integer", text=text, value=int(match.group(0)))
    return FormulaTerm(kind="other", text=text)


def evaluate_formula(formula: str, stats: Stats) -> SkillRollProfile:
    dice_pool = 0
    flat_damage = 0
    saw_stat = False
    has_dice_term = False
    for term in parse_formula(formula):
        if term.kind == "dice":
            has_dice_term = True
        elif term.kind == "stat":
            stat_value = stats.get(term.text)
            flat_damage += stat_value
            dice_pool = max(dice_pool, stat_value)
            saw_stat = True
        elif term.kind == "integer":
            flat_damage += term.value
    if not saw_stat:
        dice_pool = stats.SYN
    return SkillRollProfile(dice_pool=dice_pool, flat_damage=flat_damage, has_dice_term=has_dice_term)


def resolve_skill_profile(skill: SkillDef, stats: Stats) -> SkillRollProfile:
    """Return the roll profile for a skill cast with the given effective stats."""
    if skill.type == "Effect":
        return SkillRollProfile(dice_pool=stats.SYN, flat_damage=0)
    return evaluate_formula(skill.formula or "", stats)
