"""Skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from divegm.core.types import SkillType


@dataclass(slots=True)
class SkillDef:
    """Describes a learnable combat skill."""

    id: str
    name: str
    type: SkillType
    cost: int  # erosion paid by the caster
    description: str = ""
    cooldown: int = 0
    formula: str | None = None  # e.g. "1d10 + SYN"
    status_effect_id: str | None = None
