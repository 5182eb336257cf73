"""Domain definition exports."""

from .enemy_def import DropDef, EnemyDef
from .node_def import DEFAULT_NODE_WEIGHT, NodeDef
from .skill_def import SkillDef
from .status_effect_def import INFINITE_DURATION, DamageOverTimeDef, StatusEffectDef

__all__ = [
    "DEFAULT_NODE_WEIGHT",
    "DamageOverTimeDef",
    "DropDef",
    "EnemyDef",
    "INFINITE_DURATION",
    "NodeDef",
    "SkillDef",
    "StatusEffectDef",
]
