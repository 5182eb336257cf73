"""Shared type aliases for the core and domain layers."""
from typing import Literal

Attribute = Literal["Sever", "Stable", "Flux", "Precision"]
StatName = Literal["PHY", "AGI", "MND", "SYN"]
ItemType = Literal["Weapon", "Armor", "Consumable", "Material", "AC", "Misc"]
Rarity = Literal["G1", "G2", "G3", "G4", "G5"]
WeaponCategory = Literal["LightBlade", "HeavyImpact", "Polearm", "Ranged", "Sprayer"]
EquipmentSlot = Literal["weapon", "armor", "ac_core"]
CharacterLifecycle = Literal["Idle", "Exploring", "Combat", "Dead"]
EnemyType = Literal["Monster", "Human"]
SkillType = Literal["Damage", "Effect"]
EffectPolarity = Literal["Buff", "Debuff"]
DotTarget = Literal["HP", "Erosion"]
DotTrigger = Literal["StartTurn", "EndTurn"]
LogCategory = Literal["Combat", "Event", "System", "Loot"]
Layer = Literal["Shallows", "RedForest", "DeepSky"]
NodeType = Literal["Combat", "Resource", "Event", "Safe"]
Language = Literal["en", "zh"]

ATTRIBUTES: tuple[Attribute, ...] = ("Sever", "Stable", "Flux", "Precision")
STAT_NAMES: tuple[StatName, ...] = ("PHY", "AGI", "MND", "SYN")
EQUIPMENT_SLOTS: tuple[EquipmentSlot, ...] = ("weapon", "armor", "ac_core")
LOG_CATEGORIES: tuple[LogCategory, ...] = ("Combat", "Event", "System", "Loot")
LAYERS: tuple[Layer, ...] = ("Shallows", "RedForest", "DeepSky")
NODE_TYPES: tuple[NodeType, ...] = ("Combat", "Resource", "Event", "Safe")

__all__ = [
    "ATTRIBUTES",
    "Attribute",
    "CharacterLifecycle",
    "DotTarget",
    "DotTrigger",
    "EQUIPMENT_SLOTS",
    "EffectPolarity",
    "EnemyType",
    "EquipmentSlot",
    "ItemType",
    "LAYERS",
    "LOG_CATEGORIES",
    "Language",
    "Layer",
    "LogCategory",
    "NODE_TYPES",
    "NodeType",
    "Rarity",
    "STAT_NAMES",
    "SkillType",
    "StatName",
    "WeaponCategory",
]
