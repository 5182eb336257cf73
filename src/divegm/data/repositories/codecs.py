"""Raw dict <-> domain object codecs shared by registries and saves."""
from __future__ import annotations

from typing import Any, Dict, Mapping

from divegm.core.types import ATTRIBUTES, STAT_NAMES
from divegm.data.errors import DataValidationError
from divegm.domain.entities import Item, ItemStats, Stats

from .base import RepositoryBase

ITEM_TYPES = {"Weapon", "Armor", "Consumable", "Material", "AC", "Misc"}
RARITIES = {"G1", "G2", "G3", "G4", "G5"}
WEAPON_CATEGORIES = {"LightBlade", "HeavyImpact", "Polearm", "Ranged", "Sprayer"}

_ITEM_FIELDS = {"name", "type", "weight", "value", "rarity", "description", "effect", "stats", "template_id", "id"}
_ITEM_STAT_FIELDS = {
    "damage",
    "defense",
    "shielding",
    "range",
    "attribute",
    "weapon_category",
    "modifiers",
    "ac_skill_id",
}

_check = RepositoryBase


def parse_stats_block(value: object, context: str) -> Stats:
    """Parse a partial PHY/AGI/MND/SYN mapping; missing keys default to 0."""
    data = _check._require_mapping(value, context)
    unknown = set(data) - set(STAT_NAMES)
    if unknown:
        raise DataValidationError(f"{context} has unknown stats: {sorted(unknown)}")
    values = {name: _check._require_int(data.get(name, 0), f"{context} {name}") for name in STAT_NAMES}
    return Stats(**values)


def dump_stats_block(stats: Stats) -> Dict[str, int]:
    return {name: stats.get(name) for name in STAT_NAMES if stats.get(name) != 0}


def parse_item_payload(item_id: str, payload: object, context: str) -> Item:
    """Parse an item template or runtime instance."""
    data = _check._require_mapping(payload, context)
    _check._assert_required(data, {"name", "type", "weight", "value", "rarity"}, context)
    unknown = set(data) - _ITEM_FIELDS
    if unknown:
        raise DataValidationError(f"{context} has unknown fields: {sorted(unknown)}")

    stats_payload = data.get("stats")
    stats = _parse_item_stats(stats_payload, f"{context} stats") if stats_payload is not None else None
    template_id = data.get("template_id", item_id)
    return Item(
        id=item_id,
        name=_check._require_str(data["name"], f"{context} name"),
        type=_check._require_literal(data["type"], ITEM_TYPES, f"{context} type"),
        weight=_check._require_int(data["weight"], f"{context} weight"),
        value=_check._require_int(data["value"], f"{context} value"),
        rarity=_check._require_literal(data["rarity"], RARITIES, f"{context} rarity"),
        description=_check._require_str(data.get("description", ""), f"{context} description"),
        effect=_optional(data.get("effect"), f"{context} effect"),
        stats=stats,
        template_id=_optional(template_id, f"{context} template_id"),
    )


def _parse_item_stats(value: object, context: str) -> ItemStats:
    data = _check._require_mapping(value, context)
    unknown = set(data) - _ITEM_STAT_FIELDS
    if unknown:
        raise DataValidationError(f"{context} has unknown fields: {sorted(unknown)}")

    def opt_int(key: str) -> int | None:
        raw = data.get(key)
        return None if raw is None else _check._require_int(raw, f"{context} {key}")

    attribute = data.get("attribute")
    category = data.get("weapon_category")
    modifiers = data.get("modifiers")
    return ItemStats(
        damage=opt_int("damage"),
        defense=opt_int("defense"),
        shielding=opt_int("shielding"),
        range=opt_int("range"),
        attribute=None if attribute is None else _check._require_literal(attribute, ATTRIBUTES, f"{context} attribute"),
        weapon_category=(
            None
            if category is None
            else _check._require_literal(category, WEAPON_CATEGORIES, f"{context} weapon_category")
        ),
        modifiers=None if modifiers is None else parse_stats_block(modifiers, f"{context} modifiers"),
        ac_skill_id=_optional(data.get("ac_skill_id"), f"{context} ac_skill_id"),
    )


def dump_item(item: Item, *, include_id: bool = False) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    if include_id:
        payload["id"] = item.id
    payload.update(
        {
            "name": item.name,
            "type": item.type,
            "weight": item.weight,
            "value": item.value,
            "rarity": item.rarity,
            "description": item.description,
        }
    )
    if item.effect is not None:
        payload["effect"] = item.effect
    if item.stats is not None:
        payload["stats"] = _dump_item_stats(item.stats)
    if include_id:
        payload["template_id"] = item.template_id
    elif item.template_id is not None and item.template_id != item.id:
        payload["template_id"] = item.template_id
    return payload


def _dump_item_stats(stats: ItemStats) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for key in ("damage", "defense", "shielding", "range", "attribute", "weapon_category", "ac_skill_id"):
        value = getattr(stats, key)
        if value is not None:
            payload[key] = value
    if stats.modifiers is not None:
        payload["modifiers"] = dump_stats_block(stats.modifiers)
    return payload


def parse_instance(payload: Mapping[str, object], context: str) -> Item:
    """Parse a runtime item that carries its own `id` field."""
    data = _check._require_mapping(payload, context)
    item_id = _check._require_str(data.get("id"), f"{context} id")
    return parse_item_payload(item_id, data, context)


def _optional(value: object, context: str) -> str | None:
    if value is None:
        return None
    return _check._require_str(value, context)
