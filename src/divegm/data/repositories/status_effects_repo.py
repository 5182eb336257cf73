"""Status effects repository."""
from __future__ import annotations

from typing import Dict

from divegm.data.errors import DataValidationError
from divegm.data.repositories.base import RepositoryBase
from divegm.data.repositories.codecs import dump_stats_block, parse_stats_block
from divegm.domain.defs import DamageOverTimeDef, StatusEffectDef

VALID_POLARITIES = {"Buff", "Debuff"}
VALID_DOT_TARGETS = {"HP", "Erosion"}
VALID_DOT_TRIGGERS = {"StartTurn", "EndTurn"}


class StatusEffectsRepository(RepositoryBase[StatusEffectDef]):
    """Loads buffs and debuffs that skills can bind."""

    def __init__(self, base_path=None) -> None:
        super().__init__("status_effects.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, StatusEffectDef]:
        effects: Dict[str, StatusEffectDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Status effect IDs must be strings.")
            context = f"status effect '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "type", "duration", "max_stacks"}, context)

            duration = self._require_int(data["duration"], f"{context} duration")
            if duration < -1:
                raise DataValidationError(f"{context} duration must be -1 or non-negative.")
            max_stacks = self._require_int(data["max_stacks"], f"{context} max_stacks")
            if max_stacks < 1:
                raise DataValidationError(f"{context} max_stacks must be at least 1.")

            modifiers = data.get("modifiers")
            effects[raw_id] = StatusEffectDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                type=self._require_literal(data["type"], VALID_POLARITIES, f"{context} type"),
                duration=duration,
                max_stacks=max_stacks,
                description=self._require_str(data.get("description", ""), f"{context} description"),
                modifiers=None if modifiers is None else parse_stats_block(modifiers, f"{context} modifiers"),
                damage_over_time=self._parse_dot(data.get("damage_over_time"), context),
            )
        return effects

    def _parse_dot(self, value: object, context: str) -> DamageOverTimeDef | None:
        if value is None:
            return None
        dot_context = f"{context} damage_over_time"
        data = self._require_mapping(value, dot_context)
        self._assert_required(data, {"target", "value", "trigger"}, dot_context)
        return DamageOverTimeDef(
            target=self._require_literal(data["target"], VALID_DOT_TARGETS, f"{dot_context} target"),
            value=self._require_int(data["value"], f"{dot_context} value"),
            trigger=self._require_literal(data["trigger"], VALID_DOT_TRIGGERS, f"{dot_context} trigger"),
        )

    def _dump(self, definition: StatusEffectDef) -> dict[str, object]:
        payload: dict[str, object] = {
            "name": definition.name,
            "type": definition.type,
            "duration": definition.duration,
            "max_stacks": definition.max_stacks,
            "description": definition.description,
        }
        if definition.modifiers is not None:
            payload["modifiers"] = dump_stats_block(definition.modifiers)
        dot = definition.damage_over_time
        if dot is not None:
            payload["damage_over_time"] = {"target": dot.target, "value": dot.value, "trigger": dot.trigger}
        return payload
