"""Skills repository."""
from __future__ import annotations

from typing import Dict

from divegm.data.errors import DataValidationError
from divegm.data.repositories.base import RepositoryBase
from divegm.domain.defs import SkillDef

VALID_SKILL_TYPES = {"Damage", "Effect"}


class SkillsRepository(RepositoryBase[SkillDef]):
    """Loads learnable skills."""

    def __init__(self, base_path=None) -> None:
        super().__init__("skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillDef]:
        skills: Dict[str, SkillDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Skill IDs must be strings.")
            context = f"skill '{raw_id}'"
            skill_data = self._require_mapping(payload, context)
            self._assert_required(skill_data, {"name", "type", "cost"}, context)
            skills[raw_id] = SkillDef(
                id=raw_id,
                name=self._require_str(skill_data["name"], f"{context} name"),
                type=self._require_literal(skill_data["type"], VALID_SKILL_TYPES, f"{context} type"),
                cost=self._require_int(skill_data["cost"], f"{context} cost"),
                description=self._require_str(skill_data.get("description", ""), f"{context} description"),
                cooldown=self._require_int(skill_data.get("cooldown", 0), f"{context} cooldown"),
                formula=self._optional_str(skill_data.get("formula"), f"{context} formula"),
                status_effect_id=self._optional_str(
                    skill_data.get("status_effect_id"), f"{context} status_effect_id"
                ),
            )
        return skills

    def _dump(self, definition: SkillDef) -> dict[str, object]:
        payload: dict[str, object] = {
            "name": definition.name,
            "type": definition.type,
            "cost": definition.cost,
            "description": definition.description,
            "cooldown": definition.cooldown,
        }
        if definition.formula is not None:
            payload["formula"] = definition.formula
        if definition.status_effect_id is not None:
            payload["status_effect_id"] = definition.status_effect_id
        return payload
