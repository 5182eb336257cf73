"""Enemies repository."""
from __future__ import annotations

from typing import Dict, List

from divegm.core.types import ATTRIBUTES
from divegm.data.errors import DataValidationError
from divegm.data.repositories.base import RepositoryBase
from divegm.domain.defs import DropDef, EnemyDef

VALID_ENEMY_TYPES = {"Monster", "Human"}


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates bestiary templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Enemy IDs must be strings.")
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            required_fields = {"name", "type", "attribute", "hp", "av", "attack"}
            self._assert_required(enemy_data, required_fields, context)

            hp = self._require_int(enemy_data["hp"], f"{context} hp")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                type=self._require_literal(enemy_data["type"], VALID_ENEMY_TYPES, f"{context} type"),
                attribute=self._require_literal(enemy_data["attribute"], ATTRIBUTES, f"{context} attribute"),
                hp=hp,
                max_hp=self._require_int(enemy_data.get("max_hp", hp), f"{context} max_hp"),
                av=self._require_int(enemy_data["av"], f"{context} av"),
                attack=self._require_int(enemy_data["attack"], f"{context} attack"),
                radiation=self._require_int(enemy_data.get("radiation", 0), f"{context} radiation"),
                description=self._require_str(enemy_data.get("description", ""), f"{context} description"),
                skill_ids=tuple(self._require_str_list(enemy_data.get("skills", []), f"{context} skills")),
                weight=self._require_int(enemy_data.get("weight", 1), f"{context} weight"),
                drop_table=tuple(self._parse_drops(enemy_data.get("drop_table", []), context)),
            )
        return enemies

    def _parse_drops(self, value: object, context: str) -> List[DropDef]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} drop_table must be a list.")
        drops: List[DropDef] = []
        for index, entry in enumerate(value):
            drop_context = f"{context} drop_table[{index}]"
            drop_data = self._require_mapping(entry, drop_context)
            self._assert_required(drop_data, {"item_id", "chance"}, drop_context)
            chance = self._require_number(drop_data["chance"], f"{drop_context} chance")
            if not 0.0 <= chance <= 1.0:
                raise DataValidationError(f"{drop_context} chance must be between 0 and 1.")
            drops.append(
                DropDef(item_id=self._require_str(drop_data["item_id"], f"{drop_context} item_id"), chance=chance)
            )
        return drops

    def _dump(self, definition: EnemyDef) -> dict[str, object]:
        return {
            "name": definition.name,
            "type": definition.type,
            "attribute": definition.attribute,
            "hp": definition.hp,
            "max_hp": definition.max_hp,
            "av": definition.av,
            "attack": definition.attack,
            "radiation": definition.radiation,
            "description": definition.description,
            "skills": list(definition.skill_ids),
            "weight": definition.weight,
            "drop_table": [{"item_id": drop.item_id, "chance": drop.chance} for drop in definition.drop_table],
        }
