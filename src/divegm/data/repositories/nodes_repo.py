"""Exploration node registry."""
from __future__ import annotations

from typing import Dict, List

from divegm.core.types import NODE_TYPES, NodeType
from divegm.data.errors import DataReferenceError, DataValidationError
from divegm.data.repositories.base import RepositoryBase
from divegm.domain.defs import DEFAULT_NODE_WEIGHT, NodeDef

from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository


class NodesRepository(RepositoryBase[NodeDef]):
    """Loads node contents used by the exploration generator."""

    def __init__(self, base_path=None) -> None:
        super().__init__("nodes.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, NodeDef]:
        nodes: Dict[str, NodeDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Node IDs must be strings.")
            context = f"node '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"type", "description"}, context)
            weight = self._require_int(data.get("weight", DEFAULT_NODE_WEIGHT), f"{context} weight")
            if weight < 0:
                raise DataValidationError(f"{context} weight must be non-negative.")
            nodes[raw_id] = NodeDef(
                id=raw_id,
                type=self._require_literal(data["type"], NODE_TYPES, f"{context} type"),
                description=self._require_str(data["description"], f"{context} description"),
                weight=weight,
                enemy_pool=tuple(self._require_str_list(data.get("enemy_pool", []), f"{context} enemy_pool")),
                item_pool=tuple(self._require_str_list(data.get("item_pool", []), f"{context} item_pool")),
            )
        return nodes

    def _dump(self, definition: NodeDef) -> dict[str, object]:
        return {
            "type": definition.type,
            "description": definition.description,
            "weight": definition.weight,
            "enemy_pool": list(definition.enemy_pool),
            "item_pool": list(definition.item_pool),
        }

    def by_type(self, node_type: NodeType) -> List[NodeDef]:
        return [node for node in self.all() if node.type == node_type]

    def validate_references(self, enemies_repo: EnemiesRepository, items_repo: ItemsRepository) -> None:
        """Raise DataReferenceError when a pool names an unknown template."""
        for node in self.all():
            for enemy_id in node.enemy_pool:
                if enemies_repo.find(enemy_id) is None:
                    raise DataReferenceError(f"node '{node.id}' references unknown enemy '{enemy_id}'.")
            for item_id in node.item_pool:
                if items_repo.find(item_id) is None:
                    raise DataReferenceError(f"node '{node.id}' references unknown item '{item_id}'.")
