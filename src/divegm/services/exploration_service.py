"""Exploration node generation and out-of-combat attribute checks."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Mapping, Sequence

from divegm.core.types import NODE_TYPES, Layer, NodeType, StatName
from divegm.domain.defs import NodeDef
from divegm.domain.derived_stats import effective_stats
from divegm.domain.dice import DiceRoll, roll_pool
from divegm.domain.entities import Enemy, Item
from divegm.services.campaign_service import CampaignService
from divegm.services.factories import create_enemy_instance, create_item_instance, make_instance_id

logger = logging.getLogger(__name__)

CheckStat = StatName | Literal["AC"]

DEFAULT_NODE_TYPE_WEIGHTS: Dict[Layer, Dict[NodeType, float]] = {
    "Shallows": {"Combat": 0.3, "Resource": 0.4, "Event": 0.2, "Safe": 0.1},
    "RedForest": {"Combat": 0.5, "Resource": 0.2, "Event": 0.2, "Safe": 0.1},
    "DeepSky": {"Combat": 0.6, "Resource": 0.1, "Event": 0.3, "Safe": 0.0},
}
_RADIATION_LEVELS: Dict[Layer, str] = {"Shallows": "low", "RedForest": "medium", "DeepSky": "high"}
_FALLBACK_NODE_TYPE: NodeType = "Combat"


@dataclass(slots=True)
class ExplorationNode:
    id: str
    type: NodeType
    layer: Layer
    description: str
    node_def_id: str | None = None
    enemies: List[Enemy] = field(default_factory=list)
    loot: List[Item] = field(default_factory=list)
    resolved: bool = False


@dataclass(slots=True)
class AttributeCheckResult:
    character_id: str
    stat: CheckStat
    roll: DiceRoll

    @property
    def successes(self) -> int:
        return self.roll.successes

    @property
    def is_critical(self) -> bool:
        return self.roll.is_critical


def pick_node_type(weights: Mapping[str, float], roll: float) -> NodeType:
    """Walk normalized cumulative weights with `roll` in [0, 1)."""
    total = sum(weights.values())
    if total <= 0:
        return _FALLBACK_NODE_TYPE
    cumulative = 0.0
    for node_type, weight in weights.items():
        cumulative += weight / total
        if roll < cumulative and node_type in NODE_TYPES:
            return node_type
    return _FALLBACK_NODE_TYPE


def pick_weighted_node(nodes: Sequence[NodeDef], roll: float) -> NodeDef | None:
    """Pick a node by weight; `roll` is in [0, 1)."""
    total = sum(node.weight for node in nodes)
    if not nodes or total <= 0:
        return None
    remaining = roll * total
    for node in nodes:
        remaining -= node.weight
        if remaining <= 0:
            return node
    return nodes[-1]


class ExplorationService:
    """Generates nodes for the current layer and rolls attribute checks."""

    def __init__(self, campaign: CampaignService) -> None:
        self._campaign = campaign

    def node_type_weights(self, layer: Layer) -> Dict[str, float]:
        override = self._campaign.state.settings.node_weights.get(layer)
        if override:
            return dict(override)
        return dict(DEFAULT_NODE_TYPE_WEIGHTS[layer])

    def generate_node(self) -> ExplorationNode:
        campaign = self._campaign
        state = campaign.state
        rng = campaign.rng
        registries = campaign.registries
        layer = state.current_layer

        node_type = pick_node_type(self.node_type_weights(layer), rng.random())
        content = pick_weighted_node(registries.nodes.by_type(node_type), rng.random())
        if content is None:
            logger.debug("No %s node defined; using a generic description", node_type)

        node = ExplorationNode(
            id=make_instance_id("node", rng),
            type=node_type,
            layer=layer,
            description=(
                content.description
                if content is not None
                else f"A {node_type} node in the {layer}. (Radiation level: {_RADIATION_LEVELS[layer]})"
            ),
            node_def_id=content.id if content is not None else None,
        )
        if content is not None:
            if content.enemy_pool:
                enemy_id = rng.choice(content.enemy_pool)
                if registries.enemies.find(enemy_id) is not None:
                    node.enemies.append(create_enemy_instance(enemy_id, registries.enemies, rng))
            if content.item_pool:
                item_id = rng.choice(content.item_pool)
                if registries.items.find(item_id) is not None:
                    node.loot.append(create_item_instance(item_id, registries.items, rng))

        state.total_nodes_visited += 1
        campaign.add_log("System", f"Explored a new node: {node_type} - {layer}")
        return node

    def attribute_check(self, character_id: str, stat: CheckStat) -> AttributeCheckResult | None:
        """Roll the character's effective stat in d10s; "AC" rolls SYN."""
        campaign = self._campaign
        character = campaign.state.find_character(character_id)
        if character is None:
            return None
        stat_name = "SYN" if stat == "AC" else stat
        roll = roll_pool(campaign.rng, effective_stats(character).get(stat_name))
        rolls = ", ".join(str(face) for face in roll.rolls)
        critical = " (critical!)" if roll.is_critical else ""
        campaign.add_log(
            "System",
            f"{character.name} rolls {stat}: [{rolls}] -> {roll.successes} successes{critical}",
            character.id,
        )
        return AttributeCheckResult(character_id=character.id, stat=stat, roll=roll)
