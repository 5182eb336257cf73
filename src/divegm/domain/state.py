"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from divegm.core.rng import RNG
from divegm.core.types import Language, Layer, NodeType
from divegm.domain.attack_resolution import AttackResult
from divegm.domain.entities import Character, Enemy, Item
from divegm.domain.event_log import LogEntry

MAX_CHARACTERS = 4


@dataclass(slots=True)
class CampaignSettings:
    """Operator preferences persisted with the campaign."""

    language: Language = "zh"
    node_weights: Dict[Layer, Dict[NodeType, float]] = field(default_factory=dict)


@dataclass(slots=True)
class Encounter:
    """Ephemeral combat table: active enemies and the attack cycle."""

    enemies: List[Enemy] = field(default_factory=list)
    round: int = 1
    pending_result: AttackResult | None = None
    report: List[str] = field(default_factory=list)  # newest first


@dataclass
class CampaignState:
    """Single source of truth for one campaign."""

    seed: int
    rng: RNG
    characters: List[Character] = field(default_factory=list)
    shared_inventory: List[Item] = field(default_factory=list)
    credits: int = 0
    current_layer: Layer = "Shallows"
    exploration_progress: int = 0
    total_nodes_visited: int = 0
    logs: List[LogEntry] = field(default_factory=list)  # newest first
    settings: CampaignSettings = field(default_factory=CampaignSettings)
    encounter: Encounter = field(default_factory=Encounter)

    def find_character(self, character_id: str) -> Character | None:
        for character in self.characters:
            if character.id == character_id:
                return character
        return None

    def find_enemy(self, enemy_id: str) -> Enemy | None:
        for enemy in self.encounter.enemies:
            if enemy.id == enemy_id:
                return enemy
        return None

    def find_combatant(self, entity_id: str) -> Character | Enemy | None:
        return self.find_character(entity_id) or self.find_enemy(entity_id)
