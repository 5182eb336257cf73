"""Campaign state owner: the single place where entities are mutated."""
from __future__ import annotations

import dataclasses
import logging
import math
import time
from typing import Any, Dict, Literal, Mapping

from divegm import config
from divegm.core.rng import RNG
from divegm.core.types import LAYERS, Layer, LogCategory
from divegm.data.registries import Registries
from divegm.domain.entities import MAX_LEARNED_SKILLS, Character, Enemy, HitPoints, Stats
from divegm.domain.event_log import LogEntry
from divegm.domain.state import MAX_CHARACTERS, CampaignSettings, CampaignState
from divegm.services.factories import create_character, make_instance_id

logger = logging.getLogger(__name__)

Resource = Literal["HP", "Erosion", "Credits", "Battery"]
MAX_EROSION = 100
MAX_BATTERY = 100

_CHARACTER_FIELDS = {f.name for f in dataclasses.fields(Character)} - {"id"}
_ENEMY_FIELDS = {f.name for f in dataclasses.fields(Enemy)} - {"id"}


def new_campaign_state(seed: int, settings: Mapping[str, str] | None = None) -> CampaignState:
    """Create an empty campaign seeded from the user's config."""
    settings = settings if settings is not None else config.load_config()
    state = CampaignState(seed=seed, rng=RNG(seed))
    state.settings = CampaignSettings(language=settings.get("language", "zh"))
    layer = settings.get("starting_layer", "Shallows")
    if layer in LAYERS:
        state.current_layer = layer
    return state


def contains_non_finite(value: Any) -> bool:
    """True when `value` holds NaN or an infinity anywhere, including nested containers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, Mapping):
        return any(contains_non_finite(entry) for entry in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(contains_non_finite(entry) for entry in value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return any(contains_non_finite(getattr(value, f.name)) for f in dataclasses.fields(value))
    return False


class CampaignService:
    """Owns the CampaignState and exposes message-style commands against it."""

    def __init__(self, state: CampaignState, registries: Registries) -> None:
        self._state = state
        self._registries = registries

    @property
    def state(self) -> CampaignState:
        return self._state

    @property
    def registries(self) -> Registries:
        return self._registries

    @property
    def rng(self) -> RNG:
        return self._state.rng

    # ------------------------------------------------------------------ Log
    def add_log(
        self,
        category: LogCategory,
        content: str,
        related_entity_id: str | None = None,
    ) -> LogEntry:
        """Record an event; the newest entry is kept first."""
        entry = LogEntry(
            id=make_instance_id("log", self._state.rng),
            timestamp=time.time_ns() // 1_000_000,
            category=category,
            content=content,
            related_entity_id=related_entity_id,
        )
        self._state.logs.insert(0, entry)
        return entry

    # ----------------------------------------------------------- Characters
    def create_character(self, name: str, origin: str, base_stats: Stats) -> Character | None:
        character = create_character(name, origin, base_stats, self._state.rng)
        if not self.add_character(character):
            return None
        return character

    def add_character(self, character: Character) -> bool:
        if len(self._state.characters) >= MAX_CHARACTERS:
            self.add_log("System", f"Cannot add more than {MAX_CHARACTERS} characters.")
            logger.warning("Rejected character %s: squad is full", character.id)
            return False
        self._state.characters.append(character)
        self.add_log("System", f"Character created: {character.name}", character.id)
        return True

    def remove_character(self, character_id: str) -> bool:
        character = self._state.find_character(character_id)
        if character is None:
            return False
        self._state.characters.remove(character)
        return True

    def update_character(self, character_id: str, updates: Mapping[str, Any]) -> bool:
        """Merge `updates` into a character; all-or-nothing."""
        character = self._state.find_character(character_id)
        if character is None:
            return False
        if not self._validate_updates(updates, _CHARACTER_FIELDS, f"character {character_id}"):
            return False
        for key, value in updates.items():
            setattr(character, key, value)
        return True

    def learn_skill(self, character_id: str, skill_id: str) -> bool:
        character = self._state.find_character(character_id)
        if character is None:
            return False
        if self._registries.skills.find(skill_id) is None:
            logger.warning("Unknown skill %s", skill_id)
            return False
        if skill_id in character.learned_skills or len(character.learned_skills) >= MAX_LEARNED_SKILLS:
            return False
        return self.update_character(character_id, {"learned_skills": [*character.learned_skills, skill_id]})

    def forget_skill(self, character_id: str, skill_id: str) -> bool:
        character = self._state.find_character(character_id)
        if character is None or skill_id not in character.learned_skills:
            return False
        remaining = [learned for learned in character.learned_skills if learned != skill_id]
        return self.update_character(character_id, {"learned_skills": remaining})

    def adjust_resource(self, character_id: str, resource: Resource, delta: int) -> bool:
        """Add `delta` (negative to subtract) to a tracked resource, clamped to its range."""
        character = self._state.find_character(character_id)
        if character is None or contains_non_finite(delta):
            return False
        if resource == "HP":
            current = min(character.hp.max, max(0, character.hp.current + delta))
            return self.update_character(character_id, {"hp": HitPoints(current=current, max=character.hp.max)})
        if resource == "Erosion":
            return self.update_character(
                character_id, {"erosion": min(MAX_EROSION, max(0, character.erosion + delta))}
            )
        if resource == "Credits":
            return self.update_character(character_id, {"credits": max(0, character.credits + delta)})
        if resource == "Battery":
            return self.update_character(
                character_id, {"battery": min(MAX_BATTERY, max(0, character.battery + delta))}
            )
        logger.warning("Unknown resource %s", resource)
        return False

    # --------------------------------------------------------------- Enemies
    def add_enemy(self, enemy: Enemy) -> None:
        self._state.encounter.enemies.append(enemy)

    def update_enemy(self, enemy_id: str, updates: Mapping[str, Any]) -> bool:
        enemy = self._state.find_enemy(enemy_id)
        if enemy is None:
            return False
        if not self._validate_updates(updates, _ENEMY_FIELDS, f"enemy {enemy_id}"):
            return False
        for key, value in updates.items():
            setattr(enemy, key, value)
        return True

    def remove_enemy(self, enemy_id: str) -> bool:
        enemy = self._state.find_enemy(enemy_id)
        if enemy is None:
            return False
        self._state.encounter.enemies.remove(enemy)
        return True

    # --------------------------------------------------------------- Campaign
    def set_current_layer(self, layer: Layer) -> bool:
        if layer not in LAYERS:
            return False
        self._state.current_layer = layer
        return True

    def set_node_weights(self, layer: Layer, weights: Dict[str, float]) -> bool:
        if layer not in LAYERS or contains_non_finite(weights):
            return False
        self._state.settings.node_weights[layer] = dict(weights)
        return True

    def import_state(self, state: CampaignState) -> None:
        """Replace the whole campaign."""
        self._state = state

    def reset_state(self) -> None:
        seed = self._state.seed
        self._state = CampaignState(seed=seed, rng=RNG(seed))

    @staticmethod
    def _validate_updates(updates: Mapping[str, Any], allowed: set[str], context: str) -> bool:
        unknown = set(updates) - allowed
        if unknown:
            logger.warning("Rejected update for %s: unknown fields %s", context, sorted(unknown))
            return False
        if contains_non_finite(updates):
            logger.warning("Rejected update for %s: non-finite value", context)
            return False
        return True
