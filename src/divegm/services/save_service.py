"""Serialization helpers for campaign save/load."""
from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping

from divegm.core.rng import RNG, RNGStatePayload
from divegm.core.types import EQUIPMENT_SLOTS, LAYERS, LOG_CATEGORIES, NODE_TYPES, STAT_NAMES
from divegm.data.errors import DataError
from divegm.data.registries import Registries
from divegm.data.repositories.codecs import dump_item, parse_instance
from divegm.domain.entities import ActiveStatusEffect, Character, Equipment, HitPoints, Item, Stats
from divegm.domain.event_log import LogEntry
from divegm.domain.state import CampaignSettings, CampaignState
from divegm.services.errors import SaveLoadError

SavePayload = Dict[str, Any]
_LIFECYCLE_STATES = ("Idle", "Exploring", "Combat", "Dead")


class SaveService:
    """Converts campaign state and its registries to/from a JSON payload."""

    def __init__(self, registries: Registries) -> None:
        self._registries = registries

    def serialize(self, state: CampaignState) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        return {
            "metadata": self._build_metadata(state),
            "rng": state.rng.export_state(),
            "state": self._serialize_state(state),
            "registries": self._registries.export_raw(),
        }

    def deserialize(self, payload: Mapping[str, Any]) -> CampaignState:
        """Rehydrate a CampaignState and reload the registries from a payload.

        The active encounter is not part of a save; the loaded campaign starts
        with an empty roster.
        """
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        rng_payload = payload.get("rng")
        state_payload = payload.get("state")
        if not isinstance(rng_payload, Mapping) or not isinstance(state_payload, Mapping):
            raise SaveLoadError("Save data is missing required sections.")

        registries_payload = payload.get("registries")
        if registries_payload is not None:
            registries_payload = self._require_dict(registries_payload, "registries")
            try:
                Registries.from_raw(registries_payload)
            except DataError as exc:
                raise SaveLoadError(f"Invalid registries: {exc}") from exc

        seed = self._require_int(state_payload.get("seed"), "state.seed")
        rng = RNG(seed)
        try:
            rng.restore_state(self._coerce_rng_payload(rng_payload))
        except ValueError as exc:
            raise SaveLoadError(f"Invalid RNG state: {exc}") from exc

        state = CampaignState(seed=seed, rng=rng)
        state.characters = [
            self._coerce_character(entry, f"state.characters[{index}]")
            for index, entry in enumerate(self._require_list(state_payload.get("characters", []), "state.characters"))
        ]
        state.shared_inventory = self._coerce_items(state_payload.get("shared_inventory", []), "state.shared_inventory")
        state.credits = self._require_int(state_payload.get("credits", 0), "state.credits")
        layer = state_payload.get("current_layer", "Shallows")
        if layer not in LAYERS:
            raise SaveLoadError(f"Invalid layer value: {layer}")
        state.current_layer = layer
        state.exploration_progress = self._require_int(
            state_payload.get("exploration_progress", 0), "state.exploration_progress"
        )
        state.total_nodes_visited = self._require_int(
            state_payload.get("total_nodes_visited", 0), "state.total_nodes_visited"
        )
        state.logs = self._coerce_logs(state_payload.get("logs", []))
        state.settings = self._coerce_settings(state_payload.get("settings", {}))
        if registries_payload is not None:
            self._registries.load_raw(registries_payload)
        return state

    def write_save(self, state: CampaignState, path: Path | str) -> None:
        save_path = Path(path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        payload = self.serialize(state)
        save_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def read_save(self, path: Path | str) -> CampaignState:
        save_path = Path(path)
        try:
            payload = json.loads(save_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise SaveLoadError(f"Save file not found: {save_path}") from exc
        except (OSError, ValueError) as exc:
            raise SaveLoadError(f"Could not read save file {save_path}: {exc}") from exc
        return self.deserialize(payload)

    # --------------------------------------------------------------- Writing
    @staticmethod
    def _build_metadata(state: CampaignState) -> Dict[str, Any]:
        return {
            "characters": [character.name for character in state.characters],
            "current_layer": state.current_layer,
            "total_nodes_visited": state.total_nodes_visited,
            "seed": state.seed,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def _serialize_state(self, state: CampaignState) -> Dict[str, Any]:
        return {
            "seed": state.seed,
            "characters": [self._serialize_character(character) for character in state.characters],
            "shared_inventory": [dump_item(item, include_id=True) for item in state.shared_inventory],
            "credits": state.credits,
            "current_layer": state.current_layer,
            "exploration_progress": state.exploration_progress,
            "total_nodes_visited": state.total_nodes_visited,
            "logs": [
                {
                    "id": entry.id,
                    "timestamp": entry.timestamp,
                    "category": entry.category,
                    "content": entry.content,
                    "related_entity_id": entry.related_entity_id,
                }
                for entry in state.logs
            ],
            "settings": {
                "language": state.settings.language,
                "node_weights": {
                    layer: dict(weights) for layer, weights in state.settings.node_weights.items()
                },
            },
        }

    @staticmethod
    def _serialize_character(character: Character) -> Dict[str, Any]:
        equipment: Dict[str, Any] = {}
        for slot in EQUIPMENT_SLOTS:
            item = character.equipment.get(slot)
            equipment[slot] = dump_item(item, include_id=True) if item is not None else None
        return {
            "id": character.id,
            "name": character.name,
            "origin": character.origin,
            "base_stats": {name: character.base_stats.get(name) for name in STAT_NAMES},
            "hp": {"current": character.hp.current, "max": character.hp.max},
            "erosion": character.erosion,
            "inventory": [dump_item(item, include_id=True) for item in character.inventory],
            "equipment": equipment,
            "credits": character.credits,
            "battery": character.battery,
            "state": character.state,
            "active_status_effects": [
                {"effect_id": status.effect_id, "stacks": status.stacks, "duration_left": status.duration_left}
                for status in character.active_status_effects
            ],
            "learned_skills": list(character.learned_skills),
        }

    # --------------------------------------------------------------- Reading
    def _coerce_rng_payload(self, payload: Mapping[str, Any]) -> RNGStatePayload:
        version = self._require_int(payload.get("version"), "rng.version")
        state_values = payload.get("state")
        if not isinstance(state_values, list):
            raise SaveLoadError("Invalid RNG state payload.")
        gauss = payload.get("gauss")
        return {"version": version, "state": state_values, "gauss": gauss}

    def _coerce_character(self, value: Any, context: str) -> Character:
        mapping = self._require_dict(value, context)
        stats_mapping = self._require_dict(mapping.get("base_stats"), f"{context}.base_stats")
        base_stats = Stats(
            **{name: self._require_int(stats_mapping.get(name, 0), f"{context}.base_stats.{name}") for name in STAT_NAMES}
        )
        hp_mapping = self._require_dict(mapping.get("hp"), f"{context}.hp")
        hp = HitPoints(
            current=self._require_int(hp_mapping.get("current"), f"{context}.hp.current"),
            max=self._require_int(hp_mapping.get("max"), f"{context}.hp.max"),
        )
        lifecycle = mapping.get("state", "Idle")
        if lifecycle not in _LIFECYCLE_STATES:
            raise SaveLoadError(f"{context}.state has invalid value: {lifecycle}")
        return Character(
            id=self._require_str(mapping.get("id"), f"{context}.id"),
            name=self._require_str(mapping.get("name"), f"{context}.name"),
            origin=self._require_str(mapping.get("origin", ""), f"{context}.origin"),
            base_stats=base_stats,
            hp=hp,
            erosion=self._require_int(mapping.get("erosion", 0), f"{context}.erosion"),
            inventory=self._coerce_items(mapping.get("inventory", []), f"{context}.inventory"),
            equipment=self._coerce_equipment(mapping.get("equipment", {}), f"{context}.equipment"),
            credits=self._require_int(mapping.get("credits", 0), f"{context}.credits"),
            battery=self._require_int(mapping.get("battery", 100), f"{context}.battery"),
            state=lifecycle,
            active_status_effects=self._coerce_status_effects(
                mapping.get("active_status_effects", []), f"{context}.active_status_effects"
            ),
            learned_skills=self._coerce_str_list(mapping.get("learned_skills", []), f"{context}.learned_skills"),
        )

    def _coerce_items(self, value: Any, context: str) -> List[Item]:
        items: List[Item] = []
        for index, entry in enumerate(self._require_list(value, context)):
            items.append(self._coerce_item(entry, f"{context}[{index}]"))
        return items

    @staticmethod
    def _coerce_item(value: Any, context: str) -> Item:
        try:
            return parse_instance(value, context)
        except DataError as exc:
            raise SaveLoadError(str(exc)) from exc

    def _coerce_equipment(self, value: Any, context: str) -> Equipment:
        mapping = self._require_dict(value, context)
        unknown = set(mapping) - set(EQUIPMENT_SLOTS)
        if unknown:
            raise SaveLoadError(f"{context} has unknown slots: {sorted(unknown)}")
        equipment = Equipment()
        for slot in EQUIPMENT_SLOTS:
            entry = mapping.get(slot)
            if entry is not None:
                equipment.set(slot, self._coerce_item(entry, f"{context}.{slot}"))
        return equipment

    def _coerce_status_effects(self, value: Any, context: str) -> List[ActiveStatusEffect]:
        effects: List[ActiveStatusEffect] = []
        for index, entry in enumerate(self._require_list(value, context)):
            mapping = self._require_dict(entry, f"{context}[{index}]")
            effects.append(
                ActiveStatusEffect(
                    effect_id=self._require_str(mapping.get("effect_id"), f"{context}[{index}].effect_id"),
                    stacks=self._require_int(mapping.get("stacks"), f"{context}[{index}].stacks"),
                    duration_left=self._require_int(
                        mapping.get("duration_left"), f"{context}[{index}].duration_left"
                    ),
                )
            )
        return effects

    def _coerce_logs(self, value: Any) -> List[LogEntry]:
        logs: List[LogEntry] = []
        for index, entry in enumerate(self._require_list(value, "state.logs")):
            context = f"state.logs[{index}]"
            mapping = self._require_dict(entry, context)
            category = mapping.get("category")
            if category not in LOG_CATEGORIES:
                raise SaveLoadError(f"{context}.category has invalid value: {category}")
            related = mapping.get("related_entity_id")
            logs.append(
                LogEntry(
                    id=self._require_str(mapping.get("id"), f"{context}.id"),
                    timestamp=self._require_int(mapping.get("timestamp"), f"{context}.timestamp"),
                    category=category,
                    content=self._require_str(mapping.get("content"), f"{context}.content"),
                    related_entity_id=None if related is None else self._require_str(related, f"{context}.related_entity_id"),
                )
            )
        return logs

    def _coerce_settings(self, value: Any) -> CampaignSettings:
        mapping = self._require_dict(value, "state.settings")
        language = mapping.get("language", "zh")
        if language not in ("en", "zh"):
            raise SaveLoadError(f"Invalid language value: {language}")
        node_weights: Dict[Any, Dict[Any, float]] = {}
        weights_payload = self._require_dict(mapping.get("node_weights", {}), "state.settings.node_weights")
        for layer, weights in weights_payload.items():
            if layer not in LAYERS:
                raise SaveLoadError(f"Invalid layer in node weights: {layer}")
            layer_weights = self._require_dict(weights, f"state.settings.node_weights.{layer}")
            node_weights[layer] = {}
            for node_type, weight in layer_weights.items():
                if node_type not in NODE_TYPES:
                    raise SaveLoadError(f"Invalid node type in node weights: {node_type}")
                node_weights[layer][node_type] = self._require_number(
                    weight, f"state.settings.node_weights.{layer}.{node_type}"
                )
        return CampaignSettings(language=language, node_weights=node_weights)

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_number(value: Any, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise SaveLoadError(f"{context} must be a finite number.")
        return float(value)

    @staticmethod
    def _require_list(value: Any, context: str) -> List[Any]:
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        return value

    def _coerce_str_list(self, value: Any, context: str) -> List[str]:
        return [self._require_str(entry, f"{context}[{index}]") for index, entry in enumerate(self._require_list(value, context))]

    @staticmethod
    def _require_dict(value: Any, context: str) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            raise SaveLoadError(f"{context} must be an object.")
        return dict(value)
