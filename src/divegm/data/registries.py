"""Bundle of every definition registry a campaign consults."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping

from divegm.data.errors import DataValidationError
from divegm.data.repositories import (
    EnemiesRepository,
    ItemsRepository,
    NodesRepository,
    SkillsRepository,
    StatusEffectsRepository,
)

REGISTRY_KEYS = ("items", "enemies", "skills", "status_effects", "nodes")


@dataclass(slots=True)
class Registries:
    """Items, bestiary, skills, status effects and exploration nodes."""

    items: ItemsRepository = field(default_factory=ItemsRepository)
    enemies: EnemiesRepository = field(default_factory=EnemiesRepository)
    skills: SkillsRepository = field(default_factory=SkillsRepository)
    status_effects: StatusEffectsRepository = field(default_factory=StatusEffectsRepository)
    nodes: NodesRepository = field(default_factory=NodesRepository)

    @classmethod
    def from_directory(cls, base_path: Path | str | None = None) -> Registries:
        """Registries backed by the JSON files under `base_path` (bundled data by default)."""
        return cls(
            items=ItemsRepository(base_path),
            enemies=EnemiesRepository(base_path),
            skills=SkillsRepository(base_path),
            status_effects=StatusEffectsRepository(base_path),
            nodes=NodesRepository(base_path),
        )

    @classmethod
    def from_raw(cls, raw: Mapping[str, object]) -> Registries:
        registries = cls()
        registries.load_raw(raw)
        return registries

    def load_raw(self, raw: Mapping[str, object]) -> None:
        """Replace every registry from a mapping keyed by REGISTRY_KEYS; absent keys load empty."""
        if not isinstance(raw, Mapping):
            raise DataValidationError("Registries payload must be an object.")
        for key in REGISTRY_KEYS:
            payload = raw.get(key, {})
            getattr(self, key).load_raw(payload)
        self.validate()

    def export_raw(self) -> Dict[str, dict[str, object]]:
        return {key: getattr(self, key).export_raw() for key in REGISTRY_KEYS}

    def validate(self) -> None:
        """Check cross-registry references."""
        self.nodes.validate_references(self.enemies, self.items)
