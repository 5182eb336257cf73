"""Base repository implementation for JSON definition data."""
from __future__ import annotations

import math
from pathlib import Path
from typing import Collection, Dict, Generic, List, Mapping, TypeVar

from divegm.data.errors import DataValidationError
from divegm.data.json_loader import load_json
from divegm.data import paths

T = TypeVar("T")
R = TypeVar("R", bound="RepositoryBase")


class RepositoryBase(Generic[T]):
    """Common caching, loading and dumping behavior for registries.

    Definitions come from a JSON file under the definitions directory, or from
    a raw mapping with the same schema (save files carry their registries).
    """

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    @classmethod
    def from_raw(cls: type[R], raw: Mapping[str, object]) -> R:
        """Build a repository from an in-memory raw mapping."""
        repo = cls()
        repo.load_raw(raw)
        return repo

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        file_path = self._get_file_path()
        raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _dump(self, definition: T) -> dict[str, object]:
        """Convert a typed definition back into its raw dict form."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is None:
            raw = self._load_raw()
            self._definitions = self._build(raw)

    def load_raw(self, raw: Mapping[str, object]) -> None:
        """Replace every definition with the contents of `raw`."""
        if not isinstance(raw, Mapping):
            raise DataValidationError(f"{self._filename} payload must be an object.")
        self._definitions = self._build(dict(raw))

    def export_raw(self) -> dict[str, object]:
        """Return all definitions in the raw JSON schema, keyed by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return {def_id: self._dump(self._definitions[def_id]) for def_id in sorted(self._definitions)}

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        try:
            return self._definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def find(self, def_id: str | None) -> T | None:
        """Return a definition by id, or None when it is unknown."""
        if not def_id:
            return None
        self._ensure_loaded()
        assert self._definitions is not None
        return self._definitions.get(def_id)

    def register(self, def_id: str, definition: T) -> None:
        """Add or replace a single definition."""
        self._ensure_loaded()
        assert self._definitions is not None
        self._definitions[def_id] = definition

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[key] for key in sorted(self._definitions.keys())]

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_type(value: object, expected_type: type, context: str) -> object:
        if not isinstance(value, expected_type):
            raise DataValidationError(f"{context} must be of type {expected_type.__name__}.")
        return value

    @staticmethod
    def _assert_required(payload: Mapping[str, object], required: set[str], context: str) -> None:
        missing = required - payload.keys()
        if missing:
            raise DataValidationError(f"{context} missing fields: {sorted(missing)}")

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_number(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise DataValidationError(f"{context} must be a finite number.")
        return float(value)

    @staticmethod
    def _require_str_list(value: object, context: str) -> List[str]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        result: List[str] = []
        for entry in value:
            if not isinstance(entry, str):
                raise DataValidationError(f"{context} entries must be strings.")
            result.append(entry)
        return result

    @staticmethod
    def _require_literal(value: object, allowed: Collection[str], context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        if value not in allowed:
            raise DataValidationError(f"{context} must be one of {sorted(allowed)}.")
        return value

    def _optional_str(self, value: object, context: str) -> str | None:
        if value is None:
            return None
        return self._require_str(value, context)

    def _optional_int(self, value: object, context: str) -> int | None:
        if value is None:
            return None
        return self._require_int(value, context)
