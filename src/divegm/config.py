"""Per-user configuration helpers for campaign defaults."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

from divegm.core.types import LAYERS

_DEFAULT_LANGUAGE = "zh"
_LANGUAGES = ("en", "zh")
_DEFAULT_STARTING_LAYER = "Shallows"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "DiveGM"
        return Path.home() / "DiveGM"
    return Path.home() / ".config" / "divegm"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def _normalize_language(value: object) -> str:
    return value if value in _LANGUAGES else _DEFAULT_LANGUAGE


def _normalize_layer(value: object) -> str:
    return value if value in LAYERS else _DEFAULT_STARTING_LAYER


def default_config() -> Dict[str, str]:
    return {"language": _DEFAULT_LANGUAGE, "starting_layer": _DEFAULT_STARTING_LAYER}


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return {
        "language": _normalize_language(raw.get("language")),
        "starting_layer": _normalize_layer(raw.get("starting_layer")),
    }


def save_config(config: Dict[str, str], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "language": _normalize_language(config.get("language")),
        "starting_layer": _normalize_layer(config.get("starting_layer")),
    }
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
