import json
from pathlib import Path

from divegm import config
from divegm.services.campaign_service import new_campaign_state


def test_missing_config_returns_defaults(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "missing.json") == {"language": "zh", "starting_layer": "Shallows"}


def test_corrupt_or_non_object_config_returns_defaults(tmp_path: Path) -> None:
    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{nope", encoding="utf-8")
    listing = tmp_path / "list.json"
    listing.write_text("[]", encoding="utf-8")

    assert config.load_config(corrupt) == config.default_config()
    assert config.load_config(listing) == config.default_config()


def test_unknown_values_are_normalized(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"language": "fr", "starting_layer": "Moon"}), encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_save_then_load_config(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    config.save_config({"language": "en", "starting_layer": "DeepSky"}, path)

    assert config.load_config(path) == {"language": "en", "starting_layer": "DeepSky"}


def test_user_paths_live_under_data_dir(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "get_user_data_dir", lambda: tmp_path)

    assert config.get_default_config_path() == tmp_path / "config.json"
    assert config.get_save_dir() == tmp_path / "saves"


def test_new_campaign_uses_user_config(monkeypatch, tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    config.save_config({"language": "en", "starting_layer": "RedForest"}, path)
    monkeypatch.setattr(config, "get_default_config_path", lambda: path)

    state = new_campaign_state(11)

    assert state.settings.language == "en"
    assert state.current_layer == "RedForest"
