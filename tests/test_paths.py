from pathlib import Path

from divegm.data import paths


def test_get_definitions_path_base_path(tmp_path: Path) -> None:
    assert paths.get_definitions_path(tmp_path) == tmp_path


def test_get_definitions_path_bundled_data_exists() -> None:
    definitions_path = paths.get_definitions_path()
    assert definitions_path.name == "definitions"
    assert (definitions_path / "items.json").exists()
