from __future__ import annotations

import json
from pathlib import Path

import pytest

from divegm.domain.entities import ActiveStatusEffect, Equipment
from divegm.services.errors import SaveLoadError
from divegm.services.save_service import SaveService
from tests.helpers.builders import make_armor, make_campaign, make_character, make_core, make_enemy, make_item, make_registries


def _make_populated_campaign():
    campaign = make_campaign(seed=21)
    character = make_character(
        erosion=35,
        equipment=Equipment(armor=make_armor(defense=2, shielding=30), ac_core=make_core("Flux")),
        inventory=[make_item("rope", weight=2)],
    )
    character.active_status_effects.append(ActiveStatusEffect(effect_id="bleed", stacks=2, duration_left=1))
    character.learned_skills = ["arc"]
    campaign.add_character(character)
    campaign.state.shared_inventory.append(make_item("lamp", weight=1, name="Lamp"))
    campaign.state.credits = 120
    campaign.set_current_layer("RedForest")
    campaign.set_node_weights("RedForest", {"Combat": 0.7, "Safe": 0.3})
    campaign.state.total_nodes_visited = 4
    campaign.add_enemy(make_enemy())
    campaign.add_log("Event", "Found a beacon.")
    return campaign


def test_roundtrip_restores_campaign() -> None:
    campaign = _make_populated_campaign()
    service = SaveService(campaign.registries)

    payload = json.loads(json.dumps(service.serialize(campaign.state)))
    restored = service.deserialize(payload)

    original = campaign.state
    assert restored.seed == 21
    assert restored.characters == original.characters
    assert restored.shared_inventory == original.shared_inventory
    assert restored.credits == 120
    assert restored.current_layer == "RedForest"
    assert restored.total_nodes_visited == 4
    assert restored.logs == original.logs
    assert restored.settings == original.settings
    assert restored.encounter.enemies == []


def test_roundtrip_preserves_rng_sequence() -> None:
    campaign = make_campaign(seed=3)
    campaign.rng.randint(1, 10)
    service = SaveService(campaign.registries)

    restored = service.deserialize(service.serialize(campaign.state))

    assert [restored.rng.randint(1, 10) for _ in range(5)] == [campaign.rng.randint(1, 10) for _ in range(5)]


def test_deserialize_reloads_registries() -> None:
    campaign = make_campaign()
    payload = SaveService(campaign.registries).serialize(campaign.state)
    payload["registries"]["items"]["torch"] = {
        "name": "Torch",
        "type": "Misc",
        "weight": 1,
        "value": 2,
        "rarity": "G1",
    }
    registries = make_registries()

    SaveService(registries).deserialize(payload)

    assert registries.items.get("torch").name == "Torch"


def test_invalid_registries_leave_current_ones_untouched() -> None:
    campaign = make_campaign()
    payload = SaveService(campaign.registries).serialize(campaign.state)
    payload["registries"]["items"]["torch"] = {
        "name": "Torch",
        "type": "Misc",
        "weight": 1,
        "value": 2,
        "rarity": "G1",
    }
    payload["registries"]["nodes"]["bad"] = {"type": "Combat", "description": "x", "enemy_pool": ["ghost"]}
    registries = make_registries()

    with pytest.raises(SaveLoadError):
        SaveService(registries).deserialize(payload)
    assert registries.items.find("torch") is None
    assert registries.nodes.find("bad") is None


@pytest.mark.parametrize(
    "mutate",
    [
        lambda payload: payload.pop("rng"),
        lambda payload: payload["state"].update(seed="abc"),
        lambda payload: payload["state"].update(current_layer="Moon"),
        lambda payload: payload["state"]["characters"][0].update(hp={"current": 1}),
        lambda payload: payload["state"]["logs"][0].update(category="Gossip"),
    ],
)
def test_deserialize_rejects_invalid_payloads(mutate) -> None:
    campaign = _make_populated_campaign()
    service = SaveService(campaign.registries)
    payload = service.serialize(campaign.state)
    mutate(payload)

    with pytest.raises(SaveLoadError):
        service.deserialize(payload)


def test_deserialize_rejects_non_mapping() -> None:
    with pytest.raises(SaveLoadError):
        SaveService(make_registries()).deserialize([])


def test_write_and_read_save(tmp_path: Path) -> None:
    campaign = _make_populated_campaign()
    service = SaveService(campaign.registries)
    path = tmp_path / "saves" / "campaign.json"

    service.write_save(campaign.state, path)
    restored = service.read_save(path)

    assert restored.characters == campaign.state.characters


def test_read_missing_or_corrupt_save(tmp_path: Path) -> None:
    service = SaveService(make_registries())
    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")

    with pytest.raises(SaveLoadError):
        service.read_save(tmp_path / "missing.json")
    with pytest.raises(SaveLoadError):
        service.read_save(corrupt)
