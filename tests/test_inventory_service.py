from divegm.domain.entities import Equipment, Stats
from divegm.services.inventory_service import (
    InventoryFailedEvent,
    InventoryService,
    ItemEquippedEvent,
    ItemTransferredEvent,
    ItemUnequippedEvent,
)
from tests.helpers.builders import make_armor, make_campaign, make_character, make_item


def _make_service(stats: Stats | None = None, **character_kwargs):
    campaign = make_campaign()
    character = make_character(stats=stats or Stats(PHY=1, AGI=1, MND=1, SYN=1), **character_kwargs)
    campaign.add_character(character)
    return campaign, InventoryService(campaign), character


def test_transfer_to_personal_moves_item() -> None:
    campaign, service, character = _make_service()
    service.add_to_shared([make_item("rope", weight=3)])

    event = service.transfer_to_personal(character.id, "rope")

    assert isinstance(event, ItemTransferredEvent)
    assert campaign.state.shared_inventory == []
    assert [item.id for item in character.inventory] == ["rope"]


def test_transfer_over_capacity_is_rejected_without_mutation() -> None:
    campaign, service, character = _make_service(inventory=[make_item("pack", weight=5)])
    heavy = make_item("anvil", weight=3)
    service.add_to_shared([heavy])

    event = service.transfer_to_personal(character.id, "anvil")

    assert isinstance(event, InventoryFailedEvent)
    assert event.reason == "inventory_full"
    assert campaign.state.shared_inventory == [heavy]
    assert [item.id for item in character.inventory] == ["pack"]
    assert campaign.state.logs[0].category == "System"
    assert "(5/7)" in campaign.state.logs[0].content


def test_transfer_capacity_uses_core_modifiers() -> None:
    from tests.helpers.builders import make_core

    campaign, service, character = _make_service(
        inventory=[make_item("pack", weight=5)],
        equipment=Equipment(ac_core=make_core(modifiers=Stats(PHY=1))),
    )
    service.add_to_shared([make_item("anvil", weight=4)])

    assert isinstance(service.transfer_to_personal(character.id, "anvil"), ItemTransferredEvent)


def test_transfer_to_shared_and_remove() -> None:
    campaign, service, character = _make_service(inventory=[make_item("rope")])

    service.transfer_to_shared(character.id, "rope")
    removed = service.remove_from_shared("rope")

    assert character.inventory == []
    assert campaign.state.shared_inventory == []
    assert removed.item_name == "Trinket"


def test_missing_references_fail_quietly() -> None:
    _, service, character = _make_service()

    assert isinstance(service.transfer_to_personal(character.id, "nope"), InventoryFailedEvent)
    assert isinstance(service.transfer_to_shared("ghost", "nope"), InventoryFailedEvent)
    assert isinstance(service.unequip_item(character.id, "armor"), InventoryFailedEvent)


def test_equip_from_shared_displaces_old_item_to_personal() -> None:
    old = make_armor(defense=1, item_id="old")
    campaign, service, character = _make_service(equipment=Equipment(armor=old))
    new = make_armor(defense=3, item_id="new")
    service.add_to_shared([new])

    event = service.equip_item(character.id, "new", "armor", from_shared=True)

    assert isinstance(event, ItemEquippedEvent)
    assert event.displaced_to == "personal"
    assert character.equipment.armor == new
    assert character.inventory == [old]
    assert campaign.state.shared_inventory == []


def test_equip_sends_displaced_item_to_shared_when_full() -> None:
    old = make_armor(defense=1, item_id="old")
    new = make_armor(defense=3, item_id="new")
    campaign, service, character = _make_service(
        equipment=Equipment(armor=old), inventory=[new, make_item("pack", weight=6)]
    )

    event = service.equip_item(character.id, "new", "armor")

    assert event.displaced_to == "shared"
    assert campaign.state.shared_inventory == [old]
    assert [item.id for item in character.inventory] == ["pack"]
    assert "moved to Shared Storage" in campaign.state.logs[0].content


def test_unequip_falls_back_to_shared_when_full() -> None:
    armor = make_armor(defense=1)
    campaign, service, character = _make_service(
        equipment=Equipment(armor=armor), inventory=[make_item("pack", weight=7)]
    )

    event = service.unequip_item(character.id, "armor")

    assert isinstance(event, ItemUnequippedEvent)
    assert event.destination == "shared"
    assert character.equipment.armor is None
    assert campaign.state.shared_inventory == [armor]


def test_unequip_to_personal() -> None:
    armor = make_armor(defense=1)
    _, service, character = _make_service(equipment=Equipment(armor=armor))

    event = service.unequip_item(character.id, "armor")

    assert event.destination == "personal"
    assert character.inventory == [armor]


def test_move_equipped_to_shared_logs() -> None:
    armor = make_armor(defense=1)
    campaign, service, character = _make_service(equipment=Equipment(armor=armor))

    service.move_equipped_to_shared(character.id, "armor")

    assert character.equipment.armor is None
    assert campaign.state.shared_inventory == [armor]
    assert campaign.state.logs[0].content.endswith("to Shared Storage.")
