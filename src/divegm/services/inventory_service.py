"""Shared storage, personal inventory and equipment commands."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Sequence

from divegm.core.types import EQUIPMENT_SLOTS, EquipmentSlot
from divegm.domain.derived_stats import compute_derived_stats
from divegm.domain.entities import Equipment, Item
from divegm.services.campaign_service import CampaignService

logger = logging.getLogger(__name__)

Destination = Literal["personal", "shared"]


@dataclass(slots=True)
class InventoryEvent:
    """Base class for inventory/equipment events."""


@dataclass(slots=True)
class ItemsAddedEvent(InventoryEvent):
    item_ids: List[str]


@dataclass(slots=True)
class ItemRemovedEvent(InventoryEvent):
    item_id: str
    item_name: str


@dataclass(slots=True)
class ItemTransferredEvent(InventoryEvent):
    character_id: str
    item_id: str
    item_name: str
    destination: Destination


@dataclass(slots=True)
class ItemEquippedEvent(InventoryEvent):
    character_id: str
    item_id: str
    item_name: str
    slot: EquipmentSlot
    displaced_item_id: str | None = None
    displaced_to: Destination | None = None


@dataclass(slots=True)
class ItemUnequippedEvent(InventoryEvent):
    character_id: str
    item_id: str
    item_name: str
    slot: EquipmentSlot
    destination: Destination


@dataclass(slots=True)
class InventoryFailedEvent(InventoryEvent):
    reason: str
    message: str


class InventoryService:
    """Moves items between the shared pool, personal inventories and equipment slots."""

    def __init__(self, campaign: CampaignService) -> None:
        self._campaign = campaign

    # ------------------------------------------------------------ Shared pool
    def add_to_shared(self, items: Sequence[Item]) -> ItemsAddedEvent:
        state = self._campaign.state
        state.shared_inventory.extend(items)
        return ItemsAddedEvent(item_ids=[item.id for item in items])

    def remove_from_shared(self, item_id: str) -> InventoryEvent:
        state = self._campaign.state
        item = _find_item(state.shared_inventory, item_id)
        if item is None:
            return self._fail("missing_item", f"Item '{item_id}' is not in shared storage.")
        state.shared_inventory.remove(item)
        return ItemRemovedEvent(item_id=item.id, item_name=item.name)

    # -------------------------------------------------------------- Transfers
    def transfer_to_personal(self, character_id: str, item_id: str) -> InventoryEvent:
        state = self._campaign.state
        item = _find_item(state.shared_inventory, item_id)
        if item is None:
            return self._fail("missing_item", f"Item '{item_id}' is not in shared storage.")
        character = state.find_character(character_id)
        if character is None:
            return self._fail("missing_character", f"Character '{character_id}' not found.")

        derived = compute_derived_stats(character)
        if not derived.can_carry(item.weight):
            message = (
                f"Cannot transfer {item.name}: {character.name}'s inventory is full "
                f"({derived.current_load}/{derived.max_load})."
            )
            self._campaign.add_log("System", message, character.id)
            return self._fail("inventory_full", message)

        state.shared_inventory.remove(item)
        self._campaign.update_character(character.id, {"inventory": [*character.inventory, item]})
        return ItemTransferredEvent(
            character_id=character.id, item_id=item.id, item_name=item.name, destination="personal"
        )

    def transfer_to_shared(self, character_id: str, item_id: str) -> InventoryEvent:
        state = self._campaign.state
        character = state.find_character(character_id)
        if character is None:
            return self._fail("missing_character", f"Character '{character_id}' not found.")
        item = _find_item(character.inventory, item_id)
        if item is None:
            return self._fail("missing_item", f"{character.name} does not carry '{item_id}'.")

        remaining = [entry for entry in character.inventory if entry.id != item_id]
        self._campaign.update_character(character.id, {"inventory": remaining})
        state.shared_inventory.append(item)
        return ItemTransferredEvent(
            character_id=character.id, item_id=item.id, item_name=item.name, destination="shared"
        )

    # -------------------------------------------------------------- Equipment
    def equip_item(
        self,
        character_id: str,
        item_id: str,
        slot: EquipmentSlot,
        from_shared: bool = False,
    ) -> InventoryEvent:
        """Equip an item from the personal inventory or shared storage.

        The previously equipped item goes back to the personal inventory when it
        fits, otherwise to shared storage.
        """
        state = self._campaign.state
        if slot not in EQUIPMENT_SLOTS:
            return self._fail("invalid_slot", f"Unknown equipment slot '{slot}'.")
        character = state.find_character(character_id)
        if character is None:
            return self._fail("missing_character", f"Character '{character_id}' not found.")

        source = state.shared_inventory if from_shared else character.inventory
        item = _find_item(source, item_id)
        if item is None:
            return self._fail("missing_item", f"Item '{item_id}' not found.")

        shared = [entry for entry in state.shared_inventory if entry.id != item_id] if from_shared else None
        inventory = character.inventory if from_shared else [e for e in character.inventory if e.id != item_id]
        inventory = list(inventory)

        displaced = character.equipment.get(slot)
        displaced_to: Destination | None = None
        if displaced is not None:
            derived = compute_derived_stats(character)
            load = sum(entry.weight for entry in inventory)
            if load + displaced.weight <= derived.max_load:
                inventory.append(displaced)
                displaced_to = "personal"
            else:
                self._campaign.add_log(
                    "System", f"Inventory full. {displaced.name} moved to Shared Storage.", character.id
                )
                shared = list(shared if shared is not None else state.shared_inventory)
                shared.append(displaced)
                displaced_to = "shared"

        if shared is not None:
            state.shared_inventory[:] = shared
        self._campaign.update_character(
            character.id,
            {"inventory": inventory, "equipment": _with_slot(character.equipment, slot, item)},
        )
        return ItemEquippedEvent(
            character_id=character.id,
            item_id=item.id,
            item_name=item.name,
            slot=slot,
            displaced_item_id=displaced.id if displaced is not None else None,
            displaced_to=displaced_to,
        )

    def unequip_item(self, character_id: str, slot: EquipmentSlot) -> InventoryEvent:
        state = self._campaign.state
        character = state.find_character(character_id)
        if character is None:
            return self._fail("missing_character", f"Character '{character_id}' not found.")
        item = character.equipment.get(slot) if slot in EQUIPMENT_SLOTS else None
        if item is None:
            return self._fail("empty_slot", f"{character.name} has nothing equipped in '{slot}'.")

        equipment = _with_slot(character.equipment, slot, None)
        if compute_derived_stats(character).can_carry(item.weight):
            self._campaign.update_character(
                character.id, {"inventory": [*character.inventory, item], "equipment": equipment}
            )
            destination: Destination = "personal"
        else:
            self._campaign.add_log(
                "System", f"Cannot unequip {item.name}: Inventory full. Moved to Shared Storage.", character.id
            )
            state.shared_inventory.append(item)
            self._campaign.update_character(character.id, {"equipment": equipment})
            destination = "shared"
        return ItemUnequippedEvent(
            character_id=character.id, item_id=item.id, item_name=item.name, slot=slot, destination=destination
        )

    def move_equipped_to_shared(self, character_id: str, slot: EquipmentSlot) -> InventoryEvent:
        state = self._campaign.state
        character = state.find_character(character_id)
        if character is None:
            return self._fail("missing_character", f"Character '{character_id}' not found.")
        item = character.equipment.get(slot) if slot in EQUIPMENT_SLOTS else None
        if item is None:
            return self._fail("empty_slot", f"{character.name} has nothing equipped in '{slot}'.")

        self._campaign.add_log("System", f"{character.name} unequipped {item.name} to Shared Storage.", character.id)
        state.shared_inventory.append(item)
        self._campaign.update_character(character.id, {"equipment": _with_slot(character.equipment, slot, None)})
        return ItemUnequippedEvent(
            character_id=character.id, item_id=item.id, item_name=item.name, slot=slot, destination="shared"
        )

    @staticmethod
    def _fail(reason: str, message: str) -> InventoryFailedEvent:
        logger.debug("Inventory command rejected (%s): %s", reason, message)
        return InventoryFailedEvent(reason=reason, message=message)


def _find_item(items: Sequence[Item], item_id: str) -> Item | None:
    for item in items:
        if item.id == item_id:
            return item
    return None


def _with_slot(equipment: Equipment, slot: EquipmentSlot, item: Item | None) -> Equipment:
    updated = Equipment(weapon=equipment.weapon, armor=equipment.armor, ac_core=equipment.ac_core)
    updated.set(slot, item)
    return updated
