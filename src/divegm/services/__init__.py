"""Service layer exports."""

from .errors import FactoryError, SaveLoadError
from .campaign_service import CampaignService, new_campaign_state
from .inventory_service import (
    InventoryFailedEvent,
    ItemEquippedEvent,
    ItemTransferredEvent,
    ItemUnequippedEvent,
    InventoryService,
)
from .effect_application import AppliedAttack, apply_attack_result
from .combat_service import CombatService, RoundAdvancedEvent
from .exploration_service import AttributeCheckResult, ExplorationNode, ExplorationService
from .save_service import SaveService

__all__ = [
    "AppliedAttack",
    "AttributeCheckResult",
    "CampaignService",
    "CombatService",
    "ExplorationNode",
    "ExplorationService",
    "FactoryError",
    "InventoryFailedEvent",
    "InventoryService",
    "ItemEquippedEvent",
    "ItemTransferredEvent",
    "ItemUnequippedEvent",
    "RoundAdvancedEvent",
    "SaveLoadError",
    "SaveService",
    "apply_attack_result",
    "new_campaign_state",
]
