"""Factory helpers for runtime entities."""

from .character_factory import create_character
from .enemy_factory import create_enemy_instance
from .id_factory import make_instance_id
from .item_factory import clone_item, create_item_instance

__all__ = [
    "clone_item",
    "create_character",
    "create_enemy_instance",
    "create_item_instance",
    "make_instance_id",
]
