"""Factory for cloning item templates into runtime instances."""
from __future__ import annotations

from dataclasses import replace

from divegm.core.rng import RNG
from divegm.data.repositories import ItemsRepository
from divegm.domain.entities import Item
from divegm.services.errors import FactoryError

from .id_factory import make_instance_id


def clone_item(template: Item, rng: RNG) -> Item:
    """Return an independent copy of `template` with a fresh id."""
    return replace(template, id=make_instance_id("item", rng), template_id=template.template_id or template.id)


def create_item_instance(item_id: str, items_repo: ItemsRepository, rng: RNG) -> Item:
    """Instantiate an item template from the registry."""
    try:
        template = items_repo.get(item_id)
    except KeyError as exc:
        raise FactoryError(f"Item '{item_id}' not found.") from exc
    return clone_item(template, rng)
