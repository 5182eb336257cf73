"""Items repository."""
from __future__ import annotations

from typing import Dict

from divegm.data.errors import DataValidationError
from divegm.data.repositories.base import RepositoryBase
from divegm.data.repositories.codecs import dump_item, parse_item_payload
from divegm.domain.entities import Item


class ItemsRepository(RepositoryBase[Item]):
    """Loads and validates item templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, Item]:
        items: Dict[str, Item] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Item IDs must be strings.")
            items[raw_id] = parse_item_payload(raw_id, payload, f"item '{raw_id}'")
        return items

    def _dump(self, definition: Item) -> dict[str, object]:
        return dump_item(definition)
