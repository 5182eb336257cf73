"""Exploration node definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from divegm.core.types import NodeType

DEFAULT_NODE_WEIGHT = 10


@dataclass(slots=True)
class NodeDef:
    """Content template for a generated exploration node."""

    id: str
    type: NodeType
    description: str
    weight: int = DEFAULT_NODE_WEIGHT
    enemy_pool: Tuple[str, ...] = ()
    item_pool: Tuple[str, ...] = ()
