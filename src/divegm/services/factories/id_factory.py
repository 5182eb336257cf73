"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from divegm.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate a deterministic identifier using the provided RNG."""
    suffix = rng.getrandbits(48)
    return f"{prefix}_{suffix:012x}"
