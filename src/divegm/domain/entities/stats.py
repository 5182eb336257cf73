"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Stats:
    """Stores the four core attributes; also used as a partial modifier block."""

    PHY: int = 0
    AGI: int = 0
    MND: int = 0
    SYN: int = 0

    def get(self, stat_name: str) -> int:
        return int(getattr(self, stat_name))

    def plus(self, other: Stats | None) -> Stats:
        """Return a new block with the other block's values added."""
        if other is None:
            return Stats(PHY=self.PHY, AGI=self.AGI, MND=self.MND, SYN=self.SYN)
        return Stats(
            PHY=self.PHY + other.PHY,
            AGI=self.AGI + other.AGI,
            MND=self.MND + other.MND,
            SYN=self.SYN + other.SYN,
        )


@dataclass(slots=True)
class HitPoints:
    current: int
    max: int
