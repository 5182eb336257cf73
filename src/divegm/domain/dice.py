"""Dice pool rolling."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from divegm.core.rng import RNG

DIE_FACES = 10
SUCCESS_THRESHOLD = 6
CRITICAL_TENS = 2


@dataclass(frozen=True, slots=True)
class DiceRoll:
    """Outcome of rolling a pool of d10s."""

    rolls: Tuple[int, ...]

    @property
    def size(self) -> int:
        return len(self.rolls)

    @property
    def successes(self) -> int:
        return sum(1 for face in self.rolls if face >= SUCCESS_THRESHOLD)

    @property
    def tens(self) -> int:
        return sum(1 for face in self.rolls if face == DIE_FACES)

    @property
    def is_critical(self) -> bool:
        return self.tens >= CRITICAL_TENS


def roll_pool(rng: RNG, size: int) -> DiceRoll:
    """Roll `size` independent d10s; non-positive sizes roll nothing."""
    return DiceRoll(rolls=tuple(rng.randint(1, DIE_FACES) for _ in range(max(0, size))))
