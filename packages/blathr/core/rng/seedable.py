"""Mulberry32-based deterministic random source.

The generator keeps a single 32-bit state word. Every draw advances the
state by a fixed odd increment and mixes it with multiply/xorshift steps,
so a given seed yields the same stream on every platform.
"""

from __future__ import annotations

import builtins
import logging
import math
from collections.abc import Sequence
from typing import TypeVar

from blathr.core.errors import EmptyInputError
from blathr.core.rng.protocols import WeightedItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296


def _imul(a: builtins.int, b: builtins.int) -> builtins.int:
    """32-bit wrapping multiplication."""
    return (a * b) & _MASK32


class SeedableRng:
    """Seeded pseudo-random generator (Mulberry32).

    Example:
        >>> rng = SeedableRng(42)
        >>> first = rng.float()
        >>> rng.seed(42)
        >>> rng.float() == first
        True
    """

    def __init__(self, seed: builtins.int = 0) -> None:
        self._state = 0
        self.seed(seed)

    def seed(self, value: builtins.int) -> None:
        """Reset the 32-bit state.

        Args:
            value: Any integer; only its low 32 bits are kept.
        """
        self._state = builtins.int(value) & _MASK32

    @property
    def state(self) -> builtins.int:
        """Current internal state word."""
        return self._state

    def float(self) -> builtins.float:
        """Return the next value in [0, 1)."""
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def int(self, low: builtins.int, high: builtins.int) -> builtins.int:
        """Return an integer in the inclusive range [low, high].

        Bounds are swapped when given in reverse order.
        """
        if low > high:
            low, high = high, low
        return math.floor(self.float() * (high - low + 1)) + low

    def pick(self, items: Sequence[T]) -> T:
        """Pick one item uniformly.

        Raises:
            EmptyInputError: If items is empty.
        """
        if len(items) == 0:
            raise EmptyInputError("Cannot pick from an empty sequence")
        return items[self.int(0, len(items) - 1)]

    def weighted_pick(self, items: Sequence[WeightedItem[T]]) -> T:
        """Pick one item proportionally to its weight.

        Items with non-positive weight are never selected.

        Raises:
            EmptyInputError: If no item has a positive weight.
        """
        candidates = [entry for entry in items if entry.weight > 0]
        if not candidates:
            raise EmptyInputError("Cannot weighted-pick: no item has a positive weight")

        total = sum(entry.weight for entry in candidates)
        remaining = self.float() * total
        for entry in candidates:
            remaining -= entry.weight
            if remaining <= 0:
                return entry.item

        # Floating point residue
        return candidates[-1].item

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy; the input is left unmodified."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def chance(self, probability: builtins.float) -> bool:
        """Return True with the given probability.

        Always consumes one draw so the stream stays aligned.
        """
        return self.float() < probability
