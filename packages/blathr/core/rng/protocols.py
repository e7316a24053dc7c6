"""Protocol for random sources consumed by the engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@dataclass(frozen=True)
class WeightedItem(Generic[T]):
    """An item paired with its sampling weight.

    Attributes:
        item: The candidate value.
        weight: Sampling weight; non-positive weights are never selected.
    """

    item: T
    weight: float


@runtime_checkable
class RngProtocol(Protocol):
    """Protocol for deterministic random sources.

    Custom implementations must honor the same semantics as SeedableRng:
    inclusive integer ranges, EmptyInputError on empty picks, and a
    non-mutating shuffle.
    """

    def seed(self, value: int) -> None:
        """Reset internal state from a seed."""
        ...

    def float(self) -> float:
        """Return a value in [0, 1)."""
        ...

    def int(self, low: int, high: int) -> int:
        """Return an integer in the inclusive range [low, high]."""
        ...

    def pick(self, items: Sequence[T]) -> T:
        """Pick one item uniformly."""
        ...

    def weighted_pick(self, items: Sequence[WeightedItem[T]]) -> T:
        """Pick one item proportionally to its weight."""
        ...

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy of items."""
        ...

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        ...
