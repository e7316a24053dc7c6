"""Seeded random number generation."""

from blathr.core.rng.protocols import RngProtocol, WeightedItem
from blathr.core.rng.seedable import SeedableRng

__all__ = [
    "RngProtocol",
    "SeedableRng",
    "WeightedItem",
]
