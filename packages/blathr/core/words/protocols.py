"""Word source capability consumed as the last-resort fallback."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class WordSource(Protocol):
    """Protocol for external word sources (faker-style adapters).

    Each method returns one word. Implementations should be deterministic
    when seeded; the engine treats them as opaque.
    """

    def noun(self) -> str:
        """Return a noun."""
        ...

    def verb(self) -> str:
        """Return a verb in base form."""
        ...

    def adjective(self) -> str:
        """Return an adjective."""
        ...

    def adverb(self) -> str:
        """Return an adverb."""
        ...

    def preposition(self) -> str:
        """Return a preposition."""
        ...

    def conjunction(self) -> str:
        """Return a coordinating conjunction."""
        ...

    def interjection(self) -> str:
        """Return an interjection."""
        ...

    def determiner(self) -> str:
        """Return a determiner."""
        ...
