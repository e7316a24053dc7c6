"""Built-in word source backed by the default tables."""

from __future__ import annotations

from collections.abc import Sequence

from blathr.core.rng import RngProtocol, SeedableRng
from blathr.core.words import defaults


class SimpleWordSource:
    """WordSource implementation that picks from the curated default tables.

    Uses its own RNG unless one is shared explicitly, so drawing from it
    does not disturb a generator's stream.

    Example:
        >>> source = SimpleWordSource(seed=7)
        >>> source.noun() in defaults.DEFAULT_NOUNS
        True
    """

    def __init__(self, rng: RngProtocol | None = None, *, seed: int = 0) -> None:
        self._rng = rng if rng is not None else SeedableRng(seed)

    def seed(self, value: int) -> None:
        """Reseed the underlying RNG."""
        self._rng.seed(value)

    def _pick(self, words: Sequence[str]) -> str:
        return self._rng.pick(words)

    def noun(self) -> str:
        return self._pick(defaults.DEFAULT_NOUNS)

    def verb(self) -> str:
        return self._pick(defaults.DEFAULT_VERBS)

    def adjective(self) -> str:
        return self._pick(defaults.DEFAULT_ADJECTIVES)

    def adverb(self) -> str:
        return self._pick(defaults.DEFAULT_ADVERBS)

    def preposition(self) -> str:
        return self._pick(defaults.DEFAULT_PREPOSITIONS)

    def conjunction(self) -> str:
        return self._pick(defaults.DEFAULT_CONJUNCTIONS)

    def interjection(self) -> str:
        return self._pick(defaults.DEFAULT_INTERJECTIONS)

    def determiner(self) -> str:
        return self._pick(defaults.DEFAULT_DETERMINERS)
