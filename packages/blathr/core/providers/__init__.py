"""Word providers."""

from blathr.core.providers.word_provider import WordProvider

__all__ = ["WordProvider"]
