"""Default word tables and word-source adapters."""

from blathr.core.words.protocols import WordSource
from blathr.core.words.simple_source import SimpleWordSource

__all__ = [
    "SimpleWordSource",
    "WordSource",
]
