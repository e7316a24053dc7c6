"""Phrase builders and sentence templates."""

from blathr.core.grammar.models import PhraseLimits, PhraseResult, SentenceResult
from blathr.core.grammar.phrases import PRONOUN_FEATURES, PhraseBuilders
from blathr.core.grammar.templates import WH_WORDS, SentenceTemplates

__all__ = [
    "PRONOUN_FEATURES",
    "WH_WORDS",
    "PhraseBuilders",
    "PhraseLimits",
    "PhraseResult",
    "SentenceResult",
    "SentenceTemplates",
]
