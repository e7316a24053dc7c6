"""Public generation API."""

from blathr.core.generator.models import (
    GeneratedText,
    GenerationMeta,
    GenerationTrace,
    ParagraphOptions,
    ParagraphTrace,
    SentenceOptions,
    SentenceTrace,
    TextBlockOptions,
    TokenTrace,
)
from blathr.core.generator.text_generator import DEFAULT_ARCHETYPE, TextGenerator

__all__ = [
    "DEFAULT_ARCHETYPE",
    "GeneratedText",
    "GenerationMeta",
    "GenerationTrace",
    "ParagraphOptions",
    "ParagraphTrace",
    "SentenceOptions",
    "SentenceTrace",
    "TextBlockOptions",
    "TextGenerator",
    "TokenTrace",
]
