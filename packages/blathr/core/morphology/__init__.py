"""Pure morphology helpers: articles, plurals, verb forms, text formatting."""

from blathr.core.morphology.articles import get_article, use_an, with_article
from blathr.core.morphology.conjugate import (
    conjugate_be,
    conjugate_do,
    conjugate_have,
    past_participle,
    past_tense,
    present_participle,
    third_person_singular,
)
from blathr.core.morphology.normalize import (
    capitalize,
    ends_with_punctuation,
    ensure_end_punctuation,
    format_paragraph,
    format_sentence,
    format_text_block,
    has_no_double_spaces,
    is_capitalized,
    join_tokens,
    normalize_whitespace,
)
from blathr.core.morphology.pluralize import is_plural, pluralize, singularize

__all__ = [
    "capitalize",
    "conjugate_be",
    "conjugate_do",
    "conjugate_have",
    "ends_with_punctuation",
    "ensure_end_punctuation",
    "format_paragraph",
    "format_sentence",
    "format_text_block",
    "get_article",
    "has_no_double_spaces",
    "is_capitalized",
    "is_plural",
    "join_tokens",
    "normalize_whitespace",
    "past_participle",
    "past_tense",
    "pluralize",
    "present_participle",
    "singularize",
    "third_person_singular",
    "use_an",
    "with_article",
]
