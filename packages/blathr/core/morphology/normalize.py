"""Token joining and sentence/paragraph formatting."""

from __future__ import annotations

import re
from collections.abc import Sequence

TERMINAL_PUNCTUATION: frozenset[str] = frozenset(".!?;:")

_MULTI_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.,!?;:)])")
_SPACE_AFTER_PAREN = re.compile(r"\(\s+")
_DOUBLE_SPACE = re.compile(r" {2,}")
_LEADING_PUNCT = re.compile(r"^[.,!?;:)]")
_FIRST_LETTER = re.compile(r"[A-Za-z]")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs and tidy spacing around punctuation.

    Punctuation inside a word (``Node.js``, ``3.5``) is left alone; spacing
    after punctuation tokens is settled by join_tokens.
    """
    text = _MULTI_WHITESPACE.sub(" ", text)
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = _SPACE_AFTER_PAREN.sub("(", text)
    return text.strip()


def capitalize(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def ensure_end_punctuation(text: str, default: str = ".") -> str:
    """Append terminal punctuation unless the text already ends with some."""
    trimmed = text.rstrip()
    if not trimmed:
        return trimmed
    if trimmed[-1] in TERMINAL_PUNCTUATION:
        return trimmed
    return trimmed + default


def is_capitalized(text: str) -> bool:
    """Return True if the first letter is uppercase (texts without letters pass)."""
    match = _FIRST_LETTER.search(text)
    if match is None:
        return True
    return match.group(0).isupper()


def ends_with_punctuation(text: str) -> bool:
    """Return True if the text ends in one of . ! ? ; : (empty text passes)."""
    trimmed = text.rstrip()
    if not trimmed:
        return not text
    return trimmed[-1] in TERMINAL_PUNCTUATION


def has_no_double_spaces(text: str) -> bool:
    """Return True if no run of two or more spaces occurs."""
    return _DOUBLE_SPACE.search(text) is None


def join_tokens(tokens: Sequence[str]) -> str:
    """Join tokens with single spaces, attaching punctuation to the previous token.

    Example:
        >>> join_tokens(["well", ",", "the", "cat", "sleeps"])
        'well, the cat sleeps'
    """
    if not tokens:
        return ""

    parts = [tokens[0]]
    for token in tokens[1:]:
        if _LEADING_PUNCT.match(token) or parts[-1].endswith("("):
            parts.append(token)
        else:
            parts.append(" " + token)
    return "".join(parts)


def format_sentence(text: str, punctuation: str = ".") -> str:
    """Normalize whitespace, capitalize and terminate a sentence."""
    return ensure_end_punctuation(capitalize(normalize_whitespace(text)), punctuation)


def format_paragraph(sentences: Sequence[str]) -> str:
    """Format each sentence and join them with single spaces."""
    return " ".join(format_sentence(sentence) for sentence in sentences)


def format_text_block(paragraphs: Sequence[str]) -> str:
    """Join paragraphs with blank lines."""
    return "\n\n".join(paragraphs)
