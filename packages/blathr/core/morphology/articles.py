"""Indefinite article selection ("a" vs "an") by initial sound."""

from __future__ import annotations

# Vowel letter, consonant sound
CONSONANT_SOUND_WORDS: frozenset[str] = frozenset(
    {
        "one", "once", "ones",
        "uni", "uniform", "uniforms", "union", "unions", "unique", "unit", "units",
        "united", "unity", "universal", "universe", "university", "universities",
        "use", "used", "useful", "useless", "user", "users", "uses", "using",
        "usual", "usually", "utensil", "utensils", "utility", "utilities", "utopia",
        "european", "europeans", "euphoria", "euphemism",
        "ewe", "ewes",
    }
)  # fmt: skip

# Consonant letter, vowel sound
VOWEL_SOUND_WORDS: frozenset[str] = frozenset(
    {
        "hour", "hours", "hourly",
        "heir", "heirs", "heiress", "heirloom", "heirlooms",
        "honest", "honestly", "honesty", "honor", "honors", "honorable", "honorary",
        "honour", "honours",
        "herb", "herbs", "herbal",
    }
)  # fmt: skip

# Letters whose spoken name starts with a vowel sound (for acronyms)
VOWEL_SOUND_LETTERS: frozenset[str] = frozenset("aefhilmnorsx")

_MAX_ACRONYM_LENGTH = 5


def use_an(word: str) -> bool:
    """Return True if the word takes "an" rather than "a".

    Args:
        word: The word that follows the article.

    Returns:
        True for vowel-sound words, including acronyms such as "FBI".

    Example:
        >>> use_an("hour")
        True
        >>> use_an("unicorn")
        False
    """
    if not word:
        return False

    lower = word.lower()
    first = lower[0]

    if lower in CONSONANT_SOUND_WORDS:
        return False
    if lower in VOWEL_SOUND_WORDS:
        return True

    for exception in CONSONANT_SOUND_WORDS:
        if lower.startswith(exception) and len(lower) > len(exception):
            if lower[len(exception)].isalpha():
                return False

    if word == word.upper() and len(word) <= _MAX_ACRONYM_LENGTH:
        return first in VOWEL_SOUND_LETTERS

    return first in "aeiou"


def get_article(word: str) -> str:
    """Return "a" or "an" for the given following word."""
    return "an" if use_an(word) else "a"


def with_article(word: str) -> str:
    """Prefix a word with its indefinite article."""
    return f"{get_article(word)} {word}"
