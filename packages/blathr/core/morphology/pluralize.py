"""English noun pluralization and singularization."""

from __future__ import annotations

IRREGULAR_PLURALS: dict[str, str] = {
    # People and body
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "louse": "lice",
    "ox": "oxen",
    # Same in both numbers
    "fish": "fish",
    "sheep": "sheep",
    "deer": "deer",
    "moose": "moose",
    "swine": "swine",
    "buffalo": "buffalo",
    "shrimp": "shrimp",
    "trout": "trout",
    "salmon": "salmon",
    "aircraft": "aircraft",
    "series": "series",
    "species": "species",
    "corps": "corps",
    "means": "means",
    "news": "news",
    "offspring": "offspring",
    "staff": "staff",
    # Latin and Greek
    "analysis": "analyses",
    "basis": "bases",
    "crisis": "crises",
    "diagnosis": "diagnoses",
    "hypothesis": "hypotheses",
    "oasis": "oases",
    "parenthesis": "parentheses",
    "synopsis": "synopses",
    "thesis": "theses",
    "criterion": "criteria",
    "phenomenon": "phenomena",
    "datum": "data",
    "medium": "media",
    "memorandum": "memoranda",
    "curriculum": "curricula",
    "symposium": "symposia",
    "appendix": "appendices",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "vortex": "vortices",
    "focus": "foci",
    "fungus": "fungi",
    "cactus": "cacti",
    "nucleus": "nuclei",
    "radius": "radii",
    "stimulus": "stimuli",
    "syllabus": "syllabi",
    "alumnus": "alumni",
    # -f / -fe
    "life": "lives",
    "wife": "wives",
    "knife": "knives",
    "leaf": "leaves",
    "half": "halves",
    "self": "selves",
    "shelf": "shelves",
    "calf": "calves",
    "loaf": "loaves",
    "wolf": "wolves",
    "thief": "thieves",
}

IRREGULAR_SINGULARS: dict[str, str] = {plural: single for single, plural in IRREGULAR_PLURALS.items()}

# -o nouns taking -es
_O_ES_WORDS = frozenset({"hero", "potato", "tomato", "echo", "torpedo", "veto"})
_VOWELS = "aeiou"


def _match_case(source: str, replacement: str) -> str:
    if source == source.upper():
        return replacement.upper()
    if source[0].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


def pluralize(word: str) -> str:
    """Return the plural form of a noun.

    Example:
        >>> pluralize("box")
        'boxes'
        >>> pluralize("Child")
        'Children'
    """
    if not word:
        return word

    lower = word.lower()
    if lower in IRREGULAR_PLURALS:
        return _match_case(word, IRREGULAR_PLURALS[lower])

    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"

    if lower.endswith("y") and (len(lower) < 2 or lower[-2] not in _VOWELS):
        return word[:-1] + "ies"

    if lower.endswith("o") and lower in _O_ES_WORDS:
        return word + "es"

    return word + "s"


def singularize(word: str) -> str:
    """Return the singular form of a noun (heuristic for regular nouns)."""
    if not word:
        return word

    lower = word.lower()
    if lower in IRREGULAR_SINGULARS:
        return _match_case(word, IRREGULAR_SINGULARS[lower])

    if lower.endswith("ies") and len(lower) > 4:
        return word[:-3] + "y"

    if lower.endswith("es"):
        base = lower[:-2]
        if base.endswith(("ch", "sh", "x", "z", "s", "o")):
            return word[:-2]
        return word[:-1]

    if lower.endswith("s") and not lower.endswith("ss"):
        return word[:-1]

    return word


def is_plural(word: str) -> bool:
    """Guess whether a noun is plural."""
    lower = word.lower()
    if lower in IRREGULAR_SINGULARS:
        return True
    if lower in IRREGULAR_PLURALS and IRREGULAR_PLURALS[lower] != lower:
        return False
    return lower.endswith("s") and not lower.endswith("ss")
