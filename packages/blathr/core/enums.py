"""Enumerations shared across the generation engine."""

from __future__ import annotations

from enum import Enum


class PartOfSpeech(str, Enum):
    """Part-of-speech tags used by term sets and word requests.

    Attributes:
        NOUN: Nouns.
        VERB: Verbs (base form).
        ADJ: Adjectives.
        ADV: Adverbs.
        PREP: Prepositions.
        CONJ: Conjunctions.
        INTJ: Interjections.
        DET: Determiners.
    """

    NOUN = "noun"
    VERB = "verb"
    ADJ = "adj"
    ADV = "adv"
    PREP = "prep"
    CONJ = "conj"
    INTJ = "intj"
    DET = "det"


class Scope(str, Enum):
    """Nesting levels that bound bias and history lifetime."""

    TOKEN = "token"
    PHRASE = "phrase"
    CLAUSE = "clause"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"
    TEXT = "text"


class GrammaticalNumber(str, Enum):
    """Grammatical number for agreement."""

    SINGULAR = "singular"
    PLURAL = "plural"


class Tense(str, Enum):
    """Verb forms the phrase builders can produce.

    Attributes:
        PRESENT: Simple present, agreement-inflected.
        PAST: Simple past.
        PROGRESSIVE: Present progressive ("is running").
        FUTURE: Future with "will".
        BASE: Uninflected base form, used after do-support.
    """

    PRESENT = "present"
    PAST = "past"
    PROGRESSIVE = "progressive"
    FUTURE = "future"
    BASE = "base"


class SentenceType(str, Enum):
    """Sentence shapes, in weighted-selection order."""

    SIMPLE_DECLARATIVE = "simpleDeclarative"
    COMPOUND = "compound"
    INTRO_ADVERBIAL = "introAdverbial"
    SUBORDINATE = "subordinate"
    INTERJECTION = "interjection"
    QUESTION = "question"


class PatternType(str, Enum):
    """Structural pattern categories a lexicon may declare."""

    SENTENCE = "sentence"
    NOUN_PHRASE = "nounPhrase"
    VERB_PHRASE = "verbPhrase"
    PREP_PHRASE = "prepPhrase"
    ADJ_PHRASE = "adjPhrase"
    ADV_PHRASE = "advPhrase"
    CLAUSE = "clause"


class ConstraintLevel(str, Enum):
    """Enforcement level of a constraint.

    Attributes:
        HARD: Failure triggers a retry.
        SOFT: Failure is reported only.
    """

    HARD = "hard"
    SOFT = "soft"


class ConstraintType(str, Enum):
    """Constraint rule kinds."""

    NO_REPEAT = "noRepeat"
    MAX_COUNT = "maxCount"
    MIN_COUNT = "minCount"
    REQUIRED = "required"
    FORBIDDEN = "forbidden"
    CUSTOM = "custom"


class InvariantType(str, Enum):
    """Invariant rule kinds, checked on rendered text."""

    CAPITALIZATION = "capitalization"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"
    AGREEMENT = "agreement"
    CUSTOM = "custom"


class ChoiceKind(str, Enum):
    """Kinds of choice events recorded in generation history."""

    TERM = "term"
    PATTERN = "pattern"
    TEMPLATE = "template"


class RelationDirection(str, Enum):
    """Direction of a relation match relative to the queried term."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"
