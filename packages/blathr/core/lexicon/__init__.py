"""Lexicon models, loading and sampling."""

from blathr.core.lexicon.loader import (
    IssueSeverity,
    LexiconIssue,
    LexiconValidationResult,
    load_lexicon,
    load_lexicon_from_dict,
    load_lexicon_from_string,
    validate_lexicon,
)
from blathr.core.lexicon.models import (
    Archetype,
    ChoiceEvent,
    Constraint,
    Correlation,
    CorrelationBoost,
    CorrelationCondition,
    DistributionEntry,
    Invariant,
    LexicalItem,
    Lexicon,
    Pattern,
    PatternQuery,
    Relation,
    RelationResult,
    Term,
    TermFeatures,
    TermQuery,
    TermSet,
)
from blathr.core.lexicon.store import LexiconStore

__all__ = [
    # Loading
    "IssueSeverity",
    "LexiconIssue",
    "LexiconValidationResult",
    "load_lexicon",
    "load_lexicon_from_dict",
    "load_lexicon_from_string",
    "validate_lexicon",
    # Models
    "Archetype",
    "ChoiceEvent",
    "Constraint",
    "Correlation",
    "CorrelationBoost",
    "CorrelationCondition",
    "DistributionEntry",
    "Invariant",
    "LexicalItem",
    "Lexicon",
    "Pattern",
    "PatternQuery",
    "Relation",
    "RelationResult",
    "Term",
    "TermFeatures",
    "TermQuery",
    "TermSet",
    # Store
    "LexiconStore",
]
