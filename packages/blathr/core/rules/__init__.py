"""Constraint and invariant rule engine."""

from blathr.core.rules.engine import RuleEngine, count_target, word_tokens
from blathr.core.rules.models import ConstraintResult, InvariantResult, ValidationResult
from blathr.core.rules.targets import (
    CountTarget,
    CountUnit,
    LiteralTarget,
    PosTarget,
    Target,
    TermSetTarget,
    parse_target,
)

__all__ = [
    "ConstraintResult",
    "CountTarget",
    "CountUnit",
    "InvariantResult",
    "LiteralTarget",
    "PosTarget",
    "RuleEngine",
    "Target",
    "TermSetTarget",
    "ValidationResult",
    "count_target",
    "parse_target",
    "word_tokens",
]
