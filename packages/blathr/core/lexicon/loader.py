"""Lexicon loading and validation.

Schema checks come from the pydantic models; cross-reference checks
(dangling term-set, pattern and distribution references) are reported as
warnings because the engine tolerates them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from blathr.core.config.loader import load_config, parse_document
from blathr.core.enums import PartOfSpeech, SentenceType
from blathr.core.errors import LexiconLoadError
from blathr.core.lexicon.models import Lexicon
from blathr.core.lexicon.store import SENTENCE_TYPES_DISTRIBUTION, TERM_SET_BIAS_DISTRIBUTION

logger = logging.getLogger(__name__)

_SENTENCE_TYPE_KEYS = frozenset(t.value for t in SentenceType)
_POS_VALUES = frozenset(p.value for p in PartOfSpeech)


class IssueSeverity(str, Enum):
    """Severity of a lexicon validation issue."""

    ERROR = "error"
    WARNING = "warning"


class LexiconIssue(BaseModel):
    """One validation finding, located by a dotted path into the document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    message: str
    severity: IssueSeverity


class LexiconValidationResult(BaseModel):
    """Outcome of validate_lexicon()."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    valid: bool
    errors: list[LexiconIssue] = Field(default_factory=list)
    warnings: list[LexiconIssue] = Field(default_factory=list)
    lexicon: Lexicon | None = None


def _format_loc(loc: Sequence[int | str]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _warn(path: str, message: str) -> LexiconIssue:
    return LexiconIssue(path=path, message=message, severity=IssueSeverity.WARNING)


def _cross_reference_warnings(lexicon: Lexicon) -> list[LexiconIssue]:
    warnings: list[LexiconIssue] = []
    term_sets = lexicon.term_sets
    patterns = lexicon.patterns

    for set_id, term_set in term_sets.items():
        if not term_set.terms:
            warnings.append(_warn(f"termSets.{set_id}.terms", "Term set has no terms"))

    for i, correlation in enumerate(lexicon.correlations):
        path = f"correlations[{i}]"
        when = correlation.when
        if when.chosen_term_set is not None and when.chosen_term_set not in term_sets:
            warnings.append(_warn(f"{path}.when.chosenTermSet", f"Unknown term set: {when.chosen_term_set}"))
        if when.used_pattern is not None and when.used_pattern not in patterns:
            warnings.append(_warn(f"{path}.when.usedPattern", f"Unknown pattern: {when.used_pattern}"))
        for j, boost in enumerate(correlation.then_boost):
            if boost.term_set is not None and boost.term_set not in term_sets:
                warnings.append(_warn(f"{path}.thenBoost[{j}].termSet", f"Unknown term set: {boost.term_set}"))
            if boost.pattern is not None and boost.pattern not in patterns:
                warnings.append(_warn(f"{path}.thenBoost[{j}].pattern", f"Unknown pattern: {boost.pattern}"))

    for name, archetype in lexicon.archetypes.items():
        for role, distribution_id in archetype.distributions.items():
            path = f"archetypes.{name}.distributions.{role}"
            entries = lexicon.distributions.get(distribution_id)
            if entries is None:
                warnings.append(_warn(path, f"Unknown distribution: {distribution_id}"))
                continue
            for entry in entries:
                if role == TERM_SET_BIAS_DISTRIBUTION and entry.key not in term_sets:
                    warnings.append(_warn(path, f"Distribution key is not a term set: {entry.key}"))
                elif role == SENTENCE_TYPES_DISTRIBUTION and entry.key not in _SENTENCE_TYPE_KEYS:
                    warnings.append(_warn(path, f"Distribution key is not a sentence type: {entry.key}"))

    for i, constraint in enumerate(lexicon.constraints):
        path = f"constraints[{i}].target"
        if constraint.target.startswith("termSet:") and constraint.target[8:] not in term_sets:
            warnings.append(_warn(path, f"Unknown term set: {constraint.target[8:]}"))
        elif constraint.target.startswith("pos:") and constraint.target[4:] not in _POS_VALUES:
            warnings.append(_warn(path, f"Invalid POS: {constraint.target[4:]}"))

    return warnings


def validate_lexicon(data: Mapping[str, Any]) -> LexiconValidationResult:
    """Validate a raw lexicon document.

    Args:
        data: Parsed JSON/YAML document.

    Returns:
        Result with schema errors, cross-reference warnings and, when valid,
        the parsed Lexicon.
    """
    if not isinstance(data, Mapping):
        return LexiconValidationResult(
            valid=False,
            errors=[LexiconIssue(path="", message="Lexicon must be an object", severity=IssueSeverity.ERROR)],
        )

    try:
        lexicon = Lexicon.model_validate(data)
    except ValidationError as e:
        errors = [
            LexiconIssue(path=_format_loc(err["loc"]), message=err["msg"], severity=IssueSeverity.ERROR)
            for err in e.errors()
        ]
        return LexiconValidationResult(valid=False, errors=errors)

    return LexiconValidationResult(valid=True, warnings=_cross_reference_warnings(lexicon), lexicon=lexicon)


def load_lexicon_from_dict(data: Mapping[str, Any]) -> Lexicon:
    """Validate a parsed document and return the Lexicon.

    Raises:
        LexiconLoadError: If the document has schema errors.
    """
    result = validate_lexicon(data)
    if not result.valid or result.lexicon is None:
        details = "; ".join(f"{issue.path or '<root>'}: {issue.message}" for issue in result.errors)
        raise LexiconLoadError(f"Invalid lexicon: {details}", issues=result.errors)

    for issue in result.warnings:
        logger.warning("Lexicon %s: %s: %s", result.lexicon.id, issue.path, issue.message)
    return result.lexicon


def load_lexicon_from_string(text: str, fmt: str = "json") -> Lexicon:
    """Parse and validate a lexicon from JSON or YAML text.

    Raises:
        LexiconLoadError: If the text cannot be parsed or fails validation.
    """
    try:
        data = parse_document(text, fmt, source="lexicon")
    except ValueError as e:
        raise LexiconLoadError(f"Could not parse lexicon: {e}") from e
    return load_lexicon_from_dict(data)


def load_lexicon(path: str | Path) -> Lexicon:
    """Load and validate a lexicon file (.json, .yaml or .yml).

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or unparseable
        LexiconLoadError: If the document fails validation
    """
    data = load_config(path)
    lexicon = load_lexicon_from_dict(data)
    logger.info("Loaded lexicon %s (%s) from %s", lexicon.id, lexicon.version or "unversioned", path)
    return lexicon
