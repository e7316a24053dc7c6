"""Exception taxonomy for the generation engine.

Constraint and invariant failures are not errors: they drive the retry
loop and only surface as trace data. The exceptions below are raised for
configuration bugs (empty inputs, missing terms with fallback disabled,
non-positive weight totals) and for strict-mode exhaustion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blathr.core.rules.models import ValidationResult


class BlathrError(Exception):
    """Base class for all engine errors."""

    pass


class EmptyInputError(BlathrError, ValueError):
    """Raised when the RNG is asked to pick from nothing."""

    pass


class NoTermFoundError(BlathrError, LookupError):
    """Raised when lexicon sampling fails and fallback is disallowed."""

    def __init__(self, pos: str, message: str | None = None) -> None:
        self.pos = pos
        super().__init__(message or f"No term found for part of speech '{pos}'")


class GenerationFailedError(BlathrError, RuntimeError):
    """Raised in strict mode when the sentence attempt budget is exhausted."""

    def __init__(
        self,
        attempts: int,
        last_validation: ValidationResult | None = None,
    ) -> None:
        self.attempts = attempts
        self.last_validation = last_validation
        super().__init__(f"Failed to generate a valid sentence after {attempts} attempts")


class InvalidConfigurationError(BlathrError, ValueError):
    """Raised when a weight total that must be positive is not."""

    pass


class ArchetypeNotFoundError(BlathrError, KeyError):
    """Raised when selecting an archetype the lexicon does not define."""

    pass


class LexiconLoadError(BlathrError, ValueError):
    """Raised when a lexicon document fails validation.

    Attributes:
        issues: Validation issues collected while loading.
    """

    def __init__(self, message: str, issues: list[Any] | None = None) -> None:
        self.issues = issues or []
        super().__init__(message)
