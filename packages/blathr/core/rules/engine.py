"""Constraint and invariant evaluation.

Constraints look at tokens and at the choice events recorded since the
innermost frame of the validated scope. Invariants look only at rendered
text. Failures never raise; they drive the retry loop and are reported.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext
from blathr.core.enums import (
    ChoiceKind,
    ConstraintLevel,
    ConstraintType,
    InvariantType,
    PartOfSpeech,
    Scope,
)
from blathr.core.lexicon.models import ChoiceEvent, Constraint, Invariant
from blathr.core.morphology import ends_with_punctuation, has_no_double_spaces, is_capitalized
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

logger = logging.getLogger(__name__)

_PUNCTUATION_TOKEN = re.compile(r"^[^\w]+$")

ConstraintHandler = Callable[["RuleEngine", Constraint, Target, Sequence[str], Sequence[ChoiceEvent]], ConstraintResult]


def word_tokens(tokens: Sequence[str]) -> list[str]:
    """Split tokens into words, dropping punctuation-only tokens."""
    words: list[str] = []
    for token in tokens:
        for part in token.split():
            if not _PUNCTUATION_TOKEN.match(part):
                words.append(part)
    return words


def _term_events(events: Sequence[ChoiceEvent]) -> list[ChoiceEvent]:
    return [event for event in events if event.kind == ChoiceKind.TERM and event.item is not None]


def _pos_values(events: Sequence[ChoiceEvent], pos: PartOfSpeech) -> list[str]:
    return [event.item.value.lower() for event in _term_events(events) if event.item.pos == pos]


def _set_uses(events: Sequence[ChoiceEvent], term_set_id: str) -> int:
    return sum(1 for event in events if event.term_set_id == term_set_id)


def count_target(target: Target, tokens: Sequence[str], events: Sequence[ChoiceEvent]) -> int:
    """Count occurrences of a target among tokens / scoped choice events."""
    if isinstance(target, CountTarget):
        if target.unit == CountUnit.WORDS:
            return len(word_tokens(tokens))
        return len(_pos_values(events, PartOfSpeech.PREP))
    if isinstance(target, PosTarget):
        return len(_pos_values(events, target.pos))
    if isinstance(target, TermSetTarget):
        return _set_uses(events, target.term_set_id)
    wanted = target.token.lower()
    return sum(1 for word in word_tokens(tokens) if word.lower() == wanted)


class RuleEngine:
    """Evaluates constraints and invariants for a candidate unit."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config

    # Defaults

    def default_constraints(self) -> list[Constraint]:
        """Built-in constraints derived from the configuration."""
        return [
            Constraint(
                id="c.maxPP",
                level=ConstraintLevel.HARD,
                scope=Scope.PHRASE,
                type=ConstraintType.MAX_COUNT,
                target="PP",
                value=self.config.max_pp_chain,
            ),
            Constraint(
                id="c.minWords",
                level=ConstraintLevel.SOFT,
                scope=Scope.SENTENCE,
                type=ConstraintType.MIN_COUNT,
                target="words",
                value=self.config.min_words_per_sentence,
            ),
            Constraint(
                id="c.maxWords",
                level=ConstraintLevel.SOFT,
                scope=Scope.SENTENCE,
                type=ConstraintType.MAX_COUNT,
                target="words",
                value=self.config.max_words_per_sentence,
            ),
        ]

    @staticmethod
    def default_invariants() -> list[Invariant]:
        """Built-in invariants every rendered unit must satisfy."""
        return [
            Invariant(id="inv.capitalized", type=InvariantType.CAPITALIZATION, scope=Scope.SENTENCE),
            Invariant(id="inv.endsWithPunct", type=InvariantType.PUNCTUATION, scope=Scope.SENTENCE),
            Invariant(id="inv.noDoubleSpaces", type=InvariantType.WHITESPACE, scope=Scope.TEXT),
        ]

    # Constraints

    def evaluate_constraint(
        self,
        constraint: Constraint,
        tokens: Sequence[str],
        events: Sequence[ChoiceEvent],
    ) -> ConstraintResult:
        """Evaluate a single constraint against tokens and scoped choice events."""
        handler = _CONSTRAINT_HANDLERS[constraint.type]
        return handler(self, constraint, parse_target(constraint.target), tokens, events)

    def _result(self, constraint: Constraint, passed: bool, message: str | None = None) -> ConstraintResult:
        return ConstraintResult(
            id=constraint.id,
            passed=passed,
            level=constraint.level,
            message=None if passed else message,
        )

    def _no_repeat(self, constraint, target, tokens, events) -> ConstraintResult:
        if isinstance(target, PosTarget):
            values = _pos_values(events, target.pos)
            return self._result(
                constraint,
                len(values) == len(set(values)),
                f"Repeated {target.pos.value} found in current scope",
            )
        if isinstance(target, TermSetTarget):
            return self._result(
                constraint,
                _set_uses(events, target.term_set_id) <= 1,
                f"Term set {target.term_set_id} used more than once",
            )
        words = [word.lower() for word in word_tokens(tokens)]
        return self._result(constraint, len(words) == len(set(words)), "Repeated tokens found")

    def _max_count(self, constraint, target, tokens, events) -> ConstraintResult:
        bound = constraint.value if constraint.value is not None else 1
        count = count_target(target, tokens, events)
        return self._result(
            constraint,
            count <= bound,
            f"{constraint.target} count {count} exceeds max {bound:g}",
        )

    def _min_count(self, constraint, target, tokens, events) -> ConstraintResult:
        bound = constraint.value if constraint.value is not None else 1
        count = count_target(target, tokens, events)
        return self._result(
            constraint,
            count >= bound,
            f"{constraint.target} count {count} below min {bound:g}",
        )

    def _required(self, constraint, target, tokens, events) -> ConstraintResult:
        return self._result(
            constraint,
            count_target(target, tokens, events) > 0,
            f"Required {constraint.target} not found",
        )

    def _forbidden(self, constraint, target, tokens, events) -> ConstraintResult:
        return self._result(
            constraint,
            count_target(target, tokens, events) == 0,
            f"Forbidden {constraint.target} found",
        )

    def _custom(self, constraint, target, tokens, events) -> ConstraintResult:
        # Extension point: custom_fn names are not resolved
        return self._result(constraint, True)

    # Invariants

    def evaluate_invariant(self, invariant: Invariant, text: str) -> InvariantResult:
        """Evaluate a single invariant against rendered text."""
        if invariant.type == InvariantType.CAPITALIZATION:
            passed, message = is_capitalized(text), "Text not properly capitalized"
        elif invariant.type == InvariantType.PUNCTUATION:
            passed, message = ends_with_punctuation(text), "Text does not end with punctuation"
        elif invariant.type == InvariantType.WHITESPACE:
            passed, message = has_no_double_spaces(text), "Text contains double spaces"
        else:
            # Agreement holds by construction; custom is an extension point
            passed, message = True, None
        return InvariantResult(id=invariant.id, passed=passed, message=None if passed else message)

    # Validation

    def validate(
        self,
        ctx: GenerationContext,
        text: str,
        tokens: Sequence[str],
        scope: Scope,
        *,
        constraints: Sequence[Constraint] | None = None,
        invariants: Sequence[Invariant] | None = None,
    ) -> ValidationResult:
        """Validate a candidate unit at a scope.

        Args:
            ctx: Context whose scoped choice events are inspected.
            text: Rendered text (for invariants).
            tokens: Raw tokens (for constraints).
            scope: Only rules declared at this scope are evaluated.
            constraints: Rules to use instead of ctx.constraints.
            invariants: Rules to use instead of ctx.invariants.

        Returns:
            ValidationResult with per-rule outcomes and failure lists.
        """
        active_constraints = ctx.constraints if constraints is None else constraints
        active_invariants = ctx.invariants if invariants is None else invariants
        events = ctx.events_in_scope(scope)

        constraint_results = [
            self.evaluate_constraint(constraint, tokens, events)
            for constraint in active_constraints
            if constraint.scope == scope
        ]
        invariant_results = [
            self.evaluate_invariant(invariant, text)
            for invariant in active_invariants
            if invariant.scope == scope
        ]

        hard_failed = [
            r.id for r in constraint_results if not r.passed and r.level == ConstraintLevel.HARD
        ]
        soft_failed = [
            r.id for r in constraint_results if not r.passed and r.level == ConstraintLevel.SOFT
        ]
        invariants_failed = [r.id for r in invariant_results if not r.passed]

        if hard_failed or invariants_failed:
            logger.debug(
                "%s validation failed: constraints=%s invariants=%s",
                scope.value,
                hard_failed,
                invariants_failed,
            )

        return ValidationResult(
            valid=not hard_failed and not invariants_failed,
            constraint_results=constraint_results,
            invariant_results=invariant_results,
            hard_constraints_failed=hard_failed,
            soft_constraints_failed=soft_failed,
            invariants_failed=invariants_failed,
        )

    def check_invariants(self, invariants: Sequence[Invariant], text: str) -> list[InvariantResult]:
        """Evaluate invariants on final text regardless of their declared scope."""
        return [self.evaluate_invariant(invariant, text) for invariant in invariants]


_CONSTRAINT_HANDLERS: dict[ConstraintType, ConstraintHandler] = {
    ConstraintType.NO_REPEAT: RuleEngine._no_repeat,
    ConstraintType.MAX_COUNT: RuleEngine._max_count,
    ConstraintType.MIN_COUNT: RuleEngine._min_count,
    ConstraintType.REQUIRED: RuleEngine._required,
    ConstraintType.FORBIDDEN: RuleEngine._forbidden,
    ConstraintType.CUSTOM: RuleEngine._custom,
}

_unhandled = set(ConstraintType) - set(_CONSTRAINT_HANDLERS)
if _unhandled:
    raise RuntimeError(f"No handler for constraint types: {sorted(t.value for t in _unhandled)}")
