"""Per-call mutable generation state.

A GenerationContext is created for each sentence/paragraph/text call and
threaded by reference through the builders. It owns the additive bias
table, the choice history and the scope stack. Rejected attempts are
rolled back to a checkpoint so only accepted choices stay in the history.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from blathr.core.enums import ChoiceKind, GrammaticalNumber, PartOfSpeech, Scope
from blathr.core.lexicon.models import ChoiceEvent, Constraint, Invariant, LexicalItem

logger = logging.getLogger(__name__)

# Bias totals within this distance of zero are dropped
_BIAS_EPSILON = 1e-9


class PhraseFeatures(BaseModel):
    """Agreement features of a noun phrase or clause subject."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    number: GrammaticalNumber = GrammaticalNumber.SINGULAR
    person: int = Field(default=3, ge=1, le=3)

    @property
    def is_third_singular(self) -> bool:
        return self.number == GrammaticalNumber.SINGULAR and self.person == 3


class ScopeFrame(BaseModel):
    """One entry of the scope stack.

    Attributes:
        scope: Scope kind.
        start_index: Length of the event history when the scope was entered.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    scope: Scope
    start_index: int = Field(ge=0)


class ContextCheckpoint(BaseModel):
    """Sizes and copies taken by GenerationContext.checkpoint()."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    event_count: int
    term_set_count: int
    pattern_count: int
    term_counts: dict[PartOfSpeech, int]
    biases: dict[str, float]
    relation_hints: tuple[str, ...]
    correlation_count: int


class GenerationHistory(BaseModel):
    """Record of accepted choices made during one context's lifetime."""

    model_config = ConfigDict(extra="forbid")

    chosen_term_sets: list[str] = Field(default_factory=list)
    chosen_terms: dict[PartOfSpeech, list[LexicalItem]] = Field(default_factory=dict)
    chosen_patterns: list[str] = Field(default_factory=list)
    events: list[ChoiceEvent] = Field(default_factory=list)


class GenerationContext(BaseModel):
    """Runtime state for a single generation call.

    Mutable (not frozen) to allow state updates.

    Attributes:
        seed: Seed active when the context was created.
        archetype: Name of the active archetype.
        active_tags: Hints plus archetype tags.
        biases: Additive weight deltas keyed by ``<scope>:<target>`` and by
            bare ``<target>``; bare keys hold the sum of live scoped entries.
        history: Choice history.
        scope_stack: Open scopes, outermost first; never empty.
        constraints: Constraints active for this call.
        invariants: Invariants active for this call.
        sentence_index: Index of the sentence within its paragraph.
        paragraph_index: Index of the paragraph within its text block.
        current_sentence_tokens: Tokens of the sentence being built.
        current_subject_features: Agreement features of the current subject.
        relation_hints: Terms related to earlier choices in this sentence.
        retry_count: Failed attempts for the current sentence.
        applied_correlations: Labels of correlations fired, in order.
    """

    model_config = ConfigDict(extra="forbid")

    seed: int = 0
    archetype: str = "default"
    active_tags: set[str] = Field(default_factory=set)
    biases: dict[str, float] = Field(default_factory=dict)
    history: GenerationHistory = Field(default_factory=GenerationHistory)
    scope_stack: list[ScopeFrame] = Field(
        default_factory=lambda: [ScopeFrame(scope=Scope.TEXT, start_index=0)]
    )
    constraints: list[Constraint] = Field(default_factory=list)
    invariants: list[Invariant] = Field(default_factory=list)
    sentence_index: int = 0
    paragraph_index: int = 0
    current_sentence_tokens: list[str] = Field(default_factory=list)
    current_subject_features: PhraseFeatures | None = None
    relation_hints: list[str] = Field(default_factory=list)
    retry_count: int = 0
    applied_correlations: list[str] = Field(default_factory=list)

    # Scopes

    @property
    def current_scope(self) -> Scope:
        return self.scope_stack[-1].scope

    def push_scope(self, scope: Scope) -> None:
        """Enter a scope, remembering the current history length."""
        self.scope_stack.append(ScopeFrame(scope=scope, start_index=len(self.history.events)))

    def pop_scope(self) -> ScopeFrame | None:
        """Leave the innermost scope. The outermost frame is never popped.

        Token-scoped biases are released on every pop; phrase-scoped
        biases once the outermost phrase closes.
        """
        if len(self.scope_stack) <= 1:
            return None
        frame = self.scope_stack.pop()
        self._release_biases(Scope.TOKEN)
        if frame.scope == Scope.PHRASE and not self.in_scope(Scope.PHRASE):
            self._release_biases(Scope.PHRASE)
        return frame

    def in_scope(self, scope: Scope) -> bool:
        return any(frame.scope == scope for frame in self.scope_stack)

    def scope_start(self, scope: Scope) -> int:
        """History index at which the innermost frame of a scope opened (0 if none)."""
        for frame in reversed(self.scope_stack):
            if frame.scope == scope:
                return frame.start_index
        return 0

    def events_in_scope(self, scope: Scope) -> list[ChoiceEvent]:
        """Choice events recorded since the innermost frame of a scope opened."""
        return self.history.events[self.scope_start(scope) :]

    # History

    def record_choice(self, event: ChoiceEvent) -> None:
        """Append a choice event and update the per-POS and per-set indexes."""
        self.history.events.append(event)

        if event.kind == ChoiceKind.TERM and event.item is not None:
            self.history.chosen_terms.setdefault(event.item.pos, []).append(event.item)
            if event.term_set_id:
                self.history.chosen_term_sets.append(event.term_set_id)
        elif event.kind == ChoiceKind.PATTERN and event.pattern_id:
            self.history.chosen_patterns.append(event.pattern_id)

    def record_form(self, item: LexicalItem, form: str) -> None:
        """Note the inflected form a chosen term was rendered as.

        Updates the latest term event for ``item`` that has no form yet.
        """
        events = self.history.events
        for index in range(len(events) - 1, -1, -1):
            event = events[index]
            if event.kind == ChoiceKind.TERM and event.rendered is None and event.item == item:
                events[index] = event.model_copy(update={"rendered": form})
                return

    # Biases

    def bias(self, key: str) -> float:
        """Current bias for a key (0 when absent)."""
        return self.biases.get(key, 0.0)

    def add_bias(self, scope: Scope, target: str, delta: float) -> None:
        """Add a delta under both the scope-prefixed key and the bare key."""
        scoped_key = f"{scope.value}:{target}"
        self.biases[scoped_key] = self.biases.get(scoped_key, 0.0) + delta
        self.biases[target] = self.biases.get(target, 0.0) + delta

    def _release_biases(self, scope: Scope) -> None:
        prefix = f"{scope.value}:"
        for key in [k for k in self.biases if k.startswith(prefix)]:
            delta = self.biases.pop(key)
            target = key[len(prefix) :]
            remaining = self.biases.get(target, 0.0) - delta
            if abs(remaining) < _BIAS_EPSILON:
                self.biases.pop(target, None)
            else:
                self.biases[target] = remaining

    # Checkpoints

    def checkpoint(self) -> ContextCheckpoint:
        """Capture the history, biases, relation hints and fired correlations."""
        history = self.history
        return ContextCheckpoint(
            event_count=len(history.events),
            term_set_count=len(history.chosen_term_sets),
            pattern_count=len(history.chosen_patterns),
            term_counts={pos: len(items) for pos, items in history.chosen_terms.items()},
            biases=dict(self.biases),
            relation_hints=tuple(self.relation_hints),
            correlation_count=len(self.applied_correlations),
        )

    def rollback(self, checkpoint: ContextCheckpoint) -> None:
        """Discard every choice, boost and relation hint recorded since ``checkpoint``.

        The scope stack is left alone; roll back before popping the scope
        the checkpoint was taken in.
        """
        history = self.history
        del history.events[checkpoint.event_count :]
        del history.chosen_term_sets[checkpoint.term_set_count :]
        del history.chosen_patterns[checkpoint.pattern_count :]
        for pos in list(history.chosen_terms):
            kept = checkpoint.term_counts.get(pos, 0)
            if kept:
                del history.chosen_terms[pos][kept:]
            else:
                del history.chosen_terms[pos]
        self.biases = dict(checkpoint.biases)
        self.relation_hints = list(checkpoint.relation_hints)
        del self.applied_correlations[checkpoint.correlation_count :]

    # Boundaries

    def clear_sentence_state(self) -> None:
        """Reset per-sentence state and drop sentence-scoped biases."""
        self.current_sentence_tokens = []
        self.current_subject_features = None
        self.relation_hints = []
        self._release_biases(Scope.TOKEN)
        self._release_biases(Scope.PHRASE)
        self._release_biases(Scope.SENTENCE)

    def clear_paragraph_state(self) -> None:
        """Reset per-paragraph state and drop paragraph-scoped biases."""
        self.clear_sentence_state()
        self.sentence_index = 0
        self._release_biases(Scope.PARAGRAPH)
