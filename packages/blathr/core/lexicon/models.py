"""Lexicon data models.

A lexicon is reference data: once validated it is never mutated by the
engine. Documents use camelCase keys (``termSets``, ``thenBoost``); the
models accept either camelCase or snake_case.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from blathr.core.enums import (
    ChoiceKind,
    ConstraintLevel,
    ConstraintType,
    InvariantType,
    PartOfSpeech,
    PatternType,
    RelationDirection,
    Scope,
)

CORRELATION_SCOPES = frozenset({Scope.TOKEN, Scope.PHRASE, Scope.SENTENCE, Scope.PARAGRAPH})


class LexiconModel(BaseModel):
    """Base for lexicon document models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class IrregularForms(LexiconModel):
    """Per-term overrides for inflected forms."""

    plural: str | None = None
    past_tense: str | None = None
    past_participle: str | None = None
    present_participle: str | None = None
    third_person: str | None = None


class TermFeatures(LexiconModel):
    """Grammatical features of a term. Unknown keys are kept as extras."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    countable: bool | None = None
    number: Literal["singular", "plural", "both"] | None = None
    person: Literal[1, 2, 3] | None = None
    transitive: bool | None = None
    irregular: IrregularForms | None = None

    def get(self, key: str) -> Any:
        """Look up a feature by snake_case or camelCase name."""
        if key in type(self).model_fields:
            return getattr(self, key)
        for name, field in type(self).model_fields.items():
            if field.alias == key:
                return getattr(self, name)
        return (self.model_extra or {}).get(key)

    def matches(self, required: Mapping[str, Any]) -> bool:
        """Return True if every required feature is present with an equal value."""
        return all(self.get(key) == value for key, value in required.items())


class Term(LexiconModel):
    """A single word in a term set."""

    value: str = Field(min_length=1)
    weight: float = Field(default=1.0, ge=0)
    features: TermFeatures | None = None
    tags: list[str] = Field(default_factory=list)


class TermSet(LexiconModel):
    """Named, POS-tagged, weighted pool of words."""

    pos: PartOfSpeech
    tags: list[str] = Field(default_factory=list)
    terms: list[Term] = Field(default_factory=list)


class Pattern(LexiconModel):
    """Structural pattern a lexicon can bias towards."""

    type: PatternType
    slots: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    weight: float = Field(default=1.0, ge=0)
    tags: list[str] = Field(default_factory=list)


class DistributionEntry(LexiconModel):
    """One (key, weight) entry of a named distribution."""

    key: str
    weight: float = Field(ge=0)


class CorrelationCondition(LexiconModel):
    """Trigger of a correlation; any populated field that matches fires it."""

    chosen_term_set: str | None = None
    chosen_tag: str | None = None
    chosen_value: str | None = None
    used_pattern: str | None = None

    def matches(self, event: ChoiceEvent) -> bool:
        if self.chosen_term_set is not None and event.term_set_id == self.chosen_term_set:
            return True
        if self.chosen_tag is not None and self.chosen_tag in event.tags:
            return True
        if self.chosen_value is not None and event.value == self.chosen_value:
            return True
        if self.used_pattern is not None and event.pattern_id == self.used_pattern:
            return True
        return False


class CorrelationBoost(LexiconModel):
    """Additive weight delta targeting a term set or a pattern."""

    term_set: str | None = None
    pattern: str | None = None
    weight_delta: float

    @model_validator(mode="after")
    def _require_target(self) -> CorrelationBoost:
        if self.term_set is None and self.pattern is None:
            raise ValueError("boost needs a termSet or a pattern target")
        return self


class Correlation(LexiconModel):
    """Rule that boosts future sampling weights after a matching choice."""

    id: str | None = None
    when: CorrelationCondition
    then_boost: list[CorrelationBoost] = Field(default_factory=list)
    scope: Scope = Scope.SENTENCE

    @field_validator("scope")
    @classmethod
    def _validate_scope(cls, value: Scope) -> Scope:
        if value not in CORRELATION_SCOPES:
            raise ValueError(f"correlation scope must be one of token/phrase/sentence/paragraph, got {value.value}")
        return value

    def label(self, index: int) -> str:
        """Identifier used in traces."""
        return self.id or f"correlation[{index}]"


class Constraint(LexiconModel):
    """Declarative rule checked on tokens and choices.

    Targets: ``pos:<p>``, ``termSet:<id>``, ``words``, ``PP`` or a literal
    token.
    """

    id: str
    level: ConstraintLevel
    scope: Scope
    type: ConstraintType
    target: str
    value: float | None = None
    custom_fn: str | None = None


class Invariant(LexiconModel):
    """Declarative rule checked on rendered text."""

    id: str
    type: InvariantType
    scope: Scope
    custom_fn: str | None = None


class Archetype(LexiconModel):
    """Named bundle of tag activations, distribution references and overrides.

    Attributes:
        tags: Tags activated while the archetype is selected.
        distributions: Role name (``termSetBias``, ``sentenceTypes``) to a
            distribution id in the lexicon.
        overrides: Numeric config overrides keyed by camelCase config name.
        output_transforms: Accepted for document compatibility, unused.
    """

    tags: list[str] = Field(default_factory=list)
    distributions: dict[str, str] = Field(default_factory=dict)
    overrides: dict[str, float] = Field(default_factory=dict)
    output_transforms: dict[str, Any] | None = None


class Relation(LexiconModel):
    """Directed, typed link between two terms."""

    from_: str = Field(alias="from")
    type: str
    to: str
    weight: float = Field(default=1.0, ge=0)


class Lexicon(LexiconModel):
    """Vocabulary and rule data steering generation."""

    id: str = Field(min_length=1)
    version: str | None = None
    language: str = Field(min_length=1)
    term_sets: dict[str, TermSet] = Field(default_factory=dict)
    patterns: dict[str, Pattern] = Field(default_factory=dict)
    distributions: dict[str, list[DistributionEntry]] = Field(default_factory=dict)
    correlations: list[Correlation] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)
    invariants: list[Invariant] = Field(default_factory=list)
    archetypes: dict[str, Archetype] = Field(default_factory=dict)
    relations: list[Relation] = Field(default_factory=list)
    output_transforms: dict[str, Any] | None = None


class LexicalItem(BaseModel):
    """Result of a successful word lookup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: str
    pos: PartOfSpeech
    term_set_id: str | None = None
    features: TermFeatures | None = None
    tags: tuple[str, ...] = ()


class ChoiceEvent(BaseModel):
    """One entry of the choice history.

    ``rendered`` is the surface form a term took in the text (``swam`` for
    ``swim``) once a builder has inflected it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ChoiceKind
    scope: Scope
    value: str | None = None
    item: LexicalItem | None = None
    term_set_id: str | None = None
    pattern_id: str | None = None
    tags: tuple[str, ...] = ()
    rendered: str | None = None

    @classmethod
    def for_term(cls, item: LexicalItem, scope: Scope) -> ChoiceEvent:
        return cls(
            kind=ChoiceKind.TERM,
            scope=scope,
            value=item.value,
            item=item,
            term_set_id=item.term_set_id,
            tags=item.tags,
        )

    @classmethod
    def for_pattern(cls, pattern_id: str, pattern: Pattern, scope: Scope) -> ChoiceEvent:
        return cls(
            kind=ChoiceKind.PATTERN,
            scope=scope,
            value=pattern_id,
            pattern_id=pattern_id,
            tags=tuple(pattern.tags),
        )


class TermQuery(BaseModel):
    """Request for a term from the lexicon."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pos: PartOfSpeech
    tags: tuple[str, ...] = ()
    term_set_ids: tuple[str, ...] = ()
    features: dict[str, Any] = Field(default_factory=dict)
    exclude: tuple[str, ...] = ()
    allow_fallback: bool = True


class PatternQuery(BaseModel):
    """Request for a pattern from the lexicon."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: PatternType
    tags: tuple[str, ...] = ()
    pattern_ids: tuple[str, ...] = ()


class RelationResult(BaseModel):
    """A term related to a queried term."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    term: str
    relation_type: str
    weight: float
    direction: RelationDirection
