"""Generation options, trace and metadata models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from blathr.core.enums import PartOfSpeech, SentenceType
from blathr.core.rules.models import ConstraintResult, InvariantResult


class SentenceOptions(BaseModel):
    """Options for a single sentence.

    Attributes:
        type: Sentence shape; drawn from the weights when omitted.
        hints: Tags activated for this call.
        min_words: Hard lower bound on words for this call.
        max_words: Hard upper bound on words for this call.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: SentenceType | None = None
    hints: list[str] = Field(default_factory=list)
    min_words: int | None = Field(default=None, ge=1)
    max_words: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _validate_bounds(self) -> SentenceOptions:
        if self.min_words is not None and self.max_words is not None and self.max_words < self.min_words:
            raise ValueError("max_words must be >= min_words")
        return self


class ParagraphOptions(BaseModel):
    """Options for a paragraph; ``sentences`` wins over the min/max range."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sentences: int | None = Field(default=None, ge=1)
    min_sentences: int | None = Field(default=None, ge=1)
    max_sentences: int | None = Field(default=None, ge=1)
    hints: list[str] = Field(default_factory=list)


class TextBlockOptions(BaseModel):
    """Options for a block of paragraphs; ``paragraphs`` wins over the min/max range."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    paragraphs: int | None = Field(default=None, ge=1)
    min_paragraphs: int = Field(default=1, ge=1)
    max_paragraphs: int = Field(default=3, ge=1)
    hints: list[str] = Field(default_factory=list)


class TokenTrace(BaseModel):
    """Source attribution for one token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: str
    source: str = Field(description="Term set id, or 'default' for non-lexicon words")
    pos: PartOfSpeech | None = None


class SentenceTrace(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str
    template: SentenceType
    tokens: list[TokenTrace] = Field(default_factory=list)
    constraints_evaluated: list[ConstraintResult] = Field(default_factory=list)
    retry_count: int = Field(default=0, ge=0)


class ParagraphTrace(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    sentences: list[SentenceTrace] = Field(default_factory=list)


class GenerationTrace(BaseModel):
    """Full trace of one call: paragraphs, fired correlations, final invariant checks."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    paragraphs: list[ParagraphTrace] = Field(default_factory=list)
    correlations_applied: list[str] = Field(default_factory=list)
    invariants_checked: list[InvariantResult] = Field(default_factory=list)


class GenerationMeta(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    archetype: str
    seed: int
    lexicon_id: str | None = None
    lexicon_version: str | None = None


class GeneratedText(BaseModel):
    """Generated text with metadata, and a trace when tracing is enabled."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str
    trace: GenerationTrace | None = None
    meta: GenerationMeta
