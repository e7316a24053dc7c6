"""Results and limits shared by the phrase and sentence builders."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import PhraseFeatures
from blathr.core.enums import SentenceType


class PhraseResult(BaseModel):
    """Tokens of a phrase plus agreement features for noun phrases and clauses."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tokens: tuple[str, ...] = ()
    features: PhraseFeatures | None = None


class SentenceResult(BaseModel):
    """A finished sentence.

    Attributes:
        text: Rendered, formatted sentence.
        type: Sentence shape that produced it.
        tokens: Raw tokens before formatting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str
    type: SentenceType
    tokens: tuple[str, ...]


class PhraseLimits(BaseModel):
    """Structural limits for one sentence attempt.

    Copied per attempt so simplification never leaks into the session config.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_pp_chain: int = Field(default=2, ge=0)
    max_pp_depth: int = Field(default=1, ge=0)
    max_adjectives_per_noun: int = Field(default=2, ge=0)
    max_adverbs_per_verb: int = Field(default=1, ge=0)

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> PhraseLimits:
        return cls(
            max_pp_chain=config.max_pp_chain,
            max_pp_depth=config.max_pp_depth,
            max_adjectives_per_noun=config.max_adjectives_per_noun,
            max_adverbs_per_verb=config.max_adverbs_per_verb,
        )

    def simplified(self) -> PhraseLimits:
        """One step simpler: one fewer PP per noun phrase (floored at zero)."""
        return self.model_copy(update={"max_pp_chain": max(0, self.max_pp_chain - 1)})
