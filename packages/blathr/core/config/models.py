"""Configuration models for Blathr."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from blathr.core.enums import SentenceType
from blathr.core.words import defaults

logger = logging.getLogger(__name__)


class ConfigBase(BaseModel):
    """Base class for file-backed Blathr configurations.

    Subclasses override default_path() to name their default location.
    """

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, or from default_path() when path is None.

        A missing default file yields a default instance; a missing explicit
        path is an error.

        Raises:
            FileNotFoundError: If an explicit config file doesn't exist
            ValidationError: If config is invalid
        """
        from blathr.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
            if not Path(path).exists():
                logger.debug("No %s at %s, using defaults", cls.__name__, path)
                return cls()
        raw = load_config(path)
        return cls.model_validate(raw)


class SentenceTypeWeights(BaseModel):
    """Relative weights for sentence-type selection.

    Field aliases use the camelCase sentence-type tags so the same keys work
    in lexicon distributions.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    simple_declarative: float = Field(default=45, ge=0, alias="simpleDeclarative")
    compound: float = Field(default=15, ge=0)
    intro_adverbial: float = Field(default=12, ge=0, alias="introAdverbial")
    subordinate: float = Field(default=15, ge=0)
    interjection: float = Field(default=3, ge=0)
    question: float = Field(default=10, ge=0)

    def as_pairs(self) -> list[tuple[SentenceType, float]]:
        """Return (type, weight) pairs in fixed selection order."""
        return [
            (SentenceType.SIMPLE_DECLARATIVE, self.simple_declarative),
            (SentenceType.COMPOUND, self.compound),
            (SentenceType.INTRO_ADVERBIAL, self.intro_adverbial),
            (SentenceType.SUBORDINATE, self.subordinate),
            (SentenceType.INTERJECTION, self.interjection),
            (SentenceType.QUESTION, self.question),
        ]

    @property
    def total(self) -> float:
        return sum(weight for _, weight in self.as_pairs())


class GeneratorConfig(BaseModel):
    """Tunable grammar and generation settings.

    All fields have defaults; partial configs (files or keyword overrides)
    fill in only what they change.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sentence_type_weights: SentenceTypeWeights = Field(default_factory=SentenceTypeWeights)

    min_words_per_sentence: int = Field(default=5, ge=1)
    max_words_per_sentence: int = Field(default=25, ge=1)
    avg_sentence_length: int = Field(default=12, ge=1)
    min_sentences_per_paragraph: int = Field(default=2, ge=1)
    max_sentences_per_paragraph: int = Field(default=7, ge=1)

    interjection_rate: float = Field(default=0.03, ge=0.0, le=1.0)
    subordinate_clause_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    relative_clause_rate: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Chance a simple declarative carries a relative clause on its subject",
    )
    question_rate: float = Field(default=0.10, ge=0.0, le=1.0)
    compound_rate: float = Field(default=0.15, ge=0.0, le=1.0)

    max_pp_chain: int = Field(default=2, ge=0, description="Max PPs attached to one noun phrase")
    max_pp_depth: int = Field(
        default=1,
        ge=0,
        description="Noun phrases nested deeper than this never take PPs",
    )
    max_adjectives_per_noun: int = Field(default=2, ge=0)
    max_adverbs_per_verb: int = Field(default=1, ge=0)

    max_sentence_attempts: int = Field(default=25, ge=1)
    max_phrase_attempts: int = Field(default=10, ge=1)
    strict_mode: bool = False
    enable_trace: bool = False
    seed: int | None = Field(default=None, description="Initial seed; wall clock when omitted")

    determiners: list[str] = Field(default_factory=lambda: list(defaults.CONFIG_DETERMINERS))
    subject_pronouns: list[str] = Field(default_factory=lambda: list(defaults.DEFAULT_SUBJECT_PRONOUNS))
    object_pronouns: list[str] = Field(default_factory=lambda: list(defaults.DEFAULT_OBJECT_PRONOUNS))
    possessive_determiners: list[str] = Field(
        default_factory=lambda: list(defaults.DEFAULT_POSSESSIVE_DETERMINERS)
    )
    modals: list[str] = Field(default_factory=lambda: list(defaults.DEFAULT_MODALS))
    subordinators: list[str] = Field(default_factory=lambda: list(defaults.CONFIG_SUBORDINATORS))
    relatives: list[str] = Field(default_factory=lambda: list(defaults.DEFAULT_RELATIVES))
    coordinators: list[str] = Field(default_factory=lambda: list(defaults.CONFIG_COORDINATORS))
    transitions: list[str] = Field(default_factory=lambda: list(defaults.CONFIG_TRANSITIONS))
    interjections: list[str] = Field(default_factory=lambda: list(defaults.CONFIG_INTERJECTIONS))

    @model_validator(mode="after")
    def _validate_ranges(self) -> GeneratorConfig:
        if self.max_words_per_sentence < self.min_words_per_sentence:
            raise ValueError("max_words_per_sentence must be >= min_words_per_sentence")
        if self.max_sentences_per_paragraph < self.min_sentences_per_paragraph:
            raise ValueError("max_sentences_per_paragraph must be >= min_sentences_per_paragraph")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file; stderr when omitted")


class AppConfig(ConfigBase):
    """Application-level configuration: generator settings plus logging."""

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    lexicon_path: str | None = Field(default=None, description="Lexicon loaded at startup")
    archetype: str | None = None

    @classmethod
    def default_path(cls) -> Path:
        return Path("blathr.yaml")
