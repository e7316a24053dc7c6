"""TextGenerator: the public entry point for sentences, paragraphs and text blocks."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from blathr.core.config.models import GeneratorConfig, SentenceTypeWeights
from blathr.core.context import GenerationContext
from blathr.core.enums import ChoiceKind, ConstraintLevel, ConstraintType, Scope, SentenceType
from blathr.core.errors import ArchetypeNotFoundError, GenerationFailedError
from blathr.core.generator.models import (
    GeneratedText,
    GenerationMeta,
    GenerationTrace,
    ParagraphOptions,
    ParagraphTrace,
    SentenceOptions,
    SentenceTrace,
    TextBlockOptions,
    TokenTrace,
)
from blathr.core.grammar import PhraseBuilders, PhraseLimits, SentenceResult, SentenceTemplates
from blathr.core.lexicon.models import ChoiceEvent, Constraint, Invariant, Lexicon
from blathr.core.lexicon.store import SENTENCE_TYPES_DISTRIBUTION, LexiconStore
from blathr.core.morphology import format_paragraph, format_text_block
from blathr.core.providers import WordProvider
from blathr.core.rng import RngProtocol, SeedableRng
from blathr.core.rules import RuleEngine, ValidationResult
from blathr.core.words import SimpleWordSource, WordSource

logger = logging.getLogger(__name__)

DEFAULT_ARCHETYPE = "default"

# Failed attempts before limits are simplified / the type is forced
SIMPLIFY_AFTER = 5
FORCE_SIMPLE_AFTER = 10

# Archetype override keys (camelCase, as written in lexicon files)
ARCHETYPE_OVERRIDE_FIELDS: dict[str, str] = {
    "minWordsPerSentence": "min_words_per_sentence",
    "maxWordsPerSentence": "max_words_per_sentence",
    "avgSentenceLength": "avg_sentence_length",
    "minSentencesPerParagraph": "min_sentences_per_paragraph",
    "maxSentencesPerParagraph": "max_sentences_per_paragraph",
    "interjectionRate": "interjection_rate",
    "subordinateClauseRate": "subordinate_clause_rate",
    "relativeClauseRate": "relative_clause_rate",
    "questionRate": "question_rate",
    "compoundRate": "compound_rate",
    "maxPPChain": "max_pp_chain",
    "maxPPDepth": "max_pp_depth",
    "maxAdjectivesPerNoun": "max_adjectives_per_noun",
    "maxAdverbsPerVerb": "max_adverbs_per_verb",
    "maxSentenceAttempts": "max_sentence_attempts",
    "maxPhraseAttempts": "max_phrase_attempts",
}


@dataclass(frozen=True)
class _Attempt:
    """An accepted sentence with its validation and the events recorded while building it."""

    result: SentenceResult
    validation: ValidationResult
    events: list[ChoiceEvent]
    retry_count: int


class TextGenerator:
    """Seeded generator of grammatical nonsense text.

    One generator is one session: it owns the RNG, the lexicon store and
    the grammar components. Calls consume the RNG strictly in sequence, so
    two generators seeded alike and called alike produce identical text.

    Args:
        config: Generator configuration; defaults when omitted.
        lexicon: Optional validated lexicon steering word choice.
        word_source: Fallback word source; a SimpleWordSource sharing the
            session RNG when omitted.
        rng: Custom RNG; a SeedableRng when omitted.
        enable_trace: Return traces from sentence()/paragraph()/text_block();
            falls back to ``config.enable_trace``.
        archetype: Initial archetype; the lexicon's first archetype when omitted.

    Example:
        >>> generator = TextGenerator()
        >>> generator.set_seed(42)
        >>> text = generator.sentence()
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        lexicon: Lexicon | None = None,
        word_source: WordSource | None = None,
        rng: RngProtocol | None = None,
        enable_trace: bool | None = None,
        archetype: str | None = None,
    ) -> None:
        self._base_config = config or GeneratorConfig()
        self.enable_trace = self._base_config.enable_trace if enable_trace is None else enable_trace

        self.rng = rng or SeedableRng()
        self._seed = self._base_config.seed if self._base_config.seed is not None else int(time.time() * 1000)
        self.rng.seed(self._seed)

        self._word_source = word_source or SimpleWordSource(self.rng)
        self._store = LexiconStore(self.rng, lexicon)
        self._archetype = DEFAULT_ARCHETYPE

        if archetype is not None:
            self.set_archetype(archetype)
        else:
            self._archetype = self._initial_archetype(lexicon)
            self._rebuild()

    # Session state

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def archetype(self) -> str:
        return self._archetype

    @property
    def config(self) -> GeneratorConfig:
        """Effective configuration (base config plus archetype overrides)."""
        return self._config

    @property
    def lexicon(self) -> Lexicon | None:
        return self._store.lexicon

    def set_seed(self, seed: int) -> None:
        """Reset the RNG; subsequent calls replay the same stream."""
        self._seed = seed
        self.rng.seed(seed)

    def set_lexicon(self, lexicon: Lexicon | None) -> None:
        """Replace the lexicon.

        The active archetype is kept if the new lexicon defines it, and
        otherwise reset to the lexicon's first archetype.
        """
        self._store.set_lexicon(lexicon)
        if lexicon is None or self._archetype not in lexicon.archetypes:
            self._archetype = self._initial_archetype(lexicon)
        self._rebuild()

    def set_archetype(self, name: str) -> None:
        """Select an archetype by name.

        Raises:
            ArchetypeNotFoundError: If a lexicon is loaded and does not define it.
        """
        lexicon = self._store.lexicon
        if lexicon is not None and name != DEFAULT_ARCHETYPE and name not in lexicon.archetypes:
            raise ArchetypeNotFoundError(name)
        self._archetype = name
        self._rebuild()

    @staticmethod
    def _initial_archetype(lexicon: Lexicon | None) -> str:
        if lexicon is not None and lexicon.archetypes:
            return next(iter(lexicon.archetypes))
        return DEFAULT_ARCHETYPE

    # Effective configuration

    def _effective_config(self) -> GeneratorConfig:
        archetype = self._store.get_archetype(self._archetype)
        if archetype is None:
            return self._base_config

        updates: dict[str, Any] = {}
        for key, value in archetype.overrides.items():
            field = ARCHETYPE_OVERRIDE_FIELDS.get(key, key)
            if field not in GeneratorConfig.model_fields:
                logger.warning("Ignoring unknown override %r in archetype %s", key, self._archetype)
                continue
            updates[field] = value

        distribution = self._store.get_archetype_distribution(self._archetype, SENTENCE_TYPES_DISTRIBUTION)
        if distribution:
            weights = self._base_config.sentence_type_weights.model_dump(by_alias=True)
            for entry in distribution:
                if entry.key in weights:
                    weights[entry.key] = entry.weight
            updates["sentence_type_weights"] = SentenceTypeWeights.model_validate(weights)

        if not updates:
            return self._base_config
        logger.debug("Archetype %s overrides: %s", self._archetype, sorted(updates))
        merged = self._base_config.model_dump()
        merged.update(updates)
        return GeneratorConfig.model_validate(merged)

    def _rebuild(self) -> None:
        self._config = self._effective_config()
        self._rule_engine = RuleEngine(self._config)
        self._word_provider = WordProvider(self._store, self._word_source, self.rng, self._config)
        self._phrases = PhraseBuilders(
            self._word_provider, self.rng, self._config, rule_engine=self._rule_engine
        )
        self._templates = SentenceTemplates(self._phrases, self.rng, self._config, self._store)

    def _active_constraints(self) -> list[Constraint]:
        constraints = self._rule_engine.default_constraints()
        if self._store.lexicon is not None:
            constraints.extend(self._store.lexicon.constraints)
        return constraints

    def _active_invariants(self) -> list[Invariant]:
        invariants = self._rule_engine.default_invariants()
        if self._store.lexicon is not None:
            invariants.extend(self._store.lexicon.invariants)
        return invariants

    def _create_context(self, hints: Iterable[str] = ()) -> GenerationContext:
        active_tags = set(hints)
        archetype = self._store.get_archetype(self._archetype)
        if archetype is not None:
            active_tags.update(archetype.tags)
        return GenerationContext(
            seed=self._seed,
            archetype=self._archetype,
            active_tags=active_tags,
            constraints=self._active_constraints(),
            invariants=self._active_invariants(),
        )

    # Retry and degrade

    def _generate_sentence(
        self,
        ctx: GenerationContext,
        sentence_type: SentenceType | None = None,
    ) -> _Attempt:
        """Build one sentence, retrying until it validates.

        Hard constraint or invariant failures trigger a retry, and the
        rejected attempt is rolled back out of the context. After
        SIMPLIFY_AFTER failures each further attempt allows one fewer PP;
        after FORCE_SIMPLE_AFTER failures only a single-clause declarative
        is built. Limits are copied per attempt and never written back.

        Raises:
            GenerationFailedError: In strict mode, when every attempt failed.
        """
        max_attempts = self._config.max_sentence_attempts
        limits = PhraseLimits.from_config(self._config)
        last_validation: ValidationResult | None = None
        simplest = False

        for attempt in range(1, max_attempts + 1):
            ctx.retry_count = attempt - 1
            ctx.clear_sentence_state()
            ctx.push_scope(Scope.SENTENCE)
            try:
                checkpoint = ctx.checkpoint()
                templates = self._templates.with_limits(limits)
                if simplest:
                    result = templates.build_simple_declarative(ctx)
                else:
                    result = templates.build_sentence(ctx, sentence_type)
                validation = self._rule_engine.validate(ctx, result.text, result.tokens, Scope.SENTENCE)
                events = list(ctx.events_in_scope(Scope.SENTENCE))
                if not validation.acceptable:
                    ctx.rollback(checkpoint)
            finally:
                ctx.pop_scope()

            if validation.acceptable:
                if validation.soft_constraints_failed:
                    logger.debug("Accepting sentence with soft failures: %s", validation.soft_constraints_failed)
                return _Attempt(result, validation, events, ctx.retry_count)

            last_validation = validation
            logger.debug(
                "Sentence attempt %d/%d rejected: constraints=%s invariants=%s",
                attempt,
                max_attempts,
                validation.hard_constraints_failed,
                validation.invariants_failed,
                extra={"seed": self._seed, "attempt": attempt, "sentence_type": result.type.value},
            )
            if attempt >= SIMPLIFY_AFTER:
                limits = limits.simplified()
            if attempt >= FORCE_SIMPLE_AFTER:
                simplest = True

        if self._config.strict_mode:
            raise GenerationFailedError(max_attempts, last_validation)

        logger.warning(
            "No valid sentence after %d attempts, emitting simple declarative",
            max_attempts,
            extra={"seed": self._seed, "archetype": self._archetype},
        )
        ctx.clear_sentence_state()
        ctx.push_scope(Scope.SENTENCE)
        try:
            result = self._templates.with_limits(limits).build_simple_declarative(ctx)
            validation = self._rule_engine.validate(ctx, result.text, result.tokens, Scope.SENTENCE)
            events = list(ctx.events_in_scope(Scope.SENTENCE))
        finally:
            ctx.pop_scope()
        return _Attempt(result, validation, events, max_attempts)

    # Trace and meta

    @staticmethod
    def _token_traces(tokens: Sequence[str], events: Sequence[ChoiceEvent]) -> list[TokenTrace]:
        """Pair each token with the first unused term event rendered as it."""
        pending = [
            ((event.rendered or event.item.value).lower(), event)
            for event in events
            if event.kind == ChoiceKind.TERM and event.item is not None
        ]

        traces = []
        for token in tokens:
            form = token.lower()
            index = next((i for i, (rendered, _) in enumerate(pending) if rendered == form), None)
            event = None if index is None else pending.pop(index)[1]
            if event is None:
                traces.append(TokenTrace(value=token, source="default"))
            else:
                traces.append(
                    TokenTrace(value=token, source=event.term_set_id or "default", pos=event.item.pos)
                )
        return traces

    def _sentence_trace(self, attempt: _Attempt) -> SentenceTrace:
        return SentenceTrace(
            text=attempt.result.text,
            template=attempt.result.type,
            tokens=self._token_traces(attempt.result.tokens, attempt.events),
            constraints_evaluated=attempt.validation.constraint_results,
            retry_count=attempt.retry_count,
        )

    def _meta(self) -> GenerationMeta:
        lexicon = self._store.lexicon
        return GenerationMeta(
            archetype=self._archetype,
            seed=self._seed,
            lexicon_id=lexicon.id if lexicon is not None else None,
            lexicon_version=lexicon.version if lexicon is not None else None,
        )

    def _finish(
        self, text: str, ctx: GenerationContext, paragraphs: list[list[_Attempt]]
    ) -> GeneratedText:
        trace = None
        if self.enable_trace:
            trace = GenerationTrace(
                paragraphs=[
                    ParagraphTrace(sentences=[self._sentence_trace(a) for a in attempts])
                    for attempts in paragraphs
                ],
                correlations_applied=list(ctx.applied_correlations),
                invariants_checked=self._rule_engine.check_invariants(ctx.invariants, text),
            )
        return GeneratedText(text=text, trace=trace, meta=self._meta())

    # Public API

    def generate_sentence(self, options: SentenceOptions | None = None, **kwargs: Any) -> GeneratedText:
        """Generate one sentence.

        Args:
            options: SentenceOptions, or pass its fields as keyword arguments.

        Returns:
            GeneratedText; ``trace`` is set only when tracing is enabled.

        Raises:
            GenerationFailedError: In strict mode, when no attempt validated.
            InvalidConfigurationError: If the sentence type weights sum to zero.
        """
        opts = options or SentenceOptions(**kwargs)
        ctx = self._create_context(opts.hints)
        if opts.min_words is not None:
            ctx.constraints.append(self._word_bound("c.call.minWords", ConstraintType.MIN_COUNT, opts.min_words))
        if opts.max_words is not None:
            ctx.constraints.append(self._word_bound("c.call.maxWords", ConstraintType.MAX_COUNT, opts.max_words))

        attempt = self._generate_sentence(ctx, opts.type)
        return self._finish(attempt.result.text, ctx, [[attempt]])

    @staticmethod
    def _word_bound(constraint_id: str, constraint_type: ConstraintType, value: int) -> Constraint:
        return Constraint(
            id=constraint_id,
            level=ConstraintLevel.HARD,
            scope=Scope.SENTENCE,
            type=constraint_type,
            target="words",
            value=value,
        )

    def _paragraph_attempts(self, ctx: GenerationContext, count: int) -> list[_Attempt]:
        ctx.push_scope(Scope.PARAGRAPH)
        try:
            attempts = []
            for index in range(count):
                ctx.sentence_index = index
                attempts.append(self._generate_sentence(ctx))
        finally:
            ctx.pop_scope()
        return attempts

    def generate_paragraph(self, options: ParagraphOptions | None = None, **kwargs: Any) -> GeneratedText:
        """Generate a paragraph of sentences sharing paragraph-scoped biases."""
        opts = options or ParagraphOptions(**kwargs)
        ctx = self._create_context(opts.hints)

        if opts.sentences is not None:
            count = opts.sentences
        else:
            low = opts.min_sentences or self._config.min_sentences_per_paragraph
            high = opts.max_sentences or self._config.max_sentences_per_paragraph
            count = self.rng.int(low, high)

        attempts = self._paragraph_attempts(ctx, count)
        text = format_paragraph([a.result.text for a in attempts])
        return self._finish(text, ctx, [attempts])

    def generate_text_block(self, options: TextBlockOptions | None = None, **kwargs: Any) -> GeneratedText:
        """Generate paragraphs separated by blank lines.

        Paragraph-scoped biases are dropped between paragraphs; text-scoped
        biases last for the whole block.
        """
        opts = options or TextBlockOptions(**kwargs)
        ctx = self._create_context(opts.hints)

        if opts.paragraphs is not None:
            count = opts.paragraphs
        else:
            count = self.rng.int(opts.min_paragraphs, opts.max_paragraphs)

        paragraphs: list[list[_Attempt]] = []
        for index in range(count):
            ctx.paragraph_index = index
            sentence_count = self.rng.int(
                self._config.min_sentences_per_paragraph,
                self._config.max_sentences_per_paragraph,
            )
            paragraphs.append(self._paragraph_attempts(ctx, sentence_count))
            ctx.clear_paragraph_state()

        text = format_text_block([format_paragraph([a.result.text for a in p]) for p in paragraphs])
        return self._finish(text, ctx, paragraphs)

    def sentence(self, options: SentenceOptions | None = None, **kwargs: Any) -> str | GeneratedText:
        """Generate a sentence; plain text unless tracing is enabled."""
        result = self.generate_sentence(options, **kwargs)
        return result if self.enable_trace else result.text

    def paragraph(self, options: ParagraphOptions | None = None, **kwargs: Any) -> str | GeneratedText:
        """Generate a paragraph; plain text unless tracing is enabled."""
        result = self.generate_paragraph(options, **kwargs)
        return result if self.enable_trace else result.text

    def text_block(self, options: TextBlockOptions | None = None, **kwargs: Any) -> str | GeneratedText:
        """Generate a text block; plain text unless tracing is enabled."""
        result = self.generate_text_block(options, **kwargs)
        return result if self.enable_trace else result.text
