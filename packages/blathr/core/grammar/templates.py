"""Sentence templates: type selection and the six sentence shapes."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext
from blathr.core.enums import PatternType, SentenceType, Tense
from blathr.core.errors import InvalidConfigurationError
from blathr.core.grammar.models import PhraseLimits, SentenceResult
from blathr.core.grammar.phrases import THIRD_SINGULAR, PhraseBuilders
from blathr.core.lexicon.models import PatternQuery
from blathr.core.lexicon.store import LexiconStore
from blathr.core.morphology import conjugate_do, format_sentence, join_tokens
from blathr.core.rng import RngProtocol

logger = logging.getLogger(__name__)

WH_WORDS: tuple[str, ...] = ("what", "how", "why", "when", "where")

_TYPES_BY_VALUE = {sentence_type.value: sentence_type for sentence_type in SentenceType}


def _render(tokens: Sequence[str], sentence_type: SentenceType, punctuation: str = ".") -> SentenceResult:
    return SentenceResult(
        text=format_sentence(join_tokens(tokens), punctuation),
        type=sentence_type,
        tokens=tuple(tokens),
    )


class SentenceTemplates:
    """Chooses a sentence type and assembles it from phrases.

    Example:
        >>> templates = SentenceTemplates(phrases, rng, config)
        >>> templates.build_sentence(ctx, SentenceType.QUESTION).text
        'Does the system align quickly?'
    """

    def __init__(
        self,
        phrase_builders: PhraseBuilders,
        rng: RngProtocol,
        config: GeneratorConfig,
        lexicon_store: LexiconStore | None = None,
    ) -> None:
        self.phrases = phrase_builders
        self.rng = rng
        self.config = config
        self.lexicon_store = lexicon_store
        self._builders = {
            SentenceType.SIMPLE_DECLARATIVE: self.build_declarative,
            SentenceType.COMPOUND: self.build_compound,
            SentenceType.INTRO_ADVERBIAL: self.build_intro_adverbial,
            SentenceType.SUBORDINATE: self.build_subordinate,
            SentenceType.INTERJECTION: self.build_interjection,
            SentenceType.QUESTION: self.build_question,
        }

    def with_limits(self, limits: PhraseLimits) -> SentenceTemplates:
        """Return templates whose phrase builders use different limits."""
        return SentenceTemplates(self.phrases.with_limits(limits), self.rng, self.config, self.lexicon_store)

    # Type selection

    def _pattern_type(self, ctx: GenerationContext) -> SentenceType | None:
        if self.lexicon_store is None or not self.lexicon_store.is_loaded() or not ctx.active_tags:
            return None
        query = PatternQuery(type=PatternType.SENTENCE, tags=tuple(sorted(ctx.active_tags)))
        sampled = self.lexicon_store.sample_pattern(query, ctx)
        if sampled is None:
            return None
        pattern_id, pattern = sampled
        if pattern.slots and pattern.slots[0] in _TYPES_BY_VALUE:
            logger.debug("Sentence pattern %s selects %s", pattern_id, pattern.slots[0])
            return _TYPES_BY_VALUE[pattern.slots[0]]
        return None

    def select_sentence_type(
        self,
        ctx: GenerationContext,
        weights: Sequence[tuple[SentenceType, float]] | None = None,
    ) -> SentenceType:
        """Pick a sentence type.

        A lexicon sentence pattern sharing an active tag wins when its first
        slot names a sentence type; otherwise one float draw is compared
        against the cumulative weights in fixed type order.

        Args:
            ctx: Generation context (receives any pattern choice).
            weights: (type, weight) pairs; defaults to the configured weights.

        Returns:
            The selected SentenceType.

        Raises:
            InvalidConfigurationError: If the weights do not sum to a positive total.
        """
        pattern_type = self._pattern_type(ctx)
        if pattern_type is not None:
            return pattern_type

        pairs = list(weights) if weights is not None else self.config.sentence_type_weights.as_pairs()
        total = sum(weight for _, weight in pairs)
        if total <= 0:
            raise InvalidConfigurationError(f"Sentence type weights must sum to a positive total, got {total}")

        draw = self.rng.float() * total
        cumulative = 0.0
        for sentence_type, weight in pairs:
            cumulative += weight
            if draw < cumulative:
                return sentence_type
        return pairs[-1][0]

    def build_sentence(self, ctx: GenerationContext, sentence_type: SentenceType | None = None) -> SentenceResult:
        """Build a sentence of the given type, drawing one when omitted."""
        chosen = sentence_type or self.select_sentence_type(ctx)
        return self._builders[chosen](ctx)

    # Shapes

    def _tense(self) -> Tense:
        return self.rng.pick([Tense.PRESENT, Tense.PAST])

    def build_declarative(self, ctx: GenerationContext) -> SentenceResult:
        """Relative-clause shape at ``relative_clause_rate``, else a single clause."""
        if self.rng.chance(self.config.relative_clause_rate):
            return self.build_with_relative_clause(ctx)
        return self.build_simple_declarative(ctx)

    def build_simple_declarative(self, ctx: GenerationContext) -> SentenceResult:
        """A single clause; the retry loop falls back to this shape."""
        clause = self.phrases.build_clause(ctx, tense=self._tense(), use_pronoun=self.rng.chance(0.3))
        return _render(clause.tokens, SentenceType.SIMPLE_DECLARATIVE)

    def build_compound(self, ctx: GenerationContext) -> SentenceResult:
        tense = self._tense()
        first = self.phrases.build_clause(ctx, tense=tense)
        coordinator = self.phrases.word_provider.get_coordinator()
        second = self.phrases.build_clause(ctx, tense=tense)
        return _render([*first.tokens, ",", coordinator, *second.tokens], SentenceType.COMPOUND)

    def build_intro_adverbial(self, ctx: GenerationContext) -> SentenceResult:
        if self.rng.chance(0.6):
            intro: Sequence[str] = [self.phrases.word_provider.get_transition()]
        else:
            intro = self.phrases.build_pp(ctx).tokens
        clause = self.phrases.build_clause(ctx, tense=self._tense())
        return _render([*intro, ",", *clause.tokens], SentenceType.INTRO_ADVERBIAL)

    def build_subordinate(self, ctx: GenerationContext) -> SentenceResult:
        subordinate = self.phrases.build_subordinate_clause(ctx)
        main = self.phrases.build_clause(ctx, tense=self._tense())
        if self.rng.chance(0.5):
            tokens = [*subordinate.tokens, ",", *main.tokens]
        else:
            tokens = [*main.tokens, *subordinate.tokens]
        return _render(tokens, SentenceType.SUBORDINATE)

    def build_interjection(self, ctx: GenerationContext) -> SentenceResult:
        interjection = self.phrases.word_provider.get_interjection_word()
        clause = self.phrases.build_clause(ctx, tense=Tense.PRESENT)
        return _render([interjection, ",", *clause.tokens], SentenceType.INTERJECTION)

    def build_question(self, ctx: GenerationContext) -> SentenceResult:
        """Yes/no question with do-support (60%) or a WH-question (40%).

        Verbs after do-support stay in base form.
        """
        tokens: list[str] = []

        if self.rng.chance(0.6):
            subject = self.phrases.build_np(ctx, use_pronoun=self.rng.chance(0.4))
            tense = Tense.PAST if self.rng.chance(0.3) else Tense.PRESENT
            tokens.append(conjugate_do(subject.features.number, subject.features.person, tense))
            tokens.extend(subject.tokens)
            tokens.extend(self.phrases.build_vp(ctx, subject.features, tense=Tense.BASE).tokens)
            return _render(tokens, SentenceType.QUESTION, "?")

        wh_word = self.rng.pick(WH_WORDS)
        tokens.append(wh_word)

        if wh_word in ("what", "how") and self.rng.chance(0.5):
            tokens.extend(self.phrases.build_vp(ctx, THIRD_SINGULAR, include_object=True).tokens)
        else:
            include_object = wh_word not in ("what", "how")
            subject = self.phrases.build_np(ctx)
            tokens.append(conjugate_do(subject.features.number, subject.features.person))
            tokens.extend(subject.tokens)
            tokens.extend(
                self.phrases.build_vp(ctx, subject.features, include_object=include_object, tense=Tense.BASE).tokens
            )
        return _render(tokens, SentenceType.QUESTION, "?")

    def build_with_relative_clause(self, ctx: GenerationContext) -> SentenceResult:
        """Subject NP + relative clause + VP, classified as a simple declarative."""
        subject = self.phrases.build_np(ctx)
        relative = self.phrases.build_relative_clause(ctx, subject.features)
        predicate = self.phrases.build_vp(ctx, subject.features, include_object=False)
        return _render(
            [*subject.tokens, *relative.tokens, *predicate.tokens],
            SentenceType.SIMPLE_DECLARATIVE,
        )
