"""Phrase builders: NP, VP, PP, ADJP, ADVP and clauses.

Every builder consumes the shared RNG in a fixed order, so the same seed
and the same call sequence always produce the same tokens.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext, PhraseFeatures
from blathr.core.enums import GrammaticalNumber, Scope, Tense
from blathr.core.grammar.models import PhraseLimits, PhraseResult
from blathr.core.lexicon.models import LexicalItem
from blathr.core.morphology import (
    conjugate_be,
    get_article,
    join_tokens,
    past_tense,
    pluralize,
    present_participle,
    third_person_singular,
)
from blathr.core.providers import WordProvider
from blathr.core.rng import RngProtocol
from blathr.core.rules import RuleEngine

logger = logging.getLogger(__name__)

PRONOUN_FEATURES: dict[str, PhraseFeatures] = {
    "I": PhraseFeatures(number=GrammaticalNumber.SINGULAR, person=1),
    "you": PhraseFeatures(number=GrammaticalNumber.SINGULAR, person=2),
    "we": PhraseFeatures(number=GrammaticalNumber.PLURAL, person=1),
    "they": PhraseFeatures(number=GrammaticalNumber.PLURAL, person=3),
    "he": PhraseFeatures(number=GrammaticalNumber.SINGULAR, person=3),
    "she": PhraseFeatures(number=GrammaticalNumber.SINGULAR, person=3),
    "it": PhraseFeatures(number=GrammaticalNumber.SINGULAR, person=3),
}

PLURAL_DETERMINERS: tuple[str, ...] = ("the", "some", "many", "few", "these", "those", "several")
ADJECTIVE_INTENSIFIERS: tuple[str, ...] = ("very", "quite", "rather", "somewhat", "extremely", "incredibly")
ADVERB_INTENSIFIERS: tuple[str, ...] = ("very", "quite", "rather", "most")

THIRD_SINGULAR = PhraseFeatures()

PRONOUN_RATE = 0.3
PLURAL_RATE = 0.25
DEFINITE_RATE = 0.5
ADJECTIVE_RATE = 0.4
NP_PP_RATE = 0.3
LEADING_ADVERB_RATE = 0.2
MODAL_RATE = 0.3
OBJECT_RATE = 0.6
VP_PP_RATE = 0.25
TRAILING_ADVERB_RATE = 0.15
ADJP_INTENSIFIER_RATE = 0.3
ADVP_INTENSIFIER_RATE = 0.2
CLAUSE_PP_RATE = 0.3


def _irregular(item: LexicalItem, form: str) -> str | None:
    if item.features is None or item.features.irregular is None:
        return None
    return getattr(item.features.irregular, form)


class PhraseBuilders:
    """Builds phrases from words supplied by a WordProvider.

    Structural limits come from a PhraseLimits value rather than the
    configuration, so a retry loop can hand out simplified copies via
    with_limits() without touching shared state.

    Args:
        word_provider: Word lookup (lexicon, defaults, word source).
        rng: Shared session RNG.
        config: Effective generator configuration.
        limits: Structural limits; derived from config when omitted.
        rule_engine: When given, phrase-scoped constraints are enforced
            with up to ``config.max_phrase_attempts`` rebuilds.
    """

    def __init__(
        self,
        word_provider: WordProvider,
        rng: RngProtocol,
        config: GeneratorConfig,
        limits: PhraseLimits | None = None,
        rule_engine: RuleEngine | None = None,
    ) -> None:
        self.word_provider = word_provider
        self.rng = rng
        self.config = config
        self.limits = limits or PhraseLimits.from_config(config)
        self.rule_engine = rule_engine

    def with_limits(self, limits: PhraseLimits) -> PhraseBuilders:
        """Return a copy of these builders using different limits."""
        return PhraseBuilders(self.word_provider, self.rng, self.config, limits, self.rule_engine)

    # Phrase scope and constraint retry

    def _checks_phrases(self, ctx: GenerationContext) -> bool:
        return self.rule_engine is not None and any(
            constraint.scope == Scope.PHRASE for constraint in ctx.constraints
        )

    def _in_phrase(self, ctx: GenerationContext, build: Callable[[], PhraseResult]) -> PhraseResult:
        """Build one phrase in its own scope, rebuilding while phrase constraints fail.

        A rejected attempt is rolled back before the rebuild, so its words,
        boosts and relation hints never reach later phrases or the sentence
        checks. The last attempt is kept even if it still fails.
        """
        attempts = self.config.max_phrase_attempts if self._checks_phrases(ctx) else 1
        result = PhraseResult()
        for attempt in range(1, attempts + 1):
            ctx.push_scope(Scope.PHRASE)
            try:
                checkpoint = ctx.checkpoint() if attempts > 1 else None
                result = build()
                if checkpoint is None:
                    return result
                validation = self.rule_engine.validate(
                    ctx, join_tokens(result.tokens), result.tokens, Scope.PHRASE, invariants=()
                )
                if validation.valid:
                    return result
                logger.debug(
                    "Phrase attempt %d/%d failed: %s",
                    attempt,
                    attempts,
                    validation.hard_constraints_failed,
                )
                if attempt < attempts:
                    ctx.rollback(checkpoint)
            finally:
                ctx.pop_scope()
        return result

    # Noun phrases

    def build_np(
        self,
        ctx: GenerationContext,
        *,
        use_pronoun: bool = False,
        include_pp: bool = False,
        force_plural: bool = False,
        force_singular: bool = False,
        use_determiner: bool = True,
        depth: int = 0,
    ) -> PhraseResult:
        """Build a noun phrase: ``[DET] [ADJ*] NOUN [PP*]`` or a pronoun.

        Args:
            ctx: Generation context.
            use_pronoun: Allow a subject pronoun (drawn with a fixed probability).
            include_pp: Allow trailing prepositional phrases.
            force_plural: Always pluralize the noun.
            force_singular: Never pluralize the noun.
            use_determiner: Emit a determiner or article.
            depth: PP nesting depth of this NP; PPs attach only below
                ``limits.max_pp_depth``.

        Returns:
            PhraseResult with the NP tokens and its agreement features.
        """
        return self._in_phrase(
            ctx,
            lambda: self._np(ctx, use_pronoun, include_pp, force_plural, force_singular, use_determiner, depth),
        )

    def _np(
        self,
        ctx: GenerationContext,
        use_pronoun: bool,
        include_pp: bool,
        force_plural: bool,
        force_singular: bool,
        use_determiner: bool,
        depth: int,
    ) -> PhraseResult:
        if use_pronoun and self.rng.chance(PRONOUN_RATE):
            pronoun = self.word_provider.get_subject_pronoun()
            return PhraseResult(tokens=(pronoun,), features=PRONOUN_FEATURES.get(pronoun, THIRD_SINGULAR))

        item = self.word_provider.get_related_noun(ctx)
        features = item.features
        countable = features is None or features.countable is not False
        inherent = features.number if features is not None else None

        if inherent == "plural":
            plural = True
        elif inherent == "singular" or not countable or force_singular:
            plural = False
        else:
            plural = force_plural or self.rng.chance(PLURAL_RATE)

        noun = item.value
        if plural and inherent != "plural":
            noun = _irregular(item, "plural") or pluralize(noun)
        ctx.record_form(item, noun)

        tokens: list[str] = []
        indefinite = False
        if use_determiner:
            if plural:
                tokens.append(self.rng.pick(PLURAL_DETERMINERS))
            elif self.rng.chance(DEFINITE_RATE):
                tokens.append("the")
            else:
                # Article waits for the adjectives so a/an matches the next word
                indefinite = countable

        adjectives: list[str] = []
        max_adjectives = self.limits.max_adjectives_per_noun
        if self.rng.chance(ADJECTIVE_RATE) and max_adjectives > 0:
            for _ in range(self.rng.int(1, max_adjectives)):
                adjectives.append(self.word_provider.get_adjective(ctx, exclude=adjectives).value)

        if indefinite:
            tokens.append(get_article(adjectives[0] if adjectives else noun))
        tokens.extend(adjectives)
        tokens.append(noun)

        if include_pp and depth < self.limits.max_pp_depth and self.rng.chance(NP_PP_RATE):
            if self.limits.max_pp_chain > 0:
                for _ in range(self.rng.int(1, self.limits.max_pp_chain)):
                    tokens.extend(self.build_pp(ctx, depth=depth).tokens)

        number = GrammaticalNumber.PLURAL if plural else GrammaticalNumber.SINGULAR
        return PhraseResult(tokens=tuple(tokens), features=PhraseFeatures(number=number, person=3))

    # Verb phrases

    def build_vp(
        self,
        ctx: GenerationContext,
        subject: PhraseFeatures,
        *,
        include_object: bool = True,
        include_pp: bool = False,
        tense: Tense = Tense.PRESENT,
        use_modal: bool = False,
    ) -> PhraseResult:
        """Build a verb phrase: ``[ADV] [AUX] VERB [NP] [PP] [ADV]``.

        The verb agrees with ``subject``. Tense.BASE leaves the verb
        unconjugated (after do-support or a modal).
        """
        return self._in_phrase(
            ctx, lambda: self._vp(ctx, subject, include_object, include_pp, tense, use_modal)
        )

    def _vp(
        self,
        ctx: GenerationContext,
        subject: PhraseFeatures,
        include_object: bool,
        include_pp: bool,
        tense: Tense,
        use_modal: bool,
    ) -> PhraseResult:
        tokens: list[str] = []
        adverbs = 0

        if self.rng.chance(LEADING_ADVERB_RATE) and adverbs < self.limits.max_adverbs_per_verb:
            tokens.append(self.word_provider.get_adverb(ctx).value)
            adverbs += 1

        item = self.word_provider.get_verb(ctx)
        if use_modal and self.rng.chance(MODAL_RATE):
            tokens.append(self.word_provider.get_modal())
            tokens.append(item.value)
        else:
            tokens.extend(self._conjugate(item, subject, tense))
        ctx.record_form(item, tokens[-1])

        if include_object and self.rng.chance(OBJECT_RATE):
            tokens.extend(self.build_np(ctx).tokens)

        if include_pp and self.rng.chance(VP_PP_RATE) and self.limits.max_pp_chain > 0:
            tokens.extend(self.build_pp(ctx).tokens)

        if self.rng.chance(TRAILING_ADVERB_RATE) and adverbs < self.limits.max_adverbs_per_verb:
            tokens.append(self.word_provider.get_adverb(ctx).value)

        return PhraseResult(tokens=tuple(tokens))

    def _conjugate(self, item: LexicalItem, subject: PhraseFeatures, tense: Tense) -> list[str]:
        verb = item.value
        if tense == Tense.PAST:
            return [_irregular(item, "past_tense") or past_tense(verb)]
        if tense == Tense.PROGRESSIVE:
            be = conjugate_be(subject.number, subject.person, Tense.PRESENT)
            return [be, _irregular(item, "present_participle") or present_participle(verb)]
        if tense == Tense.FUTURE:
            return ["will", verb]
        if tense == Tense.PRESENT and subject.is_third_singular:
            return [_irregular(item, "third_person") or third_person_singular(verb)]
        return [verb]

    # Other phrases

    def build_pp(self, ctx: GenerationContext, *, depth: int = 0) -> PhraseResult:
        """Build a prepositional phrase: ``PREP NP``.

        The object NP sits one level deeper, so it may carry PPs of its
        own only while ``depth + 1 < limits.max_pp_depth``.
        """

        def build() -> PhraseResult:
            preposition = self.word_provider.get_preposition(ctx).value
            np = self.build_np(ctx, include_pp=True, depth=depth + 1)
            return PhraseResult(tokens=(preposition, *np.tokens))

        return self._in_phrase(ctx, build)

    def build_adjp(self, ctx: GenerationContext) -> PhraseResult:
        """Build an adjective phrase: ``[INTENSIFIER] ADJ``."""

        def build() -> PhraseResult:
            tokens: list[str] = []
            if self.rng.chance(ADJP_INTENSIFIER_RATE):
                tokens.append(self.rng.pick(ADJECTIVE_INTENSIFIERS))
            tokens.append(self.word_provider.get_adjective(ctx).value)
            return PhraseResult(tokens=tuple(tokens))

        return self._in_phrase(ctx, build)

    def build_advp(self, ctx: GenerationContext) -> PhraseResult:
        """Build an adverb phrase: ``[INTENSIFIER] ADV``."""

        def build() -> PhraseResult:
            tokens: list[str] = []
            if self.rng.chance(ADVP_INTENSIFIER_RATE):
                tokens.append(self.rng.pick(ADVERB_INTENSIFIERS))
            tokens.append(self.word_provider.get_adverb(ctx).value)
            return PhraseResult(tokens=tuple(tokens))

        return self._in_phrase(ctx, build)

    # Clauses

    def build_clause(
        self,
        ctx: GenerationContext,
        *,
        tense: Tense = Tense.PRESENT,
        use_pronoun: bool = False,
    ) -> PhraseResult:
        """Build a clause: subject NP plus an agreeing VP.

        Returns:
            PhraseResult whose features are the subject's.
        """
        ctx.push_scope(Scope.CLAUSE)
        try:
            subject = self.build_np(ctx, use_pronoun=use_pronoun)
            ctx.current_subject_features = subject.features
            predicate = self.build_vp(
                ctx,
                subject.features,
                include_object=True,
                include_pp=self.rng.chance(CLAUSE_PP_RATE),
                tense=tense,
            )
        finally:
            ctx.pop_scope()
        return PhraseResult(tokens=subject.tokens + predicate.tokens, features=subject.features)

    def build_subordinate_clause(self, ctx: GenerationContext) -> PhraseResult:
        """Build ``SUBORDINATOR CLAUSE`` with a present or past clause."""
        subordinator = self.word_provider.get_subordinator()
        clause = self.build_clause(
            ctx,
            tense=self.rng.pick([Tense.PRESENT, Tense.PAST]),
            use_pronoun=self.rng.chance(0.5),
        )
        return PhraseResult(tokens=(subordinator, *clause.tokens), features=clause.features)

    def build_relative_clause(self, ctx: GenerationContext, antecedent: PhraseFeatures) -> PhraseResult:
        """Build ``RELATIVE VP`` with the VP agreeing with the antecedent."""
        relative = self.word_provider.get_relative_pronoun()
        vp = self.build_vp(ctx, antecedent, include_object=self.rng.chance(0.5), tense=Tense.PRESENT)
        return PhraseResult(tokens=(relative, *vp.tokens))
