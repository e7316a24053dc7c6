"""Tests for PhraseBuilders: noun, verb, prepositional phrases and clauses."""

from __future__ import annotations

from typing import Any

import pytest

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext, PhraseFeatures
from blathr.core.enums import ConstraintLevel, ConstraintType, GrammaticalNumber, Scope, Tense
from blathr.core.grammar import PRONOUN_FEATURES, PhraseBuilders, PhraseLimits
from blathr.core.grammar.phrases import PLURAL_DETERMINERS
from blathr.core.lexicon import Constraint, Lexicon, LexiconStore, load_lexicon_from_dict
from blathr.core.morphology import get_article
from blathr.core.providers import WordProvider
from blathr.core.rng import SeedableRng
from blathr.core.rules import RuleEngine
from blathr.core.words import SimpleWordSource

SEEDS = range(60)
PLURAL_THIRD = PhraseFeatures(number=GrammaticalNumber.PLURAL, person=3)


def nouns_lexicon(*terms: dict[str, Any]) -> Lexicon:
    """Lexicon with a single noun set holding the given terms."""
    return load_lexicon_from_dict(
        {"id": "nouns", "language": "en", "termSets": {"noun.only": {"pos": "noun", "terms": list(terms)}}}
    )


def make_builders(
    seed: int,
    lexicon: Lexicon | None = None,
    limits: PhraseLimits | None = None,
    rule_engine: RuleEngine | None = None,
    config: GeneratorConfig | None = None,
) -> PhraseBuilders:
    rng = SeedableRng(seed)
    config = config or GeneratorConfig()
    provider = WordProvider(LexiconStore(rng, lexicon), SimpleWordSource(rng), rng, config)
    return PhraseBuilders(provider, rng, config, limits, rule_engine)


class TestDeterminism:
    """Same seed, same call sequence, same tokens."""

    def test_clause_repeats_for_same_seed(self):
        first = make_builders(99).build_clause(GenerationContext(), tense=Tense.PAST)
        second = make_builders(99).build_clause(GenerationContext(), tense=Tense.PAST)
        assert first.tokens == second.tokens

    def test_with_limits_shares_rng(self):
        builders = make_builders(5)
        simpler = builders.with_limits(PhraseLimits(max_pp_chain=0))
        assert simpler.rng is builders.rng
        assert simpler.limits.max_pp_chain == 0
        assert builders.limits.max_pp_chain == 2


class TestNounPhrase:
    """Noun phrase shape and agreement features."""

    def test_pronoun_features(self):
        seen = 0
        for seed in SEEDS:
            np = make_builders(seed).build_np(GenerationContext(), use_pronoun=True)
            if len(np.tokens) == 1 and np.tokens[0] in PRONOUN_FEATURES:
                seen += 1
                assert np.features == PRONOUN_FEATURES[np.tokens[0]]
        assert seen > 0

    def test_indefinite_article_matches_next_word(self):
        articles = 0
        for seed in SEEDS:
            tokens = make_builders(seed).build_np(GenerationContext()).tokens
            if tokens[0] in ("a", "an"):
                articles += 1
                assert tokens[0] == get_article(tokens[1])
        assert articles > 0

    def test_plural_uses_plural_determiner(self):
        np = make_builders(3).build_np(GenerationContext(), force_plural=True)
        assert np.tokens[0] in PLURAL_DETERMINERS
        assert np.features.number == GrammaticalNumber.PLURAL
        assert np.features.person == 3

    def test_force_singular(self):
        for seed in SEEDS:
            np = make_builders(seed).build_np(GenerationContext(), force_singular=True)
            assert np.features.number == GrammaticalNumber.SINGULAR

    def test_no_determiner(self):
        lexicon = nouns_lexicon({"value": "otter"})
        limits = PhraseLimits(max_adjectives_per_noun=0)
        for seed in SEEDS:
            np = make_builders(seed, lexicon, limits).build_np(GenerationContext(), use_determiner=False)
            assert np.tokens in (("otter",), ("otters",))

    def test_irregular_plural_override(self):
        lexicon = nouns_lexicon({"value": "goose", "features": {"irregular": {"plural": "geese"}}})
        np = make_builders(1, lexicon).build_np(GenerationContext(), force_plural=True)
        assert np.tokens[-1] == "geese"

    def test_uncountable_noun(self):
        lexicon = nouns_lexicon({"value": "feedback", "features": {"countable": False}})
        for seed in SEEDS:
            np = make_builders(seed, lexicon).build_np(GenerationContext(), force_plural=True)
            assert np.tokens[-1] == "feedback"
            assert np.tokens[0] not in ("a", "an")
            assert np.features.number == GrammaticalNumber.SINGULAR

    def test_inherently_plural_noun(self):
        lexicon = nouns_lexicon({"value": "data", "features": {"number": "plural"}})
        for seed in SEEDS:
            np = make_builders(seed, lexicon).build_np(GenerationContext(), force_singular=True)
            assert np.tokens[-1] == "data"
            assert np.tokens[0] in PLURAL_DETERMINERS
            assert np.features.number == GrammaticalNumber.PLURAL

    def test_adjectives_limited(self):
        lexicon = nouns_lexicon({"value": "otter"})
        limits = PhraseLimits(max_adjectives_per_noun=0)
        for seed in SEEDS:
            np = make_builders(seed, lexicon, limits).build_np(GenerationContext())
            assert len(np.tokens) <= 2

    def test_adjectives_not_repeated(self):
        limits = PhraseLimits(max_adjectives_per_noun=5)
        lexicon = nouns_lexicon({"value": "otter"})
        for seed in SEEDS:
            tokens = make_builders(seed, lexicon, limits).build_np(GenerationContext()).tokens
            assert len(tokens) == len(set(tokens))


class TestPrepositionalPhrases:
    """PP attachment honours chain and depth limits."""

    def test_pps_attach_with_defaults(self):
        lengths = [
            len(make_builders(seed).build_np(GenerationContext(), include_pp=True).tokens) for seed in SEEDS
        ]
        # DET + 2 ADJ + NOUN is the longest NP without a PP
        assert max(lengths) > 4

    @pytest.mark.parametrize("limits", [PhraseLimits(max_pp_chain=0), PhraseLimits(max_pp_depth=0)])
    def test_no_pp_when_disabled(self, limits: PhraseLimits):
        for seed in SEEDS:
            np = make_builders(seed, limits=limits).build_np(GenerationContext(), include_pp=True)
            assert len(np.tokens) <= 4

    def test_pp_object_is_not_nested_beyond_depth(self):
        limits = PhraseLimits(max_pp_chain=3, max_pp_depth=1)
        for seed in SEEDS:
            pp = make_builders(seed, limits=limits).build_pp(GenerationContext())
            assert len(pp.tokens) <= 5


class TestVerbPhrase:
    """Verb agreement and tense forms, using the minimal animal lexicon."""

    @pytest.fixture
    def limits(self) -> PhraseLimits:
        return PhraseLimits(max_adverbs_per_verb=0)

    def _vp(self, minimal_lexicon, limits, seed, subject, tense) -> tuple[str, ...]:
        builders = make_builders(seed, minimal_lexicon, limits)
        return builders.build_vp(GenerationContext(), subject, include_object=False, tense=tense).tokens

    @pytest.mark.parametrize(
        ("subject", "tense", "allowed"),
        [
            (PhraseFeatures(), Tense.PRESENT, {("swims",), ("flies",)}),
            (PLURAL_THIRD, Tense.PRESENT, {("swim",), ("fly",)}),
            (PhraseFeatures(person=1), Tense.PRESENT, {("swim",), ("fly",)}),
            (PhraseFeatures(), Tense.PAST, {("swam",), ("flew",)}),
            (PhraseFeatures(), Tense.BASE, {("swim",), ("fly",)}),
            (PhraseFeatures(), Tense.FUTURE, {("will", "swim"), ("will", "fly")}),
            (PLURAL_THIRD, Tense.PROGRESSIVE, {("are", "swimming"), ("are", "flying")}),
            (PhraseFeatures(), Tense.PROGRESSIVE, {("is", "swimming"), ("is", "flying")}),
        ],
    )
    def test_conjugation(self, minimal_lexicon, limits, subject, tense, allowed):
        for seed in range(20):
            assert self._vp(minimal_lexicon, limits, seed, subject, tense) in allowed

    def test_irregular_verb_override(self, limits):
        lexicon = load_lexicon_from_dict(
            {
                "id": "verbs",
                "language": "en",
                "termSets": {
                    "verb.only": {
                        "pos": "verb",
                        "terms": [{"value": "blorp", "features": {"irregular": {"pastTense": "blarp"}}}],
                    }
                },
            }
        )
        assert self._vp(lexicon, limits, 1, PhraseFeatures(), Tense.PAST) == ("blarp",)

    def test_modal_keeps_base_form(self, minimal_lexicon, limits):
        config = GeneratorConfig()
        modal_seen = False
        for seed in SEEDS:
            builders = make_builders(seed, minimal_lexicon, limits)
            ctx = GenerationContext()
            tokens = builders.build_vp(ctx, PhraseFeatures(), include_object=False, use_modal=True).tokens
            if tokens[0] in config.modals:
                modal_seen = True
                assert tokens[1] in ("swim", "fly")
        assert modal_seen

    def test_adverb_limit(self, minimal_lexicon):
        limits = PhraseLimits(max_adverbs_per_verb=1)
        for seed in SEEDS:
            builders = make_builders(seed, minimal_lexicon, limits)
            tokens = builders.build_vp(GenerationContext(), PhraseFeatures(), include_object=False).tokens
            assert len(tokens) <= 2


class TestClauses:
    """Clause scope handling and agreement."""

    def test_clause_restores_scope_and_records_subject(self, minimal_lexicon):
        ctx = GenerationContext()
        ctx.push_scope(Scope.SENTENCE)
        clause = make_builders(8, minimal_lexicon).build_clause(ctx)
        assert ctx.current_scope == Scope.SENTENCE
        assert ctx.current_subject_features == clause.features

    def test_subordinate_clause_starts_with_subordinator(self):
        config = GeneratorConfig()
        clause = make_builders(4).build_subordinate_clause(GenerationContext())
        assert clause.tokens[0] in config.subordinators

    def test_relative_clause_agrees_with_antecedent(self, minimal_lexicon):
        limits = PhraseLimits(max_adverbs_per_verb=0)
        config = GeneratorConfig()
        for seed in range(20):
            builders = make_builders(seed, minimal_lexicon, limits)
            clause = builders.build_relative_clause(GenerationContext(), PLURAL_THIRD)
            assert clause.tokens[0] in config.relatives
            assert clause.tokens[1] in ("swim", "fly")


class TestPhraseConstraints:
    """Hard phrase-scoped constraints trigger phrase rebuilds."""

    def test_forbidden_word_is_avoided(self, minimal_lexicon):
        config = GeneratorConfig()
        forbid = Constraint(
            id="c.noOtter",
            level=ConstraintLevel.HARD,
            scope=Scope.PHRASE,
            type=ConstraintType.FORBIDDEN,
            target="otter",
        )
        for seed in range(30):
            builders = make_builders(seed, minimal_lexicon, rule_engine=RuleEngine(config), config=config)
            ctx = GenerationContext(constraints=[forbid])
            np = builders.build_np(ctx, force_singular=True)
            assert "otter" not in np.tokens
            assert ctx.current_scope == Scope.TEXT

    def test_rejected_attempts_leave_no_history(self, minimal_lexicon):
        config = GeneratorConfig()
        forbid = Constraint(
            id="c.noOtter",
            level=ConstraintLevel.HARD,
            scope=Scope.PHRASE,
            type=ConstraintType.FORBIDDEN,
            target="otter",
        )
        nouns = {"otter", "heron", "goose"}
        for seed in range(30):
            builders = make_builders(seed, minimal_lexicon, rule_engine=RuleEngine(config), config=config)
            ctx = GenerationContext(constraints=[forbid])
            ctx.push_scope(Scope.SENTENCE)
            np = builders.build_np(ctx, force_singular=True)
            chosen = [e.value for e in ctx.events_in_scope(Scope.SENTENCE) if e.value in nouns]
            assert chosen == [t for t in np.tokens if t in nouns]

    def test_without_phrase_constraints_builds_once(self, minimal_lexicon):
        builders = make_builders(2, minimal_lexicon, rule_engine=RuleEngine(GeneratorConfig()))
        ctx = GenerationContext()
        builders.build_np(ctx)
        noun_events = [event for event in ctx.history.events if event.value in ("otter", "heron", "goose")]
        assert len(noun_events) == 1
