"""Tests for WordProvider lookup order and closed-class accessors."""

import pytest

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext
from blathr.core.enums import PartOfSpeech
from blathr.core.errors import NoTermFoundError
from blathr.core.lexicon import LexiconStore
from blathr.core.providers import WordProvider
from blathr.core.rng import SeedableRng
from blathr.core.words import SimpleWordSource, WordSource
from blathr.core.words.defaults import DEFAULT_NOUNS, DEFAULT_PREPOSITIONS


class RecordingWordSource:
    """WordSource stub returning a fixed word per call."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _word(self, name: str) -> str:
        self.calls.append(name)
        return f"{name}-word"

    def noun(self) -> str:
        return self._word("noun")

    def verb(self) -> str:
        return self._word("verb")

    def adjective(self) -> str:
        return self._word("adjective")

    def adverb(self) -> str:
        return self._word("adverb")

    def preposition(self) -> str:
        return self._word("preposition")

    def conjunction(self) -> str:
        return self._word("conjunction")

    def interjection(self) -> str:
        return self._word("interjection")

    def determiner(self) -> str:
        return self._word("determiner")


class TestLexiconFirst:
    """Lexicon hits."""

    def test_noun_from_lexicon(self, provider: WordProvider, ctx: GenerationContext):
        item = provider.get_noun(ctx)
        assert item.term_set_id in ("noun.business", "noun.tech")

    def test_relation_hints_pushed(self, provider: WordProvider, ctx: GenerationContext):
        exclude = ["stakeholder", "roadmap", "deliverable", "feedback"]
        item = provider.get_noun(ctx, term_set_ids=["noun.business"], exclude=exclude)
        assert item.value == "synergy"
        assert ctx.relation_hints == ["roadmap"]

    def test_related_noun_consumes_hint(self, provider: WordProvider, ctx: GenerationContext):
        ctx.relation_hints = ["roadmap"]
        item = provider.get_related_noun(ctx)
        assert item.value == "roadmap"
        assert item.term_set_id == "noun.business"
        assert ctx.relation_hints == []
        assert ctx.history.events[-1].value == "roadmap"

    def test_unknown_hint_falls_through(self, provider: WordProvider, ctx: GenerationContext):
        ctx.relation_hints = ["zeppelin"]
        item = provider.get_related_noun(ctx)
        assert item.value != "zeppelin"
        assert ctx.relation_hints == []


class TestFallback:
    """Default tables and word source."""

    def test_default_table_used_without_lexicon(self, default_provider: WordProvider, ctx: GenerationContext):
        item = default_provider.get_noun(ctx)
        assert item.value in DEFAULT_NOUNS
        assert item.term_set_id is None
        assert ctx.history.events[-1].value == item.value

    def test_missing_pos_in_lexicon_falls_back(self, provider: WordProvider, ctx: GenerationContext):
        item = provider.get_preposition(ctx)
        assert item.value in DEFAULT_PREPOSITIONS

    def test_no_fallback_raises(self, provider: WordProvider, ctx: GenerationContext):
        with pytest.raises(NoTermFoundError) as exc_info:
            provider.get_preposition(ctx, allow_fallback=False)
        assert exc_info.value.pos == "prep"

    def test_word_source_used_when_table_exhausted(self, ctx: GenerationContext):
        rng = SeedableRng(1)
        source = RecordingWordSource()
        provider = WordProvider(LexiconStore(rng), source, rng, GeneratorConfig())

        item = provider.get_preposition(ctx, exclude=DEFAULT_PREPOSITIONS)

        assert item.value == "preposition-word"
        assert source.calls == ["preposition"]

    def test_word_sources_satisfy_protocol(self):
        assert isinstance(RecordingWordSource(), WordSource)
        assert isinstance(SimpleWordSource(seed=3), WordSource)


class TestClosedClass:
    """Words drawn straight from configuration."""

    def test_closed_class_words_come_from_config(self):
        rng = SeedableRng(4)
        config = GeneratorConfig(modals=["shall"], coordinators=["yet"], transitions=["Meanwhile"])
        provider = WordProvider(LexiconStore(rng), SimpleWordSource(rng), rng, config)
        assert provider.get_modal() == "shall"
        assert provider.get_coordinator() == "yet"
        assert provider.get_transition() == "Meanwhile"

    def test_closed_class_words_not_recorded(self, provider: WordProvider, ctx: GenerationContext):
        provider.get_subject_pronoun()
        provider.get_relative_pronoun()
        provider.get_subordinator()
        assert ctx.history.events == []

    def test_get_word_by_pos(self, default_provider: WordProvider, ctx: GenerationContext):
        assert default_provider.get_word(PartOfSpeech.VERB, ctx).pos == PartOfSpeech.VERB
