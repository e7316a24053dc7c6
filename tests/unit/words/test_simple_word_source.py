"""Tests for the default word tables and SimpleWordSource."""

import pytest

from blathr.core.config.models import GeneratorConfig
from blathr.core.enums import PartOfSpeech
from blathr.core.rng import SeedableRng
from blathr.core.words import SimpleWordSource, defaults


class TestSimpleWordSource:
    """Test the built-in word source."""

    @pytest.mark.parametrize(
        ("method", "pos"),
        [
            ("noun", PartOfSpeech.NOUN),
            ("verb", PartOfSpeech.VERB),
            ("adjective", PartOfSpeech.ADJ),
            ("adverb", PartOfSpeech.ADV),
            ("preposition", PartOfSpeech.PREP),
            ("conjunction", PartOfSpeech.CONJ),
            ("interjection", PartOfSpeech.INTJ),
            ("determiner", PartOfSpeech.DET),
        ],
    )
    def test_words_come_from_tables(self, method: str, pos: PartOfSpeech):
        """Test each method draws from the matching default table."""
        source = SimpleWordSource(seed=5)
        for _ in range(20):
            assert getattr(source, method)() in defaults.DEFAULT_WORDS_BY_POS[pos]

    def test_seeded_sources_agree(self):
        """Test two sources with the same seed produce the same words."""
        first = SimpleWordSource(seed=9)
        second = SimpleWordSource(seed=9)
        assert [first.noun() for _ in range(10)] == [second.noun() for _ in range(10)]

    def test_reseed_replays(self):
        """Test seed() restarts the stream."""
        source = SimpleWordSource(seed=1)
        words = [source.verb() for _ in range(5)]
        source.seed(1)
        assert [source.verb() for _ in range(5)] == words

    def test_shared_rng_advances_caller_stream(self):
        """Test a shared RNG is consumed by the source."""
        rng = SeedableRng(3)
        before = SeedableRng(3)
        SimpleWordSource(rng).noun()
        before.float()
        assert rng.state == before.state


class TestDefaultTables:
    """Test the default word tables."""

    def test_tables_are_populated(self):
        """Test every part of speech has words."""
        for pos in PartOfSpeech:
            assert defaults.DEFAULT_WORDS_BY_POS[pos]

    def test_config_lists_feed_generator_config(self):
        """Test closed-class config defaults come from the tables."""
        config = GeneratorConfig()
        assert config.modals == list(defaults.DEFAULT_MODALS)
        assert config.coordinators == list(defaults.CONFIG_COORDINATORS)
