"""Shared pytest fixtures for blathr tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from blathr.core.config.models import GeneratorConfig
from blathr.core.context import GenerationContext
from blathr.core.lexicon import Lexicon, LexiconStore, load_lexicon
from blathr.core.providers import WordProvider
from blathr.core.rng import SeedableRng
from blathr.core.words import SimpleWordSource

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def corporate_lexicon_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "lexicons" / "corporate.json"


@pytest.fixture
def minimal_lexicon_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "lexicons" / "minimal.yaml"


# ============================================================================
# Lexicon Fixtures
# ============================================================================


@pytest.fixture
def corporate_lexicon(corporate_lexicon_path: Path) -> Lexicon:
    """Corporate lexicon with archetypes, correlations and relations."""
    return load_lexicon(corporate_lexicon_path)


@pytest.fixture
def minimal_lexicon(minimal_lexicon_path: Path) -> Lexicon:
    """Small YAML lexicon with nouns and verbs only."""
    return load_lexicon(minimal_lexicon_path)


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def rng() -> SeedableRng:
    return SeedableRng(12345)


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture
def ctx() -> GenerationContext:
    """Fresh context with the default archetype."""
    return GenerationContext(seed=12345)


@pytest.fixture
def store(rng: SeedableRng, corporate_lexicon: Lexicon) -> LexiconStore:
    return LexiconStore(rng, corporate_lexicon)


@pytest.fixture
def empty_store(rng: SeedableRng) -> LexiconStore:
    return LexiconStore(rng)


@pytest.fixture
def provider(store: LexiconStore, rng: SeedableRng, config: GeneratorConfig) -> WordProvider:
    """WordProvider backed by the corporate lexicon."""
    return WordProvider(store, SimpleWordSource(rng), rng, config)


@pytest.fixture
def default_provider(empty_store: LexiconStore, rng: SeedableRng, config: GeneratorConfig) -> WordProvider:
    """WordProvider with no lexicon (default tables only)."""
    return WordProvider(empty_store, SimpleWordSource(rng), rng, config)
