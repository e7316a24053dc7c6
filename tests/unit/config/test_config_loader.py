"""Tests for config loading (JSON/YAML) and config model validation."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError
import yaml

from blathr.core.config import (
    AppConfig,
    GeneratorConfig,
    SentenceTypeWeights,
    detect_format,
    load_app_config,
    load_config,
    load_generator_config,
    parse_document,
)
from blathr.core.enums import SentenceType


@pytest.fixture
def sample_config_data():
    """Sample application configuration."""
    return {
        "generator": {"max_pp_chain": 1, "strict_mode": True, "seed": 99},
        "logging": {"level": "DEBUG"},
        "lexicon_path": "lexicons/corporate.json",
        "archetype": "corporate",
    }


def test_detect_format():
    """Test format detection from file extensions."""
    assert detect_format("config.json") == "json"
    assert detect_format(Path("config.YAML")) == "yaml"
    assert detect_format("config.yml") == "yaml"


def test_detect_format_invalid():
    """Test unsupported extensions raise ValueError."""
    with pytest.raises(ValueError) as exc_info:
        detect_format("config.toml")
    assert "Unsupported config format" in str(exc_info.value)


def test_load_config_json(tmp_path, sample_config_data):
    """Test loading a JSON config."""
    config_file = tmp_path / "blathr.json"
    config_file.write_text(json.dumps(sample_config_data), encoding="utf-8")

    config = load_config(config_file)

    assert config["generator"]["max_pp_chain"] == 1
    assert config["archetype"] == "corporate"


def test_load_config_yaml(tmp_path, sample_config_data):
    """Test loading a YAML config."""
    config_file = tmp_path / "blathr.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data), encoding="utf-8")

    assert load_config(config_file) == sample_config_data


def test_load_config_empty_yaml(tmp_path):
    """Test an empty YAML file loads as an empty mapping."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")
    assert load_config(config_file) == {}


def test_load_config_missing_file(tmp_path):
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_invalid_json(tmp_path):
    """Test malformed JSON raises ValueError."""
    config_file = tmp_path / "broken.json"
    config_file.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError) as exc_info:
        load_config(config_file)
    assert "Invalid JSON" in str(exc_info.value)


def test_load_config_non_mapping_root(tmp_path):
    """Test a list at the root is rejected."""
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ValueError) as exc_info:
        load_config(config_file)
    assert "must be a mapping" in str(exc_info.value)


def test_parse_document_formats():
    """Test the same mapping parses from JSON and YAML text."""
    assert parse_document('{"seed": 3}', "json") == {"seed": 3}
    assert parse_document("seed: 3\n", "yaml") == {"seed": 3}
    assert parse_document("", "yaml") == {}


def test_parse_document_errors_name_source():
    """Test parse errors name the source and unknown formats are rejected."""
    with pytest.raises(ValueError, match="Invalid YAML in inline"):
        parse_document("key: [unclosed", "yaml", source="inline")
    with pytest.raises(ValueError, match="Unsupported config format: toml"):
        parse_document("a = 1", "toml")


def test_load_generator_config_overrides(tmp_path):
    """Test keyword overrides win over file values."""
    config_file = tmp_path / "generator.yaml"
    config_file.write_text("max_pp_chain: 0\nstrict_mode: false\n", encoding="utf-8")

    config = load_generator_config(config_file, strict_mode=True)

    assert config.max_pp_chain == 0
    assert config.strict_mode is True
    assert config.max_words_per_sentence == 25


def test_load_generator_config_defaults():
    """Test no path yields defaults plus overrides."""
    assert load_generator_config(None, seed=5) == GeneratorConfig(seed=5)


def test_load_app_config(tmp_path, sample_config_data):
    """Test AppConfig loading from an explicit path."""
    config_file = tmp_path / "blathr.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data), encoding="utf-8")

    config = load_app_config(config_file)

    assert config.generator.strict_mode is True
    assert config.generator.seed == 99
    assert config.logging.level == "DEBUG"
    assert config.lexicon_path == "lexicons/corporate.json"


def test_app_config_missing_default_uses_defaults(tmp_path, monkeypatch):
    """Test a missing default file falls back to defaults."""
    monkeypatch.chdir(tmp_path)
    config = AppConfig.load_or_default()
    assert config.generator == GeneratorConfig()
    assert config.archetype is None


def test_app_config_missing_explicit_path(tmp_path):
    """Test a missing explicit path is an error."""
    with pytest.raises(FileNotFoundError):
        AppConfig.load_or_default(tmp_path / "nope.yaml")


class TestGeneratorConfig:
    """Test GeneratorConfig validation."""

    def test_defaults(self):
        """Test documented defaults."""
        config = GeneratorConfig()
        assert config.max_pp_chain == 2
        assert config.max_sentence_attempts == 25
        assert config.strict_mode is False
        assert config.seed is None

    def test_word_range_validation(self):
        """Test max words below min words is rejected."""
        with pytest.raises(ValidationError):
            GeneratorConfig(min_words_per_sentence=10, max_words_per_sentence=5)

    def test_sentence_range_validation(self):
        """Test max sentences below min sentences is rejected."""
        with pytest.raises(ValidationError):
            GeneratorConfig(min_sentences_per_paragraph=4, max_sentences_per_paragraph=3)

    def test_rate_bounds(self):
        """Test rates outside [0, 1] are rejected."""
        with pytest.raises(ValidationError):
            GeneratorConfig(relative_clause_rate=1.5)

    def test_unknown_field_rejected(self):
        """Test typos in field names are caught."""
        with pytest.raises(ValidationError):
            GeneratorConfig(max_pp_chains=3)

    def test_frozen(self):
        """Test configs are immutable."""
        config = GeneratorConfig()
        with pytest.raises(ValidationError):
            config.max_pp_chain = 5


class TestSentenceTypeWeights:
    """Test sentence-type weight helpers."""

    def test_alias_keys(self):
        """Test camelCase sentence-type keys populate fields."""
        weights = SentenceTypeWeights.model_validate({"simpleDeclarative": 1, "introAdverbial": 2})
        assert weights.simple_declarative == 1
        assert weights.intro_adverbial == 2

    def test_pairs_in_selection_order(self):
        """Test as_pairs() follows the fixed type order."""
        pairs = SentenceTypeWeights().as_pairs()
        assert [t for t, _ in pairs] == list(SentenceType)
        assert SentenceTypeWeights().total == 100

    def test_negative_weight_rejected(self):
        """Test negative weights are rejected."""
        with pytest.raises(ValidationError):
            SentenceTypeWeights(question=-1)
