"""Tests for lexicon loading and validation."""

import json
from pathlib import Path

import pytest

from blathr.core.enums import PartOfSpeech
from blathr.core.errors import LexiconLoadError
from blathr.core.lexicon import (
    IssueSeverity,
    Lexicon,
    load_lexicon,
    load_lexicon_from_dict,
    load_lexicon_from_string,
    validate_lexicon,
)


def _minimal_doc(**extra) -> dict:
    doc = {
        "id": "t",
        "language": "en",
        "termSets": {"noun.a": {"pos": "noun", "terms": [{"value": "otter"}]}},
    }
    doc.update(extra)
    return doc


class TestLoadFiles:
    """Loading from disk."""

    def test_load_json(self, corporate_lexicon_path: Path):
        lexicon = load_lexicon(corporate_lexicon_path)
        assert lexicon.id == "corporate"
        assert lexicon.version == "1.0.0"
        assert lexicon.term_sets["noun.business"].pos == PartOfSpeech.NOUN
        assert lexicon.relations[0].from_ == "synergy"

    def test_load_yaml(self, minimal_lexicon_path: Path):
        lexicon = load_lexicon(minimal_lexicon_path)
        goose = lexicon.term_sets["noun.animals"].terms[2]
        assert goose.features.irregular.plural == "geese"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_lexicon(tmp_path / "missing.json")

    def test_unsupported_extension(self, tmp_path: Path):
        path = tmp_path / "lexicon.txt"
        path.write_text("{}")
        with pytest.raises(ValueError, match="Unsupported"):
            load_lexicon(path)


class TestLoadStrings:
    """Loading from text."""

    def test_json_string(self):
        lexicon = load_lexicon_from_string(json.dumps(_minimal_doc()))
        assert isinstance(lexicon, Lexicon)

    def test_yaml_string(self):
        text = "id: y\nlanguage: en\ntermSets: {}\n"
        assert load_lexicon_from_string(text, fmt="yaml").id == "y"

    def test_unparseable_string(self):
        with pytest.raises(LexiconLoadError, match="Could not parse"):
            load_lexicon_from_string("{not json")

    def test_non_mapping_root(self):
        with pytest.raises(LexiconLoadError, match="must be a mapping"):
            load_lexicon_from_string("- one\n- two\n", fmt="yaml")


class TestValidation:
    """Schema errors and cross-reference warnings."""

    def test_valid_document(self):
        result = validate_lexicon(_minimal_doc())
        assert result.valid
        assert result.errors == []
        assert result.lexicon is not None

    def test_missing_id_is_error(self):
        doc = _minimal_doc()
        del doc["id"]
        result = validate_lexicon(doc)
        assert not result.valid
        assert any(issue.path == "id" for issue in result.errors)
        assert all(issue.severity == IssueSeverity.ERROR for issue in result.errors)

    def test_bad_pos_located(self):
        doc = _minimal_doc(termSets={"x": {"pos": "gerund", "terms": []}})
        result = validate_lexicon(doc)
        assert not result.valid
        assert any(issue.path.startswith("termSets.x.pos") for issue in result.errors)

    def test_non_mapping_document(self):
        result = validate_lexicon(["not", "a", "lexicon"])
        assert not result.valid

    def test_invalid_correlation_scope(self):
        doc = _minimal_doc(
            correlations=[{"when": {"chosenValue": "otter"}, "thenBoost": [{"termSet": "noun.a", "weightDelta": 1}], "scope": "text"}]
        )
        assert not validate_lexicon(doc).valid

    def test_boost_without_target(self):
        doc = _minimal_doc(correlations=[{"when": {"chosenValue": "otter"}, "thenBoost": [{"weightDelta": 1}]}])
        assert not validate_lexicon(doc).valid

    def test_unknown_boost_target_warns(self):
        doc = _minimal_doc(
            correlations=[{"when": {"chosenValue": "otter"}, "thenBoost": [{"termSet": "noun.ghost", "weightDelta": 1}]}]
        )
        result = validate_lexicon(doc)
        assert result.valid
        assert [w.path for w in result.warnings] == ["correlations[0].thenBoost[0].termSet"]

    def test_unknown_archetype_distribution_warns(self):
        doc = _minimal_doc(archetypes={"a": {"distributions": {"termSetBias": "nope"}}})
        result = validate_lexicon(doc)
        assert result.valid
        assert "Unknown distribution" in result.warnings[0].message

    def test_empty_term_set_warns(self):
        doc = _minimal_doc(termSets={"noun.empty": {"pos": "noun", "terms": []}})
        result = validate_lexicon(doc)
        assert result.warnings[0].path == "termSets.noun.empty.terms"

    def test_fixture_lexicon_has_no_warnings(self, corporate_lexicon_path: Path):
        result = validate_lexicon(json.loads(corporate_lexicon_path.read_text()))
        assert result.valid
        assert result.warnings == []


class TestLoadFromDict:
    def test_raises_with_issues(self):
        with pytest.raises(LexiconLoadError) as exc_info:
            load_lexicon_from_dict({"language": "en"})
        assert exc_info.value.issues
        assert "id" in str(exc_info.value)
