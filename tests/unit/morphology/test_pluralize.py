"""Tests for pluralize/singularize."""

import pytest

from blathr.core.morphology import is_plural, pluralize, singularize


class TestPluralize:
    """Regular and irregular plurals."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("cat", "cats"),
            ("box", "boxes"),
            ("church", "churches"),
            ("city", "cities"),
            ("day", "days"),
            ("hero", "heroes"),
            ("piano", "pianos"),
        ],
    )
    def test_regular(self, word, expected):
        assert pluralize(word) == expected

    @pytest.mark.parametrize(
        ("word", "expected"),
        [("child", "children"), ("mouse", "mice"), ("sheep", "sheep"), ("crisis", "crises"), ("knife", "knives")],
    )
    def test_irregular(self, word, expected):
        assert pluralize(word) == expected

    def test_preserves_case(self):
        assert pluralize("Child") == "Children"
        assert pluralize("GOOSE") == "GEESE"

    def test_empty(self):
        assert pluralize("") == ""


class TestSingularize:
    @pytest.mark.parametrize(
        ("word", "expected"),
        [("cats", "cat"), ("cities", "city"), ("boxes", "box"), ("children", "child"), ("glass", "glass")],
    )
    def test_singularize(self, word, expected):
        assert singularize(word) == expected


class TestIsPlural:
    def test_guesses(self):
        assert is_plural("cats")
        assert is_plural("people")
        assert not is_plural("child")
        assert not is_plural("glass")
