"""Tests for verb conjugation helpers."""

import pytest

from blathr.core.enums import GrammaticalNumber, Tense
from blathr.core.morphology import (
    conjugate_be,
    conjugate_do,
    conjugate_have,
    past_participle,
    past_tense,
    present_participle,
    third_person_singular,
)

SG = GrammaticalNumber.SINGULAR
PL = GrammaticalNumber.PLURAL


class TestPastTense:
    @pytest.mark.parametrize(
        ("verb", "expected"),
        [("walk", "walked"), ("bake", "baked"), ("carry", "carried"), ("play", "played"), ("stop", "stopped")],
    )
    def test_regular(self, verb, expected):
        assert past_tense(verb) == expected

    def test_irregular(self):
        assert past_tense("go") == "went"
        assert past_tense("swim") == "swam"
        assert past_participle("swim") == "swum"

    def test_regular_participle_matches_past(self):
        assert past_participle("walk") == "walked"


class TestParticiples:
    @pytest.mark.parametrize(
        ("verb", "expected"),
        [("walk", "walking"), ("make", "making"), ("lie", "lying"), ("see", "seeing"), ("run", "running")],
    )
    def test_present_participle(self, verb, expected):
        assert present_participle(verb) == expected


class TestThirdPerson:
    @pytest.mark.parametrize(
        ("verb", "expected"),
        [("walk", "walks"), ("watch", "watches"), ("fix", "fixes"), ("fly", "flies"), ("go", "goes"), ("have", "has")],
    )
    def test_third_person_singular(self, verb, expected):
        assert third_person_singular(verb) == expected


class TestAuxiliaries:
    def test_be_present(self):
        assert conjugate_be(SG, 1) == "am"
        assert conjugate_be(SG, 2) == "are"
        assert conjugate_be(SG, 3) == "is"
        assert conjugate_be(PL, 3) == "are"

    def test_be_past(self):
        assert conjugate_be(SG, 1, Tense.PAST) == "was"
        assert conjugate_be(SG, 2, Tense.PAST) == "were"
        assert conjugate_be(PL, 1, Tense.PAST) == "were"

    def test_have(self):
        assert conjugate_have(SG, 3) == "has"
        assert conjugate_have(PL, 3) == "have"
        assert conjugate_have(SG, 3, Tense.PAST) == "had"

    def test_do(self):
        assert conjugate_do(SG, 3) == "does"
        assert conjugate_do(SG, 1) == "do"
        assert conjugate_do(PL, 3, Tense.PAST) == "did"
