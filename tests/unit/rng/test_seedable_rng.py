"""Tests for SeedableRng."""

import pytest

from blathr.core.errors import BlathrError, EmptyInputError
from blathr.core.rng import RngProtocol, SeedableRng, WeightedItem


class TestDeterminism:
    """Same seed, same stream."""

    def test_same_seed_same_floats(self):
        a = SeedableRng(42)
        b = SeedableRng(42)
        assert [a.float() for _ in range(50)] == [b.float() for _ in range(50)]

    def test_reseed_replays_stream(self):
        rng = SeedableRng(7)
        first = [rng.int(0, 100) for _ in range(20)]
        rng.seed(7)
        assert [rng.int(0, 100) for _ in range(20)] == first

    def test_different_seeds_diverge(self):
        a = SeedableRng(1)
        b = SeedableRng(2)
        assert [a.float() for _ in range(10)] != [b.float() for _ in range(10)]

    def test_seed_keeps_low_32_bits(self):
        a = SeedableRng(5)
        b = SeedableRng(5 + 2**32)
        assert a.float() == b.float()

    def test_satisfies_protocol(self):
        assert isinstance(SeedableRng(), RngProtocol)


class TestRanges:
    """float/int ranges."""

    def test_float_in_unit_interval(self):
        rng = SeedableRng(99)
        for _ in range(1000):
            value = rng.float()
            assert 0.0 <= value < 1.0

    def test_int_inclusive_bounds(self):
        rng = SeedableRng(3)
        seen = {rng.int(1, 3) for _ in range(500)}
        assert seen == {1, 2, 3}

    def test_int_swaps_inverted_bounds(self):
        rng = SeedableRng(3)
        for _ in range(200):
            assert 5 <= rng.int(10, 5) <= 10

    def test_int_single_value(self):
        rng = SeedableRng(3)
        assert rng.int(4, 4) == 4


class TestPick:
    """Uniform and weighted picking."""

    def test_pick_empty_raises(self):
        with pytest.raises(EmptyInputError):
            SeedableRng().pick([])

    def test_empty_input_is_blathr_and_value_error(self):
        with pytest.raises(BlathrError):
            SeedableRng().pick(())
        with pytest.raises(ValueError):
            SeedableRng().pick(())

    def test_pick_returns_member(self):
        rng = SeedableRng(11)
        items = ["a", "b", "c"]
        for _ in range(100):
            assert rng.pick(items) in items

    def test_weighted_pick_ratio(self):
        """Test 90/10 weights yield roughly a 9:1 ratio over 10,000 draws."""
        rng = SeedableRng(2024)
        items = [WeightedItem("a", 90), WeightedItem("b", 10)]
        counts = {"a": 0, "b": 0}
        for _ in range(10_000):
            counts[rng.weighted_pick(items)] += 1

        ratio = counts["a"] / counts["b"]
        assert 7.5 < ratio < 10.8

    def test_weighted_pick_never_selects_zero_weight(self):
        rng = SeedableRng(5)
        items = [WeightedItem("never", 0), WeightedItem("always", 1), WeightedItem("negative", -3)]
        assert {rng.weighted_pick(items) for _ in range(1000)} == {"always"}

    def test_weighted_pick_all_zero_raises(self):
        with pytest.raises(EmptyInputError):
            SeedableRng().weighted_pick([WeightedItem("a", 0), WeightedItem("b", 0)])

    def test_weighted_pick_empty_raises(self):
        with pytest.raises(EmptyInputError):
            SeedableRng().weighted_pick([])


class TestShuffle:
    """Fisher-Yates shuffle."""

    def test_shuffle_returns_permutation(self):
        rng = SeedableRng(8)
        items = list(range(20))
        shuffled = rng.shuffle(items)
        assert sorted(shuffled) == items

    def test_shuffle_leaves_input_unmodified(self):
        rng = SeedableRng(8)
        items = list(range(20))
        rng.shuffle(items)
        assert items == list(range(20))

    def test_shuffle_accepts_tuple(self):
        assert len(SeedableRng(1).shuffle(("x", "y", "z"))) == 3


class TestChance:
    """chance(p) edges."""

    def test_chance_zero_always_false(self):
        rng = SeedableRng(13)
        assert not any(rng.chance(0) for _ in range(1000))

    def test_chance_one_always_true(self):
        rng = SeedableRng(13)
        assert all(rng.chance(1) for _ in range(1000))

    def test_chance_consumes_a_draw(self):
        a = SeedableRng(21)
        b = SeedableRng(21)
        a.chance(0)
        b.float()
        assert a.float() == b.float()
