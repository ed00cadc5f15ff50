"""
test_generator.py - Tests for the Deterministic Pseudo-Random Source

Tests cover:
- Seed reproducibility
- Integer and float ranges (half-open and closed)
- Empty-range contract violations
- Dice rolls
- State snapshots and spawned streams
"""

import math

import pytest
import numpy as np

from sampling_lab import PseudoRandom


class TestDeterminism:
    """Identical seeds must give identical streams."""

    def test_same_seed_same_words(self):
        a = PseudoRandom(seed=2024)
        b = PseudoRandom(seed=2024)

        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_same_seed_same_mixed_calls(self):
        """Interleaved call types stay in lockstep."""
        a = PseudoRandom(seed=9)
        b = PseudoRandom(seed=9)

        def draw(g):
            return (
                g.next(),
                g.integer(0, 1000),
                g.random(),
                g.uniform(-5.0, 5.0, closed=True),
                g.roll(3, 6),
                g.open_unit(),
            )

        for _ in range(50):
            assert draw(a) == draw(b)

    def test_different_seeds_differ(self, generator, generator_alternate):
        words_a = [generator.next() for _ in range(10)]
        words_b = [generator_alternate.next() for _ in range(10)]

        assert words_a != words_b

    def test_words_are_unsigned_64_bit(self, generator):
        for _ in range(1000):
            word = generator.next()
            assert 0 <= word < 2 ** 64


class TestIntegers:
    """Tests for bounded integer draws."""

    def test_half_open_range(self, generator):
        draws = [generator.integer(3, 7) for _ in range(2000)]

        assert min(draws) == 3
        assert max(draws) == 6

    def test_closed_range_includes_high(self, generator):
        draws = [generator.integer(3, 7, closed=True) for _ in range(2000)]

        assert min(draws) == 3
        assert max(draws) == 7

    def test_single_value_closed(self, generator):
        assert generator.integer(5, 5, closed=True) == 5

    def test_roughly_uniform(self, generator):
        """Each of 10 outcomes should get about 10% of 50 000 draws."""
        draws = np.array([generator.integer(0, 10) for _ in range(50_000)])
        counts = np.bincount(draws, minlength=10)

        assert np.all(np.abs(counts / 50_000 - 0.1) < 0.01)

    def test_empty_range_raises(self, generator):
        with pytest.raises(ValueError, match="Empty integer range"):
            generator.integer(5, 5)

        with pytest.raises(ValueError, match="Empty integer range"):
            generator.integer(5, 4, closed=True)


class TestFloats:
    """Tests for random(), open_unit() and uniform()."""

    def test_random_in_unit_interval(self, generator):
        draws = np.array([generator.random() for _ in range(10_000)])

        assert np.all(draws >= 0.0)
        assert np.all(draws < 1.0)
        assert np.isclose(draws.mean(), 0.5, atol=0.02)

    def test_open_unit_excludes_endpoints(self, generator):
        draws = np.array([generator.open_unit() for _ in range(10_000)])

        assert np.all(draws > 0.0)
        assert np.all(draws < 1.0)

    def test_uniform_half_open(self, generator):
        draws = np.array([generator.uniform(2.0, 4.0) for _ in range(10_000)])

        assert np.all(draws >= 2.0)
        assert np.all(draws < 4.0)
        assert np.isclose(draws.mean(), 3.0, atol=0.05)

    def test_uniform_closed_bounds(self, generator):
        draws = np.array([generator.uniform(-1.0, 1.0, closed=True) for _ in range(10_000)])

        assert np.all(draws >= -1.0)
        assert np.all(draws <= 1.0)

    def test_uniform_degenerate_closed(self, generator):
        assert generator.uniform(3.5, 3.5, closed=True) == 3.5

    def test_uniform_empty_raises(self, generator):
        with pytest.raises(ValueError, match="Empty interval"):
            generator.uniform(1.0, 1.0)

        with pytest.raises(ValueError, match="Empty interval"):
            generator.uniform(1.0, 0.0, closed=True)

    def test_uniform_infinite_width_raises(self, generator):
        """Bounds whose width overflows cannot be sampled."""
        with pytest.raises(ValueError, match="not finite"):
            generator.uniform(0.0, math.inf)

        with pytest.raises(ValueError, match="not finite"):
            generator.uniform(-1e308, 1e308, closed=True)

        with pytest.raises(ValueError, match="not finite"):
            generator.uniform(-math.inf, 0.0, closed=True)

    def test_uniform_wide_finite_interval(self, generator):
        draws = [generator.uniform(-1e307, 1e307, closed=True) for _ in range(100)]

        assert all(-1e307 <= x <= 1e307 for x in draws)


class TestRoll:
    """Tests for dice rolls."""

    def test_3d6_bounds_and_mean(self, generator):
        rolls = np.array([generator.roll(3, 6) for _ in range(20_000)])

        assert rolls.min() >= 3
        assert rolls.max() <= 18
        # mean 10.5, sd ~2.96 -> standard error ~0.021
        assert abs(rolls.mean() - 10.5) < 0.1

    def test_one_sided_die(self, generator):
        assert generator.roll(4, 1) == 4

    def test_zero_dice(self, generator):
        assert generator.roll(0, 6) == 0

    def test_no_sides_raises(self, generator):
        with pytest.raises(ValueError, match="at least one side"):
            generator.roll(1, 0)


class TestStreams:
    """Tests for state snapshots and spawned generators."""

    def test_state_restore_replays(self, generator):
        snapshot = generator.state
        first = [generator.next() for _ in range(20)]

        generator.state = snapshot
        second = [generator.next() for _ in range(20)]

        assert first == second

    def test_spawned_children_are_independent(self, generator):
        children = generator.spawn(3)
        streams = [[child.next() for _ in range(5)] for child in children]

        assert len(children) == 3
        assert streams[0] != streams[1]
        assert streams[1] != streams[2]

    def test_spawn_is_reproducible(self):
        a = PseudoRandom(seed=77).spawn(2)
        b = PseudoRandom(seed=77).spawn(2)

        for x, y in zip(a, b):
            assert [x.next() for _ in range(5)] == [y.next() for _ in range(5)]
