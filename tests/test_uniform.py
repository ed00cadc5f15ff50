"""
test_uniform.py - Tests for Stochastically Rounded Uniform Integers
"""

import math

import pytest
import numpy as np

from sampling_lab import PseudoRandom, Uniform


class TestUniform:
    """Tests for Uniform(n, p)."""

    def test_support(self, generator):
        draws = Uniform(100, 0.3).samples(generator, 5000)

        assert draws.min() >= 0
        assert draws.max() <= 60

    def test_mean_unbiased(self, generator):
        """Rounding weighted by the fractional part keeps the mean at n * p."""
        draws = Uniform(10, 0.13).samples(generator, 40_000)

        # continuous part is U[0, 2.6], sd ~0.75 before rounding noise
        assert abs(draws.mean() - 1.3) < 0.03

    def test_clamped_to_n(self, generator):
        draws = Uniform(10, 0.9).samples(generator, 5000)

        assert draws.max() == 10
        # P(X = 10) = P(uniform on [0, 18] lands at or above 9.x) ~ 0.5
        assert 0.4 < np.mean(draws == 10) < 0.6

    def test_zero_p(self, generator):
        draws = Uniform(10, 0.0).samples(generator, 100)

        assert np.all(draws == 0)

    def test_negative_p_raises(self, generator):
        with pytest.raises(ValueError, match="Empty interval"):
            Uniform(10, -0.1).sample(generator)

    def test_nan_p_raises(self):
        with pytest.raises(ValueError, match="NaN"):
            Uniform(10, math.nan)

    def test_integral_float_n_normalised(self, generator):
        """A float n still yields int draws, including at the clamp."""
        dist = Uniform(10.0, 0.8)
        draws = [dist.sample(generator) for _ in range(500)]

        assert isinstance(dist.n, int)
        assert 10 in draws
        assert all(type(k) is int for k in draws)

    def test_numpy_n_normalised(self):
        assert isinstance(Uniform(np.int64(20), 0.3).n, int)

    def test_fractional_n_raises(self):
        with pytest.raises(ValueError, match="integer"):
            Uniform(10.5, 0.3)

    def test_reproducible(self):
        a = Uniform(50, 0.4).samples(PseudoRandom(seed=3), 100)
        b = Uniform(50, 0.4).samples(PseudoRandom(seed=3), 100)

        np.testing.assert_array_equal(a, b)

    def test_dtype(self, generator):
        assert Uniform(5, 0.5).samples(generator, 3).dtype == np.int64
