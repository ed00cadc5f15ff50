"""
test_beta.py - Tests for the Regularized Incomplete Beta Function
"""

import pytest
import numpy as np
from scipy import special

from sampling_lab import continued_fraction, regularized_incomplete_beta


class TestIncompleteBeta:
    """Tests for I_x(a, b)."""

    @pytest.mark.parametrize("a,b", [
        (1.0, 1.0),
        (0.5, 0.5),
        (2.0, 5.0),
        (8.0, 3.0),
        (30.0, 71.0),
        (700.0, 301.0),
    ])
    def test_matches_scipy(self, a, b):
        for x in [0.001, 0.05, 0.2, 0.5, 0.8, 0.95, 0.999]:
            assert np.isclose(
                regularized_incomplete_beta(a, b, x),
                special.betainc(a, b, x),
                rtol=1e-10, atol=1e-14,
            )

    def test_uniform_case(self):
        """I_x(1, 1) = x."""
        for x in [0.1, 0.25, 0.5, 0.9]:
            assert np.isclose(regularized_incomplete_beta(1.0, 1.0, x), x, rtol=1e-12)

    def test_endpoints(self):
        assert regularized_incomplete_beta(2.0, 3.0, 0.0) == 0.0
        assert regularized_incomplete_beta(2.0, 3.0, -0.5) == 0.0
        assert regularized_incomplete_beta(2.0, 3.0, 1.0) == 1.0
        assert regularized_incomplete_beta(2.0, 3.0, 1.5) == 1.0

    def test_symmetry(self):
        """I_x(a, b) = 1 - I_{1-x}(b, a)."""
        for a, b, x in [(2.0, 5.0, 0.3), (10.0, 4.0, 0.6), (50.0, 50.0, 0.5)]:
            direct = regularized_incomplete_beta(a, b, x)
            mirrored = 1.0 - regularized_incomplete_beta(b, a, 1.0 - x)
            assert np.isclose(direct, mirrored, rtol=1e-12, atol=1e-15)

    def test_explicit_complement_matches(self):
        """Supplying y = 1 - x gives the same value as computing it."""
        value = regularized_incomplete_beta(8.0, 3.0, 0.8)
        with_y = regularized_incomplete_beta(8.0, 3.0, 0.8, 0.2)

        assert np.isclose(value, with_y, rtol=1e-12)

    def test_binomial_identity(self, reference_cdf):
        """P(X <= 2) for Binomial(10, 0.2) equals I_{0.8}(8, 3)."""
        expected = reference_cdf(10, 0.2, 2)

        assert np.isclose(regularized_incomplete_beta(8.0, 3.0, 0.8, 0.2), expected, rtol=1e-12)

    def test_monotone_in_x(self):
        xs = np.linspace(0.01, 0.99, 99)
        values = [regularized_incomplete_beta(5.0, 7.0, x) for x in xs]

        assert all(a < b for a, b in zip(values, values[1:]))
        assert all(0.0 <= v <= 1.0 for v in values)


class TestContinuedFraction:
    """Tests for the Lentz evaluation itself."""

    def test_converges_quietly(self, log_messages):
        continued_fraction(2.0, 5.0, 0.2)

        assert not any(m.record["level"].name == "WARNING" for m in log_messages)

    def test_cap_logs_warning(self, log_messages):
        """Hitting the iteration cap returns an approximation and warns."""
        value = continued_fraction(500.0, 500.0, 0.5, max_iterations=2)

        assert np.isfinite(value)
        warnings = [m for m in log_messages if m.record["level"].name == "WARNING"]
        assert len(warnings) == 1
        assert "did not converge" in warnings[0]
