"""
conftest.py - Pytest Configuration and Shared Fixtures

This file contains fixtures used across all test modules. Fixtures are
organized by category:
- Generators (for reproducibility)
- Distributions (one per sampling regime)
- Samplers and factories
- Log capture
"""

import pytest
from loguru import logger

from sampling_lab import (
    Binomial,
    DistributionFactory,
    Normal,
    PseudoRandom,
)


# =============================================================================
# GENERATORS
# =============================================================================

@pytest.fixture
def generator():
    """
    Provide a seeded generator for reproducible tests.

    All tests should use this fixture (or derive from it) to ensure
    reproducibility across runs.
    """
    return PseudoRandom(seed=42)


@pytest.fixture
def generator_alternate():
    """Alternate generator with a different seed for comparison tests."""
    return PseudoRandom(seed=12345)


# =============================================================================
# DISTRIBUTIONS
# =============================================================================

@pytest.fixture
def standard_normal():
    return Normal(0.0, 1.0)


@pytest.fixture
def iq_normal():
    """Normal(100, 15), the convergence reference case."""
    return Normal(100.0, 15.0)


@pytest.fixture
def small_binomial():
    """Binomial(10, 0.2): variance 1.6, inverse-search regime."""
    return Binomial(10, 0.2)


@pytest.fixture
def fair_binomial():
    """Binomial(50, 0.5): variance 12.5, inverse-search regime."""
    return Binomial(50, 0.5)


@pytest.fixture
def btpe_binomial():
    """Binomial(1000, 0.3): variance 210, BTPE regime."""
    return Binomial(1000, 0.3)


@pytest.fixture
def rare_binomial():
    """Binomial(1000, 0.001): variance ~1, geometric-jump regime."""
    return Binomial(1000, 0.001)


@pytest.fixture
def huge_binomial():
    """Binomial(100 000, 0.5): variance 25 000, normal-approximation regime."""
    return Binomial(100_000, 0.5)


# =============================================================================
# SAMPLERS AND FACTORIES
# =============================================================================

@pytest.fixture
def factory(generator):
    """A DistributionFactory using the seeded generator."""
    return DistributionFactory(generator=generator)


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message), level="DEBUG")
    yield messages
    logger.remove(handler_id)


def exact_binomial_cdf(n, p, k):
    """Reference CDF by direct summation of the pmf."""
    from math import comb

    return sum(comb(n, i) * p ** i * (1 - p) ** (n - i) for i in range(k + 1))


@pytest.fixture
def reference_cdf():
    """Exact binomial CDF by summation, independent of the library."""
    return exact_binomial_cdf
