"""
types.py - Core Protocols and Result Types for Sampling Lab

This module defines the shared vocabulary used throughout sampling_lab:
- Distribution: Protocol implemented by Uniform, Normal and Binomial
- SamplingRegime: Which algorithm a Binomial draw goes through
- SamplerCallable: Vectorised sampler returned by DistributionFactory
- SampleStatistics, ChiSquareBin, ChiSquareResult, ValidationResult,
  Histogram: Immutable results produced by the diagnostics layer

Design Principles:
-----------------
1. Immutability (frozen dataclasses for value objects)
2. Validation at construction time (fail-fast)
3. The generator is always passed in, never stored
4. Numpy-style docstrings throughout

Example Usage:
-------------
    >>> from sampling_lab import Binomial, PseudoRandom
    >>> from sampling_lab.types import Distribution
    >>>
    >>> dist: Distribution = Binomial(n=10, p=0.2)
    >>> draws = dist.samples(PseudoRandom(seed=1), 1000)
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Protocol, Tuple, Union, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .generator import PseudoRandom


# =============================================================================
# TYPE ALIASES
# =============================================================================

# A sampler is a callable that takes a size (int or tuple) and returns samples.
# Named 'Sampler' rather than 'Generator' to avoid confusion with PseudoRandom.
SamplerCallable = Callable[[Union[int, Tuple[int, ...]]], np.ndarray]


# =============================================================================
# BINOMIAL SAMPLING REGIMES
# =============================================================================

class SamplingRegime(Enum):
    """
    Discriminator for the algorithm Binomial.sample() uses.

    POINT_MASS: p <= 0, p >= 1 or n <= 0; the outcome is fixed.
    NORMAL_APPROXIMATION: variance > 10 000; rounded normal quantile.
    BTPE: variance >= 30; triangle/parallelogram/exponential rejection.
    GEOMETRIC: min(p, q) < 0.05; jumps between rare successes.
    INVERSE_SEARCH: everything else; binary search on the exact CDF.
    """
    POINT_MASS = auto()
    NORMAL_APPROXIMATION = auto()
    BTPE = auto()
    GEOMETRIC = auto()
    INVERSE_SEARCH = auto()


# =============================================================================
# DISTRIBUTION PROTOCOL
# =============================================================================

@runtime_checkable
class Distribution(Protocol):
    """
    Anything that can be sampled with an explicitly supplied generator.

    Normal and Binomial also provide `pdf`, `cdf`, `cdf_inverse`, `mean`
    and `variance`; Uniform provides sampling only.
    """

    def sample(self, generator: "PseudoRandom") -> Union[int, float]:
        ...

    def samples(self, generator: "PseudoRandom", size: int) -> np.ndarray:
        ...


# =============================================================================
# DIAGNOSTIC RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class SampleStatistics:
    """
    First two moments of a sample set.

    Parameters
    ----------
    mean : float
        Sample mean.
    variance : float
        Unbiased sample variance (n - 1 denominator).
    count : int
        Number of samples.
    """
    mean: float
    variance: float
    count: int

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")


@dataclass(frozen=True)
class ChiSquareBin:
    """Observed count versus expected count for one bin."""
    observed: int
    expected: float

    @property
    def contribution(self) -> float:
        """(observed - expected)^2 / expected, or 0 for an empty expectation."""
        if self.expected <= 0:
            return 0.0
        return (self.observed - self.expected) ** 2 / self.expected


@dataclass(frozen=True)
class ChiSquareResult:
    """
    Outcome of a chi-square goodness-of-fit test.

    Parameters
    ----------
    statistic : float
        Sum of per-bin contributions.
    degrees_of_freedom : int
        Bins minus one minus estimated parameters.
    p_value : float
        Survival function of the chi-square distribution at `statistic`.
    """
    statistic: float
    degrees_of_freedom: int
    p_value: float

    def passed(self, significance: float = 0.001) -> bool:
        """True if the fit is not rejected at `significance`."""
        return self.p_value >= significance


@dataclass(frozen=True)
class ValidationResult:
    """
    Comparison of sample moments against a distribution's true moments.

    Parameters
    ----------
    statistics : SampleStatistics
        Moments measured from the samples.
    mean_z : float
        |sample mean - true mean| in units of the standard error.
    variance_error : float
        Relative error of the sample variance (absolute when the true
        variance is zero).
    passed : bool
        True if both errors are within the configured limits.

    Examples
    --------
    >>> result = DistributionValidator(Normal(100, 15)).compare(draws)
    >>> if not result.passed:
    ...     print(f"z = {result.mean_z:.2f}, variance error = {result.variance_error:.1%}")
    """
    statistics: SampleStatistics
    mean_z: float
    variance_error: float
    passed: bool


@dataclass(frozen=True)
class Histogram:
    """
    Binned samples alongside the probabilities each bin should hold.

    Parameters
    ----------
    edges : np.ndarray
        Bin edges, shape (bins + 1,). For discrete distributions the
        bins are unit-width and centred on integers.
    observed : np.ndarray
        Sample counts per bin, shape (bins,).
    expected : np.ndarray
        Expected probability per bin, shape (bins,).
    sample_count : int
        Total samples, including those outside the binned range.
    """
    edges: np.ndarray
    observed: np.ndarray
    expected: np.ndarray
    sample_count: int

    def __post_init__(self):
        if self.observed.shape != self.expected.shape:
            raise ValueError(
                f"observed/expected shape mismatch: "
                f"{self.observed.shape} vs {self.expected.shape}"
            )
        if self.edges.shape != (self.observed.shape[0] + 1,):
            raise ValueError(
                f"edges must have shape ({self.observed.shape[0] + 1},), "
                f"got {self.edges.shape}"
            )

    @property
    def midpoints(self) -> np.ndarray:
        """Centre of each bin."""
        return 0.5 * (self.edges[:-1] + self.edges[1:])

    def rows(self) -> List[Tuple[float, int, float]]:
        """(midpoint, observed, expected count) per bin."""
        expected_counts = self.expected * self.sample_count
        return [
            (float(m), int(o), float(e))
            for m, o, e in zip(self.midpoints, self.observed, expected_counts)
        ]
