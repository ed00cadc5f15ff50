"""
diagnostics.py - Statistical Checks for Sampled Data

This module provides tools for checking that samples match the
distribution they were drawn from:
- statistics_from_samples: Sample mean and unbiased variance
- normal_chi_square_bins / binomial_chi_square_bins: Observed vs expected
  counts for a goodness-of-fit test
- chi_square_test: Chi-square statistic, degrees of freedom and p-value
- histogram: Binned samples with the probability each bin should hold
- DistributionValidator: Mean/variance check against true moments

Everything here consumes only `sample`, `pdf`, `cdf`, `mean` and
`variance`; no sampling logic lives in this module.

Example Usage:
-------------
    >>> from sampling_lab import Normal, PseudoRandom
    >>> from sampling_lab.diagnostics import DistributionValidator
    >>>
    >>> dist = Normal(100.0, 15.0)
    >>> draws = dist.samples(PseudoRandom(seed=42), 100_000)
    >>> validator = DistributionValidator(dist)
    >>> result = validator.compare(draws)
    >>> fit = validator.goodness_of_fit(draws)
    >>> print(f"z = {result.mean_z:.2f}, p = {fit.p_value:.3f}")
"""

from __future__ import annotations

import math
import numpy as np
from typing import List, Union

from loguru import logger
from scipy import stats

from .binomial import Binomial
from .constants import (
    BIN_RANGE_SIGMAS,
    CHI_SQUARE_BINS,
    CHI_SQUARE_MIN_EXPECTED,
    HISTOGRAM_BINS,
    MAX_MEAN_Z,
    MAX_VARIANCE_ERROR,
)
from .normal import Normal
from .types import (
    ChiSquareBin,
    ChiSquareResult,
    Histogram,
    SampleStatistics,
    ValidationResult,
)


Testable = Union[Normal, Binomial]


# =============================================================================
# MOMENTS
# =============================================================================

def statistics_from_samples(samples: np.ndarray) -> SampleStatistics:
    """
    Sample mean and unbiased variance.

    Raises
    ------
    ValueError
        If fewer than two samples are given.
    """
    x = np.asarray(samples, dtype=float)
    if x.size < 2:
        raise ValueError(f"Need at least 2 samples, got {x.size}")

    return SampleStatistics(
        mean=float(x.mean()),
        variance=float(x.var(ddof=1)),
        count=int(x.size),
    )


# =============================================================================
# CHI-SQUARE BINS
# =============================================================================

def _support_window(dist: Binomial) -> tuple:
    """Integer range mean +- BIN_RANGE_SIGMAS sd, clipped to [0, n]."""
    sd = math.sqrt(dist.variance)
    low = max(0, int(math.floor(dist.mean - BIN_RANGE_SIGMAS * sd)))
    high = min(dist.n, int(math.ceil(dist.mean + BIN_RANGE_SIGMAS * sd)))
    return low, high


def normal_chi_square_bins(
    dist: Normal,
    samples: np.ndarray,
    bins: int = CHI_SQUARE_BINS,
) -> List[ChiSquareBin]:
    """
    Equal-width bins over mu +- 4 sigma.

    Samples outside the range are ignored. Returns an empty list for a
    point mass.
    """
    if dist.sigma <= 0:
        return []

    x = np.asarray(samples, dtype=float)
    low = dist.mu - BIN_RANGE_SIGMAS * dist.sigma
    high = dist.mu + BIN_RANGE_SIGMAS * dist.sigma
    edges = np.linspace(low, high, bins + 1)

    observed, _ = np.histogram(x, bins=edges)

    return [
        ChiSquareBin(
            observed=int(observed[i]),
            expected=x.size * (dist.cdf(edges[i + 1]) - dist.cdf(edges[i])),
        )
        for i in range(bins)
    ]


def binomial_chi_square_bins(
    dist: Binomial,
    samples: np.ndarray,
    min_expected: float = CHI_SQUARE_MIN_EXPECTED,
) -> List[ChiSquareBin]:
    """
    One bin per outcome, pooled so every bin expects `min_expected` hits.

    The lowest and highest outcomes in the window absorb the tail mass
    outside it, so the expected counts sum to the number of samples.
    """
    x = np.asarray(samples, dtype=np.int64)
    count = x.size
    low, high = _support_window(dist)

    if high <= low:
        return [ChiSquareBin(observed=count, expected=float(count))]

    observed = np.bincount(np.clip(x, low, high) - low, minlength=high - low + 1)

    probabilities = [dist.pdf(k) for k in range(low, high + 1)]
    probabilities[0] = dist.cdf(low)
    probabilities[-1] = 1.0 - dist.cdf(high - 1)

    pooled: List[ChiSquareBin] = []
    acc_observed = 0
    acc_expected = 0.0
    for o, prob in zip(observed, probabilities):
        acc_observed += int(o)
        acc_expected += count * prob
        if acc_expected >= min_expected:
            pooled.append(ChiSquareBin(observed=acc_observed, expected=acc_expected))
            acc_observed = 0
            acc_expected = 0.0

    if acc_expected > 0 or acc_observed > 0:
        if pooled:
            last = pooled.pop()
            pooled.append(ChiSquareBin(
                observed=last.observed + acc_observed,
                expected=last.expected + acc_expected,
            ))
        else:
            pooled.append(ChiSquareBin(observed=acc_observed, expected=acc_expected))

    return pooled


def chi_square_test(
    bins: List[ChiSquareBin],
    estimated_parameters: int = 0,
) -> ChiSquareResult:
    """
    Pearson's chi-square goodness-of-fit test.

    Parameters
    ----------
    bins : List[ChiSquareBin]
        Observed and expected counts.
    estimated_parameters : int
        Parameters estimated from the data, subtracted from the
        degrees of freedom.

    Raises
    ------
    ValueError
        If there are not enough bins for at least one degree of freedom.
    """
    dof = len(bins) - 1 - estimated_parameters
    if dof < 1:
        raise ValueError(
            f"Need more bins: {len(bins)} bins with {estimated_parameters} "
            f"estimated parameters leaves {dof} degrees of freedom"
        )

    statistic = sum(b.contribution for b in bins)
    p_value = float(stats.chi2.sf(statistic, dof))

    return ChiSquareResult(statistic=statistic, degrees_of_freedom=dof, p_value=p_value)


# =============================================================================
# HISTOGRAM
# =============================================================================

def histogram(
    dist: Testable,
    samples: np.ndarray,
    bins: int = HISTOGRAM_BINS,
) -> Histogram:
    """
    Bin samples over the central range of `dist`.

    Normal distributions use `bins` equal-width bins over mu +- 4 sigma.
    Binomial distributions use bins of whole outcomes (several per bin
    when the range is wider than `bins`), with edges on half-integers.

    Raises
    ------
    TypeError
        If `dist` has no cdf.
    """
    x = np.asarray(samples)

    if isinstance(dist, Normal):
        sigma = dist.sigma if dist.sigma > 0 else 1.0
        edges = np.linspace(
            dist.mu - BIN_RANGE_SIGMAS * sigma,
            dist.mu + BIN_RANGE_SIGMAS * sigma,
            bins + 1,
        )
    elif isinstance(dist, Binomial):
        low, high = _support_window(dist)
        width = max(1, math.ceil((high - low + 1) / bins))
        n_bins = math.ceil((high - low + 1) / width)
        edges = low - 0.5 + width * np.arange(n_bins + 1, dtype=float)
    else:
        raise TypeError(f"histogram needs a distribution with a cdf, got {type(dist).__name__}")

    observed, _ = np.histogram(x, bins=edges)
    cdf = np.array([dist.cdf(e) for e in edges])
    expected = np.diff(cdf)

    return Histogram(
        edges=edges,
        observed=observed,
        expected=expected,
        sample_count=int(x.size),
    )


# =============================================================================
# DISTRIBUTION VALIDATOR
# =============================================================================

class DistributionValidator:
    """
    Compares sample moments against a distribution's true moments.

    Parameters
    ----------
    dist : Normal or Binomial
        The reference distribution.
    max_mean_z : float
        Largest accepted |mean error| in standard errors.
    max_variance_error : float
        Largest accepted relative variance error.

    Examples
    --------
    >>> validator = DistributionValidator(Binomial(50, 0.5))
    >>> result = validator.compare(draws)
    >>> assert result.passed
    """

    def __init__(
        self,
        dist: Testable,
        max_mean_z: float = MAX_MEAN_Z,
        max_variance_error: float = MAX_VARIANCE_ERROR,
    ):
        self.dist = dist
        self.max_mean_z = max_mean_z
        self.max_variance_error = max_variance_error

    @property
    def estimated_parameters(self) -> int:
        """Degrees of freedom removed from the chi-square test."""
        return 2 if isinstance(self.dist, Normal) else 1

    def compare(self, samples: np.ndarray) -> ValidationResult:
        """
        Check the sample mean and variance.

        The mean error is measured in standard errors, sqrt(variance / n);
        the variance error is relative (absolute for a point mass).
        """
        measured = statistics_from_samples(samples)
        logger.info(f"Validating {measured.count} samples against {self.dist!r}")

        variance = self.dist.variance
        if variance > 0:
            standard_error = math.sqrt(variance / measured.count)
            mean_z = abs(measured.mean - self.dist.mean) / standard_error
            variance_error = abs(measured.variance - variance) / variance
        else:
            mean_z = 0.0
            variance_error = abs(measured.variance)

        passed = mean_z < self.max_mean_z and variance_error < self.max_variance_error

        if passed:
            logger.success(f"Moments match: z = {mean_z:.3f}, variance error = {variance_error:.2%}")
        else:
            logger.warning(f"Moments differ: z = {mean_z:.3f}, variance error = {variance_error:.2%}")

        return ValidationResult(
            statistics=measured,
            mean_z=mean_z,
            variance_error=variance_error,
            passed=passed,
        )

    def chi_square_bins(self, samples: np.ndarray) -> List[ChiSquareBin]:
        if isinstance(self.dist, Normal):
            return normal_chi_square_bins(self.dist, samples)
        return binomial_chi_square_bins(self.dist, samples)

    def goodness_of_fit(self, samples: np.ndarray) -> ChiSquareResult:
        """Chi-square test of `samples` against the reference distribution."""
        result = chi_square_test(self.chi_square_bins(samples), self.estimated_parameters)
        logger.debug(
            f"Chi-square = {result.statistic:.2f} on {result.degrees_of_freedom} dof "
            f"(p = {result.p_value:.4f})"
        )
        return result
