"""
binomial.py - Binomial Distribution with Regime-Adaptive Sampling

This module provides the Binomial distribution and the four sampling
algorithms it dispatches between:
- Normal approximation: variance > 10 000
- BTPE rejection sampling: variance >= 30
- Geometric jumps: rare events, min(p, q) < 0.05
- CDF-inverse binary search: everything else

Below the normal threshold all work is done toward the smaller of p and
q, and the result is reflected (n - m) when q < p. This keeps the mode
computations centred and bounds the number of geometric jumps.

Mathematical Background:
-----------------------
    pdf(k) = C(n, k) p^k q^(n-k)      (evaluated in log space)
    cdf(k) = I_q(n - k, k + 1)        (regularized incomplete beta)

BTPE (Kachitvichyanukul & Schmeiser, 1988) covers the distribution with
an envelope made of a central triangle, two parallelograms stacked on it
and two exponential tails. Points under the triangle are accepted
immediately; everything else is compared against the exact log
probability. The "squeeze" acceptance shortcut from the paper is
deliberately left out; it does not hold in general.

Example Usage:
-------------
    >>> from sampling_lab import Binomial, PseudoRandom
    >>>
    >>> dist = Binomial(n=10, p=0.2)
    >>> round(dist.pdf(2), 6)
    0.30199
    >>> k = dist.sample(PseudoRandom(seed=13))
    >>> dist.regime
    <SamplingRegime.INVERSE_SEARCH: 5>
"""

from __future__ import annotations

import math
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from scipy.special import gammaln

from .beta import regularized_incomplete_beta
from .constants import (
    CDF_INVERSE_TOLERANCE,
    THRESHOLD_BTPE,
    THRESHOLD_NORMAL,
    THRESHOLD_RARE,
)
from .generator import PseudoRandom
from .normal import standard_cdf_inverse
from .types import SamplingRegime


# =============================================================================
# HELPERS
# =============================================================================

def _round_clamped(x: float, n: int) -> int:
    """Round half away from zero, clamped to [0, n]."""
    if x >= n:
        return n
    if x <= 0:
        return 0
    return min(n, int(math.floor(x + 0.5)))


def binomial_cdf(n: int, k: int, p: float, q: float) -> float:
    """
    P(X <= k) for X ~ Binomial(n, p), with q = 1 - p supplied exactly.

    Uses CDF(k; n, p) = I_q(n - k, k + 1). Requires 0 < p < 1.
    """
    if k < 0:
        return 0.0
    if k >= n:
        return 1.0

    return regularized_incomplete_beta(float(n - k), float(k + 1), q, p)


# =============================================================================
# SAMPLING ALGORITHMS
# =============================================================================

def sample_btpe(
    n: int,
    mu: float,
    sigma: float,
    p: float,
    q: float,
    generator: PseudoRandom,
) -> int:
    """
    BTPE rejection sampling.

    Exact in O(1) expected time once the variance reaches about 30. The
    loop has no iteration cap; termination follows from the envelope
    bounding the distribution.

    Parameters
    ----------
    n : int
        Number of trials.
    mu : float
        n * p.
    sigma : float
        sqrt(n * p * q).
    p, q : float
        Success and failure probabilities, q = 1 - p. Callers pass the
        smaller of the two as `p`.
    generator : PseudoRandom
        Source of uniforms.

    Returns
    -------
    int
        A Binomial(n, p) variate.
    """
    peak = mu + p                      # continuous mode
    mode = math.floor(peak)            # discrete mode
    width = float(int(2.195 * sigma - 4.6 * q)) + 0.5

    # horizontal extent of the triangle and of the parallelograms above it
    center = mode + 0.5
    left = center - width
    right = center + width

    # parallelogram height
    c = 0.134 + 20.5 / (15.3 + mode)

    # exponential tail rates from the tangent slopes at the envelope edges
    slope_left = (peak - left) / (peak - left * p)
    slope_right = (right - peak) / (right * q)
    lambda_left = slope_left * (1.0 + 0.5 * slope_left)
    lambda_right = slope_right * (1.0 + 0.5 * slope_right)

    # cumulative areas: triangle + parallelograms, + left tail, + right tail
    area_house = width * (1.0 + 2.0 * c)
    area_left = area_house + c / lambda_left
    area_total = area_left + c / lambda_right

    # log-gamma terms at the mode; computed on first use, kept for this call only
    log_cache: Optional[Tuple[float, float]] = None

    while True:
        # v in (0, 1] so log(v) is finite
        v = 1.0 - generator.random()
        u = area_total * generator.random()

        if u <= width:
            # region 1: triangle, always accepted
            return int(center - width * v + u)

        if u <= area_house:
            # region 2: parallelograms
            x = left + (u - width) / c
            if x < 0:
                continue
            k = int(x)
            if k > n:
                continue

            h = 1.0 - abs(center - x) / width
            y = h + v * c
            if y <= 0:
                continue

        elif u <= area_left:
            # region 3: left exponential tail
            x = left + math.log(v) / lambda_left
            if x < 0:
                continue
            k = int(x)
            y = v * (u - area_house) * lambda_left

        else:
            # region 4: right exponential tail
            x = right - math.log(v) / lambda_right
            k = int(x)
            if k > n:
                continue
            y = v * (u - area_left) * lambda_right

        if log_cache is None:
            log_cache = (
                float(gammaln(mode + 1.0) + gammaln(n - mode + 1.0)),
                math.log(p / q),
            )
        log_scale, log_odds = log_cache

        # log(f(k) / f(mode))
        log_ratio = (
            log_scale
            + (k - mode) * log_odds
            - gammaln(k + 1.0)
            - gammaln(n - k + 1.0)
        )

        if log_ratio >= math.log(y):
            return k


def sample_geometric(n: int, p: float, generator: PseudoRandom) -> int:
    """
    Count successes by jumping over the failures between them.

    Each draw gives the number of failures before the next success,
    floor(log(u) / log(1 - p)). Sampling stops once a jump would pass
    the remaining trials, so the cost is proportional to the number of
    successes rather than to n.
    """
    scale = 1.0 / math.log1p(-p)

    successes = 0
    remaining = n

    while remaining > 0:
        u = 1.0 - generator.random()
        # may be huge; compare as a float before converting
        jump = math.log(u) * scale
        if jump >= remaining:
            break

        successes += 1
        remaining -= 1 + int(jump)

    return successes


def search_cdf_inverse(
    n: int,
    mu: float,
    variance: float,
    p: float,
    q: float,
    u: float,
) -> int:
    """
    Smallest k with P(X <= k) >= u, by binary search on the exact CDF.

    The search is seeded with the rounded normal quantile; if the CDF
    there is already within 1e-10 of `u` it is returned directly.
    """
    z = standard_cdf_inverse(u)
    guess = _round_clamped(mu + z * math.sqrt(variance), n)

    y = binomial_cdf(n, guess, p, q)
    if abs(y - u) < CDF_INVERSE_TOLERANCE:
        return guess

    low, high = (0, guess) if u < y else (guess, n)

    while low + 1 < high:
        middle = (low + high) // 2
        y = binomial_cdf(n, middle, p, q)
        if u <= y:
            high = middle
        else:
            low = middle

    y = binomial_cdf(n, low, p, q)
    return low if u <= y else high


# =============================================================================
# BINOMIAL DISTRIBUTION
# =============================================================================

@dataclass(frozen=True)
class Binomial:
    """
    Number of successes in `n` independent trials with probability `p`.

    Parameters
    ----------
    n : int
        Number of trials. n <= 0 is a point mass at 0.
    p : float
        Success probability. p <= 0 is a point mass at 0, p >= 1 a point
        mass at n.

    Raises
    ------
    ValueError
        If `n` is not integral or `p` is NaN.

    Examples
    --------
    >>> dist = Binomial(n=1000, p=0.3)
    >>> dist.regime
    <SamplingRegime.BTPE: 3>
    >>> dist.cdf(300) > 0.5
    True

    Notes
    -----
    Instances are immutable and safe to share between threads; only the
    generator passed to `sample()` is mutated.
    """
    n: int
    p: float

    def __post_init__(self):
        if int(self.n) != self.n:
            raise ValueError(f"n must be an integer, got {self.n}")
        if math.isnan(self.p):
            raise ValueError("Binomial p must not be NaN")
        # normalise numpy integers and integral floats
        object.__setattr__(self, "n", int(self.n))

    def _point_mass(self) -> Optional[int]:
        """The fixed outcome for degenerate parameters, else None."""
        if self.p <= 0:
            return 0
        if self.p >= 1:
            return self.n
        if self.n <= 0:
            return 0
        return None

    @property
    def mean(self) -> float:
        point = self._point_mass()
        if point is not None:
            return float(point)
        return self.n * self.p

    @property
    def variance(self) -> float:
        if self._point_mass() is not None:
            return 0.0
        return self.n * self.p * (1.0 - self.p)

    @property
    def regime(self) -> SamplingRegime:
        """The algorithm `sample()` uses for these parameters."""
        if self._point_mass() is not None:
            return SamplingRegime.POINT_MASS

        q = 1.0 - self.p
        variance = self.n * self.p * q

        if variance > THRESHOLD_NORMAL:
            return SamplingRegime.NORMAL_APPROXIMATION
        if variance >= THRESHOLD_BTPE:
            return SamplingRegime.BTPE
        if min(self.p, q) < THRESHOLD_RARE:
            return SamplingRegime.GEOMETRIC
        return SamplingRegime.INVERSE_SEARCH

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def sample(self, generator: PseudoRandom) -> int:
        """
        Draw one variate using the algorithm chosen by `regime`.

        Parameters
        ----------
        generator : PseudoRandom
            Source of randomness, advanced by this call.

        Returns
        -------
        int
            A value in [0, n].
        """
        regime = self.regime
        if regime is SamplingRegime.POINT_MASS:
            return self._point_mass()

        n = self.n
        p = self.p
        q = 1.0 - p
        variance = n * p * q

        if regime is SamplingRegime.NORMAL_APPROXIMATION:
            z = standard_cdf_inverse(generator.uniform(0.0, 1.0, closed=True))
            return _round_clamped(n * p + z * math.sqrt(variance), n)

        reflect = q < p
        if reflect:
            p, q = q, p

        if regime is SamplingRegime.BTPE:
            m = sample_btpe(n, n * p, math.sqrt(variance), p, q, generator)
        elif regime is SamplingRegime.GEOMETRIC:
            m = sample_geometric(n, p, generator)
        else:
            u = generator.uniform(0.0, 1.0, closed=True)
            m = search_cdf_inverse(n, n * p, variance, p, q, u)

        return n - m if reflect else m

    def samples(self, generator: PseudoRandom, size: int) -> np.ndarray:
        """Draw `size` independent variates."""
        return np.array([self.sample(generator) for _ in range(size)], dtype=np.int64)

    # -------------------------------------------------------------------------
    # Probabilities
    # -------------------------------------------------------------------------

    def pdf(self, k: float) -> float:
        """
        Probability mass at `k`.

        Computed in log space so that large n neither overflows the
        binomial coefficient nor underflows p^k q^(n-k) prematurely.
        Zero outside [0, n] and at non-integer k.
        """
        point = self._point_mass()
        if point is not None:
            return 1.0 if k == point else 0.0

        if not 0 <= k <= self.n or k != int(k):
            return 0.0

        n = float(self.n)
        k = float(k)
        log_choose = gammaln(n + 1.0) - gammaln(k + 1.0) - gammaln(n - k + 1.0)
        return math.exp(log_choose + k * math.log(self.p) + (n - k) * math.log1p(-self.p))

    def cdf(self, k: float) -> float:
        """P(X <= k); non-integer k is floored."""
        point = self._point_mass()
        if point is not None:
            return 1.0 if k >= point else 0.0

        if k < 0:
            return 0.0
        if k >= self.n:
            return 1.0

        return binomial_cdf(self.n, math.floor(k), self.p, 1.0 - self.p)

    def cdf_inverse(self, u: float) -> int:
        """
        Smallest k with P(X <= k) >= u.

        Returns 0 for u <= 0 and n for u >= 1; point masses return their
        fixed outcome for every u.
        """
        point = self._point_mass()
        if point is not None:
            return point

        q = 1.0 - self.p
        return search_cdf_inverse(
            self.n, self.n * self.p, self.n * self.p * q, self.p, q, u
        )
