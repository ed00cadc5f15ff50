"""
uniform.py - Stochastically Rounded Uniform Integers

Uniform(n, p) draws a real value uniformly from [0, 2np] and rounds it to
an integer with probability weighted by the fractional part, so the
rounding adds no systematic bias. The result is clamped to n.
"""

from __future__ import annotations

import math
import numpy as np
from dataclasses import dataclass

from .generator import PseudoRandom


@dataclass(frozen=True)
class Uniform:
    """
    Integers in [0, n] with mean close to n * p.

    Parameters
    ----------
    n : int
        Upper bound of the support.
    p : float
        Scaling factor. Values above 0.5 are allowed but the clamp at `n`
        then pulls the mean below n * p.

    Raises
    ------
    ValueError
        If `p` is NaN or `n` is not integral.

    Examples
    --------
    >>> dist = Uniform(n=100, p=0.25)
    >>> draws = dist.samples(PseudoRandom(seed=5), 10_000)
    >>> bool(draws.max() <= 100)
    True
    """
    n: int
    p: float

    def __post_init__(self):
        if math.isnan(self.p):
            raise ValueError("Uniform p must not be NaN")
        if int(self.n) != self.n:
            raise ValueError(f"n must be an integer, got {self.n}")
        # normalise numpy integers and integral floats
        object.__setattr__(self, "n", int(self.n))

    def sample(self, generator: PseudoRandom) -> int:
        x = generator.uniform(0.0, 2.0 * self.n * self.p, closed=True)
        i = int(x)
        f = x - i
        r = 1 if generator.random() < f else 0
        return min(self.n, i + r)

    def samples(self, generator: PseudoRandom, size: int) -> np.ndarray:
        """Draw `size` independent values."""
        return np.array([self.sample(generator) for _ in range(size)], dtype=np.int64)
