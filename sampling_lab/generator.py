"""
generator.py - Deterministic Pseudo-Random Source

This module provides PseudoRandom, the single mutable object in
sampling_lab. Every distribution receives one explicitly in `sample()`;
none of them store it.

Design Principles:
-----------------
1. Reproducibility: identical seeds produce identical output sequences
2. Ownership: one generator per thread of execution, never shared
3. No modulo bias: bounded integers come from numpy's Lemire sampler
4. Independent streams: child generators are spawned from a SeedSequence

Example Usage:
-------------
    >>> from sampling_lab.generator import PseudoRandom
    >>>
    >>> random = PseudoRandom(seed=42)
    >>> word = random.next()             # raw 64-bit word
    >>> die = random.integer(1, 6, closed=True)
    >>> total = random.roll(3, 6)        # 3d6
    >>>
    >>> # One generator per worker
    >>> workers = random.spawn(4)
"""

from __future__ import annotations

import math
import numpy as np
from typing import Any, Dict, List, Union

from loguru import logger


# 2^-53: spacing of doubles in [0.5, 1), so (word >> 11) * EPSILON is in [0, 1)
_EPSILON = 1.0 / (1 << 53)

SeedLike = Union[int, np.random.SeedSequence, None]


class PseudoRandom:
    """
    Seeded PCG64 source of raw words, integers and floats.

    Parameters
    ----------
    seed : int, np.random.SeedSequence, or None
        Seed for the underlying SeedSequence. None draws fresh entropy
        from the operating system (not reproducible).

    Examples
    --------
    >>> a = PseudoRandom(seed=7)
    >>> b = PseudoRandom(seed=7)
    >>> [a.next() for _ in range(3)] == [b.next() for _ in range(3)]
    True

    Notes
    -----
    An instance must never be used from two threads at once. Use
    `spawn()` to hand each worker its own independent stream.
    """

    def __init__(self, seed: SeedLike = None):
        if isinstance(seed, np.random.SeedSequence):
            self._seed_sequence = seed
        else:
            self._seed_sequence = np.random.SeedSequence(seed)

        self._bit_generator = np.random.PCG64(self._seed_sequence)
        self._generator = np.random.Generator(self._bit_generator)

    def __repr__(self) -> str:
        return f"PseudoRandom(entropy={self._seed_sequence.entropy})"

    @property
    def state(self) -> Dict[str, Any]:
        """Snapshot of the bit generator state (restorable via the setter)."""
        return self._bit_generator.state

    @state.setter
    def state(self, value: Dict[str, Any]) -> None:
        self._bit_generator.state = value

    # -------------------------------------------------------------------------
    # Raw draws
    # -------------------------------------------------------------------------

    def next(self) -> int:
        """Return the next raw unsigned 64-bit word."""
        return int(self._bit_generator.random_raw())

    def integer(self, low: int, high: int, closed: bool = False) -> int:
        """
        Draw an integer uniformly from [low, high) or [low, high].

        Parameters
        ----------
        low : int
            Lower bound (inclusive).
        high : int
            Upper bound, exclusive unless `closed` is True.
        closed : bool
            Include `high` in the range.

        Returns
        -------
        int
            A uniformly distributed integer with no modulo bias.

        Raises
        ------
        ValueError
            If the range is empty.
        """
        if high < low or (high == low and not closed):
            bracket = "]" if closed else ")"
            raise ValueError(f"Empty integer range [{low}, {high}{bracket}")

        return int(self._generator.integers(low, high, endpoint=closed))

    def random(self) -> float:
        """Float in [0, 1) built from the top 53 bits of one word."""
        return (self.next() >> 11) * _EPSILON

    def open_unit(self) -> float:
        """Float in the open interval (0, 1); never exactly 0 or 1."""
        return ((self.next() >> 11) + 0.5) * _EPSILON

    def uniform(self, low: float, high: float, closed: bool = False) -> float:
        """
        Draw a float uniformly from [low, high) or [low, high].

        Raises
        ------
        ValueError
            If the interval is empty or its width is not finite.
        """
        if not high >= low or (high == low and not closed):
            bracket = "]" if closed else ")"
            raise ValueError(f"Empty interval [{low}, {high}{bracket}")

        span = high - low
        if not math.isfinite(span):
            raise ValueError(f"Interval [{low}, {high}] is not finite in width")

        if closed:
            # 2^53 + 1 equally likely grid points, both endpoints included
            t = self.integer(0, 1 << 53, closed=True) * _EPSILON
            return high if t == 1.0 else low + span * t

        while True:
            x = low + span * self.random()
            # rounding can land exactly on `high` for wide intervals
            if x < high:
                return x

    def roll(self, count: int, sides: int) -> int:
        """
        Sum `count` independent draws over [1, sides] (e.g. 3d6).

        Raises
        ------
        ValueError
            If `sides` < 1.
        """
        if sides < 1:
            raise ValueError(f"A die needs at least one side, got {sides}")

        total = 0
        for _ in range(count):
            total += self.integer(1, sides, closed=True)
        return total

    # -------------------------------------------------------------------------
    # Streams
    # -------------------------------------------------------------------------

    def spawn(self, n: int) -> List["PseudoRandom"]:
        """
        Create `n` statistically independent child generators.

        Children are derived from this generator's SeedSequence, so the
        whole family is reproducible from the parent seed.
        """
        children = self._seed_sequence.spawn(n)
        logger.debug(f"Spawned {n} child generators from entropy {self._seed_sequence.entropy}")
        return [PseudoRandom(child) for child in children]
