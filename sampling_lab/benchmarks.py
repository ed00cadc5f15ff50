"""
benchmarks.py - Throughput Measurements

Times the generator and each distribution operation over a fixed number
of iterations. Every case gets its own PseudoRandom seeded identically,
so runs are comparable across machines and versions.

Example Usage:
-------------
    >>> from sampling_lab.benchmarks import run_benchmarks
    >>> for result in run_benchmarks(iterations=1_000):
    ...     print(f"{result.name:45s} {result.ops_per_second:12,.0f} ops/s")
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from loguru import logger

from .binomial import Binomial
from .generator import PseudoRandom
from .normal import Normal


# A case receives the iteration index and performs one operation.
BenchmarkCase = Callable[[int], object]


@dataclass(frozen=True)
class BenchmarkResult:
    """Wall-clock time for `iterations` calls of one case."""
    name: str
    iterations: int
    seconds: float

    @property
    def ops_per_second(self) -> float:
        if self.seconds <= 0:
            return float("inf")
        return self.iterations / self.seconds

    @property
    def nanoseconds_per_op(self) -> float:
        return 1e9 * self.seconds / self.iterations if self.iterations else 0.0


def benchmark_cases(seed: int = 42) -> List[Tuple[str, BenchmarkCase]]:
    """Named benchmark cases, each bound to a fresh generator."""

    def sampling(dist) -> BenchmarkCase:
        generator = PseudoRandom(seed)
        return lambda i: dist.sample(generator)

    raw = PseudoRandom(seed)
    bounded = PseudoRandom(seed)
    dice = PseudoRandom(seed)

    standard = Normal(0.0, 1.0)
    small = Binomial(20, 0.5)
    large = Binomial(1000, 0.3)

    return [
        ("PseudoRandom.next", lambda i: raw.next()),
        ("PseudoRandom.integer [0, 1000)", lambda i: bounded.integer(0, 1000)),
        ("PseudoRandom.roll 3d6", lambda i: dice.roll(3, 6)),
        ("Normal.sample (mu=0, sigma=1)", sampling(standard)),
        ("Normal.sample (mu=100, sigma=15)", sampling(Normal(100.0, 15.0))),
        ("Normal.pdf", lambda i: standard.pdf(-3.0 + 0.01 * (i % 601))),
        ("Normal.cdf", lambda i: standard.cdf(-3.0 + 0.01 * (i % 601))),
        ("Normal.cdf_inverse", lambda i: standard.cdf_inverse(0.001 * (1 + i % 999))),
        ("Binomial.sample small (n=10, p=0.5)", sampling(Binomial(10, 0.5))),
        ("Binomial.sample medium (n=100, p=0.3)", sampling(Binomial(100, 0.3))),
        ("Binomial.sample large (n=10000, p=0.5)", sampling(Binomial(10_000, 0.5))),
        ("Binomial.sample very large (n=1e6, p=0.2)", sampling(Binomial(1_000_000, 0.2))),
        ("Binomial.sample p~0 (n=1000, p=0.001)", sampling(Binomial(1000, 0.001))),
        ("Binomial.sample p~1 (n=1000, p=0.999)", sampling(Binomial(1000, 0.999))),
        ("Binomial.pdf small n", lambda i: small.pdf(i % 21)),
        ("Binomial.pdf large n", lambda i: large.pdf(i % 1001)),
    ]


def run_benchmarks(
    iterations: int = 10_000,
    seed: int = 42,
    match: Optional[str] = None,
) -> List[BenchmarkResult]:
    """
    Run every benchmark case, optionally only those whose name contains `match`.

    Parameters
    ----------
    iterations : int
        Calls per case.
    seed : int
        Seed for each case's generator.
    match : str, optional
        Case-insensitive substring filter on case names.

    Returns
    -------
    List[BenchmarkResult]
        One result per case run, in definition order.
    """
    results = []
    for name, case in benchmark_cases(seed):
        if match is not None and match.lower() not in name.lower():
            continue

        start = time.perf_counter()
        for i in range(iterations):
            case(i)
        elapsed = time.perf_counter() - start

        result = BenchmarkResult(name=name, iterations=iterations, seconds=elapsed)
        logger.debug(f"{name}: {result.nanoseconds_per_op:.0f} ns/op")
        results.append(result)

    logger.info(f"Ran {len(results)} benchmark cases x {iterations} iterations")
    return results
