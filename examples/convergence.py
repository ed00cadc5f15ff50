"""
Convergence Example
===================

Draws from Normal(100, 15) and from one Binomial per sampling regime, then
compares sample moments and chi-square fits with the exact distributions.
"""
from sampling_lab import (
    Binomial,
    DistributionValidator,
    Normal,
    PseudoRandom,
)


CASES = [
    Normal(100.0, 15.0),
    Binomial(50, 0.5),         # cdf-inverse search
    Binomial(1000, 0.3),       # BTPE
    Binomial(1000, 0.001),     # geometric jumps
    Binomial(100_000, 0.5),    # normal approximation
]


def main(**kwargs):
    print("=" * 70)
    print("Sampling Convergence")
    print("=" * 70)

    count = kwargs.get('count', 20_000)
    generator = PseudoRandom(kwargs.get('seed', 42))

    results = {}
    for dist in CASES:
        draws = dist.samples(generator, count)
        validator = DistributionValidator(dist)
        moments = validator.compare(draws)
        fit = validator.goodness_of_fit(draws)

        label = repr(dist)
        print(f"\n{label}")
        print(f"   mean     {moments.statistics.mean:12.4f}  (expected {dist.mean:.4f})")
        print(f"   variance {moments.statistics.variance:12.4f}  (expected {dist.variance:.4f})")
        print(f"   chi-square {fit.statistic:.2f} on {fit.degrees_of_freedom} dof, p = {fit.p_value:.4f}")

        results[label] = (moments, fit)

    return results


if __name__ == "__main__":
    main()
