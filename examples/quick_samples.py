"""
Quick Samples Example
=====================
"""
from sampling_lab import Binomial, Normal, PseudoRandom


def main(**kwargs):
    seed = kwargs.get('seed', 13)
    count = kwargs.get('count', 4)

    generator = PseudoRandom(seed)
    binomial = Binomial(10, 0.2)
    normal = Normal(0.0, 1.0)

    binomials = tuple(binomial.sample(generator) for _ in range(count))
    normals = tuple(normal.sample(generator) for _ in range(count))

    print(f"Generated binomial samples: {binomials}")
    print(f"Generated normal samples: ({', '.join(f'{x:.6f}' for x in normals)})")

    return {
        'binomial': binomials,
        'normal': normals,
    }


if __name__ == "__main__":
    main()
