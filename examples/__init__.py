"""
sampling_lab Examples Package
=============================

Runnable examples demonstrating sampling_lab.

Examples
--------
quick_samples : module
    Seeded draws from Binomial(10, 0.2) and Normal(0, 1).
convergence : module
    Sample moments and chi-square fits across every Binomial regime.

Quick Start
-----------
Run any example directly from the command line:

    $ python examples/quick_samples.py
    $ python examples/convergence.py

Or import as modules:

    >>> from examples import run_example
    >>> draws = run_example("quick_samples", seed=13)
"""

__version__ = "1.0.0"

__all__ = [
    "quick_samples",
    "convergence",
]


def list_examples():
    """
    List all available examples with descriptions.

    Returns
    -------
    dict
        Dictionary mapping example names to their descriptions.

    Examples
    --------
    >>> from examples import list_examples
    >>> for name, desc in list_examples().items():
    ...     print(f"{name}: {desc}")
    """
    return {
        "quick_samples": (
            "Four Binomial(10, 0.2) and four Normal(0, 1) draws from a "
            "generator seeded with 13."
        ),
        "convergence": (
            "Moment and goodness-of-fit checks for Normal(100, 15) and one "
            "Binomial per sampling regime."
        ),
    }


def run_example(name, *args, **kwargs):
    """
    Dynamically import and run an example.

    Parameters
    ----------
    name : str
        Name of the example to run (without .py extension).
    *args, **kwargs
        Arguments to pass to the example's main() function.

    Returns
    -------
    result
        Return value from the example's main() function.

    Raises
    ------
    ValueError
        If `name` is not a known example.
    """
    import importlib

    valid_examples = list_examples().keys()
    if name not in valid_examples:
        raise ValueError(
            f"Unknown example '{name}'. Valid examples: {', '.join(valid_examples)}"
        )

    module = importlib.import_module(f"examples.{name}")

    if hasattr(module, "main"):
        return module.main(*args, **kwargs)
    else:
        raise AttributeError(
            f"Example '{name}' does not have a main() function"
        )


__all__.extend([
    "list_examples",
    "run_example",
])
