"""
cli.py - Rich Command Line Interface for Sampling Lab

Usage:
    sampling-lab --help
    sampling-lab sample binomial -n 50 -p 0.5 --count 10000 --histogram
    sampling-lab pdf binomial 2 -n 10 -p 0.2
    sampling-lab cdf normal 1.96
    sampling-lab quantile normal 0.975 --mu 100 --sigma 15
    sampling-lab validate normal --mu 100 --sigma 15 --count 100000
    sampling-lab bench --iterations 5000
    sampling-lab demo
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Optional

import numpy as np
import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.table import Table

# Initialize Typer app and Rich console
app = typer.Typer(
    name="sampling-lab",
    help="🎲 Sampling Lab: Uniform, Normal and Binomial sampling with exact pdf/cdf",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


# =============================================================================
# ENUMS FOR CLI OPTIONS
# =============================================================================

class DistributionKind(str, Enum):
    """Distributions that can be sampled."""
    uniform = "uniform"
    normal = "normal"
    binomial = "binomial"


class ContinuousOrDiscrete(str, Enum):
    """Distributions with pdf/cdf/quantile."""
    normal = "normal"
    binomial = "binomial"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def configure_logging(verbose: bool) -> None:
    """Route loguru to stderr at DEBUG when verbose, WARNING otherwise."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def build_distribution(kind: str, n: int, p: float, mu: float, sigma: float):
    """Construct a distribution through the registry, exiting on bad input."""
    from sampling_lab import DistributionFactory

    params = {"n": n, "p": p} if kind != "normal" else {"mu": mu, "sigma": sigma}

    try:
        return DistributionFactory().build(kind, **params)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def require_count(count: int) -> None:
    """Summary statistics need at least two samples."""
    if count < 2:
        console.print(f"[red]Error:[/red] --count must be at least 2, got {count}")
        raise typer.Exit(1)


def describe(dist) -> str:
    """Short parameter description for panel titles."""
    name = type(dist).__name__
    if name == "Normal":
        return f"Normal(μ={dist.mu:g}, σ={dist.sigma:g})"
    return f"{name}(n={dist.n}, p={dist.p:g})"


def print_statistics(dist, draws: np.ndarray, title: str = "Sample Statistics"):
    """Print a rich summary of sampled values."""
    from sampling_lab import statistics_from_samples

    measured = statistics_from_samples(draws)

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Statistic", style="dim")
    table.add_column("Sample", justify="right")
    table.add_column("Theoretical", justify="right")

    has_moments = hasattr(dist, "variance")
    table.add_row("Count", f"{measured.count:,}", "")
    table.add_row("Mean", f"{measured.mean:.4f}", f"{dist.mean:.4f}" if has_moments else "-")
    table.add_row("Variance", f"{measured.variance:.4f}", f"{dist.variance:.4f}" if has_moments else "-")
    table.add_row("Min", f"{np.min(draws):g}", "")
    table.add_row("Max", f"{np.max(draws):g}", "")

    if type(dist).__name__ == "Binomial":
        table.add_row("Regime", "", dist.regime.name.replace("_", " ").title())

    console.print(table)


def print_histogram(dist, draws: np.ndarray, bins: int):
    """Print observed versus expected counts as horizontal bars."""
    from sampling_lab import histogram

    result = histogram(dist, draws, bins=bins)
    rows = result.rows()
    peak = max(max(o, e) for _, o, e in rows) or 1.0

    table = Table(title="Histogram", box=box.SIMPLE)
    table.add_column("Bin", justify="right", style="cyan")
    table.add_column("Observed", justify="right")
    table.add_column("Expected", justify="right", style="dim")
    table.add_column("", justify="left")

    for midpoint, observed, expected in rows:
        bar_len = int(30 * observed / peak)
        marker = int(30 * expected / peak)
        bar = "█" * bar_len
        if marker >= bar_len:
            bar = bar + " " * (marker - bar_len) + "[yellow]|[/yellow]"
        table.add_row(f"{midpoint:.2f}", f"{observed:,}", f"{expected:,.1f}", f"[green]{bar}[/green]")

    console.print(table)


# =============================================================================
# COMMANDS
# =============================================================================

@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Sampling Lab command line."""
    configure_logging(verbose)


@app.command()
def sample(
    distribution: DistributionKind = typer.Argument(..., help="Distribution to sample"),
    n: int = typer.Option(10, "--n", "-n", help="Trials (binomial) or upper bound (uniform)"),
    p: float = typer.Option(0.5, "--p", "-p", help="Success probability / scaling factor"),
    mu: float = typer.Option(0.0, "--mu", help="Normal mean"),
    sigma: float = typer.Option(1.0, "--sigma", help="Normal standard deviation"),
    count: int = typer.Option(10_000, "--count", "-c", help="Number of samples"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed for reproducibility"),
    show_histogram: bool = typer.Option(False, "--histogram", help="Show a histogram against expected counts"),
    bins: int = typer.Option(40, "--bins", help="Histogram bins"),
):
    """
    Draw samples and summarise them.

    Example:
        sampling-lab sample binomial -n 1000 -p 0.001 --count 100000
        sampling-lab sample normal --mu 100 --sigma 15 --histogram
    """
    from sampling_lab import PseudoRandom

    require_count(count)
    dist = build_distribution(distribution.value, n, p, mu, sigma)
    console.print(Panel.fit(f"🎲 [bold]{describe(dist)}[/bold]", border_style="blue"))

    generator = PseudoRandom(seed)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        transient=True,
        console=console
    ) as progress:
        progress.add_task(f"Drawing {count:,} samples...", total=None)
        draws = dist.samples(generator, count)

    print_statistics(dist, draws)

    if show_histogram:
        if distribution == DistributionKind.uniform:
            console.print("[yellow]Histogram needs a cdf; not available for uniform[/yellow]")
        else:
            print_histogram(dist, draws, bins)


@app.command()
def pdf(
    distribution: ContinuousOrDiscrete = typer.Argument(..., help="Distribution"),
    x: float = typer.Argument(..., help="Point to evaluate"),
    n: int = typer.Option(10, "--n", "-n", help="Binomial trials"),
    p: float = typer.Option(0.5, "--p", "-p", help="Binomial success probability"),
    mu: float = typer.Option(0.0, "--mu", help="Normal mean"),
    sigma: float = typer.Option(1.0, "--sigma", help="Normal standard deviation"),
):
    """Probability density (normal) or mass (binomial) at X."""
    dist = build_distribution(distribution.value, n, p, mu, sigma)
    console.print(f"{describe(dist)}.pdf({x:g}) = [bold]{dist.pdf(x):.12g}[/bold]")


@app.command()
def cdf(
    distribution: ContinuousOrDiscrete = typer.Argument(..., help="Distribution"),
    x: float = typer.Argument(..., help="Point to evaluate"),
    n: int = typer.Option(10, "--n", "-n", help="Binomial trials"),
    p: float = typer.Option(0.5, "--p", "-p", help="Binomial success probability"),
    mu: float = typer.Option(0.0, "--mu", help="Normal mean"),
    sigma: float = typer.Option(1.0, "--sigma", help="Normal standard deviation"),
):
    """Cumulative probability P(X <= x)."""
    dist = build_distribution(distribution.value, n, p, mu, sigma)
    console.print(f"{describe(dist)}.cdf({x:g}) = [bold]{dist.cdf(x):.12g}[/bold]")


@app.command()
def quantile(
    distribution: ContinuousOrDiscrete = typer.Argument(..., help="Distribution"),
    probability: float = typer.Argument(..., help="Cumulative probability in [0, 1]"),
    n: int = typer.Option(10, "--n", "-n", help="Binomial trials"),
    p: float = typer.Option(0.5, "--p", "-p", help="Binomial success probability"),
    mu: float = typer.Option(0.0, "--mu", help="Normal mean"),
    sigma: float = typer.Option(1.0, "--sigma", help="Normal standard deviation"),
):
    """Inverse cdf at PROBABILITY."""
    if not 0.0 <= probability <= 1.0:
        console.print(f"[red]Error:[/red] probability must be in [0, 1], got {probability}")
        raise typer.Exit(1)

    dist = build_distribution(distribution.value, n, p, mu, sigma)
    console.print(f"{describe(dist)}.cdf_inverse({probability:g}) = [bold]{dist.cdf_inverse(probability):.12g}[/bold]")


@app.command()
def validate(
    distribution: ContinuousOrDiscrete = typer.Argument(..., help="Distribution"),
    n: int = typer.Option(50, "--n", "-n", help="Binomial trials"),
    p: float = typer.Option(0.5, "--p", "-p", help="Binomial success probability"),
    mu: float = typer.Option(0.0, "--mu", help="Normal mean"),
    sigma: float = typer.Option(1.0, "--sigma", help="Normal standard deviation"),
    count: int = typer.Option(100_000, "--count", "-c", help="Number of samples"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    significance: float = typer.Option(0.001, "--significance", help="Chi-square rejection level"),
):
    """
    Check sampled moments and goodness of fit; exits with 1 on failure.

    Example:
        sampling-lab validate binomial -n 50 -p 0.5 --seed 7
    """
    from sampling_lab import PseudoRandom, DistributionValidator

    require_count(count)
    dist = build_distribution(distribution.value, n, p, mu, sigma)
    console.print(Panel.fit(f"🔬 [bold]Validating {describe(dist)}[/bold]", border_style="blue"))

    generator = PseudoRandom(seed)
    with console.status(f"[bold blue]Drawing {count:,} samples..."):
        draws = dist.samples(generator, count)

    validator = DistributionValidator(dist)
    moments = validator.compare(draws)

    try:
        fit = validator.goodness_of_fit(draws)
    except ValueError as e:
        console.print(f"[yellow]Chi-square skipped:[/yellow] {e}")
        fit = None

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="dim")
    summary.add_column()
    summary.add_row("Mean error:", f"{moments.mean_z:.3f} σ")
    summary.add_row("Variance error:", f"{moments.variance_error:.2%}")
    if fit is not None:
        summary.add_row("Chi-square:", f"{fit.statistic:.2f} on {fit.degrees_of_freedom} dof")
        summary.add_row("p-value:", f"{fit.p_value:.4f}")
    console.print(summary)

    passed = moments.passed and (fit is None or fit.passed(significance))
    if passed:
        console.print("\n  [green]✓[/green] Samples match the distribution")
    else:
        console.print("\n  [red]✗[/red] Samples do not match the distribution")
        raise typer.Exit(1)


@app.command()
def bench(
    iterations: int = typer.Option(10_000, "--iterations", "-i", help="Calls per case"),
    seed: int = typer.Option(42, "--seed", "-s", help="Seed for every case"),
    match: Optional[str] = typer.Option(None, "--match", "-m", help="Only cases containing this text"),
):
    """
    Measure throughput of the generator and distribution operations.

    Example:
        sampling-lab bench --iterations 2000 --match binomial
    """
    from sampling_lab.benchmarks import run_benchmarks

    console.print(Panel.fit("⏱️  [bold]Benchmarks[/bold]", border_style="blue"))

    with console.status("[bold blue]Running benchmarks..."):
        results = run_benchmarks(iterations=iterations, seed=seed, match=match)

    if not results:
        console.print(f"[yellow]No benchmark matches '{match}'[/yellow]")
        raise typer.Exit(1)

    table = Table(box=box.ROUNDED)
    table.add_column("Case", style="cyan")
    table.add_column("ns/op", justify="right")
    table.add_column("ops/s", justify="right", style="bold")
    for result in results:
        table.add_row(result.name, f"{result.nanoseconds_per_op:,.0f}", f"{result.ops_per_second:,.0f}")

    console.print(table)


@app.command()
def demo(
    seed: int = typer.Option(13, "--seed", "-s", help="Random seed"),
):
    """Draw four Binomial(10, 0.2) and four Normal(0, 1) values."""
    from sampling_lab import Binomial, Normal, PseudoRandom

    generator = PseudoRandom(seed)
    binomial = Binomial(10, 0.2)
    normal = Normal(0.0, 1.0)

    binomials = [binomial.sample(generator) for _ in range(4)]
    normals = [normal.sample(generator) for _ in range(4)]

    console.print(f"Generated binomial samples: {tuple(binomials)}")
    console.print(f"Generated normal samples: ({', '.join(f'{x:.6f}' for x in normals)})")


if __name__ == "__main__":
    app()
