"""
test_cli.py - Tests for the sampling-lab Command Line
"""

import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

from sampling_lab.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI callback reconfigures loguru; put the default sink back."""
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestSample:

    def test_binomial_summary(self):
        result = runner.invoke(app, ["sample", "binomial", "-n", "10", "-p", "0.2", "--count", "500", "--seed", "1"])

        assert result.exit_code == 0
        assert "Binomial(n=10, p=0.2)" in result.output
        assert "Sample Statistics" in result.output
        assert "Inverse Search" in result.output

    def test_normal_histogram(self):
        result = runner.invoke(
            app,
            ["sample", "normal", "--mu", "100", "--sigma", "15", "--count", "2000", "--seed", "2", "--histogram", "--bins", "8"],
        )

        assert result.exit_code == 0
        assert "Histogram" in result.output

    def test_uniform_histogram_unavailable(self):
        result = runner.invoke(app, ["sample", "uniform", "-n", "10", "-p", "0.5", "--count", "100", "--histogram"])

        assert result.exit_code == 0
        assert "not available for uniform" in result.output

    def test_invalid_parameters_exit(self):
        result = runner.invoke(app, ["sample", "normal", "--sigma=-1"])

        assert result.exit_code == 1
        assert "non-negative" in result.output

    @pytest.mark.parametrize("count", ["1", "0"])
    def test_too_few_samples_exit(self, count):
        result = runner.invoke(app, ["sample", "normal", "--count", count])

        assert result.exit_code == 1
        assert "at least 2" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_unknown_distribution(self):
        result = runner.invoke(app, ["sample", "poisson"])

        assert result.exit_code != 0


class TestEvaluate:

    def test_pdf(self):
        result = runner.invoke(app, ["pdf", "binomial", "2", "-n", "10", "-p", "0.2"])

        assert result.exit_code == 0
        assert "0.301989888" in result.output

    def test_cdf(self):
        result = runner.invoke(app, ["cdf", "normal", "0"])

        assert result.exit_code == 0
        assert "= 0.5" in result.output

    def test_quantile(self):
        result = runner.invoke(app, ["quantile", "normal", "0.975"])

        assert result.exit_code == 0
        assert "1.95996398" in result.output

    def test_quantile_binomial(self):
        result = runner.invoke(app, ["quantile", "binomial", "1", "-n", "10", "-p", "0.2"])

        assert result.exit_code == 0
        assert "= 10" in result.output

    def test_quantile_out_of_range(self):
        result = runner.invoke(app, ["quantile", "normal", "1.5"])

        assert result.exit_code == 1
        assert "must be in [0, 1]" in result.output


class TestValidate:

    def test_binomial_passes(self):
        result = runner.invoke(app, ["validate", "binomial", "-n", "1000", "-p", "0.3", "--count", "20000", "--seed", "7"])

        assert result.exit_code == 0
        assert "Samples match" in result.output

    def test_impossible_significance_fails(self):
        result = runner.invoke(
            app,
            ["validate", "normal", "--count", "5000", "--seed", "7", "--significance", "1.0"],
        )

        assert result.exit_code == 1
        assert "do not match" in result.output

    def test_too_few_samples_exit(self):
        result = runner.invoke(app, ["validate", "normal", "--count", "1"])

        assert result.exit_code == 1
        assert "at least 2" in result.output

    def test_point_mass_skips_chi_square(self):
        result = runner.invoke(app, ["validate", "binomial", "-n", "10", "-p", "1.0", "--count", "100"])

        assert result.exit_code == 0
        assert "Chi-square skipped" in result.output


class TestMisc:

    def test_bench(self):
        result = runner.invoke(app, ["bench", "--iterations", "20", "--match", "normal.cdf"])

        assert result.exit_code == 0
        assert "Normal.cdf" in result.output
        assert "Normal.pdf" not in result.output

    def test_bench_no_match(self):
        result = runner.invoke(app, ["bench", "--iterations", "1", "--match", "nothing-matches"])

        assert result.exit_code == 1

    def test_demo(self):
        result = runner.invoke(app, ["demo"])

        assert result.exit_code == 0
        assert "Generated binomial samples: (" in result.output
        assert "Generated normal samples: (" in result.output

    def test_demo_reproducible(self):
        first = runner.invoke(app, ["demo", "--seed", "99"])
        second = runner.invoke(app, ["demo", "--seed", "99"])

        assert first.output == second.output

    def test_verbose(self):
        result = runner.invoke(app, ["-v", "demo"])

        assert result.exit_code == 0
