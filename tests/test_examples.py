"""
Test Suite for Examples Package
===============================
"""

import pytest
import sys
from pathlib import Path

# =============================================================================
# PATH SETUP
# =============================================================================
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from examples import list_examples, run_example

from sampling_lab import ChiSquareResult, ValidationResult


class TestRunExample:
    """Test that examples run end-to-end via the wrapper."""

    def test_list_examples(self):
        assert set(list_examples()) == {"quick_samples", "convergence"}

    def test_run_example_quick_samples(self, capsys):
        result = run_example("quick_samples")

        assert len(result["binomial"]) == 4
        assert len(result["normal"]) == 4
        assert all(0 <= k <= 10 for k in result["binomial"])
        assert "Generated binomial samples" in capsys.readouterr().out

    def test_quick_samples_reproducible(self):
        assert run_example("quick_samples", seed=5) == run_example("quick_samples", seed=5)

    def test_run_example_convergence(self):
        result = run_example("convergence", count=5000)

        assert len(result) == 5
        for moments, fit in result.values():
            assert isinstance(moments, ValidationResult)
            assert isinstance(fit, ChiSquareResult)

    def test_unknown_example(self):
        with pytest.raises(ValueError, match="Unknown example"):
            run_example("backtest_strategy")
