"""
sampling_lab - Deterministic Sampling with Exact Densities and CDFs
"""

__version__ = "1.0.0"

# =============================================================================
# CORE TYPES
# =============================================================================
from .types import (
    Distribution,
    SamplerCallable,
    SamplingRegime,
    SampleStatistics,
    ChiSquareBin,
    ChiSquareResult,
    ValidationResult,
    Histogram,
)

# =============================================================================
# GENERATOR
# =============================================================================
from .generator import PseudoRandom

# =============================================================================
# DISTRIBUTIONS
# =============================================================================
from .uniform import Uniform
from .normal import (
    Normal,
    standard_cdf,
    standard_cdf_inverse,
)
from .beta import (
    regularized_incomplete_beta,
    continued_fraction,
)
from .binomial import (
    Binomial,
    binomial_cdf,
    sample_btpe,
    sample_geometric,
    search_cdf_inverse,
)

# =============================================================================
# SAMPLERS
# =============================================================================
from .samplers import (
    DistributionFactory,
    DistributionRegistry,
    DistributionInfo,
)

# =============================================================================
# DIAGNOSTICS
# =============================================================================
from .diagnostics import (
    DistributionValidator,
    statistics_from_samples,
    normal_chi_square_bins,
    binomial_chi_square_bins,
    chi_square_test,
    histogram,
)

# PUBLIC API
# =============================================================================
__all__ = [
    "__version__",
    "Distribution",
    "SamplerCallable",
    "SamplingRegime",
    "SampleStatistics",
    "ChiSquareBin",
    "ChiSquareResult",
    "ValidationResult",
    "Histogram",
    "PseudoRandom",
    "Uniform",
    "Normal",
    "standard_cdf",
    "standard_cdf_inverse",
    "regularized_incomplete_beta",
    "continued_fraction",
    "Binomial",
    "binomial_cdf",
    "sample_btpe",
    "sample_geometric",
    "search_cdf_inverse",
    "DistributionFactory",
    "DistributionRegistry",
    "DistributionInfo",
    "DistributionValidator",
    "statistics_from_samples",
    "normal_chi_square_bins",
    "binomial_chi_square_bins",
    "chi_square_test",
    "histogram",
]
