"""
constants.py - Named Thresholds for Sampling and Diagnostics

Every value here is read-only. Binomial regime selection, continued
fraction control, and the tolerances used by the diagnostics layer all
refer to these names rather than to literals.
"""

# =============================================================================
# BINOMIAL REGIME SELECTION
# =============================================================================

# Variance above which the normal approximation is used.
THRESHOLD_NORMAL = 10_000.0

# Variance at or above which BTPE rejection sampling is used.
THRESHOLD_BTPE = 30.0

# Success probability below which geometric jumps replace the cdf search.
THRESHOLD_RARE = 0.05

# Early exit for the cdf-inverse search when the seeded guess is this close.
CDF_INVERSE_TOLERANCE = 1e-10

# =============================================================================
# INCOMPLETE BETA (MODIFIED LENTZ)
# =============================================================================

BETA_MAX_ITERATIONS = 200
BETA_FPMIN = 1e-30
BETA_EPSILON = 1e-15

# =============================================================================
# DIAGNOSTICS
# =============================================================================

CHI_SQUARE_BINS = 20
CHI_SQUARE_MIN_EXPECTED = 5.0
HISTOGRAM_BINS = 40

# Range, in standard deviations around the mean, covered by binning.
BIN_RANGE_SIGMAS = 4.0

# Acceptance limits for DistributionValidator.
MAX_MEAN_Z = 3.0
MAX_VARIANCE_ERROR = 0.05
