"""
Global configuration and numerical defaults for Fourier-Motzkin elimination.
"""

from typing import Optional


# =============================================================================
# Feasibility Tolerances
# =============================================================================

TERMINAL_TOLERANCE = 0.0
"""Slack allowed when deciding feasibility of the zero-variable system (exact)."""

VERIFY_TOLERANCE = 1e-9
"""Relative tolerance for the closing checks on solutions and certificates."""


# =============================================================================
# Extended Precision
# =============================================================================

MPMATH_PRECISION = 50
"""Number of decimal digits for mpmath certificate verification."""


# =============================================================================
# Output Format
# =============================================================================

OUTPUT_PRECISION = 6
"""Significant digits printed per vector entry."""

INFEASIBLE_PREFIX = "empty"
"""Literal written before a Farkas certificate."""


# =============================================================================
# Resource Limits
# =============================================================================

MAX_CONSTRAINTS: Optional[int] = None
"""Refuse an elimination step predicted to exceed this many constraints (None = no limit)."""


# =============================================================================
# Utility Functions
# =============================================================================

def relative_slack(tolerance: float, magnitude: float) -> float:
    """
    Absolute slack corresponding to a relative tolerance.

    Magnitudes below 1 are treated as 1 so that values near zero are
    compared absolutely.
    """
    return tolerance * max(1.0, abs(magnitude))


assert relative_slack(VERIFY_TOLERANCE, 0.0) == VERIFY_TOLERANCE
