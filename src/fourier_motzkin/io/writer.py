"""
Output formatting for certificates.

    feasible:    "<x_0> <x_1> ... <x_n-1>\\n"
    infeasible:  "empty <y_0> <y_1> ... <y_m-1>\\n"
"""

from typing import Sequence

from ..config import INFEASIBLE_PREFIX, OUTPUT_PRECISION


def format_vector(vector: Sequence[float], precision: int = OUTPUT_PRECISION) -> str:
    """Space-separated entries with `precision` significant digits; -0 prints as 0."""
    return " ".join(f"{float(v) + 0.0:.{precision}g}" for v in vector)


def format_certificate(certificate, precision: int = OUTPUT_PRECISION) -> str:
    """Render a Certificate as a single newline-terminated output line."""
    parts = []
    if not certificate.valid:
        parts.append(INFEASIBLE_PREFIX)
    if len(certificate.vector):
        parts.append(format_vector(certificate.vector, precision))
    return " ".join(parts) + "\n"
