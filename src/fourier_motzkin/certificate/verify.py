"""
Independent checks of elimination results.

Two tools, neither used to produce results:
    - mpmath re-evaluation of a certificate at extended precision, so that
      float64 rounding in the check itself cannot hide or fake a residual
    - a scipy.optimize.linprog (HiGHS) feasibility verdict for
      cross-validating the elimination verdict
"""

from typing import Sequence, Tuple
import numpy as np
from mpmath import mp, mpf
from scipy.optimize import linprog

from ..config import MPMATH_PRECISION, VERIFY_TOLERANCE
from ..elimination.system import ConstraintSystem
from ..errors import InternalConsistencyError


def farkas_residuals_mp(
    system: ConstraintSystem,
    y: Sequence[float],
    dps: int = MPMATH_PRECISION,
) -> Tuple[mpf, mpf]:
    """
    Evaluate a Farkas vector at extended precision.

    Parameters
    ----------
    system : ConstraintSystem
        The system the certificate refers to.
    y : sequence of float
        One weight per constraint.
    dps : int
        mpmath decimal places.

    Returns
    -------
    rhs_sum : mpf
        yᵗb (must be negative).
    max_column : mpf
        max_j |Σ_i y_i a_ij| (must be zero).
    """
    y = np.asarray(y, dtype=np.float64).reshape(-1)
    if y.size != system.num_constraints:
        raise InternalConsistencyError(
            f"Farkas vector has {y.size} entries, system has "
            f"{system.num_constraints} constraints"
        )

    saved_dps = mp.dps
    mp.dps = dps
    try:
        weights = [mpf(float(v)) for v in y]
        rhs_sum = mpf(0)
        columns = [mpf(0)] * system.num_vars
        for w, constraint in zip(weights, system):
            if w == 0:
                continue
            rhs_sum += w * mpf(constraint.rhs)
            for j, a in enumerate(constraint.coeffs):
                columns[j] += w * mpf(float(a))
        max_column = max((abs(c) for c in columns), default=mpf(0))
        return rhs_sum, max_column
    finally:
        mp.dps = saved_dps


def max_violation_mp(
    system: ConstraintSystem,
    x: Sequence[float],
    dps: int = MPMATH_PRECISION,
) -> mpf:
    """Largest amount by which x violates a constraint (0 if feasible)."""
    x = np.asarray(x, dtype=np.float64).reshape(-1)
    if x.size != system.num_vars:
        raise InternalConsistencyError(
            f"Point has {x.size} entries, system has {system.num_vars} variables"
        )

    saved_dps = mp.dps
    mp.dps = dps
    try:
        point = [mpf(float(v)) for v in x]
        worst = mpf(0)
        for constraint in system:
            lhs = mpf(0)
            for a, v in zip(constraint.coeffs, point):
                lhs += mpf(float(a)) * v
            worst = max(worst, lhs - mpf(constraint.rhs))
        return worst
    finally:
        mp.dps = saved_dps


def verify_certificate(
    system: ConstraintSystem,
    certificate,
    dps: int = MPMATH_PRECISION,
    tolerance: float = VERIFY_TOLERANCE,
) -> bool:
    """
    Extended-precision acceptance check for a solver result.

    Solutions may violate a constraint by at most tolerance · max(1, |b|_max);
    Farkas vectors must be non-negative (down to -tolerance), have a
    negative yᵗb and column sums within tolerance · max(1, Σ|y_i a_ij|).
    """
    vector = np.asarray(certificate.vector, dtype=np.float64)
    _, b = system.as_arrays()
    b_scale = max(1.0, float(np.max(np.abs(b)))) if b.size else 1.0

    if certificate.valid:
        return bool(max_violation_mp(system, vector, dps) <= tolerance * b_scale)

    if np.any(vector < -tolerance):
        return False
    rhs_sum, max_column = farkas_residuals_mp(system, vector, dps)
    A, _ = system.as_arrays()
    magnitude = float(np.max(np.abs(vector) @ np.abs(A))) if A.size else 0.0
    return bool(rhs_sum < 0 and max_column <= tolerance * max(1.0, magnitude))


def check_feasibility_lp(system: ConstraintSystem, method: str = "highs") -> bool:
    """
    Feasibility verdict from scipy's LP solver.

    Solves: minimize 0 subject to A x ≤ b, x free.

    Returns
    -------
    bool
        True if linprog finds a feasible point, False if it proves
        infeasibility.

    Raises
    ------
    RuntimeError
        If linprog ends with any other status.
    """
    if system.num_vars == 0:
        return system.is_feasible()

    if system.num_constraints == 0:
        return True

    A, b = system.as_arrays()
    c = np.zeros(system.num_vars)
    bounds = [(None, None)] * system.num_vars

    res = linprog(c, A_ub=A, b_ub=b, bounds=bounds, method=method)

    if res.status == 0:
        return True
    if res.status == 2:
        return False
    raise RuntimeError(f"LP solver returned status {res.status}: {res.message}")
