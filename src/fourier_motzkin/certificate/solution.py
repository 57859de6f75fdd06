"""
Solution reconstruction for feasible systems.

The chain is walked from the zero-variable system back to the input. The
system with j + 1 variables was finalized on variable j; given the values
of x_0, ..., x_{j-1} already recovered, recover_variable picks x_j so that
every constraint of that system holds. After N steps the full solution is
available in variable index order.
"""

import warnings
import numpy as np

from ..config import VERIFY_TOLERANCE
from ..elimination.chain import EliminationChain
from ..errors import InternalConsistencyError


def recover_solution(chain: EliminationChain,
                     tolerance: float = VERIFY_TOLERANCE) -> np.ndarray:
    """
    Point satisfying the first system of a feasible chain.

    Parameters
    ----------
    chain : list of ConstraintSystem
        Output of build_chain; its last system must be feasible.
    tolerance : float
        Relative tolerance for the closing feasibility check.

    Returns
    -------
    np.ndarray
        One value per variable of chain[0].

    Raises
    ------
    InternalConsistencyError
        If the recovered point violates the input system beyond tolerance.
    """
    num_vars = chain[0].num_vars
    if len(chain) != num_vars + 1:
        raise InternalConsistencyError(
            f"Chain of length {len(chain)} does not match {num_vars} variables"
        )

    solution = np.zeros(num_vars, dtype=np.float64)
    for var_index in range(num_vars):
        system = chain[num_vars - 1 - var_index]
        if system.num_vars != var_index + 1:
            raise InternalConsistencyError(
                f"Chain entry has {system.num_vars} variables, expected {var_index + 1}"
            )
        solution[var_index] = system.recover_variable(var_index, solution[:var_index])

    check_solution(chain[0], solution, tolerance)
    return solution


def check_solution(system, solution, tolerance: float = VERIFY_TOLERANCE):
    """
    Closing check: exact feasibility, else feasibility within tolerance.

    Passing only within tolerance emits a RuntimeWarning; failing raises
    InternalConsistencyError.
    """
    if system.is_feasible(solution):
        return
    if system.is_feasible(solution, tolerance=tolerance):
        warnings.warn(
            f"Recovered solution satisfies the system only within relative "
            f"tolerance {tolerance:g} (floating-point rounding).",
            RuntimeWarning,
        )
        return
    raise InternalConsistencyError(
        f"Recovered solution violates constraint {system.find_violated(solution)}"
    )
