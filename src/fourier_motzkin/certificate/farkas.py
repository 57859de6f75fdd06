"""
Farkas certificate reconstruction for infeasible systems.

If the zero-variable system at the end of the chain is infeasible, one of
its constraints reads 0 ≤ rhs with rhs < 0. Weight 1 on that constraint is
a trivial certificate for the terminal system. Walking the chain backwards,
each constraint's weight is handed to its parents, which gives weights on
the constraints of the previous system, and so on up to the input.

Weights stay non-negative throughout: the seed is 1, scaling factors are
positive and only additions are used.
"""

from typing import Sequence
import numpy as np

from ..elimination.chain import EliminationChain
from ..elimination.system import ConstraintSystem
from ..errors import InternalConsistencyError


def project_back(
    system: ConstraintSystem,
    child_weights: Sequence[float],
    parent_count: int,
) -> np.ndarray:
    """
    Map weights on `system` to weights on the system it was reduced from.

    Each weight is divided by its constraint's scaling factor, which turns
    a multiplier of the normalized constraint into one of the constraint as
    it was built, and is then added to every parent slot.

    Parameters
    ----------
    system : ConstraintSystem
        The reduced system (result of one elimination step).
    child_weights : sequence of float
        One weight per constraint of `system`.
    parent_count : int
        Number of constraints in the previous system.

    Returns
    -------
    np.ndarray
        Weights of length `parent_count`.
    """
    child_weights = np.asarray(child_weights, dtype=np.float64)
    if child_weights.shape != (system.num_constraints,):
        raise InternalConsistencyError(
            f"Expected {system.num_constraints} weights, received {child_weights.size}"
        )

    weights = np.zeros(parent_count, dtype=np.float64)
    for i, w in enumerate(child_weights):
        parents = system.parents_of(i)
        if not parents:
            raise InternalConsistencyError(
                f"Constraint {i} of generation {system.generation} has no parents"
            )
        share = w / system.scaling_factor_of(i)
        for p in parents:
            if not 0 <= p < parent_count:
                raise InternalConsistencyError(
                    f"Parent index {p} out of range for a system with "
                    f"{parent_count} constraints"
                )
            weights[p] += share
    return weights


def build_certificate(chain: EliminationChain, tolerance: float = 0.0) -> np.ndarray:
    """
    Farkas vector for the first system of an infeasible chain.

    Parameters
    ----------
    chain : list of ConstraintSystem
        Output of build_chain; its last system must be infeasible.
    tolerance : float
        Relative slack; the seed is the first terminal constraint violated
        beyond it.

    Returns
    -------
    np.ndarray
        y ≥ 0 with one entry per input constraint, yᵗA = 0 and yᵗb < 0.
    """
    terminal = chain[-1]
    if terminal.num_vars != 0:
        raise InternalConsistencyError(
            f"Chain ends with {terminal.num_vars} variables, expected 0"
        )

    weights = np.zeros(terminal.num_constraints, dtype=np.float64)
    weights[terminal.find_violated(tolerance=tolerance)] = 1.0

    for k in range(len(chain) - 1, 0, -1):
        weights = project_back(chain[k], weights, chain[k - 1].num_constraints)

    # Weights now refer to the normalized input constraints.
    return weights / chain[0].scaling_factors
