"""
Elimination driver: reduce a system down to zero variables.

The chain holds one system per variable count, from N down to 0. Entry i
has i variables eliminated. Every entry except the last is stored in its
finalized form (the normalized copy that the next step consumed), so the
backward passes see exactly the constraints that were combined.

Constraint counts can grow doubly exponentially in N; the whole chain is
kept because both backward passes walk it.
"""

import sys
from typing import List, NamedTuple, Optional

from ..config import MAX_CONSTRAINTS
from ..errors import ChainSizeLimitError, InternalConsistencyError
from .system import ConstraintSystem


EliminationChain = List[ConstraintSystem]


class ChainStats(NamedTuple):
    """Size summary of an elimination chain."""
    constraint_counts: List[int]
    total_constraints: int
    peak_constraints: int
    total_coefficients: int


def build_chain(
    system: ConstraintSystem,
    max_constraints: Optional[int] = MAX_CONSTRAINTS,
    verbose: bool = False,
) -> EliminationChain:
    """
    Eliminate variables N-1, N-2, ..., 0 in turn.

    Parameters
    ----------
    system : ConstraintSystem
        Input system with N variables. It is not modified.
    max_constraints : int, optional
        If set, raise ChainSizeLimitError before any step predicted to
        produce more constraints than this.
    verbose : bool
        Print one line per elimination step to stderr.

    Returns
    -------
    list of ConstraintSystem
        N + 1 systems; chain[i] has N - i variables.
    """
    if system.is_finalized or system.generation != 0:
        raise InternalConsistencyError(
            "build_chain expects an input system (generation 0, not finalized)"
        )

    chain = [system]
    for var_index in range(system.num_vars - 1, -1, -1):
        current = chain[-1]
        predicted = current.count_after_elimination(var_index)

        if verbose:
            part = current.partition_by_sign(var_index)
            print(f"  Eliminating x{var_index}: {len(part.zero)} zero, "
                  f"{len(part.positive)} positive, {len(part.negative)} negative "
                  f"-> {predicted} constraints", file=sys.stderr)

        if max_constraints is not None and predicted > max_constraints:
            raise ChainSizeLimitError(
                f"Eliminating variable {var_index} would produce {predicted} "
                f"constraints (limit {max_constraints})"
            )

        finalized = current.finalize(var_index)
        chain[-1] = finalized
        chain.append(finalized.eliminate(var_index))

    return chain


def chain_stats(chain: EliminationChain) -> ChainStats:
    """Constraint counts per step plus totals (the chain's memory footprint)."""
    counts = [s.num_constraints for s in chain]
    return ChainStats(
        constraint_counts=counts,
        total_constraints=sum(counts),
        peak_constraints=max(counts) if counts else 0,
        total_coefficients=sum(s.num_constraints * s.num_vars for s in chain),
    )
