"""
Feasibility solver for linear inequality systems Ax ≤ b.

Builds the elimination chain once, decides feasibility on the terminal
zero-variable system and runs the matching backward pass:

    feasible    -> solution x with Ax ≤ b
    infeasible  -> Farkas vector y ≥ 0 with yᵗA = 0, yᵗb < 0

Both results are checked against the input system before being returned.
"""

import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import numpy as np

from ..config import MAX_CONSTRAINTS, TERMINAL_TOLERANCE, VERIFY_TOLERANCE
from ..elimination.chain import build_chain
from ..elimination.system import ConstraintSystem
from ..errors import InternalConsistencyError
from .farkas import build_certificate
from .solution import recover_solution


@dataclass
class Certificate:
    """
    Result of a feasibility test.

    Attributes
    ----------
    vector : np.ndarray
        The solution (length = number of variables) if valid, otherwise
        the Farkas vector (length = number of constraints).
    valid : bool
        True if the system is feasible and `vector` is a solution.
    """
    vector: np.ndarray
    valid: bool

    @property
    def feasible(self) -> bool:
        return self.valid

    @property
    def status(self) -> str:
        if self.valid:
            return "System feasible (solution recovered)"
        return "System infeasible (Farkas certificate found)"


def check_farkas_vector(system: ConstraintSystem, y: np.ndarray,
                        tolerance: float = VERIFY_TOLERANCE):
    """
    Closing check for a reconstructed certificate.

    Exact check first; a certificate valid only within tolerance emits a
    RuntimeWarning, an invalid one raises InternalConsistencyError.
    """
    if system.verify_farkas_vector(y):
        return
    if system.verify_farkas_vector(y, tolerance=tolerance):
        warnings.warn(
            f"Farkas certificate is valid only within relative tolerance "
            f"{tolerance:g} (floating-point rounding).",
            RuntimeWarning,
        )
        return
    raise InternalConsistencyError("Reconstructed Farkas certificate does not verify")


def solve(
    system: ConstraintSystem,
    tolerance: float = TERMINAL_TOLERANCE,
    verify_tolerance: float = VERIFY_TOLERANCE,
    max_constraints: Optional[int] = MAX_CONSTRAINTS,
    verbose: bool = False,
) -> Certificate:
    """
    Decide feasibility of `system` and return a certificate.

    Parameters
    ----------
    system : ConstraintSystem
        Input system; not modified.
    tolerance : float
        Relative slack when deciding feasibility of the terminal system.
        The default 0 is an exact decision.
    verify_tolerance : float
        Relative tolerance of the closing checks.
    max_constraints : int, optional
        Constraint limit per elimination step (see build_chain).
    verbose : bool
        Print progress to stderr.

    Returns
    -------
    Certificate
        Solution (valid=True) or Farkas vector (valid=False).
    """
    if verbose:
        print(f"System: {system.num_constraints} constraints, "
              f"{system.num_vars} variables", file=sys.stderr)

    chain = build_chain(system, max_constraints=max_constraints, verbose=verbose)
    terminal = chain[-1]

    if not terminal.is_feasible(tolerance=tolerance):
        certificate = build_certificate(chain, tolerance=tolerance)
        check_farkas_vector(system, certificate, verify_tolerance)
        result = Certificate(vector=certificate, valid=False)
    else:
        solution = recover_solution(chain, tolerance=verify_tolerance)
        result = Certificate(vector=solution, valid=True)

    if verbose:
        print(f"Result: {result.status}", file=sys.stderr)

    return result


def solve_file(path: Union[str, Path], **kwargs) -> Certificate:
    """Parse an input file and solve it; keyword arguments go to solve()."""
    from ..io.reader import read_system

    return solve(read_system(path), **kwargs)
