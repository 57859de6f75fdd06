"""
Certificates for linear inequality systems.

Implements:
- Farkas vector reconstruction from an infeasible elimination chain
- Solution reconstruction from a feasible elimination chain
- The solver choosing between the two
- Extended-precision (mpmath) and LP (scipy) verification

Main entry points:
- `solve(system)`: feasibility test returning a Certificate
- `solve_file(path)`: same, from an input file
- `verify_certificate(system, certificate)`: independent check
"""

from .farkas import build_certificate, project_back
from .solution import check_solution, recover_solution
from .solver import Certificate, check_farkas_vector, solve, solve_file
from .verify import (
    check_feasibility_lp,
    farkas_residuals_mp,
    max_violation_mp,
    verify_certificate,
)

__all__ = [
    # Farkas
    "build_certificate",
    "project_back",
    # Solution
    "check_solution",
    "recover_solution",
    # Solver
    "Certificate",
    "check_farkas_vector",
    "solve",
    "solve_file",
    # Verification
    "check_feasibility_lp",
    "farkas_residuals_mp",
    "max_violation_mp",
    "verify_certificate",
]
