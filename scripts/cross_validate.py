"""
Cross-validation of the elimination solver against scipy's LP solver.

Generates random inequality systems, solves each with Fourier-Motzkin
elimination and with scipy.optimize.linprog (HiGHS), and reports any
disagreement in the feasibility verdict or any certificate that fails the
extended-precision check.

Usage:
    python scripts/cross_validate.py --trials 200 --vars 3 --constraints 6
"""

import argparse
import sys
import numpy as np

from fourier_motzkin.elimination import ConstraintSystem
from fourier_motzkin.certificate import (
    check_feasibility_lp,
    solve,
    verify_certificate,
)


def random_system(rng, num_vars, num_constraints, integer=True, max_coeff=1):
    """Random system Ax ≤ b; small integer coefficients keep rounding error small."""
    if integer:
        A = rng.integers(-max_coeff, max_coeff + 1,
                         size=(num_constraints, num_vars)).astype(np.float64)
        b = rng.integers(-3, 4, size=num_constraints).astype(np.float64)
    else:
        A = rng.standard_normal((num_constraints, num_vars))
        b = rng.standard_normal(num_constraints)
    return ConstraintSystem.from_arrays(A, b, num_vars=num_vars)


def run(trials, num_vars, num_constraints, seed, integer, max_coeff=1,
        tolerance=1e-9, verbose=False):
    """Run the comparison; return (agreements, disagreements, failed checks)."""
    rng = np.random.default_rng(seed)
    agree, disagree, failed = 0, 0, 0

    for t in range(trials):
        system = random_system(rng, num_vars, num_constraints, integer, max_coeff)
        result = solve(system, tolerance=tolerance)
        lp = check_feasibility_lp(system)

        if lp == result.valid:
            agree += 1
        else:
            disagree += 1
            print(f"  Trial {t}: elimination={'feasible' if result.valid else 'infeasible'}, "
                  f"linprog={'feasible' if lp else 'infeasible'}")

        if not verify_certificate(system, result):
            failed += 1
            print(f"  Trial {t}: certificate failed extended-precision check")

        if verbose and (t % 50 == 0 or t == trials - 1):
            print(f"  [{t+1}/{trials}] agree={agree} disagree={disagree} failed={failed}")

    return agree, disagree, failed


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Cross-validate against scipy linprog")
    parser.add_argument("--trials", type=int, default=100, help="Number of random systems")
    parser.add_argument("--vars", type=int, default=3, help="Variables per system")
    parser.add_argument("--constraints", type=int, default=6, help="Constraints per system")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--max-coeff", type=int, default=1,
                        help="Integer coefficients are drawn from [-max_coeff, max_coeff]")
    parser.add_argument("--real", action="store_true",
                        help="Use Gaussian instead of small-integer coefficients")
    parser.add_argument("--tolerance", type=float, default=1e-9,
                        help="Relative slack for the terminal feasibility decision")
    parser.add_argument("--verbose", action="store_true", help="Print progress")
    args = parser.parse_args()

    print("Fourier-Motzkin Cross-Validation")
    print(f"Python: {sys.version}")
    print(f"NumPy: {np.__version__}")

    agree, disagree, failed = run(
        args.trials, args.vars, args.constraints, args.seed,
        integer=not args.real, max_coeff=args.max_coeff,
        tolerance=args.tolerance, verbose=args.verbose,
    )

    print("\n" + "=" * 60)
    print(f"  {agree} agree, {disagree} disagree, {failed} failed checks")
    print("=" * 60)
    sys.exit(1 if disagree or failed else 0)
