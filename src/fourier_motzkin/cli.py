"""
Command-line entry point.

Usage:
    fourier-motzkin FILENAME
    python -m fourier_motzkin FILENAME --verbose --cross-check

Prints the solution vector, or "empty " followed by a Farkas certificate,
on one line. Argument errors print usage and exit with status 1; any other
failure propagates.
"""

import argparse
import sys
import warnings
from typing import List, Optional

from .config import MAX_CONSTRAINTS, MPMATH_PRECISION, OUTPUT_PRECISION, VERIFY_TOLERANCE
from .certificate import check_feasibility_lp, solve, verify_certificate
from .io import format_certificate, read_system


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser exiting with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="fourier-motzkin",
        description="Decide feasibility of Ax ≤ b by Fourier-Motzkin elimination",
    )
    parser.add_argument(
        "filename",
        help="Input file (header, objective, b vector, coefficient rows)"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print elimination progress to stderr"
    )
    parser.add_argument(
        "--precision", type=int, default=OUTPUT_PRECISION,
        help=f"Significant digits per output entry (default: {OUTPUT_PRECISION})"
    )
    parser.add_argument(
        "--max-constraints", type=int, default=MAX_CONSTRAINTS,
        help="Abort if an elimination step would exceed this many constraints"
    )
    parser.add_argument(
        "--verify", action="store_true",
        help=f"Re-check the result at {MPMATH_PRECISION}-digit precision"
    )
    parser.add_argument(
        "--cross-check", action="store_true",
        help="Compare the verdict with scipy's HiGHS LP solver"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)

    system = read_system(args.filename)
    result = solve(system, max_constraints=args.max_constraints, verbose=args.verbose)

    if args.verify:
        ok = verify_certificate(system, result)
        if args.verbose:
            print(f"Extended-precision check: {'OK' if ok else 'FAIL'}", file=sys.stderr)
        if not ok:
            warnings.warn(
                f"Certificate failed the {MPMATH_PRECISION}-digit check "
                f"(tolerance {VERIFY_TOLERANCE:g})",
                RuntimeWarning,
            )

    if args.cross_check:
        lp_feasible = check_feasibility_lp(system)
        if args.verbose:
            print(f"LP verdict: {'feasible' if lp_feasible else 'infeasible'}",
                  file=sys.stderr)
        if lp_feasible != result.valid:
            warnings.warn(
                f"LP solver disagrees: elimination says "
                f"{'feasible' if result.valid else 'infeasible'}, "
                f"linprog says {'feasible' if lp_feasible else 'infeasible'}",
                RuntimeWarning,
            )

    sys.stdout.write(format_certificate(result, precision=args.precision))
    return 0


if __name__ == "__main__":
    sys.exit(main())
