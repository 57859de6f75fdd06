#!/usr/bin/env python3
"""
Resource estimation for Fourier-Motzkin elimination.

Usage:
    python scripts/estimate_resources.py problem.txt
    python scripts/estimate_resources.py problem.txt --max-constraints 100000
    python scripts/estimate_resources.py problem.txt --check-allocation 4

Features:
- Report the constraint count of every system in the elimination chain
- Estimate the memory held by the full chain
- Stop before a step that would exceed a constraint limit
- Warn if the given allocation is likely insufficient
"""

import argparse
import sys
from pathlib import Path

# Add project to path for package import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fourier_motzkin.errors import ChainSizeLimitError
from fourier_motzkin.elimination import build_chain, chain_stats
from fourier_motzkin.io import read_system


class ChainEstimator:
    """Estimate memory held by an elimination chain."""

    # float64 coefficients plus rhs, scaling factor, parents and object overhead
    BYTES_PER_COEFF = 8
    BYTES_PER_CONSTRAINT = 8 + 8 + 2 * 8 + 200

    def __init__(self, filename: str, max_constraints=None):
        self.system = read_system(filename)
        self.max_constraints = max_constraints
        self.limit_hit = None
        try:
            self.chain = build_chain(self.system, max_constraints=max_constraints)
        except ChainSizeLimitError as e:
            self.chain = None
            self.limit_hit = str(e)

    def estimate_chain_memory(self) -> float:
        """Estimate memory for the whole chain in MB."""
        stats = chain_stats(self.chain)
        total_bytes = (stats.total_coefficients * self.BYTES_PER_COEFF
                       + stats.total_constraints * self.BYTES_PER_CONSTRAINT)
        return total_bytes / (1024 ** 2)

    def print_report(self):
        """Print detailed resource report."""
        print(f"\n{'='*70}")
        print(f"Elimination Chain Report")
        print(f"{'='*70}\n")

        print(f"INPUT:")
        print(f"  Variables:          {self.system.num_vars}")
        print(f"  Constraints:        {self.system.num_constraints}")
        print()

        if self.chain is None:
            print(f"LIMIT REACHED:")
            print(f"  {self.limit_hit}")
            print()
            return

        stats = chain_stats(self.chain)
        print(f"CHAIN:")
        for i, count in enumerate(stats.constraint_counts):
            print(f"  {self.system.num_vars - i:>4} variables:  {count:,} constraints")
        print()

        print(f"TOTALS:")
        print(f"  Constraints held:   {stats.total_constraints:,}")
        print(f"  Largest system:     {stats.peak_constraints:,}")
        print(f"  Estimated memory:   {self.estimate_chain_memory():.2f} MB")
        print()

    def check_allocation(self, current_gb: float):
        """Check if an allocation is sufficient for the chain."""
        if self.chain is None:
            print("\n  ✗ Chain not built; cannot check allocation\n")
            return
        estimated_gb = self.estimate_chain_memory() / 1024

        print(f"\nALLOCATION CHECK:")
        print(f"  Current:            {current_gb} GB")
        print(f"  Estimated peak:     {estimated_gb:.3f} GB")
        print()

        if current_gb >= 1.3 * estimated_gb:
            print(f"  ✓ Current allocation should be sufficient")
        elif current_gb >= estimated_gb:
            print(f"  ⚠ Current allocation is close to estimated peak")
        else:
            print(f"  ✗ INSUFFICIENT: {estimated_gb - current_gb:.3f} GB short of estimated peak")
        print()


def main():
    parser = argparse.ArgumentParser(description="Estimate elimination chain size")
    parser.add_argument("filename", help="Input file")
    parser.add_argument("--max-constraints", type=int, default=None,
                        help="Stop before a step exceeding this many constraints")
    parser.add_argument("--check-allocation", type=float, metavar="GB",
                        help="Check if GB allocation is sufficient")

    args = parser.parse_args()

    estimator = ChainEstimator(args.filename, args.max_constraints)
    estimator.print_report()

    if args.check_allocation:
        estimator.check_allocation(args.check_allocation)


if __name__ == "__main__":
    main()
