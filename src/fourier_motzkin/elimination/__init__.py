"""
Fourier-Motzkin elimination engine.

Implements:
- Single inequalities with provenance and scaling factors
- Constraint systems with the elimination step and bound queries
- The elimination driver producing the full chain of reduced systems

Main entry points:
- `ConstraintSystem.eliminate(var_index)`: one elimination step
- `build_chain(system)`: eliminate every variable
"""

from .constraint import Constraint, Sign
from .system import ConstraintSystem, Partition, ParentRef
from .chain import ChainStats, EliminationChain, build_chain, chain_stats

__all__ = [
    # Constraint
    "Constraint",
    "Sign",
    # System
    "ConstraintSystem",
    "Partition",
    "ParentRef",
    # Driver
    "ChainStats",
    "EliminationChain",
    "build_chain",
    "chain_stats",
]
