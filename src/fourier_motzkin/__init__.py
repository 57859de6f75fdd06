"""
fourier_motzkin: feasibility of linear inequality systems Ax ≤ b

Eliminates variables one at a time (Fourier-Motzkin) and returns either a
point satisfying every constraint or a Farkas certificate y ≥ 0 with
yᵗA = 0 and yᵗb < 0 proving that none exists.
"""

from . import config
from .errors import (
    FourierMotzkinError,
    InputFormatError,
    InternalConsistencyError,
    ChainSizeLimitError,
)
from .elimination import Constraint, ConstraintSystem, Sign, build_chain
from .certificate import Certificate, solve, solve_file

__version__ = "0.1.0"
__all__ = [
    "config",
    "FourierMotzkinError",
    "InputFormatError",
    "InternalConsistencyError",
    "ChainSizeLimitError",
    "Constraint",
    "ConstraintSystem",
    "Sign",
    "build_chain",
    "Certificate",
    "solve",
    "solve_file",
]
