"""
A single linear inequality coeffs · x ≤ rhs.

Constraints are immutable. Every derived constraint remembers the indices
of the constraints in the previous system it was built from (its parents)
and the cumulative inverse of all positive rescalings applied to it (its
scaling factor). Both are needed to map a combination of reduced
constraints back onto the original ones.

Parent counts by construction:
    - 0 for constraints of an input system
    - 1 for a constraint carried over with one zero coefficient dropped
    - 2 for the sum of a positive- and a negative-signed constraint
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import numpy as np

from ..errors import InternalConsistencyError


class Sign(Enum):
    """Sign of a single coefficient."""
    ZERO = 0
    POSITIVE = 1
    NEGATIVE = 2


@dataclass(frozen=True, eq=False)
class Constraint:
    """
    One inequality of a ConstraintSystem.

    Attributes
    ----------
    coeffs : np.ndarray
        Read-only float64 coefficient vector (length = number of variables).
    rhs : float
        Right-hand side.
    parents : tuple of int
        Indices into the previous system's constraint list (0-2 entries).
    scaling_factor : float
        Cumulative inverse of all rescalings applied; always positive.
    """
    coeffs: np.ndarray
    rhs: float
    parents: Tuple[int, ...] = ()
    scaling_factor: float = 1.0

    def __post_init__(self):
        coeffs = np.array(self.coeffs, dtype=np.float64).reshape(-1)
        coeffs.setflags(write=False)
        object.__setattr__(self, "coeffs", coeffs)
        object.__setattr__(self, "rhs", float(self.rhs))
        object.__setattr__(self, "parents", tuple(int(p) for p in self.parents))
        object.__setattr__(self, "scaling_factor", float(self.scaling_factor))

        if len(self.parents) > 2:
            raise InternalConsistencyError(
                f"A constraint has at most 2 parents, got {len(self.parents)}"
            )
        if not self.scaling_factor > 0:
            raise InternalConsistencyError(
                f"Scaling factor must be positive, got {self.scaling_factor}"
            )

    # -------------------------------------------------------------------------
    # Construction variants
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, num_vars: int, rhs: float = 0.0) -> "Constraint":
        """Fresh constraint 0 · x ≤ rhs."""
        return cls(np.zeros(num_vars), rhs)

    @classmethod
    def drop_variable(cls, source: "Constraint", source_index: int,
                      without: int) -> "Constraint":
        """
        Copy `source` without coordinate `without`.

        Used for constraints whose coefficient on the eliminated variable is
        zero; `source_index` is recorded as the only parent.
        """
        return cls(
            np.delete(source.coeffs, without),
            source.rhs,
            parents=(source_index,),
        )

    @classmethod
    def combine(cls, positive: "Constraint", positive_index: int,
                negative: "Constraint", negative_index: int,
                without: int) -> "Constraint":
        """
        Sum two constraints and drop coordinate `without`.

        Both must already be normalized on `without` with opposite signs so
        that the coordinate cancels exactly.
        """
        if positive.num_vars != negative.num_vars:
            raise InternalConsistencyError(
                f"Cannot combine constraints with {positive.num_vars} and "
                f"{negative.num_vars} variables"
            )
        pivot = positive.coeffs[without] + negative.coeffs[without]
        if pivot != 0:
            raise InternalConsistencyError(
                f"Variable {without} does not cancel when combining constraints "
                f"{positive_index} and {negative_index} (residual {pivot})"
            )
        return cls(
            np.delete(positive.coeffs + negative.coeffs, without),
            positive.rhs + negative.rhs,
            parents=(positive_index, negative_index),
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def num_vars(self) -> int:
        return self.coeffs.shape[0]

    def evaluate(self, x: Optional[Sequence[float]] = None) -> float:
        """Left-hand side coeffs · x (x defaults to the empty point)."""
        x = np.zeros(0) if x is None else np.asarray(x, dtype=np.float64)
        if x.shape != (self.num_vars,):
            raise InternalConsistencyError(
                f"Point has {x.size} entries, constraint has {self.num_vars} variables"
            )
        return float(np.dot(self.coeffs, x))

    def is_satisfied(self, x: Optional[Sequence[float]] = None,
                     slack: float = 0.0) -> bool:
        """True if coeffs · x ≤ rhs + slack."""
        return self.evaluate(x) <= self.rhs + slack

    def sign(self, var_index: int) -> Sign:
        coeff = self.coeffs[var_index]
        if coeff == 0:
            return Sign.ZERO
        if coeff > 0:
            return Sign.POSITIVE
        return Sign.NEGATIVE

    # -------------------------------------------------------------------------
    # Rescaling
    # -------------------------------------------------------------------------

    def scale_by(self, factor: float) -> "Constraint":
        """
        Multiply both sides by a positive factor.

        The scaling factor of the result is divided by `factor`, so it
        always holds the cumulative inverse of the applied rescalings.
        """
        if not factor > 0:
            raise InternalConsistencyError(
                f"Only positive rescaling is allowed, got {factor}"
            )
        return Constraint(
            self.coeffs * factor,
            self.rhs * factor,
            parents=self.parents,
            scaling_factor=self.scaling_factor / factor,
        )

    def normalized_on(self, var_index: int) -> "Constraint":
        """
        Rescale so that the coefficient of `var_index` is exactly ±1.

        Divides by the magnitude instead of multiplying by its reciprocal,
        which keeps the pivot exact in floating point.
        """
        magnitude = abs(self.coeffs[var_index])
        if magnitude == 0:
            raise InternalConsistencyError(
                f"Cannot normalize on variable {var_index}: coefficient is zero"
            )
        return Constraint(
            self.coeffs / magnitude,
            self.rhs / magnitude,
            parents=self.parents,
            scaling_factor=self.scaling_factor * magnitude,
        )

    def __repr__(self) -> str:
        return (f"Constraint(coeffs={self.coeffs.tolist()}, rhs={self.rhs}, "
                f"parents={self.parents}, scaling_factor={self.scaling_factor})")
