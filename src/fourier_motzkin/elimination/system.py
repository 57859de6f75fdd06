"""
Ordered collections of constraints over a fixed number of variables.

A ConstraintSystem owns the single Fourier-Motzkin elimination step and the
queries used by both backward passes (bounds, violated constraints,
provenance, scaling factors).

Elimination of variable k:
    1. finalize(k): normalize every constraint with a nonzero coefficient
       on k to unit magnitude. This is the only rescaling a constraint ever
       receives and produces a new, finalized system.
    2. eliminate(k): keep every zero-signed constraint with coordinate k
       dropped, and add one combined constraint per (positive, negative)
       pair. The new system has |Zero| + |Positive|·|Negative| constraints.

Systems are immutable once built; provenance is kept as local indices into
the previous generation's constraint list.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple
import numpy as np

from ..config import relative_slack
from ..errors import InternalConsistencyError
from .constraint import Constraint, Sign


class Partition(NamedTuple):
    """Constraint indices grouped by the sign of one variable's coefficient."""
    zero: List[int]
    positive: List[int]
    negative: List[int]


ParentRef = Tuple[int, int]  # (generation, local index)


class ConstraintSystem:
    """
    A system of linear inequalities Ax ≤ b.

    Parameters
    ----------
    num_vars : int
        Declared number of variables.
    constraints : iterable of Constraint
        The inequalities, in order.
    num_constraints : int, optional
        Declared number of constraints; checked against the actual count.
    generation : int
        Number of variables eliminated to reach this system (0 for input).
    eliminated_variable : int, optional
        Set on finalized systems: the variable whose constraints were
        normalized for the next elimination step.
    """

    def __init__(
        self,
        num_vars: int,
        constraints: Iterable[Constraint] = (),
        num_constraints: Optional[int] = None,
        generation: int = 0,
        eliminated_variable: Optional[int] = None,
    ):
        if num_vars < 0:
            raise ValueError(f"Number of variables must be non-negative, got {num_vars}")

        self._num_vars = int(num_vars)
        self._constraints = tuple(constraints)
        self._generation = int(generation)
        self._eliminated_variable = eliminated_variable

        if num_constraints is not None and num_constraints != len(self._constraints):
            raise InternalConsistencyError(
                f"System declares {num_constraints} constraints, "
                f"received {len(self._constraints)}"
            )
        for i, constraint in enumerate(self._constraints):
            if constraint.num_vars != self._num_vars:
                raise InternalConsistencyError(
                    f"Constraint {i} has {constraint.num_vars} coefficients, "
                    f"system has {self._num_vars} variables"
                )

    @classmethod
    def from_arrays(cls, A: Sequence[Sequence[float]], b: Sequence[float],
                    num_vars: Optional[int] = None) -> "ConstraintSystem":
        """
        Build an input system from a dense matrix and right-hand side.

        `num_vars` is only needed when A has no rows.
        """
        b = np.asarray(b, dtype=np.float64).reshape(-1)
        if num_vars is None:
            A = np.asarray(A, dtype=np.float64)
            if A.ndim != 2:
                raise ValueError("A must be two-dimensional; pass num_vars for empty systems")
            num_vars = A.shape[1]
        A = np.asarray(A, dtype=np.float64).reshape(len(b), num_vars)

        constraints = [Constraint(row, rhs) for row, rhs in zip(A, b)]
        return cls(num_vars, constraints, num_constraints=len(b))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def num_vars(self) -> int:
        return self._num_vars

    @property
    def num_constraints(self) -> int:
        return len(self._constraints)

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return self._constraints

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def eliminated_variable(self) -> Optional[int]:
        return self._eliminated_variable

    @property
    def is_finalized(self) -> bool:
        return self._eliminated_variable is not None

    def __len__(self) -> int:
        return len(self._constraints)

    def __getitem__(self, index: int) -> Constraint:
        return self._constraints[index]

    def __iter__(self):
        return iter(self._constraints)

    def __repr__(self) -> str:
        return (f"ConstraintSystem(num_vars={self._num_vars}, "
                f"num_constraints={self.num_constraints}, "
                f"generation={self._generation})")

    def parents_of(self, constraint_index: int) -> Tuple[int, ...]:
        """Provenance of a constraint as indices into the previous generation."""
        return self._constraints[constraint_index].parents

    def parent_refs(self, constraint_index: int) -> List[ParentRef]:
        """Provenance as explicit (generation, local index) pairs."""
        return [(self._generation - 1, p) for p in self.parents_of(constraint_index)]

    def scaling_factor_of(self, constraint_index: int) -> float:
        return self._constraints[constraint_index].scaling_factor

    @property
    def scaling_factors(self) -> np.ndarray:
        return np.array([c.scaling_factor for c in self._constraints], dtype=np.float64)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Dense copy of the system.

        Returns
        -------
        A : np.ndarray, shape (num_constraints, num_vars)
        b : np.ndarray, shape (num_constraints,)
        """
        A = np.zeros((self.num_constraints, self._num_vars), dtype=np.float64)
        b = np.zeros(self.num_constraints, dtype=np.float64)
        for i, constraint in enumerate(self._constraints):
            A[i, :] = constraint.coeffs
            b[i] = constraint.rhs
        return A, b

    # -------------------------------------------------------------------------
    # Elimination
    # -------------------------------------------------------------------------

    def _check_variable(self, var_index: int):
        if not 0 <= var_index < self._num_vars:
            raise InternalConsistencyError(
                f"Variable index {var_index} out of range for a system "
                f"with {self._num_vars} variables"
            )

    def partition_by_sign(self, var_index: int) -> Partition:
        """Group constraint indices by the sign of `var_index`'s coefficient."""
        self._check_variable(var_index)
        part = Partition([], [], [])
        for i, constraint in enumerate(self._constraints):
            part[constraint.sign(var_index).value].append(i)
        return part

    def count_after_elimination(self, var_index: int) -> int:
        """Number of constraints eliminate(var_index) will produce."""
        part = self.partition_by_sign(var_index)
        return len(part.zero) + len(part.positive) * len(part.negative)

    def finalize(self, var_index: int) -> "ConstraintSystem":
        """
        Return a copy normalized for eliminating `var_index`.

        Every constraint with a nonzero coefficient on `var_index` is
        rescaled so that coefficient is ±1. A system is finalized at most
        once.
        """
        if self.is_finalized:
            raise InternalConsistencyError(
                f"System of generation {self._generation} was already finalized "
                f"on variable {self._eliminated_variable}"
            )
        self._check_variable(var_index)

        constraints = [
            c if c.sign(var_index) is Sign.ZERO else c.normalized_on(var_index)
            for c in self._constraints
        ]
        return ConstraintSystem(
            self._num_vars,
            constraints,
            num_constraints=self.num_constraints,
            generation=self._generation,
            eliminated_variable=var_index,
        )

    def eliminate(self, var_index: int) -> "ConstraintSystem":
        """
        Eliminate `var_index`, returning a system with one fewer variable.

        Unfinalized systems are finalized first (on a copy). Combined
        constraints come first, positive-major, followed by the carried-over
        zero-signed constraints.
        """
        if not self.is_finalized:
            return self.finalize(var_index).eliminate(var_index)
        if var_index != self._eliminated_variable:
            raise InternalConsistencyError(
                f"System was finalized on variable {self._eliminated_variable}, "
                f"cannot eliminate variable {var_index}"
            )

        part = self.partition_by_sign(var_index)
        expected = len(part.zero) + len(part.positive) * len(part.negative)

        reduced = []
        for pos in part.positive:
            for neg in part.negative:
                reduced.append(Constraint.combine(
                    self._constraints[pos], pos,
                    self._constraints[neg], neg,
                    var_index,
                ))
        for zero in part.zero:
            reduced.append(Constraint.drop_variable(self._constraints[zero], zero, var_index))

        return ConstraintSystem(
            self._num_vars - 1,
            reduced,
            num_constraints=expected,
            generation=self._generation + 1,
        )

    # -------------------------------------------------------------------------
    # Feasibility queries
    # -------------------------------------------------------------------------

    def is_feasible(self, x: Optional[Sequence[float]] = None,
                    tolerance: float = 0.0) -> bool:
        """
        True if x satisfies every constraint.

        `tolerance` is relative to max(1, |rhs|) per constraint; the default
        is an exact comparison.
        """
        return all(
            c.is_satisfied(x, slack=relative_slack(tolerance, c.rhs))
            for c in self._constraints
        )

    def find_violated(self, x: Optional[Sequence[float]] = None,
                      tolerance: float = 0.0) -> int:
        """Index of the first constraint x violates beyond tolerance; one must exist."""
        for i, constraint in enumerate(self._constraints):
            slack = relative_slack(tolerance, constraint.rhs)
            if not constraint.is_satisfied(x, slack=slack):
                return i
        raise InternalConsistencyError(
            f"Expected a violated constraint in a system of generation "
            f"{self._generation}, found none"
        )

    def bound_from_above(self, indices: Sequence[int],
                         x: Optional[Sequence[float]] = None) -> float:
        """
        Tightest upper bound min(rhs - coeffs · x) over `indices`.

        With x holding 0 at a unit-positive variable's slot, this is the
        largest value that variable may take. +inf for no indices.
        """
        bound = np.inf
        for i in indices:
            constraint = self._constraints[i]
            bound = min(bound, constraint.rhs - constraint.evaluate(x))
        return bound

    def bound_from_below(self, indices: Sequence[int],
                         x: Optional[Sequence[float]] = None) -> float:
        """
        Tightest lower bound max(coeffs · x - rhs) over `indices`.

        Counterpart of bound_from_above for unit-negative coefficients.
        -inf for no indices.
        """
        bound = -np.inf
        for i in indices:
            constraint = self._constraints[i]
            bound = max(bound, constraint.evaluate(x) - constraint.rhs)
        return bound

    def recover_variable(self, var_index: int, known_vars: Sequence[float]) -> float:
        """
        Pick a value for `var_index` given the values of all other variables.

        Parameters
        ----------
        var_index : int
            Variable to recover.
        known_vars : sequence of float
            Values of the remaining num_vars - 1 variables, in index order.

        Returns
        -------
        float
            0 if no constraint involves the variable; otherwise the bound
            from the larger of the positive/negative sides (negative on ties),
            which makes one constraint on that side tight.
        """
        system = self
        if self._eliminated_variable != var_index:
            system = self.finalize(var_index)

        known = np.asarray(known_vars, dtype=np.float64).reshape(-1)
        if known.size != self._num_vars - 1:
            raise InternalConsistencyError(
                f"Expected {self._num_vars - 1} known variables, received {known.size}"
            )
        x = np.insert(known, var_index, 0.0)

        part = system.partition_by_sign(var_index)
        if not part.positive and not part.negative:
            # Unconstrained: 0 avoids producing large magnitudes.
            return 0.0

        if len(part.positive) > len(part.negative):
            return float(system.bound_from_above(part.positive, x))
        return float(system.bound_from_below(part.negative, x))

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify_farkas_vector(self, y: Sequence[float], tolerance: float = 0.0) -> bool:
        """
        Check that y proves infeasibility: y ≥ 0, yᵗA = 0 and yᵗb < 0.

        With tolerance > 0, each column sum may deviate from zero by
        tolerance · max(1, Σ|y_i a_ij|) and entries of y may be as low as
        -tolerance. yᵗb < 0 is always strict.
        """
        y = np.asarray(y, dtype=np.float64).reshape(-1)
        if y.size != self.num_constraints:
            raise InternalConsistencyError(
                f"Farkas vector has {y.size} entries, system has "
                f"{self.num_constraints} constraints"
            )
        A, b = self.as_arrays()

        if np.any(y < -tolerance):
            return False
        if not float(np.dot(y, b)) < 0:
            return False

        combination = y @ A
        magnitude = np.abs(y) @ np.abs(A)
        return bool(np.all(np.abs(combination) <= tolerance * np.maximum(magnitude, 1.0)))
