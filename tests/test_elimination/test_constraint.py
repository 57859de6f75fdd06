"""
Unit tests for single inequalities.

Tests construction variants (fresh, drop-one, combine), evaluation, sign
classification and the scaling-factor bookkeeping of rescaling.
"""

import pytest
import numpy as np

from fourier_motzkin.elimination.constraint import Constraint, Sign
from fourier_motzkin.errors import InternalConsistencyError


class TestConstruction:
    """Tests for the construction variants."""

    def test_zeros(self):
        c = Constraint.zeros(3, rhs=2.0)
        assert c.num_vars == 3
        assert np.all(c.coeffs == 0)
        assert c.rhs == 2.0
        assert c.parents == ()
        assert c.scaling_factor == 1.0

    def test_coeffs_are_read_only(self):
        """Constraints are immutable after construction."""
        c = Constraint([1.0, 2.0], 3.0)
        with pytest.raises(ValueError):
            c.coeffs[0] = 5.0

    def test_input_array_is_copied(self):
        coeffs = np.array([1.0, 2.0])
        c = Constraint(coeffs, 0.0)
        coeffs[0] = 9.0
        assert c.coeffs[0] == 1.0

    def test_drop_variable(self):
        """Drop-one copies all other coordinates and records one parent."""
        source = Constraint([1.0, 0.0, -2.0], 4.0)
        c = Constraint.drop_variable(source, 7, without=1)
        assert c.coeffs.tolist() == [1.0, -2.0]
        assert c.rhs == 4.0
        assert c.parents == (7,)
        assert c.scaling_factor == 1.0

    def test_combine(self):
        """Combine sums both sides and records both parents."""
        pos = Constraint([2.0, 1.0], 5.0)
        neg = Constraint([3.0, -1.0], -1.0)
        c = Constraint.combine(pos, 0, neg, 2, without=1)
        assert c.coeffs.tolist() == [5.0]
        assert c.rhs == 4.0
        assert c.parents == (0, 2)

    def test_combine_requires_cancellation(self):
        pos = Constraint([1.0, 2.0], 0.0)
        neg = Constraint([1.0, -1.0], 0.0)
        with pytest.raises(InternalConsistencyError):
            Constraint.combine(pos, 0, neg, 1, without=1)

    def test_combine_requires_same_length(self):
        with pytest.raises(InternalConsistencyError):
            Constraint.combine(Constraint([1.0], 0.0), 0,
                               Constraint([-1.0, 0.0], 0.0), 1, without=0)

    def test_too_many_parents(self):
        with pytest.raises(InternalConsistencyError):
            Constraint([1.0], 0.0, parents=(0, 1, 2))

    def test_nonpositive_scaling_factor(self):
        with pytest.raises(InternalConsistencyError):
            Constraint([1.0], 0.0, scaling_factor=0.0)


class TestEvaluation:
    """Tests for evaluate and is_satisfied."""

    def test_evaluate_dot_product(self):
        c = Constraint([1.0, -2.0, 3.0], 0.0)
        assert c.evaluate([1.0, 1.0, 1.0]) == 2.0

    def test_evaluate_zero_variables(self):
        """The empty point is the default for zero-variable constraints."""
        c = Constraint.zeros(0, rhs=-1.0)
        assert c.evaluate() == 0.0

    def test_evaluate_length_mismatch(self):
        c = Constraint([1.0, 2.0], 0.0)
        with pytest.raises(InternalConsistencyError):
            c.evaluate([1.0])

    def test_is_satisfied_boundary(self):
        """Equality satisfies the inequality."""
        c = Constraint([1.0, 1.0], 2.0)
        assert c.is_satisfied([1.0, 1.0])
        assert not c.is_satisfied([1.0, 1.5])

    def test_is_satisfied_with_slack(self):
        c = Constraint([1.0], 1.0)
        assert not c.is_satisfied([1.1])
        assert c.is_satisfied([1.1], slack=0.2)

    def test_trivial_infeasible(self):
        """0 ≤ -1 fails at the empty point."""
        assert not Constraint.zeros(0, rhs=-1.0).is_satisfied()


class TestSign:
    """Tests for sign classification."""

    def test_trichotomy(self):
        c = Constraint([0.0, 2.5, -0.1], 0.0)
        assert c.sign(0) is Sign.ZERO
        assert c.sign(1) is Sign.POSITIVE
        assert c.sign(2) is Sign.NEGATIVE

    def test_negative_zero_is_zero(self):
        assert Constraint([-0.0], 0.0).sign(0) is Sign.ZERO


class TestRescaling:
    """Tests for scale_by and normalized_on."""

    def test_scale_by(self):
        c = Constraint([1.0, -2.0], 3.0).scale_by(2.0)
        assert c.coeffs.tolist() == [2.0, -4.0]
        assert c.rhs == 6.0
        assert c.scaling_factor == 0.5

    def test_scale_by_accumulates_inverse(self):
        c = Constraint([1.0], 1.0).scale_by(2.0).scale_by(4.0)
        assert c.scaling_factor == 1.0 / 8.0

    def test_scale_by_returns_new_constraint(self):
        original = Constraint([1.0], 1.0)
        original.scale_by(3.0)
        assert original.coeffs[0] == 1.0
        assert original.scaling_factor == 1.0

    @pytest.mark.parametrize("factor", [0.0, -1.0])
    def test_scale_by_rejects_nonpositive(self, factor):
        with pytest.raises(InternalConsistencyError):
            Constraint([1.0], 1.0).scale_by(factor)

    def test_scale_by_keeps_parents(self):
        c = Constraint([1.0], 1.0, parents=(3, 4)).scale_by(2.0)
        assert c.parents == (3, 4)

    @pytest.mark.parametrize("coeff", [3.0, -7.0, 0.1, 49.0])
    def test_normalized_on_exact_unit(self, coeff):
        """The pivot becomes exactly ±1."""
        c = Constraint([2.0, coeff], 5.0).normalized_on(1)
        assert c.coeffs[1] == np.sign(coeff)
        assert c.scaling_factor == abs(coeff)
        assert c.rhs == pytest.approx(5.0 / abs(coeff))

    def test_normalized_on_zero_coefficient(self):
        with pytest.raises(InternalConsistencyError):
            Constraint([0.0, 1.0], 0.0).normalized_on(0)
