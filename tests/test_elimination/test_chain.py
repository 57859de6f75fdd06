"""
Tests for the elimination driver.

Tests chain length and shape, finalization of every consumed system,
the constraint-size guard and chain statistics.
"""

import pytest
import numpy as np

from fourier_motzkin.elimination import (
    ConstraintSystem,
    build_chain,
    chain_stats,
)
from fourier_motzkin.errors import ChainSizeLimitError, InternalConsistencyError


def scenario_b():
    return ConstraintSystem.from_arrays([[1, 1], [-1, 0], [0, -1]], [5, -1, -1])


def box(num_vars, half_width=1.0):
    """-w ≤ x_i ≤ w for every variable."""
    A = np.vstack([np.eye(num_vars), -np.eye(num_vars)])
    b = np.full(2 * num_vars, half_width)
    return ConstraintSystem.from_arrays(A, b)


class TestBuildChain:
    """Tests for build_chain."""

    def test_length_and_variable_counts(self):
        chain = build_chain(scenario_b())
        assert len(chain) == 3
        assert [s.num_vars for s in chain] == [2, 1, 0]
        assert [s.generation for s in chain] == [0, 1, 2]

    def test_eliminates_last_variable_first(self):
        chain = build_chain(scenario_b())
        assert chain[0].eliminated_variable == 1
        assert chain[1].eliminated_variable == 0
        assert not chain[-1].is_finalized

    def test_input_not_modified(self):
        s = ConstraintSystem.from_arrays([[2, 4], [-3, 1]], [1, 1])
        chain = build_chain(s)
        assert s[0].coeffs.tolist() == [2.0, 4.0]
        assert not s.is_finalized
        assert chain[0] is not s

    def test_scenario_b_terminal(self):
        """x + y ≤ 5, x ≥ 1, y ≥ 1 reduces to 0 ≤ 3."""
        chain = build_chain(scenario_b())
        terminal = chain[-1]
        assert terminal.num_constraints == 1
        assert terminal[0].rhs == 3.0
        assert terminal.is_feasible()

    def test_zero_variables(self):
        """A system without variables is its own chain."""
        s = ConstraintSystem(0)
        chain = build_chain(s)
        assert chain == [s]

    def test_each_step_obeys_growth_law(self):
        rng = np.random.default_rng(1)
        A = rng.integers(-1, 2, size=(6, 3)).astype(float)
        b = rng.integers(0, 3, size=6).astype(float)
        chain = build_chain(ConstraintSystem.from_arrays(A, b))
        for k in range(len(chain) - 1):
            part = chain[k].partition_by_sign(chain[k].eliminated_variable)
            expected = len(part.zero) + len(part.positive) * len(part.negative)
            assert chain[k + 1].num_constraints == expected

    def test_rejects_finalized_input(self):
        with pytest.raises(InternalConsistencyError):
            build_chain(scenario_b().finalize(1))

    def test_deterministic(self):
        a = build_chain(box(3))
        b = build_chain(box(3))
        for s1, s2 in zip(a, b):
            A1, b1 = s1.as_arrays()
            A2, b2 = s2.as_arrays()
            np.testing.assert_array_equal(A1, A2)
            np.testing.assert_array_equal(b1, b2)

    def test_verbose_goes_to_stderr(self, capsys):
        build_chain(scenario_b(), verbose=True)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Eliminating x1" in captured.err
        assert "Eliminating x0" in captured.err


class TestSizeLimit:
    """Tests for the optional constraint limit."""

    def test_limit_not_reached(self):
        chain = build_chain(box(2), max_constraints=10)
        assert len(chain) == 3

    def test_limit_exceeded(self):
        # Four upper and four lower bounds on x_1 combine into 16 constraints.
        A = [[0, 1]] * 4 + [[0, -1]] * 4
        s = ConstraintSystem.from_arrays(A, [1] * 8)
        with pytest.raises(ChainSizeLimitError):
            build_chain(s, max_constraints=15)


class TestChainStats:
    """Tests for chain_stats."""

    def test_counts(self):
        stats = chain_stats(build_chain(scenario_b()))
        assert stats.constraint_counts == [3, 2, 1]
        assert stats.total_constraints == 6
        assert stats.peak_constraints == 3
        assert stats.total_coefficients == 3 * 2 + 2 * 1 + 1 * 0

    def test_box_growth(self):
        """Each step replaces one upper/lower pair by a single 0 ≤ 2w constraint."""
        stats = chain_stats(build_chain(box(3)))
        assert stats.constraint_counts == [6, 5, 4, 3]
