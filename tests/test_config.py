"""
Tests for configuration module.
"""

import pytest
from fourier_motzkin import config


class TestTolerances:
    """Test numerical defaults."""

    def test_terminal_decision_is_exact(self):
        """The zero-variable feasibility decision uses no slack by default."""
        assert config.TERMINAL_TOLERANCE == 0.0

    def test_verify_tolerance_small_positive(self):
        assert 0 < config.VERIFY_TOLERANCE < 1e-6

    def test_mpmath_precision_exceeds_double(self):
        """Extended precision must exceed float64's ~16 digits."""
        assert config.MPMATH_PRECISION > 16


class TestOutputFormat:
    """Test output constants."""

    def test_prefix(self):
        assert config.INFEASIBLE_PREFIX == "empty"

    def test_precision(self):
        """Matches the default of six significant digits."""
        assert config.OUTPUT_PRECISION == 6

    def test_no_default_limit(self):
        """Constraint growth is not capped unless requested."""
        assert config.MAX_CONSTRAINTS is None


class TestRelativeSlack:
    """Test the relative_slack helper."""

    def test_small_magnitudes_absolute(self):
        assert config.relative_slack(1e-9, 0.5) == 1e-9

    def test_large_magnitudes_relative(self):
        assert config.relative_slack(1e-9, -1e6) == pytest.approx(1e-3)
