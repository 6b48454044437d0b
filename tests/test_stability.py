"""
Tests for the eigenvalue stability check.
"""

import numpy as np
import pytest

from analysis import StabilityConfig, check_eigenvalues, find_operating_point, is_stable, spectrum
from core.state import State


class TestStability:
    """Test spectrum extrema and verdict."""

    def test_single_swing_spectrum(self, single_swing_grid, capsys):
        """Test extrema for an isolated damped generator."""
        state = State(single_swing_grid, [1.0, 0.0, 0.0])
        lo, hi = check_eigenvalues(single_swing_grid, state)
        # -Γ по модулю напряжения, -D Ω 2π / H по частоте
        assert lo == pytest.approx(-0.1 * 50.0 * 2.0 * np.pi / 5.0, rel=1e-5)
        assert hi == pytest.approx(0.0, abs=1e-6)
        out = capsys.readouterr().out
        assert "Jacobian spectrum" in out
        assert "stable : True" in out

    def test_eigenvalues_of_field(self, single_swing_grid):
        """Test the three real eigenvalues of the linearisation."""
        lam = np.sort(spectrum(single_swing_grid.rhs(), np.array([1.0, 0.0, 0.0])).real)
        assert lam[0] == pytest.approx(-2.0 * np.pi, rel=1e-5)
        assert lam[1] == pytest.approx(-2.0, rel=1e-5)
        assert lam[2] == pytest.approx(0.0, abs=1e-6)

    def test_algebraic_grid_has_zero_spectrum(self, three_bus_grid):
        """Test the projection removes all algebraic directions."""
        op = find_operating_point(three_bus_grid)
        lo, hi = check_eigenvalues(three_bus_grid.rhs(), op, verbose=False)
        assert lo == 0.0
        assert hi == 0.0

    def test_quiet_mode(self, single_swing_grid, capsys):
        """Test verbose=False prints nothing."""
        check_eigenvalues(single_swing_grid, np.array([1.0, 0.0, 0.0]), verbose=False)
        assert capsys.readouterr().out == ""

    def test_verdict_is_closeness_to_zero(self):
        """Test the verdict only checks |max| against the tolerance."""
        assert is_stable(0.0)
        assert is_stable(-5e-9)
        assert not is_stable(-0.5)
        assert not is_stable(1e-3)
        assert is_stable(1e-3, atol=1e-2)

    def test_config_tolerance(self, single_swing_grid, capsys):
        """Test a custom tolerance reaches the printed verdict."""
        check_eigenvalues(single_swing_grid, np.array([1.0, 0.0, 0.0]),
                          config=StabilityConfig(atol=-1.0))
        assert "stable : False" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
