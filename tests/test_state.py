"""
Tests for State access, perturbations and results container.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from core import (
    DimensionError,
    Dec,
    Inc,
    Perturbation,
    Set,
    SimulationResults,
    State,
    total_current,
)


@pytest.fixture
def ring_state(ring_grid):
    x = np.zeros(ring_grid.state_size)
    for n in range(ring_grid.n_nodes):
        x[ring_grid.node_slice(n).start] = 1.0
    x[ring_grid.node_slice(3).start + 1] = 0.1
    x[ring_grid.node_slice(1).start + 2] = 0.05
    return State(ring_grid, x)


class TestState:
    """Test symbolic access to the state vector."""

    def test_wrong_length(self, three_bus_grid):
        """Test a state of wrong length is rejected."""
        with pytest.raises(DimensionError):
            State(three_bus_grid, np.ones(7))

    def test_state_is_immutable(self, ring_state):
        """Test the stored vector is read-only."""
        with pytest.raises(ValueError):
            ring_state.vec[0] = 2.0

    def test_raw_variables(self, ring_state):
        """Test access to raw node variables and aliases."""
        assert ring_state[1, "ω"] == pytest.approx(0.05)
        assert ring_state[1, "omega"] == pytest.approx(0.05)
        assert ring_state[3, "u_i"] == pytest.approx(0.1)

    def test_voltage_quantities(self, ring_state):
        """Test complex voltage, magnitude and angle."""
        assert ring_state[3, "u"] == pytest.approx(1.0 + 0.1j)
        assert ring_state[3, "v"] == pytest.approx(np.hypot(1.0, 0.1))
        assert ring_state[3, "φ"] == pytest.approx(np.arctan2(0.1, 1.0))

    def test_multi_node_access(self, ring_state):
        """Test slice and list selectors."""
        v = ring_state[:, "v"]
        assert v.shape == (5,)
        assert_allclose(ring_state[[0, 2], "v"], [1.0, 1.0])

    def test_missing_symbol(self, ring_state):
        """Test KeyError for a variable the node does not have."""
        with pytest.raises(KeyError):
            ring_state[2, "ω"]

    def test_power_is_u_conj_i(self, ring_state):
        """Test derived power and current."""
        i = total_current(ring_state, 3)
        s = ring_state[3, "s"]
        assert s == pytest.approx(ring_state[3, "u"] * np.conj(i))
        assert ring_state[3, "p"] == pytest.approx(s.real)
        assert ring_state[3, "q"] == pytest.approx(s.imag)

    def test_set_returns_new_state(self, ring_state):
        """Test set() leaves the original untouched."""
        new = ring_state.set(1, "ω", 0.2)
        assert new[1, "ω"] == pytest.approx(0.2)
        assert ring_state[1, "ω"] == pytest.approx(0.05)

    def test_set_voltage_magnitude_keeps_angle(self, ring_state):
        """Test setting |u| rescales the voltage."""
        new = ring_state.set(3, "v", 2.0)
        assert new[3, "v"] == pytest.approx(2.0)
        assert new[3, "φ"] == pytest.approx(ring_state[3, "φ"])

    def test_derived_power_cannot_be_set(self, ring_state):
        """Test that power is read-only."""
        with pytest.raises(KeyError):
            ring_state.set(2, "p", 0.0)

    def test_array_conversion(self, ring_state):
        """Test np.asarray gives a writable copy."""
        arr = np.asarray(ring_state, dtype=float)
        arr[0] = 5.0
        assert ring_state.vec[0] == 1.0


class TestPerturbation:
    """Test Inc, Dec and Set perturbations."""

    def test_inc(self, ring_state):
        """Test increment of a frequency."""
        new = Perturbation(1, "ω", Inc(0.1))(ring_state)
        assert new[1, "ω"] == pytest.approx(0.15)

    def test_dec(self, ring_state):
        """Test decrement of a voltage magnitude."""
        new = Perturbation(2, "v", Dec(0.1))(ring_state)
        assert new[2, "v"] == pytest.approx(0.9)

    def test_set(self, ring_state):
        """Test replacement of a raw variable."""
        new = Perturbation(3, "u_i", Set(0.0))(ring_state)
        assert new[3, "u_i"] == 0.0
        assert new[1, "ω"] == ring_state[1, "ω"]

    def test_describe(self):
        """Test the perturbation text."""
        assert "node 1" in Perturbation(1, "ω", Inc(0.1)).describe()


class TestSimulationResults:
    """Test trajectory container."""

    def test_series_and_final_state(self, three_bus_grid):
        """Test per-node series and final state from a trajectory."""
        t = np.linspace(0.0, 1.0, 5)
        y = np.tile(np.array([1.0, 0.0, 0.9, -0.1, 0.8, -0.2])[:, None], (1, 5))
        res = SimulationResults.from_solver_output(t, y, three_bus_grid, "three bus", "test")
        assert res.N == 5
        assert res.syms == three_bus_grid.syms
        assert_allclose(res.series(2, "u_r"), 0.8)
        assert res.final_state[1, "u"] == pytest.approx(0.9 - 0.1j)
        assert "three bus" in res.summary()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
