"""
Smoke tests for figures.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from analysis import find_operating_point
from core import SimulationResults
from plotting import plot_operating_points, plot_trajectories


class TestPlots:
    """Test that figures are built and saved."""

    def test_operating_points(self, three_bus_grid, tmp_path):
        """Test the voltage scatter is written to disk."""
        op = find_operating_point(three_bus_grid)
        path = tmp_path / "ops.png"
        fig = plot_operating_points({"mix": op}, save_path=str(path))
        assert path.exists()
        assert len(fig.axes[0].collections) == 1

    def test_trajectories(self, ring_grid, tmp_path):
        """Test frequency curves exist only for swing nodes."""
        op = find_operating_point(ring_grid)
        t = np.linspace(0.0, 1.0, 3)
        res = SimulationResults.from_solver_output(t, np.tile(op.vec[:, None], (1, 3)), ring_grid, "ring")
        fig = plot_trajectories(res, save_path=str(tmp_path / "traj.png"))
        assert len(fig.axes[0].lines) == 5
        assert len(fig.axes[1].lines) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
