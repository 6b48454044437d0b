"""Public exports for plotting helpers."""

from plotting.standard_plots import plot_operating_points, plot_trajectories

__all__ = [
    "plot_operating_points",
    "plot_trajectories",
]
