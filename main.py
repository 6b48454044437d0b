"""
Analyze an example grid: operating point search from several initial
guesses, eigenvalue check, perturbation and time integration.
"""
from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from analysis import (
    check_eigenvalues,
    find_operating_point,
    find_operating_point_sparse,
    initial_guess,
)
from core.errors import OperationPointError
from plotting import plot_operating_points, plot_trajectories
from scenarios import SwingRingScenario, ThreeBusScenario
from simulation import SimulationBuilder
from solvers import ScipySolver, SolverConfig

SCENARIOS = {
    "three_bus": ThreeBusScenario,
    "swing_ring": SwingRingScenario,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Operating point, stability and transient analysis of an example grid."
    )
    parser.add_argument("--scenario", choices=sorted(SCENARIOS), default="swing_ring", help="Example grid.")
    parser.add_argument("--tol", type=float, default=1e-10, help="Root solver step tolerance.")
    parser.add_argument("--method", default="Radau", choices=ScipySolver.METHODS, help="solve_ivp method.")
    parser.add_argument("--dt-out", type=float, default=1e-2, help="Output time step, s.")
    parser.add_argument("--max-step", type=float, default=5e-2, help="Max solver internal step, s.")
    parser.add_argument("--no-plot", action="store_true", help="Skip figures.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Output directory.",
    )
    return parser.parse_args()


def _search(grid, tol: float) -> dict:
    """Operating points from the ones/zeros/type-specific guesses."""
    n = grid.state_size
    guesses = {
        "1": np.ones(n),
        "0": np.zeros(n),
        "mix": initial_guess(grid),
    }
    points = {}
    for label, guess in guesses.items():
        try:
            points[label] = find_operating_point(grid, ic_guess=guess, tol=tol)
        except OperationPointError as e:
            print(f"  guess '{label}': {e}")
    try:
        points["mix sp"] = find_operating_point_sparse(grid, ic_guess=guesses["mix"], tol=tol)
    except OperationPointError as e:
        print(f"  guess 'mix sp': {e}")
    return points


def main() -> None:
    args = parse_args()
    scenario = SCENARIOS[args.scenario]()
    grid = scenario.build_grid()

    print("\n")
    print(f"  {scenario.describe()}")
    print(f"  Grid: {grid.describe()}")
    print("\n")

    points = _search(grid, args.tol)
    if not points:
        raise SystemExit("No operating point found.")

    rpg = grid.rhs()
    for label, op in points.items():
        print(f"\n  Operating point '{label}':")
        check_eigenvalues(rpg, op)

    if not args.no_plot:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        plot_operating_points(
            points,
            title=scenario.name(),
            save_path=str(args.output_dir / f"{args.scenario}_operating_points.png"),
        )

    start = points["mix sp"] if "mix sp" in points else next(iter(points.values()))
    results = (
        SimulationBuilder()
        .scenario(scenario)
        .initial_state(start)
        .solver(ScipySolver(args.method, SolverConfig(dt_out=args.dt_out, max_step=args.max_step)))
        .run()
    )

    if not args.no_plot:
        plot_trajectories(
            results,
            save_path=str(args.output_dir / f"{args.scenario}_trajectories.png"),
        )


if __name__ == '__main__':
    main()
