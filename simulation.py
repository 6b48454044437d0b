"""
SimulationBuilder - time integration of perturbed grid trajectories.

Fluent API for configuration and run:

    results = (
        SimulationBuilder(grid)
        .initial_state(operating_point)
        .perturbation(Perturbation(1, "ω", Inc(0.1)))
        .solver(ScipySolver(method="Radau"))
        .time_span(0.0, 10.0)
        .run()
    )

A singular mass matrix is handled by ReducedODE: only the differential
variables are integrated, the algebraic ones are solved for at every
RHS evaluation.
"""
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from analysis.operating_point import find_operating_point
from core.errors import OperationPointError
from core.perturbation import Perturbation
from core.results import SimulationResults
from core.state import State
from network.dae import ReducedODE
from network.grid import PowerGrid
from scenarios.base import Scenario
from solvers.base import Solver, SolverConfig
from solvers.nonlinear import NonlinearSolver
from solvers.scipy_solver import ScipySolver, output_grid


class SimulationBuilder:
    """
    Grid simulation builder.

    Collects configuration and runs calculation with .run().
    """

    def __init__(self, grid: Optional[PowerGrid] = None):
        self._grid = grid
        self._state: Optional[State] = None
        self._perturbation: Optional[Perturbation] = None
        self._solver: Optional[Solver] = None
        self._solver_config: Optional[SolverConfig] = None
        self._root_solver: Optional[NonlinearSolver] = None
        self._t_span: Optional[tuple[float, float]] = None
        self._scenario: Optional[Scenario] = None
        self._params: Any = None

    # ------------------------------------------------------------------
    # Fluent API
    # ------------------------------------------------------------------

    def grid(self, grid: PowerGrid) -> SimulationBuilder:
        """Choose grid"""
        self._grid = grid
        return self

    def initial_state(self, state) -> SimulationBuilder:
        """Start from a State or a raw state vector"""
        self._state = state
        return self

    def perturbation(self, perturbation: Perturbation) -> SimulationBuilder:
        """Perturb the initial state before integration"""
        self._perturbation = perturbation
        return self

    def solver(self, solver: Solver) -> SimulationBuilder:
        """Choose numerical solver"""
        self._solver = solver
        return self

    def solver_config(self, config: SolverConfig) -> SimulationBuilder:
        """Set solver configuration"""
        self._solver_config = config
        return self

    def root_solver(self, solver: NonlinearSolver) -> SimulationBuilder:
        """Choose solver for the algebraic constraints"""
        self._root_solver = solver
        return self

    def time_span(self, t_start: float, t_end: float) -> SimulationBuilder:
        self._t_span = (t_start, t_end)
        return self

    def scenario(self, scenario: Scenario) -> SimulationBuilder:
        """Choose simulation scenario"""
        self._scenario = scenario
        return self

    def params(self, params: Any) -> SimulationBuilder:
        """Node control inputs passed to the vector field"""
        self._params = params
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, verbose: bool = True) -> SimulationResults:
        """Build the vector field and integrate."""
        solver = self._resolve_solver()
        grid, state, t_span = self._resolve_setup(solver)
        scenario_name = self._scenario.name() if self._scenario else "Custom"

        field = grid.rhs()
        reduced = ReducedODE(field, state.vec, p=self._params, root_solver=self._root_solver)

        if verbose:
            print("\n")
            print(f"  {scenario_name}")
            print(f"  Grid: {grid.describe()}")
            print(f"  Solver: {solver.describe()}")
            if self._perturbation is not None:
                print(f"  Perturbation: {self._perturbation.describe()}")
            print(f"  t = [{t_span[0]:.2f}, {t_span[1]:.2f}] s")
            print("\n")

        if reduced.n_diff == 0:
            # Purely algebraic grid: the state only follows the constraints
            t = output_grid(t_span, float(solver.config.dt_out))
            y = reduced.expand(t, np.zeros((0, len(t))))
        else:
            t, y_diff, ok, msg = solver.solve(reduced, state.vec[reduced.diff], t_span)
            if not ok:
                raise RuntimeError(f"Solver failed: {msg}")
            y = reduced.expand(t, y_diff)

        if verbose:
            print(f"  Solution obtained. Points: {len(t)}")

        results = SimulationResults.from_solver_output(
            t=t, y=y, grid=grid,
            scenario_name=scenario_name,
            solver_name=solver.describe(),
        )
        results.extra["initial_state"] = state
        results.extra["perturbation"] = self._perturbation
        results.extra["rhs"] = field

        if verbose:
            print(f"\n{results.summary()}")
            print("\n")

        return results

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resolve_solver(self) -> Solver:
        if self._solver is None:
            cfg = self._solver_config or SolverConfig()
            self._solver = ScipySolver(method="RK45", config=cfg)
        elif self._solver_config is not None:
            self._solver.config = self._solver_config
        return self._solver

    def _resolve_setup(self, solver: Solver) -> tuple[PowerGrid, State, tuple[float, float]]:
        grid = self._grid
        if grid is None:
            if self._scenario is None:
                raise ValueError("Grid is required. Call .grid(...) or .scenario(...)")
            grid = self._scenario.build_grid()

        if self._state is None:
            state = find_operating_point(grid)
        elif isinstance(self._state, State):
            state = self._state
        else:
            state = State(grid, self._state)

        perturbation = self._perturbation
        if perturbation is None and self._scenario is not None:
            perturbation = self._scenario.perturbation()
            self._perturbation = perturbation
        if perturbation is not None:
            state = perturbation(state)

        if self._t_span is not None:
            t_span = self._t_span
        elif self._scenario is not None:
            t_span = self._scenario.t_span()
        else:
            t_span = (0.0, solver.config.t_end)

        return grid, state, t_span


def find_steady_state(
    grid: PowerGrid,
    state,
    window: float = 10.0,
    max_windows: int = 10,
    abstol: float = 1e-8,
    solver: Optional[Solver] = None,
) -> State:
    """
    Integrate window by window until max |dx/dt| over the differential
    variables drops below abstol.
    """
    solver = solver or ScipySolver(method="Radau")
    field = grid.rhs()
    diff = field.differential_vars()
    current = state if isinstance(state, State) else State(grid, state)
    t0 = 0.0

    for _ in range(max_windows):
        if np.max(np.abs(field.rhs(current.vec)[diff]), initial=0.0) < abstol:
            return current
        results = (
            SimulationBuilder(grid)
            .initial_state(current)
            .solver(solver)
            .time_span(t0, t0 + window)
            .run(verbose=False)
        )
        current = results.final_state
        t0 += window

    if np.max(np.abs(field.rhs(current.vec)[diff]), initial=0.0) < abstol:
        return current
    raise OperationPointError(
        f"Steady state not reached after {max_windows} windows of {window} s"
    )
