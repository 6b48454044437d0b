"""
Поиск рабочей точки сети.

Две формы невязки:
    RootRhs   - F(x): все производные равны нулю (истинная неподвижная точка)
    RootRhsIC - (pinv(M) M - I) F(x): остаются только алгебраические строки,
                дифференциальные переменные не ограничиваются

Два режима якобиана:
    плотный     - якобиан считает scipy.optimize.root
    разреженный - якобиан по центральным разностям в CSR-структуре по топологии
"""
from __future__ import annotations

import warnings
from typing import Optional

import numpy as np

from core.errors import OperationPointError, UnsupportedNodeTypeError
from core.state import OperatingPoint
from network.assembler import VectorField
from network.grid import PowerGrid
from solvers.base import RootSolverConfig
from solvers.jacobian import SparseJacobian
from solvers.nonlinear import NonlinearSolver, RootResult, ScipyRootSolver, SparseNewtonSolver
from .guess import initial_guess, reference_voltage

FAILED_MESSAGE = "Failed to find initial conditions on the constraint manifold!"


class RootRhs:
    """F(x) = f(x, p=None, t=0)"""

    def __init__(self, field: VectorField):
        self.field = field

    def __call__(self, x: np.ndarray) -> np.ndarray:
        return self.field.rhs(x, None, 0.0)


class RootRhsIC:
    """(pinv(M) M) F(x) - F(x)"""

    def __init__(self, field: VectorField):
        mm = field.mass_matrix
        if mm is None:
            raise ValueError("Vector field has no mass matrix")
        mm = np.asarray(mm, dtype=float)
        self.field = field
        self.mpm = np.linalg.pinv(mm) @ mm

    def __call__(self, x: np.ndarray) -> np.ndarray:
        dx = self.field.rhs(x, None, 0.0)
        return self.mpm @ dx - dx


def check_grid(grid: PowerGrid) -> None:
    """
    Предусловия поиска: отсутствие балансирующего узла - предупреждение,
    неподдерживаемый тип узла - исключение до запуска решателя.
    """
    if not grid.slack_indices():
        warnings.warn(
            "There is no slack bus in the system to balance powers. "
            "Currently not making any checks concerning assumptions of "
            "whether its possible to find the fixed point",
            UserWarning,
            stacklevel=3,
        )
    for n, node in enumerate(grid.nodes):
        if not node.supports_operating_point:
            raise UnsupportedNodeTypeError(
                f"found {node.type_tag} node (node {n}), {node.type_tag} "
                f"is not yet supported for operation point search"
            )


def _prepare(grid: PowerGrid, ic_guess) -> np.ndarray:
    check_grid(grid)
    if ic_guess is None:
        # check_grid уже предупредил об отсутствии балансирующего узла
        ic_guess = initial_guess(grid, reference_voltage(grid, warn=False))
    return grid.check_state(ic_guess)


def _solve(solver: NonlinearSolver, residual, x0: np.ndarray, jacobian=None) -> RootResult:
    """Арифметический сбой невязки - такой же отказ, как отсутствие сходимости"""
    try:
        return solver.solve(residual, x0, jacobian=jacobian)
    except (ArithmeticError, np.linalg.LinAlgError) as e:
        raise OperationPointError(FAILED_MESSAGE) from e


def find_operating_point(
    grid: PowerGrid,
    ic_guess=None,
    tol: float = 1e-9,
    solver: Optional[NonlinearSolver] = None,
    parallel: bool = False,
) -> OperatingPoint:
    """Рабочая точка F(x) = 0, якобиан внутри решателя"""
    x0 = _prepare(grid, ic_guess)
    solver = solver or ScipyRootSolver(RootSolverConfig(xtol=tol))

    result = _solve(solver, RootRhs(grid.rhs(parallel=parallel)), x0)
    if result.converged:
        return OperatingPoint(grid, result.x)
    raise OperationPointError(FAILED_MESSAGE)


def find_operating_point_sparse(
    grid: PowerGrid,
    ic_guess=None,
    tol: float = 1e-9,
    solver: Optional[NonlinearSolver] = None,
    parallel: bool = False,
) -> OperatingPoint:
    """Рабочая точка F(x) = 0 с разреженным якобианом"""
    x0 = _prepare(grid, ic_guess)
    solver = solver or SparseNewtonSolver(RootSolverConfig(xtol=tol))

    rr = RootRhs(grid.rhs(parallel=parallel))
    result = _solve(solver, rr, x0, jacobian=SparseJacobian(grid, rr))
    if result.converged:
        return OperatingPoint(grid, result.x)
    raise OperationPointError(FAILED_MESSAGE)


def find_valid_initial_condition(
    grid: PowerGrid,
    ic_guess,
    tol: float = 1e-9,
    solver: Optional[NonlinearSolver] = None,
) -> np.ndarray:
    """
    Согласованное начальное условие DAE: алгебраические строки F равны нулю,
    дифференциальные переменные свободны.
    """
    x0 = grid.check_state(ic_guess)
    solver = solver or ScipyRootSolver(RootSolverConfig(xtol=tol))

    result = solver.solve(RootRhsIC(grid.rhs()), x0)
    if result.converged:
        return result.x
    raise OperationPointError(
        f"{FAILED_MESSAGE} Try running the root solver with other options."
    )
