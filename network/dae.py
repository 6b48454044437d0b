"""
DAE-представления векторного поля сети.

    DAEResidual  - неявная форма res = du - f(u, p, t) для неявных решателей
    ReducedODE   - полуявная форма: алгебраические переменные исключаются
                   решением g(x_d, x_a) = 0 на каждом вызове, интегрируются
                   только дифференциальные переменные
"""
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from core.errors import DimensionError, OperationPointError
from solvers.nonlinear import NonlinearSolver, ScipyRootSolver
from .assembler import VectorField
from .grid import PowerGrid


def differential_vars(obj) -> np.ndarray:
    """
    Булева маска дифференциальных переменных (диагональ матрицы масс == 1).

    obj: PowerGrid, ControlledPowerGrid или VectorField
    """
    if isinstance(obj, VectorField):
        field = obj
    else:
        field = obj.rhs()
    return np.diag(np.asarray(field.mass_matrix)) == 1


class DAEResidual:
    """Неявная форма res(res, du, u, p, t): res = du - f(u, p, t)"""

    def __init__(self, field: VectorField):
        self.field = field
        self.syms = field.syms
        self.differential_vars = field.differential_vars()

    def __call__(
        self,
        res: np.ndarray,
        du: np.ndarray,
        u: np.ndarray,
        p: Any,
        t: float,
    ) -> None:
        # буфер создаётся на каждый вызов
        expected = np.zeros(len(u), dtype=float)
        self.field(expected, u, p, t)
        res[:] = du - expected


def dae_residual(grid, parallel: bool = False) -> DAEResidual:
    return DAEResidual(grid.rhs(parallel=parallel))


class ReducedODE:
    """
    Индекс-1 редукция M dx/dt = f(x) к ОДУ по дифференциальным переменным.

    Последнее найденное значение алгебраических переменных используется
    как начальное приближение на следующем вызове. Объект принадлежит
    одному прогону интегратора.
    """

    def __init__(
        self,
        field: VectorField,
        x0: np.ndarray,
        p: Any = None,
        root_solver: Optional[NonlinearSolver] = None,
    ):
        x0 = np.asarray(x0, dtype=float)
        if x0.shape != (field.size,):
            raise DimensionError(
                f"Initial state has shape {x0.shape}, expected ({field.size},)"
            )
        self.field = field
        self.p = p
        self.diff = field.differential_vars()
        self.alg = ~self.diff
        self._root_solver = root_solver or ScipyRootSolver()
        self._x_alg = x0[self.alg].copy()

    @property
    def n_diff(self) -> int:
        return int(np.count_nonzero(self.diff))

    def full_state(self, t: float, x_diff: np.ndarray) -> np.ndarray:
        """Восстановить полный вектор, решив алгебраические уравнения"""
        x = np.zeros(self.field.size, dtype=float)
        x[self.diff] = x_diff
        if not np.any(self.alg):
            return x

        def g(x_alg: np.ndarray) -> np.ndarray:
            x[self.alg] = x_alg
            return self.field.rhs(x, self.p, t)[self.alg]

        result = self._root_solver.solve(g, self._x_alg)
        if not result.converged:
            raise OperationPointError(
                f"Algebraic constraints not satisfied at t={t:.6g}: {result.message}"
            )
        x[self.alg] = result.x
        self._x_alg = result.x.copy()
        return x

    def __call__(self, t: float, x_diff: np.ndarray) -> np.ndarray:
        x = self.full_state(t, x_diff)
        return self.field.rhs(x, self.p, t)[self.diff]

    def expand(self, t: np.ndarray, y_diff: np.ndarray) -> np.ndarray:
        """Траектория дифференциальных переменных [n_diff, N] -> полная [n, N]"""
        y = np.zeros((self.field.size, len(t)), dtype=float)
        for k in range(len(t)):
            y[:, k] = self.full_state(t[k], y_diff[:, k])
        return y
