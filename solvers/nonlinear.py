"""
Решатели нелинейных систем F(x) = 0.

    ScipyRootSolver    - scipy.optimize.root, якобиан считается внутри
                         решателя или передаётся плотным
    SparseNewtonSolver - метод Ньютона с разреженным якобианом (spsolve)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from scipy import sparse
from scipy.optimize import root
from scipy.sparse.linalg import spsolve

from .base import RootSolverConfig


@dataclass
class RootResult:
    """Результат поиска корня"""
    x: np.ndarray
    converged: bool
    n_iter: int = 0
    message: str = ""


class NonlinearSolver(ABC):
    """Базовый класс решателя F(x) = 0"""

    def __init__(self, config: Optional[RootSolverConfig] = None):
        self.config = config or RootSolverConfig()

    @abstractmethod
    def solve(
        self,
        residual: Callable[[np.ndarray], np.ndarray],
        x0: np.ndarray,
        jacobian: Optional[Callable[[np.ndarray], object]] = None,
    ) -> RootResult:
        ...

    @abstractmethod
    def describe(self) -> str:
        ...


def _dense(J) -> np.ndarray:
    return J.toarray() if sparse.issparse(J) else np.asarray(J, dtype=float)


class ScipyRootSolver(NonlinearSolver):
    """
    Обёртка над scipy.optimize.root.

    Для hybr/lm допуск передаётся как xtol (относительный шаг),
    для остальных методов - как tol.
    """

    XTOL_METHODS = ("hybr", "lm")

    def solve(self, residual, x0, jacobian=None) -> RootResult:
        x0 = np.asarray(x0, dtype=float)
        if x0.size == 0:
            return RootResult(x0.copy(), True, 0, "empty system")

        method = self.config.method
        jac = None
        if jacobian is not None:
            jac = lambda x: _dense(jacobian(x))

        if method in self.XTOL_METHODS:
            sol = root(residual, x0, jac=jac, method=method,
                       options={"xtol": self.config.xtol})
        else:
            sol = root(residual, x0, jac=jac, method=method,
                       tol=self.config.xtol)

        n_iter = int(sol.get("nit", sol.get("nfev", 0)))
        return RootResult(np.asarray(sol.x, dtype=float), bool(sol.success),
                          n_iter, str(sol.message))

    def describe(self) -> str:
        return f"scipy.optimize.root ({self.config.method}), xtol={self.config.xtol}"


class SparseNewtonSolver(NonlinearSolver):
    """
    Метод Ньютона: J(x) dx = -F(x).

    Сходимость: ‖dx‖∞ < xtol или ‖F‖∞ < ftol.
    """

    def solve(self, residual, x0, jacobian=None) -> RootResult:
        if jacobian is None:
            raise ValueError("SparseNewtonSolver requires a Jacobian callback")
        x = np.array(x0, dtype=float)
        if x.size == 0:
            return RootResult(x, True, 0, "empty system")

        cfg = self.config
        for k in range(cfg.max_iter):
            F = np.asarray(residual(x), dtype=float)
            if not np.all(np.isfinite(F)):
                return RootResult(x, False, k, "residual is not finite")
            if np.max(np.abs(F)) < cfg.ftol:
                return RootResult(x, True, k, "residual below ftol")

            J = jacobian(x)
            if sparse.issparse(J):
                dx = spsolve(sparse.csc_matrix(J), -F)
            else:
                try:
                    dx = np.linalg.solve(np.asarray(J, dtype=float), -F)
                except np.linalg.LinAlgError as e:
                    return RootResult(x, False, k, f"linear solve failed: {e}")
            dx = np.atleast_1d(dx)
            if not np.all(np.isfinite(dx)):
                return RootResult(x, False, k, "singular Jacobian")

            x = x + dx
            if np.max(np.abs(dx)) < cfg.xtol:
                return RootResult(x, True, k + 1, "step below xtol")

        return RootResult(x, False, cfg.max_iter,
                          f"no convergence in {cfg.max_iter} iterations")

    def describe(self) -> str:
        return (
            f"Sparse Newton, xtol={self.config.xtol}, "
            f"ftol={self.config.ftol}, max_iter={self.config.max_iter}"
        )
