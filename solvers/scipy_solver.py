"""
Интегратор на базе scipy.integrate.solve_ivp и сетка моментов вывода.
"""
from __future__ import annotations

from typing import Callable, Optional

import numpy as np
from scipy.integrate import solve_ivp

from .base import Solver, SolverConfig


def output_grid(t_span: tuple[float, float], dt: float) -> np.ndarray:
    """
    Равномерная сетка вывода с обязательным конечным моментом.

    Используется и для чисто алгебраических сетей, где интегрировать
    нечего и состояние просто восстанавливается в каждой точке.
    """
    t0, t1 = float(t_span[0]), float(t_span[1])
    if dt <= 0.0:
        raise ValueError(f"dt_out must be > 0, got {dt}.")
    if t1 < t0:
        raise ValueError(f"t_span must satisfy t1 >= t0, got {t_span}.")
    if abs(t1 - t0) <= 1e-15:
        return np.array([t0], dtype=float)
    n = int(np.floor((t1 - t0) / dt))
    t_eval = t0 + np.arange(n + 1, dtype=float) * dt
    if t_eval[-1] < t1:
        t_eval = np.append(t_eval, t1)
    else:
        t_eval[-1] = t1
    return t_eval


class ScipySolver(Solver):
    """
    Интегрирование ReducedODE методом solve_ivp.

    Жёсткость задают демпфирование генераторов и стабилизация напряжения,
    для длинных прогонов предпочтительны Radau или BDF. Якобиан неявные
    методы оценивают сами, каждая его колонка - отдельное решение
    алгебраических уравнений сети.
    """

    METHODS = ("RK45", "RK23", "DOP853", "Radau", "BDF", "LSODA")

    def __init__(
        self,
        method: str = "RK45",
        config: Optional[SolverConfig] = None,
    ):
        super().__init__(config)
        if method not in self.METHODS:
            raise ValueError(
                f"Unknown method '{method}'. "
                f"Available: {', '.join(self.METHODS)}"
            )
        self.method = method

    def solve(
        self,
        rhs: Callable[[float, np.ndarray], np.ndarray],
        y0: np.ndarray,
        t_span: tuple[float, float],
        t_eval: Optional[np.ndarray] = None,
    ) -> tuple[np.ndarray, np.ndarray, bool, str]:
        cfg = self.config
        if t_eval is None:
            t_eval = output_grid(t_span, float(cfg.dt_out))

        sol = solve_ivp(
            rhs,
            t_span,
            np.asarray(y0, dtype=float),
            method=self.method,
            t_eval=t_eval,
            rtol=cfg.rtol,
            atol=cfg.atol,
            max_step=cfg.max_step,
        )
        return sol.t, sol.y, bool(sol.success), str(sol.message)

    def describe(self) -> str:
        cfg = self.config
        return (
            f"solve_ivp {self.method} по дифференциальным переменным "
            f"(rtol={cfg.rtol}, atol={cfg.atol}, max_step={cfg.max_step})"
        )
