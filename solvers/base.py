"""
Настройки численных методов и интерфейс интегратора.

Интегратор получает не полную DAE сети, а редуцированную систему
по дифференциальным переменным (network.dae.ReducedODE): алгебраические
переменные восстанавливаются внутри правой части. Поэтому достаточно
явного интерфейса dy/dt = rhs(t, y) без матрицы масс.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np


@dataclass
class SolverConfig:
    """Параметры интегрирования переходного процесса"""
    t_end: float = 10.0         # Конец интервала, если сценарий его не задал
    dt_out: float = 1e-2        # Шаг сетки вывода
    rtol: float = 1e-6
    atol: float = 1e-8
    max_step: float = 5e-2      # Ограничение шага: каждый вызов rhs решает ограничения сети


@dataclass
class RootSolverConfig:
    """Параметры поиска корня"""
    xtol: float = 1e-9          # Критерий по шагу
    ftol: float = 1e-8          # Критерий по невязке (‖F‖∞), метод Ньютона
    max_iter: int = 50          # Итерации Ньютона
    method: str = "hybr"        # Метод scipy.optimize.root


class Solver(ABC):
    """Интегратор редуцированной системы сети"""

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()

    @abstractmethod
    def solve(
        self,
        rhs: Callable[[float, np.ndarray], np.ndarray],
        y0: np.ndarray,
        t_span: tuple[float, float],
        t_eval: Optional[np.ndarray] = None,
    ) -> tuple[np.ndarray, np.ndarray, bool, str]:
        """
        Проинтегрировать дифференциальные переменные сети.

        rhs: ReducedODE или любая функция (t, x_diff) -> dx_diff/dt
        y0:  дифференциальные переменные начального состояния
        t_eval: моменты вывода, по умолчанию output_grid(t_span, dt_out)

        Возвращает (t [N], x_diff [n_diff, N], успех, сообщение).
        Полная траектория восстанавливается через ReducedODE.expand.
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Строка для отчёта о запуске"""
        ...
