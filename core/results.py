"""
Контейнер результатов моделирования.

Хранит траекторию полного вектора состояния и метаданные запуска
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from .state import State


@dataclass
class SimulationResults:
    """Результаты одного прогона моделирования"""

    # Время
    t: np.ndarray

    # Полный вектор состояния [n_vars, N]
    y: np.ndarray

    # Метаданные
    grid: Any
    scenario_name: str = ""
    solver_name: str = ""

    # Дополнительные данные (для расширения)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_solver_output(
        cls,
        t: np.ndarray,
        y: np.ndarray,
        grid,
        scenario_name: str = "",
        solver_name: str = "",
    ) -> SimulationResults:
        """Создать из массива solve_ivp-стиля (y shape = [n_vars, N])"""
        return cls(
            t=np.asarray(t, dtype=float),
            y=np.asarray(y, dtype=float),
            grid=grid,
            scenario_name=scenario_name,
            solver_name=solver_name,
        )

    @property
    def N(self) -> int:
        return len(self.t)

    @property
    def syms(self) -> list[str]:
        return self.grid.syms

    def state(self, k: int) -> State:
        """Состояние сети в k-й точке вывода"""
        return State(self.grid, self.y[:, k])

    @property
    def final_state(self) -> State:
        return self.state(self.N - 1)

    def series(self, n: int, sym: str) -> np.ndarray:
        """Временной ряд величины sym узла n"""
        return np.array([self.state(k)[n, sym] for k in range(self.N)])

    def steady_state_slice(self, fraction: float = 0.75) -> slice:
        """Срез для анализа установившегося режима (последние 25% данных)"""
        idx = int(fraction * self.N)
        return slice(idx, None)

    def summary(self) -> str:
        """Краткая сводка результатов установившегося режима"""
        ss = self.steady_state_slice()
        lines = [
            f"  Сценарий: {self.scenario_name}",
            f"  Солвер: {self.solver_name}",
            f"  Точек: {self.N}, t = [{self.t[0]:.3f} .. {self.t[-1]:.3f}] с",
        ]
        for n, node in enumerate(self.grid.nodes):
            v = self.series(n, "v")
            line = f"  Узел {n} ({node.type_tag}): |u| (уст.) = {np.mean(v[ss]):.4f} о.е."
            if "ω" in node.symbols:
                omega = self.series(n, "ω")
                line += (
                    f", ω (уст.) = {np.mean(omega[ss]):+.2e}, "
                    f"max|ω| = {np.max(np.abs(omega)):.2e}"
                )
            lines.append(line)
        return "\n".join(lines)
