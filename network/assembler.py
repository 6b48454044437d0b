"""
Сетевой ассемблер: собирает глобальное векторное поле из узлов и линий.

Порядок вычисления на каждом вызове:
    1. токи всех линий по текущим напряжениям концов (линии статические)
    2. суммарный ток каждого узла - сумма токов инцидентных линий
       в порядке номеров линий
    3. локальная производная каждого узла по его состоянию и току

Узлы и линии не разделяют изменяемых промежуточных данных, поэтому
шаги 1 и 3 можно выполнять параллельно. Суммирование шага 2
всегда последовательное, результат не зависит от режима.
"""
from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

import numpy as np

from core.errors import DimensionError
from .grid import PowerGrid


class VectorField:
    """
    Векторное поле сети f!(dx, x, p, t) вместе с матрицей масс
    и именами переменных.
    """

    def __init__(
        self,
        f: Callable[[np.ndarray, np.ndarray, Any, float], None],
        mass_matrix: np.ndarray,
        syms: list[str],
        grid=None,
    ):
        self.f = f
        self.mass_matrix = mass_matrix
        self.syms = list(syms)
        self.grid = grid

    def __call__(self, dx: np.ndarray, x: np.ndarray, p: Any, t: float) -> None:
        self.f(dx, x, p, t)

    @property
    def size(self) -> int:
        return len(self.syms)

    def rhs(self, x: np.ndarray, p: Any = None, t: float = 0.0) -> np.ndarray:
        """Вычислить производную в новом массиве"""
        x = np.asarray(x, dtype=float)
        dx = np.zeros_like(x)
        self.f(dx, x, p, t)
        return dx

    def differential_vars(self) -> np.ndarray:
        return np.diag(np.asarray(self.mass_matrix)) == 1

    def ode_rhs(self, p: Any = None) -> Callable[[float, np.ndarray], np.ndarray]:
        """Функция rhs(t, y) -> dydt для solve_ivp"""
        def rhs(t: float, y: np.ndarray) -> np.ndarray:
            return self.rhs(y, p, t)
        return rhs


class NetworkAssembler:
    """
    Собирает векторное поле и матрицу масс из PowerGrid.
    """

    def __init__(
        self,
        grid: PowerGrid,
        parallel: bool = False,
        max_workers: Optional[int] = None,
    ):
        self._grid = grid
        self._parallel = parallel
        self._max_workers = max_workers
        self._slices = [grid.node_slice(n) for n in range(grid.n_nodes)]
        self._edges = grid.topology.edges

    @property
    def grid(self) -> PowerGrid:
        return self._grid

    def mass_matrix(self) -> np.ndarray:
        """Диагональная (возможно вырожденная) матрица масс"""
        return np.diag(self._grid.mass_diagonal())

    def node_params(self, p: Any) -> list[Any]:
        """
        Разложить управляющие параметры по узлам.

        p: None, последовательность длины n_nodes или словарь {узел: значение}
        """
        n_nodes = self._grid.n_nodes
        if p is None:
            return [None] * n_nodes
        if isinstance(p, Mapping):
            return [p.get(n) for n in range(n_nodes)]
        p = list(p)
        if len(p) != n_nodes:
            raise DimensionError(
                f"Got {len(p)} node parameters for {n_nodes} nodes"
            )
        return p

    def _map(self, func, items) -> list:
        if self._parallel and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                return list(pool.map(func, items))
        return [func(item) for item in items]

    def voltages(self, x: np.ndarray) -> np.ndarray:
        return np.array([complex(x[s.start], x[s.start + 1]) for s in self._slices])

    def line_currents(self, x: np.ndarray) -> list[tuple[complex, complex]]:
        """Токи (source, destination) всех линий"""
        u = self.voltages(x)
        lines = self._grid.lines

        def line_output(k: int) -> tuple[complex, complex]:
            s, d = self._edges[k]
            return lines[k].currents(u[s], u[d])

        return self._map(line_output, range(len(lines)))

    def total_currents(self, x: np.ndarray) -> np.ndarray:
        """Суммарный ток, втекающий из каждого узла в сеть"""
        i_total = np.zeros(self._grid.n_nodes, dtype=complex)
        for (s, d), (i_s, i_d) in zip(self._edges, self.line_currents(x)):
            i_total[s] += i_s
            i_total[d] += i_d
        return i_total

    def evaluate(self, dx: np.ndarray, x: np.ndarray, p: Any, t: float) -> None:
        """Записать производную в dx"""
        if len(x) != self._grid.state_size or len(dx) != self._grid.state_size:
            raise DimensionError(
                f"Expected vectors of length {self._grid.state_size}, "
                f"got x={len(x)}, dx={len(dx)}"
            )
        i_total = self.total_currents(x)
        params = self.node_params(p)
        nodes = self._grid.nodes

        def node_output(n: int) -> np.ndarray:
            sl = self._slices[n]
            return nodes[n].rhs(x[sl], i_total[n], params[n], t)

        for sl, out in zip(self._slices, self._map(node_output, range(len(nodes)))):
            dx[sl] = out

    def build_vector_field(self) -> VectorField:
        return VectorField(
            self.evaluate,
            mass_matrix=self.mass_matrix(),
            syms=self._grid.syms,
            grid=self._grid,
        )


def assemble(grid: PowerGrid, parallel: bool = False) -> tuple[VectorField, np.ndarray, list[str]]:
    """(векторное поле, матрица масс, имена переменных)"""
    field = NetworkAssembler(grid, parallel=parallel).build_vector_field()
    return field, field.mass_matrix, field.syms


def rhs(grid, parallel: bool = False) -> VectorField:
    """Векторное поле PowerGrid или ControlledPowerGrid"""
    return grid.rhs(parallel=parallel)
