"""
Сеть с внешним регулятором.

Закон управления control(u, p, t, *args) вычисляется на каждом вызове
векторного поля, и его выход подставляется вместо p в разомкнутую систему.
Собственного состояния регулятора здесь нет: память регулятора
передаётся через p или через внешние переменные вызывающего кода.
"""
from __future__ import annotations

from typing import Any, Callable

import numpy as np

from .assembler import NetworkAssembler, VectorField
from .grid import PowerGrid


class ControlledPowerGrid:
    """Узлы и линии сети + закон управления controller(u, p, t)"""

    def __init__(self, control: Callable[..., Any], grid: PowerGrid, *args):
        self.graph = grid.topology
        self.nodes = grid.nodes
        self.lines = grid.lines
        self.controller = lambda u, p, t: control(u, p, t, *args)

    @property
    def open_loop_grid(self) -> PowerGrid:
        return PowerGrid(self.nodes, self.lines)

    def rhs(self, parallel: bool = False) -> VectorField:
        open_loop = NetworkAssembler(self.open_loop_grid, parallel=parallel).build_vector_field()

        def closed_loop(dx: np.ndarray, x: np.ndarray, p: Any, t: float) -> None:
            p_cont = self.controller(x, p, t)
            open_loop(dx, x, p_cont, t)

        return VectorField(
            closed_loop,
            mass_matrix=open_loop.mass_matrix,
            syms=open_loop.syms,
            grid=open_loop.grid,
        )
