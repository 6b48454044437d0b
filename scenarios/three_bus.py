"""
Сценарий: три узла в линию, балансирующий узел и две нагрузки.

    slack(0) ---- PQ(1) ---- PQ(2)
"""
from __future__ import annotations

from lines.static import StaticLine
from network.grid import PowerGrid
from nodes.algebraic import PQAlgebraic, SlackAlgebraic
from .base import Scenario


class ThreeBusScenario(Scenario):
    """Балансирующий узел U = 1 и две PQ-нагрузки"""

    def __init__(
        self,
        U: complex = 1.0 + 0.0j,
        P_load: float = -0.2,
        Q_load: float = -0.05,
        Y: complex = 1.0 / (0.01 + 0.1j),
        t_end: float = 1.0,
    ):
        self.U = U
        self.P_load = P_load
        self.Q_load = Q_load
        self.Y = Y
        self.t_end = t_end

    def name(self) -> str:
        return "ТРИ УЗЛА: SLACK + 2 PQ"

    def build_grid(self) -> PowerGrid:
        nodes = [
            SlackAlgebraic(U=self.U),
            PQAlgebraic(P=self.P_load, Q=self.Q_load),
            PQAlgebraic(P=self.P_load, Q=self.Q_load),
        ]
        lines = [
            StaticLine(source=0, destination=1, Y=self.Y),
            StaticLine(source=1, destination=2, Y=self.Y),
        ]
        return PowerGrid(nodes, lines)

    def t_span(self) -> tuple[float, float]:
        return (0.0, self.t_end)

    def describe(self) -> str:
        return (
            f"{self.name()}: S_нагр = {self.P_load:+.2f}{self.Q_load:+.2f}j о.е., "
            f"Y = {self.Y:.3f} о.е."
        )
