"""
Сценарий: кольцо из пяти узлов с двумя генераторами SwingEqLVS.

Сеть задаётся таблицей (тег типа, параметры) и собирается через create_node.
"""
from __future__ import annotations

from typing import Optional

from core.perturbation import Inc, Perturbation
from lines.static import StaticLine
from network.grid import PowerGrid
from nodes.base import create_node
from .base import Scenario

NODE_TABLE = [
    ("SlackAlgebraic", {"U": 1.0 + 0.0j}),
    ("SwingEqLVS", {"H": 5.0, "P": 0.4, "D": 0.5, "Omega": 50.0, "Gamma": 2.0, "V": 1.0}),
    ("PQAlgebraic", {"P": -0.5, "Q": -0.1}),
    ("SwingEqLVS", {"H": 4.0, "P": 0.3, "D": 0.5, "Omega": 50.0, "Gamma": 2.0, "V": 1.0}),
    ("PQAlgebraic", {"P": -0.4, "Q": -0.1}),
]

LINE_IMPEDANCE = 0.02 + 0.2j


class SwingRingScenario(Scenario):
    """Кольцо slack - ген - нагрузка - ген - нагрузка, возмущение частоты"""

    def __init__(
        self,
        t_end: float = 10.0,
        perturbed_node: int = 1,
        delta_omega: float = 0.1,
    ):
        self.t_end = t_end
        self.perturbed_node = perturbed_node
        self.delta_omega = delta_omega

    def name(self) -> str:
        return "КОЛЬЦО 5 УЗЛОВ: 2 x SwingEqLVS"

    def build_grid(self) -> PowerGrid:
        nodes = [create_node(tag, **params) for tag, params in NODE_TABLE]
        n = len(nodes)
        lines = [
            StaticLine(source=k, destination=(k + 1) % n, Y=1.0 / LINE_IMPEDANCE)
            for k in range(n)
        ]
        return PowerGrid(nodes, lines)

    def perturbation(self) -> Optional[Perturbation]:
        return Perturbation(self.perturbed_node, "ω", Inc(self.delta_omega))

    def t_span(self) -> tuple[float, float]:
        return (0.0, self.t_end)

    def describe(self) -> str:
        return (
            f"{self.name()}: Δω = {self.delta_omega:+.2f} "
            f"в узле {self.perturbed_node}, t_end = {self.t_end:.1f} с"
        )
