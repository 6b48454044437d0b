"""
Алгебраические узлы: балансирующий, PQ и PV.

Все переменные алгебраические (масса 0): в рабочей точке
правая часть узла обращается в ноль.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .base import NodeModel, voltage, split, power_offset


@dataclass(frozen=True)
class SlackAlgebraic(NodeModel):
    """Балансирующий узел с заданным комплексным напряжением U"""

    U: complex = 1.0 + 0.0j

    symbols = ("u_r", "u_i")
    mass_flags = (0, 0)

    def rhs(self, x, i, p, t):
        return np.array(split(self.U - voltage(x)))


@dataclass(frozen=True)
class PQAlgebraic(NodeModel):
    """
    Узел с заданной мощностью S = P + jQ.

    Мощность считается отданной в сеть: у нагрузки P < 0.
    """

    P: float = 0.0
    Q: float = 0.0

    symbols = ("u_r", "u_i")
    mass_flags = (0, 0)

    def rhs(self, x, i, p, t):
        u = voltage(x)
        s = u * np.conj(i)
        S = complex(self.P + power_offset(p), self.Q)
        return np.array(split(S - s))


@dataclass(frozen=True)
class PVAlgebraic(NodeModel):
    """Узел с заданной активной мощностью P и модулем напряжения V"""

    P: float = 0.0
    V: float = 1.0

    symbols = ("u_r", "u_i")
    mass_flags = (0, 0)

    def rhs(self, x, i, p, t):
        u = voltage(x)
        s = u * np.conj(i)
        return np.array([
            self.P + power_offset(p) - s.real,
            self.V - abs(u),
        ])
