"""
Генераторные узлы на основе уравнения качаний.

Вектор состояния узла: [u_r, u_i, ω], все переменные дифференциальные.
ω - отклонение частоты от номинальной, Ω - номинальная частота, Гц.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .base import NodeModel, voltage, split, power_offset


@dataclass(frozen=True)
class SwingEq(NodeModel):
    """
    Уравнение качаний без стабилизации напряжения.

    Модуль напряжения ничем не фиксирован, поэтому рабочая точка
    не изолирована - поиск рабочей точки для этого типа не поддерживается.
    """

    H: float
    P: float
    D: float
    Omega: float = 50.0

    symbols = ("u_r", "u_i", "ω")
    mass_flags = (1, 1, 1)
    supports_operating_point = False

    @property
    def Omega_H(self) -> float:
        return self.Omega * 2 * np.pi / self.H

    def rhs(self, x, i, p, t):
        u = voltage(x)
        omega = x[2]
        p_el = (u * np.conj(i)).real
        du = u * 1j * omega
        domega = (self.P + power_offset(p) - self.D * omega - p_el) * self.Omega_H
        return np.array([*split(du), domega])


@dataclass(frozen=True)
class SwingEqLVS(NodeModel):
    """
    Уравнение качаний со стабилизацией модуля напряжения (LVS).

    Член -Γ (|u| - V) u/|u| притягивает модуль напряжения к V.
    """

    H: float
    P: float
    D: float
    Omega: float = 50.0
    Gamma: float = 2.0
    V: float = 1.0

    symbols = ("u_r", "u_i", "ω")
    mass_flags = (1, 1, 1)

    @property
    def Omega_H(self) -> float:
        return self.Omega * 2 * np.pi / self.H

    def rhs(self, x, i, p, t):
        u = voltage(x)
        omega = x[2]
        v = abs(u)
        p_el = (u * np.conj(i)).real
        # при u = 0 направление стабилизации не определено
        direction = u / v if v > 0.0 else 0j
        du = u * 1j * omega - direction * self.Gamma * (v - self.V)
        domega = (self.P + power_offset(p) - self.D * omega - p_el) * self.Omega_H
        return np.array([*split(du), domega])
