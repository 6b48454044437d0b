"""
Типовые статические линии: простая проводимость, П-схема, трансформатор.
"""
from __future__ import annotations

from dataclasses import dataclass

from .base import LineModel


@dataclass(frozen=True)
class StaticLine(LineModel):
    """Продольная проводимость Y между двумя узлами"""

    source: int
    destination: int
    Y: complex

    def currents(self, u_src, u_dst):
        i = self.Y * (u_src - u_dst)
        return i, -i


@dataclass(frozen=True)
class PiModelLine(LineModel):
    """
    П-схема замещения линии.

    y          - продольная проводимость
    y_shunt_km - поперечная проводимость со стороны source
    y_shunt_mk - поперечная проводимость со стороны destination
    """

    source: int
    destination: int
    y: complex
    y_shunt_km: complex = 0.0
    y_shunt_mk: complex = 0.0

    def currents(self, u_src, u_dst):
        i = self.y * (u_src - u_dst)
        return i + self.y_shunt_km * u_src, -i + self.y_shunt_mk * u_dst


@dataclass(frozen=True)
class Transformer(LineModel):
    """
    Идеальный трансформатор с коэффициентом t_ratio на стороне source
    и последовательной проводимостью y на стороне destination.
    """

    source: int
    destination: int
    y: complex
    t_ratio: float = 1.0

    def currents(self, u_src, u_dst):
        t = self.t_ratio
        i_dst = self.y * (u_dst - u_src / t)
        return -i_dst / t, i_dst
