"""
Абстрактный сценарий анализа.

Сценарий определяет:
  - сеть (узлы и линии)
  - возмущение рабочей точки
  - временной диапазон
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from core.perturbation import Perturbation
from network.grid import PowerGrid


class Scenario(ABC):
    """Базовый класс сценария"""

    @abstractmethod
    def name(self) -> str:
        """Имя сценария для логов и графиков"""
        ...

    @abstractmethod
    def build_grid(self) -> PowerGrid:
        """Сеть данного сценария"""
        ...

    def perturbation(self) -> Optional[Perturbation]:
        """Возмущение рабочей точки (None - без возмущения)"""
        return None

    @abstractmethod
    def t_span(self) -> tuple[float, float]:
        """Временной диапазон (t_start, t_end)"""
        ...

    def describe(self) -> str:
        """Подробное описание сценария"""
        return self.name()
