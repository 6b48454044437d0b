"""
Абстрактный интерфейс статической линии.

Собственного состояния у линии нет: токи на её концах - функция
только напряжений узлов source и destination.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class LineModel(ABC):
    """
    Базовый класс статической линии.

    Конкретные линии - frozen dataclass, первые два поля которых -
    номера узлов source и destination.
    """

    source: int
    destination: int

    @abstractmethod
    def currents(self, u_src: complex, u_dst: complex) -> tuple[complex, complex]:
        """Токи, втекающие в линию со стороны (source, destination), о.е."""
        ...

    @property
    def type_tag(self) -> str:
        return type(self).__name__


def neighbors_of(line: LineModel) -> tuple[int, int]:
    """Концы линии (source, destination)"""
    return line.source, line.destination
