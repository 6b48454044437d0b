"""
Возмущения состояния: изменение одной переменной одного узла.

    Perturbation(2, "ω", Inc(0.1))(op) -> новое State
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .state import State


@dataclass(frozen=True)
class Inc:
    """Увеличить значение на delta"""
    delta: float

    def __call__(self, value):
        return value + self.delta


@dataclass(frozen=True)
class Dec:
    """Уменьшить значение на delta"""
    delta: float

    def __call__(self, value):
        return value - self.delta


@dataclass(frozen=True)
class Set:
    """Заменить значение"""
    value: float

    def __call__(self, value):
        return self.value


@dataclass(frozen=True)
class Perturbation:
    node: int
    symbol: str
    op: Callable

    def __call__(self, state: State) -> State:
        return state.set(self.node, self.symbol, self.op(state[self.node, self.symbol]))

    def describe(self) -> str:
        return f"node {self.node}, {self.symbol}: {self.op}"
