"""
Начальное приближение для поиска рабочей точки.

Напряжения всех узлов приравниваются напряжению первого балансирующего
узла, остальные переменные (частота, угол) - нулю. Для каждого типа узла
функция приближения берётся из реестра GUESS_REGISTRY, по умолчанию -
generic_guess.
"""
from __future__ import annotations

import warnings
from typing import Callable, Optional

import numpy as np

from nodes.algebraic import SlackAlgebraic
from nodes.base import NodeModel, VOLTAGE_SYMBOLS

GuessFunc = Callable[[NodeModel, complex], np.ndarray]

GUESS_REGISTRY: dict[type, GuessFunc] = {}

# Напряжение плоского старта, если в сети нет балансирующего узла
FLAT_START_VOLTAGE = 1.0 + 0.0j


def register_guess(node_cls: type) -> Callable[[GuessFunc], GuessFunc]:
    """Декоратор: зарегистрировать функцию приближения для типа узла"""
    def decorator(func: GuessFunc) -> GuessFunc:
        GUESS_REGISTRY[node_cls] = func
        return func
    return decorator


def generic_guess(node: NodeModel, slack_voltage: complex) -> np.ndarray:
    """[Re U_slack, Im U_slack, 0, ..., 0]"""
    if tuple(node.symbols[:2]) != VOLTAGE_SYMBOLS:
        raise TypeError(f"{node.type_tag} does not start with voltage variables")
    guess = np.zeros(node.dimension)
    guess[0] = slack_voltage.real
    guess[1] = slack_voltage.imag
    return guess


@register_guess(SlackAlgebraic)
def slack_guess(node: SlackAlgebraic, slack_voltage: complex) -> np.ndarray:
    U = complex(node.U)
    if U != slack_voltage:
        raise AssertionError(
            f"Slack voltage {U} differs from the reference slack voltage {slack_voltage}"
        )
    return np.array([U.real, U.imag])


def guess_for(node: NodeModel, slack_voltage: complex) -> np.ndarray:
    """Приближение для одного узла по ближайшему зарегистрированному типу"""
    for cls in type(node).__mro__:
        func = GUESS_REGISTRY.get(cls)
        if func is not None:
            return func(node, slack_voltage)
    return generic_guess(node, slack_voltage)


def reference_voltage(grid, warn: bool = True) -> complex:
    """Напряжение первого балансирующего узла"""
    slacks = grid.slack_indices()
    if not slacks:
        if warn:
            warnings.warn(
                "There is no slack bus in the system to balance powers.",
                UserWarning,
                stacklevel=3,
            )
        return FLAT_START_VOLTAGE
    return complex(grid.nodes[slacks[0]].U)


def initial_guess(grid, slack_voltage: Optional[complex] = None) -> np.ndarray:
    """
    Типовое начальное приближение, узлы в порядке сети.

    slack_voltage: опорное напряжение, если оно уже определено вызывающим кодом
    """
    if slack_voltage is None:
        slack_voltage = reference_voltage(grid)
    parts = [guess_for(node, slack_voltage) for node in grid.nodes]
    if not parts:
        return np.zeros(0)
    return np.concatenate(parts)
