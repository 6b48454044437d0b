"""
Абстрактный интерфейс узла энергосистемы.

Любой тип узла (балансирующий, нагрузка, генератор, etc.)
должен реализовать этот интерфейс
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

import numpy as np


# Первые две переменные любого узла - комплексное напряжение
VOLTAGE_SYMBOLS = ("u_r", "u_i")

# Реестр типов узлов: тег -> класс
NODE_TYPES: dict[str, type] = {}


class NodeModel(ABC):
    """
    Базовый класс узла.

    Контракт:
      - symbols                  -> имена локальных переменных, начинаются с (u_r, u_i)
      - mass_flags               -> 1 для дифференциальных, 0 для алгебраических
      - rhs(x, i, p, t)          -> локальная производная
      - supports_operating_point -> False, если поиск рабочей точки не реализован

    Узлы неизменяемы: конкретные типы объявляются как frozen dataclass.
    """

    symbols: ClassVar[tuple[str, ...]] = ()
    mass_flags: ClassVar[tuple[int, ...]] = ()
    supports_operating_point: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "symbols" not in cls.__dict__:
            return
        if tuple(cls.symbols[:2]) != VOLTAGE_SYMBOLS:
            raise TypeError(
                f"{cls.__name__}.symbols must start with {VOLTAGE_SYMBOLS}, "
                f"got {cls.symbols}"
            )
        if len(cls.mass_flags) != len(cls.symbols):
            raise TypeError(
                f"{cls.__name__}: {len(cls.mass_flags)} mass flags "
                f"for {len(cls.symbols)} symbols"
            )
        if any(flag not in (0, 1) for flag in cls.mass_flags):
            raise TypeError(f"{cls.__name__}: mass flags must be 0 or 1")
        NODE_TYPES[cls.__name__] = cls

    @property
    def type_tag(self) -> str:
        return type(self).__name__

    @property
    def dimension(self) -> int:
        return len(self.symbols)

    @property
    def differential_flags(self) -> np.ndarray:
        """Маска дифференциальных переменных узла"""
        return np.asarray(self.mass_flags, dtype=float) == 1

    @abstractmethod
    def rhs(
        self,
        x: np.ndarray,
        i: complex,
        p: Optional[Any],
        t: float,
    ) -> np.ndarray:
        """
        Локальная правая часть узла.

        Args:
            x: локальный вектор состояния [u_r, u_i, ...]
            i: суммарный ток, втекающий из узла в сеть
            p: управляющее воздействие узла (None или добавка к P)
            t: текущее время

        Returns:
            вектор длины dimension
        """
        ...


def voltage(x: np.ndarray) -> complex:
    """Комплексное напряжение из первых двух переменных узла"""
    return complex(x[0], x[1])


def split(z: complex) -> tuple[float, float]:
    """Комплексное число -> (Re, Im)"""
    return z.real, z.imag


def power_offset(p: Optional[Any]) -> float:
    """Управляющая добавка активной мощности (None -> 0)"""
    return 0.0 if p is None else float(p)


def create_node(tag: str, **params) -> NodeModel:
    """Создать узел по тегу типа из табличного описания"""
    try:
        cls = NODE_TYPES[tag]
    except KeyError:
        raise KeyError(
            f"Unknown node type '{tag}'. Known: {', '.join(sorted(NODE_TYPES))}"
        ) from None
    return cls(**params)
