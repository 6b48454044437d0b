"""
Состояние сети: ссылка на PowerGrid + глобальный вектор состояния.

Символьный доступ:
    state[n, "u_r"]   - сырая переменная узла n
    state[n, "u"]     - комплексное напряжение
    state[n, "v"]     - модуль напряжения
    state[n, "φ"]     - угол напряжения
    state[n, "i"]     - суммарный ток, втекающий из узла в сеть
    state[n, "s"]     - мощность u·conj(i), "p" / "q" - её части
    state[:, "v"]     - то же для нескольких узлов (срез или список)

Состояние неизменяемо: set() возвращает новый объект.
"""
from __future__ import annotations

from typing import Any, Union

import numpy as np

ALIASES = {"omega": "ω", "phi": "φ"}
DERIVED = ("u", "v", "φ", "i", "s", "p", "q")

NodeSelector = Union[int, slice, list]


class State:
    """Неизменяемая пара (сеть, вектор состояния)"""

    def __init__(self, grid, vec):
        vec = grid.check_state(vec).copy()
        vec.flags.writeable = False
        self._grid = grid
        self._vec = vec

    @property
    def grid(self):
        return self._grid

    @property
    def vec(self) -> np.ndarray:
        return self._vec

    def __len__(self) -> int:
        return len(self._vec)

    def __array__(self, dtype=None, copy=None):
        return np.array(self._vec, dtype=dtype)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._grid.n_nodes} nodes, {len(self._vec)} vars)"

    # ------------------------------------------------------------------
    # Символьный доступ
    # ------------------------------------------------------------------

    def _nodes(self, n: NodeSelector) -> list[int]:
        if isinstance(n, slice):
            return list(range(self._grid.n_nodes))[n]
        return [int(k) for k in n]

    def index(self, n: int, sym: str) -> int:
        """Индекс переменной sym узла n в глобальном векторе"""
        sym = ALIASES.get(sym, sym)
        node = self._grid.nodes[n]
        if sym not in node.symbols:
            raise KeyError(f"Node {n} ({node.type_tag}) has no variable '{sym}'")
        return self._grid.node_slice(n).start + node.symbols.index(sym)

    def _currents(self) -> np.ndarray:
        from network.assembler import NetworkAssembler
        return NetworkAssembler(self._grid).total_currents(self._vec)

    def _value(self, n: int, sym: str, currents=None) -> Any:
        sym = ALIASES.get(sym, sym)
        if sym not in DERIVED:
            return self._vec[self.index(n, sym)]
        start = self._grid.node_slice(n).start
        u = complex(self._vec[start], self._vec[start + 1])
        if sym == "u":
            return u
        if sym == "v":
            return abs(u)
        if sym == "φ":
            return np.angle(u)
        i = (self._currents() if currents is None else currents)[n]
        if sym == "i":
            return i
        s = u * np.conj(i)
        return {"s": s, "p": s.real, "q": s.imag}[sym]

    def __getitem__(self, key: tuple[NodeSelector, str]):
        n, sym = key
        if isinstance(n, (int, np.integer)):
            return self._value(int(n), sym)
        currents = self._currents() if ALIASES.get(sym, sym) in ("i", "s", "p", "q") else None
        return np.array([self._value(k, sym, currents) for k in self._nodes(n)])

    def set(self, n: int, sym: str, value) -> State:
        """Новое состояние с изменённой переменной узла n"""
        sym = ALIASES.get(sym, sym)
        vec = self._vec.copy()
        start = self._grid.node_slice(n).start
        if sym in ("u", "v", "φ"):
            u = complex(vec[start], vec[start + 1])
            if sym == "v":
                u = value * np.exp(1j * np.angle(u))
            elif sym == "φ":
                u = abs(u) * np.exp(1j * value)
            else:
                u = complex(value)
            vec[start], vec[start + 1] = u.real, u.imag
        elif sym in DERIVED:
            raise KeyError(f"Variable '{sym}' is derived and cannot be set")
        else:
            vec[self.index(n, sym)] = value
        return State(self._grid, vec)


class OperatingPoint(State):
    """Состояние на многообразии ограничений, найденное решателем"""


def total_current(state: State, n: int) -> complex:
    """Суммарный ток узла n от статических линий"""
    return state[n, "i"]
