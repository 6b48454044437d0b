"""
Сеть: упорядоченные узлы, линии и топология.

Позиция узла в списке - его идентификатор. Смещения узлов в глобальном
векторе состояния назначаются один раз при создании сети.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from core.errors import DimensionError
from lines.base import LineModel, neighbors_of
from nodes.algebraic import SlackAlgebraic
from nodes.base import NodeModel


class GridTopology:
    """
    Граф сети: линия k соединяет узлы edges[k] = (source, destination).
    """

    def __init__(self, n_nodes: int, edges: Sequence[tuple[int, int]]):
        self._n_nodes = n_nodes
        self._edges = tuple((int(s), int(d)) for s, d in edges)
        for k, (s, d) in enumerate(self._edges):
            for n in (s, d):
                if not 0 <= n < n_nodes:
                    raise DimensionError(
                        f"Line {k} references node {n}, "
                        f"grid has {n_nodes} nodes"
                    )
        self._incident: list[list[int]] = [[] for _ in range(n_nodes)]
        for k, (s, d) in enumerate(self._edges):
            self._incident[s].append(k)
            if d != s:
                self._incident[d].append(k)

    @classmethod
    def from_lines(cls, n_nodes: int, lines: Sequence[LineModel]) -> GridTopology:
        return cls(n_nodes, [neighbors_of(line) for line in lines])

    @property
    def n_nodes(self) -> int:
        return self._n_nodes

    @property
    def edges(self) -> tuple[tuple[int, int], ...]:
        return self._edges

    def neighbors_of(self, k: int) -> tuple[int, int]:
        """Концы линии k"""
        return self._edges[k]

    def incident_lines(self, n: int) -> list[int]:
        """Индексы линий, подключённых к узлу n"""
        return list(self._incident[n])

    def adjacent_nodes(self, n: int) -> set[int]:
        """Соседи узла n (без самого узла)"""
        result = set()
        for k in self._incident[n]:
            s, d = self._edges[k]
            result.add(d if s == n else s)
        result.discard(n)
        return result


class PowerGrid:
    """
    Энергосистема: узлы + статические линии.

    Раскладка глобального вектора состояния:
        [node_0 vars] [node_1 vars] ... [node_N-1 vars]
    """

    def __init__(self, nodes: Sequence[NodeModel], lines: Sequence[LineModel]):
        self._nodes = tuple(nodes)
        self._lines = tuple(lines)
        self._topology = GridTopology.from_lines(len(self._nodes), self._lines)

        offsets = []
        offset = 0
        for node in self._nodes:
            offsets.append(offset)
            offset += node.dimension
        self._offsets = tuple(offsets)
        self._state_size = offset

    @property
    def nodes(self) -> tuple[NodeModel, ...]:
        return self._nodes

    @property
    def lines(self) -> tuple[LineModel, ...]:
        return self._lines

    @property
    def topology(self) -> GridTopology:
        return self._topology

    @property
    def n_nodes(self) -> int:
        return len(self._nodes)

    @property
    def state_size(self) -> int:
        """Размерность глобального вектора состояния"""
        return self._state_size

    @property
    def offsets(self) -> tuple[int, ...]:
        return self._offsets

    def node_slice(self, n: int) -> slice:
        """Диапазон переменных узла n в глобальном векторе"""
        start = self._offsets[n]
        return slice(start, start + self._nodes[n].dimension)

    @property
    def syms(self) -> list[str]:
        """Имена переменных вида '<symbol>_<n>' в порядке вектора состояния"""
        return [
            f"{sym}_{n}"
            for n, node in enumerate(self._nodes)
            for sym in node.symbols
        ]

    def mass_diagonal(self) -> np.ndarray:
        """Диагональ матрицы масс: 1 - дифференциальная, 0 - алгебраическая"""
        flags = [flag for node in self._nodes for flag in node.mass_flags]
        return np.asarray(flags, dtype=float)

    def slack_indices(self) -> list[int]:
        return [n for n, node in enumerate(self._nodes) if isinstance(node, SlackAlgebraic)]

    def check_state(self, vec) -> np.ndarray:
        """Привести вектор к float и проверить длину"""
        vec = np.asarray(vec, dtype=float)
        if vec.shape != (self._state_size,):
            raise DimensionError(
                f"State vector has shape {vec.shape}, "
                f"expected ({self._state_size},)"
            )
        return vec

    def rhs(self, parallel: bool = False):
        """Собрать векторное поле сети (см. NetworkAssembler)"""
        from .assembler import NetworkAssembler
        return NetworkAssembler(self, parallel=parallel).build_vector_field()

    def describe(self) -> str:
        counts: dict[str, int] = {}
        for node in self._nodes:
            counts[node.type_tag] = counts.get(node.type_tag, 0) + 1
        kinds = ", ".join(f"{tag} x{c}" for tag, c in counts.items())
        return (
            f"{self.n_nodes} nodes ({kinds}), {len(self._lines)} lines, "
            f"{self._state_size} variables"
        )
