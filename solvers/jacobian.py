"""
Численный якобиан: центральные разности и разреженная структура по топологии сети.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
from scipy import sparse


def jacobian(
    f: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    rel_step: Optional[float] = None,
) -> np.ndarray:
    """
    Якобиан f в точке x центральными разностями.

    Шаг по j-й переменной: rel_step * max(1, |x_j|),
    по умолчанию rel_step = eps^(1/3).
    """
    x = np.asarray(x, dtype=float)
    h_rel = rel_step if rel_step is not None else np.finfo(float).eps ** (1.0 / 3.0)
    f0 = np.asarray(f(x), dtype=float)
    J = np.empty((f0.size, x.size), dtype=float)
    for j in range(x.size):
        h = h_rel * max(1.0, abs(x[j]))
        xp = x.copy()
        xm = x.copy()
        xp[j] += h
        xm[j] -= h
        J[:, j] = (np.asarray(f(xp), dtype=float) - np.asarray(f(xm), dtype=float)) / (xp[j] - xm[j])
    return J


def field_jacobian(field, x: np.ndarray, p: Any = None, t: float = 0.0) -> np.ndarray:
    """Якобиан векторного поля сети по состоянию"""
    return jacobian(lambda y: field.rhs(y, p, t), x)


def sparsity_pattern(grid) -> list[np.ndarray]:
    """
    Для каждой строки - отсортированные номера столбцов.

    Переменные узла зависят от переменных самого узла
    и переменных соседних узлов.
    """
    columns = []
    for n in range(grid.n_nodes):
        coupled = [n, *sorted(grid.topology.adjacent_nodes(n))]
        cols = np.sort(np.concatenate([
            np.arange(grid.node_slice(m).start, grid.node_slice(m).stop)
            for m in coupled
        ]))
        columns.extend(cols for _ in range(grid.nodes[n].dimension))
    return columns


class SparseJacobian:
    """
    Якобиан в заранее выделенной CSR-матрице.

    Структура строится один раз по топологии, при каждом вызове
    перезаписывается только matrix.data.
    """

    def __init__(self, grid, f: Callable[[np.ndarray], np.ndarray]):
        self._f = f
        n = grid.state_size
        columns = sparsity_pattern(grid)
        indptr = np.zeros(n + 1, dtype=np.int64)
        indptr[1:] = np.cumsum([len(c) for c in columns])
        indices = np.concatenate(columns).astype(np.int64) if columns else np.zeros(0, dtype=np.int64)
        data = np.zeros(len(indices), dtype=float)
        self.matrix = sparse.csr_matrix((data, indices, indptr), shape=(n, n))
        self._rows = np.repeat(np.arange(n), np.diff(indptr))
        self._cols = indices

    @property
    def nnz(self) -> int:
        return len(self._cols)

    def __call__(self, x: np.ndarray) -> sparse.csr_matrix:
        dense = jacobian(self._f, x)
        self.matrix.data[:] = dense[self._rows, self._cols]
        return self.matrix
