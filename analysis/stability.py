"""
Локальная устойчивость по спектру линеаризованной системы.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from network.assembler import VectorField
from solvers.jacobian import field_jacobian


@dataclass
class StabilityConfig:
    """Параметры проверки устойчивости"""
    atol: float = 1e-8


def spectrum(field: VectorField, vec: np.ndarray) -> np.ndarray:
    """Собственные значения J pinv(M) M в точке vec"""
    J = field_jacobian(field, vec)
    M = np.asarray(field.mass_matrix, dtype=float)
    return np.linalg.eigvals(J @ np.linalg.pinv(M) @ M)


def is_stable(max_eig: float, atol: float = 1e-8) -> bool:
    # Вердикт: max Re λ ≈ 0 в пределах atol, а не max Re λ <= 0
    return bool(abs(max_eig) <= atol)


def check_eigenvalues(
    field,
    state,
    config: Optional[StabilityConfig] = None,
    verbose: bool = True,
) -> tuple[float, float]:
    """
    (min Re λ, max Re λ) спектра линеаризации.

    field: VectorField или сеть с методом rhs()
    state: State или вектор состояния
    """
    cfg = config or StabilityConfig()
    if not isinstance(field, VectorField):
        field = field.rhs()
    vec = np.asarray(state, dtype=float)

    lam = spectrum(field, vec).real
    lo, hi = float(np.min(lam)), float(np.max(lam))
    if verbose:
        print(
            "Jacobian spectrum \n"
            f"min : {lo}\n"
            f"max : {hi}\n"
            f"stable : {is_stable(hi, cfg.atol)}"
        )
    return lo, hi
