"""
Анализ сети: начальное приближение, рабочая точка, устойчивость.
"""
from .guess import initial_guess, register_guess, guess_for, GUESS_REGISTRY
from .operating_point import (
    RootRhs,
    RootRhsIC,
    check_grid,
    find_operating_point,
    find_operating_point_sparse,
    find_valid_initial_condition,
)
from .stability import StabilityConfig, check_eigenvalues, is_stable, spectrum
