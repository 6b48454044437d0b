from solvers.base import Solver, SolverConfig, RootSolverConfig
from solvers.scipy_solver import ScipySolver
from solvers.nonlinear import NonlinearSolver, RootResult, ScipyRootSolver, SparseNewtonSolver
from solvers.jacobian import jacobian, field_jacobian, SparseJacobian

__all__ = [
    "Solver",
    "SolverConfig",
    "RootSolverConfig",
    "ScipySolver",
    "NonlinearSolver",
    "RootResult",
    "ScipyRootSolver",
    "SparseNewtonSolver",
    "jacobian",
    "field_jacobian",
    "SparseJacobian",
]
