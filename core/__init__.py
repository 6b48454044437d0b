from .errors import GridError, DimensionError, OperationPointError, UnsupportedNodeTypeError
from .state import State, OperatingPoint, total_current
from .perturbation import Perturbation, Inc, Dec, Set
from .results import SimulationResults

__all__ = [
    "GridError",
    "DimensionError",
    "OperationPointError",
    "UnsupportedNodeTypeError",
    "State",
    "OperatingPoint",
    "total_current",
    "Perturbation",
    "Inc",
    "Dec",
    "Set",
    "SimulationResults",
]
