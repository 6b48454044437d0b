"""
Сетевая модель энергосистемы.

Узлы и линии собираются в PowerGrid, NetworkAssembler строит из неё
векторное поле с матрицей масс. DAEResidual и ReducedODE дают формы
для внешних интеграторов, ControlledPowerGrid замыкает сеть регулятором.
"""
from .grid import PowerGrid, GridTopology
from .assembler import NetworkAssembler, VectorField, assemble, rhs
from .dae import DAEResidual, ReducedODE, dae_residual, differential_vars
from .controlled import ControlledPowerGrid
