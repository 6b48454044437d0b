
from .base import Scenario
from .three_bus import ThreeBusScenario
from .swing_ring import SwingRingScenario

__all__ = [
    "Scenario",
    "ThreeBusScenario",
    "SwingRingScenario",
]
