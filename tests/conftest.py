"""
Shared grid fixtures.
"""

import pytest

from lines.static import StaticLine
from network.grid import PowerGrid
from nodes.algebraic import PQAlgebraic, SlackAlgebraic
from nodes.swing import SwingEq, SwingEqLVS
from scenarios.swing_ring import SwingRingScenario
from scenarios.three_bus import ThreeBusScenario


@pytest.fixture
def three_bus_grid():
    """Slack at 1+0j and two PQ loads on a line graph."""
    return ThreeBusScenario().build_grid()


@pytest.fixture
def ring_grid():
    """Five-bus ring with two SwingEqLVS generators."""
    return SwingRingScenario().build_grid()


@pytest.fixture
def single_swing_grid():
    """One isolated SwingEqLVS node without lines."""
    return PowerGrid([SwingEqLVS(H=5.0, P=0.0, D=0.1, Omega=50.0, Gamma=2.0, V=1.0)], [])


@pytest.fixture
def bare_swing_grid():
    """Grid with an unsupported SwingEq node."""
    nodes = [
        SlackAlgebraic(U=1.0),
        SwingEq(H=5.0, P=0.2, D=0.1),
        PQAlgebraic(P=-0.2, Q=0.0),
    ]
    lines = [
        StaticLine(source=0, destination=1, Y=1.0 / (0.01 + 0.1j)),
        StaticLine(source=1, destination=2, Y=1.0 / (0.01 + 0.1j)),
    ]
    return PowerGrid(nodes, lines)
