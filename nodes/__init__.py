"""Public exports for node models."""

from nodes.base import NodeModel, NODE_TYPES, VOLTAGE_SYMBOLS, create_node
from nodes.algebraic import SlackAlgebraic, PQAlgebraic, PVAlgebraic
from nodes.swing import SwingEq, SwingEqLVS

__all__ = [
    "NodeModel",
    "NODE_TYPES",
    "VOLTAGE_SYMBOLS",
    "create_node",
    "SlackAlgebraic",
    "PQAlgebraic",
    "PVAlgebraic",
    "SwingEq",
    "SwingEqLVS",
]
