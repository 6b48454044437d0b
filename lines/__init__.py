from lines.base import LineModel, neighbors_of
from lines.static import StaticLine, PiModelLine, Transformer

__all__ = [
    "LineModel",
    "neighbors_of",
    "StaticLine",
    "PiModelLine",
    "Transformer",
]
