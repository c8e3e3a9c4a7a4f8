from .graph import NEUTRAL, Cell, CellGraph, CellSpec, InvalidGraph
from .puzzle import Puzzle

__version__ = "0.1.0"

__all__ = [
    "NEUTRAL",
    "Cell",
    "CellGraph",
    "CellSpec",
    "InvalidGraph",
    "Puzzle",
]
