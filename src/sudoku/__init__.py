"""Sudoku grid model, backtracking search, and puzzle loading."""

from .grid import Sudoku, empty_cells_of
from .solver_core import solve
from .loader import load_puzzles

__all__ = [
    "Sudoku",
    "empty_cells_of",
    "solve",
    "load_puzzles",
]
