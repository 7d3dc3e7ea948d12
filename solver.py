"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a pre-built Sudoku object, an
81-digit string, or a puzzle record compatible with `src.sudoku.loader.load_puzzles`.
"""

from typing import Any, Iterable, Optional

from src.sudoku import solver_core
from src.sudoku.grid import Sudoku
from src.utils.trace import Tracer


def solve_puzzle(puzzle: Any, tracer: Optional[Tracer] = None) -> Optional[Sudoku]:
    """
    Solve a puzzle and return the filled grid, or None when no solution exists.
    Accepts:
      - Sudoku instances (solved in place)
      - 81-character digit strings, 0 marking a blank
      - Puzzle records with a "puzzle" key
    """
    if isinstance(puzzle, Sudoku):
        sudoku = puzzle
    elif isinstance(puzzle, str):
        sudoku = Sudoku.from_string(puzzle)
    elif isinstance(puzzle, dict):
        sudoku = Sudoku.from_string(str(puzzle.get("puzzle", "")))
    else:
        raise TypeError("solve_puzzle expects a Sudoku, a digit string, or a puzzle dictionary")

    if solver_core.solve(sudoku, tracer):
        return sudoku
    return None


def puzzle_sum(solutions: Iterable[Optional[Sudoku]]) -> int:
    """Sum the three leading digits of every solved grid; None marks an unsolved one."""
    return sum(s.leading_number() for s in solutions if s is not None)


__all__ = ["solve_puzzle", "puzzle_sum"]
