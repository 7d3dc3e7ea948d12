"""Backtracking search over a Sudoku grid, mutating it in place and undoing on failure."""

from typing import Optional

from .grid import Sudoku
from src.utils.trace import Tracer


def solve(sudoku: Sudoku, tracer: Optional[Tracer] = None) -> bool:
    """
    Fill every cell in `sudoku.empty_cells` so that no unit repeats a digit.

    Cells are taken from the end of the empty-cell list and candidates are
    tried in ascending order, so the search is deterministic. On success the
    grid holds the solution; on failure it is left exactly as it was passed in.
    """
    if not sudoku.empty_cells:
        if tracer is not None:
            tracer.log_solution_found(filled=len(sudoku.grid))
        return True

    cell = sudoku.empty_cells.pop()
    moves = sudoku.legal_moves(cell)

    for value in moves:
        sudoku.grid[cell] = value
        if tracer is not None:
            tracer.log_place(
                cell=cell,
                value=value,
                candidates=len(moves),
                remaining=len(sudoku.empty_cells),
            )
        if solve(sudoku, tracer):
            return True

    sudoku.grid[cell] = 0
    sudoku.empty_cells.append(cell)
    if tracer is not None:
        reason = "No legal moves" if not moves else f"Exhausted {len(moves)} candidates"
        tracer.log_backtrack(cell, reason=reason)
    return False
