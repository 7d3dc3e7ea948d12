"""Example: How to use the Tracer with the Sudoku solver.

Solves one grid with tracing enabled and writes every placement and
backtrack to a CSV file.
"""

from pathlib import Path
from typing import Optional

from solver import solve_puzzle
from src.sudoku.grid import Sudoku
from src.utils.trace import Tracer

EXAMPLE_GRID = (
    "003020600"
    "900305001"
    "001806400"
    "008102900"
    "700000008"
    "006708200"
    "002609500"
    "800203009"
    "005010300"
)


def solve_and_trace(puzzle: str, output_trace_csv: Optional[Path] = None) -> Optional[Sudoku]:
    """
    Solve a puzzle and log all steps to a trace file.

    Args:
        puzzle: 81-digit grid, 0 marking a blank
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The solved grid, or None if the puzzle has no solution
    """
    tracer = Tracer(enabled=True)
    solution = solve_puzzle(puzzle, tracer)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Solver Summary:")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Placements: {summary['num_placements']}")
    print(f"  Backtracks: {summary['num_backtracks']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Actions: {summary['action_counts']}")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return solution


if __name__ == "__main__":
    trace_output = Path("traces/example_trace.csv")
    solution = solve_and_trace(EXAMPLE_GRID, trace_output)
    print(solution if solution is not None else "No solution")
