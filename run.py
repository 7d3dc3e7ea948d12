"""CLI entrypoint: load a batch of Sudoku grids, solve each one, and report the sum."""

import argparse
import csv
import os
import re
import time
from pathlib import Path

from tqdm import tqdm

from solver import puzzle_sum, solve_puzzle
from src.sudoku.grid import Sudoku
from src.sudoku.loader import load_puzzles
from src.utils.trace import Tracer

DEFAULT_DATA_PATH = "data/sudoku.txt"
PUZZLE_SUFFIXES = [".txt", ".json", ".jsonl", ".csv", ".parquet"]


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Solve a batch of 9x9 Sudoku grids by backtracking")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=Path(os.environ.get("SUDOKU_DATA_PATH", DEFAULT_DATA_PATH)),
        help="Path to a puzzle file or directory of puzzle files (default: $SUDOKU_DATA_PATH)",
    )
    parser.add_argument("--limit", type=non_negative_int, default=None, help="Only solve the first N puzzles")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results CSV")
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Optional directory for per-puzzle solver traces (one CSV per grid).",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--quiet", action="store_true", help="Only print the final answer and runtime")
    return parser.parse_args(argv)


def collect_puzzles(input_path: Path) -> list[dict]:
    puzzles: list[dict] = []
    if input_path.is_file():
        puzzles = load_puzzles(str(input_path))
    elif input_path.is_dir():
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")
    return puzzles


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "solved", "grid", "leading", "placements", "backtracks", "elapsed_ms"])

        for r in results:
            writer.writerow([
                r["id"],
                r["solved"],
                r["grid"],
                r["leading"],
                r["placements"],
                r["backtracks"],
                f"{r['elapsed_ms']:.3f}",
            ])


def trace_path(trace_dir: Path, puzzle_id: str) -> Path:
    """One file per puzzle, named after its id with anything but word characters, '.' and '-' replaced."""
    name = re.sub(r"[^\w.-]", "_", puzzle_id).strip(".") or "puzzle"
    return trace_dir / f"{name}.csv"


def solve_one(puzzle: dict, tracer: Tracer) -> tuple[dict, Sudoku | None]:
    start = time.perf_counter()
    solution = solve_puzzle(puzzle, tracer)
    elapsed_ms = (time.perf_counter() - start) * 1000
    summary = tracer.summary()
    result = {
        "id": puzzle.get("id", "unknown"),
        "solved": solution is not None,
        "grid": solution.to_string() if solution is not None else "",
        "leading": solution.leading_number() if solution is not None else 0,
        "placements": summary["num_placements"],
        "backtracks": summary["num_backtracks"],
        "elapsed_ms": elapsed_ms,
    }
    return result, solution


def main(argv=None):
    args = parse_args(argv)
    t1 = time.perf_counter()

    puzzles = collect_puzzles(args.input)
    if args.limit is not None:
        puzzles = puzzles[:args.limit]

    iterator = tqdm(puzzles, desc="Solving", unit="grid") if args.progress else puzzles
    echo = tqdm.write if args.progress else print
    # Step counts are only reported through the results CSV and trace files.
    tracing = bool(args.trace_dir or args.output)

    results = []
    solutions = []
    for number, puzzle in enumerate(iterator, start=1):
        puzzle_id = puzzle.get("id", "unknown")
        tracer = Tracer(enabled=tracing)

        try:
            result, solution = solve_one(puzzle, tracer)
        except Exception as e:
            echo(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "solved": False,
                "grid": "",
                "leading": 0,
                "placements": -1,
                "backtracks": -1,
                "elapsed_ms": 0.0,
            })
            continue

        results.append(result)
        solutions.append(solution)
        if solution is None and not args.quiet:
            echo(f"{puzzle_id}: no solution")
        if not args.quiet:
            echo(f"{number}: {int(result['elapsed_ms'])} ms")
        if args.trace_dir:
            tracer.to_csv(trace_path(args.trace_dir, str(puzzle_id)))

    total = puzzle_sum(solutions)
    print(f"Answer: {total}")
    if args.output:
        write_results_csv(results, args.output)
    print(f"Runtime: {int((time.perf_counter() - t1) * 1000)} ms")
    return total


if __name__ == "__main__":
    main()
