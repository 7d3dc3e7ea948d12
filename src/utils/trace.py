"""Tracing module: logs Sudoku search steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'place', 'backtrack', 'solution_found'
    cell: Optional[int] = None
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None
    candidates: Optional[int] = None  # Number of legal moves for the cell
    remaining: Optional[int] = None  # Empty cells left after this placement
    reason: Optional[str] = None


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, cell: Optional[int] = None, **fields: Any) -> None:
        self.step_counter += 1
        if cell is not None:
            fields["row"], fields["col"] = divmod(cell, 9)
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            cell=cell,
            **fields,
        ))

    def log_place(self, cell: int, value: int, candidates: int, remaining: int):
        """Log a tentative placement."""
        if not self.enabled:
            return
        self._record('place', cell, value=value, candidates=candidates, remaining=remaining)

    def log_backtrack(self, cell: int, reason: str = "No legal moves"):
        """Log a cell being cleared after all of its candidates failed."""
        if not self.enabled:
            return
        self._record('backtrack', cell, reason=reason)

    def log_solution_found(self, filled: int):
        """Log when the last empty cell has been filled."""
        if not self.enabled:
            return
        self._record('solution_found', reason=f"{filled} cells filled")

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'cell', 'row', 'col',
            'value', 'candidates', 'remaining', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_placements': action_counts.get('place', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'max_candidates': max((s.candidates or 0 for s in self.steps), default=0),
        }
