import json
import os
import re
from typing import Any, Dict, List, Optional

import pandas as pd

from .grid import NUM_CELLS, Sudoku

_HEADER_ROW = re.compile(r"^\d{9}$")
_FLAT_GRID = re.compile(r"^\d{81}$")


def load_puzzles(file_path: str, validate: bool = True) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .txt, .json, .jsonl, .csv and .parquet.
    Returns a list of records {"id": ..., "puzzle": <81 digit string>}.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.endswith(".txt"):
        records = _read_text(file_path)
    elif file_path.endswith(".parquet"):
        records = pd.read_parquet(file_path).to_dict(orient="records")
    elif file_path.endswith(".csv"):
        records = pd.read_csv(file_path, dtype=str).to_dict(orient="records")
    elif file_path.endswith(".json"):
        records = _read_json(file_path)
    else:
        records = _read_jsonl(file_path)

    puzzles = []
    for index, record in enumerate(records, start=1):
        puzzles.append(_normalize_record(record, index, validate))
    return puzzles


def _default_id(index: int) -> str:
    return f"grid-{index:02d}"


def _read_text(file_path: str) -> List[Dict[str, Any]]:
    """Batch text format: a title line then nine rows of nine digits, repeated."""
    records: List[Dict[str, Any]] = []
    title: Optional[str] = None
    rows: List[str] = []

    with open(file_path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line:
                continue
            if _FLAT_GRID.match(line):
                if rows:
                    raise ValueError(f"Incomplete grid before {line!r} in {file_path}")
                records.append({"id": title, "puzzle": line})
                title = None
            elif _HEADER_ROW.match(line):
                rows.append(line)
                if len(rows) == 9:
                    records.append({"id": title, "puzzle": "".join(rows)})
                    title, rows = None, []
            else:
                if rows:
                    raise ValueError(f"Incomplete grid before {line!r} in {file_path}")
                if title is not None:
                    raise ValueError(f"No grid after {title!r} in {file_path}")
                title = line

    if rows:
        raise ValueError(f"Incomplete grid at end of {file_path}")
    if title is not None:
        raise ValueError(f"No grid after {title!r} at end of {file_path}")
    if not records:
        raise ValueError(f"No puzzles found in {file_path}")
    return records


def _read_json(file_path: str) -> List[Dict[str, Any]]:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError:
        # Some sources use ".json" but actually store JSONL.
        return _read_jsonl(file_path)
    if isinstance(payload, list):
        return [p if isinstance(p, dict) else {"puzzle": p} for p in payload]
    if isinstance(payload, dict):
        return [payload]
    return []


def _read_jsonl(file_path: str) -> List[Dict[str, Any]]:
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(obj)
            elif isinstance(obj, (str, list)):
                data.append({"puzzle": obj})
    return data


def _puzzle_text(value: Any) -> str:
    if isinstance(value, str):
        return "".join(value.split()).replace(".", "0")
    if hasattr(value, "tolist"):
        value = value.tolist()
    if isinstance(value, (list, tuple)):
        flat: List[Any] = []
        for item in value:
            if isinstance(item, (list, tuple)):
                flat.extend(item)
            else:
                flat.append(item)
        return "".join(str(int(v)) for v in flat)
    raise ValueError(f"Unsupported puzzle value: {value!r}")


def _normalize_record(record: Dict[str, Any], index: int, validate: bool) -> Dict[str, Any]:
    raw = record.get("puzzle")
    if raw is None:
        raw = record.get("quizzes")
    puzzle_id = record.get("id")
    if puzzle_id is None or (isinstance(puzzle_id, float) and pd.isna(puzzle_id)):
        puzzle_id = _default_id(index)
    puzzle_id = str(puzzle_id)

    if raw is None:
        raise ValueError(f"Puzzle {puzzle_id} has no 'puzzle' field")
    text = _puzzle_text(raw)
    if len(text) != NUM_CELLS or not text.isdigit():
        raise ValueError(f"Puzzle {puzzle_id} must be {NUM_CELLS} digits, got {text!r}")
    if validate and not Sudoku.from_string(text).is_consistent():
        raise ValueError(f"Puzzle {puzzle_id} repeats a digit in a row, column or box")

    return {"id": puzzle_id, "puzzle": text}
