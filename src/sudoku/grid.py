"""Grid model: 81 cell values plus the stack of cells still to be decided."""

from dataclasses import dataclass, field
from typing import Iterable, List

SIZE = 9
NUM_CELLS = SIZE * SIZE

# Bits 1..9 set; bit 0 stands for the blank value and is never a legal move.
ALL_DIGITS = 0b1111111110


def row_of(cell: int) -> int:
    return cell // SIZE


def col_of(cell: int) -> int:
    return cell % SIZE


def box_origin(cell: int) -> int:
    """Index of the upper-left cell of the 3x3 box containing `cell`."""
    return (row_of(cell) // 3) * 27 + (col_of(cell) // 3) * 3


def empty_cells_of(grid: Iterable[int]) -> List[int]:
    return [i for i, value in enumerate(grid) if value == 0]


@dataclass
class Sudoku:
    """
    A 9x9 grid stored row-major (index = row * 9 + col), 0 meaning blank.
    `empty_cells` lists the blank indices and is used as a stack by the search.
    """

    grid: List[int]
    empty_cells: List[int] = field(default_factory=list)

    @classmethod
    def from_digits(cls, digits: Iterable[int]) -> "Sudoku":
        grid = [int(d) for d in digits]
        if len(grid) != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} cells, got {len(grid)}")
        for value in grid:
            if not 0 <= value <= 9:
                raise ValueError(f"Cell value out of range: {value}")
        return cls(grid=grid, empty_cells=empty_cells_of(grid))

    @classmethod
    def from_string(cls, text: str) -> "Sudoku":
        digits = "".join(text.split())
        if not digits.isdigit():
            raise ValueError(f"Puzzle must contain only digits 0-9: {text!r}")
        return cls.from_digits(int(c) for c in digits)

    def row(self, r: int) -> List[int]:
        return self.grid[r * SIZE:(r + 1) * SIZE]

    def column(self, c: int) -> List[int]:
        return self.grid[c::SIZE]

    def box(self, cell: int) -> List[int]:
        origin = box_origin(cell)
        return [self.grid[origin + i * SIZE + j] for i in range(3) for j in range(3)]

    def used_digits(self, cell: int) -> int:
        """Bitmask of the digits present in the cell's row, column and box."""
        grid = self.grid
        used = 0
        row = row_of(cell)
        for i in range(row * SIZE, (row + 1) * SIZE):
            used |= 1 << grid[i]
        for i in range(col_of(cell), NUM_CELLS, SIZE):
            used |= 1 << grid[i]
        origin = box_origin(cell)
        for i in range(3):
            for j in range(3):
                used |= 1 << grid[origin + i * SIZE + j]
        return used

    def legal_moves(self, cell: int) -> List[int]:
        """Digits that can be placed in `cell` without breaking a unit, ascending."""
        free = ~self.used_digits(cell) & ALL_DIGITS
        return [d for d in range(1, SIZE + 1) if free >> d & 1]

    def is_complete(self) -> bool:
        return not self.empty_cells and all(self.grid)

    def is_consistent(self) -> bool:
        """Check that no unit holds the same non-zero digit twice."""
        units = [self.row(r) for r in range(SIZE)]
        units += [self.column(c) for c in range(SIZE)]
        units += [self.box(origin) for origin in (0, 3, 6, 27, 30, 33, 54, 57, 60)]
        for unit in units:
            placed = [v for v in unit if v]
            if len(placed) != len(set(placed)):
                return False
        return True

    def leading_number(self) -> int:
        """The three-digit number formed by the first three cells of the top row."""
        return self.grid[0] * 100 + self.grid[1] * 10 + self.grid[2]

    def to_string(self) -> str:
        return "".join(str(v) for v in self.grid)

    def __str__(self) -> str:
        lines = []
        for r in range(SIZE):
            if r and r % 3 == 0:
                lines.append("------+-------+------")
            row = [str(v) if v else "." for v in self.row(r)]
            lines.append(" | ".join(" ".join(row[c:c + 3]) for c in (0, 3, 6)))
        return "\n".join(lines)
