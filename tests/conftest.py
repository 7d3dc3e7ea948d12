import pytest

SOLVED = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

GRID_01 = (
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

GRID_01_SOLUTION = (
    "483921657"
    "967345821"
    "251876493"
    "548132976"
    "729564138"
    "136798245"
    "372689514"
    "814253769"
    "695417382"
)


def _unsolvable_grid():
    # Cells 79 and 80 can each only take an 8: column 7 and column 8 both
    # already hold a 9 and the rest of the bottom row holds 1-7.
    cells = [0] * 81
    cells[72:79] = [1, 2, 3, 4, 5, 6, 7]
    cells[7] = 9
    cells[35] = 9
    return "".join(str(v) for v in cells)


UNSOLVABLE = _unsolvable_grid()


@pytest.fixture
def grid_01_text(tmp_path):
    path = tmp_path / "sudoku.txt"
    rows = [GRID_01[i:i + 9] for i in range(0, 81, 9)]
    path.write_text("Grid 01\n" + "\n".join(rows) + "\n")
    return path
