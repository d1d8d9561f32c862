# tests/conftest.py
import os
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "solvers", "utils", "data" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# No display during tests
os.environ.setdefault("MPLBACKEND", "Agg")

# Wikipedia example puzzle and its solution
EASY_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
EASY_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

# First entry of Gordon Royle's 17-clue collection
HARD_PUZZLE = "000000010400000000020000000000050407008000300001090000300400200050100000000806000"
HARD_SOLUTION = "693784512487512936125963874932651487568247391741398625319475268856129743274836159"


@pytest.fixture
def easy_grid():
    from data.load_dataset import parse_puzzle
    return parse_puzzle(EASY_PUZZLE, blanks="0")


@pytest.fixture
def hard_grid():
    from data.load_dataset import parse_puzzle
    return parse_puzzle(HARD_PUZZLE, blanks="0")


@pytest.fixture
def puzzle_file(tmp_path):
    def write(text, name="puzzle.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write
