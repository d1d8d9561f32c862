from conftest import EASY_PUZZLE
from main import main

EASY_DOTS = EASY_PUZZLE.replace("0", ".")


def test_solves_puzzle_file(puzzle_file, capsys):
    assert main(["--file", puzzle_file(EASY_DOTS)]) == 0
    out = capsys.readouterr().out
    assert "Preview:" in out
    assert "Solved" in out
    assert "| 5 3 4 | 6 7 8 | 9 1 2 |" in out


def test_propagation_only_may_stop_partway(puzzle_file, capsys):
    assert main(["--file", puzzle_file("." * 81), "--method", "propagate"]) == 0
    assert "stalled" in capsys.readouterr().out


def test_malformed_file(puzzle_file, capsys):
    assert main(["--file", puzzle_file(EASY_DOTS[:80])]) == 2
    assert "81 cells" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["--file", str(tmp_path / "missing.txt")]) == 2


def test_contradiction_exit_status(puzzle_file, capsys):
    puzzle = "55" + "." * 79
    assert main(["--file", puzzle_file(puzzle)]) == 1
    assert "contradiction" in capsys.readouterr().err


def test_unsolvable_exit_status(puzzle_file, capsys):
    puzzle = "12345678." + "........9" + "." * 63
    assert main(["--file", puzzle_file(puzzle), "--method", "backtrack"]) == 1
    assert "unsolvable" in capsys.readouterr().err
