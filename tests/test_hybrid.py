import pytest

from conftest import EASY_SOLUTION, HARD_SOLUTION
from solvers.candidate_grid import CandidateGrid
from solvers.errors import ContradictionError
from solvers.hybrid import HybridSolver, solve_hybrid
from solvers.master_solver import METHODS, solve_sudoku
from utils.graph_utils import is_complete_solution


def test_hard_puzzle_is_solved(hard_grid):
    solver = HybridSolver(hard_grid)
    solver.solve()
    assert str(hard_grid) == HARD_SOLUTION
    assert hard_grid.is_solved()


def test_easy_puzzle_needs_no_search(easy_grid):
    solver = HybridSolver(easy_grid)
    solver.solve()
    assert str(easy_grid) == EASY_SOLUTION
    assert solver.steps == 0


def test_empty_grid_is_completed():
    grid = solve_hybrid(CandidateGrid())
    assert is_complete_solution(grid.values())


def test_conflicting_givens_raise_contradiction():
    grid = CandidateGrid()
    grid.set(0, 0, 5)
    grid.set(1, 0, 5)
    with pytest.raises(ContradictionError):
        solve_hybrid(grid)


@pytest.mark.parametrize("method", METHODS)
def test_solve_sudoku_easy(easy_grid, method):
    result = solve_sudoku(easy_grid, method=method)
    assert result.solved
    assert result.status == "solved"
    assert str(result.grid) == EASY_SOLUTION


def test_solve_sudoku_partial():
    grid = CandidateGrid()
    grid.set(4, 4, 1)
    result = solve_sudoku(grid, method="propagate")
    assert result.status == "partial"
    assert not result.solved
    assert grid.solved_count() == 1


def test_solve_sudoku_statuses():
    conflicting = CandidateGrid()
    conflicting.set(0, 0, 5)
    conflicting.set(1, 0, 5)
    assert solve_sudoku(conflicting.copy(), method="propagate").status == "contradiction"
    assert solve_sudoku(conflicting.copy(), method="hybrid").status == "contradiction"
    assert solve_sudoku(conflicting.copy(), method="backtrack").status == "unsolvable"


def test_solve_sudoku_rejects_unknown_method(easy_grid):
    with pytest.raises(ValueError):
        solve_sudoku(easy_grid, method="guess")


@pytest.mark.parametrize("priority", [(1, 2, 3), (1, 2, 3, 4, 5, 6, 7, 8, 8)])
def test_incomplete_trial_order_is_rejected(hard_grid, priority):
    with pytest.raises(ValueError):
        HybridSolver(hard_grid, priority=priority)


def test_full_trial_order_is_accepted(hard_grid):
    solve_hybrid(hard_grid, priority=range(9, 0, -1))
    assert str(hard_grid) == HARD_SOLUTION


def test_contradiction_keeps_propagation_steps():
    grid = CandidateGrid()
    grid.set(0, 0, 5)
    grid.set(1, 0, 5)
    result = solve_sudoku(grid, method="propagate")
    assert result.status == "contradiction"
    assert result.steps == 1
