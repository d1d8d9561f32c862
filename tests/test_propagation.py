import pytest

from conftest import EASY_SOLUTION
from solvers.candidate_grid import CandidateGrid
from solvers.errors import ContradictionError
from solvers.propagation import ConstraintPropagator, propagate_constraints
from utils.graph_utils import is_complete_solution


def test_empty_grid_stays_open():
    grid = CandidateGrid()
    assert propagate_constraints(grid) is False
    assert grid.total_candidates() == 729


def test_easy_puzzle_is_solved_by_propagation_alone(easy_grid):
    assert propagate_constraints(easy_grid) is True
    assert str(easy_grid) == EASY_SOLUTION
    assert is_complete_solution(easy_grid.values())


def test_single_given_clears_its_peers():
    grid = CandidateGrid()
    grid.set(4, 4, 7)
    propagator = ConstraintPropagator(grid)
    propagator.solve()
    assert 7 not in grid.candidates(0, 4)
    assert 7 not in grid.candidates(4, 0)
    assert 7 not in grid.candidates(3, 3)
    assert 7 in grid.candidates(0, 0)
    assert propagator.eliminations == 20


def test_hidden_single_in_block_is_assigned():
    grid = CandidateGrid()
    # Every cell of block 0 except (0, 0) sees a 1
    grid.set(3, 1, 1)
    grid.set(6, 2, 1)
    grid.set(1, 4, 1)
    grid.set(2, 7, 1)
    assert grid.count(0, 0) == 9

    propagator = ConstraintPropagator(grid)
    assert propagator.solve() is False
    assert grid.get(0, 0) == 1
    assert propagator.hidden_singles >= 1
    assert grid.is_consistent()


def test_duplicate_givens_in_a_row_are_a_contradiction():
    grid = CandidateGrid()
    grid.set(0, 0, 5)
    grid.set(1, 0, 5)
    with pytest.raises(ContradictionError):
        propagate_constraints(grid)


def test_forced_assignment_against_a_given_is_a_contradiction():
    grid = CandidateGrid()
    grid.set(0, 0, 5)
    propagator = ConstraintPropagator(grid)
    propagator.solve()
    assert grid.possible(1, 0, 5) is False
    with pytest.raises(ContradictionError):
        propagator.assign(1, 0, 5)


def test_cell_with_no_room_is_a_contradiction():
    grid = CandidateGrid.from_values([1, 2, 3, 4, 5, 6, 7, 8, 0] + [0] * 8 + [9] + [0] * 63)
    with pytest.raises(ContradictionError):
        propagate_constraints(grid)


def test_propagation_only_shrinks_candidates(hard_grid):
    grid = hard_grid
    before = grid.total_candidates()
    propagate_constraints(grid)
    assert grid.total_candidates() <= before
    assert grid.is_consistent()


def test_checkpoint_and_rollback():
    grid = CandidateGrid()
    grid.set(4, 4, 1)
    grid.set(0, 0, 2)
    propagator = ConstraintPropagator(grid)
    propagator.solve()
    state = propagator.checkpoint()
    snapshot = grid.copy()

    x, y = next((x, y) for y in range(9) for x in range(9) if grid.count(x, y) > 1)
    try:
        propagator.assign(x, y, grid.candidates(x, y)[0])
    except ContradictionError:
        pass
    propagator.rollback(state)
    assert grid == snapshot
