import time

import numpy as np

from solvers.backtracking import check_priority, digit_priority
from solvers.candidate_grid import CANDIDATE_COUNT, digit_bit
from solvers.config import TIMEOUT_CHECK_INTERVAL
from solvers.errors import ContradictionError, SearchTimeoutError, UnsolvableError
from solvers.propagation import ConstraintPropagator
from utils.logging_utils import get_logger

logger = get_logger()


class HybridSolver:
    """
    Propagation first, search only where it stalls.

    At each level the most constrained unresolved cell is picked, its
    candidates are tried in priority order, and every trial is propagated
    before going deeper. A contradiction rolls the grid back to the
    checkpoint taken before the trial.
    """

    def __init__(self, grid, priority=None, timeout=0.0):
        self.grid = grid
        # Trial order comes from the givens, before propagation fills anything in
        if priority is None:
            priority = digit_priority(grid.values().flat)
        self.priority = check_priority(priority)
        self.timeout = timeout
        self.propagator = ConstraintPropagator(grid)
        self.steps = 0
        self._start_time = 0.0

    def solve(self):
        self._start_time = time.time()
        self.steps = 0

        # A contradiction here means the givens themselves are inconsistent
        if self.propagator.solve():
            return self.grid

        if not self._recursive_hybrid_solve():
            raise UnsolvableError(f"No solution found after {self.steps} steps")

        logger.debug("Hybrid search solved in %d steps", self.steps)
        return self.grid

    def _pick_cell(self):
        counts = CANDIDATE_COUNT[self.grid.cells]
        open_cells = np.flatnonzero(counts > 1)
        if len(open_cells) == 0:
            return None
        return int(open_cells[np.argmin(counts[open_cells])])

    def _recursive_hybrid_solve(self):
        self.steps += 1
        if self.timeout > 0 and self.steps % TIMEOUT_CHECK_INTERVAL == 0:
            elapsed = time.time() - self._start_time
            if elapsed > self.timeout:
                raise SearchTimeoutError(self.steps, elapsed)

        idx = self._pick_cell()
        if idx is None:
            return self.grid.is_solved()

        x, y = idx % 9, idx // 9
        mask = int(self.grid.cells[idx])
        state = self.propagator.checkpoint()

        for value in self.priority:
            if not mask & digit_bit(value):
                continue
            try:
                self.propagator.assign(x, y, value)
                if self._recursive_hybrid_solve():
                    return True
            except ContradictionError:
                pass  # dead end
            # Backtrack
            self.propagator.rollback(state)

        return False


def solve_hybrid(grid, priority=None, timeout=0.0):
    return HybridSolver(grid, priority=priority, timeout=timeout).solve()
