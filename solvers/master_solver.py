import time
from dataclasses import dataclass

from solvers.backtracking import BacktrackingSearch
from solvers.errors import ContradictionError, SearchTimeoutError, UnsolvableError
from solvers.hybrid import HybridSolver
from solvers.propagation import ConstraintPropagator
from utils.logging_utils import get_logger

logger = get_logger()

METHODS = ("propagate", "backtrack", "hybrid")

SOLVED = "solved"
PARTIAL = "partial"
CONTRADICTION = "contradiction"
UNSOLVABLE = "unsolvable"
TIMEOUT = "timeout"


@dataclass
class SolveResult:
    status: str
    grid: object
    duration_ms: int
    steps: int = 0
    message: str = ""

    @property
    def solved(self):
        return self.status == SOLVED


def solve_sudoku(grid, method="hybrid", timeout=0.0):
    """
    Run one engine over `grid` (mutated in place) and report the outcome.

    - propagate: elimination + hidden singles only; may stop at PARTIAL
    - backtrack: exhaustive depth-first search in digit-priority order
    - hybrid:    propagation, then search with propagation at every node
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method {method!r}, expected one of {METHODS}")

    start = time.time()
    steps = 0

    def finish(status, message):
        duration_ms = int((time.time() - start) * 1000)
        logger.info("[%s] %s in %d ms: %s", method, status, duration_ms, message)
        return SolveResult(status, grid, duration_ms, steps, message)

    try:
        if method == "propagate":
            propagator = ConstraintPropagator(grid)
            try:
                solved = propagator.solve()
            finally:
                steps = propagator.assignments
            if not solved:
                return finish(PARTIAL, f"Propagation stalled with {grid.solved_count()}/81 cells solved.")
        elif method == "backtrack":
            search = BacktrackingSearch(grid, timeout=timeout)
            try:
                search.solve()
            finally:
                steps = search.steps
        else:
            solver = HybridSolver(grid, timeout=timeout)
            try:
                solver.solve()
            finally:
                steps = solver.steps
    except ContradictionError as e:
        return finish(CONTRADICTION, str(e))
    except UnsolvableError as e:
        return finish(UNSOLVABLE, str(e))
    except SearchTimeoutError as e:
        return finish(TIMEOUT, str(e))

    return finish(SOLVED, "Solved successfully.")
