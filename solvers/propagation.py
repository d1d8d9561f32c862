from collections import deque

import numpy as np

from solvers.candidate_grid import CANDIDATE_COUNT, SINGLE_DIGIT
from solvers.errors import ContradictionError
from utils.graph_utils import BLOCK_PEERS, BLOCKS, COLUMN_PEERS, ROW_PEERS
from utils.logging_utils import get_logger

logger = get_logger()

# shift per digit so that (mask >> SHIFTS) & 1 spreads a mask into 9 flags
SHIFTS = np.arange(9, dtype=np.uint16)


class ConstraintPropagator:
    """
    Drives row/column/block elimination and block hidden singles over a
    CandidateGrid, in place.

    Collapsed cells wait in a queue instead of recursing: settling a cell
    discards its digit from its 24 unit peers (20 distinct cells), and every
    peer that collapses in turn is queued. When the queue runs dry the
    blocks are scanned for hidden singles, which feed the queue again. The
    loop stops when neither produces anything new; every step removes at
    least one candidate, so it always ends.
    """

    def __init__(self, grid):
        self.grid = grid
        # cells whose digit has already been discarded from all peers
        self._settled = np.zeros(81, dtype=bool)
        self._pending = deque()
        self.assignments = 0
        self.eliminations = 0
        self.hidden_singles = 0

    def solve(self):
        """
        Propagate every cell that is already a singleton.

        Returns True when the grid ends fully solved, False when propagation
        stalls with cells still holding several candidates (a partial
        solution, not an error). Raises ContradictionError if the puzzle
        turns out unsatisfiable.
        """
        solved_before = self.grid.solved_count()
        counts = CANDIDATE_COUNT[self.grid.cells]
        if np.any(counts == 0):
            idx = int(np.flatnonzero(counts == 0)[0])
            raise ContradictionError(
                f"No candidates at ({idx % 9}, {idx // 9})", x=idx % 9, y=idx // 9
            )

        self._pending.extend(int(i) for i in np.flatnonzero(counts == 1))
        self._run()

        solved = self.grid.is_solved()
        logger.debug(
            "Propagation done: %d -> %d/81 solved (%d eliminations, %d hidden singles)",
            solved_before, self.grid.solved_count(), self.eliminations, self.hidden_singles,
        )
        return solved

    def assign(self, x, y, value):
        """Set (x, y) to `value` and propagate the consequences."""
        self.grid.set(x, y, value)
        idx = x + 9 * y
        self._settled[idx] = False
        self._pending.append(idx)
        self._run()

    def checkpoint(self):
        return self.grid.cells.copy(), self._settled.copy()

    def rollback(self, state):
        cells, settled = state
        self.grid.cells[:] = cells
        self._settled[:] = settled
        self._pending.clear()

    def _run(self):
        while True:
            while self._pending:
                self._settle(self._pending.popleft())
            if not self._assign_hidden_single():
                break

    def _settle(self, idx):
        if self._settled[idx]:
            return

        value = int(SINGLE_DIGIT[self.grid.cells[idx]])
        self._settled[idx] = True
        self.assignments += 1

        # Row, column and block peers; the block repeats 4 of them, harmless
        for peers in (ROW_PEERS, COLUMN_PEERS, BLOCK_PEERS):
            for peer in peers[idx]:
                peer = int(peer)
                before = int(self.grid.cells[peer])
                collapsed = self.grid.unset(peer % 9, peer // 9, value)
                if before != int(self.grid.cells[peer]):
                    self.eliminations += 1
                if collapsed:
                    self._pending.append(peer)

    def _assign_hidden_single(self):
        """
        Find one block digit with a single possible cell that is not solved
        yet, assign it and queue it. Returns False when there is none.
        """
        cells = self.grid.cells
        # (block, cell, digit) -> 1 if that cell still admits the digit
        flags = (cells[BLOCKS][:, :, None] >> SHIFTS) & 1
        holders = flags.sum(axis=1)

        if np.any(holders == 0):
            block, digit = (int(v) for v in np.argwhere(holders == 0)[0])
            raise ContradictionError(
                f"Digit {digit + 1} has no place left in block {block}", value=digit + 1
            )

        for block, digit in np.argwhere(holders == 1):
            idx = int(BLOCKS[block, np.argmax(flags[block, :, digit])])
            if CANDIDATE_COUNT[cells[idx]] > 1:
                x, y = idx % 9, idx // 9
                self.grid.set(x, y, int(digit) + 1)
                self._settled[idx] = False
                self._pending.append(idx)
                self.hidden_singles += 1
                return True

        return False


def propagate_constraints(grid):
    """
    Run the propagator over `grid` in place.
    returns: True if solved, False if stuck (cells with several candidates left)
    """
    return ConstraintPropagator(grid).solve()
