import time
from collections import Counter

from solvers.candidate_grid import ALL_CANDIDATES, DIGITS, check_digit, digit_bit
from solvers.config import TIMEOUT_CHECK_INTERVAL
from solvers.errors import SearchTimeoutError, UnsolvableError
from utils.graph_utils import PEERS, UNITS
from utils.logging_utils import get_logger

logger = get_logger()

# plain-list copies of the index tables for the per-node loops
_PEERS = PEERS.tolist()
_UNITS = UNITS.tolist()
_ROW_OF = [i // 9 for i in range(81)]
_COL_OF = [i % 9 for i in range(81)]
_BLOCK_OF = [(i // 27) * 3 + (i % 9) // 3 for i in range(81)]


def digit_priority(givens):
    """
    Trial order for the search: digits sorted by how often they appear among
    the givens (most frequent first, ties by digit), then the digits that do
    not appear at all in ascending order.

    `givens` is any iterable of digits; zeros (blanks) are skipped.
    """
    counts = Counter(check_digit(int(v)) for v in givens if v)
    ordered = sorted(counts, key=lambda d: (-counts[d], d))
    return tuple(ordered + [d for d in DIGITS if d not in counts])


def check_priority(priority):
    """Return `priority` as a tuple, rejecting anything but a permutation of 1..9."""
    order = tuple(int(d) for d in priority)
    if sorted(order) != list(DIGITS):
        raise ValueError(f"Priority must be a permutation of 1..9, got {order}")
    return order


def _dead_end(cells):
    """
    Singles-only lookahead on a scratch copy of the masks: True when naked
    or hidden singles (any unit) empty a cell or leave a digit without a
    place. Never changes `cells`.
    """
    if 0 in cells:
        return True
    cells = list(cells)
    queue = [i for i, m in enumerate(cells) if m & (m - 1) == 0]
    settled = [False] * 81

    while True:
        while queue:
            i = queue.pop()
            if settled[i]:
                continue
            settled[i] = True
            bit = cells[i]
            for p in _PEERS[i]:
                m = cells[p]
                if m & bit:
                    m &= ~bit
                    if not m:
                        return True
                    cells[p] = m
                    if m & (m - 1) == 0:
                        queue.append(p)

        for unit in _UNITS:
            seen = twice = 0
            for i in unit:
                m = cells[i]
                twice |= seen & m
                seen |= m
            if seen != ALL_CANDIDATES:
                return True
            once = seen & ~twice
            if not once:
                continue
            for i in unit:
                m = cells[i]
                hit = m & once
                if hit and m & (m - 1):
                    if hit & (hit - 1):
                        # two digits that both need this very cell
                        return True
                    cells[i] = hit
                    queue.append(i)

        if not queue:
            return False


class BacktrackingSearch:
    """
    Depth-first assignment over a CandidateGrid.

    Cells that are not singletons count as unassigned. Each level takes the
    first unassigned cell in row-major order, tries the digits in priority
    order that no peer already holds, and undoes the assignment before the
    next try. The first complete grid wins.

    Placed digits are tracked as row/column/block bitmasks, so "no peer
    holds the digit" (CandidateGrid.possible) is three bit tests. Before
    branching, a singles lookahead cuts subtrees that hold no solution;
    only empty subtrees are cut, so the grid found is the same one a plain
    search in this order would find.
    """

    def __init__(self, grid, priority=None, timeout=0.0, max_steps=0):
        self.grid = grid
        if priority is None:
            priority = digit_priority(grid.values().flat)
        self.priority = check_priority(priority)

        self.timeout = timeout
        self.max_steps = max_steps
        self.steps = 0
        self._start_time = 0.0

    def solve(self):
        """
        Fill the grid in place and return it.
        Raises UnsolvableError when no assignment exists (including givens
        that already clash) and SearchTimeoutError when the budget runs out.
        """
        if not self.grid.is_consistent():
            raise UnsolvableError("Givens conflict with each other")

        self.steps = 0
        self._start_time = time.time()

        self._cells = self.grid.cells.tolist()
        self._rows = [0] * 9
        self._cols = [0] * 9
        self._blocks = [0] * 9
        for idx, m in enumerate(self._cells):
            if m & (m - 1) == 0:
                self._place(idx, m)

        if not self._search(0):
            logger.debug("Backtracking exhausted after %d steps", self.steps)
            raise UnsolvableError(f"No solution found after {self.steps} steps")

        self.grid.cells[:] = self._cells
        logger.debug("Backtracking solved in %d steps", self.steps)
        return self.grid

    def _check_budget(self):
        if self.max_steps and self.steps > self.max_steps:
            raise SearchTimeoutError(self.steps, time.time() - self._start_time)
        # time.time() only every few thousand steps
        if self.timeout > 0 and self.steps % TIMEOUT_CHECK_INTERVAL == 0:
            elapsed = time.time() - self._start_time
            if elapsed > self.timeout:
                raise SearchTimeoutError(self.steps, elapsed)

    def _place(self, idx, bit):
        self._rows[_ROW_OF[idx]] |= bit
        self._cols[_COL_OF[idx]] |= bit
        self._blocks[_BLOCK_OF[idx]] |= bit

    def _remove(self, idx, bit):
        self._rows[_ROW_OF[idx]] &= ~bit
        self._cols[_COL_OF[idx]] &= ~bit
        self._blocks[_BLOCK_OF[idx]] &= ~bit

    def _lookahead(self):
        """Masks with every unassigned cell narrowed to the digits its peers allow."""
        cells = self._cells
        out = []
        for idx in range(81):
            m = cells[idx]
            if m & (m - 1):
                m &= ~(self._rows[_ROW_OF[idx]] | self._cols[_COL_OF[idx]] | self._blocks[_BLOCK_OF[idx]])
            out.append(m)
        return out

    def _search(self, start):
        self.steps += 1
        self._check_budget()

        cells = self._cells
        # cells before `start` are all assigned already
        idx = start
        while idx < 81 and cells[idx] & (cells[idx] - 1) == 0:
            idx += 1
        if idx == 81:
            return True

        if _dead_end(self._lookahead()):
            return False

        saved = cells[idx]
        used = self._rows[_ROW_OF[idx]] | self._cols[_COL_OF[idx]] | self._blocks[_BLOCK_OF[idx]]

        for value in self.priority:
            bit = digit_bit(value)
            if used & bit:
                continue
            cells[idx] = bit
            self._place(idx, bit)
            if self._search(idx + 1):
                return True
            self._remove(idx, bit)
            cells[idx] = saved

        return False


def solve_backtracking(grid, priority=None, timeout=0.0):
    return BacktrackingSearch(grid, priority=priority, timeout=timeout).solve()
