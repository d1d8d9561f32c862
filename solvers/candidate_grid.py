import numpy as np

from solvers.errors import ContradictionError, InvalidCoordinateError, InvalidDigitError
from utils.graph_utils import PEERS, is_valid_board

DIGITS = tuple(range(1, 10))

# Bit d-1 set = digit d still possible
ALL_CANDIDATES = 0x1FF

# mask -> digit for singleton masks, 0 for anything else
SINGLE_DIGIT = np.zeros(ALL_CANDIDATES + 1, dtype=np.int64)
for _d in DIGITS:
    SINGLE_DIGIT[1 << (_d - 1)] = _d

# mask -> number of candidates
CANDIDATE_COUNT = np.array(
    [bin(m).count("1") for m in range(ALL_CANDIDATES + 1)], dtype=np.int64
)


def digit_bit(value):
    return 1 << (value - 1)


def mask_digits(mask):
    return [d for d in DIGITS if mask & digit_bit(d)]


def _is_int(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def check_digit(value):
    if not _is_int(value) or not 1 <= value <= 9:
        raise InvalidDigitError(value)
    return int(value)


class CandidateGrid:
    """
    81 cells, each a set of still-possible digits kept as a 9-bit mask.

    A singleton mask means the cell is solved, an empty mask means the
    puzzle became unsatisfiable. Coordinates are 0-based with x the column
    and y the row; every accessor validates them before touching a cell.
    """

    def __init__(self, cells=None):
        if cells is None:
            self.cells = np.full(81, ALL_CANDIDATES, dtype=np.uint16)
        else:
            cells = np.asarray(cells, dtype=np.uint16).reshape(-1)
            if cells.size != 81:
                raise ValueError(f"A grid has 81 cells, got {cells.size}")
            self.cells = cells.copy()

    @classmethod
    def from_values(cls, values):
        """Build a grid from 81 digits (flat or 9x9, 0 = blank)."""
        flat = np.asarray(values).reshape(-1)
        if flat.size != 81:
            raise ValueError(f"A grid has 81 cells, got {flat.size}")

        grid = cls()
        for idx, value in enumerate(flat):
            if value:
                grid.set(idx % 9, idx // 9, int(value))
        return grid

    def _index(self, x, y):
        if not (_is_int(x) and _is_int(y) and 0 <= x < 9 and 0 <= y < 9):
            raise InvalidCoordinateError(x, y)
        return int(x) + 9 * int(y)

    # ---- reads -------------------------------------------------------------

    def get(self, x, y):
        """Solved digit of the cell, or None while it still has several candidates."""
        digit = int(SINGLE_DIGIT[self.cells[self._index(x, y)]])
        return digit or None

    def mask(self, x, y):
        return int(self.cells[self._index(x, y)])

    def candidates(self, x, y):
        return mask_digits(self.mask(x, y))

    def count(self, x, y):
        return int(CANDIDATE_COUNT[self.cells[self._index(x, y)]])

    def values(self):
        """9x9 board of solved digits indexed [y, x], 0 where undetermined."""
        return SINGLE_DIGIT[self.cells].reshape(9, 9)

    def solved_count(self):
        return int(np.count_nonzero(CANDIDATE_COUNT[self.cells] == 1))

    def total_candidates(self):
        return int(CANDIDATE_COUNT[self.cells].sum())

    def is_solved(self):
        return self.solved_count() == 81 and self.is_consistent()

    def is_consistent(self):
        """No unit holds the same solved digit twice and no cell is empty."""
        if np.any(self.cells == 0):
            return False
        return is_valid_board(SINGLE_DIGIT[self.cells])

    def possible(self, x, y, value):
        """True iff no peer of (x, y) is solved to `value`. Never mutates the grid."""
        idx = self._index(x, y)
        value = check_digit(value)
        return not np.any(SINGLE_DIGIT[self.cells[PEERS[idx]]] == value)

    # ---- writes ------------------------------------------------------------

    def set(self, x, y, value):
        """Collapse the cell to exactly {value}."""
        idx = self._index(x, y)
        self.cells[idx] = digit_bit(check_digit(value))

    def unset(self, x, y, value):
        """
        Remove `value` from the cell's candidates.

        Returns True when the removal left a single candidate, so the caller
        can queue that cell for propagation. Removing a digit that is already
        gone is a no-op and returns False.
        """
        idx = self._index(x, y)
        bit = digit_bit(check_digit(value))
        mask = int(self.cells[idx])
        if not mask & bit:
            return False

        mask &= ~bit
        self.cells[idx] = mask
        if mask == 0:
            raise ContradictionError(
                f"No candidates left at ({x}, {y}) after removing {value}",
                x=x, y=y, value=value,
            )
        return mask & (mask - 1) == 0

    def restore(self, x, y, mask):
        """Put back a previously saved candidate mask (undo of `set`)."""
        idx = self._index(x, y)
        if not 0 <= mask <= ALL_CANDIDATES:
            raise ValueError(f"Invalid candidate mask: {mask!r}")
        self.cells[idx] = mask

    # ---- misc --------------------------------------------------------------

    def copy(self):
        return CandidateGrid(self.cells)

    def __eq__(self, other):
        if not isinstance(other, CandidateGrid):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    __hash__ = None

    def __str__(self):
        return "".join(str(d) if d else "." for d in SINGLE_DIGIT[self.cells])

    def __repr__(self):
        return f"CandidateGrid('{self}')"
