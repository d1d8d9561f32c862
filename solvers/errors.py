class SudokuError(Exception):
    """Base class for every error raised by the solvers."""


class MalformedPuzzleError(SudokuError, ValueError):
    """Puzzle text does not decode to exactly 81 cells."""


class InvalidCoordinateError(SudokuError, IndexError):
    def __init__(self, x, y):
        super().__init__(f"Unknown position: ({x}, {y})")
        self.x = x
        self.y = y


class InvalidDigitError(SudokuError, ValueError):
    def __init__(self, value):
        super().__init__(f"Digit out of range 1..9: {value!r}")
        self.value = value


class ContradictionError(SudokuError):
    """
    A cell ran out of candidates (or a block has no room left for a digit).
    The puzzle as given cannot be satisfied.
    """

    def __init__(self, message, x=None, y=None, value=None):
        super().__init__(message)
        self.x = x
        self.y = y
        self.value = value


class UnsolvableError(SudokuError):
    """Backtracking exhausted every branch without completing the grid."""


class SearchTimeoutError(SudokuError):
    def __init__(self, steps, elapsed):
        super().__init__(f"Search budget exceeded after {steps} steps ({elapsed:.3f} sec)")
        self.steps = steps
        self.elapsed = elapsed
