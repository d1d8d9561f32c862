import numpy as np

# ANSI Colors
RED = '\033[91m'   # conflict
BLUE = '\033[94m'  # filled in by the solver
RESET = '\033[0m'


def _as_board(grid):
    if hasattr(grid, 'values') and callable(grid.values):
        return np.asarray(grid.values()).reshape(9, 9)
    return np.asarray(grid).reshape(9, 9)


def get_conflict_mask(grid):
    """
    Mask (True = violation) of the cells whose digit appears more than once
    in their row, column or block.
    """
    board = _as_board(grid)
    conflict_mask = np.zeros((9, 9), dtype=bool)

    for r in range(9):
        for c in range(9):
            val = board[r, c]
            if val == 0: continue

            if np.sum(board[r, :] == val) > 1:
                conflict_mask[r, c] = True
            if np.sum(board[:, c] == val) > 1:
                conflict_mask[r, c] = True
            br, bc = r // 3, c // 3
            box = board[br*3:(br+1)*3, bc*3:(bc+1)*3]
            if np.sum(box == val) > 1:
                conflict_mask[r, c] = True

    return conflict_mask


def render_sudoku(grid, original=None, color=False):
    """
    grid: CandidateGrid or 9x9 board (0 = undetermined, shown as '.')
    original: the puzzle before solving; its blanks that are now filled get
              highlighted when color is on
    """
    board = _as_board(grid)
    given = _as_board(original) if original is not None else None
    conflicts = get_conflict_mask(board) if color else np.zeros((9, 9), dtype=bool)

    lines = ["-" * 25]
    for i in range(9):
        if i > 0 and i % 3 == 0:
            lines.append("-" * 25)
        row_str = "| "
        for j in range(9):
            if j > 0 and j % 3 == 0:
                row_str += "| "

            val = board[i, j]
            val_str = str(val) if val != 0 else "."

            is_filled = given is not None and given[i, j] == 0 and val != 0

            if color and conflicts[i, j]:
                row_str += f"{RED}{val_str}{RESET} "
            elif color and is_filled:
                row_str += f"{BLUE}{val_str}{RESET} "
            else:
                row_str += f"{val_str} "

        lines.append(row_str + "|")
    lines.append("-" * 25)
    return "\n".join(lines)


def print_sudoku(grid, original=None, color=True):
    print(render_sudoku(grid, original=original, color=color))

    if color and np.any(get_conflict_mask(grid)):
        print(f"{RED}⚠️  Conflicting digits in the grid!{RESET}")
