import numpy as np

# Cells are numbered 0..80 row-major: index = x + 9 * y (x = column, y = row)
ROWS = np.arange(81).reshape(9, 9)
COLUMNS = ROWS.T.copy()
BLOCKS = np.array([
    [(3 * (b // 3) + i // 3) * 9 + 3 * (b % 3) + i % 3 for i in range(9)]
    for b in range(9)
])


def get_sudoku_edges():
    """
    Generate the static edge index for a 9x9 Sudoku graph.
    Nodes are indexed 0 to 80 (row-major).
    Edges represent constraints: same row, same col, same 3x3 block.
    """
    edges = set()

    for i in range(81):
        row, col = i // 9, i % 9
        block_row, block_col = row // 3, col // 3

        for j in range(81):
            if i == j: continue

            r, c = j // 9, j % 9
            br, bc = r // 3, c // 3

            is_same_row = (row == r)
            is_same_col = (col == c)
            is_same_block = (block_row == br) and (block_col == bc)

            if is_same_row or is_same_col or is_same_block:
                edges.add((i, j))
                edges.add((j, i))

    # [2, num_edges], sorted so that the peers of a node come out in index order
    return np.array(sorted(edges), dtype=np.int64).T.copy()


def _unit_peers(units):
    peers = np.zeros((81, 8), dtype=np.int64)
    for unit in units:
        for cell in unit:
            peers[cell] = unit[unit != cell]
    return peers


ROW_PEERS = _unit_peers(ROWS)
COLUMN_PEERS = _unit_peers(COLUMNS)
BLOCK_PEERS = _unit_peers(BLOCKS)

# 27 units: rows, then columns, then blocks
UNITS = np.concatenate([ROWS, COLUMNS, BLOCKS])

_edges = get_sudoku_edges()
# Each node has exactly 20 peers: 8 in its row, 8 in its column, 4 more in its block
PEERS = _edges[1].reshape(81, 20)
del _edges


def board_from_string(board_str):
    """
    Convert a string of 81 digits (e.g., "53007...") to a flat numpy array.
    0 or '.' represents an empty cell.
    """
    if isinstance(board_str, str):
        data = [0 if c == '.' else int(c) for c in board_str.strip()]
    else:
        data = list(board_str)

    board = np.array(data, dtype=np.int64)
    if board.size != 81:
        raise ValueError(f"Expected 81 cells, got {board.size}")
    return board


def is_valid_board(board):
    """No row, column or block holds the same non-zero digit twice."""
    flat = np.asarray(board).reshape(-1)
    for units in (ROWS, COLUMNS, BLOCKS):
        for unit in units:
            digits = flat[unit]
            digits = digits[digits != 0]
            if len(digits) != len(np.unique(digits)):
                return False
    return True


def is_complete_solution(board):
    """Every row, column and block holds each of 1..9 exactly once."""
    flat = np.asarray(board).reshape(-1)
    if flat.size != 81:
        return False
    expected = np.arange(1, 10)
    for units in (ROWS, COLUMNS, BLOCKS):
        for unit in units:
            if not np.array_equal(np.sort(flat[unit]), expected):
                return False
    return True
