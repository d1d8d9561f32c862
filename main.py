import argparse
import logging
import sys

from data.load_dataset import load_puzzle
from solvers.config import DEFAULT_METHOD, DEFAULT_TIMEOUT
from solvers.errors import MalformedPuzzleError
from solvers.master_solver import METHODS, PARTIAL, SOLVED, solve_sudoku
from utils.logging_utils import get_logger
from utils.visualize import print_sudoku


def main(argv=None):
    parser = argparse.ArgumentParser(description="Resolve Sudokus with a blink of an eye")
    parser.add_argument('-f', '--file', type=str, required=True,
                        help='Unresolved sudoku: digits 1-9 and "." for blanks, 81 cells')
    parser.add_argument('--method', type=str, choices=METHODS, default=DEFAULT_METHOD)
    parser.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT,
                        help='Give up the search after this many seconds (0 = never)')
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args(argv)

    get_logger(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        grid = load_puzzle(args.file)
    except (OSError, MalformedPuzzleError) as e:
        print(f"❌ Failed to load puzzle: {e}", file=sys.stderr)
        return 2

    original = grid.values().copy()
    print("Preview:")
    print_sudoku(grid, color=sys.stdout.isatty())

    result = solve_sudoku(grid, method=args.method, timeout=args.timeout)

    if result.solved:
        print(f"\n🎉 Solved in {result.duration_ms / 1000:.4f} sec!")
    elif result.status == PARTIAL:
        print(f"\n🧩 {result.message}")
    else:
        print(f"\n💀 {result.status}: {result.message}", file=sys.stderr)
    print_sudoku(result.grid, original=original, color=sys.stdout.isatty())

    return 0 if result.status in (SOLVED, PARTIAL) else 1


if __name__ == "__main__":
    sys.exit(main())
