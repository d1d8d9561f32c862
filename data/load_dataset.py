import os

import pandas as pd

from solvers.candidate_grid import CandidateGrid
from solvers.config import DATASET_BLANKS, PUZZLE_BLANKS
from solvers.errors import MalformedPuzzleError


def parse_puzzle(text, blanks=PUZZLE_BLANKS):
    """
    Read a puzzle in row-major order: '1'-'9' are givens, any character in
    `blanks` is an empty cell, everything else (spaces, newlines, grid
    drawing) is ignored. Exactly 81 cells must come out.
    """
    values = []
    for c in text:
        if '1' <= c <= '9':
            values.append(int(c))
        elif c in blanks:
            values.append(0)

    if len(values) != 81:
        raise MalformedPuzzleError(f"Invalid puzzle format: expected 81 cells, got {len(values)}")

    return CandidateGrid.from_values(values)


def load_puzzle(path, blanks=PUZZLE_BLANKS):
    with open(path, 'r', encoding='utf-8') as f:
        return parse_puzzle(f.read(), blanks=blanks)


class SudokuDataset:
    """
    Puzzles from a CSV with 'quizzes' and 'solutions' columns of 81 digits
    each ('0' = blank), e.g. the Kaggle 1M sudoku dump.
    """

    def __init__(self, csv_path):
        self.csv_path = csv_path
        # Read as strings, otherwise pandas turns the digit columns into ints and drops leading zeros
        if csv_path and os.path.exists(csv_path):
            self.df = pd.read_csv(csv_path, dtype=str)
        else:
            raise FileNotFoundError(f"CSV file not found at {csv_path}")

        missing = {'quizzes', 'solutions'} - set(self.df.columns)
        if missing:
            raise ValueError(f"{csv_path} is missing columns: {sorted(missing)}")

    def __len__(self):
        return len(self.df)

    def __getitem__(self, idx):
        row = self.df.iloc[idx]
        return row['quizzes'], row['solutions']

    def grid(self, idx):
        quiz, _ = self[idx]
        return parse_puzzle(quiz, blanks=DATASET_BLANKS)
