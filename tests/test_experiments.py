import json

import pandas as pd
import pytest

from conftest import EASY_PUZZLE, EASY_SOLUTION
from data.load_dataset import SudokuDataset
from experiments.evaluate import evaluate_benchmark, run_methods
from experiments.evaluate_hard import evaluate_hard, get_hard_samples, is_hard


@pytest.fixture
def dataset(tmp_path):
    csv_path = tmp_path / "sudoku.csv"
    pd.DataFrame({
        "quizzes": [EASY_PUZZLE, "0" * 81],
        "solutions": [EASY_SOLUTION, EASY_SOLUTION],
    }).to_csv(csv_path, index=False)
    return SudokuDataset(str(csv_path))


def test_run_methods_scores_exact_solutions(dataset):
    results = run_methods(dataset, [0])
    assert set(results) == {"propagate", "backtrack", "hybrid"}
    for stats in results.values():
        assert stats["acc"] == 100.0
        assert stats["time"] >= 0


def test_empty_puzzle_counts_as_a_miss(dataset):
    results = run_methods(dataset, [1], methods=("propagate",))
    assert results["propagate"]["acc"] == 0.0


def test_benchmark_writes_graph(dataset, tmp_path):
    out = tmp_path / "bench.png"
    results = evaluate_benchmark(dataset, num_samples=2, methods=("propagate", "hybrid"),
                                 seed=0, save_path=str(out))
    assert out.exists()
    assert results["propagate"]["acc"] == 50.0


def test_is_hard(dataset):
    assert not is_hard(dataset.grid(0))
    assert is_hard(dataset.grid(1))


def test_hard_samples_are_cached(dataset, tmp_path):
    cache = tmp_path / "cache" / "hard.json"
    assert get_hard_samples(dataset, target_count=5, cache_file=str(cache)) == [1]
    assert json.loads(cache.read_text()) == [1]
    # served from cache
    assert get_hard_samples(dataset, target_count=1, cache_file=str(cache)) == [1]


def test_evaluate_hard(dataset, tmp_path):
    results = evaluate_hard(dataset, num_samples=1, cache_file=str(tmp_path / "hard.json"), save_path=None)
    assert set(results) == {"backtrack", "hybrid"}
