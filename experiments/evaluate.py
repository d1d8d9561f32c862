import sys
import os
import argparse
import numpy as np
import matplotlib.pyplot as plt
from tqdm import tqdm

# project root
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from data.load_dataset import SudokuDataset
from solvers.config import BENCHMARK_GRAPH_PATH, BENCHMARK_SAMPLES, DEFAULT_DATASET_PATH, DEFAULT_TIMEOUT
from solvers.master_solver import METHODS, solve_sudoku
from utils.graph_utils import board_from_string


# -------------------------------------------------------------------------
# 1. Visualization
# -------------------------------------------------------------------------
def save_performance_graph(results, save_path=BENCHMARK_GRAPH_PATH, title='Performance Benchmark'):
    """results: {method: {'time': avg sec, 'acc': percent}}"""
    labels = list(results)
    times = [results[m]['time'] for m in labels]
    accs = [results[m]['acc'] for m in labels]

    fig, ax1 = plt.subplots(figsize=(10, 6))

    color = 'tab:blue'
    ax1.set_xlabel('Solver Type')
    ax1.set_ylabel('Avg Time (sec)', color=color)
    bars = ax1.bar(labels, times, color=color, alpha=0.6, label='Time')
    ax1.tick_params(axis='y', labelcolor=color)

    for bar in bars:
        height = bar.get_height()
        ax1.text(bar.get_x() + bar.get_width()/2., height,
                f'{height:.4f}s', ha='center', va='bottom')

    ax2 = ax1.twinx()
    color = 'tab:red'
    ax2.set_ylabel('Accuracy (%)', color=color)
    ax2.plot(labels, accs, color=color, marker='o', linewidth=2, label='Accuracy')
    ax2.tick_params(axis='y', labelcolor=color)
    ax2.set_ylim(0, 110)

    for i, acc in enumerate(accs):
        ax2.text(i, acc + 2, f'{acc:.1f}%', ha='center', color='red', fontweight='bold')

    plt.title(title)
    fig.tight_layout()

    plt.savefig(save_path)
    plt.close(fig)
    return save_path


# -------------------------------------------------------------------------
# 2. Evaluation Logic
# -------------------------------------------------------------------------
def run_methods(dataset, indices, methods=METHODS, timeout=DEFAULT_TIMEOUT, desc="Running Benchmark"):
    """
    Solve every puzzle in `indices` with every method.
    A method scores a hit only when it returns the dataset's solution exactly.
    """
    correct = {m: 0 for m in methods}
    total_time = {m: 0.0 for m in methods}

    for idx in tqdm(indices, desc=desc):
        _, solution = dataset[int(idx)]
        target = board_from_string(solution)

        for method in methods:
            grid = dataset.grid(int(idx))
            result = solve_sudoku(grid, method=method, timeout=timeout)
            total_time[method] += result.duration_ms / 1000

            if result.solved and np.array_equal(grid.values().flatten(), target):
                correct[method] += 1

    n = max(len(indices), 1)
    return {
        m: {'time': total_time[m] / n, 'acc': correct[m] / n * 100}
        for m in methods
    }


def print_report(results, header="📊 Final Benchmark Results"):
    print("\n" + "="*55)
    print(header)
    print("="*55)
    for method, stats in results.items():
        print(f"{method:<12} {stats['acc']:.2f}% Acc | {stats['time']:.5f} sec")
    print("="*55)


def evaluate_benchmark(dataset, num_samples=BENCHMARK_SAMPLES, methods=METHODS,
                       timeout=DEFAULT_TIMEOUT, seed=None, save_path=BENCHMARK_GRAPH_PATH):
    rng = np.random.default_rng(seed)
    indices = rng.choice(len(dataset), size=min(len(dataset), num_samples), replace=False)

    print(f"🔍 Benchmarking on {len(indices)} samples...")
    results = run_methods(dataset, indices, methods=methods, timeout=timeout)

    print_report(results)
    if save_path:
        save_performance_graph(results, save_path=save_path)
    return results


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', type=str, default=DEFAULT_DATASET_PATH)
    parser.add_argument('--samples', type=int, default=BENCHMARK_SAMPLES)
    parser.add_argument('--timeout', type=float, default=5.0,
                        help='Per puzzle search budget in seconds')
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--out', type=str, default=BENCHMARK_GRAPH_PATH)
    args = parser.parse_args()

    dataset = SudokuDataset(csv_path=args.csv)
    evaluate_benchmark(dataset, num_samples=args.samples, timeout=args.timeout,
                       seed=args.seed, save_path=args.out)


if __name__ == "__main__":
    main()
