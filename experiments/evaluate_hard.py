import sys
import os
import argparse
import json
from tqdm import tqdm

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from data.load_dataset import SudokuDataset
from experiments.evaluate import print_report, run_methods, save_performance_graph
from solvers.config import DEFAULT_DATASET_PATH, HARD_BENCHMARK_GRAPH_PATH, HARD_CACHE_FILE, HARD_SAMPLES
from solvers.errors import ContradictionError
from solvers.propagation import propagate_constraints


# --- Caching & Filtering Logic ---
def load_cached_indices(cache_file=HARD_CACHE_FILE):
    if os.path.exists(cache_file):
        with open(cache_file, 'r') as f:
            indices = json.load(f)
        print(f"📂 Loaded {len(indices)} hard indices from cache.")
        return indices
    return []


def save_cached_indices(indices, cache_file=HARD_CACHE_FILE):
    indices = sorted(set(indices))
    cache_dir = os.path.dirname(cache_file)
    if cache_dir:
        os.makedirs(cache_dir, exist_ok=True)
    with open(cache_file, 'w') as f:
        json.dump(indices, f)
    print(f"💾 Saved {len(indices)} hard indices to {cache_file}.")


def is_hard(grid):
    """Propagation alone stalls without finding a contradiction."""
    try:
        return not propagate_constraints(grid)
    except ContradictionError:
        return False


def get_hard_samples(dataset, target_count=HARD_SAMPLES, cache_file=HARD_CACHE_FILE):
    hard_indices = load_cached_indices(cache_file)

    if len(hard_indices) >= target_count:
        print(f"✅ Cache has enough samples ({len(hard_indices)} >= {target_count}). Skipping scan.")
        return hard_indices[:target_count]

    needed = target_count - len(hard_indices)
    print(f"🔍 Scanning dataset for {needed} more hard puzzles...")

    existing_set = set(hard_indices)

    # Scan from the end of the dataset
    for idx in tqdm(range(len(dataset) - 1, -1, -1), desc="Scanning Dataset"):
        if idx in existing_set:
            continue

        if is_hard(dataset.grid(idx)):
            hard_indices.append(idx)
            if len(hard_indices) >= target_count:
                break

    save_cached_indices(hard_indices, cache_file)

    if len(hard_indices) < target_count:
        print(f"⚠️ Scanned entire dataset but only found {len(hard_indices)} hard cases.")
    else:
        print(f"✅ Successfully collected {len(hard_indices)} hard cases.")

    return sorted(hard_indices)[:target_count]


def evaluate_hard(dataset, num_samples=HARD_SAMPLES, timeout=5.0, cache_file=HARD_CACHE_FILE,
                  save_path=HARD_BENCHMARK_GRAPH_PATH):
    hard_indices = get_hard_samples(dataset, num_samples, cache_file=cache_file)

    if len(hard_indices) == 0:
        print("⚠️ No hard puzzles available.")
        return {}

    print(f"\n⚔️ Starting Duel on {len(hard_indices)} HARD puzzles...")
    results = run_methods(dataset, hard_indices, methods=("backtrack", "hybrid"),
                          timeout=timeout, desc="Benchmarking")

    print_report(results, header="📊 HARD Benchmark Results")
    if save_path:
        save_performance_graph(results, save_path=save_path,
                               title=f'Benchmark on {len(hard_indices)} HARD Puzzles: Time vs Accuracy')
    return results


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', type=str, default=DEFAULT_DATASET_PATH)
    parser.add_argument('--samples', type=int, default=HARD_SAMPLES, help='Target number of hard puzzles')
    parser.add_argument('--timeout', type=float, default=5.0)
    parser.add_argument('--cache', type=str, default=HARD_CACHE_FILE)
    parser.add_argument('--out', type=str, default=HARD_BENCHMARK_GRAPH_PATH)
    args = parser.parse_args()

    dataset = SudokuDataset(csv_path=args.csv)
    evaluate_hard(dataset, args.samples, timeout=args.timeout, cache_file=args.cache, save_path=args.out)


if __name__ == "__main__":
    main()
