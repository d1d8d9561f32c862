"""
Shared settings for the solvers, the CLI and the experiment scripts.
"""

# ==== Datasets ==============================================================

# Kaggle style CSV with 'quizzes' and 'solutions' columns ('0' = blank)
DEFAULT_DATASET_PATH = "./data/raw/sudoku.csv"

# Indices of puzzles the propagator alone could not finish
HARD_CACHE_FILE = "data/hard_indices.json"

# Characters treated as blank cells in puzzle files
PUZZLE_BLANKS = "."
DATASET_BLANKS = ".0"

# ==== Search ================================================================

# Engine used by the CLI when --method is not given
DEFAULT_METHOD = "hybrid"

# Seconds before a search gives up (0 = no limit)
DEFAULT_TIMEOUT = 0.0

# Elapsed time is only checked every N search steps; time.time() per node is noticeable
TIMEOUT_CHECK_INTERVAL = 2000

# ==== Experiments ===========================================================

BENCHMARK_SAMPLES = 100
HARD_SAMPLES = 200
BENCHMARK_GRAPH_PATH = "benchmark_result.png"
HARD_BENCHMARK_GRAPH_PATH = "benchmark_hard.png"
