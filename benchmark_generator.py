import sys
import os
import time
import csv
import random
import argparse
from typing import Dict, Any, List

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from logic.connection_engine import ConnectionEngine
from logic.generators.level_generator import LevelGenerator


def run_single_level(level_index: int, sample: int, rng: random.Random) -> Dict[str, Any]:
    """
    Generates one level and checks that the board accepts it.
    """
    generator = LevelGenerator(rng=rng)
    grid_size, requested = generator.difficulty_for(level_index)

    start_time = time.perf_counter()
    descriptor = generator.generate(level_index)
    elapsed = time.perf_counter() - start_time

    # The board must accept whatever the generator produced
    engine = ConnectionEngine()
    engine.setup_board(descriptor)

    placed = descriptor.pair_count
    return {
        "level": level_index,
        "sample": sample,
        "grid_size": grid_size,
        "requested_pairs": requested,
        "placed_pairs": placed,
        "shortfall": requested - placed,
        "fill_ratio": round(2 * placed / (grid_size * grid_size), 3),
        "time_ms": round(elapsed * 1000, 3),
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark the Flowlink level generator")
    parser.add_argument("--levels", type=int, default=40, help="Number of level indexes to run")
    parser.add_argument("--samples", type=int, default=20, help="Levels generated per index")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, default="generator_benchmark.csv", help="Output CSV file")

    args = parser.parse_args()

    print(f"Starting Benchmark: {args.levels} level indexes x {args.samples} samples")

    rng = random.Random(args.seed)
    results: List[Dict[str, Any]] = []
    for level in range(args.levels):
        print(f"Running level {level + 1}/{args.levels}...", end="\r")
        for sample in range(args.samples):
            results.append(run_single_level(level, sample, rng))

    print("\nBenchmark Complete!")

    # Save to CSV
    keys = results[0].keys()
    with open(args.output, "w", newline="") as f:
        dict_writer = csv.DictWriter(f, fieldnames=keys)
        dict_writer.writeheader()
        dict_writer.writerows(results)

    print(f"Results saved to {args.output}")

    # Print Summary Table
    print("\nSummary Statistics:")
    print(f"{'Grid':<6} | {'Levels':<8} | {'Shortfall Rate':<14} | {'Avg Pairs':<10} | {'Avg Time (ms)':<12}")
    print("-" * 62)

    for grid_size in sorted({r["grid_size"] for r in results}):
        rows = [r for r in results if r["grid_size"] == grid_size]
        short = sum(1 for r in rows if r["shortfall"] > 0)
        avg_pairs = sum(r["placed_pairs"] for r in rows) / len(rows)
        avg_time = sum(r["time_ms"] for r in rows) / len(rows)
        rate = (short / len(rows)) * 100

        print(f"{grid_size}x{grid_size:<4} | {len(rows):<8} | {rate:>13.1f}% | {avg_pairs:>10.2f} | {avg_time:>12.3f}")


if __name__ == "__main__":
    main()
