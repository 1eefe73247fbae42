"""
Level Chart Generator
=====================
Charts how the generator's output scales with the level index.
Run:  python generate_level_charts.py --samples 50
Output: level_charts/ folder with 3 PNG files.
"""

import sys
import os
import random
import argparse
import numpy as np
from typing import Dict, List

# Ensure project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for file output
import matplotlib.pyplot as plt

from logic.generators.level_generator import LevelGenerator

# ── Styling ───────────────────────────────────────────────────
COLORS = {
    "grid": "#E0AF68",
    "requested": "#339AF0",
    "placed": "#51CF66",
    "shortfall": "#FF6B6B",
}
BG_COLOR = "#1A1B26"
CARD_COLOR = "#24283B"
TEXT_COLOR = "#C0CAF5"
GRID_COLOR = "#414868"


def setup_style():
    """Apply a dark matplotlib style."""
    plt.rcParams.update({
        "figure.facecolor": BG_COLOR,
        "axes.facecolor": CARD_COLOR,
        "axes.edgecolor": GRID_COLOR,
        "axes.labelcolor": TEXT_COLOR,
        "axes.titleweight": "bold",
        "text.color": TEXT_COLOR,
        "xtick.color": TEXT_COLOR,
        "ytick.color": TEXT_COLOR,
        "grid.color": GRID_COLOR,
        "grid.alpha": 0.3,
        "legend.facecolor": CARD_COLOR,
        "legend.edgecolor": GRID_COLOR,
        "savefig.dpi": 150,
        "savefig.bbox": "tight",
        "savefig.facecolor": BG_COLOR,
    })


# ── Sampling ──────────────────────────────────────────────────
def sample_levels(max_level: int, samples: int, seed=None) -> Dict[str, np.ndarray]:
    """
    Generate `samples` levels for every index in [0, max_level).
    Returns arrays indexed [level, sample].
    """
    generator = LevelGenerator(rng=random.Random(seed))
    grid = np.zeros(max_level, dtype=int)
    requested = np.zeros(max_level, dtype=int)
    placed = np.zeros((max_level, samples), dtype=int)
    occupancy: Dict[int, np.ndarray] = {}

    for level in range(max_level):
        grid[level], requested[level] = generator.difficulty_for(level)
        heat = occupancy.setdefault(grid[level], np.zeros((grid[level], grid[level])))
        for s in range(samples):
            descriptor = generator.generate(level)
            placed[level, s] = descriptor.pair_count
            for p in descriptor.points:
                heat[p.y, p.x] += 1
        print(f"  sampled level {level + 1}/{max_level}", end="\r")
    print()

    return {"grid": grid, "requested": requested, "placed": placed, "occupancy": occupancy}


# ── Charts ────────────────────────────────────────────────────
def chart_1_difficulty_curve(data, out_dir):
    """Grid size, requested pairs and placed pairs (mean ± std) per level."""
    levels = np.arange(len(data["grid"]))
    mean = data["placed"].mean(axis=1)
    std = data["placed"].std(axis=1)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.step(levels, data["grid"], where="post", color=COLORS["grid"], label="Grid size")
    ax.step(levels, data["requested"], where="post", color=COLORS["requested"], label="Requested pairs")
    ax.plot(levels, mean, color=COLORS["placed"], label="Placed pairs (mean)")
    ax.fill_between(levels, mean - std, mean + std, color=COLORS["placed"], alpha=0.2)
    ax.set_xlabel("Level index")
    ax.set_ylabel("Count")
    ax.set_title("Difficulty Curve")
    ax.legend(loc="upper left")
    ax.grid(zorder=0)
    fig.savefig(os.path.join(out_dir, "1_difficulty_curve.png"))
    plt.close(fig)


def chart_2_shortfall(data, out_dir):
    """Share of generated levels that placed fewer pairs than requested."""
    levels = np.arange(len(data["grid"]))
    short = (data["placed"] < data["requested"][:, None]).mean(axis=1) * 100

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(levels, short, color=COLORS["shortfall"], alpha=0.9, zorder=3)
    ax.set_xlabel("Level index")
    ax.set_ylabel("Levels with shortfall (%)")
    ax.set_ylim(0, 105)
    ax.set_title("Generation Shortfall")
    ax.grid(axis="y", zorder=0)
    fig.savefig(os.path.join(out_dir, "2_shortfall.png"))
    plt.close(fig)


def chart_3_occupancy(data, out_dir):
    """Endpoint placement frequency per cell, one panel per grid size."""
    sizes: List[int] = sorted(data["occupancy"])
    fig, axes = plt.subplots(1, len(sizes), figsize=(4 * len(sizes), 4), squeeze=False)
    for ax, size in zip(axes[0], sizes):
        heat = data["occupancy"][size]
        total = heat.sum()
        ax.imshow(heat / total if total else heat, cmap="magma", origin="upper")
        ax.set_title(f"{size}x{size}")
        ax.set_xticks([])
        ax.set_yticks([])
    fig.suptitle("Endpoint Placement Density")
    fig.savefig(os.path.join(out_dir, "3_occupancy.png"))
    plt.close(fig)


def print_summary(data):
    placed = data["placed"]
    requested = data["requested"][:, None]
    print(f"  Levels sampled  : {placed.size}")
    print(f"  Shortfall rate  : {100 * (placed < requested).mean():.1f}%")
    print(f"  Mean pairs lost : {(requested - placed).mean():.3f}")


# ── Main ──────────────────────────────────────────────────────
def main():
    parser = argparse.ArgumentParser(description="Generate level generator charts")
    parser.add_argument("--samples", type=int, default=50,
                        help="Levels generated per index (default: 50)")
    parser.add_argument("--max-level", type=int, default=40,
                        help="Number of level indexes to sample (default: 40)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "level_charts")
    os.makedirs(out_dir, exist_ok=True)

    setup_style()

    print("Phase 1/2: Sampling levels...")
    data = sample_levels(args.max_level, args.samples, args.seed)

    print("Phase 2/2: Generating charts...")
    chart_1_difficulty_curve(data, out_dir)
    chart_2_shortfall(data, out_dir)
    chart_3_occupancy(data, out_dir)

    print_summary(data)
    print(f"Charts saved to: {out_dir}")


if __name__ == "__main__":
    main()
