#!/usr/bin/env python3
"""
Fitness History Plotter

Reads the JSON-lines generation history written by a rocketevo run
(``history_path``) and plots, per generation:
- best and average fitness with a rolling mean of the average
- number of rockets that reached the target or crashed into the wall

Usage:
    python tools/plot_fitness_history.py --history outputs/.../history.jsonl --output-folder results
"""

import argparse
from pathlib import Path

from loguru import logger
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from rocketevo.engine.history import GenerationHistory


def load_history_frame(path: Path) -> pd.DataFrame:
    reports = GenerationHistory.load(path)
    df = pd.DataFrame(
        [r.model_dump(exclude={"fitnesses"}) for r in reports],
    )
    if df.empty:
        return df
    return df.sort_values("generation").reset_index(drop=True)


def plot_history(df: pd.DataFrame, output_folder: Path, rolling_window: int = 10) -> Path:
    sns.set_theme(style="whitegrid", context="talk", palette="deep")

    fig, (ax_fit, ax_out) = plt.subplots(2, 1, figsize=(16, 12), sharex=True)

    avg_rolling = df["average_fitness"].rolling(rolling_window, min_periods=1).mean()
    ax_fit.plot(df["generation"], df["best_fitness"], label="Best", linewidth=2)
    ax_fit.plot(df["generation"], df["average_fitness"], label="Average", alpha=0.5)
    ax_fit.plot(
        df["generation"],
        avg_rolling,
        label=f"Average (rolling {rolling_window})",
        linewidth=2,
    )
    ax_fit.set_ylabel("Fitness (lower is better)")
    ax_fit.set_ylim(0.0, 1.05)
    ax_fit.set_title("Fitness per generation")
    ax_fit.legend(loc="upper right")

    ax_out.bar(df["generation"], df["reached_target"], label="Reached target")
    ax_out.bar(
        df["generation"],
        df["crashed"],
        bottom=df["reached_target"],
        label="Crashed",
        alpha=0.6,
    )
    ax_out.set_xlabel("Generation")
    ax_out.set_ylabel("Rockets")
    ax_out.set_title("Rollout outcomes")
    ax_out.legend(loc="upper left")

    plt.tight_layout(pad=2.0)

    output_folder.mkdir(parents=True, exist_ok=True)
    out = output_folder / "fitness_history.png"
    fig.savefig(out, bbox_inches="tight")
    plt.close(fig)
    logger.info(f"Saved figure to {out}")
    return out


def main():
    parser = argparse.ArgumentParser(description="Plot a rocketevo fitness history")
    parser.add_argument("--history", required=True, type=Path, help="history.jsonl file")
    parser.add_argument(
        "--output-folder",
        type=Path,
        default=Path("results"),
        help="Folder receiving the figure (default: results)",
    )
    parser.add_argument(
        "--rolling-window",
        type=int,
        default=10,
        help="Rolling window size for the average fitness (default: 10)",
    )
    args = parser.parse_args()

    df = load_history_frame(args.history)
    if df.empty:
        logger.warning(f"No generations found in {args.history}")
        return
    logger.info(
        f"Loaded {len(df)} generations, best fitness {df['best_fitness'].min():.4f}"
    )
    plot_history(df, args.output_folder, args.rolling_window)


if __name__ == "__main__":
    main()
