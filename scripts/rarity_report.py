"""Measure how often each rarity tier comes up for a generator.

Usage:
    python scripts/rarity_report.py [--samples 100000] [--kind creature] [--plot]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from petgen.balance.distribution import compute_rarity_distribution, save_distribution
from petgen.balance.models import RarityDistribution
from petgen.balance.report import generate_text_report
from petgen.content.registry import load_tables


def plot_distribution(distribution: RarityDistribution, out_path: Path) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import numpy as np

    labels = [t.tier for t in distribution.tiers]
    observed = np.array([t.observed for t in distribution.tiers]) * 100
    expected = np.array([t.expected for t in distribution.tiers]) * 100
    x = np.arange(len(labels))
    width = 0.4

    fig, ax = plt.subplots(figsize=(12, 6))
    fig.suptitle(
        f"{distribution.kind.title()} rarity -- {distribution.num_samples:,} samples",
        fontsize=16, fontweight="bold",
    )
    ax.bar(x - width / 2, expected, width, label="Configured weight",
           color="#95a5a6", edgecolor="black", linewidth=0.5)
    bars = ax.bar(x + width / 2, observed, width, label="Observed",
                  color="#3498db", edgecolor="black", linewidth=0.5)
    for bar, t in zip(bars, distribution.tiers):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height() + 0.5,
                f"{t.deviation * 100:+.2f}", ha="center", va="bottom", fontsize=9)
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylabel("Frequency (%)")
    ax.set_yscale("symlog", linthresh=1)
    ax.legend()

    plt.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Chart saved to {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Rarity distribution report")
    parser.add_argument("--samples", type=int, default=100_000, help="Number of hashes to sample")
    parser.add_argument("--kind", choices=["creature", "encounter", "item"], default="creature")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--tables", type=str, default=None, help="Table asset (default: packaged v1)")
    parser.add_argument("--full", action="store_true", help="Generate every entity instead of reading only the rarity slot")
    parser.add_argument("--output", type=str, default=None, help="Save the distribution as JSON")
    parser.add_argument("--plot", type=str, default=None, metavar="PNG", help="Save a bar chart")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    tables = load_tables(args.tables)

    print(f"Sampling {args.samples:,} {args.kind} rarities...")
    t0 = time.perf_counter()
    distribution = compute_rarity_distribution(
        args.samples,
        base_seed=args.seed,
        kind=args.kind,
        tables=tables,
        roll_rarity_only=not args.full,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    if args.output:
        json_path = Path(args.output)
        save_distribution(distribution, json_path)
        print(f"Saved distribution to {json_path}")

    print()
    print(generate_text_report(distribution))

    if args.plot:
        plot_distribution(distribution, Path(args.plot))


if __name__ == "__main__":
    main()
