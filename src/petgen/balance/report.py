"""Text report for rarity distributions."""

from __future__ import annotations

from petgen.balance.models import RarityDistribution


def generate_text_report(distribution: RarityDistribution) -> str:
    """Generate a human-readable summary of the distribution."""
    d = distribution
    lines: list[str] = []

    mode = "rarity slot only" if d.rarity_only else "full generation"
    lines.append("=" * 60)
    lines.append(f"Rarity Distribution Report -- {d.kind} ({mode})")
    lines.append(
        f"Samples: {d.num_samples:,} | Seed: {d.base_seed}"
        f" | Tables: v{d.generator_version} | Generated: {d.generated_at}"
    )
    lines.append("=" * 60)

    lines.append("")
    lines.append(f"  {'tier':14s} {'count':>9s} {'observed':>9s} {'expected':>9s} {'delta':>8s}")
    for t in d.tiers:
        lines.append(
            f"  {t.tier:14s} {t.count:9,d} {t.observed:9.2%} {t.expected:9.2%}"
            f" {t.deviation:+8.2%}"
        )

    lines.append("")
    lines.append(f"  Max |delta|: {d.max_abs_deviation:.3%}")
    lines.append("")
    return "\n".join(lines)
