"""Balance analysis: rarity distributions and reports."""

from petgen.balance.distribution import (
    compute_rarity_distribution,
    load_distribution,
    save_distribution,
)
from petgen.balance.models import RarityDistribution, TierFrequency
from petgen.balance.report import generate_text_report

__all__ = [
    "RarityDistribution",
    "TierFrequency",
    "compute_rarity_distribution",
    "generate_text_report",
    "load_distribution",
    "save_distribution",
]
