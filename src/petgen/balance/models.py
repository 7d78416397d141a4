"""Pydantic v2 models for rarity distribution analysis.

Serializable to/from JSON so a distribution can be saved next to the table
asset version it was measured against.
"""

from __future__ import annotations

from pydantic import BaseModel


class TierFrequency(BaseModel):
    """Observed vs configured frequency of one rarity tier."""

    tier: str
    count: int
    observed: float
    """count / num_samples."""
    expected: float
    """weight / 10000."""

    @property
    def deviation(self) -> float:
        return self.observed - self.expected


class RarityDistribution(BaseModel):
    """Result of sampling many hashes through one generator."""

    kind: str
    """Entity kind sampled: 'creature', 'encounter' or 'item'."""
    num_samples: int
    base_seed: int
    generator_version: int
    rarity_only: bool
    """True if only the rarity slot was read (no full generation)."""
    generated_at: str
    """ISO 8601 timestamp."""
    tiers: list[TierFrequency]

    @property
    def max_abs_deviation(self) -> float:
        return max((abs(t.deviation) for t in self.tiers), default=0.0)

    def frequency(self, tier: str) -> TierFrequency:
        for t in self.tiers:
            if t.tier == tier:
                return t
        raise KeyError(f"Unknown tier {tier!r}")
