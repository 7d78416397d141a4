"""Tests for rarity distribution sampling, persistence and reports."""

from __future__ import annotations

from pathlib import Path

import pytest

from petgen.balance import (
    RarityDistribution,
    TierFrequency,
    compute_rarity_distribution,
    generate_text_report,
    load_distribution,
    save_distribution,
)
from petgen.engine.errors import GenerationError

TOLERANCE = 0.01


@pytest.fixture(scope="module")
def large_sample() -> RarityDistribution:
    return compute_rarity_distribution(100_000, roll_rarity_only=True)


def _make_distribution(**overrides: object) -> RarityDistribution:
    defaults = dict(
        kind="creature",
        num_samples=100,
        base_seed=42,
        generator_version=1,
        rarity_only=True,
        generated_at="2026-01-01T00:00:00+00:00",
        tiers=[
            TierFrequency(tier="Common", count=60, observed=0.6, expected=0.48),
            TierFrequency(tier="Uncommon", count=40, observed=0.4, expected=0.25),
        ],
    )
    defaults.update(overrides)
    return RarityDistribution(**defaults)


class TestLargeSample:
    def test_counts_add_up(self, large_sample: RarityDistribution) -> None:
        assert sum(t.count for t in large_sample.tiers) == 100_000
        assert len(large_sample.tiers) == 7

    def test_each_tier_within_tolerance(self, large_sample: RarityDistribution) -> None:
        for t in large_sample.tiers:
            assert abs(t.deviation) < TOLERANCE, t.tier

    def test_rare_tiers_appear(self, large_sample: RarityDistribution) -> None:
        assert large_sample.frequency("Transcendent").count > 0
        assert large_sample.frequency("Mythical").count > 0

    def test_expected_matches_weights(self, large_sample: RarityDistribution) -> None:
        assert large_sample.frequency("Common").expected == pytest.approx(0.48)
        assert large_sample.frequency("Transcendent").expected == pytest.approx(0.002)


class TestFullGeneration:
    @pytest.mark.parametrize("kind", ["creature", "encounter", "item"])
    def test_matches_rarity_only(self, kind: str) -> None:
        full = compute_rarity_distribution(300, base_seed=7, kind=kind)
        fast = compute_rarity_distribution(300, base_seed=7, kind=kind, roll_rarity_only=True)
        assert [t.count for t in full.tiers] == [t.count for t in fast.tiers]
        assert not full.rarity_only

    def test_unknown_kind(self) -> None:
        with pytest.raises(GenerationError):
            compute_rarity_distribution(10, kind="egg")

    def test_needs_samples(self) -> None:
        with pytest.raises(GenerationError):
            compute_rarity_distribution(0)


class TestModels:
    def test_deviation(self) -> None:
        d = _make_distribution()
        assert d.frequency("Common").deviation == pytest.approx(0.12)
        assert d.max_abs_deviation == pytest.approx(0.15)

    def test_unknown_tier(self) -> None:
        with pytest.raises(KeyError):
            _make_distribution().frequency("Epic")

    def test_save_load(self, tmp_path: Path) -> None:
        d = _make_distribution()
        path = tmp_path / "nested" / "dist.json"
        save_distribution(d, path)
        assert load_distribution(path) == d


class TestReport:
    def test_contains_tiers(self) -> None:
        report = generate_text_report(_make_distribution())
        assert "Rarity Distribution Report" in report
        assert "Common" in report
        assert "Uncommon" in report
        assert "Samples: 100" in report

    def test_rarity_only_label(self) -> None:
        assert "rarity slot only" in generate_text_report(_make_distribution())
        assert "full generation" in generate_text_report(_make_distribution(rarity_only=False))
