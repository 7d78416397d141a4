"""The rarity ladder: weighted tier selection plus rank-indexed scaling.

Tiers are ordered from most to least common.  Each successive tier has a
strictly higher stat floor, feature count and ability count than the one
before it, so an entity's power is legible from its rarity alone.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from petgen.ir.rarity import RarityProfile, RarityTier, TierScale

from .errors import GenerationError, InvalidRange
from .hash_stream import HashStream
from .weighted import select_weighted, total_weight

RARITY_RANGE = 10_000
"""Rarity draws are taken modulo this value; tier weights must sum to it."""


class RarityLadder:
    """Ordered, validated list of :class:`RarityTier`.

    Usage::

        ladder = RarityLadder.from_profile(tables.rarity)
        tier = ladder.classify(stream.next(RARITY_RANGE))
        ladder.scale(tier).feature_count
    """

    def __init__(self, tiers: Sequence[RarityTier]) -> None:
        self._tiers: tuple[RarityTier, ...] = tuple(tiers)
        self._validate()
        self._by_name = {t.name: t for t in self._tiers}
        self._entries = [(t, t.weight) for t in self._tiers]

    @classmethod
    def from_profile(cls, profile: RarityProfile) -> RarityLadder:
        """Build the ladder, deriving ability counts from the profile's rule."""
        tiers = [
            RarityTier(
                name=p.name,
                rank=rank,
                weight=p.weight,
                stat_floor=p.stat_floor,
                feature_count=p.feature_count,
                ability_count=min(p.feature_count + profile.ability_offset, profile.ability_cap),
                item_multiplier=p.item_multiplier,
            )
            for rank, p in enumerate(profile.tiers)
        ]
        return cls(tiers)

    def _validate(self) -> None:
        if not self._tiers:
            raise GenerationError("rarity ladder has no tiers")
        total = total_weight([(t.name, t.weight) for t in self._tiers])
        if total != RARITY_RANGE:
            raise GenerationError(
                f"rarity weights must sum to {RARITY_RANGE}, got {total}"
            )
        names = [t.name for t in self._tiers]
        if len(set(names)) != len(names):
            raise GenerationError(f"duplicate rarity tier names: {names}")
        for rank, tier in enumerate(self._tiers):
            if tier.rank != rank:
                raise GenerationError(f"tier {tier.name!r} has rank {tier.rank}, expected {rank}")
        for lower, higher in zip(self._tiers, self._tiers[1:]):
            for attr in ("stat_floor", "feature_count", "ability_count"):
                if getattr(higher, attr) <= getattr(lower, attr):
                    raise GenerationError(
                        f"{attr} must strictly increase with rarity: "
                        f"{lower.name}={getattr(lower, attr)}, "
                        f"{higher.name}={getattr(higher, attr)}"
                    )

    # -- lookup --------------------------------------------------------------

    @property
    def tiers(self) -> tuple[RarityTier, ...]:
        return self._tiers

    @property
    def top(self) -> RarityTier:
        return self._tiers[-1]

    def __len__(self) -> int:
        return len(self._tiers)

    def __iter__(self) -> Iterator[RarityTier]:
        return iter(self._tiers)

    def tier(self, name: str) -> RarityTier:
        """Look up a tier by name.  Raises ``KeyError`` for unknown names."""
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(
                f"Unknown rarity {name!r}. Known tiers: {list(self._by_name)}"
            ) from None

    def rank(self, tier: RarityTier | str) -> int:
        name = tier if isinstance(tier, str) else tier.name
        return self.tier(name).rank

    # -- selection -----------------------------------------------------------

    def classify(self, draw: int) -> RarityTier:
        """Map a draw in ``[0, 10000)`` onto a tier."""
        if not 0 <= draw < RARITY_RANGE:
            raise InvalidRange(f"rarity draw must be in [0, {RARITY_RANGE}), got {draw}")
        return select_weighted(self._entries, draw)

    def roll(self, stream: HashStream) -> RarityTier:
        """Consume one slot of *stream* and classify it."""
        return self.classify(stream.next(RARITY_RANGE))

    # -- scaling -------------------------------------------------------------

    def scale(self, tier: RarityTier | str) -> TierScale:
        name = tier if isinstance(tier, str) else tier.name
        return self.tier(name).scale

    def promote(self, tier: RarityTier | str) -> RarityTier:
        """One tier above *tier*, capped at the top of the ladder."""
        rank = min(self.rank(tier) + 1, len(self._tiers) - 1)
        return self._tiers[rank]

    def better(self, a: RarityTier | str, b: RarityTier | str) -> RarityTier:
        """The higher-ranked of two tiers."""
        return self._tiers[max(self.rank(a), self.rank(b))]

    def __repr__(self) -> str:
        return f"RarityLadder({[t.name for t in self._tiers]})"
