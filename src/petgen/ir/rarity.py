"""Rarity tier models -- the data half of the rarity ladder."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TierProfile(BaseModel):
    """One row of the rarity profile as stored in the table asset."""

    model_config = ConfigDict(frozen=True)

    name: str
    weight: int
    """Selection weight out of the ladder's fixed total of 10,000."""

    stat_floor: int
    """Base value every stat starts from before variance is added."""

    feature_count: int
    """Number of distinct special features a fresh entity of this tier gets."""

    item_multiplier: float = 1.0
    """Scales item values and modifiers."""


class RarityProfile(BaseModel):
    """Ordered tiers (most to least common) plus the ability sizing rule."""

    model_config = ConfigDict(frozen=True)

    tiers: tuple[TierProfile, ...]
    ability_offset: int = 2
    """Abilities per tier are ``min(feature_count + ability_offset, ability_cap)``."""
    ability_cap: int = 12


class TierScale(BaseModel):
    """Power profile derived from a tier's rank."""

    model_config = ConfigDict(frozen=True)

    stat_floor: int
    feature_count: int
    ability_count: int


class RarityTier(BaseModel):
    """A resolved rarity tier, as handed out by the ladder."""

    model_config = ConfigDict(frozen=True)

    name: str
    rank: int = Field(ge=0)
    """Position on the ladder; 0 is the most common tier."""
    weight: int
    stat_floor: int
    feature_count: int
    ability_count: int
    item_multiplier: float = 1.0

    @property
    def scale(self) -> TierScale:
        return TierScale(
            stat_floor=self.stat_floor,
            feature_count=self.feature_count,
            ability_count=self.ability_count,
        )
