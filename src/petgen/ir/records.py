"""Generated entity records.

Records are created once by a generator (or by breeding) and never edited
afterwards.  Game-state changes such as levels or equipment live alongside a
record in the caller's storage, not inside it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from petgen.engine.hash_stream import validate_hash

STAT_NAMES: tuple[str, ...] = ("attack", "defense", "speed", "intelligence", "luck")
"""Stats shared by every creature-like record, in draw order."""


class EntityKind(str, Enum):
    CREATURE = "creature"
    ENCOUNTER = "encounter"
    ITEM = "item"


class StatBlock(BaseModel):
    """Numeric stats of a creature or wild encounter."""

    model_config = ConfigDict(frozen=True)

    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    speed: int = Field(ge=0)
    intelligence: int = Field(ge=0)
    luck: int = Field(ge=0)
    health: int | None = Field(default=None, ge=0)


class ItemStats(BaseModel):
    """Slot-group specific modifiers of an item.  Unused modifiers are ``None``."""

    model_config = ConfigDict(frozen=True)

    attack: int | None = None
    defense: int | None = None
    magic_power: int | None = None
    luck: int | None = None
    experience: int | None = None
    critical_chance: int | None = None
    resistance: int | None = None
    effect_power: int | None = None
    health_boost: int | None = None
    happiness_boost: int | None = None
    energy_boost: int | None = None
    power: int | None = None


class GeneratedEntity(BaseModel):
    """Fields shared by every generated record."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[EntityKind]
    trait_fields: ClassVar[tuple[str, ...]] = ()
    """Names of the categorical trait fields, in generation order."""

    hash: str
    """64-character lowercase hex digest; the record's durable identity."""

    name: str = Field(min_length=1, pattern=r"\S")
    rarity: str
    special_features: tuple[str, ...] = ()
    abilities: tuple[str, ...] = ()
    generation: int = Field(default=1, ge=1)
    """Lineage depth; 1 for freshly generated entities."""

    generator_version: int = 1
    """Version of the table asset the record was generated against."""

    @field_validator("hash")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        return validate_hash(v)

    @field_validator("special_features", "abilities")
    @classmethod
    def _no_duplicate_labels(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        dupes: list[str] = []
        for label in v:
            if label in seen:
                dupes.append(label)
            seen.add(label)
        if dupes:
            raise ValueError(f"duplicate labels: {dupes}")
        return v

    @property
    def category_traits(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in self.trait_fields}

    def stats_dict(self) -> dict[str, int]:
        stats: BaseModel = getattr(self, "stats")
        return stats.model_dump(exclude_none=True)

    def to_record(self) -> dict[str, Any]:
        """The conceptual JSON shape served to the outer layers."""
        return {
            "hash": self.hash,
            "name": self.name,
            "rarity": self.rarity,
            "kind": self.kind.value,
            "category_traits": self.category_traits,
            "special_features": list(self.special_features),
            "abilities": list(self.abilities),
            "stats": self.stats_dict(),
            "generation": self.generation,
            "generator_version": self.generator_version,
        }


class CreatureRecord(GeneratedEntity):
    """A pet, either freshly generated from a hash or bred from two parents."""

    kind: ClassVar[EntityKind] = EntityKind.CREATURE
    trait_fields: ClassVar[tuple[str, ...]] = (
        "color", "size", "type", "element", "personality", "habitat",
        "pattern", "aura", "birthmark", "eye_type", "wing_type",
        "tail_type", "fur_texture", "scale", "horn",
    )

    color: str
    size: str
    type: str
    element: str
    personality: str
    habitat: str
    pattern: str
    aura: str
    birthmark: str
    eye_type: str
    wing_type: str
    tail_type: str
    fur_texture: str
    scale: str
    horn: str
    stats: StatBlock
    parent_hashes: tuple[str, ...] = ()
    """Empty for generated creatures; ``(parent_a, parent_b)`` for offspring."""

    @field_validator("parent_hashes")
    @classmethod
    def _validate_parent_hashes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if len(v) not in (0, 2):
            raise ValueError(f"expected 0 or 2 parent hashes, got {len(v)}")
        return tuple(validate_hash(h) for h in v)

    def to_record(self) -> dict[str, Any]:
        record = super().to_record()
        record["parent_hashes"] = list(self.parent_hashes)
        return record


class EncounterRecord(GeneratedEntity):
    """A wild creature met while exploring an environment."""

    kind: ClassVar[EntityKind] = EntityKind.ENCOUNTER
    trait_fields: ClassVar[tuple[str, ...]] = (
        "environment", "color", "size", "type", "element", "personality",
        "pattern", "aura",
    )

    environment: str
    color: str
    size: str
    type: str
    element: str
    personality: str
    pattern: str
    aura: str
    stats: StatBlock
    behavior_traits: tuple[str, ...] = ()
    capture_rate: int = Field(ge=0, le=100)
    """Percent chance of a capture attempt succeeding."""
    experience_reward: int = Field(ge=0)
    description: str = ""


class ItemRecord(GeneratedEntity):
    """Equipment, currency, food or another collectible found while exploring."""

    kind: ClassVar[EntityKind] = EntityKind.ITEM
    trait_fields: ClassVar[tuple[str, ...]] = (
        "environment", "category", "slot_group", "color", "material",
        "prefix", "effect",
    )

    environment: str
    category: str
    """Equipment slot or item category (``"Weapon"``, ``"Ring"``, ``"Pet Food"``...)."""
    slot_group: str
    """Coarse grouping that decides the stat profile: weapon, armor, accessory,
    currency, pet_food or other."""
    color: str
    material: str
    prefix: str
    effect: str
    subtype: str | None = None
    """Weapon type, currency or food type where the slot group has one."""
    stats: ItemStats
    value: int = Field(ge=0)
    durability: int = Field(ge=0)
    experience_reward: int = Field(ge=0)
    description: str = ""

    @property
    def category_traits(self) -> dict[str, str]:
        traits = super().category_traits
        if self.subtype is not None:
            traits["subtype"] = self.subtype
        return traits
