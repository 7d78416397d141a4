"""Attribute tables -- the frozen, versioned data contract behind every hash.

Changing the order or contents of a table changes the meaning of every hash
generated against it.  Tables are append-only; any edit ships as a new
asset with a bumped :attr:`TableSet.version`.
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, model_validator

from petgen.engine.errors import GenerationError
from petgen.engine.hash_stream import HashStream
from petgen.engine.weighted import select_weighted, total_weight

from .rarity import RarityProfile


class AttributeTable(BaseModel):
    """Ordered, immutable list of labels drawn by index."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> str:
        return self.values[index]

    def require(self) -> None:
        """Raise :class:`GenerationError` if the table is empty."""
        if not self.values:
            raise GenerationError(f"attribute table {self.name!r} is empty")

    def pick(self, stream: HashStream) -> str:
        """Consume one slot and return the label it lands on."""
        self.require()
        return self.values[stream.next(len(self.values))]


class WeightedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    weight: int


class WeightedTable(BaseModel):
    """Labels with integer weights, selected by cumulative weight."""

    model_config = ConfigDict(frozen=True)

    name: str
    entries: tuple[WeightedEntry, ...]

    def _pairs(self) -> Sequence[tuple[str, int]]:
        return [(e.name, e.weight) for e in self.entries]

    @property
    def total_weight(self) -> int:
        if not self.entries:
            raise GenerationError(f"weighted table {self.name!r} is empty")
        return total_weight(self._pairs())

    def require(self) -> int:
        """Validate the weights and return their total.

        Raises :class:`GenerationError` for an empty table or a
        non-positive weight.
        """
        return self.total_weight

    def select(self, draw: int) -> str:
        return select_weighted(self._pairs(), draw)

    def pick(self, stream: HashStream) -> str:
        """Consume one slot (modulo the total weight) and select."""
        return self.select(stream.next(self.total_weight))


class CurrencyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    rate: float
    """Coin value of one unit."""


class TemplateSet(BaseModel):
    """Jinja2 name and description templates, indexed by a hash draw."""

    model_config = ConfigDict(frozen=True)

    creature: tuple[str, ...]
    encounter: tuple[str, ...]
    offspring: tuple[str, ...]
    item: dict[str, tuple[str, ...]]
    """Item name templates keyed by slot group."""

    encounter_description: str
    item_description: dict[str, str]


class TableSet(BaseModel):
    """Every table the generators read, plus the rarity profile.

    Table fields may be given as bare lists in the JSON asset; they are
    wrapped into :class:`AttributeTable` named after the field.
    """

    model_config = ConfigDict(frozen=True)

    version: int
    """Generator version; carried on every record as ``generator_version``."""

    rarity: RarityProfile

    # creature / encounter traits
    colors: AttributeTable
    sizes: AttributeTable
    creature_types: AttributeTable
    elements: AttributeTable
    personalities: AttributeTable
    habitats: AttributeTable
    special_features: AttributeTable
    abilities: AttributeTable

    # cosmetic traits
    patterns: AttributeTable
    auras: AttributeTable
    birthmarks: AttributeTable
    eye_types: AttributeTable
    wing_types: AttributeTable
    tail_types: AttributeTable
    fur_textures: AttributeTable
    scales: AttributeTable
    horns: AttributeTable

    # items
    equipment_slots: WeightedTable
    materials: AttributeTable
    prefixes: AttributeTable
    weapon_types: AttributeTable
    effect_types: AttributeTable
    food_types: AttributeTable
    food_qualities: AttributeTable
    """Pet food quality by rarity rank; ranks past the end use the last entry."""
    currencies: tuple[CurrencyEntry, ...]

    templates: TemplateSet

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_tables(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for field_name, info in cls.model_fields.items():
            raw = data.get(field_name)
            if info.annotation is AttributeTable and isinstance(raw, (list, tuple)):
                data[field_name] = {"name": field_name, "values": list(raw)}
            elif info.annotation is WeightedTable and isinstance(raw, (list, tuple)):
                data[field_name] = {"name": field_name, "entries": list(raw)}
        return data

    def attribute_tables(self) -> list[AttributeTable]:
        return [
            getattr(self, name)
            for name, info in type(self).model_fields.items()
            if info.annotation is AttributeTable
        ]

    def validate_tables(self) -> None:
        """Raise :class:`GenerationError` for the first empty or invalid table."""
        for table in self.attribute_tables():
            table.require()
        self.equipment_slots.require()
        if not self.currencies:
            raise GenerationError("attribute table 'currencies' is empty")
        t = self.templates
        for name in ("creature", "encounter", "offspring"):
            if not getattr(t, name):
                raise GenerationError(f"template list {name!r} is empty")
        for group, templates in t.item.items():
            if not templates:
                raise GenerationError(f"item template list {group!r} is empty")
