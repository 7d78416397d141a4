"""Record and table models for the generation engine.

All records are frozen Pydantic models that serialise cleanly to/from JSON.
The :class:`TableSet` is the versioned data contract every generator reads.
"""

from .rarity import RarityProfile, RarityTier, TierProfile, TierScale
from .records import (
    STAT_NAMES,
    CreatureRecord,
    EncounterRecord,
    EntityKind,
    GeneratedEntity,
    ItemRecord,
    ItemStats,
    StatBlock,
)
from .tables import (
    AttributeTable,
    CurrencyEntry,
    TableSet,
    TemplateSet,
    WeightedEntry,
    WeightedTable,
)

__all__ = [
    # rarity
    "RarityProfile",
    "RarityTier",
    "TierProfile",
    "TierScale",
    # records
    "STAT_NAMES",
    "CreatureRecord",
    "EncounterRecord",
    "EntityKind",
    "GeneratedEntity",
    "ItemRecord",
    "ItemStats",
    "StatBlock",
    # tables
    "AttributeTable",
    "CurrencyEntry",
    "TableSet",
    "TemplateSet",
    "WeightedEntry",
    "WeightedTable",
]
