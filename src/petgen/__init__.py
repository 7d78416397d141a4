"""Deterministic procedural generation and breeding for a virtual-pet game.

A 64-character hex hash is the sole seed of every generated creature, wild
encounter and item; breeding turns two creatures and a session hash into an
offspring.  Every entry point is a pure function of its inputs.
"""

from .engine.breeding import InheritanceTrace, Outcome, breed, breed_with_trace
from .engine.errors import (
    GenerationError,
    IneligibleParents,
    InvalidHash,
    InvalidRange,
    PetGenError,
)
from .engine.generators import generate_creature, generate_item, generate_wild_encounter, roll_rarity
from .engine.hash_stream import HashStream, breeding_session_hash, draw, seed_hash, validate_hash
from .engine.rarity import RarityLadder
from .ir import CreatureRecord, EncounterRecord, ItemRecord, TableSet

__all__ = [
    # entry points
    "breed",
    "breed_with_trace",
    "generate_creature",
    "generate_item",
    "generate_wild_encounter",
    "roll_rarity",
    # primitives
    "HashStream",
    "RarityLadder",
    "breeding_session_hash",
    "draw",
    "seed_hash",
    "validate_hash",
    # records
    "CreatureRecord",
    "EncounterRecord",
    "InheritanceTrace",
    "ItemRecord",
    "Outcome",
    "TableSet",
    # errors
    "GenerationError",
    "IneligibleParents",
    "InvalidHash",
    "InvalidRange",
    "PetGenError",
]
