"""Shared fixtures and helpers for petgen tests."""

from __future__ import annotations

from typing import Any

import pytest

from petgen.content.registry import default_tables
from petgen.engine.hash_stream import seed_hash
from petgen.ir.records import CreatureRecord, StatBlock
from petgen.ir.tables import TableSet

ZERO_HASH = "0" * 64
MAX_HASH = "f" * 64


@pytest.fixture(scope="module")
def tables() -> TableSet:
    """The packaged v1 table set, loaded once."""
    return default_tables()


@pytest.fixture(scope="module")
def sample_hashes() -> list[str]:
    """A reproducible spread of hashes for property checks."""
    return [seed_hash("sample", i) for i in range(200)]


def make_creature(**overrides: Any) -> CreatureRecord:
    """Hand-built creature record; stats given as a dict are wrapped."""
    defaults: dict[str, Any] = dict(
        hash=seed_hash("parent", overrides.get("name", "Test Pet")),
        name="Test Pet",
        rarity="Common",
        color="Crimson",
        size="Small",
        type="Dragon",
        element="Fire",
        personality="Brave",
        habitat="Forest",
        pattern="Striped",
        aura="Glowing",
        birthmark="Star",
        eye_type="Round",
        wing_type="Feathered",
        tail_type="Fluffy",
        fur_texture="Soft",
        scale="Smooth",
        horn="Curved",
        special_features=("Glowing Eyes",),
        abilities=("Fire Breath", "Quick Dash", "Shield Bash"),
        stats={"attack": 30, "defense": 30, "speed": 30, "intelligence": 30, "luck": 30, "health": 30},
        generation=1,
    )
    defaults.update(overrides)
    if isinstance(defaults["stats"], dict):
        defaults["stats"] = StatBlock(**defaults["stats"])
    return CreatureRecord(**defaults)
