"""Tests for breeding: inheritance, rarity promotion, stats, lineage."""

from __future__ import annotations

import json

import pytest

from petgen.content.registry import ladder_for
from petgen.engine.breeding import (
    INHERITANCE_WEIGHTS,
    TIER_BONUS,
    Outcome,
    breed,
    breed_with_trace,
    coerce_parent,
)
from petgen.engine.errors import IneligibleParents, InvalidHash
from petgen.engine.generators import generate_creature
from petgen.engine.hash_stream import breeding_session_hash, seed_hash
from petgen.ir.records import CreatureRecord
from petgen.ir.tables import TableSet

from tests.conftest import make_creature

ZERO_HASH = "0" * 64


@pytest.fixture
def parent_a() -> CreatureRecord:
    return make_creature(
        name="Ember Drake",
        rarity="Rare",
        type="Dragon",
        generation=1,
        special_features=("Glowing Eyes", "Crystal Horns", "Fire Mane"),
        abilities=("Fire Breath", "Quick Dash", "Shield Bash", "Roar", "Heal"),
        stats={"attack": 50, "defense": 52, "speed": 55, "intelligence": 51, "luck": 53, "health": 50},
    )


@pytest.fixture
def parent_b() -> CreatureRecord:
    return make_creature(
        name="Tide Serpent",
        rarity="Epic",
        type="Leviathan",
        color="Azure",
        element="Water",
        generation=2,
        special_features=("Scale Armor", "Glowing Eyes", "Tidal Fins", "Pearl Core"),
        abilities=("Water Jet", "Fire Breath", "Dive", "Whirlpool", "Regenerate", "Bubble"),
        stats={"attack": 60, "defense": 66, "speed": 70, "intelligence": 65, "luck": 67, "health": 70},
    )


class TestZeroSession:
    """Every slot of the zero hash draws 0."""

    def test_every_trait_inherits_parent_a(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        child, trace = breed_with_trace(parent_a, parent_b, ZERO_HASH)
        assert set(trace.traits) == set(CreatureRecord.trait_fields)
        for field in CreatureRecord.trait_fields:
            assert getattr(child, field) == getattr(parent_a, field)
            assert trace.traits[field] is Outcome.PARENT_A

    def test_rarity_promoted_above_better_parent(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        child, trace = breed_with_trace(parent_a, parent_b, ZERO_HASH)
        assert trace.base_rarity == "Epic"
        assert trace.rarity_promoted
        assert child.rarity == "Legendary"

    def test_name_and_lineage(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        child = breed(parent_a, parent_b, ZERO_HASH)
        assert child.name == "Young Dragon"
        assert child.generation == 3
        assert child.parent_hashes == (parent_a.hash, parent_b.hash)
        assert child.hash == ZERO_HASH

    def test_stats(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        child = breed(parent_a, parent_b, ZERO_HASH)
        bonus = 4 * TIER_BONUS  # Legendary, no jitter
        assert child.stats.attack == 55 + bonus == 75
        assert child.stats.health == 60 + bonus

    def test_features_are_truncated_union(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        child = breed(parent_a, parent_b, ZERO_HASH)
        # Legendary: 5 features, 7 abilities
        assert child.special_features == (
            "Glowing Eyes", "Crystal Horns", "Fire Mane", "Scale Armor", "Tidal Fins",
        )
        assert child.abilities == (
            "Fire Breath", "Quick Dash", "Shield Bash", "Roar", "Heal", "Water Jet", "Dive",
        )


class TestProperties:
    def test_deterministic(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        session = breeding_session_hash(parent_a.hash, parent_b.hash, "session-1")
        assert breed(parent_a, parent_b, session) == breed(parent_a, parent_b, session)

    def test_generation_monotonic(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        for i in range(30):
            child = breed(parent_a, parent_b, seed_hash("gen", i))
            assert child.generation > max(parent_a.generation, parent_b.generation)

    def test_rarity_never_drops(self, tables: TableSet, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        ladder = ladder_for(tables.rarity)
        for i in range(100):
            child, trace = breed_with_trace(parent_a, parent_b, seed_hash("rarity", i))
            assert ladder.rank(child.rarity) >= ladder.rank("Epic")
            assert ladder.rank(child.rarity) <= ladder.rank("Epic") + 1
            assert trace.rarity_promoted == (child.rarity == "Legendary")

    def test_stat_floor(self, tables: TableSet, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        ladder = ladder_for(tables.rarity)
        for i in range(50):
            child = breed(parent_a, parent_b, seed_hash("stats", i))
            bonus = ladder.rank(child.rarity) * TIER_BONUS
            for stat in ("attack", "defense", "speed", "intelligence", "luck"):
                avg = (getattr(parent_a.stats, stat) + getattr(parent_b.stats, stat)) // 2
                assert getattr(child.stats, stat) >= avg + bonus

    def test_no_duplicate_labels(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        for i in range(30):
            child = breed(parent_a, parent_b, seed_hash("dupes", i))
            assert len(set(child.special_features)) == len(child.special_features)
            assert len(set(child.abilities)) == len(child.abilities)

    def test_trace_covers_every_trait(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        _child, trace = breed_with_trace(parent_a, parent_b, seed_hash("trace"))
        assert len(trace.traits) == 15

    def test_mutations_come_from_tables(self, tables: TableSet, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        mutated = 0
        for i in range(200):
            child, trace = breed_with_trace(parent_a, parent_b, seed_hash("mutate", i))
            if trace.traits["color"] is Outcome.MUTATION:
                mutated += 1
                assert child.color in tables.colors.values
            else:
                assert child.color in (parent_a.color, parent_b.color)
        assert mutated > 0

    def test_generated_parents(self) -> None:
        a = generate_creature(seed_hash("gen-a"))
        b = generate_creature(seed_hash("gen-b"))
        child = breed(a, b, breeding_session_hash(a.hash, b.hash, "s"))
        assert child.generation == 2
        assert set(a.special_features) & set(child.special_features)

    def test_inheritance_weights_sum_to_choice_range(self) -> None:
        assert sum(w for _, w in INHERITANCE_WEIGHTS) == 100


class TestParents:
    def test_accepts_mapping(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        child = breed(parent_a.model_dump(), parent_b.model_dump(), ZERO_HASH)
        assert child.rarity == "Legendary"

    def test_accepts_to_record_output(self) -> None:
        a = generate_creature(seed_hash("record-a"))
        b = generate_creature(seed_hash("record-b"))
        session = breeding_session_hash(a.hash, b.hash, "s")
        child = breed(a, b, session)
        assert breed(a.to_record(), b.to_record(), session) == child
        grandchild = breed(child.to_record(), a.to_record(), seed_hash("next"))
        assert grandchild.generation == 3
        assert grandchild.parent_hashes == (child.hash, a.hash)

    def test_accepts_json_round_tripped_record(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        stored = json.loads(json.dumps(parent_a.to_record()))
        assert breed(stored, parent_b, ZERO_HASH) == breed(parent_a, parent_b, ZERO_HASH)

    def test_missing_health_uses_tier_floor(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        a = make_creature(**{**parent_a.model_dump(), "stats": {**parent_a.stats.model_dump(), "health": None}})
        child = breed(a, parent_b, ZERO_HASH)
        # Rare floor 50, B health 70
        assert child.stats.health == 80

    def test_none_parent(self, parent_a: CreatureRecord) -> None:
        with pytest.raises(IneligibleParents, match="parent_b is missing"):
            breed(parent_a, None, ZERO_HASH)

    def test_incomplete_mapping(self, parent_a: CreatureRecord) -> None:
        with pytest.raises(IneligibleParents, match="incomplete"):
            breed({"hash": ZERO_HASH, "name": "Half"}, parent_a, ZERO_HASH)

    def test_wrong_type(self, parent_a: CreatureRecord) -> None:
        with pytest.raises(IneligibleParents, match="CreatureRecord"):
            coerce_parent(42, "parent_a")

    def test_unknown_rarity(self, parent_a: CreatureRecord) -> None:
        odd = make_creature(name="Odd", rarity="Ultra")
        with pytest.raises(IneligibleParents, match="unknown rarity"):
            breed(parent_a, odd, ZERO_HASH)

    def test_malformed_session_hash(self, parent_a: CreatureRecord, parent_b: CreatureRecord) -> None:
        with pytest.raises(InvalidHash):
            breed(parent_a, parent_b, "zz")
