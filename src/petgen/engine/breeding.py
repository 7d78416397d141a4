"""Breeding: two parent creatures plus a session hash give one offspring.

Every categorical trait is resolved independently with a three-way draw:
inherit parent A's value, inherit parent B's value, or mutate to a fresh
value from the same table used for generation.  Features and abilities
accumulate across the lineage, rarity can only hold or climb, and stats
start from the parents' average.

Session hash slots::

    0-5    choice draws: color, type, element, habitat, size, personality
    6      rarity upgrade roll
    7      name template
    8-13   mutation draws for the six traits above
    14-22  choice draws: pattern, aura, birthmark, eye, wing, tail, fur,
           scale, horn
    23-31  mutation draws for those nine traits
    32-37  stat jitter: attack, defense, speed, intelligence, luck, health

Mutation slots are always reserved, whether or not the trait mutates.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from petgen.content.registry import ladder_for
from petgen.ir.rarity import RarityTier
from petgen.ir.records import STAT_NAMES, CreatureRecord, StatBlock
from petgen.ir.tables import TableSet

from .errors import IneligibleParents
from .generators import COSMETIC_TRAITS, CREATURE_STATS, resolve_tables
from .hash_stream import HashStream
from .naming import choose_template, render
from .weighted import select_weighted

logger = logging.getLogger(__name__)

CORE_TRAITS: tuple[tuple[str, str], ...] = (
    ("color", "colors"),
    ("type", "creature_types"),
    ("element", "elements"),
    ("habitat", "habitats"),
    ("size", "sizes"),
    ("personality", "personalities"),
)
"""Core traits and their tables, in slot order."""

CHOICE_RANGE = 100
UPGRADE_CHANCE = 10
"""Percent chance that the offspring is promoted one tier above the better parent."""

TIER_BONUS = 5
"""Stat bonus per rank of the offspring's tier."""

JITTER_RANGE = 10
"""Stat jitter is drawn from ``[0, JITTER_RANGE)``; it never lowers a stat."""


class Outcome(str, Enum):
    """How a single trait was resolved."""

    PARENT_A = "parent_a"
    PARENT_B = "parent_b"
    MUTATION = "mutation"


INHERITANCE_WEIGHTS: tuple[tuple[Outcome, int], ...] = (
    (Outcome.PARENT_A, 45),
    (Outcome.PARENT_B, 45),
    (Outcome.MUTATION, 10),
)


class InheritanceTrace(BaseModel):
    """Which way each trait went, for callers that narrate a lineage."""

    model_config = ConfigDict(frozen=True)

    traits: dict[str, Outcome]
    base_rarity: str
    """The better parent's tier."""
    rarity_promoted: bool


def _flatten_record(data: Mapping[str, Any]) -> dict[str, Any]:
    """Lift ``category_traits`` of a :meth:`~GeneratedEntity.to_record` dict
    back to top-level fields."""
    flat = dict(data)
    traits = flat.pop("category_traits", None)
    if isinstance(traits, Mapping):
        flat = {**traits, **flat}
    flat.pop("kind", None)
    return flat


def coerce_parent(parent: Any, label: str) -> CreatureRecord:
    """Accept a :class:`CreatureRecord`, its ``model_dump()`` or its
    ``to_record()`` shape."""
    if parent is None:
        raise IneligibleParents(f"{label} is missing")
    if isinstance(parent, CreatureRecord):
        return parent
    if isinstance(parent, Mapping):
        try:
            return CreatureRecord.model_validate(_flatten_record(parent))
        except ValidationError as exc:
            raise IneligibleParents(
                f"{label} is incomplete ({exc.error_count()} invalid field(s))"
            ) from exc
    raise IneligibleParents(
        f"{label} must be a CreatureRecord, got {type(parent).__name__}"
    )


def _parent_tier(tables: TableSet, parent: CreatureRecord, label: str) -> RarityTier:
    try:
        return ladder_for(tables.rarity).tier(parent.rarity)
    except KeyError as exc:
        raise IneligibleParents(f"{label} has unknown rarity {parent.rarity!r}") from exc


def _choose(stream: HashStream) -> Outcome:
    return select_weighted(INHERITANCE_WEIGHTS, stream.next(CHOICE_RANGE))


def _merge_labels(first: tuple[str, ...], second: tuple[str, ...], cap: int) -> tuple[str, ...]:
    """Order-preserving union of *first* then *second*, truncated to *cap*."""
    merged: list[str] = []
    for label in first + second:
        if label not in merged:
            merged.append(label)
    return tuple(merged[:cap])


def breed_with_trace(
    parent_a: CreatureRecord | Mapping[str, Any] | None,
    parent_b: CreatureRecord | Mapping[str, Any] | None,
    session_hash: str,
    *,
    tables: TableSet | None = None,
) -> tuple[CreatureRecord, InheritanceTrace]:
    """Breed two parents; return the offspring and how each trait resolved.

    Raises :class:`InvalidHash` for a malformed session hash and
    :class:`IneligibleParents` for a missing or incomplete parent.
    Eligibility rules such as minimum level or breeding limits belong to the
    game-state layer and are not checked here.
    """
    stream = HashStream(session_hash)
    a = coerce_parent(parent_a, "parent_a")
    b = coerce_parent(parent_b, "parent_b")
    tables = resolve_tables(tables)
    ladder = ladder_for(tables.rarity)
    tier_a = _parent_tier(tables, a, "parent_a")
    tier_b = _parent_tier(tables, b, "parent_b")

    core_choices = [_choose(stream) for _ in CORE_TRAITS]
    upgrade_roll = stream.next(CHOICE_RANGE)
    template = choose_template(stream, tables.templates.offspring)
    core_mutations = [getattr(tables, table).pick(stream) for _, table in CORE_TRAITS]
    cosmetic_choices = [_choose(stream) for _ in COSMETIC_TRAITS]
    cosmetic_mutations = [getattr(tables, table).pick(stream) for _, table in COSMETIC_TRAITS]
    jitter = {stat: stream.next(JITTER_RANGE) for stat in CREATURE_STATS}

    traits: dict[str, str] = {}
    outcomes: dict[str, Outcome] = {}
    resolved = zip(
        CORE_TRAITS + COSMETIC_TRAITS,
        core_choices + cosmetic_choices,
        core_mutations + cosmetic_mutations,
    )
    for (field, _table), outcome, mutation in resolved:
        if outcome is Outcome.PARENT_A:
            traits[field] = getattr(a, field)
        elif outcome is Outcome.PARENT_B:
            traits[field] = getattr(b, field)
        else:
            traits[field] = mutation
        outcomes[field] = outcome

    base = ladder.better(tier_a, tier_b)
    tier = ladder.promote(base) if upgrade_roll < UPGRADE_CHANCE else base

    bonus = tier.rank * TIER_BONUS
    stats = {
        stat: (getattr(a.stats, stat) + getattr(b.stats, stat)) // 2 + bonus + jitter[stat]
        for stat in STAT_NAMES
    }
    health_a = a.stats.health if a.stats.health is not None else tier_a.stat_floor
    health_b = b.stats.health if b.stats.health is not None else tier_b.stat_floor
    stats["health"] = (health_a + health_b) // 2 + bonus + jitter["health"]

    name = render(
        template,
        type=traits["type"],
        color=traits["color"],
        element=traits["element"],
        rarity=tier.name,
        parent_a_name=a.name,
        parent_b_name=b.name,
    )
    generation = max(a.generation, b.generation) + 1
    logger.debug(
        "Bred %r (%s, gen %d) from %s x %s",
        name, tier.name, generation, a.hash[:12], b.hash[:12],
    )

    offspring = CreatureRecord(
        hash=stream.hash,
        name=name,
        rarity=tier.name,
        **traits,
        special_features=_merge_labels(a.special_features, b.special_features, tier.feature_count),
        abilities=_merge_labels(a.abilities, b.abilities, tier.ability_count),
        stats=StatBlock(**stats),
        generation=generation,
        generator_version=tables.version,
        parent_hashes=(a.hash, b.hash),
    )
    trace = InheritanceTrace(
        traits=outcomes,
        base_rarity=base.name,
        rarity_promoted=tier.rank > base.rank,
    )
    return offspring, trace


def breed(
    parent_a: CreatureRecord | Mapping[str, Any] | None,
    parent_b: CreatureRecord | Mapping[str, Any] | None,
    session_hash: str,
    *,
    tables: TableSet | None = None,
) -> CreatureRecord:
    """Breed two parents into one offspring.  See :func:`breed_with_trace`."""
    offspring, _trace = breed_with_trace(parent_a, parent_b, session_hash, tables=tables)
    return offspring
