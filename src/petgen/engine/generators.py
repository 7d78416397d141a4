"""Hash-driven generators for creatures, wild encounters and items.

Every generator reads its hash through a :class:`HashStream` in a fixed,
documented slot order.  Fixed-position traits come first; the feature and
ability lists, whose length depends on rarity, are drawn last so they can
never shift another trait's slot.

Creature slots::

    0 color  1 size  2 type  3 element  4 personality  5 habitat
    6 rarity
    7-15 pattern, aura, birthmark, eye, wing, tail, fur, scale, horn
    16-21 attack, defense, speed, intelligence, luck, health
    22 name template
    23+ special features, then abilities

Wild encounter slots::

    0 color  1 size  2 type  3 element  4 personality  5 pattern  6 aura
    7 rarity
    8-13 health, attack, defense, speed, intelligence, luck
    14 name template
    15+ special features, then abilities

Item slots::

    0 equipment slot (weighted)  1 material  2 color  3 prefix  4 effect
    5 rarity  6 subtype  7 value  8-10 modifiers  11 name template

Stats are ``stat_floor + draw(STAT_VARIANCE)`` and, like everything else,
come from the hash: the same hash always yields the same record.
"""

from __future__ import annotations

import logging
import math

from petgen.content.registry import default_tables, ladder_for
from petgen.ir.rarity import RarityTier
from petgen.ir.records import (
    STAT_NAMES,
    CreatureRecord,
    EncounterRecord,
    ItemRecord,
    ItemStats,
    StatBlock,
)
from petgen.ir.tables import AttributeTable, TableSet

from .errors import GenerationError
from .hash_stream import HashStream
from .naming import choose_template, render
from .rarity import RARITY_RANGE

logger = logging.getLogger(__name__)

STAT_VARIANCE = 20
"""Stats are drawn from ``[stat_floor, stat_floor + STAT_VARIANCE)``."""

CREATURE_STATS: tuple[str, ...] = STAT_NAMES + ("health",)
ENCOUNTER_STATS: tuple[str, ...] = ("health",) + STAT_NAMES

COSMETIC_TRAITS: tuple[tuple[str, str], ...] = (
    ("pattern", "patterns"),
    ("aura", "auras"),
    ("birthmark", "birthmarks"),
    ("eye_type", "eye_types"),
    ("wing_type", "wing_types"),
    ("tail_type", "tail_types"),
    ("fur_texture", "fur_textures"),
    ("scale", "scales"),
    ("horn", "horns"),
)
"""Creature cosmetic traits and the table each one is drawn from, in slot order."""

# Item slot positions
SLOT_ITEM_SUBTYPE = 6
SLOT_ITEM_VALUE = 7
SLOT_ITEM_MODIFIERS = (8, 9, 10)
SLOT_ITEM_NAME = 11

WEAPON_SLOTS = frozenset({"Weapon"})
ARMOR_SLOTS = frozenset({"Helmet", "Chestplate", "Leggings", "Boots", "Gloves", "Shield"})
ACCESSORY_SLOTS = frozenset({"Ring", "Necklace", "Belt", "Cape", "Earring", "Bracelet"})

DEFAULT_DURABILITY = 100


def resolve_tables(tables: TableSet | None) -> TableSet:
    """The caller's table set (validated) or the packaged default."""
    if tables is None:
        return default_tables()
    tables.validate_tables()
    return tables


def pick_distinct(stream: HashStream, table: AttributeTable, count: int) -> list[str]:
    """Draw up to *count* distinct labels from *table*, one slot per label.

    A draw that lands on a label already taken probes forward (wrapping) to
    the next free one.  When every label is taken the list stops early.
    """
    table.require()
    size = len(table)
    picked: list[str] = []
    seen: set[str] = set()
    for _ in range(count):
        index = stream.next(size)
        for _probe in range(size):
            label = table[index]
            if label not in seen:
                break
            index = (index + 1) % size
        else:
            logger.debug(
                "Table %r exhausted after %d of %d picks", table.name, len(picked), count
            )
            break
        seen.add(label)
        picked.append(label)
    return picked


def roll_stats(stream: HashStream, tier: RarityTier, names: tuple[str, ...]) -> StatBlock:
    """One slot per stat, in the order of *names*."""
    values = {name: tier.stat_floor + stream.next(STAT_VARIANCE) for name in names}
    return StatBlock(**values)


def _require_environment(environment: object) -> str:
    if not isinstance(environment, str) or not environment.strip():
        raise GenerationError(f"environment must be a non-empty string, got {environment!r}")
    return environment


# =====================================================================
# Creature
# =====================================================================

def generate_creature(hash_hex: str, *, tables: TableSet | None = None) -> CreatureRecord:
    """Generate the creature identified by *hash_hex*.

    Raises :class:`InvalidHash` for a malformed hash and
    :class:`GenerationError` if any table is empty.
    """
    stream = HashStream(hash_hex)
    tables = resolve_tables(tables)
    ladder = ladder_for(tables.rarity)

    color = tables.colors.pick(stream)
    size = tables.sizes.pick(stream)
    creature_type = tables.creature_types.pick(stream)
    element = tables.elements.pick(stream)
    personality = tables.personalities.pick(stream)
    habitat = tables.habitats.pick(stream)
    tier = ladder.roll(stream)
    cosmetics = {field: getattr(tables, table).pick(stream) for field, table in COSMETIC_TRAITS}
    stats = roll_stats(stream, tier, CREATURE_STATS)
    template = choose_template(stream, tables.templates.creature)
    features = pick_distinct(stream, tables.special_features, tier.feature_count)
    abilities = pick_distinct(stream, tables.abilities, tier.ability_count)

    name = render(
        template,
        personality=personality,
        type=creature_type,
        element=element,
        color=color,
        habitat=habitat,
        rarity=tier.name,
    )
    logger.debug("Generated creature %r (%s) from %s", name, tier.name, stream.hash[:12])

    return CreatureRecord(
        hash=stream.hash,
        name=name,
        rarity=tier.name,
        color=color,
        size=size,
        type=creature_type,
        element=element,
        personality=personality,
        habitat=habitat,
        **cosmetics,
        special_features=tuple(features),
        abilities=tuple(abilities),
        stats=stats,
        generator_version=tables.version,
    )


# =====================================================================
# Wild encounter
# =====================================================================

def generate_wild_encounter(
    environment: str,
    hash_hex: str,
    *,
    tables: TableSet | None = None,
) -> EncounterRecord:
    """Generate the wild creature met in *environment* for *hash_hex*.

    The environment is recorded on the encounter but does not influence any
    draw: the same hash yields the same creature wherever it is met.
    """
    stream = HashStream(hash_hex)
    environment = _require_environment(environment)
    tables = resolve_tables(tables)
    ladder = ladder_for(tables.rarity)

    color = tables.colors.pick(stream)
    size = tables.sizes.pick(stream)
    creature_type = tables.creature_types.pick(stream)
    element = tables.elements.pick(stream)
    personality = tables.personalities.pick(stream)
    pattern = tables.patterns.pick(stream)
    aura = tables.auras.pick(stream)
    tier = ladder.roll(stream)
    stats = roll_stats(stream, tier, ENCOUNTER_STATS)
    template = choose_template(stream, tables.templates.encounter)
    features = pick_distinct(stream, tables.special_features, tier.feature_count)
    abilities = pick_distinct(stream, tables.abilities, tier.ability_count)

    context = {
        "personality": personality,
        "type": creature_type,
        "element": element,
        "color": color,
        "environment": environment,
        "rarity": tier.name,
    }
    name = render(template, **context)
    description = render(tables.templates.encounter_description, **context)
    logger.debug(
        "Generated encounter %r (%s) in %s from %s",
        name, tier.name, environment, stream.hash[:12],
    )

    return EncounterRecord(
        hash=stream.hash,
        name=name,
        rarity=tier.name,
        environment=environment,
        color=color,
        size=size,
        type=creature_type,
        element=element,
        personality=personality,
        pattern=pattern,
        aura=aura,
        special_features=tuple(features),
        abilities=tuple(abilities),
        stats=stats,
        behavior_traits=(personality,),
        capture_rate=max(5, 80 - tier.stat_floor),
        experience_reward=tier.stat_floor * 2,
        description=description,
        generator_version=tables.version,
    )


# =====================================================================
# Item
# =====================================================================

def slot_group(category: str) -> str:
    """Map an equipment slot / item category onto its stat profile group."""
    if category in WEAPON_SLOTS:
        return "weapon"
    if category in ARMOR_SLOTS:
        return "armor"
    if category in ACCESSORY_SLOTS:
        return "accessory"
    if category == "Currency":
        return "currency"
    if category == "Pet Food":
        return "pet_food"
    return "other"


def generate_item(
    environment: str,
    hash_hex: str,
    *,
    tables: TableSet | None = None,
) -> ItemRecord:
    """Generate the item found in *environment* for *hash_hex*.

    The equipment slot is chosen by weight; the slot's group then decides
    how the subtype, value and modifier slots are read.  Every group reads
    the same slot positions, so the name template always sits in slot 11.
    """
    stream = HashStream(hash_hex)
    environment = _require_environment(environment)
    tables = resolve_tables(tables)
    ladder = ladder_for(tables.rarity)

    category = tables.equipment_slots.pick(stream)
    material = tables.materials.pick(stream)
    color = tables.colors.pick(stream)
    prefix = tables.prefixes.pick(stream)
    effect = tables.effect_types.pick(stream)
    tier = ladder.roll(stream)

    group = slot_group(category)
    mult = tier.item_multiplier
    mod_a, mod_b, mod_c = SLOT_ITEM_MODIFIERS
    subtype: str | None = None
    context: dict[str, object] = {
        "category": category,
        "material": material,
        "color": color,
        "prefix": prefix,
        "effect": effect,
        "rarity": tier.name,
    }

    if group == "weapon":
        subtype = tables.weapon_types[stream.draw_at(SLOT_ITEM_SUBTYPE, len(tables.weapon_types))]
        value = math.floor(50 * mult + stream.draw_at(SLOT_ITEM_VALUE, 100))
        durability = 50 + stream.draw_at(mod_b, 50)
        stats = ItemStats(
            attack=math.floor((5 + stream.draw_at(mod_a, 15)) * mult),
            critical_chance=stream.draw_at(mod_c, 20),
            effect_power=math.floor(mult * 10),
        )
    elif group == "armor":
        value = math.floor(40 * mult + stream.draw_at(SLOT_ITEM_VALUE, 80))
        durability = 50 + stream.draw_at(mod_b, 50)
        stats = ItemStats(
            defense=math.floor((3 + stream.draw_at(mod_a, 12)) * mult),
            resistance=stream.draw_at(mod_c, 25),
            effect_power=math.floor(mult * 8),
        )
    elif group == "accessory":
        value = math.floor(60 * mult + stream.draw_at(SLOT_ITEM_VALUE, 120))
        durability = DEFAULT_DURABILITY
        stats = ItemStats(
            magic_power=math.floor((2 + stream.draw_at(mod_a, 8)) * mult),
            luck=stream.draw_at(mod_b, 15),
            experience=stream.draw_at(mod_c, 10),
            effect_power=math.floor(mult * 12),
        )
    elif group == "currency":
        currency = tables.currencies[stream.draw_at(SLOT_ITEM_SUBTYPE, len(tables.currencies))]
        subtype = currency.name
        amount = math.floor((10 + stream.draw_at(SLOT_ITEM_VALUE, 190)) * mult)
        value = math.floor(amount * currency.rate)
        durability = DEFAULT_DURABILITY
        stats = ItemStats()
        context["amount"] = amount
    elif group == "pet_food":
        subtype = tables.food_types[stream.draw_at(SLOT_ITEM_SUBTYPE, len(tables.food_types))]
        qualities = tables.food_qualities
        context["quality"] = qualities[min(tier.rank, len(qualities) - 1)]
        value = math.floor(15 * mult)
        durability = DEFAULT_DURABILITY
        stats = ItemStats(
            health_boost=math.floor((5 + stream.draw_at(mod_a, 25)) * mult),
            happiness_boost=math.floor((5 + stream.draw_at(mod_b, 20)) * mult),
            energy_boost=math.floor((5 + stream.draw_at(mod_c, 15)) * mult),
        )
    else:
        value = math.floor(25 * mult + stream.draw_at(SLOT_ITEM_VALUE, 50))
        durability = DEFAULT_DURABILITY
        stats = ItemStats(
            power=math.floor(mult * 5),
            effect_power=math.floor(mult * 10),
        )

    context["subtype"] = subtype
    templates = tables.templates.item.get(group)
    if not templates:
        raise GenerationError(f"no item name templates for slot group {group!r}")
    template = templates[stream.draw_at(SLOT_ITEM_NAME, len(templates))]
    name = render(template, **context)
    description_template = tables.templates.item_description.get(group)
    if description_template is None:
        raise GenerationError(f"no item description template for slot group {group!r}")
    description = render(description_template, **context)
    logger.debug(
        "Generated item %r (%s %s) in %s from %s",
        name, tier.name, category, environment, stream.hash[:12],
    )

    return ItemRecord(
        hash=stream.hash,
        name=name,
        rarity=tier.name,
        environment=environment,
        category=category,
        slot_group=group,
        color=color,
        material=material,
        prefix=prefix,
        effect=effect,
        subtype=subtype,
        special_features=(f"{effect} Properties", f"{material} Composition"),
        abilities=(effect,),
        stats=stats,
        value=value,
        durability=durability,
        experience_reward=math.floor(5 * mult),
        description=description,
        generator_version=tables.version,
    )


# =====================================================================
# Rarity preview
# =====================================================================

RARITY_SLOTS: dict[str, int] = {"creature": 6, "encounter": 7, "item": 5}
"""Slot each generator reads its rarity draw from."""


def roll_rarity(kind: str, hash_hex: str, *, tables: TableSet | None = None) -> RarityTier:
    """The rarity tier the *kind* generator would assign to *hash_hex*.

    Reads only the rarity slot, so it is much cheaper than full generation.
    """
    try:
        slot = RARITY_SLOTS[kind]
    except KeyError:
        raise GenerationError(
            f"Unknown entity kind {kind!r}. Known kinds: {list(RARITY_SLOTS)}"
        ) from None
    stream = HashStream(hash_hex)
    tables = resolve_tables(tables)
    return ladder_for(tables.rarity).classify(stream.draw_at(slot, RARITY_RANGE))
