"""Sample many hashes through a generator and tabulate rarity frequencies.

Orchestrates seed hashing -> generation -> per-tier counts -> the
:class:`RarityDistribution` model, and saves/loads it as JSON.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from petgen.balance.models import RarityDistribution, TierFrequency
from petgen.content.registry import ladder_for
from petgen.engine.errors import GenerationError
from petgen.engine.generators import (
    RARITY_SLOTS,
    generate_creature,
    generate_item,
    generate_wild_encounter,
    resolve_tables,
)
from petgen.engine.hash_stream import draw, seed_hash
from petgen.engine.rarity import RARITY_RANGE
from petgen.ir.tables import TableSet

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "Enchanted Forest"


def _generated_rarity(kind: str, hash_hex: str, environment: str, tables: TableSet) -> str:
    if kind == "creature":
        return generate_creature(hash_hex, tables=tables).rarity
    if kind == "encounter":
        return generate_wild_encounter(environment, hash_hex, tables=tables).rarity
    return generate_item(environment, hash_hex, tables=tables).rarity


def compute_rarity_distribution(
    num_samples: int,
    base_seed: int = 42,
    kind: str = "creature",
    tables: TableSet | None = None,
    roll_rarity_only: bool = False,
    environment: str = DEFAULT_ENVIRONMENT,
) -> RarityDistribution:
    """Tabulate the rarity of *num_samples* entities of one kind.

    Parameters
    ----------
    num_samples:
        Number of hashes to sample.  Hash ``i`` is
        ``seed_hash("rarity-sample", base_seed, i)``.
    base_seed:
        Starting seed for reproducible samples.
    kind:
        ``"creature"``, ``"encounter"`` or ``"item"``.
    tables:
        Table set to generate against; the packaged default if ``None``.
    roll_rarity_only:
        Read only the rarity slot instead of generating each entity.
        Produces identical tiers, much faster.
    environment:
        Environment passed to the encounter and item generators.
    """
    if kind not in RARITY_SLOTS:
        raise GenerationError(
            f"Unknown entity kind {kind!r}. Known kinds: {list(RARITY_SLOTS)}"
        )
    if num_samples < 1:
        raise GenerationError(f"num_samples must be >= 1, got {num_samples}")
    tables = resolve_tables(tables)
    ladder = ladder_for(tables.rarity)
    slot = RARITY_SLOTS[kind]

    counts: Counter[str] = Counter()
    for i in range(num_samples):
        hash_hex = seed_hash("rarity-sample", base_seed, i)
        if roll_rarity_only:
            counts[ladder.classify(draw(hash_hex, slot, RARITY_RANGE)).name] += 1
        else:
            counts[_generated_rarity(kind, hash_hex, environment, tables)] += 1

    logger.info(
        "Sampled %d %s rarities (seed %d, rarity_only=%s)",
        num_samples, kind, base_seed, roll_rarity_only,
    )
    return RarityDistribution(
        kind=kind,
        num_samples=num_samples,
        base_seed=base_seed,
        generator_version=tables.version,
        rarity_only=roll_rarity_only,
        generated_at=datetime.now(timezone.utc).isoformat(),
        tiers=[
            TierFrequency(
                tier=tier.name,
                count=counts[tier.name],
                observed=counts[tier.name] / num_samples,
                expected=tier.weight / RARITY_RANGE,
            )
            for tier in ladder
        ],
    )


def save_distribution(distribution: RarityDistribution, path: Path) -> None:
    """Save distribution to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(distribution.model_dump(), indent=2))


def load_distribution(path: Path) -> RarityDistribution:
    """Load distribution from JSON file."""
    data = json.loads(path.read_text())
    return RarityDistribution.model_validate(data)
