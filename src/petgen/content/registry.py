"""Table registry -- loads the versioned attribute-table asset.

The packaged asset lives at ``petgen/data/tables_v1.json``.  A different
asset (e.g. a newer version under test) can be selected per call or through
the ``PETGEN_TABLES_PATH`` environment variable.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from petgen.engine.rarity import RarityLadder
from petgen.ir.rarity import RarityProfile
from petgen.ir.tables import TableSet

logger = logging.getLogger(__name__)

TABLES_ENV_VAR = "PETGEN_TABLES_PATH"

_DATA_DIR = Path(__file__).resolve().parents[1] / "data"  # src/petgen/content -> petgen
_DEFAULT_TABLES_PATH = _DATA_DIR / "tables_v1.json"


def resolve_tables_path(path: str | Path | None = None) -> Path:
    """Explicit *path*, else ``$PETGEN_TABLES_PATH``, else the packaged asset."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(TABLES_ENV_VAR)
    if env_path:
        return Path(env_path)
    return _DEFAULT_TABLES_PATH


def load_tables(path: str | Path | None = None) -> TableSet:
    """Read and validate a table asset.

    Raises :class:`GenerationError` if any table is empty or the rarity
    profile is inconsistent; missing files and malformed JSON propagate as
    ``OSError`` / ``ValueError``.
    """
    resolved = resolve_tables_path(path)
    with open(resolved, encoding="utf-8") as f:
        raw = json.load(f)
    tables = TableSet.model_validate(raw)
    tables.validate_tables()
    ladder_for(tables.rarity)
    logger.info("Loaded attribute tables v%d from %s", tables.version, resolved)
    return tables


@lru_cache(maxsize=None)
def default_tables() -> TableSet:
    """The table set used when a caller does not pass one.  Loaded once."""
    return load_tables()


@lru_cache(maxsize=32)
def ladder_for(profile: RarityProfile) -> RarityLadder:
    """Build (and cache) the ladder for a rarity profile."""
    return RarityLadder.from_profile(profile)


__all__ = [
    "TABLES_ENV_VAR",
    "default_tables",
    "ladder_for",
    "load_tables",
    "resolve_tables_path",
]
