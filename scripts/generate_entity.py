"""Generate one creature, wild encounter or item and print it as JSON.

Usage:
    python scripts/generate_entity.py creature --seed alice 1700000000
    python scripts/generate_entity.py item --environment "Crystal Caves" --hash <64 hex>
    python scripts/generate_entity.py breed --parent-a a.json --parent-b b.json --session s1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from petgen import (
    PetGenError,
    breed_with_trace,
    breeding_session_hash,
    generate_creature,
    generate_item,
    generate_wild_encounter,
    seed_hash,
)
from petgen.content.registry import load_tables


def _resolve_hash(args: argparse.Namespace) -> str:
    if args.hash:
        return args.hash
    if args.seed:
        return seed_hash(*args.seed)
    raise SystemExit("either --hash or --seed is required")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a single entity")
    parser.add_argument("kind", choices=["creature", "encounter", "item", "breed"])
    parser.add_argument("--hash", type=str, default=None, help="64-character hex digest")
    parser.add_argument("--seed", nargs="+", default=None, help="Seed parts, hashed with SHA-256")
    parser.add_argument("--environment", type=str, default="Enchanted Forest")
    parser.add_argument("--parent-a", type=str, default=None, help="Parent A record (JSON file)")
    parser.add_argument("--parent-b", type=str, default=None, help="Parent B record (JSON file)")
    parser.add_argument("--session", type=str, default=None, help="Breeding session id")
    parser.add_argument("--tables", type=str, default=None, help="Table asset (default: packaged v1)")
    parser.add_argument("--full", action="store_true", help="Dump the full model instead of the summary record")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    tables = load_tables(args.tables)

    try:
        if args.kind == "breed":
            if not (args.parent_a and args.parent_b and args.session):
                raise SystemExit("breed needs --parent-a, --parent-b and --session")
            parent_a = json.loads(Path(args.parent_a).read_text())
            parent_b = json.loads(Path(args.parent_b).read_text())
            session_hash = args.hash or breeding_session_hash(
                parent_a.get("hash", ""), parent_b.get("hash", ""), args.session,
            )
            entity, trace = breed_with_trace(parent_a, parent_b, session_hash, tables=tables)
            if args.verbose:
                print(trace.model_dump_json(indent=2), file=sys.stderr)
        elif args.kind == "creature":
            entity = generate_creature(_resolve_hash(args), tables=tables)
        elif args.kind == "encounter":
            entity = generate_wild_encounter(args.environment, _resolve_hash(args), tables=tables)
        else:
            entity = generate_item(args.environment, _resolve_hash(args), tables=tables)
    except PetGenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.full:
        print(entity.model_dump_json(indent=2))
    else:
        print(json.dumps(entity.to_record(), indent=2))


if __name__ == "__main__":
    main()
