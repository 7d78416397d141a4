"""Deterministic integer draws sliced out of a SHA-256 hex digest.

A hash is read as a sequence of fixed-width windows.  Window ``s`` is parsed
as a base-16 integer and reduced modulo the caller's range.  The first
``WINDOWS_PER_BLOCK`` slots tile the hash; each later pass over the hash
shifts its windows one character further and wraps around the end, so every
draw is a substring of the hash and 64 slots read 64 distinct windows.

Slot numbering is part of the data contract: a generator that reads slot 7
for rarity must always read slot 7 for rarity.
"""

from __future__ import annotations

import hashlib
import re
from typing import Sequence, TypeVar

from .errors import InvalidHash, InvalidRange

T = TypeVar("T")

HASH_LENGTH = 64
"""Hex characters in a SHA-256 digest."""

WINDOW_WIDTH = 8
"""Hex characters per draw (32 bits)."""

WINDOWS_PER_BLOCK = HASH_LENGTH // WINDOW_WIDTH

_HEX_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def validate_hash(value: object) -> str:
    """Return *value* lower-cased if it is a 64-character hex string.

    Raises :class:`InvalidHash` otherwise.
    """
    if not isinstance(value, str) or not _HEX_RE.match(value):
        shown = value if not isinstance(value, str) or len(value) <= 80 else value[:77] + "..."
        raise InvalidHash(f"Expected a 64-character hex digest, got {shown!r}")
    return value.lower()


def seed_hash(*parts: object) -> str:
    """SHA-256 hex digest of ``":".join(parts)``.

    ``seed_hash(user_id, timestamp, salt)`` is how callers turn arbitrary
    seed material into a generation hash.
    """
    material = ":".join(str(p) for p in parts)
    return hashlib.sha256(material.encode()).hexdigest()


def breeding_session_hash(parent_a_hash: str, parent_b_hash: str, session_id: str) -> str:
    """Composite key for a breeding session, hashed.

    ``session_id`` is whatever identifier the game-state layer assigns to the
    session; the same three inputs always give the same offspring hash.
    """
    return seed_hash(
        "breed",
        validate_hash(parent_a_hash),
        validate_hash(parent_b_hash),
        session_id,
    )


def window_start(slot: int) -> int:
    """Offset of the first hex character read by *slot*."""
    passes, position = divmod(slot, WINDOWS_PER_BLOCK)
    return (position * WINDOW_WIDTH + passes) % HASH_LENGTH


def _window(hash_hex: str, slot: int) -> int:
    start = window_start(slot)
    # Wrap windows that run past the end of the hash.
    text = (hash_hex + hash_hex)[start:start + WINDOW_WIDTH]
    return int(text, 16)


def draw(hash_hex: str, slot: int, modulus: int) -> int:
    """Return the value of *slot* reduced into ``[0, modulus)``.

    Pure function of its arguments.  Raises :class:`InvalidHash` for a
    malformed hash and :class:`InvalidRange` for ``modulus < 1`` or a
    negative slot.
    """
    hash_hex = validate_hash(hash_hex)
    _check_range(slot, modulus)
    return _window(hash_hex, slot) % modulus


def _check_range(slot: int, modulus: int) -> None:
    if modulus < 1:
        raise InvalidRange(f"modulus must be >= 1, got {modulus}")
    if slot < 0:
        raise InvalidRange(f"slot must be >= 0, got {slot}")


class HashStream:
    """Cursor over the draw slots of one hash.

    Each call to :meth:`next` consumes exactly one slot.  The hash is
    doubled once so wrapped windows are plain slices.

    Parameters
    ----------
    hash_hex:
        64-character hex digest.  Validated on construction.
    start:
        First slot the cursor will hand out.
    """

    def __init__(self, hash_hex: str, start: int = 0) -> None:
        self._hash = validate_hash(hash_hex)
        if start < 0:
            raise InvalidRange(f"start slot must be >= 0, got {start}")
        self._slot = start
        self._doubled = self._hash + self._hash

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def slot(self) -> int:
        """The slot the next call to :meth:`next` will consume."""
        return self._slot

    def draw_at(self, slot: int, modulus: int) -> int:
        """Read a fixed *slot* without moving the cursor."""
        _check_range(slot, modulus)
        start = window_start(slot)
        return int(self._doubled[start:start + WINDOW_WIDTH], 16) % modulus

    def next(self, modulus: int) -> int:
        """Consume the current slot and return its value in ``[0, modulus)``."""
        value = self.draw_at(self._slot, modulus)
        self._slot += 1
        return value

    def skip(self, count: int) -> None:
        """Advance the cursor past *count* reserved slots."""
        if count < 0:
            raise InvalidRange(f"cannot skip a negative number of slots ({count})")
        self._slot += count

    def choice(self, seq: Sequence[T]) -> T:
        """Consume one slot and return an element of a non-empty sequence."""
        if not seq:
            raise InvalidRange("cannot choose from an empty sequence")
        return seq[self.next(len(seq))]

    def __repr__(self) -> str:
        return f"HashStream(hash={self._hash[:12]}..., slot={self._slot})"
