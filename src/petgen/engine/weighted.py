"""Cumulative-weight selection over an ordered (label, weight) table."""

from __future__ import annotations

from typing import Sequence, TypeVar

from .errors import GenerationError, InvalidRange

L = TypeVar("L")


def total_weight(entries: Sequence[tuple[L, int]]) -> int:
    """Sum of all weights.  Raises :class:`GenerationError` for an empty
    table or a weight that is not a positive integer."""
    if not entries:
        raise GenerationError("weighted table is empty")
    total = 0
    for label, weight in entries:
        if not isinstance(weight, int) or weight <= 0:
            raise GenerationError(
                f"weight for {label!r} must be a positive integer, got {weight!r}"
            )
        total += weight
    return total


def select_weighted(entries: Sequence[tuple[L, int]], draw: int) -> L:
    """Return the first label whose cumulative weight exceeds *draw*.

    *draw* is expected in ``[0, total_weight)``; a draw at or past the total
    lands on the last entry.  Incrementing *draw* never moves the result
    backwards through the table.
    """
    if draw < 0:
        raise InvalidRange(f"draw must be >= 0, got {draw}")
    total_weight(entries)
    cumulative = 0
    for label, weight in entries:
        cumulative += weight
        if draw < cumulative:
            return label
    return entries[-1][0]
