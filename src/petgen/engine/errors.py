"""Error taxonomy for the generation engine.

Every error is a local logic error: the engine performs no I/O, so nothing
here is retryable.  All of them subclass :class:`ValueError` so callers that
only care about "bad input" can catch that.
"""

from __future__ import annotations


class PetGenError(ValueError):
    """Base class for every error raised by the engine."""


class InvalidHash(PetGenError):
    """The seed hash is not a 64-character hex string."""


class InvalidRange(PetGenError):
    """A draw was requested with a modulus < 1, or a slot / draw out of range."""


class GenerationError(PetGenError):
    """An attribute table or rarity profile is empty or misconfigured."""


class IneligibleParents(PetGenError):
    """Breeding was called with a missing or incomplete parent record."""
