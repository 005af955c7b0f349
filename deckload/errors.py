"""
Error types raised by the weight-and-balance and floor-load engine.

All failures are deterministic functions of the stored entity state,
so none of them is retried anywhere in the package.
"""

from typing import Optional


class DeckLoadError(Exception):
    """Base class for all deckload errors."""


class NotFoundError(DeckLoadError, LookupError):
    """
    A required entity is absent from the repository.

    Carries the entity type and id so callers can report exactly
    which lookup failed.
    """

    def __init__(self, entity: str, entity_id: object, message: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} with ID {entity_id} not found")


class ConstraintMissingError(NotFoundError):
    """A compartment exists but has no load constraint row."""

    def __init__(self, compartment_id: object):
        super().__init__(
            "Load constraint",
            compartment_id,
            f"No load constraints found for compartment with ID {compartment_id}",
        )


class InvalidInputError(DeckLoadError, ValueError):
    """An argument is outside its valid domain (bad wheel type, non-positive width)."""
