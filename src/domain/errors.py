"""Exceptions raised by the entity store and orchestration layer."""

from __future__ import annotations


class ValidationError(ValueError):
    """Rejected user input (names, participants, date windows)."""


class EntityNotFoundError(LookupError):
    """Edit or delete targeted an id that is not in the store."""

    def __init__(self, kind: str, entity_id: int) -> None:
        super().__init__(f"{kind} id={entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


__all__ = ["EntityNotFoundError", "ValidationError"]
