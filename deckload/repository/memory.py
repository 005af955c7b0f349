"""
In-process repository keeping every table in a dict.

Used by the CLI, the API and the tests. Rows come back in insertion
order; callers that depend on order sort explicitly.
"""

import logging
from typing import Optional, TypeVar

from pydantic import BaseModel

from deckload.errors import InvalidInputError, NotFoundError
from deckload.repository.base import EntityKind, QueryResult, kind_of

_LOG = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


class InMemoryRepository:
    """Dict-backed implementation of the Repository protocol plus a write side."""

    def __init__(self) -> None:
        self._tables: dict[EntityKind, dict[int, BaseModel]] = {kind: {} for kind in EntityKind}

    # Write side

    def add(self, entity: EntityT) -> EntityT:
        """
        Store a new entity, assigning the next id when it has none.

        Returns:
            The stored copy (with its id set)

        Raises:
            InvalidInputError: If an entity with the same id already exists
        """
        kind = kind_of(entity)
        table = self._tables[kind]
        entity_id = getattr(entity, "id", None)
        if entity_id is None:
            entity_id = max(table, default=0) + 1
            entity = entity.model_copy(update={"id": entity_id})
        elif entity_id in table:
            raise InvalidInputError(f"{kind.label} with ID {entity_id} already exists")
        table[entity_id] = entity
        _LOG.debug("Added %s %s", kind.value, entity_id)
        return entity

    def add_all(self, entities: list[EntityT]) -> list[EntityT]:
        return [self.add(entity) for entity in entities]

    def update(self, entity: EntityT) -> EntityT:
        """
        Replace a stored entity.

        Raises:
            NotFoundError: If no entity with that id is stored
        """
        kind = kind_of(entity)
        entity_id = getattr(entity, "id", None)
        if entity_id not in self._tables[kind]:
            raise NotFoundError(kind.label, entity_id)
        self._tables[kind][entity_id] = entity
        return entity

    def remove(self, kind: EntityKind, entity_id: int) -> None:
        if self._tables[kind].pop(entity_id, None) is None:
            raise NotFoundError(kind.label, entity_id)

    def snapshot(self, kind: EntityKind) -> list[BaseModel]:
        """All stored rows of a kind, synchronously."""
        return list(self._tables[kind].values())

    # Read side

    async def get_by_id(self, kind: EntityKind, entity_id: int) -> QueryResult:
        entity: Optional[BaseModel] = self._tables[kind].get(entity_id)
        return QueryResult.of([entity] if entity is not None else [])

    async def get_all_by_parent_id(self, kind: EntityKind, parent_id: int) -> QueryResult:
        parent_field = kind.parent_field
        if parent_field is None:
            raise InvalidInputError(f"{kind.label} rows have no parent")
        rows = [row for row in self._tables[kind].values() if getattr(row, parent_field) == parent_id]
        return QueryResult.of(rows)

    async def get_all(self, kind: EntityKind) -> QueryResult:
        return QueryResult.of(list(self._tables[kind].values()))
