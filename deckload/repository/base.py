"""
Repository interface the engine reads entities through.

Every engine function takes a Repository as its first argument. Lookups
answer with a QueryResult; a zero count is the only "not found" signal,
and fetch_one turns it into a NotFoundError naming the entity and id.
"""

from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from deckload.errors import NotFoundError
from deckload.models.entities import (
    Aircraft,
    AllowedMacConstraint,
    CargoItem,
    CargoType,
    Compartment,
    FuelMacQuant,
    FuelState,
    LoadConstraint,
    Mission,
)


class EntityKind(str, Enum):
    """Entity tables known to the repository."""
    AIRCRAFT = "aircraft"
    MISSION = "mission"
    CARGO_TYPE = "cargo_type"
    CARGO_ITEM = "cargo_item"
    COMPARTMENT = "compartment"
    LOAD_CONSTRAINT = "load_constraint"
    FUEL_STATE = "fuel_state"
    FUEL_MAC_QUANT = "fuel_mac_quant"
    ALLOWED_MAC_CONSTRAINT = "allowed_mac_constraint"

    @property
    def label(self) -> str:
        """Human readable name used in error messages."""
        return _LABELS[self]

    @property
    def model(self) -> type[BaseModel]:
        return _MODELS[self]

    @property
    def parent_field(self) -> Optional[str]:
        """Field linking a row to its parent, or None for top-level tables."""
        return _PARENT_FIELDS.get(self)


_LABELS = {
    EntityKind.AIRCRAFT: "Aircraft",
    EntityKind.MISSION: "Mission",
    EntityKind.CARGO_TYPE: "Cargo type",
    EntityKind.CARGO_ITEM: "Cargo item",
    EntityKind.COMPARTMENT: "Compartment",
    EntityKind.LOAD_CONSTRAINT: "Load constraint",
    EntityKind.FUEL_STATE: "Fuel state",
    EntityKind.FUEL_MAC_QUANT: "Fuel MAC quantity",
    EntityKind.ALLOWED_MAC_CONSTRAINT: "Allowed MAC constraint",
}

_MODELS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.AIRCRAFT: Aircraft,
    EntityKind.MISSION: Mission,
    EntityKind.CARGO_TYPE: CargoType,
    EntityKind.CARGO_ITEM: CargoItem,
    EntityKind.COMPARTMENT: Compartment,
    EntityKind.LOAD_CONSTRAINT: LoadConstraint,
    EntityKind.FUEL_STATE: FuelState,
    EntityKind.FUEL_MAC_QUANT: FuelMacQuant,
    EntityKind.ALLOWED_MAC_CONSTRAINT: AllowedMacConstraint,
}

_PARENT_FIELDS = {
    EntityKind.MISSION: "aircraft_id",
    EntityKind.CARGO_ITEM: "mission_id",
    EntityKind.COMPARTMENT: "aircraft_id",
    EntityKind.LOAD_CONSTRAINT: "compartment_id",
    EntityKind.FUEL_STATE: "mission_id",
}


def kind_of(entity: BaseModel) -> EntityKind:
    """Entity kind for a model instance."""
    for kind in EntityKind:
        if type(entity) is kind.model:
            return kind
    raise TypeError(f"{type(entity).__name__} is not a stored entity")


class QueryRow(BaseModel):
    """One row of a query answer."""
    data: Any


class QueryResult(BaseModel):
    """Answer to a repository query."""
    count: int = 0
    results: list[QueryRow] = Field(default_factory=list)

    @classmethod
    def of(cls, rows: list[BaseModel]) -> "QueryResult":
        return cls(count=len(rows), results=[QueryRow(data=row) for row in rows])

    def rows(self) -> list[Any]:
        return [row.data for row in self.results]


@runtime_checkable
class Repository(Protocol):
    """Read side of the persistence collaborator."""

    async def get_by_id(self, kind: EntityKind, entity_id: int) -> QueryResult:
        ...

    async def get_all_by_parent_id(self, kind: EntityKind, parent_id: int) -> QueryResult:
        ...

    async def get_all(self, kind: EntityKind) -> QueryResult:
        ...


async def fetch_one(repo: Repository, kind: EntityKind, entity_id: int) -> Any:
    """
    Fetch a single entity by id.

    Raises:
        NotFoundError: If the repository reports a zero count
    """
    result = await repo.get_by_id(kind, entity_id)
    if result.count == 0 or not result.results:
        raise NotFoundError(kind.label, entity_id)
    return result.results[0].data


async def fetch_children(repo: Repository, kind: EntityKind, parent_id: int) -> list[Any]:
    """Fetch all entities of a kind belonging to a parent (possibly none)."""
    result = await repo.get_all_by_parent_id(kind, parent_id)
    return result.rows()


async def fetch_all(repo: Repository, kind: EntityKind) -> list[Any]:
    """Fetch every entity of a kind."""
    result = await repo.get_all(kind)
    return result.rows()


async def get_mission_aircraft(repo: Repository, mission_id: int) -> tuple[Mission, Aircraft]:
    """
    Fetch a mission and the aircraft flying it.

    Raises:
        NotFoundError: If either doesn't exist
    """
    mission: Mission = await fetch_one(repo, EntityKind.MISSION, mission_id)
    aircraft: Aircraft = await fetch_one(repo, EntityKind.AIRCRAFT, mission.aircraft_id)
    return mission, aircraft
