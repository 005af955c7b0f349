"""
Pytest configuration and shared fixtures.
"""

import pytest

from deckload.models.entities import Aircraft, CargoItem, CargoStatus, Compartment, Mission
from deckload.planner import LoadPlanner
from deckload.repository.memory import InMemoryRepository
from deckload.repository.reference import REFERENCE_AIRCRAFT_ID, build_reference_repository

EMPTY_MISSION_ID = 3


@pytest.fixture
def reference_repo() -> InMemoryRepository:
    """Provide a fresh copy of the reference scenario."""
    return build_reference_repository()


@pytest.fixture
def planner(reference_repo) -> LoadPlanner:
    """Provide a planner over the reference scenario."""
    return LoadPlanner(reference_repo)


@pytest.fixture
def empty_mission_repo(reference_repo) -> InMemoryRepository:
    """Reference scenario plus a mission with no cargo, fuel or fixed weights."""
    reference_repo.add(Mission(id=EMPTY_MISSION_ID, name="Empty", aircraft_id=REFERENCE_AIRCRAFT_ID))
    return reference_repo


@pytest.fixture
def wide_treadway_aircraft() -> Aircraft:
    """Aircraft whose right treadway spans y=42..78 and left y=-78..-42."""
    return Aircraft(
        id=9,
        name="Wide",
        empty_weight=50000.0,
        empty_mac=90.0,
        treadways_width=36.0,
        treadways_dist_from_center=60.0,
    )


@pytest.fixture
def two_compartments() -> list[Compartment]:
    """Two compartments sharing the boundary x=100, listed aft first."""
    return [
        Compartment(id=2, aircraft_id=1, name="Aft", x_start=100.0, x_end=200.0),
        Compartment(id=1, aircraft_id=1, name="Fwd", x_start=0.0, x_end=100.0),
    ]


@pytest.fixture
def make_item():
    """Factory for on-deck cargo items with sensible defaults."""
    def _make(**overrides) -> CargoItem:
        values = dict(
            id=100,
            mission_id=1,
            cargo_type_id=1,
            name="Test item",
            weight=1500.0,
            length=100.0,
            width=80.0,
            x_start_position=0.0,
            y_start_position=-40.0,
            status=CargoStatus.ON_DECK,
        )
        values.update(overrides)
        return CargoItem(**values)

    return _make


@pytest.fixture
def empty_mission_id(empty_mission_repo) -> int:
    """Id of the cargo-free mission in empty_mission_repo."""
    return EMPTY_MISSION_ID
