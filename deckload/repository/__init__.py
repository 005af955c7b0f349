"""
Entity access: the repository protocol, an in-memory store and scenario files.
"""

from deckload.repository.base import (
    EntityKind,
    QueryResult,
    QueryRow,
    Repository,
    fetch_all,
    fetch_children,
    fetch_one,
    get_mission_aircraft,
)
from deckload.repository.memory import InMemoryRepository
from deckload.repository.loader import Scenario, load_scenario, save_scenario
from deckload.repository.reference import build_reference_repository, build_reference_scenario

__all__ = [
    "EntityKind",
    "QueryResult",
    "QueryRow",
    "Repository",
    "fetch_all",
    "fetch_children",
    "fetch_one",
    "get_mission_aircraft",
    "InMemoryRepository",
    "Scenario",
    "load_scenario",
    "save_scenario",
    "build_reference_repository",
    "build_reference_scenario",
]
