"""
Scenario file loader.

A scenario is a JSON document holding one list per entity table. It
loads into an InMemoryRepository and can be written back out.
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field

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
from deckload.repository.base import EntityKind
from deckload.repository.memory import InMemoryRepository


class Scenario(BaseModel):
    """All entity tables for one or more aircraft."""
    aircraft: list[Aircraft] = Field(default_factory=list)
    missions: list[Mission] = Field(default_factory=list)
    cargo_types: list[CargoType] = Field(default_factory=list)
    cargo_items: list[CargoItem] = Field(default_factory=list)
    compartments: list[Compartment] = Field(default_factory=list)
    load_constraints: list[LoadConstraint] = Field(default_factory=list)
    fuel_states: list[FuelState] = Field(default_factory=list)
    fuel_mac_quants: list[FuelMacQuant] = Field(default_factory=list)
    allowed_mac_constraints: list[AllowedMacConstraint] = Field(default_factory=list)

    def to_repository(self) -> InMemoryRepository:
        """Populate a fresh in-memory repository, parents before children."""
        repo = InMemoryRepository()
        for rows in (
            self.aircraft,
            self.cargo_types,
            self.missions,
            self.compartments,
            self.load_constraints,
            self.cargo_items,
            self.fuel_states,
            self.fuel_mac_quants,
            self.allowed_mac_constraints,
        ):
            repo.add_all(rows)
        return repo

    @classmethod
    def from_repository(cls, repo: InMemoryRepository) -> "Scenario":
        return cls(
            aircraft=repo.snapshot(EntityKind.AIRCRAFT),
            missions=repo.snapshot(EntityKind.MISSION),
            cargo_types=repo.snapshot(EntityKind.CARGO_TYPE),
            cargo_items=repo.snapshot(EntityKind.CARGO_ITEM),
            compartments=repo.snapshot(EntityKind.COMPARTMENT),
            load_constraints=repo.snapshot(EntityKind.LOAD_CONSTRAINT),
            fuel_states=repo.snapshot(EntityKind.FUEL_STATE),
            fuel_mac_quants=repo.snapshot(EntityKind.FUEL_MAC_QUANT),
            allowed_mac_constraints=repo.snapshot(EntityKind.ALLOWED_MAC_CONSTRAINT),
        )


def load_scenario(path: Union[str, Path]) -> InMemoryRepository:
    """
    Load a scenario JSON file into a repository.

    Args:
        path: Path to the scenario file

    Returns:
        InMemoryRepository holding every table in the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If a row is invalid
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Scenario file not found at {file_path}")

    with open(file_path, "r") as f:
        data = json.load(f)

    return Scenario(**data).to_repository()


def save_scenario(repo: InMemoryRepository, path: Union[str, Path]) -> Path:
    """Write every table of a repository to a scenario JSON file."""
    file_path = Path(path)
    file_path.write_text(Scenario.from_repository(repo).model_dump_json(indent=2))
    return file_path
