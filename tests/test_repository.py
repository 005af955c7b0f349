"""
Tests for the in-memory repository, scenario files and the reference data.
"""

import json

import pytest

from deckload.errors import InvalidInputError, NotFoundError
from deckload.models.entities import Aircraft, CargoItem, Mission
from deckload.repository.base import EntityKind, Repository, fetch_children, fetch_one, get_mission_aircraft, kind_of
from deckload.repository.loader import Scenario, load_scenario, save_scenario
from deckload.repository.memory import InMemoryRepository
from deckload.repository.reference import build_reference_scenario


class TestInMemoryRepository:
    """Tests for reads and writes."""

    def test_satisfies_protocol(self, reference_repo):
        assert isinstance(reference_repo, Repository)

    async def test_not_found_carries_entity_and_id(self, reference_repo):
        with pytest.raises(NotFoundError) as exc_info:
            await fetch_one(reference_repo, EntityKind.MISSION, 42)

        assert exc_info.value.entity == "Mission"
        assert exc_info.value.entity_id == 42
        assert str(exc_info.value) == "Mission with ID 42 not found"

    async def test_zero_count_result(self, reference_repo):
        result = await reference_repo.get_by_id(EntityKind.AIRCRAFT, 42)
        assert result.count == 0
        assert result.rows() == []

    def test_add_assigns_next_id(self):
        repo = InMemoryRepository()

        first = repo.add(Mission(name="A", aircraft_id=1))
        second = repo.add(Mission(name="B", aircraft_id=1))

        assert (first.id, second.id) == (1, 2)

    def test_duplicate_id_rejected(self, reference_repo):
        with pytest.raises(InvalidInputError, match="already exists"):
            reference_repo.add(Mission(id=1, name="Again", aircraft_id=1))

    def test_update_missing(self, reference_repo):
        with pytest.raises(NotFoundError):
            reference_repo.update(Mission(id=50, name="Ghost", aircraft_id=1))

    def test_remove_missing(self, reference_repo):
        with pytest.raises(NotFoundError):
            reference_repo.remove(EntityKind.CARGO_ITEM, 50)

    async def test_children_by_parent(self, reference_repo):
        items = await fetch_children(reference_repo, EntityKind.CARGO_ITEM, 2)
        assert [item.id for item in items] == [2, 3, 4, 5]

    async def test_top_level_kinds_have_no_parent(self, reference_repo):
        with pytest.raises(InvalidInputError):
            await reference_repo.get_all_by_parent_id(EntityKind.AIRCRAFT, 1)

    async def test_mission_aircraft(self, reference_repo):
        mission, aircraft = await get_mission_aircraft(reference_repo, 1)
        assert mission.aircraft_id == aircraft.id
        assert aircraft.name == "C-130H"

    def test_kind_of(self):
        assert kind_of(Aircraft(name="X", empty_weight=1.0, empty_mac=0.0, treadways_width=1.0,
                                treadways_dist_from_center=0.0)) == EntityKind.AIRCRAFT
        with pytest.raises(TypeError):
            kind_of(Scenario())


class TestScenarioFiles:
    """Tests for loading and saving scenario JSON."""

    def test_save_and_load(self, reference_repo, tmp_path):
        path = save_scenario(reference_repo, tmp_path / "scenario.json")

        loaded = load_scenario(path)

        for kind in EntityKind:
            assert [row.model_dump() for row in loaded.snapshot(kind)] == [
                row.model_dump() for row in reference_repo.snapshot(kind)
            ]

    def test_file_uses_wire_values(self, reference_repo, tmp_path):
        path = save_scenario(reference_repo, tmp_path / "scenario.json")
        data = json.loads(path.read_text())

        assert data["cargo_types"][1]["type"] == "4_wheeled"
        assert data["cargo_items"][0]["status"] == "onDeck"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scenario(tmp_path / "missing.json")

    def test_invalid_row(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"compartments": [{"aircraft_id": 1, "x_start": 10, "x_end": 5}]}))

        with pytest.raises(ValueError):
            load_scenario(path)

    def test_rows_without_ids_get_ids(self):
        repo = Scenario(
            missions=[Mission(name="M", aircraft_id=1)],
            cargo_items=[CargoItem(mission_id=1, cargo_type_id=1, weight=1.0, length=1.0, width=1.0)],
        ).to_repository()

        assert repo.snapshot(EntityKind.CARGO_ITEM)[0].id == 1


class TestReferenceScenario:
    """Sanity checks on the built-in data."""

    def test_every_compartment_has_limits(self):
        scenario = build_reference_scenario()
        assert {c.compartment_id for c in scenario.load_constraints} == {c.id for c in scenario.compartments}

    def test_compartments_are_contiguous(self):
        compartments = sorted(build_reference_scenario().compartments, key=lambda c: c.x_start)
        for fwd, aft in zip(compartments, compartments[1:]):
            assert fwd.x_end == aft.x_start
