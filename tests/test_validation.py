"""
Tests for floor-load validation against compartment limits.
"""

import logging

import pytest

from deckload.errors import ConstraintMissingError, NotFoundError
from deckload.floor.validation import (
    check_limit,
    get_load_constraint,
    running_load_category,
    validate_concentrated_load,
    validate_cumulative_load,
    validate_mission_load_constraints,
    validate_running_load,
)
from deckload.models.entities import Aircraft, Mission
from deckload.models.results import RunningLoadCategory, TreadwayPlacement, ValidationStatus
from deckload.repository.base import EntityKind
from deckload.repository.reference import VEHICLE_MISSION_ID, WORKSHEET_MISSION_ID


class TestCheckLimit:
    """Tests for the single-limit comparison."""

    def test_within_limit(self):
        assert check_limit(100.0, 120.0) == (ValidationStatus.PASS, 0.0)

    def test_equal_to_limit_passes(self):
        assert check_limit(120.0, 120.0) == (ValidationStatus.PASS, 0.0)

    def test_over_limit(self):
        status, overage = check_limit(150.0, 120.0)
        assert status == ValidationStatus.FAIL
        assert overage == pytest.approx(30.0)

    def test_no_limit_passes(self):
        assert check_limit(1e9, None) == (ValidationStatus.PASS, 0.0)


class TestCumulativeValidation:
    """Tests for total weight per compartment."""

    async def test_empty_mission_reports_every_compartment(self, empty_mission_repo, empty_mission_id):
        """A mission without cargo still gets one passing result per compartment."""
        results = await validate_cumulative_load(empty_mission_repo, empty_mission_id)

        assert [r.compartment_id for r in results] == [1, 2, 3, 4, 5, 6]
        assert all(r.current_load == 0.0 for r in results)
        assert all(r.status == ValidationStatus.PASS for r in results)

    async def test_vehicle_mission(self, reference_repo):
        results = await validate_cumulative_load(reference_repo, VEHICLE_MISSION_ID)
        by_id = {r.compartment_id: r for r in results}

        assert by_id[1].current_load == pytest.approx(5000.0)
        assert by_id[1].max_allowed_load == 10000.0
        assert by_id[1].compartment_name == "C"
        assert by_id[1].constraint_type == "cumulative"
        assert all(r.passed for r in results)

    async def test_overweight_compartment(self, reference_repo):
        """Moving the 20,000 lb stand into compartment C (10,000 lb) fails it."""
        stand = reference_repo.snapshot(EntityKind.CARGO_ITEM)[0]
        reference_repo.update(stand.model_copy(update={"x_start_position": 300.0}))

        results = await validate_cumulative_load(reference_repo, WORKSHEET_MISSION_ID)
        failed = [r for r in results if r.status == ValidationStatus.FAIL]

        assert [r.compartment_id for r in failed] == [1]
        assert failed[0].overage_amount == pytest.approx(10000.0)
        assert "exceeding" in failed[0].message

    async def test_missing_constraint_row(self, reference_repo):
        reference_repo.remove(EntityKind.LOAD_CONSTRAINT, 6)

        with pytest.raises(ConstraintMissingError) as exc_info:
            await validate_cumulative_load(reference_repo, WORKSHEET_MISSION_ID)
        assert exc_info.value.entity_id == 6
        assert "No load constraints found for compartment with ID 6" in str(exc_info.value)

    async def test_aircraft_without_compartments(self, reference_repo):
        reference_repo.add(Aircraft(id=2, name="Bare", empty_weight=50000.0, empty_mac=90.0,
                                    treadways_width=36.0, treadways_dist_from_center=30.0))
        reference_repo.add(Mission(id=10, name="Bare mission", aircraft_id=2))

        with pytest.raises(NotFoundError, match="No compartments found"):
            await validate_cumulative_load(reference_repo, 10)

    async def test_constraint_lookup(self, reference_repo):
        constraint = await get_load_constraint(reference_repo, 6)
        assert constraint.max_concentrated_load == 60.0


class TestConcentratedValidation:
    """Tests for per item, per compartment pressure checks."""

    async def test_worksheet_stand(self, reference_repo):
        results = await validate_concentrated_load(reference_repo, WORKSHEET_MISSION_ID)

        assert len(results) == 1
        assert results[0].cargo_item_id == 1
        assert results[0].compartment_id == 3
        assert results[0].current_load == pytest.approx(40.0)
        assert results[0].status == ValidationStatus.PASS

    async def test_wheeled_checked_once_per_compartment(self, reference_repo):
        """The HMMWV's four wheels sit in two compartments: two checks."""
        results = await validate_concentrated_load(reference_repo, VEHICLE_MISSION_ID)
        vehicle = [r for r in results if r.cargo_item_id == 2]

        assert sorted(r.compartment_id for r in vehicle) == [1, 2]
        assert all(r.current_load == pytest.approx(100.0) for r in vehicle)

    async def test_inventory_items_ignored(self, reference_repo):
        results = await validate_concentrated_load(reference_repo, VEHICLE_MISSION_ID)
        assert 5 not in {r.cargo_item_id for r in results}

    async def test_empty_mission(self, empty_mission_repo, empty_mission_id):
        assert await validate_concentrated_load(empty_mission_repo, empty_mission_id) == []

    async def test_missing_constraint_skipped(self, reference_repo, caplog):
        """Concentrated checks skip a compartment without limits instead of failing."""
        reference_repo.remove(EntityKind.LOAD_CONSTRAINT, 3)

        with caplog.at_level(logging.WARNING, logger="deckload.floor.validation"):
            results = await validate_concentrated_load(reference_repo, WORKSHEET_MISSION_ID)

        assert results == []
        assert "Skipping compartment 3" in caplog.text

    async def test_over_limit(self, reference_repo):
        constraint = (await get_load_constraint(reference_repo, 3)).model_copy(
            update={"max_concentrated_load": 30.0}
        )
        reference_repo.update(constraint)

        results = await validate_concentrated_load(reference_repo, WORKSHEET_MISSION_ID)

        assert results[0].status == ValidationStatus.FAIL
        assert results[0].overage_amount == pytest.approx(10.0)


class TestRunningValidation:
    """Tests for running loads against treadway limits."""

    def test_category(self):
        assert running_load_category(
            TreadwayPlacement(on_right=False, on_left=True, in_between=False)
        ) == RunningLoadCategory.TREADWAY
        assert running_load_category(
            TreadwayPlacement(on_right=False, on_left=False, in_between=True)
        ) == RunningLoadCategory.BETWEEN_TREADWAYS

    async def test_vehicle_mission(self, reference_repo):
        results = await validate_running_load(reference_repo, VEHICLE_MISSION_ID)
        by_item = {}
        for r in results:
            by_item.setdefault(r.cargo_item_id, []).append(r)

        assert {r.load_category for r in by_item[2]} == {RunningLoadCategory.TREADWAY}
        assert {r.load_category for r in by_item[3]} == {RunningLoadCategory.BETWEEN_TREADWAYS}
        assert by_item[3][0].max_allowed_load == 600.0
        assert all(r.passed for r in results)

    async def test_short_heavy_stand_fails(self, reference_repo):
        """20,000 lbs over 5 in is 4,000 lbs/in against a 1,200 lbs/in treadway limit."""
        results = await validate_running_load(reference_repo, WORKSHEET_MISSION_ID)

        assert len(results) == 1
        assert results[0].status == ValidationStatus.FAIL
        assert results[0].current_load == pytest.approx(4000.0)
        assert results[0].overage_amount == pytest.approx(2800.0)

    async def test_ramp_without_running_limits_skipped(self, reference_repo):
        pallet = reference_repo.snapshot(EntityKind.CARGO_ITEM)[3]
        reference_repo.update(pallet.model_copy(update={"x_start_position": 750.0}))

        results = await validate_running_load(reference_repo, VEHICLE_MISSION_ID)

        assert 6 not in {r.compartment_id for r in results}


class TestMissionValidation:
    """Tests for the combined mission verdict."""

    async def test_vehicle_mission_passes(self, reference_repo):
        result = await validate_mission_load_constraints(reference_repo, VEHICLE_MISSION_ID, include_running=True)

        assert result.overall_status == ValidationStatus.PASS
        assert result.failures == []
        assert {r.constraint_type for r in result.results} == {"cumulative", "concentrated", "running"}

    async def test_running_checks_are_opt_in(self, reference_repo):
        without = await validate_mission_load_constraints(reference_repo, WORKSHEET_MISSION_ID)
        with_running = await validate_mission_load_constraints(
            reference_repo, WORKSHEET_MISSION_ID, include_running=True
        )

        assert without.overall_status == ValidationStatus.PASS
        assert "running" not in {r.constraint_type for r in without.results}
        assert with_running.overall_status == ValidationStatus.FAIL
        assert len(with_running.failures) == 1

    async def test_missing_mission(self, reference_repo):
        with pytest.raises(NotFoundError):
            await validate_mission_load_constraints(reference_repo, 99)
