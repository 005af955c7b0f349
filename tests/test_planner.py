"""
Tests for the mission-level planner.
"""

import pytest

from deckload.errors import NotFoundError
from deckload.models.entities import WheelType
from deckload.models.results import ValidationStatus
from deckload.planner import LoadPlanner
from deckload.repository.reference import VEHICLE_MISSION_ID, WORKSHEET_MISSION_ID


class TestLoadPlanner:
    """Tests for LoadPlanner reports."""

    async def test_worksheet_report(self, planner):
        report = await planner.build_report(WORKSHEET_MISSION_ID)

        assert report.aircraft_name == "C-130H"
        assert report.weight_and_balance.total_weight == pytest.approx(139195.0)
        assert report.mac_validation.is_valid
        assert report.floor_validation.overall_status == ValidationStatus.PASS
        assert report.warnings == []
        assert report.all_checks_passed

    async def test_running_failure_fails_report(self, planner):
        report = await planner.build_report(WORKSHEET_MISSION_ID, include_running=True)
        assert not report.all_checks_passed

    async def test_off_deck_warning(self, planner):
        report = await planner.build_report(VEHICLE_MISSION_ID)

        assert len(report.warnings) == 1
        assert "1 cargo item(s) not on deck" in report.warnings[0]

    async def test_no_fuel_warning(self, empty_mission_repo, empty_mission_id):
        report = await LoadPlanner(empty_mission_repo).build_report(empty_mission_id)

        assert report.weight_and_balance.total_weight == pytest.approx(83288.0)
        assert any("No fuel state" in w for w in report.warnings)

    async def test_item_loads(self, planner):
        loads = await planner.item_loads(3)

        assert loads.wheel_type == WheelType.TWO_WHEELED
        assert loads.concentrated_load.value == pytest.approx(4000.0 / 60.0)
        assert loads.running_load.value == pytest.approx(40.0)

    async def test_unknown_mission(self, planner):
        with pytest.raises(NotFoundError):
            await planner.build_report(99)
