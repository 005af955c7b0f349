"""
Load planner: one entry point over the weight-and-balance and floor-load layers.

Binds a repository and a calibration set so the CLI and the API can ask
for a complete mission report without threading both through every call.
"""

import asyncio
import logging
from typing import Optional

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION
from deckload.floor.layout import get_cargo_item_with_wheel_type, get_touchpoint_compartments, wheel_touchpoints
from deckload.floor.loads import calculate_concentrated_load, calculate_load_per_compartment, calculate_running_load
from deckload.floor.validation import validate_mission_load_constraints
from deckload.mac.calculation import calculate_weight_and_balance, get_fuel_state
from deckload.mac.validation import validate_mac
from deckload.models.results import (
    CargoItemLoads,
    MacValidationResult,
    MissionReport,
    MissionValidationResults,
    TouchpointCompartments,
    WeightAndBalance,
)
from deckload.repository.base import EntityKind, Repository, fetch_children, get_mission_aircraft

_LOG = logging.getLogger(__name__)


class LoadPlanner:
    """
    Mission-level view of the engine.

    Every call re-reads the repository; nothing is cached between calls.
    """

    def __init__(self, repo: Repository, calibration: Optional[Calibration] = None):
        """
        Initialize planner with its collaborators.

        Args:
            repo: Entity repository
            calibration: Calibration constants (defaults to the reference aircraft)
        """
        self.repo = repo
        self.calibration = calibration or DEFAULT_CALIBRATION

    async def weight_and_balance(self, mission_id: int) -> WeightAndBalance:
        return await calculate_weight_and_balance(self.repo, mission_id, self.calibration)

    async def validate_floor(self, mission_id: int, include_running: bool = False) -> MissionValidationResults:
        return await validate_mission_load_constraints(
            self.repo, mission_id, self.calibration, include_running=include_running
        )

    async def validate_mac(self, mission_id: int) -> MacValidationResult:
        balance = await self.weight_and_balance(mission_id)
        return await validate_mac(self.repo, balance.total_weight, balance.mac_percent)

    async def item_loads(self, cargo_item_id: int) -> CargoItemLoads:
        """Concentrated, running and per-compartment loads of one cargo item."""
        item, wheel_type = await get_cargo_item_with_wheel_type(self.repo, cargo_item_id)
        concentrated, running, per_compartment = await asyncio.gather(
            calculate_concentrated_load(self.repo, cargo_item_id, self.calibration),
            calculate_running_load(self.repo, cargo_item_id, self.calibration),
            calculate_load_per_compartment(self.repo, cargo_item_id, self.calibration),
        )
        return CargoItemLoads(
            cargo_item_id=cargo_item_id,
            wheel_type=wheel_type,
            concentrated_load=concentrated,
            running_load=running,
            compartment_loads=per_compartment,
            touchpoints=wheel_touchpoints(item, wheel_type),
        )

    async def touchpoint_compartments(self, cargo_item_id: int) -> TouchpointCompartments:
        return await get_touchpoint_compartments(self.repo, cargo_item_id)

    async def _collect_warnings(self, mission_id: int) -> list[str]:
        warnings = []
        items = await fetch_children(self.repo, EntityKind.CARGO_ITEM, mission_id)
        off_deck = [item for item in items if not item.is_on_deck]
        if off_deck:
            total = sum(item.weight for item in off_deck)
            warnings.append(
                f"{len(off_deck)} cargo item(s) not on deck ({total:,.0f} lbs) count toward gross "
                f"weight but not toward CG or floor loads"
            )
        if await get_fuel_state(self.repo, mission_id) is None:
            warnings.append("No fuel state recorded; fuel weight and index taken as 0")
        return warnings

    async def build_report(self, mission_id: int, include_running: bool = False) -> MissionReport:
        """
        Weight and balance, MAC validation and floor validation for a mission.

        Args:
            mission_id: Mission to report on
            include_running: Also check running loads

        Raises:
            NotFoundError: If the mission, its aircraft or required rows are missing
        """
        mission, aircraft = await get_mission_aircraft(self.repo, mission_id)
        balance, floor, warnings = await asyncio.gather(
            self.weight_and_balance(mission_id),
            self.validate_floor(mission_id, include_running=include_running),
            self._collect_warnings(mission_id),
        )
        mac = await validate_mac(self.repo, balance.total_weight, balance.mac_percent)

        report = MissionReport(
            mission_id=mission_id,
            mission_name=mission.name,
            aircraft_name=aircraft.name,
            weight_and_balance=balance,
            mac_validation=mac,
            floor_validation=floor,
            warnings=warnings,
        )
        _LOG.info("Mission %s report: MAC %.2f%% (%s), floor %s", mission_id, balance.mac_percent,
                  "valid" if mac.is_valid else "invalid", floor.overall_status.value)
        return report
