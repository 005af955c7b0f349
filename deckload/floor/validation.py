"""
Floor load validation against per-compartment structural limits.

Cumulative load is checked for every compartment of the mission's
aircraft and requires a constraint row for each. Concentrated and running
loads are checked per (cargo item, compartment) pairing; a pairing whose
compartment, constraint row or limit is missing is skipped with a warning.
"""

import asyncio
import logging
from typing import Optional

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION
from deckload.errors import ConstraintMissingError, NotFoundError
from deckload.floor.layout import (
    get_cargo_item_with_wheel_type,
    get_touchpoint_compartments,
    get_treadway_placement,
)
from deckload.floor.loads import (
    aggregate_cumulative_load_by_compartment,
    concentrated_load,
    get_on_deck_items,
    running_load,
)
from deckload.models.entities import Aircraft, CargoItem, Compartment, LoadConstraint
from deckload.models.results import (
    AnyLoadValidationResult,
    ConcentratedLoadValidationResult,
    CumulativeLoadValidationResult,
    MissionValidationResults,
    RunningLoadCategory,
    RunningLoadValidationResult,
    TouchpointCompartments,
    TreadwayPlacement,
    ValidationStatus,
)
from deckload.repository.base import EntityKind, Repository, fetch_children, fetch_one, get_mission_aircraft
from deckload.units import CONCENTRATED_LOAD_UNIT, RUNNING_LOAD_UNIT, WEIGHT_UNIT

_LOG = logging.getLogger(__name__)


def check_limit(current: float, limit: Optional[float]) -> tuple[ValidationStatus, float]:
    """Status and overage of a load against a limit; no limit always passes."""
    if limit is None:
        return ValidationStatus.PASS, 0.0
    overage = max(0.0, current - limit)
    status = ValidationStatus.PASS if current <= limit else ValidationStatus.FAIL
    return status, overage


def _describe(kind: str, compartment: Compartment, current: float, limit: Optional[float],
              overage: float, unit: str) -> str:
    label = compartment.name or f"#{compartment.id}"
    if limit is None:
        return f"{kind} load in compartment {label} is {current:.2f} {unit} (no limit set)"
    if overage > 0:
        return (f"{kind} load in compartment {label} is {current:.2f} {unit}, exceeding the "
                f"{limit:.2f} {unit} limit by {overage:.2f} {unit}")
    return f"{kind} load in compartment {label} is {current:.2f} {unit}, within the {limit:.2f} {unit} limit"


async def get_load_constraint(repo: Repository, compartment_id: int) -> LoadConstraint:
    """
    Constraint row of a compartment.

    Raises:
        ConstraintMissingError: If the compartment has no constraint row
    """
    rows = await fetch_children(repo, EntityKind.LOAD_CONSTRAINT, compartment_id)
    if not rows:
        raise ConstraintMissingError(compartment_id)
    return rows[0]


async def _find_compartment_constraint(
    repo: Repository,
    compartment_id: int,
    cargo_item_id: int,
) -> Optional[tuple[Compartment, LoadConstraint]]:
    try:
        compartment = await fetch_one(repo, EntityKind.COMPARTMENT, compartment_id)
        constraint = await get_load_constraint(repo, compartment_id)
    except NotFoundError as e:
        _LOG.warning("Skipping compartment %s for cargo item %s: %s", compartment_id, cargo_item_id, e)
        return None
    return compartment, constraint


async def validate_cumulative_load(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> list[CumulativeLoadValidationResult]:
    """
    Check total weight in every compartment of the mission's aircraft.

    Compartments without cargo report a current load of 0.

    Raises:
        NotFoundError: If the mission, its aircraft or any compartment's
            constraint row is missing, or the aircraft has no compartments
    """
    _, aircraft = await get_mission_aircraft(repo, mission_id)
    loads = await aggregate_cumulative_load_by_compartment(repo, mission_id, calibration)

    compartments: list[Compartment] = await fetch_children(repo, EntityKind.COMPARTMENT, aircraft.id)
    if not compartments:
        raise NotFoundError(
            "Compartment", aircraft.id, f"No compartments found for aircraft with ID {aircraft.id}"
        )
    constraints = await asyncio.gather(*(get_load_constraint(repo, c.id) for c in compartments))

    results = []
    for compartment, constraint in zip(compartments, constraints):
        current = loads.get(compartment.id, 0.0)
        limit = constraint.max_cumulative_weight
        status, overage = check_limit(current, limit)
        results.append(
            CumulativeLoadValidationResult(
                status=status,
                compartment_id=compartment.id,
                compartment_name=compartment.name,
                current_load=current,
                max_allowed_load=limit,
                overage_amount=overage,
                message=_describe("Cumulative", compartment, current, limit, overage, WEIGHT_UNIT),
            )
        )
    return results


def _bearing_compartments(mapping: TouchpointCompartments, is_bulk: bool) -> list[int]:
    if is_bulk:
        return list(mapping.overlapping_compartments)
    # one check per distinct compartment under the wheels, in touchpoint order
    return list(dict.fromkeys(mapping.touchpoint_to_compartment.values()))


async def _validate_item_concentrated_load(
    repo: Repository,
    item: CargoItem,
    calibration: Calibration,
) -> list[ConcentratedLoadValidationResult]:
    _, wheel_type = await get_cargo_item_with_wheel_type(repo, item.id)
    value = concentrated_load(item, wheel_type, calibration)
    mapping = await get_touchpoint_compartments(repo, item.id, wheel_type)

    results = []
    for compartment_id in _bearing_compartments(mapping, not wheel_type.is_wheeled):
        found = await _find_compartment_constraint(repo, compartment_id, item.id)
        if found is None:
            continue
        compartment, constraint = found
        limit = constraint.max_concentrated_load
        if limit is None:
            _LOG.warning("No concentrated load limit for compartment %s, skipping cargo item %s",
                         compartment_id, item.id)
            continue
        status, overage = check_limit(value, limit)
        results.append(
            ConcentratedLoadValidationResult(
                status=status,
                compartment_id=compartment_id,
                compartment_name=compartment.name,
                cargo_item_id=item.id,
                current_load=value,
                max_allowed_load=limit,
                overage_amount=overage,
                message=_describe("Concentrated", compartment, value, limit, overage, CONCENTRATED_LOAD_UNIT),
            )
        )
    return results


async def validate_concentrated_load(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> list[ConcentratedLoadValidationResult]:
    """
    Check each on-deck item's concentrated load in every compartment it bears on.

    Bulk items are checked once per overlapping compartment, wheeled items
    once per distinct compartment under their wheels. An empty mission
    gives an empty list.

    Raises:
        NotFoundError: If the mission or its aircraft doesn't exist
    """
    await get_mission_aircraft(repo, mission_id)
    items = await get_on_deck_items(repo, mission_id)
    per_item = await asyncio.gather(
        *(_validate_item_concentrated_load(repo, item, calibration) for item in items)
    )
    return [result for results in per_item for result in results]


def running_load_category(placement: TreadwayPlacement) -> RunningLoadCategory:
    """Treadway limit for anything touching a treadway, between-treadway limit otherwise."""
    if placement.on_treadway:
        return RunningLoadCategory.TREADWAY
    return RunningLoadCategory.BETWEEN_TREADWAYS


async def _validate_item_running_load(
    repo: Repository,
    item: CargoItem,
    aircraft: Aircraft,
    calibration: Calibration,
) -> list[RunningLoadValidationResult]:
    _, wheel_type = await get_cargo_item_with_wheel_type(repo, item.id)
    value = running_load(item, wheel_type)
    category = running_load_category(get_treadway_placement(item, wheel_type, aircraft, calibration))
    mapping = await get_touchpoint_compartments(repo, item.id, wheel_type)

    results = []
    for compartment_id in mapping.overlapping_compartments:
        found = await _find_compartment_constraint(repo, compartment_id, item.id)
        if found is None:
            continue
        compartment, constraint = found
        if category == RunningLoadCategory.TREADWAY:
            limit = constraint.max_running_load_treadway
        else:
            limit = constraint.max_running_load_between_treadways
        if limit is None:
            _LOG.warning("No %s running load limit for compartment %s, skipping cargo item %s",
                         category.value, compartment_id, item.id)
            continue
        status, overage = check_limit(value, limit)
        results.append(
            RunningLoadValidationResult(
                status=status,
                compartment_id=compartment_id,
                compartment_name=compartment.name,
                cargo_item_id=item.id,
                load_category=category,
                current_load=value,
                max_allowed_load=limit,
                overage_amount=overage,
                message=_describe("Running", compartment, value, limit, overage, RUNNING_LOAD_UNIT),
            )
        )
    return results


async def validate_running_load(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> list[RunningLoadValidationResult]:
    """
    Check each on-deck item's running load in every compartment its
    load-bearing span overlaps, against the treadway or between-treadway limit.

    Raises:
        NotFoundError: If the mission or its aircraft doesn't exist
        InvalidInputError: If a wheeled item has no length between its axles
    """
    _, aircraft = await get_mission_aircraft(repo, mission_id)
    items = await get_on_deck_items(repo, mission_id)
    per_item = await asyncio.gather(
        *(_validate_item_running_load(repo, item, aircraft, calibration) for item in items)
    )
    return [result for results in per_item for result in results]


async def validate_mission_load_constraints(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
    include_running: bool = False,
) -> MissionValidationResults:
    """
    Run every floor-load check for a mission.

    The mission fails when any single result fails.

    Args:
        repo: Entity repository
        mission_id: Mission to validate
        calibration: Calibration constants
        include_running: Also check running loads

    Raises:
        NotFoundError: If the mission, its aircraft or a compartment's
            constraint row is missing
    """
    await get_mission_aircraft(repo, mission_id)
    checks = [
        validate_cumulative_load(repo, mission_id, calibration),
        validate_concentrated_load(repo, mission_id, calibration),
    ]
    if include_running:
        checks.append(validate_running_load(repo, mission_id, calibration))

    groups = await asyncio.gather(*checks)
    results: list[AnyLoadValidationResult] = [result for group in groups for result in group]
    failed = any(result.status == ValidationStatus.FAIL for result in results)
    overall = ValidationStatus.FAIL if failed else ValidationStatus.PASS
    _LOG.info("Mission %s floor validation: %s (%d checks)", mission_id, overall.value, len(results))
    return MissionValidationResults(mission_id=mission_id, overall_status=overall, results=results)
