"""
Floor load calculations for cargo items.

Computes concentrated load (pressure under wheels or footprint), running
load (weight per inch of floor) and the share of an item's weight resting
on each compartment, then totals those shares per compartment for a mission.

ASSUMPTIONS:
- Bulk items spread their weight uniformly over their footprint
- Wheeled items put equal weight on every wheel
- 4-wheeled items run on two parallel wheel tracks, each carrying half
- Only items on deck load the floor
"""

import asyncio
import logging
from collections import defaultdict

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION
from deckload.errors import InvalidInputError
from deckload.floor.layout import (
    get_cargo_item_with_wheel_type,
    map_touchpoint_compartments,
)
from deckload.models.entities import CargoItem, Compartment, WheelType
from deckload.models.results import CompartmentLoad, LoadResult
from deckload.repository.base import EntityKind, Repository, fetch_children, get_mission_aircraft
from deckload.units import CONCENTRATED_LOAD_UNIT, RUNNING_LOAD_UNIT, WEIGHT_UNIT, linear_load, pressure_psi

_LOG = logging.getLogger(__name__)


def concentrated_load(
    item: CargoItem,
    wheel_type: WheelType,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Pressure an item puts on the floor (lbs/sq.in).

    Equations:
        bulk:    weight / (length * width)
        wheeled: weight / (wheel_count * wheel_width * contact_length)
    """
    if wheel_type == WheelType.BULK:
        return pressure_psi(item.weight, item.length * item.width)

    wheels = calibration.floor_load.wheels_for(wheel_type)
    contact_area = wheels.wheel_count * wheels.wheel_width * wheels.contact_length
    return pressure_psi(item.weight, contact_area)


def running_load(item: CargoItem, wheel_type: WheelType) -> float:
    """
    Weight per inch of floor (lbs/in).

    Equations:
        bulk:      weight / length
        2_wheeled: weight / (length - forward_overhang - back_overhang)
        4_wheeled: half of the 2_wheeled value (two wheel tracks)

    Raises:
        InvalidInputError: If a wheeled item has no length between its axles
    """
    if wheel_type == WheelType.BULK:
        return linear_load(item.weight, item.length)

    wheelbase = item.length - item.forward_overhang - item.back_overhang
    if wheelbase <= 0:
        raise InvalidInputError(
            f"Cargo item {item.id} has no length between its axles "
            f"(length {item.length}, overhangs {item.forward_overhang}/{item.back_overhang})"
        )
    per_track = linear_load(item.weight, wheelbase)
    if wheel_type == WheelType.FOUR_WHEELED:
        return per_track / 2
    return per_track


def load_per_compartment(
    item: CargoItem,
    wheel_type: WheelType,
    compartments: list[Compartment],
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> list[CompartmentLoad]:
    """
    Split an item's weight across the compartments it rests on.

    Bulk items are split by the fraction of their full length inside each
    overlapping compartment. Wheeled items put weight / wheel_count on the
    compartment under each touchpoint.
    """
    mapping = map_touchpoint_compartments(item, wheel_type, compartments)
    by_id = {c.id: c for c in compartments}

    if wheel_type == WheelType.BULK:
        item_start = item.x_start_position
        item_end = item.x_start_position + item.length
        loads = []
        for compartment_id in mapping.overlapping_compartments:
            compartment = by_id[compartment_id]
            overlap = min(item_end, compartment.x_end) - max(item_start, compartment.x_start)
            if overlap <= 0:
                continue
            share = item.weight * overlap / item.length
            loads.append(CompartmentLoad(compartment_id=compartment_id, load=LoadResult(value=share, unit=WEIGHT_UNIT)))
        return loads

    wheels = calibration.floor_load.wheels_for(wheel_type)
    load_per_wheel = item.weight / wheels.wheel_count
    totals: dict[int, float] = {}
    for compartment_id in mapping.touchpoint_to_compartment.values():
        totals[compartment_id] = totals.get(compartment_id, 0.0) + load_per_wheel
    return [
        CompartmentLoad(compartment_id=compartment_id, load=LoadResult(value=total, unit=WEIGHT_UNIT))
        for compartment_id, total in totals.items()
    ]


async def calculate_concentrated_load(
    repo: Repository,
    cargo_item_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> LoadResult:
    """
    Concentrated load of a stored cargo item.

    Raises:
        NotFoundError: If the item or its cargo type doesn't exist
    """
    item, wheel_type = await get_cargo_item_with_wheel_type(repo, cargo_item_id)
    value = concentrated_load(item, wheel_type, calibration)
    _LOG.debug("Concentrated load of cargo item %s (%s): %.3f", cargo_item_id, wheel_type.value, value)
    return LoadResult(value=value, unit=CONCENTRATED_LOAD_UNIT)


async def calculate_running_load(
    repo: Repository,
    cargo_item_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> LoadResult:
    """
    Running load of a stored cargo item.

    Raises:
        NotFoundError: If the item or its cargo type doesn't exist
        InvalidInputError: If a wheeled item has no length between its axles
    """
    item, wheel_type = await get_cargo_item_with_wheel_type(repo, cargo_item_id)
    value = running_load(item, wheel_type)
    _LOG.debug("Running load of cargo item %s (%s): %.3f", cargo_item_id, wheel_type.value, value)
    return LoadResult(value=value, unit=RUNNING_LOAD_UNIT)


async def calculate_load_per_compartment(
    repo: Repository,
    cargo_item_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> list[CompartmentLoad]:
    """
    Share of a stored cargo item's weight on each compartment.

    Raises:
        NotFoundError: If the item, its cargo type, mission or aircraft doesn't exist
    """
    item, wheel_type = await get_cargo_item_with_wheel_type(repo, cargo_item_id)
    _, aircraft = await get_mission_aircraft(repo, item.mission_id)
    compartments = await fetch_children(repo, EntityKind.COMPARTMENT, aircraft.id)
    return load_per_compartment(item, wheel_type, compartments, calibration)


async def get_on_deck_items(repo: Repository, mission_id: int) -> list[CargoItem]:
    items = await fetch_children(repo, EntityKind.CARGO_ITEM, mission_id)
    return [item for item in items if item.is_on_deck]


async def aggregate_cumulative_load_by_compartment(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> dict[int, float]:
    """
    Total weight resting on each compartment from all on-deck cargo.

    Compartments with no cargo are absent from the result.

    Raises:
        NotFoundError: If the mission or its aircraft doesn't exist
    """
    await get_mission_aircraft(repo, mission_id)
    items = await get_on_deck_items(repo, mission_id)
    per_item = await asyncio.gather(
        *(calculate_load_per_compartment(repo, item.id, calibration) for item in items)
    )

    totals: dict[int, float] = defaultdict(float)
    for loads in per_item:
        for entry in loads:
            totals[entry.compartment_id] += entry.load.value
    _LOG.debug("Cumulative load for mission %s: %s", mission_id, dict(totals))
    return dict(totals)
