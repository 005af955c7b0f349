"""
Weight-and-balance arithmetic: moment indices, gross weight, CG and MAC%.

Works in index units rather than raw moments:
    index = (station - R) * weight / 50000
with R the reference station 533.46. The empty aircraft index already
carries the +100 offset, which is removed again when the CG is derived.

ASSUMPTIONS:
- Only on-deck cargo contributes to the index
- Gross weight counts every cargo item of the mission, whatever its status
- Fuel index comes from the fuel state's explicit value, else the nearest
  row of the fuel reference table
- Lateral position does not affect the index (longitudinal moments only)
"""

import asyncio
import logging
from typing import Optional

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION, WeightBalanceConstants
from deckload.models.entities import Aircraft, CargoItem, FuelMacQuant, FuelState, Mission, TANK_FIELDS
from deckload.models.results import WeightAndBalance
from deckload.repository.base import (
    EntityKind,
    Repository,
    fetch_all,
    fetch_children,
    fetch_one,
    get_mission_aircraft,
)

_LOG = logging.getLogger(__name__)


def moment_index(station: float, weight: float, constants: WeightBalanceConstants) -> float:
    """Index of a weight at a station."""
    return (station - constants.reference_station) * weight / constants.index_divisor


def cargo_index(item: CargoItem, constants: WeightBalanceConstants) -> float:
    """Index of a cargo item taken at the middle of its length."""
    return moment_index(item.center_x, item.weight, constants)


def additional_weights(mission: Mission, constants: WeightBalanceConstants) -> list[tuple[str, float, float]]:
    """(category, station, weight) for the six fixed mission weight categories."""
    return [
        ("crew", mission.loadmasters_fs, mission.loadmasters * constants.loadmaster_weight),
        ("configuration", constants.configuration_station, mission.configuration_weights),
        ("crew_gear", constants.crew_gear_station, mission.crew_gear_weight),
        ("food", constants.food_station, mission.food_weight),
        ("safety_gear", constants.safety_gear_station, mission.safety_gear_weight),
        ("etc", constants.etc_station, mission.etc_weight),
    ]


def mac_percent_from_cg(cg: float, constants: WeightBalanceConstants) -> float:
    """Position of a CG station along the MAC, in percent."""
    return (cg - constants.mac_datum) * 100 / constants.mac_length


def _closest_upper_value(values: set[float], target: float) -> float:
    upper = [v for v in values if v >= target]
    if not upper:
        return max(values)
    return min(upper)


def find_closest_fuel_mac_quant(
    quants: list[FuelMacQuant],
    fuel_state: FuelState,
) -> Optional[FuelMacQuant]:
    """
    Nearest row of the fuel reference table for a fuel state.

    Each tank is rounded up to the closest tabulated quantity (or the largest
    one when the tank holds more than any row). The row matching all rounded
    tanks wins; without one, the row with the smallest summed difference
    from the actual quantities is used.

    Returns:
        The chosen row, or None for an empty table
    """
    if not quants:
        return None

    actual = fuel_state.tank_quantities()
    rounded = tuple(
        _closest_upper_value({getattr(q, name) for q in quants}, quantity)
        for name, quantity in zip(TANK_FIELDS, actual)
    )
    for quant in quants:
        if quant.tank_quantities() == rounded:
            return quant

    _LOG.warning("No exact fuel table row for tanks %s, using nearest row", rounded)
    return min(
        quants,
        key=lambda q: sum(abs(a - b) for a, b in zip(q.tank_quantities(), actual)),
    )


async def calculate_mac_index(
    repo: Repository,
    cargo_item_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Moment index of one cargo item.

    Raises:
        NotFoundError: If the cargo item doesn't exist
    """
    item: CargoItem = await fetch_one(repo, EntityKind.CARGO_ITEM, cargo_item_id)
    return cargo_index(item, calibration.weight_balance)


async def calculate_additional_weights_mac_index(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Index of the crew and the fixed mission weights.

    Raises:
        NotFoundError: If the mission doesn't exist
    """
    mission: Mission = await fetch_one(repo, EntityKind.MISSION, mission_id)
    constants = calibration.weight_balance
    return sum(
        moment_index(station, weight, constants)
        for _, station, weight in additional_weights(mission, constants)
    )


async def get_fuel_state(repo: Repository, mission_id: int) -> Optional[FuelState]:
    rows = await fetch_children(repo, EntityKind.FUEL_STATE, mission_id)
    return rows[0] if rows else None


async def calculate_fuel_mac(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Index contribution of the mission's fuel.

    Returns 0 when the mission has no fuel state, or when the fuel state
    has no explicit contribution and the reference table is empty.

    Raises:
        NotFoundError: If the mission doesn't exist
    """
    await fetch_one(repo, EntityKind.MISSION, mission_id)
    fuel_state = await get_fuel_state(repo, mission_id)
    if fuel_state is None:
        return 0.0
    if fuel_state.mac_contribution is not None:
        return fuel_state.mac_contribution

    quants = await fetch_all(repo, EntityKind.FUEL_MAC_QUANT)
    quant = find_closest_fuel_mac_quant(quants, fuel_state)
    if quant is None:
        _LOG.warning("No fuel reference table rows, fuel index for mission %s taken as 0", mission_id)
        return 0.0
    return quant.mac_contribution


async def get_empty_aircraft_mac_index(repo: Repository, aircraft_id: int) -> float:
    aircraft: Aircraft = await fetch_one(repo, EntityKind.AIRCRAFT, aircraft_id)
    return aircraft.empty_mac


async def calculate_total_aircraft_weight(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Gross aircraft weight for a mission (lbs).

    Empty weight + fixed mission weights + every cargo item + total fuel.

    Raises:
        NotFoundError: If the mission or its aircraft doesn't exist
    """
    mission, aircraft = await get_mission_aircraft(repo, mission_id)
    items, fuel_state = await asyncio.gather(
        fetch_children(repo, EntityKind.CARGO_ITEM, mission_id),
        get_fuel_state(repo, mission_id),
    )
    fixed = sum(weight for _, _, weight in additional_weights(mission, calibration.weight_balance))
    cargo = sum(item.weight for item in items)
    fuel = fuel_state.total_fuel if fuel_state is not None else 0.0
    return aircraft.empty_weight + fixed + cargo + fuel


async def calculate_aircraft_cg(
    repo: Repository,
    mission_id: int,
    total_index: float,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    Centre of gravity station for a total index.

    Equations:
        CG = (total_index - 100) * 50000 / total_weight + R

    Raises:
        NotFoundError: If the mission or its aircraft doesn't exist
        ValueError: If the total weight is not positive
    """
    constants = calibration.weight_balance
    total_weight = await calculate_total_aircraft_weight(repo, mission_id, calibration)
    if total_weight <= 0:
        raise ValueError(f"Total weight must be positive, got {total_weight}")
    return (
        (total_index - constants.index_offset) * constants.index_divisor / total_weight
        + constants.reference_station
    )


async def calculate_weight_and_balance(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> WeightAndBalance:
    """
    Full index breakdown, gross weight, CG and MAC% for a mission.

    Raises:
        NotFoundError: If the mission, its aircraft or a cargo item doesn't exist
    """
    mission, aircraft = await get_mission_aircraft(repo, mission_id)
    items = await fetch_children(repo, EntityKind.CARGO_ITEM, mission_id)
    on_deck = [item for item in items if item.is_on_deck]

    cargo_indices, additional, fuel, empty = await asyncio.gather(
        asyncio.gather(*(calculate_mac_index(repo, item.id, calibration) for item in on_deck)),
        calculate_additional_weights_mac_index(repo, mission_id, calibration),
        calculate_fuel_mac(repo, mission_id, calibration),
        get_empty_aircraft_mac_index(repo, aircraft.id),
    )
    cargo = sum(cargo_indices)
    total_index = cargo + additional + fuel + empty

    total_weight = await calculate_total_aircraft_weight(repo, mission_id, calibration)
    cg = await calculate_aircraft_cg(repo, mission_id, total_index, calibration)
    mac_percent = mac_percent_from_cg(cg, calibration.weight_balance)
    _LOG.debug("Mission %s: weight %.1f, index %.4f, CG %.3f, MAC %.3f%%",
               mission_id, total_weight, total_index, cg, mac_percent)

    return WeightAndBalance(
        mission_id=mission.id,
        cargo_index=cargo,
        additional_weights_index=additional,
        fuel_index=fuel,
        empty_aircraft_index=empty,
        total_index=total_index,
        total_weight=total_weight,
        cg=cg,
        mac_percent=mac_percent,
    )


async def calculate_mac_percent(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> float:
    """
    MAC% of the mission's centre of gravity.

    Raises:
        NotFoundError: If the mission, its aircraft or a cargo item doesn't exist
    """
    balance = await calculate_weight_and_balance(repo, mission_id, calibration)
    return balance.mac_percent
