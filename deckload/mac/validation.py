"""
MAC% validation against the weight-indexed allowed-MAC table.

The row used is the lightest one at or above the gross weight; when the
aircraft is heavier than every row, the heaviest row below it is used.
"""

import logging
from typing import Optional

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION
from deckload.mac.calculation import calculate_weight_and_balance
from deckload.models.entities import AllowedMacConstraint
from deckload.models.results import MacValidationResult
from deckload.repository.base import EntityKind, Repository, fetch_all

_LOG = logging.getLogger(__name__)

NO_CONSTRAINTS_MESSAGE = "No MAC constraints found for the specified weight"


def select_mac_constraint(
    constraints: list[AllowedMacConstraint],
    gross_weight: float,
) -> Optional[AllowedMacConstraint]:
    """Allowed-MAC row governing a gross weight, or None for an empty table."""
    above = [c for c in constraints if c.gross_aircraft_weight >= gross_weight]
    if above:
        return min(above, key=lambda c: c.gross_aircraft_weight)
    below = [c for c in constraints if c.gross_aircraft_weight < gross_weight]
    if below:
        return max(below, key=lambda c: c.gross_aircraft_weight)
    return None


def check_mac(
    constraints: list[AllowedMacConstraint],
    gross_weight: float,
    mac_percent: float,
) -> MacValidationResult:
    """Pure form of validate_mac over an already-fetched table."""
    constraint = select_mac_constraint(constraints, gross_weight)
    if constraint is None:
        return MacValidationResult(
            is_valid=False,
            current_mac=mac_percent,
            actual_weight=gross_weight,
            message=NO_CONSTRAINTS_MESSAGE,
        )

    is_valid = constraint.min_mac <= mac_percent <= constraint.max_mac
    if is_valid:
        message = (f"MAC {mac_percent:.2f}% is within the allowed range "
                   f"{constraint.min_mac:.2f}%-{constraint.max_mac:.2f}%")
    else:
        message = (f"MAC {mac_percent:.2f}% is outside the allowed range "
                   f"{constraint.min_mac:.2f}%-{constraint.max_mac:.2f}%")
    return MacValidationResult(
        is_valid=is_valid,
        current_mac=mac_percent,
        min_allowed_mac=constraint.min_mac,
        max_allowed_mac=constraint.max_mac,
        weight_used_for_constraint=constraint.gross_aircraft_weight,
        actual_weight=gross_weight,
        message=message,
    )


async def validate_mac(
    repo: Repository,
    gross_weight: float,
    mac_percent: float,
) -> MacValidationResult:
    """
    Check a MAC% against the allowed band for a gross weight.

    An empty table gives an invalid result rather than an error.

    Args:
        repo: Entity repository
        gross_weight: Gross aircraft weight (lbs)
        mac_percent: MAC% to check

    Returns:
        MacValidationResult naming the row weight and band used
    """
    constraints = await fetch_all(repo, EntityKind.ALLOWED_MAC_CONSTRAINT)
    result = check_mac(constraints, gross_weight, mac_percent)
    if not result.is_valid:
        _LOG.info("MAC check failed at %.1f lbs: %s", gross_weight, result.message)
    return result


async def validate_mission_mac(
    repo: Repository,
    mission_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> MacValidationResult:
    """
    Compute a mission's gross weight and MAC% and validate them.

    Raises:
        NotFoundError: If the mission, its aircraft or a cargo item doesn't exist
    """
    balance = await calculate_weight_and_balance(repo, mission_id, calibration)
    return await validate_mac(repo, balance.total_weight, balance.mac_percent)
