"""
Weight-and-balance layer and the MAC constraint validator.
"""

from deckload.mac.calculation import (
    calculate_additional_weights_mac_index,
    calculate_aircraft_cg,
    calculate_fuel_mac,
    calculate_mac_index,
    calculate_mac_percent,
    calculate_total_aircraft_weight,
    calculate_weight_and_balance,
    find_closest_fuel_mac_quant,
    get_empty_aircraft_mac_index,
)
from deckload.mac.validation import select_mac_constraint, validate_mac, validate_mission_mac

__all__ = [
    "calculate_additional_weights_mac_index",
    "calculate_aircraft_cg",
    "calculate_fuel_mac",
    "calculate_mac_index",
    "calculate_mac_percent",
    "calculate_total_aircraft_weight",
    "calculate_weight_and_balance",
    "find_closest_fuel_mac_quant",
    "get_empty_aircraft_mac_index",
    "select_mac_constraint",
    "validate_mac",
    "validate_mission_mac",
]
