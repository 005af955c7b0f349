"""
Floor-load chain: geometry, load calculation and validation.
"""

from deckload.floor.layout import (
    coerce_wheel_type,
    footprint_corners,
    get_footprint_corners,
    get_touchpoint_compartments,
    get_treadway_placement,
    get_wheel_touchpoints,
    is_span_on_treadway,
    is_touchpoint_on_treadway,
    wheel_contact_span,
    wheel_touchpoints,
)
from deckload.floor.loads import (
    aggregate_cumulative_load_by_compartment,
    calculate_concentrated_load,
    calculate_load_per_compartment,
    calculate_running_load,
)
from deckload.floor.stations import (
    cargo_item_fs,
    fs_to_x_position,
    move_cargo_item_to_fs,
    update_cargo_item_cog,
    x_position_to_fs,
)
from deckload.floor.validation import (
    validate_concentrated_load,
    validate_cumulative_load,
    validate_mission_load_constraints,
    validate_running_load,
)

__all__ = [
    "coerce_wheel_type",
    "footprint_corners",
    "get_footprint_corners",
    "get_touchpoint_compartments",
    "get_treadway_placement",
    "get_wheel_touchpoints",
    "is_span_on_treadway",
    "is_touchpoint_on_treadway",
    "wheel_contact_span",
    "wheel_touchpoints",
    "aggregate_cumulative_load_by_compartment",
    "calculate_concentrated_load",
    "calculate_load_per_compartment",
    "calculate_running_load",
    "cargo_item_fs",
    "fs_to_x_position",
    "move_cargo_item_to_fs",
    "update_cargo_item_cog",
    "x_position_to_fs",
    "validate_concentrated_load",
    "validate_cumulative_load",
    "validate_mission_load_constraints",
    "validate_running_load",
]
