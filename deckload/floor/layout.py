"""
Floor geometry for cargo items on the cargo deck.

Maps a stored cargo item to its footprint corners and wheel touchpoints,
tests wheel contact spans against the treadways, and finds the structural
compartments an item bears on.

ASSUMPTIONS:
- Footprints are axis-aligned rectangles [x, x+length] x [y, y+width]
- "Front" is the smaller x, "left" is the smaller y
- Wheel axles sit forward_overhang behind the front edge and
  back_overhang ahead of the back edge
- A touchpoint on the shared boundary of two compartments belongs to the
  forward one (compartments are matched in ascending x_start order)
"""

import logging
from typing import Optional, Union

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION
from deckload.errors import InvalidInputError
from deckload.models.entities import Aircraft, CargoItem, CargoType, Compartment, WheelType
from deckload.models.results import (
    Point,
    TouchpointCompartments,
    TouchpointPosition,
    TreadwayPlacement,
    WheelSpan,
)
from deckload.repository.base import EntityKind, Repository, fetch_children, fetch_one, get_mission_aircraft

_LOG = logging.getLogger(__name__)

Interval = tuple[float, float]


def coerce_wheel_type(value: Union[WheelType, str]) -> WheelType:
    """
    Turn a wheel-type discriminant into a WheelType.

    Raises:
        InvalidInputError: If the value is not a known wheel type
    """
    if isinstance(value, WheelType):
        return value
    try:
        return WheelType(value)
    except ValueError:
        raise InvalidInputError(f"Invalid wheel type: {value}") from None


def footprint_corners(item: CargoItem) -> dict[TouchpointPosition, Point]:
    """Four corners of the item's rectangular footprint."""
    x_front = item.x_start_position
    x_back = item.x_start_position + item.length
    y_left = item.y_start_position
    y_right = item.y_start_position + item.width
    return {
        TouchpointPosition.FRONT_LEFT: Point(x=x_front, y=y_left),
        TouchpointPosition.FRONT_RIGHT: Point(x=x_front, y=y_right),
        TouchpointPosition.BACK_LEFT: Point(x=x_back, y=y_left),
        TouchpointPosition.BACK_RIGHT: Point(x=x_back, y=y_right),
    }


def wheel_touchpoints(
    item: CargoItem,
    wheel_type: Union[WheelType, str],
) -> dict[TouchpointPosition, Point]:
    """
    Ground contact points of a cargo item.

    Args:
        item: The cargo item
        wheel_type: Wheel configuration of the item's cargo type

    Returns:
        4_wheeled: four points at the axle stations on both sides
        2_wheeled: "front" and "back" on the lateral centreline
        bulk: the footprint corners

    Raises:
        InvalidInputError: If wheel_type is not a known wheel type
    """
    wheel_type = coerce_wheel_type(wheel_type)
    if wheel_type == WheelType.BULK:
        return footprint_corners(item)

    x_front = item.x_start_position + item.forward_overhang
    x_back = item.x_start_position + item.length - item.back_overhang

    if wheel_type == WheelType.FOUR_WHEELED:
        y_left = item.y_start_position
        y_right = item.y_start_position + item.width
        return {
            TouchpointPosition.FRONT_LEFT: Point(x=x_front, y=y_left),
            TouchpointPosition.FRONT_RIGHT: Point(x=x_front, y=y_right),
            TouchpointPosition.BACK_LEFT: Point(x=x_back, y=y_left),
            TouchpointPosition.BACK_RIGHT: Point(x=x_back, y=y_right),
        }

    y_center = item.y_start_position + item.width / 2
    return {
        TouchpointPosition.FRONT: Point(x=x_front, y=y_center),
        TouchpointPosition.BACK: Point(x=x_back, y=y_center),
    }


def wheel_contact_span(x: float, y: float, wheel_width: float) -> WheelSpan:
    """
    Lateral span of a wheel centred at (x, y).

    Raises:
        InvalidInputError: If wheel_width is not positive
    """
    if wheel_width <= 0:
        raise InvalidInputError(f"Wheel width must be positive, got {wheel_width}")
    half = wheel_width / 2
    return WheelSpan(y_start=y - half, y_end=y + half)


def overlap_length(a_start: float, a_end: float, b_start: float, b_end: float) -> float:
    """Length shared by two intervals (0 when disjoint)."""
    return max(0.0, min(a_end, b_end) - max(a_start, b_start))


def treadway_intervals(aircraft: Aircraft) -> tuple[Interval, Interval]:
    """Lateral (left, right) treadway intervals from the centreline."""
    half = aircraft.treadways_width / 2
    d = aircraft.treadways_dist_from_center
    return (-d - half, -d + half), (d - half, d + half)


def _span_on_interval(span: WheelSpan, interval: Interval, threshold: float) -> bool:
    if span.width <= 0:
        return False
    return overlap_length(span.y_start, span.y_end, *interval) >= threshold * span.width


def is_span_on_treadway(
    span: WheelSpan,
    aircraft: Aircraft,
    threshold: float = 0.5,
) -> bool:
    """
    Whether a wheel contact span rests on either treadway.

    True when the overlap with one treadway is at least threshold times the
    span's own width; exactly half counts as on the treadway.
    """
    left, right = treadway_intervals(aircraft)
    return _span_on_interval(span, left, threshold) or _span_on_interval(span, right, threshold)


async def is_touchpoint_on_treadway(
    repo: Repository,
    span: WheelSpan,
    aircraft_id: int,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> bool:
    """
    Repository-backed form of is_span_on_treadway.

    Raises:
        NotFoundError: If the aircraft doesn't exist
    """
    aircraft: Aircraft = await fetch_one(repo, EntityKind.AIRCRAFT, aircraft_id)
    return is_span_on_treadway(span, aircraft, calibration.floor_load.treadway_overlap_threshold)


def get_treadway_placement(
    item: CargoItem,
    wheel_type: Union[WheelType, str],
    aircraft: Aircraft,
    calibration: Calibration = DEFAULT_CALIBRATION,
) -> TreadwayPlacement:
    """
    Where an item sits relative to the treadways.

    Wheeled items are judged per wheel contact span with the overlap
    threshold; bulk items by any footprint overlap with a treadway, and as
    in between only when the whole footprint lies between the treadways.
    """
    wheel_type = coerce_wheel_type(wheel_type)
    threshold = calibration.floor_load.treadway_overlap_threshold
    left, right = treadway_intervals(aircraft)

    if wheel_type == WheelType.BULK:
        y_start = item.y_start_position
        y_end = item.y_start_position + item.width
        return TreadwayPlacement(
            on_right=overlap_length(y_start, y_end, *right) > 0,
            on_left=overlap_length(y_start, y_end, *left) > 0,
            in_between=y_start > left[1] and y_end < right[0],
        )

    wheel_width = calibration.floor_load.wheels_for(wheel_type).wheel_width
    on_right = on_left = in_between = False
    for point in wheel_touchpoints(item, wheel_type).values():
        span = wheel_contact_span(point.x, point.y, wheel_width)
        wheel_on_right = _span_on_interval(span, right, threshold)
        wheel_on_left = _span_on_interval(span, left, threshold)
        on_right = on_right or wheel_on_right
        on_left = on_left or wheel_on_left
        if not (wheel_on_right or wheel_on_left) and left[1] < point.y < right[0]:
            in_between = True
    return TreadwayPlacement(on_right=on_right, on_left=on_left, in_between=in_between)


def effective_x_span(item: CargoItem, wheel_type: Union[WheelType, str]) -> Interval:
    """
    Longitudinal span that loads the floor.

    Wheeled items bear only between their axles; bulk items over their
    full length.
    """
    wheel_type = coerce_wheel_type(wheel_type)
    if wheel_type == WheelType.BULK:
        return item.x_start_position, item.x_start_position + item.length
    return (
        item.x_start_position + item.forward_overhang,
        item.x_start_position + item.length - item.back_overhang,
    )


def sort_compartments(compartments: list[Compartment]) -> list[Compartment]:
    return sorted(compartments, key=lambda c: (c.x_start, c.x_end))


def overlapping_compartments(compartments: list[Compartment], x_start: float, x_end: float) -> list[int]:
    """Ids of compartments intersecting (x_start, x_end); touching a boundary does not count."""
    return [
        c.id for c in sort_compartments(compartments)
        if c.x_start < x_end and c.x_end > x_start
    ]


def compartment_containing(compartments: list[Compartment], x: float) -> Optional[int]:
    """Id of the first compartment (forward to aft) whose closed span contains x."""
    for compartment in sort_compartments(compartments):
        if compartment.x_start <= x <= compartment.x_end:
            return compartment.id
    return None


async def get_cargo_item_with_wheel_type(
    repo: Repository,
    cargo_item_id: int,
) -> tuple[CargoItem, WheelType]:
    """
    Fetch a cargo item and the wheel type of its cargo type.

    Raises:
        NotFoundError: If the item or its cargo type doesn't exist
    """
    item: CargoItem = await fetch_one(repo, EntityKind.CARGO_ITEM, cargo_item_id)
    cargo_type: CargoType = await fetch_one(repo, EntityKind.CARGO_TYPE, item.cargo_type_id)
    return item, cargo_type.type


async def get_footprint_corners(repo: Repository, cargo_item_id: int) -> dict[TouchpointPosition, Point]:
    item: CargoItem = await fetch_one(repo, EntityKind.CARGO_ITEM, cargo_item_id)
    return footprint_corners(item)


async def get_wheel_touchpoints(
    repo: Repository,
    cargo_item_id: int,
    wheel_type: Union[WheelType, str, None] = None,
) -> dict[TouchpointPosition, Point]:
    """
    Touchpoints of a stored cargo item.

    When wheel_type is None the item's cargo type decides.

    Raises:
        NotFoundError: If the cargo item (or its cargo type) doesn't exist
        InvalidInputError: If wheel_type is not a known wheel type
    """
    if wheel_type is None:
        item, wheel_type = await get_cargo_item_with_wheel_type(repo, cargo_item_id)
    else:
        item = await fetch_one(repo, EntityKind.CARGO_ITEM, cargo_item_id)
    return wheel_touchpoints(item, wheel_type)


def map_touchpoint_compartments(
    item: CargoItem,
    wheel_type: Union[WheelType, str],
    compartments: list[Compartment],
) -> TouchpointCompartments:
    """Pure form of get_touchpoint_compartments over already-fetched compartments."""
    wheel_type = coerce_wheel_type(wheel_type)
    x_start, x_end = effective_x_span(item, wheel_type)
    result = TouchpointCompartments(overlapping_compartments=overlapping_compartments(compartments, x_start, x_end))

    if wheel_type == WheelType.BULK:
        return result

    for position, point in wheel_touchpoints(item, wheel_type).items():
        compartment_id = compartment_containing(compartments, point.x)
        if compartment_id is None:
            _LOG.debug("Touchpoint %s of cargo item %s at x=%.2f is outside every compartment",
                       position.value, item.id, point.x)
            continue
        result.touchpoint_to_compartment[position] = compartment_id
    return result


async def get_touchpoint_compartments(
    repo: Repository,
    cargo_item_id: int,
    wheel_type: Union[WheelType, str, None] = None,
) -> TouchpointCompartments:
    """
    Compartments a cargo item bears on.

    Walks cargo item -> mission -> aircraft -> compartments. Bulk items only
    report overlapping compartments; wheeled items also map each touchpoint
    to the compartment containing it.

    Raises:
        NotFoundError: If the item, its mission or the aircraft doesn't exist
        InvalidInputError: If wheel_type is not a known wheel type
    """
    if wheel_type is None:
        item, wheel_type = await get_cargo_item_with_wheel_type(repo, cargo_item_id)
    else:
        wheel_type = coerce_wheel_type(wheel_type)
        item = await fetch_one(repo, EntityKind.CARGO_ITEM, cargo_item_id)

    _, aircraft = await get_mission_aircraft(repo, item.mission_id)
    compartments = await fetch_children(repo, EntityKind.COMPARTMENT, aircraft.id)
    return map_touchpoint_compartments(item, wheel_type, compartments)
