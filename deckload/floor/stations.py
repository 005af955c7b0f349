"""
Conversions between deck x positions and fuselage stations.

A cargo item's station (FS) is the station of its centre of gravity:
the front edge x plus the item's cog offset. Stations are whole inches,
rounded half up.
"""

import math

from deckload.models.entities import CargoItem


def fs_to_x_position(fs: float, cog: float) -> float:
    """Front-edge x for an item whose centre of gravity sits at station fs."""
    return fs - cog


def x_position_to_fs(x_position: float, cog: float) -> int:
    """Station of an item's centre of gravity, rounded half up to whole inches."""
    return math.floor(x_position + cog + 0.5)


def cargo_item_fs(item: CargoItem) -> int:
    """Station of an on-deck item, 0 for items that are not placed."""
    if not item.is_on_deck or item.x_start_position < 0:
        return 0
    return x_position_to_fs(item.x_start_position, item.cog)


def move_cargo_item_to_fs(item: CargoItem, fs: float) -> CargoItem:
    """Copy of the item with its centre of gravity placed at station fs."""
    return item.model_copy(update={"x_start_position": fs_to_x_position(fs, item.cog)})


def update_cargo_item_cog(item: CargoItem, cog: float) -> CargoItem:
    """
    Copy of the item with a new cog offset.

    The item keeps its station, so the front edge moves by the change in cog.
    Items not on deck keep their unplaced position.
    """
    if not item.is_on_deck or item.x_start_position < 0:
        return item.model_copy(update={"cog": cog})
    fs = cargo_item_fs(item)
    return item.model_copy(update={"cog": cog, "x_start_position": fs_to_x_position(fs, cog)})
