"""
Unit registry and helpers for weight-and-balance quantities.

Uses the pint library so conversions between pounds and thousands of
pounds (and inch-based load units) stay dimensionally checked.
All engine inputs are inches and pounds; these helpers are used at the
edges where another unit is reported.
"""

from typing import Union

import pint

# Create a shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity

# Common unit definitions for convenience
inch = ureg.inch
pound = ureg.pound
kilopound = ureg.kilopound

# Unit labels reported on load results
CONCENTRATED_LOAD_UNIT = "lbs/sq.in"
RUNNING_LOAD_UNIT = "lbs/in"
WEIGHT_UNIT = "lbs"

KLBS_DIGITS = 9


def magnitude_in(quantity: pint.Quantity, unit: Union[str, pint.Unit]) -> float:
    """Get the magnitude of a quantity in specified units."""
    return quantity.to(unit).magnitude


def lbs_to_klbs(weight_lbs: float) -> float:
    """Convert a weight in pounds to thousands of pounds."""
    # rounded so chart bounds compare exactly (the registry factor is not exactly 1e-3)
    return round(magnitude_in(Q_(weight_lbs, pound), kilopound), KLBS_DIGITS)


def klbs_to_lbs(weight_klbs: float) -> float:
    """Convert a weight in thousands of pounds to pounds."""
    return round(magnitude_in(Q_(weight_klbs, kilopound), pound), KLBS_DIGITS - 3)


def pressure_psi(weight_lbs: float, area_sq_in: float) -> float:
    """Weight spread over an area, in pounds per square inch."""
    return magnitude_in(Q_(weight_lbs, pound) / Q_(area_sq_in, inch ** 2), pound / inch ** 2)


def linear_load(weight_lbs: float, length_in: float) -> float:
    """Weight spread over a length, in pounds per inch."""
    return magnitude_in(Q_(weight_lbs, pound) / Q_(length_in, inch), pound / inch)
