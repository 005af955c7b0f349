"""
Cargo reference chart.

The chart plots cargo weight against operating weight as a family of
lines of slope 1: every thousand pounds of operating weight below the
90,000 lb reference line raises the chart reading by a thousand pounds.
"""

from deckload.config.calibration import CargoChartConstants, DEFAULT_CALIBRATION
from deckload.models.results import CargoChartResult
from deckload.units import klbs_to_lbs, lbs_to_klbs


def _within_axes(operating_klbs: float, cargo_klbs: float, constants: CargoChartConstants) -> bool:
    return (
        constants.min_operating_weight_klbs <= operating_klbs <= constants.max_operating_weight_klbs
        and constants.min_cargo_weight_klbs <= cargo_klbs <= constants.max_cargo_weight_klbs
    )


def is_within_chart_range(
    operating_weight_lbs: float,
    cargo_weight_lbs: float,
    constants: CargoChartConstants = DEFAULT_CALIBRATION.cargo_chart,
) -> bool:
    """Whether the inputs and the resulting reading all fall on the chart."""
    return calculate_cargo_chart_y(operating_weight_lbs, cargo_weight_lbs, constants).is_within_bounds


def calculate_cargo_chart_y(
    operating_weight_lbs: float,
    cargo_weight_lbs: float,
    constants: CargoChartConstants = DEFAULT_CALIBRATION.cargo_chart,
) -> CargoChartResult:
    """
    Chart reading for an operating weight and cargo weight.

    Args:
        operating_weight_lbs: Aircraft operating weight (lbs)
        cargo_weight_lbs: Cargo weight (lbs)
        constants: Chart bounds and slope

    Returns:
        CargoChartResult in thousands of pounds

    Equations:
        y = cargo_klbs + (90 - operating_klbs) * slope
    """
    operating = lbs_to_klbs(operating_weight_lbs)
    cargo = lbs_to_klbs(cargo_weight_lbs)
    deviation = constants.reference_operating_weight_klbs - operating
    y_value = cargo + deviation * constants.line_slope

    within = (
        _within_axes(operating, cargo, constants)
        and constants.min_cargo_weight_klbs <= y_value <= constants.max_cargo_weight_klbs
    )
    return CargoChartResult(
        y_value=y_value,
        is_within_bounds=within,
        operating_weight_klbs=operating,
        cargo_weight_klbs=cargo,
    )


def get_cargo_chart_y_in_pounds(
    operating_weight_lbs: float,
    cargo_weight_lbs: float,
    constants: CargoChartConstants = DEFAULT_CALIBRATION.cargo_chart,
) -> float:
    """Chart reading converted back to pounds."""
    result = calculate_cargo_chart_y(operating_weight_lbs, cargo_weight_lbs, constants)
    return klbs_to_lbs(result.y_value)
