"""
Cargo reference chart service.
"""

from deckload.chart.cargo_chart import (
    calculate_cargo_chart_y,
    get_cargo_chart_y_in_pounds,
    is_within_chart_range,
)

__all__ = [
    "calculate_cargo_chart_y",
    "get_cargo_chart_y_in_pounds",
    "is_within_chart_range",
]
