"""
Calibration data and process settings.
"""

from deckload.config.calibration import (
    Calibration,
    CargoChartConstants,
    DEFAULT_CALIBRATION,
    FloorLoadConstants,
    WeightBalanceConstants,
    WheelDimensions,
    load_calibration,
)
from deckload.config.settings import Settings, init_logging

__all__ = [
    "Calibration",
    "CargoChartConstants",
    "DEFAULT_CALIBRATION",
    "FloorLoadConstants",
    "WeightBalanceConstants",
    "WheelDimensions",
    "load_calibration",
    "Settings",
    "init_logging",
]
