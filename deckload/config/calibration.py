"""
Calibration constants for the weight-and-balance and floor-load engine.

Every number here comes from the reference aircraft's weight-and-balance
worksheet. They are data rather than literals so another aircraft type
can be recalibrated from a JSON file; the defaults must stay exactly as
they are for the regression worksheet values to reproduce.

ASSUMPTIONS:
- Stations are fuselage stations in inches
- Index = (station - reference_station) * weight / index_divisor
- Wheel contact patches are rectangles of wheel_width x contact_length
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field

from deckload.models.entities import WheelType


class WeightBalanceConstants(BaseModel):
    """MAC geometry, index scaling and fixed-weight stations."""
    mac_datum: float = Field(default=487.4, description="Leading edge of the MAC (in)")
    mac_length: float = Field(default=164.5, gt=0, description="Length of the MAC (in)")
    reference_station: float = Field(default=533.46, description="Moment-arm reference station R (in)")
    index_divisor: float = Field(default=50000.0, gt=0, description="Index scale divisor")
    index_offset: float = Field(default=100.0, description="Index offset removed before deriving CG")
    loadmaster_weight: float = Field(default=100.0, ge=0, description="Weight per loadmaster (lbs)")
    configuration_station: float = Field(default=500.0, description="Station of configuration weights (in)")
    crew_gear_station: float = Field(default=520.0, description="Station of crew gear (in)")
    food_station: float = Field(default=480.0, description="Station of food (in)")
    safety_gear_station: float = Field(default=733.46, description="Station of safety gear (in)")
    etc_station: float = Field(default=580.54, description="Station of miscellaneous weights (in)")


class WheelDimensions(BaseModel):
    """Contact patch geometry for one wheeled cargo configuration."""
    wheel_width: float = Field(default=10.0, gt=0, description="Lateral width of one wheel (in)")
    contact_length: float = Field(..., gt=0, description="Longitudinal contact length of one wheel (in)")
    wheel_count: int = Field(..., gt=0, description="Number of wheels carrying the item")


class FloorLoadConstants(BaseModel):
    """Wheel geometry and treadway rules used by the floor-load chain."""
    two_wheeled: WheelDimensions = Field(
        default_factory=lambda: WheelDimensions(contact_length=3.0, wheel_count=2)
    )
    four_wheeled: WheelDimensions = Field(
        default_factory=lambda: WheelDimensions(contact_length=2.5, wheel_count=4)
    )
    treadway_overlap_threshold: float = Field(
        default=0.5,
        gt=0,
        le=1.0,
        description="Fraction of a wheel's width that must overlap a treadway",
    )

    def wheels_for(self, wheel_type: WheelType) -> WheelDimensions:
        """Wheel dimensions for a wheeled type."""
        if wheel_type == WheelType.TWO_WHEELED:
            return self.two_wheeled
        if wheel_type == WheelType.FOUR_WHEELED:
            return self.four_wheeled
        raise ValueError(f"Wheel type {wheel_type.value} has no wheels")


class CargoChartConstants(BaseModel):
    """Bounds of the cargo reference chart, in thousands of pounds."""
    min_operating_weight_klbs: float = 68.0
    max_operating_weight_klbs: float = 90.0
    min_cargo_weight_klbs: float = 0.0
    max_cargo_weight_klbs: float = 65.0
    reference_operating_weight_klbs: float = 90.0
    line_slope: float = 1.0


class Calibration(BaseModel):
    """Complete calibration set for one aircraft type."""
    weight_balance: WeightBalanceConstants = Field(default_factory=WeightBalanceConstants)
    floor_load: FloorLoadConstants = Field(default_factory=FloorLoadConstants)
    cargo_chart: CargoChartConstants = Field(default_factory=CargoChartConstants)


DEFAULT_CALIBRATION = Calibration()


def load_calibration(path: Union[str, Path]) -> Calibration:
    """
    Load a calibration set from a JSON file.

    Missing sections and fields keep their default values.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If a value is out of range
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Calibration file not found at {file_path}")

    with open(file_path, "r") as f:
        data = json.load(f)

    return Calibration(**data)
