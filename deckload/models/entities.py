"""
Stored entity models: aircraft, missions, cargo and structural limits.

All coordinates are inches, all weights are pounds. Longitudinal x grows
aft; lateral y is measured from the aircraft centreline (negative = left).
The engine only reads these records; it never mutates them.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class WheelType(str, Enum):
    """How a cargo item bears on the floor."""
    BULK = "bulk"
    TWO_WHEELED = "2_wheeled"
    FOUR_WHEELED = "4_wheeled"

    @property
    def is_wheeled(self) -> bool:
        return self is not WheelType.BULK


class CargoStatus(str, Enum):
    """Lifecycle of a cargo item within a mission."""
    INVENTORY = "inventory"
    ON_STAGE = "onStage"
    ON_DECK = "onDeck"


class Aircraft(BaseModel):
    """
    Reference data for one airframe.

    Treadways are the two reinforced floor strips for wheeled vehicles,
    centred at +/- treadways_dist_from_center.
    """
    id: Optional[int] = Field(default=None, description="Repository id")
    name: str = Field(..., description="Tail number or type designation")
    empty_weight: float = Field(..., gt=0, description="Basic empty weight (lbs)")
    empty_mac: float = Field(..., description="Basic empty index")
    cargo_bay_width: float = Field(default=123.0, gt=0, description="Cargo floor width (in)")
    treadways_width: float = Field(..., gt=0, description="Width of each treadway (in)")
    treadways_dist_from_center: float = Field(
        ..., ge=0, description="Centreline to treadway centre distance (in)"
    )
    ramp_length: float = Field(default=0.0, ge=0, description="Ramp length (in)")
    ramp_max_incline: float = Field(default=0.0, description="Maximum ramp incline (deg)")
    ramp_min_incline: float = Field(default=0.0, description="Minimum ramp incline (deg)")


class Mission(BaseModel):
    """A loading plan for one aircraft with its fixed weights."""
    id: Optional[int] = None
    name: str = Field(..., description="Mission name")
    aircraft_id: int = Field(..., description="Aircraft flown on this mission")
    loadmasters: int = Field(default=0, ge=0, description="Number of loadmasters aboard")
    loadmasters_fs: float = Field(default=500.0, description="Loadmaster station (in)")
    configuration_weights: float = Field(default=0.0, ge=0, description="Configuration items (lbs)")
    crew_gear_weight: float = Field(default=0.0, ge=0, description="Crew gear (lbs)")
    food_weight: float = Field(default=0.0, ge=0, description="Food and water (lbs)")
    safety_gear_weight: float = Field(default=0.0, ge=0, description="Safety gear (lbs)")
    etc_weight: float = Field(default=0.0, ge=0, description="Anything else (lbs)")


class CargoType(BaseModel):
    """A preset that cargo items are created from."""
    id: Optional[int] = None
    name: str
    type: WheelType = Field(default=WheelType.BULK, description="Wheel configuration")
    default_weight: float = Field(default=0.0, ge=0)
    default_length: float = Field(default=1.0, gt=0)
    default_width: float = Field(default=1.0, gt=0)
    default_height: float = Field(default=0.0, ge=0)
    default_forward_overhang: float = Field(default=0.0, ge=0)
    default_back_overhang: float = Field(default=0.0, ge=0)
    default_cog: float = Field(default=0.0, ge=0)


class CargoItem(BaseModel):
    """
    One piece of cargo belonging to a mission.

    Position is only meaningful while the item is on deck; otherwise it is
    conventionally (-1, -1). The wheel configuration comes from the cargo type.
    """
    id: Optional[int] = None
    mission_id: int
    cargo_type_id: int
    name: str = ""
    weight: float = Field(..., ge=0, description="Weight (lbs)")
    length: float = Field(..., gt=0, description="Longitudinal length (in)")
    width: float = Field(..., gt=0, description="Lateral width (in)")
    height: float = Field(default=0.0, ge=0, description="Height (in)")
    forward_overhang: float = Field(default=0.0, ge=0, description="Front edge to front axle (in)")
    back_overhang: float = Field(default=0.0, ge=0, description="Rear axle to back edge (in)")
    cog: float = Field(default=0.0, ge=0, description="Centre of gravity measured from the front edge (in)")
    x_start_position: float = Field(default=-1.0, description="Front edge x (in)")
    y_start_position: float = Field(default=-1.0, description="Left edge y (in)")
    status: CargoStatus = CargoStatus.INVENTORY

    @model_validator(mode="after")
    def validate_overhangs(self) -> "CargoItem":
        """Overhangs cannot exceed the item's length."""
        if self.forward_overhang + self.back_overhang > self.length:
            raise ValueError(
                f"forward_overhang ({self.forward_overhang}) + back_overhang "
                f"({self.back_overhang}) must not exceed length ({self.length})"
            )
        return self

    @property
    def x_end_position(self) -> float:
        return self.x_start_position + self.length

    @property
    def center_x(self) -> float:
        return self.x_start_position + self.length / 2

    @property
    def is_on_deck(self) -> bool:
        return self.status == CargoStatus.ON_DECK


class Compartment(BaseModel):
    """A structural floor zone spanning [x_start, x_end)."""
    id: Optional[int] = None
    aircraft_id: int
    name: str = ""
    x_start: float
    x_end: float
    floor_area: float = Field(default=0.0, ge=0, description="Floor area (sq.in)")
    usable_volume: float = Field(default=0.0, ge=0, description="Usable volume (cu.in)")

    @model_validator(mode="after")
    def validate_span(self) -> "Compartment":
        if self.x_end <= self.x_start:
            raise ValueError(f"x_end ({self.x_end}) must be greater than x_start ({self.x_start})")
        return self


class LoadConstraint(BaseModel):
    """
    Structural limits for one compartment.

    A None maximum means that axis is not validated for the compartment.
    """
    id: Optional[int] = None
    compartment_id: int
    max_cumulative_weight: Optional[float] = Field(default=None, ge=0, description="lbs")
    max_concentrated_load: Optional[float] = Field(default=None, ge=0, description="lbs/sq.in")
    max_running_load_treadway: Optional[float] = Field(default=None, ge=0, description="lbs/in")
    max_running_load_between_treadways: Optional[float] = Field(default=None, ge=0, description="lbs/in")


TANK_FIELDS = (
    "main_tank_1_fuel",
    "main_tank_2_fuel",
    "main_tank_3_fuel",
    "main_tank_4_fuel",
    "external_1_fuel",
    "external_2_fuel",
)


class FuelTanks(BaseModel):
    """Fuel quantity per tank (lbs)."""
    main_tank_1_fuel: float = Field(default=0.0, ge=0)
    main_tank_2_fuel: float = Field(default=0.0, ge=0)
    main_tank_3_fuel: float = Field(default=0.0, ge=0)
    main_tank_4_fuel: float = Field(default=0.0, ge=0)
    external_1_fuel: float = Field(default=0.0, ge=0)
    external_2_fuel: float = Field(default=0.0, ge=0)

    def tank_quantities(self) -> tuple[float, ...]:
        return tuple(getattr(self, name) for name in TANK_FIELDS)


class FuelState(FuelTanks):
    """Fuel loaded for a mission."""
    id: Optional[int] = None
    mission_id: int
    total_fuel: float = Field(default=0.0, ge=0, description="Total fuel (lbs)")
    mac_contribution: Optional[float] = Field(
        default=None, description="Explicit fuel index; looked up from the reference table when None"
    )


class FuelMacQuant(FuelTanks):
    """One row of the fuel index reference table."""
    id: Optional[int] = None
    mac_contribution: float


class AllowedMacConstraint(BaseModel):
    """Allowed MAC% band at one gross weight."""
    id: Optional[int] = None
    gross_aircraft_weight: float = Field(..., gt=0, description="lbs")
    min_mac: float
    max_mac: float

    @model_validator(mode="after")
    def validate_band(self) -> "AllowedMacConstraint":
        if self.min_mac > self.max_mac:
            raise ValueError(f"min_mac ({self.min_mac}) must not exceed max_mac ({self.max_mac})")
        return self
