"""
Transient result models returned by the engine.

None of these are persisted; every call derives them fresh from the
stored entities.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from deckload.models.entities import WheelType


class TouchpointPosition(str, Enum):
    """Named contact points of a cargo item."""
    FRONT_LEFT = "frontLeft"
    FRONT_RIGHT = "frontRight"
    BACK_LEFT = "backLeft"
    BACK_RIGHT = "backRight"
    FRONT = "front"
    BACK = "back"


class Point(BaseModel):
    """A floor coordinate (in)."""
    x: float
    y: float


class WheelSpan(BaseModel):
    """Lateral extent of one wheel's ground contact."""
    y_start: float
    y_end: float

    @property
    def width(self) -> float:
        return self.y_end - self.y_start


class TouchpointCompartments(BaseModel):
    """Which compartments a cargo item bears on."""
    touchpoint_to_compartment: dict[TouchpointPosition, int] = Field(
        default_factory=dict,
        description="Compartment id per wheel touchpoint (empty for bulk items)",
    )
    overlapping_compartments: list[int] = Field(
        default_factory=list,
        description="Compartments whose x-span intersects the item's load-bearing span",
    )


class TreadwayPlacement(BaseModel):
    """Where a cargo item sits relative to the two treadways."""
    on_right: bool
    on_left: bool
    in_between: bool

    @property
    def on_treadway(self) -> bool:
        return self.on_right or self.on_left


class LoadResult(BaseModel):
    """A computed load with its unit label."""
    value: float
    unit: str


class CompartmentLoad(BaseModel):
    """Share of one cargo item's weight resting on a compartment."""
    compartment_id: int
    load: LoadResult


class ValidationStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class LoadConstraintType(str, Enum):
    CUMULATIVE = "cumulative"
    CONCENTRATED = "concentrated"
    RUNNING = "running"


class RunningLoadCategory(str, Enum):
    """Which running-load limit applies."""
    TREADWAY = "treadway"
    BETWEEN_TREADWAYS = "between_treadways"


class LoadValidationResult(BaseModel):
    """Outcome of checking one load against one compartment limit."""
    status: ValidationStatus
    compartment_id: int
    compartment_name: str = ""
    current_load: float
    max_allowed_load: Optional[float] = None
    overage_amount: float = 0.0
    message: str = ""

    @property
    def passed(self) -> bool:
        return self.status == ValidationStatus.PASS


class CumulativeLoadValidationResult(LoadValidationResult):
    constraint_type: Literal["cumulative"] = "cumulative"


class ConcentratedLoadValidationResult(LoadValidationResult):
    constraint_type: Literal["concentrated"] = "concentrated"
    cargo_item_id: int


class RunningLoadValidationResult(LoadValidationResult):
    constraint_type: Literal["running"] = "running"
    cargo_item_id: int
    load_category: RunningLoadCategory


AnyLoadValidationResult = Union[
    CumulativeLoadValidationResult,
    ConcentratedLoadValidationResult,
    RunningLoadValidationResult,
]


class MissionValidationResults(BaseModel):
    """All floor-load checks for a mission with the overall verdict."""
    mission_id: int
    overall_status: ValidationStatus
    results: list[AnyLoadValidationResult] = Field(default_factory=list)

    @property
    def failures(self) -> list[AnyLoadValidationResult]:
        return [r for r in self.results if r.status == ValidationStatus.FAIL]


class WeightAndBalance(BaseModel):
    """Index breakdown, weight and centre of gravity for a mission."""
    mission_id: int
    cargo_index: float = Field(..., description="Sum of on-deck cargo indices")
    additional_weights_index: float = Field(..., description="Crew and fixed mission weights")
    fuel_index: float
    empty_aircraft_index: float
    total_index: float
    total_weight: float = Field(..., description="Gross aircraft weight (lbs)")
    cg: float = Field(..., description="Centre of gravity station (in)")
    mac_percent: float


class MacValidationResult(BaseModel):
    """MAC% checked against the allowed band for the nearest weight row."""
    is_valid: bool
    current_mac: float
    min_allowed_mac: Optional[float] = None
    max_allowed_mac: Optional[float] = None
    weight_used_for_constraint: Optional[float] = None
    actual_weight: float
    message: str


class CargoChartResult(BaseModel):
    """Position on the cargo reference chart (thousands of pounds)."""
    y_value: float
    is_within_bounds: bool
    operating_weight_klbs: float
    cargo_weight_klbs: float


class CargoItemLoads(BaseModel):
    """Floor loads of one cargo item."""
    cargo_item_id: int
    wheel_type: WheelType
    concentrated_load: LoadResult
    running_load: LoadResult
    compartment_loads: list[CompartmentLoad] = Field(default_factory=list)
    touchpoints: dict[TouchpointPosition, Point] = Field(default_factory=dict)


class MissionReport(BaseModel):
    """Everything a loadmaster checks before sign-off for one mission."""
    mission_id: int
    mission_name: str
    aircraft_name: str
    weight_and_balance: WeightAndBalance
    mac_validation: MacValidationResult
    floor_validation: MissionValidationResults
    warnings: list[str] = Field(default_factory=list)

    @property
    def all_checks_passed(self) -> bool:
        return (
            self.mac_validation.is_valid
            and self.floor_validation.overall_status == ValidationStatus.PASS
        )
