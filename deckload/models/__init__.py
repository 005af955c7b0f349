"""
Pydantic models for stored entities and computed results.
"""

from deckload.models.entities import (
    Aircraft,
    AllowedMacConstraint,
    CargoItem,
    CargoStatus,
    CargoType,
    Compartment,
    FuelMacQuant,
    FuelState,
    LoadConstraint,
    Mission,
    TANK_FIELDS,
    WheelType,
)
from deckload.models.results import (
    AnyLoadValidationResult,
    CargoChartResult,
    CargoItemLoads,
    CompartmentLoad,
    ConcentratedLoadValidationResult,
    CumulativeLoadValidationResult,
    LoadConstraintType,
    LoadResult,
    MacValidationResult,
    MissionReport,
    MissionValidationResults,
    Point,
    RunningLoadCategory,
    RunningLoadValidationResult,
    TouchpointCompartments,
    TouchpointPosition,
    TreadwayPlacement,
    ValidationStatus,
    WeightAndBalance,
    WheelSpan,
)

__all__ = [
    "Aircraft",
    "AllowedMacConstraint",
    "CargoItem",
    "CargoStatus",
    "CargoType",
    "Compartment",
    "FuelMacQuant",
    "FuelState",
    "LoadConstraint",
    "Mission",
    "TANK_FIELDS",
    "WheelType",
    "AnyLoadValidationResult",
    "CargoChartResult",
    "CargoItemLoads",
    "CompartmentLoad",
    "ConcentratedLoadValidationResult",
    "CumulativeLoadValidationResult",
    "LoadConstraintType",
    "LoadResult",
    "MacValidationResult",
    "MissionReport",
    "MissionValidationResults",
    "Point",
    "RunningLoadCategory",
    "RunningLoadValidationResult",
    "TouchpointCompartments",
    "TouchpointPosition",
    "TreadwayPlacement",
    "ValidationStatus",
    "WeightAndBalance",
    "WheelSpan",
]
