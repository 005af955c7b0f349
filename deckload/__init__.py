"""
Deck Load Planner (deckload)

Weight-and-balance and cargo floor-load engine for cargo aircraft missions.
Computes the gross weight, centre of gravity and MAC% of a loaded aircraft
and checks cumulative, concentrated and running floor loads against the
limits of each cargo compartment.

Usage:
    python -m deckload make-example
    python -m deckload report --input scenario.json --mission 1
    python -m deckload validate --mission 2 --include-running
    python -m deckload serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "Deck Load Planner Project"

from deckload.config.calibration import Calibration, DEFAULT_CALIBRATION, load_calibration
from deckload.errors import ConstraintMissingError, DeckLoadError, InvalidInputError, NotFoundError
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
    WheelType,
)
from deckload.models.results import MissionReport, MissionValidationResults, WeightAndBalance
from deckload.planner import LoadPlanner
from deckload.repository.loader import Scenario, load_scenario, save_scenario
from deckload.repository.memory import InMemoryRepository

__all__ = [
    "Calibration",
    "DEFAULT_CALIBRATION",
    "load_calibration",
    "ConstraintMissingError",
    "DeckLoadError",
    "InvalidInputError",
    "NotFoundError",
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
    "WheelType",
    "MissionReport",
    "MissionValidationResults",
    "WeightAndBalance",
    "LoadPlanner",
    "Scenario",
    "load_scenario",
    "save_scenario",
    "InMemoryRepository",
]
