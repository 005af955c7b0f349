"""
FastAPI server for the weight-and-balance and floor-load engine.

Serves the scenario named by DECKLOAD_SCENARIO, or the built-in
reference scenario when none is configured.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from deckload import __version__
from deckload.chart.cargo_chart import calculate_cargo_chart_y
from deckload.config.calibration import load_calibration
from deckload.config.settings import Settings
from deckload.errors import NotFoundError
from deckload.mac.validation import validate_mac
from deckload.models.entities import WheelType
from deckload.models.results import (
    CargoChartResult,
    CargoItemLoads,
    MacValidationResult,
    MissionReport,
    MissionValidationResults,
    TouchpointCompartments,
    WeightAndBalance,
)
from deckload.planner import LoadPlanner
from deckload.repository.loader import Scenario, load_scenario
from deckload.repository.reference import build_reference_repository, build_reference_scenario

_LOG = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Deck Load Planner API",
    description="""
    Weight-and-balance (MAC%) and cargo floor-load checks for cargo aircraft missions.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_planner: Optional[LoadPlanner] = None


def build_planner(settings: Settings) -> LoadPlanner:
    """Planner over the configured scenario and calibration."""
    if settings.scenario_path is not None:
        _LOG.info("Serving scenario %s", settings.scenario_path)
        repo = load_scenario(settings.scenario_path)
    else:
        repo = build_reference_repository()
    calibration = load_calibration(settings.calibration_path) if settings.calibration_path else None
    return LoadPlanner(repo, calibration)


def get_planner() -> LoadPlanner:
    """Shared planner, built on first use."""
    global _planner
    if _planner is None:
        _planner = build_planner(Settings.from_env())
    return _planner


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class ErrorResponse(BaseModel):
    """Error response model."""
    detail: str


class MacCheckRequest(BaseModel):
    """Request body for an ad-hoc MAC check."""
    gross_weight: float = Field(..., gt=0, description="Gross aircraft weight (lbs)")
    mac_percent: float = Field(..., description="MAC% to check")


def _to_http(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/example", response_model=Scenario, tags=["Reference"])
async def get_example():
    """Get the reference scenario."""
    return build_reference_scenario()


@app.get("/wheel-types", tags=["Reference"])
async def list_wheel_types():
    """Get list of supported cargo wheel configurations."""
    return {
        "wheel_types": [wt.value for wt in WheelType],
        "descriptions": {
            "bulk": "Pallets and crates resting on their whole footprint",
            "2_wheeled": "Trailers and carts on a single axle line",
            "4_wheeled": "Vehicles on two parallel wheel tracks",
        },
    }


@app.get(
    "/missions/{mission_id}/weight-balance",
    response_model=WeightAndBalance,
    responses={404: {"model": ErrorResponse}},
    tags=["Weight and Balance"],
)
async def mission_weight_balance(mission_id: int, planner: LoadPlanner = Depends(get_planner)):
    """Index breakdown, gross weight, CG and MAC% for a mission."""
    try:
        return await planner.weight_and_balance(mission_id)
    except (NotFoundError, ValueError) as e:
        raise _to_http(e)


@app.get(
    "/missions/{mission_id}/mac-validation",
    response_model=MacValidationResult,
    responses={404: {"model": ErrorResponse}},
    tags=["Weight and Balance"],
)
async def mission_mac_validation(mission_id: int, planner: LoadPlanner = Depends(get_planner)):
    """Check a mission's MAC% against the allowed band for its gross weight."""
    try:
        return await planner.validate_mac(mission_id)
    except (NotFoundError, ValueError) as e:
        raise _to_http(e)


@app.post("/mac/validate", response_model=MacValidationResult, tags=["Weight and Balance"])
async def mac_validate(request: MacCheckRequest, planner: LoadPlanner = Depends(get_planner)):
    """Check any gross weight and MAC% pair against the allowed-MAC table."""
    return await validate_mac(planner.repo, request.gross_weight, request.mac_percent)


@app.get(
    "/missions/{mission_id}/floor-validation",
    response_model=MissionValidationResults,
    responses={404: {"model": ErrorResponse}},
    tags=["Floor Loads"],
)
async def mission_floor_validation(
    mission_id: int,
    include_running: bool = Query(default=False, description="Also check running loads"),
    planner: LoadPlanner = Depends(get_planner),
):
    """Cumulative and concentrated (optionally running) load checks for a mission."""
    try:
        return await planner.validate_floor(mission_id, include_running=include_running)
    except (NotFoundError, ValueError) as e:
        raise _to_http(e)


@app.get(
    "/missions/{mission_id}/report",
    response_model=MissionReport,
    responses={404: {"model": ErrorResponse}},
    tags=["Reports"],
)
async def mission_report(
    mission_id: int,
    include_running: bool = Query(default=False, description="Also check running loads"),
    planner: LoadPlanner = Depends(get_planner),
):
    """Complete mission report."""
    try:
        return await planner.build_report(mission_id, include_running=include_running)
    except (NotFoundError, ValueError) as e:
        raise _to_http(e)


@app.get(
    "/cargo-items/{cargo_item_id}/loads",
    response_model=CargoItemLoads,
    responses={404: {"model": ErrorResponse}},
    tags=["Floor Loads"],
)
async def cargo_item_loads(cargo_item_id: int, planner: LoadPlanner = Depends(get_planner)):
    """Concentrated, running and per-compartment loads of a cargo item."""
    try:
        return await planner.item_loads(cargo_item_id)
    except (NotFoundError, ValueError) as e:
        raise _to_http(e)


@app.get(
    "/cargo-items/{cargo_item_id}/touchpoints",
    response_model=TouchpointCompartments,
    responses={404: {"model": ErrorResponse}},
    tags=["Floor Loads"],
)
async def cargo_item_touchpoints(cargo_item_id: int, planner: LoadPlanner = Depends(get_planner)):
    """Compartments under a cargo item's touchpoints."""
    try:
        return await planner.touchpoint_compartments(cargo_item_id)
    except (NotFoundError, ValueError) as e:
        raise _to_http(e)


@app.get("/chart", response_model=CargoChartResult, tags=["Reference"])
async def cargo_chart(
    operating_weight_lbs: float = Query(..., ge=0, description="Operating weight (lbs)"),
    cargo_weight_lbs: float = Query(..., ge=0, description="Cargo weight (lbs)"),
    planner: LoadPlanner = Depends(get_planner),
):
    """Cargo reference chart reading."""
    return calculate_cargo_chart_y(
        operating_weight_lbs, cargo_weight_lbs, planner.calibration.cargo_chart
    )
