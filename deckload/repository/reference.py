"""
Reference scenario for the C-130H style airframe.

Mission 1 reproduces the weight-and-balance worksheet case: one 20,000 lb
item on deck at x=527.5 with the default fuel load, giving 139,195 lbs
and 25.87 % MAC. Mission 2 mixes wheeled and bulk cargo to exercise the
floor-load checks.
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
    WheelType,
)
from deckload.repository.loader import Scenario
from deckload.repository.memory import InMemoryRepository

REFERENCE_AIRCRAFT_ID = 1
WORKSHEET_MISSION_ID = 1
VEHICLE_MISSION_ID = 2

# (name, x_start, x_end, max cumulative, max concentrated, treadway, between treadways)
_COMPARTMENTS = [
    ("C", 245.0, 345.0, 10000.0, 120.0, 1200.0, 600.0),
    ("D", 345.0, 445.0, 20000.0, 120.0, 1200.0, 600.0),
    ("E", 445.0, 545.0, 30000.0, 120.0, 1200.0, 600.0),
    ("F", 545.0, 645.0, 30000.0, 120.0, 1200.0, 600.0),
    ("G", 645.0, 737.0, 20000.0, 120.0, 1200.0, 600.0),
    ("Ramp", 737.0, 860.0, 5000.0, 60.0, None, None),
]

# (main 1, main 2, main 3, main 4, external 1, external 2, fuel index)
_FUEL_MAC_TABLE = [
    (4000.0, 4000.0, 4000.0, 4000.0, 0.0, 0.0, 1.10),
    (6000.0, 7000.0, 7000.0, 6000.0, 0.0, 0.0, 1.95),
    (8000.0, 9228.5, 9228.5, 8000.0, 0.0, 0.0, 2.70),
    (8000.0, 9228.5, 9228.5, 8000.0, 8500.0, 8500.0, 4.15),
]

_ALLOWED_MAC = [
    (110000.0, 15.0, 30.0),
    (130000.0, 16.0, 30.0),
    (150000.0, 17.0, 31.0),
    (175000.0, 18.0, 32.0),
]


def build_reference_scenario() -> Scenario:
    """Build the reference aircraft with both demonstration missions."""
    aircraft = Aircraft(
        id=REFERENCE_AIRCRAFT_ID,
        name="C-130H",
        empty_weight=83288.0,
        empty_mac=89.0,
        cargo_bay_width=123.0,
        treadways_width=36.0,
        treadways_dist_from_center=30.0,
        ramp_length=123.0,
        ramp_max_incline=13.0,
        ramp_min_incline=0.0,
    )

    compartments = []
    constraints = []
    for idx, (name, x_start, x_end, cumulative, concentrated, treadway, between) in enumerate(
        _COMPARTMENTS, 1
    ):
        compartments.append(
            Compartment(
                id=idx,
                aircraft_id=aircraft.id,
                name=name,
                x_start=x_start,
                x_end=x_end,
                floor_area=(x_end - x_start) * aircraft.cargo_bay_width,
            )
        )
        constraints.append(
            LoadConstraint(
                id=idx,
                compartment_id=idx,
                max_cumulative_weight=cumulative,
                max_concentrated_load=concentrated,
                max_running_load_treadway=treadway,
                max_running_load_between_treadways=between,
            )
        )

    cargo_types = [
        CargoType(id=1, name="463L pallet", type=WheelType.BULK,
                  default_weight=2000.0, default_length=88.0, default_width=108.0, default_height=96.0,
                  default_cog=44.0),
        CargoType(id=2, name="HMMWV", type=WheelType.FOUR_WHEELED,
                  default_weight=10000.0, default_length=180.0, default_width=86.0, default_height=72.0,
                  default_forward_overhang=30.0, default_back_overhang=40.0, default_cog=85.0),
        CargoType(id=3, name="Utility trailer", type=WheelType.TWO_WHEELED,
                  default_weight=4000.0, default_length=150.0, default_width=80.0, default_height=60.0,
                  default_forward_overhang=20.0, default_back_overhang=30.0, default_cog=70.0),
        CargoType(id=4, name="Engine stand", type=WheelType.BULK,
                  default_weight=20000.0, default_length=5.0, default_width=100.0, default_height=40.0,
                  default_cog=2.5),
    ]

    missions = [
        Mission(
            id=WORKSHEET_MISSION_ID,
            name="Worksheet check",
            aircraft_id=aircraft.id,
            loadmasters=2,
            loadmasters_fs=500.0,
            configuration_weights=500.0,
            crew_gear_weight=300.0,
            food_weight=200.0,
            safety_gear_weight=150.0,
            etc_weight=100.0,
        ),
        Mission(
            id=VEHICLE_MISSION_ID,
            name="Vehicle lift",
            aircraft_id=aircraft.id,
            loadmasters=2,
            configuration_weights=500.0,
            crew_gear_weight=300.0,
            food_weight=200.0,
            safety_gear_weight=150.0,
            etc_weight=100.0,
        ),
    ]

    cargo_items = [
        CargoItem(id=1, mission_id=WORKSHEET_MISSION_ID, cargo_type_id=4, name="Engine stand",
                  weight=20000.0, length=5.0, width=100.0, height=40.0, cog=2.5,
                  x_start_position=527.5, y_start_position=-50.0, status=CargoStatus.ON_DECK),
        CargoItem(id=2, mission_id=VEHICLE_MISSION_ID, cargo_type_id=2, name="HMMWV",
                  weight=10000.0, length=180.0, width=86.0, height=72.0,
                  forward_overhang=30.0, back_overhang=40.0, cog=85.0,
                  x_start_position=300.0, y_start_position=-43.0, status=CargoStatus.ON_DECK),
        CargoItem(id=3, mission_id=VEHICLE_MISSION_ID, cargo_type_id=3, name="Utility trailer",
                  weight=4000.0, length=150.0, width=80.0, height=60.0,
                  forward_overhang=20.0, back_overhang=30.0, cog=70.0,
                  x_start_position=470.0, y_start_position=-40.0, status=CargoStatus.ON_DECK),
        CargoItem(id=4, mission_id=VEHICLE_MISSION_ID, cargo_type_id=1, name="463L pallet",
                  weight=6000.0, length=88.0, width=108.0, height=96.0, cog=44.0,
                  x_start_position=620.0, y_start_position=-54.0, status=CargoStatus.ON_DECK),
        CargoItem(id=5, mission_id=VEHICLE_MISSION_ID, cargo_type_id=1, name="Spare pallet",
                  weight=1500.0, length=88.0, width=108.0, height=50.0, cog=44.0,
                  status=CargoStatus.INVENTORY),
    ]

    fuel_states = [
        FuelState(
            id=1,
            mission_id=WORKSHEET_MISSION_ID,
            total_fuel=34457.0,
            main_tank_1_fuel=8000.0,
            main_tank_2_fuel=9228.5,
            main_tank_3_fuel=9228.5,
            main_tank_4_fuel=8000.0,
        ),
        FuelState(
            id=2,
            mission_id=VEHICLE_MISSION_ID,
            total_fuel=30000.0,
            main_tank_1_fuel=7000.0,
            main_tank_2_fuel=8000.0,
            main_tank_3_fuel=8000.0,
            main_tank_4_fuel=7000.0,
            mac_contribution=2.10,
        ),
    ]

    fuel_mac_quants = [
        FuelMacQuant(
            id=idx,
            main_tank_1_fuel=m1,
            main_tank_2_fuel=m2,
            main_tank_3_fuel=m3,
            main_tank_4_fuel=m4,
            external_1_fuel=e1,
            external_2_fuel=e2,
            mac_contribution=index,
        )
        for idx, (m1, m2, m3, m4, e1, e2, index) in enumerate(_FUEL_MAC_TABLE, 1)
    ]

    allowed_mac = [
        AllowedMacConstraint(id=idx, gross_aircraft_weight=weight, min_mac=low, max_mac=high)
        for idx, (weight, low, high) in enumerate(_ALLOWED_MAC, 1)
    ]

    return Scenario(
        aircraft=[aircraft],
        missions=missions,
        cargo_types=cargo_types,
        cargo_items=cargo_items,
        compartments=compartments,
        load_constraints=constraints,
        fuel_states=fuel_states,
        fuel_mac_quants=fuel_mac_quants,
        allowed_mac_constraints=allowed_mac,
    )


def build_reference_repository() -> InMemoryRepository:
    """Reference scenario loaded into a fresh repository."""
    return build_reference_scenario().to_repository()
