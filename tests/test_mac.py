"""
Tests for weight-and-balance: indices, gross weight, CG, MAC% and the
allowed-MAC check.

The worksheet mission reproduces the reference weight-and-balance
worksheet: 139,195 lbs at 25.87 % MAC.
"""

import pytest

from deckload.config.calibration import Calibration, WeightBalanceConstants
from deckload.errors import NotFoundError
from deckload.mac.calculation import (
    additional_weights,
    calculate_additional_weights_mac_index,
    calculate_aircraft_cg,
    calculate_fuel_mac,
    calculate_mac_index,
    calculate_mac_percent,
    calculate_total_aircraft_weight,
    calculate_weight_and_balance,
    find_closest_fuel_mac_quant,
    get_empty_aircraft_mac_index,
    mac_percent_from_cg,
    moment_index,
)
from deckload.mac.validation import (
    NO_CONSTRAINTS_MESSAGE,
    check_mac,
    select_mac_constraint,
    validate_mac,
    validate_mission_mac,
)
from deckload.models.entities import AllowedMacConstraint, FuelMacQuant, FuelState
from deckload.repository.base import EntityKind
from deckload.repository.reference import REFERENCE_AIRCRAFT_ID, VEHICLE_MISSION_ID, WORKSHEET_MISSION_ID


@pytest.fixture
def fuel_table(reference_repo) -> list[FuelMacQuant]:
    return reference_repo.snapshot(EntityKind.FUEL_MAC_QUANT)


@pytest.fixture
def mac_table(reference_repo) -> list[AllowedMacConstraint]:
    return reference_repo.snapshot(EntityKind.ALLOWED_MAC_CONSTRAINT)


class TestIndices:
    """Tests for moment indices."""

    def test_reference_station_has_zero_index(self):
        assert moment_index(533.46, 10000.0, WeightBalanceConstants()) == 0.0

    async def test_cargo_index(self, reference_repo):
        """20,000 lbs centred at x=530 gives an index of -1.384."""
        assert await calculate_mac_index(reference_repo, 1) == pytest.approx(-1.384)

    async def test_cargo_index_missing_item(self, reference_repo):
        with pytest.raises(NotFoundError):
            await calculate_mac_index(reference_repo, 99)

    def test_additional_weight_categories(self, reference_repo):
        mission = reference_repo.snapshot(EntityKind.MISSION)[0]

        rows = additional_weights(mission, WeightBalanceConstants())

        assert [name for name, _, _ in rows] == [
            "crew", "configuration", "crew_gear", "food", "safety_gear", "etc",
        ]
        assert rows[0] == ("crew", 500.0, 200.0)

    async def test_additional_weights_index(self, reference_repo):
        index = await calculate_additional_weights_mac_index(reference_repo, WORKSHEET_MISSION_ID)
        assert index == pytest.approx(-0.06888)

    async def test_loadmaster_weight_is_calibrated(self, reference_repo):
        calibration = Calibration(weight_balance=WeightBalanceConstants(loadmaster_weight=0.0))
        index = await calculate_additional_weights_mac_index(reference_repo, WORKSHEET_MISSION_ID, calibration)
        assert index == pytest.approx(-0.06888 + 0.13384)

    async def test_empty_aircraft_index(self, reference_repo):
        assert await get_empty_aircraft_mac_index(reference_repo, REFERENCE_AIRCRAFT_ID) == 89.0


class TestFuelIndex:
    """Tests for the fuel reference table lookup."""

    def test_exact_row(self, fuel_table):
        state = FuelState(mission_id=1, main_tank_1_fuel=8000.0, main_tank_2_fuel=9228.5,
                          main_tank_3_fuel=9228.5, main_tank_4_fuel=8000.0)
        assert find_closest_fuel_mac_quant(fuel_table, state).mac_contribution == 2.70

    def test_tanks_round_up_to_table_values(self, fuel_table):
        state = FuelState(mission_id=1, main_tank_1_fuel=5000.0, main_tank_2_fuel=5000.0,
                          main_tank_3_fuel=5000.0, main_tank_4_fuel=5000.0)
        assert find_closest_fuel_mac_quant(fuel_table, state).mac_contribution == 1.95

    def test_nearest_row_when_no_exact_match(self, fuel_table):
        """Rounded tanks match no row; the smallest summed difference wins."""
        state = FuelState(mission_id=1, main_tank_1_fuel=5000.0, main_tank_2_fuel=8000.0,
                          main_tank_3_fuel=5000.0, main_tank_4_fuel=5000.0)
        assert find_closest_fuel_mac_quant(fuel_table, state).mac_contribution == 1.95

    def test_overfull_tanks_use_largest_row(self, fuel_table):
        state = FuelState(mission_id=1, main_tank_1_fuel=9000.0, main_tank_2_fuel=9999.0,
                          main_tank_3_fuel=9999.0, main_tank_4_fuel=9000.0,
                          external_1_fuel=9000.0, external_2_fuel=9000.0)
        assert find_closest_fuel_mac_quant(fuel_table, state).mac_contribution == 4.15

    def test_empty_table(self):
        assert find_closest_fuel_mac_quant([], FuelState(mission_id=1)) is None

    async def test_lookup_for_worksheet_mission(self, reference_repo):
        assert await calculate_fuel_mac(reference_repo, WORKSHEET_MISSION_ID) == 2.70

    async def test_explicit_contribution_wins(self, reference_repo):
        assert await calculate_fuel_mac(reference_repo, VEHICLE_MISSION_ID) == 2.10

    async def test_no_fuel_state(self, empty_mission_repo, empty_mission_id):
        assert await calculate_fuel_mac(empty_mission_repo, empty_mission_id) == 0.0

    async def test_empty_table_gives_zero(self, reference_repo, caplog):
        for quant in reference_repo.snapshot(EntityKind.FUEL_MAC_QUANT):
            reference_repo.remove(EntityKind.FUEL_MAC_QUANT, quant.id)

        assert await calculate_fuel_mac(reference_repo, WORKSHEET_MISSION_ID) == 0.0
        assert "No fuel reference table rows" in caplog.text


class TestWeightAndBalance:
    """Tests for gross weight, CG and MAC%."""

    async def test_worksheet_total_weight(self, reference_repo):
        assert await calculate_total_aircraft_weight(reference_repo, WORKSHEET_MISSION_ID) == pytest.approx(139195.0)

    async def test_inventory_cargo_counts_toward_weight(self, reference_repo):
        """The 1,500 lb spare pallet is not on deck but is still aboard the mission."""
        weight = await calculate_total_aircraft_weight(reference_repo, VEHICLE_MISSION_ID)
        assert weight == pytest.approx(83288.0 + 1450.0 + 21500.0 + 30000.0)

    async def test_worksheet_breakdown(self, reference_repo):
        balance = await calculate_weight_and_balance(reference_repo, WORKSHEET_MISSION_ID)

        assert balance.cargo_index == pytest.approx(-1.384)
        assert balance.additional_weights_index == pytest.approx(-0.06888)
        assert balance.fuel_index == pytest.approx(2.70)
        assert balance.empty_aircraft_index == 89.0
        assert balance.total_index == pytest.approx(90.24712)
        assert balance.cg == pytest.approx(529.9567, abs=1e-3)
        assert balance.mac_percent == pytest.approx(25.8703, abs=1e-3)

    async def test_mac_percent(self, reference_repo):
        assert await calculate_mac_percent(reference_repo, WORKSHEET_MISSION_ID) == pytest.approx(25.87, abs=0.01)

    async def test_cg_from_index(self, reference_repo):
        """An index of exactly 100 puts the CG on the reference station."""
        assert await calculate_aircraft_cg(reference_repo, WORKSHEET_MISSION_ID, 100.0) == pytest.approx(533.46)

    def test_mac_percent_from_cg(self):
        constants = WeightBalanceConstants()
        assert mac_percent_from_cg(487.4, constants) == 0.0
        assert mac_percent_from_cg(487.4 + 164.5, constants) == pytest.approx(100.0)

    async def test_moving_cargo_aft_moves_cg_aft(self, reference_repo):
        before = await calculate_mac_percent(reference_repo, WORKSHEET_MISSION_ID)
        stand = reference_repo.snapshot(EntityKind.CARGO_ITEM)[0]
        reference_repo.update(stand.model_copy(update={"x_start_position": 700.0}))

        after = await calculate_mac_percent(reference_repo, WORKSHEET_MISSION_ID)

        assert after > before

    async def test_missing_mission(self, reference_repo):
        with pytest.raises(NotFoundError, match="Mission with ID 5 not found"):
            await calculate_weight_and_balance(reference_repo, 5)


class TestMacValidation:
    """Tests for the allowed-MAC table check."""

    def test_selects_lightest_row_at_or_above(self, mac_table):
        assert select_mac_constraint(mac_table, 139195.0).gross_aircraft_weight == 150000.0
        assert select_mac_constraint(mac_table, 130000.0).gross_aircraft_weight == 130000.0

    def test_heavier_than_every_row(self, mac_table):
        assert select_mac_constraint(mac_table, 200000.0).gross_aircraft_weight == 175000.0

    def test_lighter_than_every_row(self, mac_table):
        assert select_mac_constraint(mac_table, 50000.0).gross_aircraft_weight == 110000.0

    def test_within_band(self, mac_table):
        result = check_mac(mac_table, 139195.0, 25.87)

        assert result.is_valid
        assert result.min_allowed_mac == 17.0
        assert result.max_allowed_mac == 31.0
        assert result.weight_used_for_constraint == 150000.0
        assert result.actual_weight == 139195.0

    def test_band_edges_are_inclusive(self, mac_table):
        assert check_mac(mac_table, 150000.0, 17.0).is_valid
        assert check_mac(mac_table, 150000.0, 31.0).is_valid
        assert not check_mac(mac_table, 150000.0, 31.01).is_valid

    def test_empty_table(self):
        result = check_mac([], 139195.0, 25.0)

        assert not result.is_valid
        assert result.message == NO_CONSTRAINTS_MESSAGE
        assert result.min_allowed_mac is None

    async def test_repository_form(self, reference_repo):
        result = await validate_mac(reference_repo, 120000.0, 15.5)

        assert not result.is_valid
        assert result.weight_used_for_constraint == 130000.0
        assert "outside" in result.message

    async def test_worksheet_mission_is_valid(self, reference_repo):
        result = await validate_mission_mac(reference_repo, WORKSHEET_MISSION_ID)

        assert result.is_valid
        assert result.current_mac == pytest.approx(25.8703, abs=1e-3)
