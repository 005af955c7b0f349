"""
Tests for the cargo reference chart and unit helpers.
"""

import pytest

from deckload.chart.cargo_chart import calculate_cargo_chart_y, get_cargo_chart_y_in_pounds, is_within_chart_range
from deckload.config.calibration import CargoChartConstants
from deckload.units import klbs_to_lbs, lbs_to_klbs, linear_load, pressure_psi


class TestUnits:
    """Tests for pint-backed conversions."""

    def test_klbs_round_trip(self):
        assert lbs_to_klbs(80000.0) == 80.0
        assert klbs_to_lbs(20.0) == 20000.0

    def test_load_units(self):
        assert pressure_psi(1500.0, 60.0) == pytest.approx(25.0)
        assert linear_load(4000.0, 100.0) == pytest.approx(40.0)


class TestCargoChart:
    """Tests for chart readings and bounds."""

    def test_reading_in_range(self):
        result = calculate_cargo_chart_y(80000.0, 10000.0)

        assert result.y_value == pytest.approx(20.0)
        assert result.is_within_bounds
        assert result.operating_weight_klbs == 80.0
        assert result.cargo_weight_klbs == 10.0

    def test_reference_line(self):
        """At the 90,000 lb reference line the reading equals the cargo weight."""
        assert calculate_cargo_chart_y(90000.0, 30000.0).y_value == pytest.approx(30.0)

    def test_operating_weight_below_chart(self):
        result = calculate_cargo_chart_y(60000.0, 10000.0)

        assert not result.is_within_bounds
        assert result.y_value == pytest.approx(40.0)

    def test_reading_above_chart(self):
        """Inputs inside the axes can still read off the top of the chart."""
        assert not is_within_chart_range(70000.0, 60000.0)
        assert not calculate_cargo_chart_y(70000.0, 60000.0).is_within_bounds

    def test_range_matches_reading_bounds(self):
        for operating, cargo in [(68000.0, 0.0), (70000.0, 45000.0), (70000.0, 45001.0), (95000.0, 0.0)]:
            assert is_within_chart_range(operating, cargo) == calculate_cargo_chart_y(operating, cargo).is_within_bounds
        assert is_within_chart_range(70000.0, 45000.0)
        assert not is_within_chart_range(70000.0, 45001.0)

    def test_axis_edges_are_inclusive(self):
        assert is_within_chart_range(68000.0, 0.0)
        assert is_within_chart_range(90000.0, 65000.0)
        assert not is_within_chart_range(90001.0, 0.0)

    def test_reading_in_pounds(self):
        assert get_cargo_chart_y_in_pounds(80000.0, 10000.0) == pytest.approx(20000.0)

    def test_custom_chart(self):
        constants = CargoChartConstants(reference_operating_weight_klbs=100.0, line_slope=0.5,
                                        max_operating_weight_klbs=100.0)
        result = calculate_cargo_chart_y(80000.0, 10000.0, constants)
        assert result.y_value == pytest.approx(20.0)
