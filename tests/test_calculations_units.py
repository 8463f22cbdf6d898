"""
Tests for unit conversion and display formatting
"""

import pytest

from fueltracker.calculations import (
    currency_symbol,
    format_consumption,
    format_currency,
    format_distance,
    format_volume,
    gallons_to_liters,
    liters_to_gallons,
)


class TestVolumeConversion:
    """Test liters <-> gallons"""

    def test_liters_to_gallons(self):
        """10 L = 2.64172 gal"""
        assert liters_to_gallons(10.0) == pytest.approx(2.64172)

    def test_gallons_to_liters(self):
        """1 gal = 3.78541 L to 5 significant figures"""
        assert gallons_to_liters(1.0) == pytest.approx(3.78541, rel=1e-5)

    def test_zero_volume(self):
        assert liters_to_gallons(0.0) == 0.0
        assert gallons_to_liters(0.0) == 0.0

    def test_round_trip_is_stable(self):
        """Converting there and back returns the original value"""
        assert gallons_to_liters(liters_to_gallons(42.0)) == pytest.approx(42.0)


class TestFormatVolume:
    """Test volume labels"""

    def test_metric_two_decimals(self):
        assert format_volume(12.345, True) == "12.35 L"

    def test_imperial_converts_to_gallons(self):
        """40 L shows as 10.57 gal"""
        assert format_volume(40.0, False) == "10.57 gal"

    def test_zero(self):
        assert format_volume(0.0, True) == "0.00 L"


class TestFormatDistance:
    """Distances are labelled, never converted"""

    def test_metric_label(self):
        assert format_distance(300.0, True) == "300.0 km"

    def test_imperial_label_same_number(self):
        assert format_distance(300.0, False) == "300.0 miles"

    def test_one_decimal(self):
        assert format_distance(1234.56, True) == "1234.6 km"


class TestFormatConsumption:
    """Test consumption labels"""

    def test_metric(self):
        assert format_consumption(6.5, True) == "6.50 L/100km"

    def test_imperial(self):
        assert format_consumption(36.2, False) == "36.20 MPG"


class TestFormatCurrency:
    """Test currency symbols"""

    @pytest.mark.parametrize("code,expected", [
        ("USD", "$12.50"),
        ("EUR", "€12.50"),
        ("GBP", "£12.50"),
        ("RUB", "₽12.50"),
    ])
    def test_known_currencies(self, code, expected):
        assert format_currency(12.5, code) == expected

    def test_unknown_currency_falls_back_to_dollar(self):
        assert format_currency(3.0, "JPY") == "$3.00"
        assert currency_symbol("XYZ") == "$"

    def test_default_is_usd(self):
        assert format_currency(1.0) == "$1.00"
