"""
Tests for trip cost estimation
"""

import pytest

from fueltracker.calculations import TripEstimate, average_price_for_trip, estimate_trip

from tests.factories import RecordFactory


class TestEstimateTrip:
    """Fuel and cost for a planned trip"""

    def test_metric(self):
        """500 km at 6 L/100km = 30 L"""
        result = estimate_trip(500.0, 6.0, 2.0, True)
        assert result.fuel_needed == pytest.approx(30.0)
        assert result.cost == pytest.approx(60.0)

    def test_imperial(self):
        """300 miles at 30 MPG = 10 gal = 37.8541 L"""
        result = estimate_trip(300.0, 30.0, 1.0, False)
        assert result.fuel_needed == pytest.approx(37.8541)
        assert result.cost == pytest.approx(37.8541)

    @pytest.mark.parametrize("distance,consumption", [
        (0.0, 6.0),
        (500.0, 0.0),
        (-10.0, 6.0),
        (500.0, -1.0),
    ])
    def test_non_positive_inputs_zero(self, distance, consumption):
        assert estimate_trip(distance, consumption, 1.5, True) == TripEstimate(0.0, 0.0)


class TestAveragePriceForTrip:
    """Historical price used by the calculator"""

    def test_default_without_history(self):
        assert average_price_for_trip([]) == 1.5

    def test_mean_of_records(self):
        records = [RecordFactory.build(unit_price=1.0), RecordFactory.build(unit_price=2.0)]
        assert average_price_for_trip(records) == pytest.approx(1.5)

    def test_custom_default(self):
        assert average_price_for_trip({}, default=2.25) == 2.25
