"""
Tests for record ordering, segments and the per-record detail figure
"""

from datetime import datetime, timezone

import pytest

from fueltracker.calculations import (
    build_segments,
    consumption_for_record,
    latest_by_date,
    order_by_date,
    order_by_odometer,
    previous_by_date,
    valid_segments,
)

from tests.factories import RecordFactory


def _date(day, month=1):
    return datetime(2024, month, day, 12, 0, tzinfo=timezone.utc)


class TestOrderings:
    """Odometer and date orderings are independent"""

    def test_order_by_odometer(self):
        records = [
            RecordFactory.build(odometer=1300.0, date=_date(1)),
            RecordFactory.build(odometer=1000.0, date=_date(2)),
            RecordFactory.build(odometer=1250.0, date=_date(3)),
        ]
        assert [r.odometer for r in order_by_odometer(records)] == [1000.0, 1250.0, 1300.0]

    def test_order_by_date(self):
        records = [
            RecordFactory.build(odometer=1300.0, date=_date(3)),
            RecordFactory.build(odometer=1000.0, date=_date(1)),
            RecordFactory.build(odometer=1250.0, date=_date(2)),
        ]
        assert [r.date.day for r in order_by_date(records)] == [1, 2, 3]

    def test_accepts_mapping(self):
        """The persistence layer hands over {id: record}"""
        first = RecordFactory.build(odometer=2000.0)
        second = RecordFactory.build(odometer=1000.0)
        ordered = order_by_odometer({first.id: first, second.id: second})
        assert ordered == [second, first]

    def test_odometer_ties_broken_by_date(self):
        later = RecordFactory.build(odometer=1000.0, date=_date(5))
        earlier = RecordFactory.build(odometer=1000.0, date=_date(1))
        assert order_by_odometer([later, earlier]) == [earlier, later]

    def test_naive_and_aware_dates_sort_together(self):
        """Naive dates are read as UTC instead of failing the comparison"""
        naive = RecordFactory.build(odometer=1000.0, date=datetime(2024, 1, 2, 12, 0))
        aware = RecordFactory.build(odometer=1000.0, date=_date(1))

        assert order_by_date([naive, aware]) == [aware, naive]
        assert order_by_odometer([naive, aware]) == [aware, naive]
        assert len(build_segments([naive, aware], True)) == 1

    def test_empty(self):
        assert order_by_odometer([]) == []
        assert order_by_date({}) == []

    def test_inputs_not_mutated(self):
        records = [RecordFactory.build(odometer=2000.0), RecordFactory.build(odometer=1000.0)]
        original = list(records)
        order_by_odometer(records)
        assert records == original


class TestSegments:
    """Adjacent odometer pairs"""

    def test_segment_count(self):
        records = RecordFactory.build_series(4)
        assert len(build_segments(records, True)) == 3

    def test_single_record_has_no_segments(self):
        assert build_segments([RecordFactory.build()], True) == []

    def test_valid_segment_figures(self):
        """Consumption uses the later record's volume"""
        records = [
            RecordFactory.build(odometer=14700.0, volume=50.0, unit_price=1.5),
            RecordFactory.build(odometer=15000.0, volume=30.0, unit_price=1.5, date=_date(2)),
        ]
        segment = build_segments(records, True)[0]

        assert segment.is_valid
        assert segment.distance == 300.0
        assert segment.consumption == pytest.approx(10.0)
        assert segment.cost_per_distance == pytest.approx(45.0 / 300.0)

    def test_equal_odometer_segment_invalid(self):
        records = [
            RecordFactory.build(odometer=1000.0, date=_date(1)),
            RecordFactory.build(odometer=1000.0, date=_date(2)),
        ]
        segment = build_segments(records, True)[0]

        assert not segment.is_valid
        assert segment.distance == 0.0
        assert segment.consumption == 0.0

    def test_valid_segments_filter(self):
        records = [
            RecordFactory.build(odometer=1000.0, date=_date(1)),
            RecordFactory.build(odometer=1000.0, date=_date(2)),
            RecordFactory.build(odometer=1500.0, date=_date(3)),
        ]
        valid = valid_segments(records, True)
        assert len(valid) == 1
        assert valid[0].distance == 500.0


class TestDateNeighbours:
    """Latest and previous by date"""

    def test_latest_by_date(self):
        records = [
            RecordFactory.build(odometer=1500.0, date=_date(1)),
            RecordFactory.build(odometer=1000.0, date=_date(9)),
        ]
        assert latest_by_date(records).odometer == 1000.0

    def test_latest_by_date_empty(self):
        assert latest_by_date([]) is None

    def test_previous_by_date(self):
        first = RecordFactory.build(odometer=1000.0, date=_date(1))
        second = RecordFactory.build(odometer=1500.0, date=_date(2))
        assert previous_by_date(second.id, [second, first]) == first

    def test_previous_of_earliest_is_none(self):
        first = RecordFactory.build(odometer=1000.0, date=_date(1))
        assert previous_by_date(first.id, [first]) is None

    def test_previous_of_unknown_id_is_none(self):
        assert previous_by_date("missing", [RecordFactory.build()]) is None


class TestConsumptionForRecord:
    """Entry detail figure uses the date-previous record"""

    def test_metric(self):
        first = RecordFactory.build(odometer=1000.0, date=_date(1))
        second = RecordFactory.build(odometer=1500.0, volume=40.0, date=_date(2))
        assert consumption_for_record(second.id, [first, second], True) == pytest.approx(8.0)

    def test_imperial_uses_mpg(self):
        first = RecordFactory.build(odometer=1000.0, date=_date(1))
        second = RecordFactory.build(odometer=1300.0, volume=30.0, date=_date(2))
        expected = 300.0 / (30.0 * 0.264172)
        assert consumption_for_record(second.id, [first, second], False) == pytest.approx(expected)

    def test_first_record_undefined(self):
        first = RecordFactory.build(odometer=1000.0, date=_date(1))
        assert consumption_for_record(first.id, [first], True) == 0.0

    def test_date_previous_with_higher_odometer_undefined(self):
        """Previous by date, not by odometer: a back-dated entry yields 0.0"""
        a = RecordFactory.build(odometer=2000.0, date=_date(1))
        b = RecordFactory.build(odometer=1500.0, date=_date(2))
        c = RecordFactory.build(odometer=2500.0, date=_date(3))
        records = {r.id: r for r in (a, b, c)}

        assert consumption_for_record(b.id, records, True) == 0.0
        assert consumption_for_record(c.id, records, True) == pytest.approx(40.0 / 1000.0 * 100)
