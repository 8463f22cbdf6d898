"""
Property-based tests using Hypothesis.

These tests generate many record collections to check invariants of the
calculation core that should hold for any input the validation admits.
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from fueltracker.calculations import (
    AppSettings,
    build_segments,
    calculate_monthly_spending,
    calculate_total_distance,
    calculate_total_spent,
    gallons_to_liters,
    liters_to_gallons,
    order_by_date,
    order_by_odometer,
    summarize,
)
from fueltracker.calculations.records import RefuelRecord

BASE = datetime(2023, 1, 1, tzinfo=timezone.utc)

record_strategy = st.builds(
    RefuelRecord,
    id=st.uuids(),
    date=st.integers(min_value=0, max_value=730).map(lambda d: BASE + timedelta(days=d)),
    odometer=st.floats(min_value=1.0, max_value=500000.0, allow_nan=False),
    volume=st.floats(min_value=0.1, max_value=200.0, allow_nan=False),
    unit_price=st.floats(min_value=0.1, max_value=10.0, allow_nan=False),
)

records_strategy = st.lists(record_strategy, max_size=25)


# ============================================================================
# Unit Conversion Property Tests
# ============================================================================

class TestUnitConversion:
    """Conversions are inverse operations."""

    @given(st.floats(min_value=0.0, max_value=10000.0, allow_nan=False))
    def test_liters_round_trip(self, liters):
        assert gallons_to_liters(liters_to_gallons(liters)) == pytest.approx(liters, abs=1e-9)


# ============================================================================
# Ordering Property Tests
# ============================================================================

class TestOrdering:
    """Orderings are permutations in the right order."""

    @given(records_strategy)
    def test_odometer_order_is_sorted_permutation(self, records):
        ordered = order_by_odometer(records)
        assert sorted(r.id for r in ordered) == sorted(r.id for r in records)
        assert all(a.odometer <= b.odometer for a, b in zip(ordered, ordered[1:]))

    @given(records_strategy)
    def test_date_order_is_sorted(self, records):
        ordered = order_by_date(records)
        assert all(a.date <= b.date for a, b in zip(ordered, ordered[1:]))

    @given(records_strategy)
    def test_storage_order_irrelevant(self, records):
        """Aggregates do not depend on the order records are handed over."""
        forward = summarize(records, AppSettings())
        backward = summarize(list(reversed(records)), AppSettings())
        assert forward.total_distance == pytest.approx(backward.total_distance)
        assert forward.average_consumption == pytest.approx(backward.average_consumption)


# ============================================================================
# Aggregate Property Tests
# ============================================================================

class TestAggregates:
    """Invariants of the aggregate statistics."""

    @given(records_strategy)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_segments_partition_adjacent_pairs(self, records):
        segments = build_segments(records, True)
        assert len(segments) == max(len(records) - 1, 0)
        for segment in segments:
            assert segment.is_valid == (segment.later.odometer > segment.earlier.odometer)
            if not segment.is_valid:
                assert segment.distance == 0.0
                assert segment.consumption == 0.0

    @given(records_strategy)
    def test_total_distance_bounded_by_odometer_span(self, records):
        total = calculate_total_distance(records)
        assert total >= 0.0
        if records:
            span = max(r.odometer for r in records) - min(r.odometer for r in records)
            assert total == pytest.approx(span)

    @given(records_strategy, st.booleans())
    def test_best_average_worst_ordering(self, records, is_metric):
        summary = summarize(records, AppSettings(is_metric=is_metric))
        if summary.has_consumption:
            assert summary.best_consumption <= summary.average_consumption * (1 + 1e-9)
            assert summary.average_consumption <= summary.worst_consumption * (1 + 1e-9)
        else:
            assert summary.best_consumption == 0.0
            assert summary.worst_consumption == 0.0

    @given(records_strategy)
    def test_monthly_spending_sums_to_total(self, records):
        monthly = calculate_monthly_spending(records)
        assert sum(amount for _, amount in monthly) == pytest.approx(calculate_total_spent(records))
        months = [month for month, _ in monthly]
        assert months == sorted(months)
        assert len(set(months)) == len(months)

    @given(st.lists(record_strategy, min_size=1, max_size=1))
    def test_single_record_has_undefined_consumption(self, records):
        summary = summarize(records, AppSettings())
        assert summary.average_consumption == 0.0
        assert summary.total_distance == 0.0
