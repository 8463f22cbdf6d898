"""
Aggregate Statistics

Folds the full record collection into totals, averages, extremes and time
series. Nothing is cached: every call recomputes from the records given.

- Distance and consumption figures come from valid odometer-ordered segments
- Spending, volume and price figures cover every record regardless of order
- Time series are keyed by record date
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from fueltracker.utils.time_utils import ensure_utc

from .consumption import calculate_cost_per_distance
from .constants import UNDEFINED
from .ordering import Segment, build_segments, latest_by_date, order_by_date, valid_segments
from .records import AppSettings, RecordCollection, RefuelRecord, as_record_list

SeriesPoint = Tuple[datetime, float]


def calculate_total_distance(records: RecordCollection, is_metric: bool = True) -> float:
    """
    Sum of distances over valid segments; regressions and ties add nothing.

    Examples:
        Odometers 1000, 1300, 1250 sort to 1000, 1250, 1300 -> 300.0
    """
    return float(sum(s.distance for s in valid_segments(records, is_metric)))


def calculate_total_spent(records: RecordCollection) -> float:
    """Sum of total cost over all records."""
    return float(sum(r.total_cost for r in as_record_list(records)))


def calculate_total_volume(records: RecordCollection) -> float:
    """Sum of liters over all records."""
    return float(sum(r.volume for r in as_record_list(records)))


def _positive_consumptions(segments: List[Segment]) -> List[float]:
    return [s.consumption for s in segments if s.is_valid and s.consumption > 0]


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else UNDEFINED


def _trend_points(segments: List[Segment]) -> List[SeriesPoint]:
    return [(s.later.date, s.consumption) for s in segments if s.is_valid and s.consumption > 0]


def calculate_average_consumption(records: RecordCollection, is_metric: bool) -> float:
    """
    Mean consumption over valid segments with positive consumption.

    Returns:
        Average, or 0.0 when no valid segment exists (0 or 1 records included)
    """
    return _average(_positive_consumptions(build_segments(records, is_metric)))


def calculate_best_consumption(records: RecordCollection, is_metric: bool) -> float:
    """Lowest positive segment consumption, or 0.0 without valid segments."""
    values = _positive_consumptions(build_segments(records, is_metric))
    return min(values) if values else UNDEFINED


def calculate_worst_consumption(records: RecordCollection, is_metric: bool) -> float:
    """Highest positive segment consumption, or 0.0 without valid segments."""
    values = _positive_consumptions(build_segments(records, is_metric))
    return max(values) if values else UNDEFINED



def calculate_average_price(records: RecordCollection) -> float:
    """Mean unit price over all records, or 0.0 for an empty collection."""
    record_list = as_record_list(records)
    if not record_list:
        return UNDEFINED
    return sum(r.unit_price for r in record_list) / len(record_list)


def calculate_overall_cost_per_distance(records: RecordCollection, is_metric: bool = True) -> float:
    """Total spent divided by total valid distance, or 0.0 without distance."""
    return calculate_cost_per_distance(
        calculate_total_spent(records),
        calculate_total_distance(records, is_metric),
        is_metric,
    )


def calculate_highest_odometer(records: RecordCollection) -> float:
    """Largest odometer reading recorded, or 0.0 for an empty collection."""
    record_list = as_record_list(records)
    if not record_list:
        return UNDEFINED
    return max(r.odometer for r in record_list)


def month_start(moment: datetime) -> datetime:
    """First instant of the UTC calendar month containing moment."""
    return ensure_utc(moment).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def calculate_monthly_spending(records: RecordCollection) -> List[SeriesPoint]:
    """
    Total cost per calendar month, ascending by month start.

    Months are taken in UTC, so dates carrying different offsets still share
    a bucket.

    Examples:
        Two fills in March and one in April -> [(Mar 1, a + b), (Apr 1, c)]
    """
    buckets: Dict[datetime, float] = defaultdict(float)
    for record in as_record_list(records):
        buckets[month_start(record.date)] += record.total_cost

    return sorted(buckets.items(), key=lambda item: item[0])


def calculate_price_trend(records: RecordCollection) -> List[SeriesPoint]:
    """(date, unit price) for every record, date ascending."""
    return [(r.date, r.unit_price) for r in order_by_date(records)]


def calculate_consumption_trend(records: RecordCollection, is_metric: bool) -> List[SeriesPoint]:
    """
    (later record date, consumption) for each valid segment.

    Points stay in odometer order and are not re-sorted by date, so a record
    entered with an out-of-sequence date shows up where its odometer puts it.
    """
    return _trend_points(build_segments(records, is_metric))


@dataclass(frozen=True)
class FuelSummary:
    """Every scalar aggregate the dashboard and statistics views show."""

    entry_count: int
    total_spent: float
    total_volume: float
    total_distance: float
    average_consumption: float
    best_consumption: float
    worst_consumption: float
    average_price: float
    cost_per_distance: float
    highest_odometer: float
    valid_segment_count: int
    invalid_segment_count: int
    last_entry: Optional[RefuelRecord] = None
    monthly_spending: List[SeriesPoint] = field(default_factory=list)
    price_trend: List[SeriesPoint] = field(default_factory=list)
    consumption_trend: List[SeriesPoint] = field(default_factory=list)

    @property
    def has_consumption(self) -> bool:
        return self.average_consumption > 0


def summarize(records: RecordCollection, settings: AppSettings) -> FuelSummary:
    """
    Compute every aggregate and series in one pass over the collection.

    Args:
        records: Mapping of id to record, or any iterable of records
        settings: Unit context for the consumption figures

    Returns:
        FuelSummary with sentinel zeros wherever a figure is not computable
    """
    record_list = as_record_list(records)
    is_metric = settings.is_metric

    segments = build_segments(record_list, is_metric)
    valid = [s for s in segments if s.is_valid]
    consumptions = _positive_consumptions(segments)

    total_spent = calculate_total_spent(record_list)
    total_distance = float(sum(s.distance for s in valid))

    return FuelSummary(
        entry_count=len(record_list),
        total_spent=total_spent,
        total_volume=calculate_total_volume(record_list),
        total_distance=total_distance,
        average_consumption=_average(consumptions),
        best_consumption=min(consumptions) if consumptions else UNDEFINED,
        worst_consumption=max(consumptions) if consumptions else UNDEFINED,
        average_price=calculate_average_price(record_list),
        cost_per_distance=calculate_cost_per_distance(total_spent, total_distance, is_metric),
        highest_odometer=calculate_highest_odometer(record_list),
        valid_segment_count=len(valid),
        invalid_segment_count=len(segments) - len(valid),
        last_entry=latest_by_date(record_list),
        monthly_spending=calculate_monthly_spending(record_list),
        price_trend=calculate_price_trend(record_list),
        consumption_trend=_trend_points(segments),
    )
