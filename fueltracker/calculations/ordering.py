"""
Record Ordering

Single home for the two canonical orderings of refuel records:

- Odometer ascending: used for every distance and consumption figure. Walking
  it pairwise yields Segments, valid only when the odometer strictly increases.
- Date ascending: used for time series, "last entry" and the per-record
  "previous refuel" lookup shown on the entry detail view.

The orderings are not interchangeable. Records may be stored in any order and
odometer readings may repeat or regress; none of that raises here.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from fueltracker.utils.time_utils import ensure_utc

from .constants import UNDEFINED
from .consumption import calculate_consumption, calculate_cost_per_distance, calculate_distance
from .records import RecordCollection, RefuelRecord, as_record_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """Gap between two odometer-adjacent refuel records."""

    earlier: RefuelRecord
    later: RefuelRecord
    is_valid: bool
    distance: float = UNDEFINED
    consumption: float = UNDEFINED
    cost_per_distance: float = UNDEFINED


def _odometer_key(record: RefuelRecord):
    return (record.odometer, ensure_utc(record.date), str(record.id))


def _date_key(record: RefuelRecord):
    return (ensure_utc(record.date), record.odometer, str(record.id))


def order_by_odometer(records: RecordCollection) -> List[RefuelRecord]:
    """Records sorted by odometer ascending; ties fall back to date, then id."""
    return sorted(as_record_list(records), key=_odometer_key)


def order_by_date(records: RecordCollection) -> List[RefuelRecord]:
    """Records sorted by date ascending; ties fall back to odometer, then id."""
    return sorted(as_record_list(records), key=_date_key)


def make_segment(earlier: RefuelRecord, later: RefuelRecord, is_metric: bool) -> Segment:
    """
    Classify one adjacent pair.

    The consumption of a segment is attributed to the later refuel: the fuel
    added there is what the distance since the earlier refuel burned.
    """
    distance = calculate_distance(later.odometer, earlier.odometer)
    if distance <= 0:
        return Segment(earlier=earlier, later=later, is_valid=False)

    return Segment(
        earlier=earlier,
        later=later,
        is_valid=True,
        distance=distance,
        consumption=calculate_consumption(later.odometer, earlier.odometer, later.volume, is_metric),
        cost_per_distance=calculate_cost_per_distance(later.total_cost, distance, is_metric),
    )


def build_segments(records: RecordCollection, is_metric: bool) -> List[Segment]:
    """
    Walk the odometer ordering pairwise and classify every adjacent pair.

    Args:
        records: Mapping of id to record, or any iterable of records
        is_metric: Unit system for the consumption figures

    Returns:
        One Segment per adjacent pair (len(records) - 1, or empty)
    """
    ordered = order_by_odometer(records)
    segments = [
        make_segment(earlier, later, is_metric)
        for earlier, later in zip(ordered, ordered[1:])
    ]

    invalid = sum(1 for s in segments if not s.is_valid)
    if invalid:
        logger.debug(f"{invalid} of {len(segments)} segments have non-increasing odometer and are skipped")

    return segments


def valid_segments(records: RecordCollection, is_metric: bool) -> List[Segment]:
    """Only the segments whose odometer strictly increases, in odometer order."""
    return [s for s in build_segments(records, is_metric) if s.is_valid]


def latest_by_date(records: RecordCollection) -> Optional[RefuelRecord]:
    """Most recent record by date, or None for an empty collection."""
    ordered = order_by_date(records)
    return ordered[-1] if ordered else None


def previous_by_date(record_id: Any, records: RecordCollection) -> Optional[RefuelRecord]:
    """
    The record entered immediately before record_id in date order.

    Returns None when the record is unknown or is the earliest one.
    """
    ordered = order_by_date(records)
    for index, record in enumerate(ordered):
        if record.id == record_id:
            return ordered[index - 1] if index > 0 else None
    return None


def consumption_for_record(record_id: Any, records: RecordCollection, is_metric: bool) -> float:
    """
    Consumption shown on a single entry's detail view.

    "Previous" means previous in date order, not lower odometer. If that
    previous record has an equal or higher odometer the figure is undefined.

    Returns:
        Consumption figure, or 0.0 if not computable
    """
    record_list = as_record_list(records)
    current = next((r for r in record_list if r.id == record_id), None)
    previous = previous_by_date(record_id, record_list)

    if current is None or previous is None:
        return UNDEFINED

    return calculate_consumption(current.odometer, previous.odometer, current.volume, is_metric)
