"""
Analytics Service

Turns calculation-core results into API payloads. Every payload carries both
the raw numbers (for charts) and pre-formatted display strings, so the
presentation layer never re-implements unit or currency formatting.
"""

import logging
from typing import Any, Dict, List, Optional

from fueltracker.calculations.constants import NOT_AVAILABLE_LABEL
from fueltracker.calculations.ordering import consumption_for_record, order_by_date, order_by_odometer
from fueltracker.calculations.records import AppSettings, RecordCollection, RefuelRecord, as_record_list
from fueltracker.calculations.statistics import FuelSummary, summarize
from fueltracker.calculations.trip import average_price_for_trip, estimate_trip
from fueltracker.calculations.units import (
    format_consumption,
    format_currency,
    format_distance,
    format_volume,
)
from fueltracker.utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)

SORT_OPTIONS = {
    'date_desc': (order_by_date, True),
    'date_asc': (order_by_date, False),
    'mileage_desc': (order_by_odometer, True),
    'mileage_asc': (order_by_odometer, False),
    'cost_desc': (None, True),
    'cost_asc': (None, False),
}
DEFAULT_SORT = 'date_desc'


def _consumption_text(value: float, settings: AppSettings) -> str:
    """Formatted consumption, or N/A for the undefined sentinel."""
    if value <= 0:
        return NOT_AVAILABLE_LABEL
    return format_consumption(value, settings.is_metric)


def _series(points) -> List[Dict[str, Any]]:
    return [{'date': ensure_utc(date).isoformat(), 'value': value} for date, value in points]


def record_to_dict(record: RefuelRecord, settings: AppSettings) -> Dict[str, Any]:
    """Record fields plus display strings."""
    return {
        'id': str(record.id),
        'date': ensure_utc(record.date).isoformat(),
        'mileage': record.odometer,
        'liters': record.volume,
        'price_per_liter': record.unit_price,
        'total_cost': record.total_cost,
        'formatted': {
            'mileage': format_distance(record.odometer, settings.is_metric),
            'volume': format_volume(record.volume, settings.is_metric),
            'price_per_liter': format_currency(record.unit_price, settings.currency),
            'total_cost': format_currency(record.total_cost, settings.currency),
        },
    }


def _search_text(record: RefuelRecord) -> str:
    date = ensure_utc(record.date)
    return ' '.join([
        f"{date.strftime('%b')} {date.day}, {date.year}",
        date.strftime('%Y-%m-%d'),
        str(record.odometer),
        str(record.volume),
        str(record.total_cost),
    ]).lower()


def list_records(
    records: RecordCollection,
    sort: str = DEFAULT_SORT,
    search: Optional[str] = None
) -> List[RefuelRecord]:
    """
    Records for the fuel log view, filtered and sorted.

    Args:
        records: All records
        sort: One of SORT_OPTIONS
        search: Case-insensitive text matched against date, mileage, liters, cost

    Raises:
        ValueError: If sort is not a known option
    """
    if sort not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option: {sort}")

    result = as_record_list(records)

    if search:
        needle = search.strip().lower()
        result = [r for r in result if needle in _search_text(r)]

    ordering, descending = SORT_OPTIONS[sort]
    if ordering is None:
        result = sorted(result, key=lambda r: r.total_cost)
    else:
        result = ordering(result)

    return list(reversed(result)) if descending else result


def build_entry_detail(record_id: Any, records: RecordCollection, settings: AppSettings) -> Dict[str, Any]:
    """One entry with the consumption since the previous (by date) refuel."""
    record_list = as_record_list(records)
    record = next(r for r in record_list if r.id == record_id)
    consumption = consumption_for_record(record_id, record_list, settings.is_metric)

    payload = record_to_dict(record, settings)
    payload['consumption'] = consumption
    payload['formatted']['consumption'] = _consumption_text(consumption, settings)
    return payload


def _summary_numbers(summary: FuelSummary) -> Dict[str, Any]:
    return {
        'entry_count': summary.entry_count,
        'total_spent': summary.total_spent,
        'total_liters': summary.total_volume,
        'total_distance': summary.total_distance,
        'average_consumption': summary.average_consumption,
        'best_consumption': summary.best_consumption,
        'worst_consumption': summary.worst_consumption,
        'average_price': summary.average_price,
        'cost_per_distance': summary.cost_per_distance,
        'highest_odometer': summary.highest_odometer,
        'valid_segments': summary.valid_segment_count,
        'invalid_segments': summary.invalid_segment_count,
    }


def build_statistics(records: RecordCollection, settings: AppSettings) -> Dict[str, Any]:
    """Scalar aggregates for the statistics view."""
    summary = summarize(records, settings)
    is_metric = settings.is_metric
    currency = settings.currency

    payload = _summary_numbers(summary)
    payload['formatted'] = {
        'total_spent': format_currency(summary.total_spent, currency),
        'total_liters': format_volume(summary.total_volume, is_metric),
        'total_distance': format_distance(summary.total_distance, is_metric),
        'average_consumption': _consumption_text(summary.average_consumption, settings),
        'best_consumption': _consumption_text(summary.best_consumption, settings),
        'worst_consumption': _consumption_text(summary.worst_consumption, settings),
        'average_price': format_currency(summary.average_price, currency),
        'cost_per_distance': format_currency(summary.cost_per_distance, currency),
    }
    payload['settings'] = {'is_metric': is_metric, 'currency': currency}
    return payload


def build_analytics(records: RecordCollection, settings: AppSettings) -> Dict[str, Any]:
    """Chart series plus the headline figures shown above them."""
    summary = summarize(records, settings)

    return {
        'consumption_trend': _series(summary.consumption_trend),
        'monthly_spending': _series(summary.monthly_spending),
        'price_trend': _series(summary.price_trend),
        'total_distance': summary.total_distance,
        'total_spent': summary.total_spent,
        'average_consumption': summary.average_consumption,
        'average_price': summary.average_price,
        'formatted': {
            'total_distance': format_distance(summary.total_distance, settings.is_metric),
            'total_spent': format_currency(summary.total_spent, settings.currency),
            'average_consumption': _consumption_text(summary.average_consumption, settings),
            'average_price': format_currency(summary.average_price, settings.currency),
        },
    }


def build_dashboard(
    records: RecordCollection,
    settings: AppSettings,
    vehicle: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Last refuel, odometer and quick stats for the home screen."""
    summary = summarize(records, settings)
    last_entry = summary.last_entry

    return {
        'vehicle': vehicle,
        'last_entry': record_to_dict(last_entry, settings) if last_entry else None,
        'highest_odometer': summary.highest_odometer,
        'quick_stats': {
            'total_spent': format_currency(summary.total_spent, settings.currency),
            'total_fuel': format_volume(summary.total_volume, settings.is_metric),
            'total_distance': format_distance(summary.total_distance, settings.is_metric),
            'average_consumption': _consumption_text(summary.average_consumption, settings),
        },
        'entry_count': summary.entry_count,
    }


def build_trip_estimate(
    distance: float,
    assumed_consumption: float,
    records: RecordCollection,
    settings: AppSettings
) -> Dict[str, Any]:
    """Trip calculator result using the historical average price."""
    price = average_price_for_trip(records)
    estimate = estimate_trip(distance, assumed_consumption, price, settings.is_metric)

    return {
        'distance': distance,
        'assumed_consumption': assumed_consumption,
        'price_per_liter': price,
        'fuel_needed': estimate.fuel_needed,
        'cost': estimate.cost,
        'formatted': {
            'fuel_needed': format_volume(estimate.fuel_needed, settings.is_metric),
            'cost': format_currency(estimate.cost, settings.currency),
            'price_per_liter': format_currency(price, settings.currency),
        },
    }

