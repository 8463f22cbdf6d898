"""
Data export for Fuel Tracker.

Serializes refuel records to the CSV and JSON formats offered for download.
Rows are derived from the same record values the analytics core uses, so the
exported totals always match what the dashboard shows.
"""

import csv
import io
import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fueltracker.calculations.ordering import order_by_date
from fueltracker.calculations.records import RecordCollection
from fueltracker.exceptions import ExportError

from .error_codes import ErrorCode, StructuredError
from .time_utils import format_date, format_datetime_iso, utc_now

logger = logging.getLogger(__name__)

CSV_HEADER = ['Date', 'Mileage', 'Liters', 'Price per Liter', 'Total Cost']
SUPPORTED_FORMATS = ('csv', 'json')


def export_to_csv(records: RecordCollection) -> str:
    """
    Export records as CSV, one row per record sorted by date ascending.

    Returns:
        CSV text with header Date,Mileage,Liters,Price per Liter,Total Cost
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')

    writer.writerow(CSV_HEADER)

    for record in order_by_date(records):
        writer.writerow([
            format_date(record.date),
            record.odometer,
            record.volume,
            record.unit_price,
            record.total_cost,
        ])

    return output.getvalue()


def build_export_document(
    records: RecordCollection,
    vehicle: Optional[Dict[str, Any]] = None,
    exported_at: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Build the JSON export structure.

    Args:
        records: Records to export
        vehicle: Optional vehicle dict (brand, model, year, tankCapacity)
        exported_at: Export timestamp (defaults to now)

    Returns:
        Dict with exportDate, entries and, when given, vehicle
    """
    document = {
        'exportDate': format_datetime_iso(exported_at or utc_now()),
        'entries': [
            {
                'id': str(record.id),
                'date': format_datetime_iso(record.date),
                'mileage': record.odometer,
                'liters': record.volume,
                'pricePerLiter': record.unit_price,
                'totalCost': record.total_cost,
            }
            for record in order_by_date(records)
        ],
    }

    if vehicle is not None:
        document['vehicle'] = vehicle

    return document


def export_to_json(
    records: RecordCollection,
    vehicle: Optional[Dict[str, Any]] = None,
    exported_at: Optional[datetime] = None
) -> str:
    """Export records (and optional vehicle) as pretty-printed JSON text."""
    document = build_export_document(records, vehicle, exported_at)
    try:
        return json.dumps(document, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error(str(StructuredError(ErrorCode.E410_EXPORT_FAILED, "JSON export failed", exception=e)))
        raise ExportError(f"JSON export failed: {e}", export_format='json') from e
