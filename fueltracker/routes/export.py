"""
Export routes for Fuel Tracker.

Downloads the fuel log as CSV or JSON.
"""

import logging

from flask import Blueprint, Response, jsonify, request

from fueltracker.database import get_db
from fueltracker.extensions import RateLimits, limiter
from fueltracker.services import fuel_service
from fueltracker.utils.error_codes import ErrorCode
from fueltracker.utils.exporter import SUPPORTED_FORMATS, export_to_csv, export_to_json
from fueltracker.utils.time_utils import format_date, utc_now
from fueltracker.utils.wide_events import track_operation

logger = logging.getLogger(__name__)

export_bp = Blueprint('export', __name__)


@export_bp.route('/export', methods=['GET'])
@limiter.limit(RateLimits.EXPENSIVE)
def export_entries() -> Response:
    """
    Export all refuel entries.

    Query params:
        format: 'csv' (default) or 'json'
    """
    export_format = request.args.get('format', 'csv').lower()
    if export_format not in SUPPORTED_FORMATS:
        return jsonify({
            'error': f'Unsupported export format: {export_format}',
            'details': {'code': ErrorCode.E411_UNSUPPORTED_EXPORT_FORMAT.value, 'supported': list(SUPPORTED_FORMATS)},
        }), 400

    db = get_db()
    records = fuel_service.fetch_records(db)

    with track_operation('export', export_format=export_format) as event:
        event.add_business_metric('entries', len(records))

        if export_format == 'json':
            vehicle = fuel_service.fetch_vehicle_info(db)
            body = export_to_json(records, vehicle.to_export_dict() if vehicle else None)
            mimetype = 'application/json'
        else:
            body = export_to_csv(records)
            mimetype = 'text/csv'

    filename = f"fuel_export_{format_date(utc_now())}.{export_format}"
    return Response(
        body,
        mimetype=mimetype,
        headers={'Content-Disposition': f'attachment; filename={filename}'}
    )
