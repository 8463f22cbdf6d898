"""
Refuel entry routes for Fuel Tracker.

Handles the fuel log: listing, detail, create, edit, delete and full reset.
"""

import logging

from flask import Blueprint, jsonify, request

from fueltracker.database import get_db
from fueltracker.exceptions import EntryValidationError
from fueltracker.extensions import RateLimits, limiter
from fueltracker.services import analytics_service, fuel_service
from fueltracker.services.settings_service import get_app_settings
from fueltracker.utils.error_codes import ErrorCode

logger = logging.getLogger(__name__)

entries_bp = Blueprint('entries', __name__)


def _json_body():
    """Request JSON object, or an EntryValidationError when missing or malformed."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise EntryValidationError('No data provided', errors=[{
            'code': ErrorCode.E303_JSON_DECODE_ERROR.value,
            'field': None,
            'message': 'Request body must be a JSON object',
        }])
    return data


def _is_confirmed(data):
    return data.get('confirm') is True or request.args.get('confirm', '').lower() == 'true'


@entries_bp.route('/entries', methods=['GET'])
@limiter.limit(RateLimits.READ_HEAVY)
def list_entries():
    """
    Fuel log.

    Query params:
        sort: date_desc (default), date_asc, mileage_desc, mileage_asc, cost_desc, cost_asc
        search: Free-text filter over date, mileage, liters and total cost
    """
    db = get_db()
    settings = get_app_settings(db)

    sort = request.args.get('sort', analytics_service.DEFAULT_SORT)
    search = request.args.get('search')

    try:
        records = analytics_service.list_records(fuel_service.fetch_records(db), sort=sort, search=search)
    except ValueError as e:
        return jsonify({'error': str(e), 'details': {'sort': list(analytics_service.SORT_OPTIONS)}}), 400

    return jsonify({
        'entries': [analytics_service.record_to_dict(r, settings) for r in records],
        'count': len(records),
        'sort': sort,
    })


@entries_bp.route('/entries/<entry_id>', methods=['GET'])
@limiter.limit(RateLimits.READ_HEAVY)
def get_entry(entry_id):
    """Single entry with consumption since the previous refuel."""
    db = get_db()
    settings = get_app_settings(db)

    entry = fuel_service.get_entry(db, entry_id)
    return jsonify(analytics_service.build_entry_detail(entry.id, fuel_service.fetch_records(db), settings))


@entries_bp.route('/entries', methods=['POST'])
@limiter.limit(RateLimits.WRITE_MODERATE)
def create_entry():
    """
    Add a refuel entry.

    Request body:
        date: ISO datetime (optional, defaults to now)
        mileage: Odometer reading
        liters: Volume added
        price_per_liter: Unit price
        confirm: true to store despite plausibility warnings

    Returns 409 with the warnings when confirmation is needed.
    """
    db = get_db()
    data = _json_body()
    settings = get_app_settings(db)

    entry, result = fuel_service.create_entry(db, data, settings, confirmed=_is_confirmed(data))

    payload = entry.to_dict()
    payload['warnings'] = [issue.to_dict() for issue in result.warnings]
    return jsonify(payload), 201


@entries_bp.route('/entries/<entry_id>', methods=['PATCH', 'PUT'])
@limiter.limit(RateLimits.WRITE_MODERATE)
def update_entry(entry_id):
    """Edit an entry. Omitted fields keep their stored values."""
    db = get_db()
    data = _json_body()
    settings = get_app_settings(db)

    entry, result = fuel_service.update_entry(db, entry_id, data, settings, confirmed=_is_confirmed(data))

    payload = entry.to_dict()
    payload['warnings'] = [issue.to_dict() for issue in result.warnings]
    return jsonify(payload)


@entries_bp.route('/entries/<entry_id>', methods=['DELETE'])
@limiter.limit(RateLimits.WRITE_MODERATE)
def delete_entry(entry_id):
    """Delete a refuel entry."""
    db = get_db()
    fuel_service.delete_entry(db, entry_id)
    return jsonify({'message': 'Refuel entry deleted'})


@entries_bp.route('/entries', methods=['DELETE'])
@limiter.limit(RateLimits.VERY_EXPENSIVE)
def delete_all_entries():
    """Reset: delete every refuel entry. Requires ?confirm=true."""
    if request.args.get('confirm', '').lower() != 'true':
        return jsonify({'error': 'Confirmation required', 'details': {'confirm': 'true'}}), 400

    db = get_db()
    deleted = fuel_service.delete_all_entries(db)
    return jsonify({'message': 'All refuel entries deleted', 'deleted': deleted})
