"""
Trip calculator routes for Fuel Tracker.
"""

import logging

from flask import Blueprint, jsonify, request

from fueltracker.calculations.validation import parse_number
from fueltracker.database import get_db
from fueltracker.extensions import RateLimits, limiter
from fueltracker.services import analytics_service, fuel_service
from fueltracker.services.settings_service import get_app_settings

logger = logging.getLogger(__name__)

trip_bp = Blueprint('trip', __name__)


@trip_bp.route('/trip/estimate', methods=['POST'])
@limiter.limit(RateLimits.READ_HEAVY)
def estimate_trip():
    """
    Estimate fuel and cost for a trip.

    Request body:
        distance: Trip length in the current distance unit
        consumption: Assumed L/100km (metric) or MPG (imperial)

    Non-numeric values yield a zero estimate.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'No data provided'}), 400

    db = get_db()
    settings = get_app_settings(db)

    distance = parse_number(data.get('distance')) or 0.0
    consumption = parse_number(data.get('consumption')) or 0.0

    return jsonify(analytics_service.build_trip_estimate(
        distance, consumption, fuel_service.fetch_records(db), settings
    ))
