"""
Settings and vehicle routes for Fuel Tracker.
"""

import logging

from flask import Blueprint, jsonify, request

from fueltracker.database import get_db
from fueltracker.extensions import RateLimits, limiter
from fueltracker.services import fuel_service, settings_service

logger = logging.getLogger(__name__)

settings_bp = Blueprint('settings', __name__)


@settings_bp.route('/settings', methods=['GET'])
def get_settings():
    """Current unit system, currency and theme."""
    db = get_db()
    return jsonify(settings_service.fetch_settings(db).to_dict())


@settings_bp.route('/settings', methods=['PUT', 'PATCH'])
@limiter.limit(RateLimits.WRITE_MODERATE)
def update_settings():
    """
    Update settings.

    Request body (all optional):
        is_metric: bool
        currency: Three-letter code
        theme_mode: light, dark or system
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'No data provided'}), 400

    db = get_db()
    settings = settings_service.update_settings(db, data)
    return jsonify(settings.to_dict())


@settings_bp.route('/vehicle', methods=['GET'])
def get_vehicle():
    """Stored vehicle info, or 404 when none was entered."""
    db = get_db()
    vehicle = fuel_service.fetch_vehicle_info(db)
    if vehicle is None:
        return jsonify({'error': 'Vehicle info not set'}), 404
    return jsonify(vehicle.to_dict())


@settings_bp.route('/vehicle', methods=['PUT'])
@limiter.limit(RateLimits.WRITE_MODERATE)
def save_vehicle():
    """Create or replace vehicle info (brand, model, year, tank_capacity)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'No data provided'}), 400

    db = get_db()
    vehicle = fuel_service.save_vehicle_info(db, data)
    return jsonify(vehicle.to_dict())
