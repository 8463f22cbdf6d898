"""
Analytics routes for Fuel Tracker.

Statistics, chart series and the dashboard summary. Aggregates are
recomputed from the full entry set on every request.
"""

import logging

from flask import Blueprint, jsonify

from fueltracker.database import get_db
from fueltracker.extensions import RateLimits, limiter
from fueltracker.services import analytics_service, fuel_service
from fueltracker.services.settings_service import get_app_settings
from fueltracker.utils.wide_events import WideEvent

logger = logging.getLogger(__name__)

analytics_bp = Blueprint('analytics', __name__)


def _tracked(operation, builder, *extra):
    """Run a payload builder under a sampled wide event."""
    db = get_db()
    settings = get_app_settings(db)
    records = fuel_service.fetch_records(db)

    event = WideEvent(operation)
    event.add_context(entry_count=len(records), is_metric=settings.is_metric)

    with event.timer("build"):
        payload = builder(records, settings, *extra)

    invalid = payload.get('invalid_segments')
    if invalid:
        event.add_business_metric('invalid_segments', invalid)
    event.mark_success()
    event.emit()

    return payload


@analytics_bp.route('/statistics', methods=['GET'])
@limiter.limit(RateLimits.READ_HEAVY)
def get_statistics():
    """Totals, averages, best/worst consumption and cost per distance."""
    return jsonify(_tracked('statistics', analytics_service.build_statistics))


@analytics_bp.route('/analytics', methods=['GET'])
@limiter.limit(RateLimits.READ_HEAVY)
def get_analytics():
    """Consumption trend, monthly spending and price trend series."""
    return jsonify(_tracked('analytics', analytics_service.build_analytics))


@analytics_bp.route('/dashboard', methods=['GET'])
@limiter.limit(RateLimits.READ_HEAVY)
def get_dashboard():
    """Home screen summary."""
    vehicle = fuel_service.fetch_vehicle_info(get_db())
    vehicle_dict = vehicle.to_dict() if vehicle else None
    return jsonify(_tracked('dashboard', analytics_service.build_dashboard, vehicle_dict))
