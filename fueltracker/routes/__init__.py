"""
Routes module for Fuel Tracker Flask blueprints.

This module contains Flask blueprints that handle different areas of the API.
"""

from fueltracker.routes.analytics import analytics_bp
from fueltracker.routes.entries import entries_bp
from fueltracker.routes.export import export_bp
from fueltracker.routes.settings import settings_bp
from fueltracker.routes.trip import trip_bp

__all__ = [
    "entries_bp",
    "analytics_bp",
    "trip_bp",
    "settings_bp",
    "export_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(entries_bp, url_prefix="/api")
    app.register_blueprint(analytics_bp, url_prefix="/api")
    app.register_blueprint(trip_bp, url_prefix="/api")
    app.register_blueprint(settings_bp, url_prefix="/api")
    app.register_blueprint(export_bp, url_prefix="/api")
