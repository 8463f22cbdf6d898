"""
Fuel Tracker - Flask Application
Stores refuel entries and serves fuel log, statistics and export APIs.
"""

import logging

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import BadRequest

from fueltracker import database
from fueltracker.config import Config
from fueltracker.exceptions import DatabaseError, FuelTrackerError
from fueltracker.extensions import limiter
from fueltracker.routes import register_blueprints
from fueltracker.utils.error_codes import ErrorCode, StructuredError

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Translate domain and database errors into JSON responses."""

    @app.errorhandler(FuelTrackerError)
    def handle_fuel_tracker_error(error):
        if error.status_code >= 500:
            logger.error(f"Request failed: {error}")
        return jsonify({'error': error.message, 'details': error.details}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        database.get_db().rollback()
        structured = StructuredError(ErrorCode.E203_DB_TRANSACTION_ROLLBACK, 'Database operation failed', exception=error)
        logger.error(str(structured))
        wrapped = DatabaseError(structured.message, {'code': structured.code.value})
        return jsonify({'error': wrapped.message, 'details': wrapped.details}), wrapped.status_code

    @app.errorhandler(BadRequest)
    def handle_bad_request(error):
        return jsonify({
            'error': 'Malformed request',
            'details': {'code': ErrorCode.E303_JSON_DECODE_ERROR.value, 'description': error.description},
        }), 400


def create_app(config_object=Config):
    """Build the Flask app with extensions, blueprints and tables."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    limiter.init_app(app)
    database.init_app(app)
    database.create_tables()

    register_blueprints(app)
    register_error_handlers(app)

    logger.info(f"Fuel Tracker started (database: {config_object.DATABASE_URL.split('://')[0]})")
    return app


# Initialize Flask app
app = create_app()


if __name__ == '__main__':
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.DEBUG)
