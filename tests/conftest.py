"""
Shared fixtures: an app bound to in-memory SQLite, its client and session,
unit settings and a small record set.
"""

import os
from datetime import datetime, timezone

import pytest

# Must be set before fueltracker.config is imported
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['FLASK_TESTING'] = 'true'
os.environ['RATELIMIT_ENABLED'] = 'false'

from fueltracker.app import app as flask_app  # noqa: E402
from fueltracker.calculations import AppSettings  # noqa: E402
from fueltracker.database import SessionLocal, engine  # noqa: E402
from fueltracker.models import Base  # noqa: E402

from tests.factories import RecordFactory  # noqa: E402


@pytest.fixture
def app():
    """Fuel Tracker app with fresh tables for each test."""
    flask_app.config.update(TESTING=True, RATELIMIT_ENABLED=False)
    Base.metadata.create_all(engine)

    yield flask_app

    SessionLocal.remove()
    Base.metadata.drop_all(engine)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Session sharing the app's scoped registry, so rows are visible to requests."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        SessionLocal.remove()


@pytest.fixture
def metric_settings():
    return AppSettings(is_metric=True, currency='USD')


@pytest.fixture
def imperial_settings():
    return AppSettings(is_metric=False, currency='USD')


@pytest.fixture
def sample_records():
    """
    Three refuels with strictly increasing odometer.

    Segments: 1000 -> 1500 (40 L), 1500 -> 2000 (35 L).
    """
    return [
        RecordFactory.build(odometer=1000.0, volume=45.0, unit_price=1.50,
                            date=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)),
        RecordFactory.build(odometer=1500.0, volume=40.0, unit_price=1.60,
                            date=datetime(2024, 3, 15, 9, 0, tzinfo=timezone.utc)),
        RecordFactory.build(odometer=2000.0, volume=35.0, unit_price=1.70,
                            date=datetime(2024, 4, 2, 9, 0, tzinfo=timezone.utc)),
    ]
