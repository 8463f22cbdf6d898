"""
Factories for refuel records, persisted entries, vehicle info and settings.

Usage:
    record = RecordFactory.build(odometer=1500.0)
    entry = RefuelEntryFactory.create(db_session, mileage=1500.0)
    records = RecordFactory.build_series(5)
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from fueltracker.calculations import RefuelRecord
from fueltracker.models import RefuelEntry, Settings, VehicleInfo

BASE_DATE = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class BaseFactory:
    """Builds `model` from get_defaults() overlaid with keyword overrides."""

    model = None

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {}

    @classmethod
    def build(cls, **overrides):
        return cls.model(**{**cls.get_defaults(), **overrides})

    @classmethod
    def create(cls, db_session=None, **overrides):
        """Build, then add and commit when a session is given."""
        instance = cls.build(**overrides)
        if db_session is not None:
            db_session.add(instance)
            db_session.commit()
            db_session.refresh(instance)
        return instance


class RecordFactory(BaseFactory):
    """Factory for immutable RefuelRecord values."""

    model = RefuelRecord

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            'id': uuid.uuid4(),
            'date': BASE_DATE,
            'odometer': 1000.0,
            'volume': 40.0,
            'unit_price': 1.5,
        }

    @classmethod
    def build_series(cls, count: int, start_odometer: float = 1000.0, step: float = 500.0,
                     volume: float = 40.0, unit_price: float = 1.5) -> List[RefuelRecord]:
        """Records one week apart with evenly increasing odometer."""
        return [
            cls.build(
                odometer=start_odometer + i * step,
                date=BASE_DATE + timedelta(days=7 * i),
                volume=volume,
                unit_price=unit_price,
            )
            for i in range(count)
        ]


class RefuelEntryFactory(BaseFactory):
    """Factory for persisted RefuelEntry rows."""

    model = RefuelEntry

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            'id': uuid.uuid4(),
            'date': BASE_DATE,
            'mileage': 1000.0,
            'liters': 40.0,
            'price_per_liter': 1.5,
        }


class VehicleInfoFactory(BaseFactory):
    """Factory for VehicleInfo rows."""

    model = VehicleInfo

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            'brand': 'Toyota',
            'model': 'Corolla',
            'year': 2019,
            'tank_capacity': 50.0,
        }


class SettingsFactory(BaseFactory):
    """Factory for the settings row."""

    model = Settings

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            'is_metric': True,
            'currency': 'USD',
            'theme_mode': 'system',
        }
