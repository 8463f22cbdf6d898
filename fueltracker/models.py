import uuid as uuid_module

from sqlalchemy import (
    Boolean, Column, DateTime, Float, Integer, String, TypeDecorator, create_engine
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base

from fueltracker.calculations.records import AppSettings, RefuelRecord, ThemeMode
from fueltracker.config import Config
from fueltracker.utils.time_utils import ensure_utc, utc_now


Base = declarative_base()


# Custom UUID type that works with both PostgreSQL and SQLite
class GUID(TypeDecorator):
    """Platform-independent GUID type.

    Uses PostgreSQL's UUID type when available, otherwise stores as String(36).
    """
    impl = String(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(UUID(as_uuid=True))
        else:
            return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        elif dialect.name == 'postgresql':
            return value
        else:
            return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        elif isinstance(value, uuid_module.UUID):
            return value
        else:
            return uuid_module.UUID(value)


class RefuelEntry(Base):
    """A refuel event as entered by the user. Volume is stored in liters."""

    __tablename__ = 'refuel_entries'

    id = Column(GUID(), primary_key=True, default=uuid_module.uuid4)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    mileage = Column(Float, nullable=False)
    liters = Column(Float, nullable=False)
    price_per_liter = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    @property
    def total_cost(self):
        return self.liters * self.price_per_liter

    def to_record(self) -> RefuelRecord:
        """Immutable snapshot handed to the calculation core."""
        return RefuelRecord(
            id=self.id,
            date=ensure_utc(self.date),
            odometer=self.mileage,
            volume=self.liters,
            unit_price=self.price_per_liter,
        )

    def to_dict(self):
        return {
            'id': str(self.id),
            'date': ensure_utc(self.date).isoformat() if self.date else None,
            'mileage': self.mileage,
            'liters': self.liters,
            'price_per_liter': self.price_per_liter,
            'total_cost': self.total_cost,
        }


class VehicleInfo(Base):
    """The tracked vehicle (single row)."""

    __tablename__ = 'vehicle_info'

    id = Column(Integer, primary_key=True)
    brand = Column(String(100), nullable=False, default='')
    model = Column(String(100), nullable=False, default='')
    year = Column(Integer)
    tank_capacity = Column(Float, default=0.0)

    @property
    def display_name(self):
        brand = self.brand or ''
        model = self.model or ''
        if not brand and not model:
            return 'My Vehicle'
        return f"{brand} {model}".strip()

    def to_dict(self):
        return {
            'brand': self.brand,
            'model': self.model,
            'year': self.year,
            'tank_capacity': self.tank_capacity,
            'display_name': self.display_name,
        }

    def to_export_dict(self):
        return {
            'brand': self.brand,
            'model': self.model,
            'year': self.year,
            'tankCapacity': self.tank_capacity,
        }


class Settings(Base):
    """Unit, currency and theme preferences (single row)."""

    __tablename__ = 'app_settings'

    id = Column(Integer, primary_key=True)
    is_metric = Column(Boolean, nullable=False, default=Config.DEFAULT_IS_METRIC)
    currency = Column(String(3), nullable=False, default=Config.DEFAULT_CURRENCY)
    theme_mode = Column(String(10), nullable=False, default=Config.DEFAULT_THEME_MODE)

    def to_app_settings(self) -> AppSettings:
        """Value passed explicitly into every calculation and formatting call."""
        try:
            theme = ThemeMode(self.theme_mode)
        except ValueError:
            theme = ThemeMode.SYSTEM
        return AppSettings(is_metric=self.is_metric, currency=self.currency, theme_mode=theme)

    def to_dict(self):
        return {
            'is_metric': self.is_metric,
            'currency': self.currency,
            'theme_mode': self.theme_mode,
        }


def get_engine(database_url):
    """Engine for DATABASE_URL; connections are checked before reuse."""
    return create_engine(database_url, pool_pre_ping=True)
