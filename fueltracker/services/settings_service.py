"""
Settings Service

Fetch-or-create the single settings row and apply validated updates.
The resulting AppSettings value is what routes pass into the calculation core.
"""

import logging
import re
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from fueltracker.calculations.records import AppSettings, ThemeMode
from fueltracker.exceptions import EntryValidationError
from fueltracker.models import Settings
from fueltracker.utils.error_codes import ErrorCode

logger = logging.getLogger(__name__)

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


def fetch_settings(db: Session) -> Settings:
    """Return the settings row, creating it with defaults on first use."""
    settings = db.query(Settings).first()
    if settings is None:
        settings = Settings()
        db.add(settings)
        db.commit()
        logger.info("Created default settings")
    return settings


def get_app_settings(db: Session) -> AppSettings:
    """Settings as the immutable value the calculation core expects."""
    return fetch_settings(db).to_app_settings()


def validate_settings_data(data: Dict[str, Any]) -> List[dict]:
    """
    Validate a settings update.

    Returns:
        List of issue dicts (empty when valid)
    """
    errors = []

    if 'is_metric' in data and not isinstance(data['is_metric'], bool):
        errors.append({
            'code': ErrorCode.E005_INVALID_SETTING.value,
            'field': 'is_metric',
            'message': 'is_metric must be true or false',
        })

    if 'currency' in data:
        currency = data['currency']
        if not isinstance(currency, str) or not CURRENCY_CODE_PATTERN.match(currency.strip().upper()):
            errors.append({
                'code': ErrorCode.E005_INVALID_SETTING.value,
                'field': 'currency',
                'message': 'currency must be a three-letter currency code',
            })

    if 'theme_mode' in data:
        allowed = [mode.value for mode in ThemeMode]
        if data['theme_mode'] not in allowed:
            errors.append({
                'code': ErrorCode.E005_INVALID_SETTING.value,
                'field': 'theme_mode',
                'message': f"theme_mode must be one of {', '.join(allowed)}",
            })

    return errors


def update_settings(db: Session, data: Dict[str, Any]) -> Settings:
    """
    Apply a validated settings update.

    Raises:
        EntryValidationError: If any field is invalid
    """
    errors = validate_settings_data(data)
    if errors:
        raise EntryValidationError('Invalid settings', errors=errors)

    settings = fetch_settings(db)

    if 'is_metric' in data:
        settings.is_metric = data['is_metric']
    if 'currency' in data:
        settings.currency = data['currency'].strip().upper()
    if 'theme_mode' in data:
        settings.theme_mode = data['theme_mode']

    db.commit()

    logger.info(f"Updated settings: {settings.to_dict()}")
    return settings
