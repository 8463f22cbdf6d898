"""
Fuel Service

Refuel entry and vehicle persistence. Every write of an entry goes through
the validation policy first; reads hand the calculation core a mapping of
entry id to immutable RefuelRecord.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc
from sqlalchemy.orm import Session

from fueltracker.calculations.constants import MIN_VEHICLE_YEAR
from fueltracker.calculations.records import AppSettings, RefuelRecord
from fueltracker.calculations.validation import ValidationResult, parse_number, validate_submission
from fueltracker.exceptions import ConfirmationRequiredError, EntryNotFoundError, EntryValidationError
from fueltracker.models import RefuelEntry, VehicleInfo
from fueltracker.utils.error_codes import ErrorCode, StructuredError
from fueltracker.utils.time_utils import parse_datetime, utc_now
from fueltracker.utils.wide_events import log_entry_event

logger = logging.getLogger(__name__)

# Request field names -> core field names
SUBMISSION_FIELDS = {
    'mileage': 'odometer',
    'liters': 'volume',
    'price_per_liter': 'unit_price',
}


def fetch_all_entries(db: Session) -> List[RefuelEntry]:
    """All entries, most recent first."""
    return db.query(RefuelEntry).order_by(desc(RefuelEntry.date)).all()


def fetch_records(db: Session, exclude_id: Optional[uuid.UUID] = None) -> Dict[uuid.UUID, RefuelRecord]:
    """
    Every stored entry as a record, keyed by id.

    Args:
        db: Database session
        exclude_id: Leave this entry out (used when re-validating an edit)
    """
    return {
        entry.id: entry.to_record()
        for entry in db.query(RefuelEntry).all()
        if entry.id != exclude_id
    }


def parse_entry_id(entry_id: str) -> uuid.UUID:
    """Parse a path/id string into a UUID, raising EntryNotFoundError if malformed."""
    try:
        return uuid.UUID(str(entry_id))
    except (ValueError, TypeError):
        raise EntryNotFoundError('Refuel entry not found', entry_id=str(entry_id))


def get_entry(db: Session, entry_id: str) -> RefuelEntry:
    """
    Load a single entry.

    Raises:
        EntryNotFoundError: If no entry has this id
    """
    parsed_id = parse_entry_id(entry_id)
    entry = db.query(RefuelEntry).filter(RefuelEntry.id == parsed_id).first()
    if entry is None:
        logger.info(str(StructuredError(ErrorCode.E400_ENTRY_NOT_FOUND, f"No refuel entry {parsed_id}")))
        raise EntryNotFoundError('Refuel entry not found', entry_id=str(entry_id))
    return entry


def _submission_values(data: Dict[str, Any], entry: Optional[RefuelEntry] = None) -> Dict[str, Any]:
    """Map request fields onto core names, falling back to the stored values on edit."""
    values = {}
    for request_field, core_field in SUBMISSION_FIELDS.items():
        if request_field in data:
            values[core_field] = data[request_field]
        elif entry is not None:
            values[core_field] = getattr(entry, request_field)
        else:
            values[core_field] = None
    return values


def _parse_entry_date(data: Dict[str, Any], default: datetime) -> datetime:
    """Parse the submitted date; a missing date means "now" (or unchanged on edit)."""
    raw = data.get('date')
    if raw in (None, ''):
        return default

    parsed = parse_datetime(raw) if isinstance(raw, str) else None
    if parsed is None:
        raise EntryValidationError('Validation failed', errors=[{
            'code': ErrorCode.E301_INVALID_TIMESTAMP.value,
            'field': 'date',
            'message': 'Invalid date value',
        }])
    return parsed


def _enforce_admission(result: ValidationResult, confirmed: bool, entry_id: Optional[str] = None):
    """Raise for rejected input, or for warnings the user has not confirmed."""
    errors = [issue.to_dict() for issue in result.errors]
    warnings = [issue.to_dict() for issue in result.warnings]

    if result.is_rejected:
        log_entry_event(entry_id, 'rejected', False, error='validation failed', errors=errors)
        raise EntryValidationError('Validation failed', errors=errors)

    if not result.can_admit(confirmed):
        for issue in result.warnings:
            logger.warning(f"Entry needs confirmation: [{issue.code.value}] {issue.message}")
        raise ConfirmationRequiredError('Confirmation required', warnings=warnings)


def create_entry(
    db: Session,
    data: Dict[str, Any],
    settings: AppSettings,
    confirmed: bool = False
) -> Tuple[RefuelEntry, ValidationResult]:
    """
    Validate and store a new refuel entry.

    Args:
        db: Database session
        data: Request body (date, mileage, liters, price_per_liter)
        settings: Unit and currency context for warning messages
        confirmed: User confirmed past any soft warnings

    Returns:
        (entry, validation result)

    Raises:
        EntryValidationError: Hard rejection
        ConfirmationRequiredError: Soft warnings without confirmation
    """
    date = _parse_entry_date(data, default=utc_now())
    result = validate_submission(_submission_values(data), fetch_records(db), settings)
    _enforce_admission(result, confirmed)

    entry = RefuelEntry(
        id=uuid.uuid4(),
        date=date,
        mileage=result.values['odometer'],
        liters=result.values['volume'],
        price_per_liter=result.values['unit_price'],
    )
    db.add(entry)
    db.commit()

    log_entry_event(
        str(entry.id), 'created', True,
        mileage=entry.mileage, liters=entry.liters, price_per_liter=entry.price_per_liter,
        warnings=[issue.code.value for issue in result.warnings],
        warning_overridden=bool(result.warnings),
    )
    return entry, result


def update_entry(
    db: Session,
    entry_id: str,
    data: Dict[str, Any],
    settings: AppSettings,
    confirmed: bool = False
) -> Tuple[RefuelEntry, ValidationResult]:
    """
    Validate and apply an edit. Every field is replaceable.

    The chronology warning is not applied to edits; a regression introduced
    by an edit shows up as an invalid segment in the aggregates.
    """
    entry = get_entry(db, entry_id)
    date = _parse_entry_date(data, default=entry.date)

    result = validate_submission(
        _submission_values(data, entry),
        fetch_records(db, exclude_id=entry.id),
        settings,
        check_chronology=False,
    )
    _enforce_admission(result, confirmed, entry_id=str(entry.id))

    entry.date = date
    entry.mileage = result.values['odometer']
    entry.liters = result.values['volume']
    entry.price_per_liter = result.values['unit_price']
    db.commit()

    logger.info(f"Updated refuel entry {entry.id}")
    log_entry_event(str(entry.id), 'updated', True, fields=sorted(data.keys()))
    return entry, result


def delete_entry(db: Session, entry_id: str) -> None:
    """Delete one entry, raising EntryNotFoundError if it does not exist."""
    entry = get_entry(db, entry_id)
    db.delete(entry)
    db.commit()

    logger.info(f"Deleted refuel entry {entry_id}")
    log_entry_event(str(entry_id), 'deleted', True)


def delete_all_entries(db: Session) -> int:
    """Delete every refuel entry. Returns the number removed."""
    count = db.query(RefuelEntry).delete()
    db.commit()

    logger.info(f"Deleted all {count} refuel entries")
    log_entry_event(None, 'all_deleted', True, deleted=count)
    return count


def fetch_vehicle_info(db: Session) -> Optional[VehicleInfo]:
    """The stored vehicle, or None if it was never entered."""
    return db.query(VehicleInfo).first()


def validate_vehicle_data(data: Dict[str, Any]) -> Tuple[bool, List[dict]]:
    """
    Validate vehicle info.

    Returns (is_valid, errors) tuple.
    """
    errors = []
    current_year = utc_now().year

    for field in ('brand', 'model'):
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            errors.append({
                'code': ErrorCode.E006_INVALID_VEHICLE.value,
                'field': field,
                'message': f'{field} is required',
            })

    year = data.get('year')
    if isinstance(year, bool) or not isinstance(year, int) or not (MIN_VEHICLE_YEAR < year <= current_year + 1):
        errors.append({
            'code': ErrorCode.E006_INVALID_VEHICLE.value,
            'field': 'year',
            'message': f'year must be between {MIN_VEHICLE_YEAR + 1} and {current_year + 1}',
        })

    if data.get('tank_capacity') not in (None, ''):
        capacity = parse_number(data.get('tank_capacity'))
        if capacity is None or capacity < 0:
            errors.append({
                'code': ErrorCode.E006_INVALID_VEHICLE.value,
                'field': 'tank_capacity',
                'message': 'tank_capacity must be a non-negative number',
            })

    return len(errors) == 0, errors


def save_vehicle_info(db: Session, data: Dict[str, Any]) -> VehicleInfo:
    """
    Create or replace the vehicle info.

    Raises:
        EntryValidationError: If the vehicle data is invalid
    """
    is_valid, errors = validate_vehicle_data(data)
    if not is_valid:
        raise EntryValidationError('Invalid vehicle information', errors=errors)

    vehicle = fetch_vehicle_info(db)
    if vehicle is None:
        vehicle = VehicleInfo()
        db.add(vehicle)

    vehicle.brand = data['brand'].strip()
    vehicle.model = data['model'].strip()
    vehicle.year = data['year']
    vehicle.tank_capacity = parse_number(data.get('tank_capacity')) or 0.0
    db.commit()

    logger.info(f"Saved vehicle info: {vehicle.display_name}")
    return vehicle
