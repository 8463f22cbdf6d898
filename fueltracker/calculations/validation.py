"""
Refuel Input Validation

Applied when a record is submitted, before it is stored:

- Errors (rejected): a primary field is missing, non-numeric or not positive
- Warnings (questionable): unusually large volume, price or odometer, or an
  odometer that does not exceed the chronologically last record. A record
  with warnings is admitted only when the user confirms it.

Nothing is auto-corrected. A confirmed odometer regression simply produces an
invalid segment, which the aggregates skip.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fueltracker.utils.error_codes import ErrorCode

from .constants import MAX_ODOMETER, MAX_PRICE_PER_LITER, MAX_VOLUME_LITERS
from .ordering import latest_by_date
from .records import AppSettings, RecordCollection
from .units import format_currency, format_distance

PRIMARY_FIELDS = {
    "odometer": "mileage",
    "volume": "liters",
    "unit_price": "price",
}


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in a submission."""

    code: ErrorCode
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code.value, "field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of validating one submission."""

    values: Dict[str, float] = field(default_factory=dict)
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_rejected(self) -> bool:
        return bool(self.errors)

    @property
    def requires_confirmation(self) -> bool:
        return not self.errors and bool(self.warnings)

    def can_admit(self, confirmed: bool = False) -> bool:
        """Admission rule: no errors, and warnings only with confirmation."""
        if self.errors:
            return False
        return confirmed or not self.warnings


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a submitted numeric field.

    Returns:
        The float value, or None if missing, non-numeric or not finite

    Examples:
        >>> parse_number("42.5")
        42.5
        >>> parse_number("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(number):
        return None
    return number


def last_odometer_by_date(records: RecordCollection) -> Optional[float]:
    """Odometer of the chronologically last record, or None without records."""
    latest = latest_by_date(records)
    return latest.odometer if latest is not None else None


def validate_refuel_input(
    odometer: Any,
    volume: Any,
    unit_price: Any,
    last_odometer: Optional[float] = None,
    settings: Optional[AppSettings] = None
) -> ValidationResult:
    """
    Validate the three primary fields of a refuel submission.

    Args:
        odometer: Submitted odometer reading
        volume: Submitted liters
        unit_price: Submitted price per liter
        last_odometer: Odometer of the date-latest existing record, if any
        settings: Unit and currency context for warning messages

    Returns:
        ValidationResult with parsed values, errors and warnings
    """
    settings = settings or AppSettings()
    result = ValidationResult()
    raw = {"odometer": odometer, "volume": volume, "unit_price": unit_price}

    for name, label in PRIMARY_FIELDS.items():
        number = parse_number(raw[name])
        if number is None:
            code = ErrorCode.E002_MISSING_REQUIRED_FIELD if raw[name] in (None, "") else ErrorCode.E003_INVALID_DATA_TYPE
            result.errors.append(ValidationIssue(code, name, f"Invalid {label} value"))
        elif number <= 0:
            result.errors.append(
                ValidationIssue(ErrorCode.E004_NON_POSITIVE_VALUE, name, f"The {label} must be greater than 0")
            )
        else:
            result.values[name] = number

    if result.errors:
        return result

    odometer_value = result.values["odometer"]
    volume_value = result.values["volume"]
    price_value = result.values["unit_price"]

    if volume_value > MAX_VOLUME_LITERS:
        result.warnings.append(ValidationIssue(
            ErrorCode.W001_VOLUME_UNUSUALLY_HIGH,
            "volume",
            f"The fuel amount ({volume_value:.2f} L) seems unusually high. "
            "Please verify the value is correct.",
        ))

    if price_value > MAX_PRICE_PER_LITER:
        result.warnings.append(ValidationIssue(
            ErrorCode.W002_PRICE_UNUSUALLY_HIGH,
            "unit_price",
            f"The price per liter ({format_currency(price_value, settings.currency)}) seems unusually high. "
            "Please verify the value is correct.",
        ))

    if odometer_value > MAX_ODOMETER:
        result.warnings.append(ValidationIssue(
            ErrorCode.W003_ODOMETER_UNUSUALLY_HIGH,
            "odometer",
            f"The mileage ({format_distance(odometer_value, settings.is_metric)}) seems unusually high. "
            "Please verify the value is correct.",
        ))

    if last_odometer is not None and odometer_value <= last_odometer:
        result.warnings.append(ValidationIssue(
            ErrorCode.W004_ODOMETER_NOT_INCREASING,
            "odometer",
            f"Mileage should be higher than the last entry ({last_odometer:.1f}). "
            f"Current: {odometer_value:.1f}. "
            "Distance and consumption calculations may not work correctly.",
        ))

    return result


def validate_submission(
    data: Dict[str, Any],
    existing_records: RecordCollection,
    settings: Optional[AppSettings] = None,
    check_chronology: bool = True
) -> ValidationResult:
    """
    Validate a submission against the records already stored.

    Args:
        data: Submitted fields (odometer, volume, unit_price)
        existing_records: Records already admitted
        settings: Unit and currency context for messages
        check_chronology: False when editing an existing record

    Returns:
        ValidationResult
    """
    last_odometer = last_odometer_by_date(existing_records) if check_chronology else None
    return validate_refuel_input(
        data.get("odometer"),
        data.get("volume"),
        data.get("unit_price"),
        last_odometer=last_odometer,
        settings=settings,
    )
