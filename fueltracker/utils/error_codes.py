"""
Error codes for Fuel Tracker.

Every validation issue, warning and handled failure carries one of these
codes so API clients can react to it without parsing messages.

Ranges:
- E0xx: rejected input (refuel fields, settings, vehicle)
- W0xx: questionable input, admitted once the user confirms
- E2xx: database
- E3xx: request parsing (dates, JSON bodies)
- E4xx: missing entries and export
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Groups codes for logging and alerting."""

    VALIDATION = "validation"
    QUESTIONABLE_INPUT = "questionable_input"
    DATABASE = "database"
    PARSING = "parsing"
    BUSINESS_LOGIC = "business_logic"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Codes returned in the `code` field of API issues."""

    # Rejected input
    E002_MISSING_REQUIRED_FIELD = "E002"
    E003_INVALID_DATA_TYPE = "E003"
    E004_NON_POSITIVE_VALUE = "E004"
    E005_INVALID_SETTING = "E005"
    E006_INVALID_VEHICLE = "E006"

    # Questionable input
    W001_VOLUME_UNUSUALLY_HIGH = "W001"
    W002_PRICE_UNUSUALLY_HIGH = "W002"
    W003_ODOMETER_UNUSUALLY_HIGH = "W003"
    W004_ODOMETER_NOT_INCREASING = "W004"

    # Database
    E203_DB_TRANSACTION_ROLLBACK = "E203"

    # Parsing
    E301_INVALID_TIMESTAMP = "E301"
    E303_JSON_DECODE_ERROR = "E303"

    # Entries and export
    E400_ENTRY_NOT_FOUND = "E400"
    E410_EXPORT_FAILED = "E410"
    E411_UNSUPPORTED_EXPORT_FORMAT = "E411"


def _meta(category: ErrorCategory, description: str, severity: str = "error", alert: bool = False) -> dict:
    return {"category": category, "description": description, "severity": severity, "alert": alert}


ERROR_METADATA = {
    ErrorCode.E002_MISSING_REQUIRED_FIELD: _meta(
        ErrorCategory.VALIDATION, "Mileage, liters or price was not submitted", "warning"),
    ErrorCode.E003_INVALID_DATA_TYPE: _meta(
        ErrorCategory.VALIDATION, "Submitted value is not a finite number", "warning"),
    ErrorCode.E004_NON_POSITIVE_VALUE: _meta(
        ErrorCategory.VALIDATION, "Submitted value must be greater than zero", "warning"),
    ErrorCode.E005_INVALID_SETTING: _meta(
        ErrorCategory.VALIDATION, "Unknown theme mode or malformed currency code", "warning"),
    ErrorCode.E006_INVALID_VEHICLE: _meta(
        ErrorCategory.VALIDATION, "Vehicle brand, model, year or tank capacity is invalid", "warning"),
    ErrorCode.W001_VOLUME_UNUSUALLY_HIGH: _meta(
        ErrorCategory.QUESTIONABLE_INPUT, "Fuel amount seems unusually high", "info"),
    ErrorCode.W002_PRICE_UNUSUALLY_HIGH: _meta(
        ErrorCategory.QUESTIONABLE_INPUT, "Price per liter seems unusually high", "info"),
    ErrorCode.W003_ODOMETER_UNUSUALLY_HIGH: _meta(
        ErrorCategory.QUESTIONABLE_INPUT, "Odometer reading seems unusually high", "info"),
    ErrorCode.W004_ODOMETER_NOT_INCREASING: _meta(
        ErrorCategory.QUESTIONABLE_INPUT, "Odometer does not exceed the latest entry", "info"),
    ErrorCode.E203_DB_TRANSACTION_ROLLBACK: _meta(
        ErrorCategory.DATABASE, "Database statement failed and was rolled back", alert=True),
    ErrorCode.E301_INVALID_TIMESTAMP: _meta(
        ErrorCategory.PARSING, "Date could not be parsed", "warning"),
    ErrorCode.E303_JSON_DECODE_ERROR: _meta(
        ErrorCategory.PARSING, "Request body is not a JSON object", "warning"),
    ErrorCode.E400_ENTRY_NOT_FOUND: _meta(
        ErrorCategory.BUSINESS_LOGIC, "Refuel entry does not exist", "info"),
    ErrorCode.E410_EXPORT_FAILED: _meta(
        ErrorCategory.BUSINESS_LOGIC, "Export could not be serialized", alert=True),
    ErrorCode.E411_UNSUPPORTED_EXPORT_FORMAT: _meta(
        ErrorCategory.BUSINESS_LOGIC, "Export format must be csv or json", "info"),
}

UNKNOWN_ERROR = _meta(ErrorCategory.SYSTEM, "Unknown error", alert=True)


def get_error_metadata(code: ErrorCode) -> dict:
    """Metadata for a code; unknown codes map to a system error."""
    return ERROR_METADATA.get(code, UNKNOWN_ERROR)


def is_warning(code: ErrorCode) -> bool:
    """True for questionable-input codes that a user may confirm past."""
    return get_error_metadata(code)["category"] == ErrorCategory.QUESTIONABLE_INPUT


class StructuredError:
    """
    A coded error with context, for log lines and JSON details.

    Usage:
        error = StructuredError(ErrorCode.E410_EXPORT_FAILED, "JSON export failed", exception=e)
        logger.error(str(error))
    """

    def __init__(self, code: ErrorCode, message: str, exception: Optional[Exception] = None, **context):
        self.code = code
        self.message = message
        self.exception = exception
        self.context = context
        self.metadata = get_error_metadata(code)

    def to_dict(self) -> dict:
        result = {
            "code": self.code.value,
            "message": self.message,
            **{key: value for key, value in self.metadata.items() if key != "description"},
        }
        result["category"] = self.metadata["category"].value

        if self.exception is not None:
            result["exception_type"] = type(self.exception).__name__
            result["exception_message"] = str(self.exception)
        if self.context:
            result["context"] = dict(self.context)
        return result

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
