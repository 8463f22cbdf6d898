"""
Custom exceptions for Fuel Tracker.

The analytics core never raises for expected edge cases; these exceptions
belong to the collaborators around it (persistence, HTTP, export) and give
the error handlers in ``app.py`` enough context to build a JSON response.
"""


class FuelTrackerError(Exception):
    """Base exception for all Fuel Tracker errors."""

    status_code = 500

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class DatabaseError(FuelTrackerError):
    """Database operation failed."""

    pass


class EntryNotFoundError(FuelTrackerError):
    """Refuel entry does not exist."""

    status_code = 404

    def __init__(self, message: str, entry_id: str = None):
        details = {}
        if entry_id:
            details['entry_id'] = entry_id
        super().__init__(message, details)
        self.entry_id = entry_id


class EntryValidationError(FuelTrackerError):
    """Submitted entry, vehicle or settings data failed validation."""

    status_code = 400

    def __init__(self, message: str, errors: list = None, warnings: list = None):
        details = {}
        if errors:
            details['errors'] = errors
        if warnings:
            details['warnings'] = warnings
        super().__init__(message, details)
        self.errors = errors or []
        self.warnings = warnings or []


class ConfirmationRequiredError(EntryValidationError):
    """Entry is plausible-but-suspicious and needs explicit confirmation."""

    status_code = 409


class ExportError(FuelTrackerError):
    """Export serialization failed."""

    def __init__(self, message: str, export_format: str = None):
        details = {}
        if export_format:
            details['format'] = export_format
        super().__init__(message, details)
        self.export_format = export_format


class ConfigurationError(FuelTrackerError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, config_key: str = None):
        details = {}
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, details)
        self.config_key = config_key
