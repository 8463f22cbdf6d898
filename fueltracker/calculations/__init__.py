"""
Fuel Tracker Calculation Module

Pure analytics core: unit conversion, per-segment consumption, record
ordering, aggregate statistics, trip cost estimation and input validation.

Every function is a deterministic transformation of its arguments. Unit and
currency context is always passed in explicitly; nothing here reads settings
or touches the database. Figures that cannot be computed come back as 0.0 or
an empty list rather than raising.

Usage:
    from fueltracker.calculations import summarize, AppSettings
    from fueltracker.calculations.constants import GALLONS_PER_LITER
"""

# Value types
from .records import (
    AppSettings,
    RefuelRecord,
    ThemeMode,
    as_record_list,
)

# Unit conversion and formatting
from .units import (
    currency_symbol,
    format_consumption,
    format_currency,
    format_distance,
    format_volume,
    gallons_to_liters,
    liters_to_gallons,
)

# Consumption
from .consumption import (
    calculate_consumption,
    calculate_cost_per_distance,
    calculate_distance,
)

# Ordering
from .ordering import (
    Segment,
    build_segments,
    consumption_for_record,
    latest_by_date,
    order_by_date,
    order_by_odometer,
    previous_by_date,
    valid_segments,
)

# Aggregates
from .statistics import (
    FuelSummary,
    calculate_average_consumption,
    calculate_average_price,
    calculate_best_consumption,
    calculate_consumption_trend,
    calculate_highest_odometer,
    calculate_monthly_spending,
    calculate_overall_cost_per_distance,
    calculate_price_trend,
    calculate_total_distance,
    calculate_total_spent,
    calculate_total_volume,
    calculate_worst_consumption,
    summarize,
)

# Trip estimation
from .trip import (
    TripEstimate,
    average_price_for_trip,
    estimate_trip,
)

# Validation
from .validation import (
    ValidationIssue,
    ValidationResult,
    last_odometer_by_date,
    parse_number,
    validate_refuel_input,
    validate_submission,
)

# Constants (re-export for convenience)
from .constants import (
    DEFAULT_PRICE_PER_LITER,
    GALLONS_PER_LITER,
    LITERS_PER_GALLON,
    MAX_ODOMETER,
    MAX_PRICE_PER_LITER,
    MAX_VOLUME_LITERS,
    UNDEFINED,
)

__all__ = [
    # Records
    "AppSettings",
    "RefuelRecord",
    "ThemeMode",
    "as_record_list",
    # Units
    "liters_to_gallons",
    "gallons_to_liters",
    "format_volume",
    "format_distance",
    "format_consumption",
    "format_currency",
    "currency_symbol",
    # Consumption
    "calculate_distance",
    "calculate_consumption",
    "calculate_cost_per_distance",
    # Ordering
    "Segment",
    "order_by_odometer",
    "order_by_date",
    "build_segments",
    "valid_segments",
    "latest_by_date",
    "previous_by_date",
    "consumption_for_record",
    # Aggregates
    "FuelSummary",
    "summarize",
    "calculate_total_distance",
    "calculate_total_spent",
    "calculate_total_volume",
    "calculate_average_consumption",
    "calculate_best_consumption",
    "calculate_worst_consumption",
    "calculate_average_price",
    "calculate_overall_cost_per_distance",
    "calculate_highest_odometer",
    "calculate_monthly_spending",
    "calculate_price_trend",
    "calculate_consumption_trend",
    # Trip
    "TripEstimate",
    "estimate_trip",
    "average_price_for_trip",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "parse_number",
    "validate_refuel_input",
    "validate_submission",
    "last_odometer_by_date",
    # Constants
    "GALLONS_PER_LITER",
    "LITERS_PER_GALLON",
    "DEFAULT_PRICE_PER_LITER",
    "MAX_VOLUME_LITERS",
    "MAX_PRICE_PER_LITER",
    "MAX_ODOMETER",
    "UNDEFINED",
]
