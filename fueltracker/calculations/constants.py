"""
Calculation Constants for Fuel Tracker

Centralized location for conversion factors and thresholds used in calculations.
Tunable values are imported from Config to maintain a single source of truth.
"""

from fueltracker.config import Config

# Unit Conversion Constants
GALLONS_PER_LITER = 0.264172  # US gallons in one liter
LITERS_PER_GALLON = 3.78541  # Liters in one US gallon (~1 / GALLONS_PER_LITER)
CONSUMPTION_DISTANCE_BASIS = 100.0  # Metric consumption is per 100 distance units

# Display
DEFAULT_CURRENCY_SYMBOL = "$"
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "RUB": "₽",
}
METRIC_DISTANCE_LABEL = "km"
IMPERIAL_DISTANCE_LABEL = "miles"
METRIC_VOLUME_LABEL = "L"
IMPERIAL_VOLUME_LABEL = "gal"
METRIC_CONSUMPTION_LABEL = "L/100km"
IMPERIAL_CONSUMPTION_LABEL = "MPG"
NOT_AVAILABLE_LABEL = "N/A"

# Sentinel for "not computable" (all real measurements are positive)
UNDEFINED = 0.0

# Trip Estimation
DEFAULT_PRICE_PER_LITER = Config.DEFAULT_PRICE_PER_LITER  # Used when no history exists

# Validation Thresholds (soft warnings)
MAX_VOLUME_LITERS = Config.MAX_VOLUME_LITERS  # Larger fills are suspicious for most vehicles
MAX_PRICE_PER_LITER = Config.MAX_PRICE_PER_LITER  # Currency units per liter
MAX_ODOMETER = Config.MAX_ODOMETER  # km or miles

# Vehicle Validation
MIN_VEHICLE_YEAR = 1900  # Exclusive lower bound
