"""
Unit Conversions and Display Formatting

Handles metric/imperial presentation:
- Liters <-> US gallons
- Volume, distance, consumption and currency display strings

Distances are never converted: the odometer unit is assumed to match the
user's metric/imperial setting, only the label changes.
"""

from .constants import (
    CURRENCY_SYMBOLS,
    DEFAULT_CURRENCY_SYMBOL,
    GALLONS_PER_LITER,
    IMPERIAL_CONSUMPTION_LABEL,
    IMPERIAL_DISTANCE_LABEL,
    IMPERIAL_VOLUME_LABEL,
    METRIC_CONSUMPTION_LABEL,
    METRIC_DISTANCE_LABEL,
    METRIC_VOLUME_LABEL,
)


def liters_to_gallons(liters: float) -> float:
    """
    Convert liters to US gallons.

    Examples:
        >>> round(liters_to_gallons(10.0), 5)
        2.64172
    """
    return liters * GALLONS_PER_LITER


def gallons_to_liters(gallons: float) -> float:
    """
    Convert US gallons to liters.

    Defined as the exact inverse of liters_to_gallons so round trips are stable.

    Examples:
        >>> round(gallons_to_liters(2.64172), 3)
        10.0
    """
    return gallons / GALLONS_PER_LITER


def format_volume(liters: float, is_metric: bool) -> str:
    """
    Format a stored volume (liters) for display.

    Examples:
        >>> format_volume(40.0, True)
        '40.00 L'
        >>> format_volume(40.0, False)
        '10.57 gal'
    """
    if is_metric:
        return f"{liters:.2f} {METRIC_VOLUME_LABEL}"
    return f"{liters_to_gallons(liters):.2f} {IMPERIAL_VOLUME_LABEL}"


def format_distance(distance: float, is_metric: bool) -> str:
    """
    Format a distance with the unit label of the active system.

    Examples:
        >>> format_distance(300.0, True)
        '300.0 km'
        >>> format_distance(300.0, False)
        '300.0 miles'
    """
    label = METRIC_DISTANCE_LABEL if is_metric else IMPERIAL_DISTANCE_LABEL
    return f"{distance:.1f} {label}"


def format_consumption(consumption: float, is_metric: bool) -> str:
    """
    Format a consumption figure (L/100km for metric, MPG for imperial).

    Examples:
        >>> format_consumption(6.5, True)
        '6.50 L/100km'
    """
    label = METRIC_CONSUMPTION_LABEL if is_metric else IMPERIAL_CONSUMPTION_LABEL
    return f"{consumption:.2f} {label}"


def currency_symbol(code: str) -> str:
    """Resolve a currency code to its symbol, defaulting to '$'."""
    return CURRENCY_SYMBOLS.get(code, DEFAULT_CURRENCY_SYMBOL)


def format_currency(value: float, code: str = "USD") -> str:
    """
    Format a monetary value with the symbol for the currency code.

    Examples:
        >>> format_currency(12.5, "EUR")
        '€12.50'
        >>> format_currency(3.0, "JPY")
        '$3.00'
    """
    return f"{currency_symbol(code)}{value:.2f}"
