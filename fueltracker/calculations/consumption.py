"""
Consumption Calculations

Per-segment fuel economy from two odometer readings:
- Metric: liters per 100 distance units (lower is better)
- Imperial: distance units per US gallon (higher is better)
- Cost per distance unit

All functions return the UNDEFINED sentinel (0.0) instead of raising when the
inputs do not describe a computable segment.
"""

from .constants import CONSUMPTION_DISTANCE_BASIS, GALLONS_PER_LITER, UNDEFINED


def calculate_distance(current_odometer: float, previous_odometer: float) -> float:
    """
    Distance between two odometer readings, or 0.0 if it does not increase.

    Examples:
        >>> calculate_distance(15000, 14700)
        300
        >>> calculate_distance(14700, 15000)
        0.0
    """
    if current_odometer <= previous_odometer:
        return UNDEFINED
    return current_odometer - previous_odometer


def calculate_consumption(
    current_odometer: float,
    previous_odometer: float,
    volume: float,
    is_metric: bool
) -> float:
    """
    Calculate fuel consumption for the segment ending at current_odometer.

    Args:
        current_odometer: Odometer at the later refuel
        previous_odometer: Odometer at the earlier refuel
        volume: Liters added at the later refuel
        is_metric: True for L/100km, False for MPG

    Returns:
        Consumption figure, or 0.0 if the odometer did not increase or the
        volume is not positive

    Examples:
        >>> calculate_consumption(15000, 14700, 30, True)
        10.0
        >>> calculate_consumption(14700, 14700, 30, True)
        0.0
    """
    if current_odometer <= previous_odometer or volume <= 0:
        return UNDEFINED

    distance = current_odometer - previous_odometer

    if is_metric:
        return (volume / distance) * CONSUMPTION_DISTANCE_BASIS

    gallons = volume * GALLONS_PER_LITER
    return distance / gallons


def calculate_cost_per_distance(
    total_cost: float,
    distance: float,
    is_metric: bool = True
) -> float:
    """
    Calculate cost per km (metric) or per mile (imperial).

    The formula is the same in both systems; is_metric only documents which
    unit the result is in.

    Examples:
        >>> calculate_cost_per_distance(45.0, 300.0)
        0.15
        >>> calculate_cost_per_distance(45.0, 0.0)
        0.0
    """
    if distance <= 0:
        return UNDEFINED
    return total_cost / distance
