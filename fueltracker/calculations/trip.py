"""
Trip Cost Estimation

Projects fuel need and cost for a hypothetical trip from a distance and an
assumed consumption rate.
"""

from dataclasses import dataclass

from .constants import CONSUMPTION_DISTANCE_BASIS, DEFAULT_PRICE_PER_LITER, LITERS_PER_GALLON
from .records import RecordCollection, as_record_list


@dataclass(frozen=True)
class TripEstimate:
    """Fuel needed (liters) and its cost."""

    fuel_needed: float = 0.0
    cost: float = 0.0


def average_price_for_trip(records: RecordCollection, default: float = DEFAULT_PRICE_PER_LITER) -> float:
    """
    Average historical price per liter, or the default when there is no history.

    Examples:
        >>> average_price_for_trip([])
        1.5
    """
    record_list = as_record_list(records)
    if not record_list:
        return default
    return sum(r.unit_price for r in record_list) / len(record_list)


def estimate_trip(
    distance: float,
    assumed_consumption: float,
    avg_price_per_liter: float,
    is_metric: bool
) -> TripEstimate:
    """
    Estimate the fuel and cost of a trip.

    Args:
        distance: Trip length in km (metric) or miles (imperial)
        assumed_consumption: L/100km (metric) or MPG (imperial)
        avg_price_per_liter: Price used for the cost projection
        is_metric: Unit system of distance and consumption

    Returns:
        TripEstimate in liters; zeros if distance or consumption is not positive

    Examples:
        >>> estimate_trip(500, 6.0, 2.0, True)
        TripEstimate(fuel_needed=30.0, cost=60.0)
        >>> estimate_trip(0, 6.0, 2.0, True)
        TripEstimate(fuel_needed=0.0, cost=0.0)
    """
    if distance <= 0 or assumed_consumption <= 0:
        return TripEstimate()

    if is_metric:
        fuel_needed = (distance / CONSUMPTION_DISTANCE_BASIS) * assumed_consumption
    else:
        gallons = distance / assumed_consumption
        fuel_needed = gallons * LITERS_PER_GALLON

    return TripEstimate(fuel_needed=fuel_needed, cost=fuel_needed * avg_price_per_liter)
