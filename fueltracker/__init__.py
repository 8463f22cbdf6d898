"""
Fuel Tracker

Personal refuel log: records refuel events (date, odometer, volume, price)
and derives consumption, cost and trend statistics.
"""

__version__ = "1.0.0"
