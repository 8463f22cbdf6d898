"""
Flask extensions for Fuel Tracker.

This module initializes Flask extensions that need to be shared
across the application to avoid circular imports.
"""

import os

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Rate limiting storage (Redis in production, memory for development)
RATE_LIMIT_STORAGE = os.environ.get("RATE_LIMIT_STORAGE_URI", "memory://")

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per hour", "200 per minute"],
    storage_uri=RATE_LIMIT_STORAGE,
    strategy="fixed-window",
    headers_enabled=True,
)


class RateLimits:
    """Common rate limit configurations for different endpoint types."""

    # Read-heavy endpoints (dashboard, statistics, analytics)
    READ_HEAVY = "500 per hour"

    # Write endpoints (POST/PATCH/PUT)
    WRITE_MODERATE = "100 per hour"

    # Exports
    EXPENSIVE = "20 per hour"

    # Deleting every entry
    VERY_EXPENSIVE = "5 per hour"
