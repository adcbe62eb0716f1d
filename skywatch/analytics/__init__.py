"""
Geodesic calculations for SkyWatch.

Provides:
- Great-circle (haversine) distance
- Route progress percentage between two airports
- Travel-time estimates for the detail view
"""

from skywatch.analytics.geodesy import (
    DEFAULT_PROGRESS_PERCENT,
    estimate_travel_time,
    great_circle_distance_km,
    is_valid_coordinate,
    route_progress_percent,
)

__all__ = [
    'DEFAULT_PROGRESS_PERCENT',
    'estimate_travel_time',
    'great_circle_distance_km',
    'is_valid_coordinate',
    'route_progress_percent',
]
