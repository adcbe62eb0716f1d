"""
API module for SkyWatch.

Provides REST endpoints for:
- Live flight positions and tracks (upstream proxy)
- Airport lookups
- Location naming and detection
"""

from skywatch.api.airports import airports_bp
from skywatch.api.flights import flights_bp
from skywatch.api.location import location_bp

__all__ = ['airports_bp', 'flights_bp', 'location_bp']
