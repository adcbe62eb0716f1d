"""
External integration services.

Handles third-party lookups with caching and graceful degradation
when services are unavailable.
"""

from skywatch.services.airport_info import AirportResolver
from skywatch.services.geocoding import ReverseGeocoder, detect_location

__all__ = ['AirportResolver', 'ReverseGeocoder', 'detect_location']
