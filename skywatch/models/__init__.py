"""
Value objects for SkyWatch.

Flights, airports and bounding boxes are immutable once built. Flights
enter the system only through the normalizer in models.flight.
"""

from skywatch.models.airport import AirportInfo
from skywatch.models.bounds import BoundingBox
from skywatch.models.flight import (
    FIELD_ALIASES,
    Coordinate,
    FlightRecord,
    build_flight_records,
    decode_vertical_speed,
    flight_key,
    is_placeholder,
    is_valid_flight,
    normalize_flight,
    normalize_identifier_field,
    parse_upstream_payload,
    resolve_field,
)

__all__ = [
    'AirportInfo',
    'BoundingBox',
    'FIELD_ALIASES',
    'Coordinate',
    'FlightRecord',
    'build_flight_records',
    'decode_vertical_speed',
    'flight_key',
    'is_placeholder',
    'is_valid_flight',
    'normalize_flight',
    'normalize_identifier_field',
    'parse_upstream_payload',
    'resolve_field',
]
