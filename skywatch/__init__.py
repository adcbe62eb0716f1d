"""
SkyWatch Package.

Live aircraft tracker built with Flask and requests.

Modules:
    api/         REST endpoints: flights proxy, flight tracks, airports, location
    models/      Flight records, airports and bounding boxes
    ingestion/   Flightradar24 client and mock flight data
    analytics/   Great-circle geodesy and route progress
    services/    Airport resolution, reference tables, reverse geocoding
    client/      Tracker session: query cache, airport cache, trails
    cache.py     Single-slot, rate-limited bounds query cache
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
