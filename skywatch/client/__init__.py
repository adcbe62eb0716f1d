"""
Tracker client.

Talks to a running SkyWatch server and keeps per-user state:
- ProxyClient: HTTP access to the server's /api routes
- AirportInfoClient: de-duplicating, size-capped airport cache
- TrailTracker: cancellable trail loading for the selected flight
- TrackerSession: location, polling, selection and display views
"""

from skywatch.client.airports import AirportInfoClient
from skywatch.client.proxy import ProxyClient
from skywatch.client.session import (
    DEFAULT_LOCATION,
    DEFAULT_LOCATION_LABEL,
    FlightView,
    TrackerSession,
)
from skywatch.client.trail import CancellationToken, TrailPoint, TrailTracker, parse_track_payload

__all__ = [
    'AirportInfoClient',
    'CancellationToken',
    'DEFAULT_LOCATION',
    'DEFAULT_LOCATION_LABEL',
    'FlightView',
    'ProxyClient',
    'TrackerSession',
    'TrailPoint',
    'TrailTracker',
    'parse_track_payload',
]
