"""
Error types shared across SkyWatch.

Only conditions a caller has to react to are exceptions. Rejected flight
records, malformed payloads and self-imposed throttling are ordinary
outcomes and never raise.
"""

from typing import Optional


class SkywatchError(Exception):
    """Base class for SkyWatch errors."""


class UpstreamUnavailable(SkywatchError):
    """
    An external service could not be reached or answered with an error.

    Raised for network failures, non-2xx responses and bodies that are not
    valid JSON. `status_code` is the upstream HTTP status when one was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidAirportCode(SkywatchError, ValueError):
    """Airport code is not a 3-letter IATA code."""


class InvalidBounds(SkywatchError, ValueError):
    """Bounding box string is not four comma-separated coordinates."""
