"""
Location services - where is the user, and what is the place called.

- Reverse geocoding via Nominatim (OpenStreetMap) for a human-readable name
- IP-based location detection via the geocoder library

Both are best effort: failures fall back to defaults instead of raising.
"""

import logging
from typing import Optional, Tuple

import geocoder
import requests

from skywatch.config import config

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_NAME = 'Your Location'

# Nominatim address fields, most specific first
PLACE_NAME_FIELDS = ('city', 'town', 'village', 'suburb', 'municipality', 'county')


def place_name_from_address(address: Optional[dict]) -> str:
    """Pick the best place name from a Nominatim address block."""
    if isinstance(address, dict):
        for field in PLACE_NAME_FIELDS:
            value = address.get(field)
            if value:
                return value
    return DEFAULT_LOCATION_NAME


class ReverseGeocoder:
    """Resolves coordinates to a place name using Nominatim."""

    def __init__(
        self,
        url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = url or config.geocoding.reverse_url
        self.user_agent = user_agent or config.geocoding.user_agent
        self.timeout = timeout or config.geocoding.timeout_seconds
        self.session = session or requests.Session()

    def location_name(self, lat: float, lon: float) -> str:
        """Best-effort place name; returns the default on any failure."""
        try:
            response = self.session.get(
                self.url,
                params={'format': 'json', 'lat': lat, 'lon': lon, 'zoom': 10},
                headers={'User-Agent': self.user_agent, 'Accept': 'application/json'},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f'Failed to get location name for ({lat:.4f}, {lon:.4f}): {e}')
            return DEFAULT_LOCATION_NAME

        if not isinstance(data, dict):
            return DEFAULT_LOCATION_NAME
        return place_name_from_address(data.get('address'))


def detect_location() -> Optional[Tuple[float, float]]:
    """
    Approximate the user's location from their public IP.

    Returns (lat, lon) or None when detection fails.
    """
    try:
        g = geocoder.ip('me')
    except Exception as e:
        logger.warning(f'Location auto-detect failed: {e}')
        return None

    if not g.ok or not g.latlng:
        logger.warning('Could not determine location from IP')
        return None

    lat, lon = g.latlng
    logger.info(f'Auto-detected location: ({lat}, {lon}) in {g.city}, {g.country}')
    return (float(lat), float(lon))
