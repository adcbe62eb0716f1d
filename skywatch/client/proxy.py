"""
HTTP client for a running SkyWatch server.

The tracker never talks to Flightradar24 or the airport APIs directly:
everything goes through the server's /api routes, which hold the
credentials and the shared airport cache.
"""

import logging
from typing import Any, Optional

import requests

from skywatch.config import config
from skywatch.errors import UpstreamUnavailable
from skywatch.models.airport import AirportInfo

logger = logging.getLogger(__name__)


class ProxyClient:
    """Client for the SkyWatch flight-position proxy and airport service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or config.client.server_url).rstrip('/')
        self.timeout = timeout or config.client.request_timeout_seconds
        self.session = session or requests.Session()

    def _get(self, path: str, params: Optional[dict] = None) -> requests.Response:
        try:
            return self.session.get(
                f'{self.base_url}{path}',
                params=params,
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f'Could not reach SkyWatch server: {e}') from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('error'):
            return str(body['error'])
        return f'API Error: {response.status_code}'

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            raise UpstreamUnavailable('Invalid JSON from SkyWatch server') from None

    def get_flights_payload(self, bounds: str) -> Any:
        """Raw flight-positions payload for a bounds string."""
        response = self._get('/api/flights', params={'bounds': bounds})
        if not response.ok:
            raise UpstreamUnavailable(self._error_message(response), status_code=response.status_code)
        return self._json(response)

    def get_airport(self, code: str) -> Optional[AirportInfo]:
        """Airport info, or None when the server doesn't know the code."""
        response = self._get(f'/api/airport/{code}')
        if response.status_code in (400, 404):
            return None
        if not response.ok:
            raise UpstreamUnavailable(self._error_message(response), status_code=response.status_code)
        return AirportInfo.from_dict(self._json(response))

    def get_flight_track(self, flight_id: str) -> Any:
        """Raw flight-tracks payload for one flight."""
        response = self._get(f'/api/flights/{flight_id}/track')
        if not response.ok:
            raise UpstreamUnavailable(self._error_message(response), status_code=response.status_code)
        return self._json(response)

    def get_location_name(self, lat: float, lon: float) -> Optional[str]:
        """Place name via the server's reverse geocoder."""
        response = self._get('/api/location/reverse', params={'lat': lat, 'lon': lon})
        if not response.ok:
            raise UpstreamUnavailable(self._error_message(response), status_code=response.status_code)
        body = self._json(response)
        return body.get('name') if isinstance(body, dict) else None
