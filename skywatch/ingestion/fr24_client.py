"""
Flightradar24 live API client.

Handles communication with the FR24 REST API:
- Bearer-token authentication
- Bounding box queries against live/flight-positions/full
- Flight track queries for trails
- Conversion of network and HTTP errors into UpstreamUnavailable

Responses are returned as decoded JSON without reshaping; normalization
happens in skywatch.models.flight.
"""

import logging
from typing import Any, Optional

import requests

from skywatch.config import config
from skywatch.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class FlightRadarClient:
    """
    Client for the Flightradar24 live API.

    Handles:
    - GET /live/flight-positions/full?bounds=north,south,west,east
    - GET /flight-tracks?flight_id=...
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or config.flightradar.base_url).rstrip('/')
        self.timeout = timeout or config.flightradar.timeout_seconds
        self.session = session or requests.Session()

        if not self.api_key:
            logger.warning('FR24 client created without an API key')

    @classmethod
    def from_config(cls) -> 'FlightRadarClient':
        """Create client from application configuration."""
        return cls(
            api_key=config.flightradar.api_key,
            base_url=config.flightradar.base_url,
            timeout=config.flightradar.timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> dict:
        return {
            'Accept': 'application/json',
            'Accept-Version': 'v1',
            'Authorization': f'Bearer {self.api_key}',
        }

    def _get(self, path: str, params: dict) -> Any:
        url = f'{self.base_url}/{path}'
        logger.debug(f'Fetching {url} params={params}')

        try:
            response = self.session.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error('FR24 API timeout')
            raise UpstreamUnavailable('Upstream API timeout') from None
        except requests.exceptions.RequestException as e:
            logger.error(f'FR24 request failed: {e}')
            raise UpstreamUnavailable(f'Upstream request failed: {e}') from e

        if not response.ok:
            if response.status_code == 429:
                logger.warning('FR24 rate limit exceeded')
            else:
                logger.error(f'FR24 API Error: {response.status_code} - {response.text[:200]}')
            raise UpstreamUnavailable(
                f'Upstream API Error: {response.status_code}',
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            logger.error('FR24 API returned invalid JSON')
            raise UpstreamUnavailable('Upstream API returned invalid JSON', status_code=502) from None

    def get_flight_positions(self, bounds: str) -> Any:
        """
        Fetch live flight positions inside a bounding box.

        Args:
            bounds: 'north,south,west,east' string

        Returns:
            Decoded JSON payload (usually {'data': [...]})

        Raises:
            UpstreamUnavailable on network/API errors
        """
        payload = self._get('live/flight-positions/full', {'bounds': bounds})

        if isinstance(payload, dict) and isinstance(payload.get('data'), list):
            logger.info(f'Received {len(payload["data"])} flight positions from FR24')
        return payload

    def get_flight_track(self, flight_id: str) -> Any:
        """Fetch the position history (trail) of one flight."""
        return self._get('flight-tracks', {'flight_id': flight_id})
