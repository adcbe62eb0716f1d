"""
Airport information service - resolves IATA codes to coordinates and cities.

Lookup tiers, in order:
1. Live airport APIs (airportsapi.com, API Ninjas when a key is configured),
   queried concurrently; the first non-empty answer wins
2. The bundled coordinate table
3. Not found

Every resolution, including "not found", is cached for 24 hours so a
failing code isn't looked up again on each request.
"""

import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import requests

from skywatch.config import config
from skywatch.errors import InvalidAirportCode
from skywatch.models.airport import AirportInfo
from skywatch.services.reference_data import lookup_local_airport

logger = logging.getLogger(__name__)


def _first_value(data: dict, *keys: str, default=''):
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return default


def _to_coordinate(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


class AirportsApiProvider:
    """airportsapi.com - free, no key required."""

    name = 'airportsapi'

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url or config.airports.airportsapi_url
        self.timeout = timeout or config.airports.request_timeout_seconds
        self.session = session or requests.Session()

    def lookup(self, code: str) -> Optional[AirportInfo]:
        try:
            response = self.session.get(
                f'{self.base_url}/{code}',
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
            )
            if response.status_code != 200:
                logger.debug(f'airportsapi returned {response.status_code} for {code}')
                return None
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.info(f'airportsapi.com failed for {code}: {e}')
            return None

        if not isinstance(data, dict):
            return None

        return AirportInfo(
            iata=code,
            name=_first_value(data, 'name', 'airport_name'),
            city=_first_value(data, 'city', 'municipality'),
            country=_first_value(data, 'country', 'country_code'),
            lat=_to_coordinate(_first_value(data, 'latitude', 'lat', default=0)),
            lon=_to_coordinate(_first_value(data, 'longitude', 'lon', default=0)),
        )


class ApiNinjasProvider:
    """API Ninjas airports endpoint - requires an API key."""

    name = 'api-ninjas'

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or config.airports.api_ninjas_url
        self.timeout = timeout or config.airports.request_timeout_seconds
        self.session = session or requests.Session()

    def lookup(self, code: str) -> Optional[AirportInfo]:
        try:
            response = self.session.get(
                self.base_url,
                params={'iata': code},
                headers={'Accept': 'application/json', 'X-Api-Key': self.api_key},
                timeout=self.timeout,
            )
            if response.status_code != 200:
                logger.debug(f'API Ninjas returned {response.status_code} for {code}')
                return None
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.info(f'API Ninjas failed for {code}: {e}')
            return None

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            return None

        airport = data[0]
        return AirportInfo(
            iata=code,
            name=airport.get('name') or '',
            city=airport.get('city') or '',
            country=airport.get('country') or '',
            lat=_to_coordinate(airport.get('latitude')),
            lon=_to_coordinate(airport.get('longitude')),
        )


def default_providers() -> List:
    """Providers enabled by the current configuration."""
    providers = [AirportsApiProvider()]
    if config.airports.api_ninjas_key:
        providers.append(ApiNinjasProvider(config.airports.api_ninjas_key))
    return providers


class AirportResolver:
    """
    Resolves IATA codes to AirportInfo with a shared TTL cache.

    One instance is owned by the web application and shared by its
    request threads.
    """

    def __init__(
        self,
        providers: Optional[Sequence] = None,
        local_lookup: Callable[[str], Optional[AirportInfo]] = lookup_local_airport,
        ttl_ms: Optional[int] = None,
        max_entries: Optional[int] = None,
        executor: Optional[Executor] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.providers = list(providers) if providers is not None else default_providers()
        self._local_lookup = local_lookup
        self.ttl_seconds = (ttl_ms if ttl_ms is not None else config.airports.cache_ttl_ms) / 1000
        self.max_entries = max_entries or config.airports.max_server_entries
        # Only an executor created here is shut down by close()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix='airport-lookup'
        )
        self._clock = clock

        # Cache: code -> (AirportInfo or None, timestamp)
        self._cache: Dict[str, Tuple[Optional[AirportInfo], float]] = {}
        self._lock = threading.RLock()

        self._hits = 0
        self._misses = 0

    @staticmethod
    def normalize_code(code: Optional[str]) -> str:
        """Uppercase a code, raising InvalidAirportCode unless it is 3 letters."""
        if not code or len(code) != 3 or not code.isalpha():
            raise InvalidAirportCode('Valid IATA code required (3 letters)')
        return code.upper()

    def resolve(self, code: str) -> Optional[AirportInfo]:
        """
        Get airport information for an IATA code.

        Returns None when no tier knows the code.
        """
        code = self.normalize_code(code)

        found, cached = self._get_cached(code)
        if found:
            logger.debug(f'Airport cache hit for {code}')
            return cached

        info = self._lookup_providers(code)
        if info is None:
            info = self._local_lookup(code)
            if info:
                logger.debug(f'Airport {code} resolved from local table')

        if info is None:
            logger.info(f'Airport {code} not found')

        # Cache result (even if None, to avoid repeated failed lookups)
        self._set_cached(code, info)
        return info

    def _lookup_providers(self, code: str) -> Optional[AirportInfo]:
        """Query all providers concurrently; first non-empty answer wins."""
        if not self.providers:
            return None

        futures = [self._executor.submit(provider.lookup, code) for provider in self.providers]
        try:
            for future in as_completed(futures):
                try:
                    result = future.result()
                except Exception as e:
                    logger.error(f'Airport provider error for {code}: {e}')
                    continue
                if result is not None:
                    return result
        finally:
            # Losers still running finish in the background; their results are ignored
            for future in futures:
                future.cancel()

        return None

    def _get_cached(self, code: str) -> Tuple[bool, Optional[AirportInfo]]:
        """Get cached result if not expired. Returns (found, info)."""
        with self._lock:
            if code in self._cache:
                info, timestamp = self._cache[code]
                if self._clock() - timestamp < self.ttl_seconds:
                    self._hits += 1
                    return True, info
                del self._cache[code]
            self._misses += 1
        return False, None

    def _set_cached(self, code: str, info: Optional[AirportInfo]) -> None:
        with self._lock:
            self._cache.pop(code, None)
            self._cache[code] = (info, self._clock())

            # Limit cache size, oldest inserted first
            while len(self._cache) > self.max_entries:
                del self._cache[next(iter(self._cache))]

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def close(self) -> None:
        """Shut down the provider pool if this resolver created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    @property
    def stats(self) -> dict:
        with self._lock:
            return {
                'cache_size': len(self._cache),
                'hits': self._hits,
                'misses': self._misses,
                'providers': [getattr(p, 'name', type(p).__name__) for p in self.providers],
            }
