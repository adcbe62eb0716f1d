"""
Configuration management for SkyWatch.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _parse_location(value: str) -> Optional[Tuple[float, float]]:
    """Parse 'lat,lon' string into tuple, or None if empty/invalid."""
    if not value:
        return None
    try:
        lat, lon = value.split(',')
        return (float(lat.strip()), float(lon.strip()))
    except (ValueError, AttributeError):
        return None


def _parse_bool(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class FlightRadarConfig:
    """Flightradar24 live API configuration."""
    api_key: Optional[str] = os.getenv('FR24_API_KEY') or None
    base_url: str = os.getenv('FR24_BASE_URL', 'https://fr24api.flightradar24.com/api')
    timeout_seconds: float = float(os.getenv('FR24_TIMEOUT_SECONDS', '15'))

    # Serve synthetic flights instead of a 503 when no API key is set
    use_mock_data: bool = _parse_bool(os.getenv('FLIGHTS_MOCK_MODE', 'false'))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class QueryCacheConfig:
    """Bounding-box query cache and rate limiter settings."""
    cache_duration_ms: int = int(os.getenv('CACHE_DURATION_MS', '15000'))
    min_request_interval_ms: int = int(os.getenv('MIN_REQUEST_INTERVAL_MS', '10000'))


@dataclass(frozen=True)
class AirportConfig:
    """Airport lookup providers and cache sizes."""
    cache_ttl_ms: int = int(os.getenv('AIRPORT_CACHE_TTL_MS', str(24 * 60 * 60 * 1000)))
    max_server_entries: int = 500
    max_client_entries: int = int(os.getenv('MAX_CLIENT_CACHE_ENTRIES', '100'))

    airportsapi_url: str = 'https://airportsapi.com/api/airports'
    api_ninjas_url: str = 'https://api.api-ninjas.com/v1/airports'
    api_ninjas_key: Optional[str] = os.getenv('API_NINJAS_KEY') or None
    request_timeout_seconds: float = 5.0


@dataclass(frozen=True)
class GeocodingConfig:
    """Reverse geocoding (Nominatim) settings."""
    reverse_url: str = os.getenv(
        'NOMINATIM_REVERSE_URL',
        'https://nominatim.openstreetmap.org/reverse',
    )
    # Nominatim's usage policy requires an identifying user agent
    user_agent: str = os.getenv('NOMINATIM_USER_AGENT', 'skywatch/1.0')
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Terminal tracker settings."""
    server_url: str = os.getenv('SKYWATCH_SERVER_URL', 'http://localhost:5000')
    poll_interval_seconds: int = int(os.getenv('POLL_INTERVAL_SECONDS', '15'))
    bounds_offset_deg: float = 0.5
    request_timeout_seconds: float = 20.0


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    flightradar: FlightRadarConfig
    query_cache: QueryCacheConfig
    airports: AirportConfig
    geocoding: GeocodingConfig
    client: ClientConfig

    # User location (None = auto-detect via IP)
    user_location: Optional[Tuple[float, float]]

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        flightradar=FlightRadarConfig(),
        query_cache=QueryCacheConfig(),
        airports=AirportConfig(),
        geocoding=GeocodingConfig(),
        client=ClientConfig(),
        user_location=_parse_location(os.getenv('USER_LOCATION', '')),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
