"""AirportInfo value object."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from skywatch.analytics.geodesy import is_valid_coordinate


@dataclass(frozen=True)
class AirportInfo:
    """Airport metadata keyed by IATA code."""
    iata: str
    name: str
    city: str
    country: str
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {
            'iata': self.iata,
            'name': self.name,
            'city': self.city,
            'country': self.country,
            'lat': self.lat,
            'lon': self.lon,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['AirportInfo']:
        """
        Build from an airport-info service response.

        Returns None when the payload lacks an IATA code or usable coordinates.
        """
        if not isinstance(data, dict) or not data.get('iata'):
            return None
        try:
            lat = float(data.get('lat'))
            lon = float(data.get('lon'))
        except (TypeError, ValueError):
            return None
        if not is_valid_coordinate(lat, lon):
            return None

        return cls(
            iata=str(data['iata']).upper(),
            name=data.get('name') or '',
            city=data.get('city') or '',
            country=data.get('country') or '',
            lat=lat,
            lon=lon,
        )
