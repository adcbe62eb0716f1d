"""
Geographic bounding box for flight-position queries.

The flight-positions API takes bounds as a single string:
    north,south,west,east
(latitude max, latitude min, longitude min, longitude max)
"""

from dataclasses import dataclass

from skywatch.analytics.geodesy import is_valid_coordinate
from skywatch.errors import InvalidBounds


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular query region in decimal degrees."""
    north: float
    south: float
    west: float
    east: float

    @classmethod
    def around(cls, lat: float, lon: float, offset_deg: float = 0.5) -> 'BoundingBox':
        """Square box of +/- offset_deg around a point."""
        return cls(
            north=lat + offset_deg,
            south=lat - offset_deg,
            west=lon - offset_deg,
            east=lon + offset_deg,
        )

    @classmethod
    def parse(cls, value: str) -> 'BoundingBox':
        """
        Parse a 'north,south,west,east' string.

        Raises InvalidBounds if the string is not four coordinates.
        """
        if not value:
            raise InvalidBounds('Bounds parameter is required')

        parts = value.split(',')
        if len(parts) != 4:
            raise InvalidBounds('Bounds must be four comma-separated numbers: north,south,west,east')

        try:
            north, south, west, east = (float(part.strip()) for part in parts)
        except ValueError:
            raise InvalidBounds(f'Bounds contain a non-numeric value: {value}') from None

        if not (is_valid_coordinate(north, west) and is_valid_coordinate(south, east)):
            raise InvalidBounds(f'Bounds out of range: {value}')

        return cls(north=north, south=south, west=west, east=east)

    def to_param(self) -> str:
        """Format as the API's bounds parameter."""
        return f'{self.north:.3f},{self.south:.3f},{self.west:.3f},{self.east:.3f}'

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east
