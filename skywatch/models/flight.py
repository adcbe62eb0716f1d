"""
Flight records - normalization and validation of upstream payloads.

Upstream flight-position feeds describe the same aircraft with different
field names depending on the endpoint and API version (`callsign` vs
`flight_number`, `alt` vs `altitude`, ...). Every field is resolved through
one precedence table, FIELD_ALIASES: the first alias carrying a value wins.
The normalizer, the display layer and the mock generator all read from this
table so a field can never be resolved two different ways.

A record is only kept when it has a usable flight identifier and both route
endpoints. Anything else is dropped silently before it reaches the display
layer.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


# Ordered synonyms per canonical field. Order is significant.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    'identifier': ('callsign', 'flight_number', 'flight'),
    'origin_code': ('orig_iata', 'origin_airport_iata'),
    'dest_code': ('dest_iata', 'destination_airport_iata'),
    'registration': ('reg', 'registration'),
    'altitude_feet': ('alt', 'altitude'),
    'latitude': ('lat', 'latitude'),
    'longitude': ('lon', 'longitude'),
    'heading': ('track', 'heading'),
    'ground_speed_knots': ('gspeed', 'ground_speed'),
    'vertical_speed_raw': ('vspeed', 'vertical_speed'),
    'aircraft_type_code': ('type', 'aircraft_type'),
    'squawk': ('squawk',),
    'source': ('source',),
    'timestamp_iso': ('timestamp',),
    'eta_iso': ('eta',),
    'flight_id': ('fr24_id', 'flight_id'),
    'airline_code': ('painted_as', 'operating_as', 'airline_iata', 'airline_icao'),
    'origin_city': ('origin_city', 'origin_airport_name'),
    'dest_city': ('destination_city', 'destination_airport_name'),
    'origin_lat': ('origin_lat',),
    'origin_lon': ('origin_lon',),
    'dest_lat': ('dest_lat',),
    'dest_lon': ('dest_lon',),
}

PLACEHOLDER_VALUES = frozenset({'N/A', '---'})

# Keys that mark a dict as a flight when the payload is an object of objects
RECORD_MARKER_KEYS = ('lat', 'latitude', 'flight_id')


@dataclass(frozen=True)
class Coordinate:
    """WGS84 point in decimal degrees."""
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {'lat': self.lat, 'lon': self.lon}


@dataclass(frozen=True)
class FlightRecord:
    """
    Canonical flight after normalization.

    Only valid flights are ever built: identifier, origin_code and
    dest_code are non-empty, uppercased and not placeholders.
    """
    identifier: str
    origin_code: str
    dest_code: str

    position: Optional[Coordinate] = None
    heading: float = 0.0
    altitude_feet: Optional[float] = None
    ground_speed_knots: Optional[float] = None
    vertical_speed_raw: Optional[float] = None

    registration: Optional[str] = None
    squawk: Optional[str] = None
    aircraft_type_code: Optional[str] = None
    source: Optional[str] = None
    timestamp_iso: Optional[str] = None
    eta_iso: Optional[str] = None

    origin_coord: Optional[Coordinate] = None
    dest_coord: Optional[Coordinate] = None

    flight_id: Optional[str] = None
    airline_code: Optional[str] = None
    origin_city: Optional[str] = None
    dest_city: Optional[str] = None

    @property
    def vertical_speed_fpm(self) -> Optional[float]:
        """Vertical speed decoded to feet per minute."""
        return decode_vertical_speed(self.vertical_speed_raw)

    def with_route_coordinates(
        self,
        origin: Optional[Coordinate],
        dest: Optional[Coordinate],
    ) -> 'FlightRecord':
        """Copy with airport coordinates filled in where still missing."""
        return replace(
            self,
            origin_coord=self.origin_coord or origin,
            dest_coord=self.dest_coord or dest,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            'identifier': self.identifier,
            'flight_id': self.flight_id,
            'route': {
                'origin': self.origin_code,
                'destination': self.dest_code,
                'origin_city': self.origin_city,
                'destination_city': self.dest_city,
                'origin_coord': self.origin_coord.to_dict() if self.origin_coord else None,
                'destination_coord': self.dest_coord.to_dict() if self.dest_coord else None,
            },
            'position': self.position.to_dict() if self.position else None,
            'telemetry': {
                'heading': self.heading,
                'altitude_ft': self.altitude_feet,
                'ground_speed_kts': self.ground_speed_knots,
                'vertical_speed_fpm': self.vertical_speed_fpm,
                'squawk': self.squawk,
            },
            'aircraft': {
                'registration': self.registration,
                'type': self.aircraft_type_code,
                'airline_code': self.airline_code,
            },
            'source': self.source,
            'timestamp': self.timestamp_iso,
            'eta': self.eta_iso,
        }


def decode_vertical_speed(raw: Optional[float]) -> Optional[float]:
    """
    Decode vertical speed to feet per minute.

    The feed packs vertical speed as an integer in units of 1/64 ft/min.
    """
    if raw is None:
        return None
    return raw * 64


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def resolve_field(record: Dict[str, Any], field: str) -> Any:
    """Return the first present value among the field's aliases, or None."""
    for alias in FIELD_ALIASES[field]:
        value = record.get(alias)
        if _is_present(value):
            return value
    return None


def normalize_identifier_field(value: Any) -> str:
    """Trim and uppercase an identifier; missing values become ''."""
    if value is None:
        return ''
    return str(value).strip().upper()


def is_placeholder(value: Any) -> bool:
    """True for empty values and the 'N/A' / '---' placeholders."""
    normalized = normalize_identifier_field(value)
    return not normalized or normalized in PLACEHOLDER_VALUES


def is_valid_flight(record: Dict[str, Any]) -> bool:
    """A flight is valid when identifier, origin and destination are all real."""
    if not isinstance(record, dict):
        return False
    return not (
        is_placeholder(resolve_field(record, 'identifier'))
        or is_placeholder(resolve_field(record, 'origin_code'))
        or is_placeholder(resolve_field(record, 'dest_code'))
    )


def flight_key(record: Any) -> str:
    """Normalized identifier used to match a flight across refreshes."""
    if isinstance(record, FlightRecord):
        return record.identifier
    if isinstance(record, dict):
        return normalize_identifier_field(resolve_field(record, 'identifier'))
    return ''


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _to_text(value: Any) -> Optional[str]:
    if not _is_present(value):
        return None
    return str(value).strip()


def _coordinate(record: Dict[str, Any], lat_field: str, lon_field: str) -> Optional[Coordinate]:
    lat = _to_float(resolve_field(record, lat_field))
    lon = _to_float(resolve_field(record, lon_field))
    if lat is None or lon is None:
        return None
    return Coordinate(lat=lat, lon=lon)


def normalize_flight(record: Dict[str, Any]) -> Optional[FlightRecord]:
    """
    Collapse a raw upstream record into a FlightRecord.

    Returns None for records that fail validation.
    """
    if not is_valid_flight(record):
        return None

    heading = _to_float(resolve_field(record, 'heading'))
    airline_code = _to_text(resolve_field(record, 'airline_code'))

    return FlightRecord(
        identifier=normalize_identifier_field(resolve_field(record, 'identifier')),
        origin_code=normalize_identifier_field(resolve_field(record, 'origin_code')),
        dest_code=normalize_identifier_field(resolve_field(record, 'dest_code')),
        position=_coordinate(record, 'latitude', 'longitude'),
        heading=heading % 360 if heading is not None else 0.0,
        altitude_feet=_to_float(resolve_field(record, 'altitude_feet')),
        ground_speed_knots=_to_float(resolve_field(record, 'ground_speed_knots')),
        vertical_speed_raw=_to_float(resolve_field(record, 'vertical_speed_raw')),
        registration=_to_text(resolve_field(record, 'registration')),
        squawk=_to_text(resolve_field(record, 'squawk')),
        aircraft_type_code=_to_text(resolve_field(record, 'aircraft_type_code')),
        source=_to_text(resolve_field(record, 'source')),
        timestamp_iso=_to_text(resolve_field(record, 'timestamp_iso')),
        eta_iso=_to_text(resolve_field(record, 'eta_iso')),
        origin_coord=_coordinate(record, 'origin_lat', 'origin_lon'),
        dest_coord=_coordinate(record, 'dest_lat', 'dest_lon'),
        flight_id=_to_text(resolve_field(record, 'flight_id')),
        airline_code=airline_code.upper() if airline_code else None,
        origin_city=_to_text(resolve_field(record, 'origin_city')),
        dest_city=_to_text(resolve_field(record, 'dest_city')),
    )


def parse_upstream_payload(payload: Any) -> List[Dict[str, Any]]:
    """
    Extract the list of raw flight records from an upstream response.

    Accepted shapes:
    1. a bare list of records
    2. an object with a `data` list
    3. an object whose values are records (keyed by flight id)

    Any other shape yields an empty list.
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        data = payload.get('data')
        if isinstance(data, list):
            return data

        return [
            item for item in payload.values()
            if isinstance(item, dict)
            and any(key in item for key in RECORD_MARKER_KEYS)
        ]

    logger.warning(f'Unexpected flight payload type: {type(payload).__name__}')
    return []


def build_flight_records(payload: Any) -> List[FlightRecord]:
    """Parse, validate and normalize a payload, keeping upstream order."""
    raw_records = parse_upstream_payload(payload)

    flights = []
    for raw in raw_records:
        if not isinstance(raw, dict):
            continue
        flight = normalize_flight(raw)
        if flight:
            flights.append(flight)

    dropped = len(raw_records) - len(flights)
    if dropped:
        logger.debug(f'Dropped {dropped} of {len(raw_records)} flight records with incomplete data')

    return flights
