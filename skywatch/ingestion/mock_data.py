"""
Synthetic flight data for running without an FR24 API key.

Generates payloads in the same shape as the live API so the rest of the
system can't tell the difference. Output is deterministic per bounding
box: the same bounds always produce the same flights.
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import List

from skywatch.analytics.geodesy import great_circle_distance_km
from skywatch.models.bounds import BoundingBox
from skywatch.services.reference_data import AIRPORT_COORDINATES

logger = logging.getLogger(__name__)

# (IATA airline code, ICAO prefix)
_MOCK_AIRLINES = [
    ('SK', 'SAS'), ('AY', 'FIN'), ('DY', 'NOZ'), ('FR', 'RYR'),
    ('BA', 'BAW'), ('LH', 'DLH'), ('AF', 'AFR'), ('KL', 'KLM'),
    ('TK', 'THY'), ('LX', 'SWR'),
]

_MOCK_TYPES = ['A20N', 'A320', 'A321', 'B738', 'B38M', 'E195', 'AT76', 'A359']


def generate_mock_flights(bounds: str, count: int = 12) -> dict:
    """Build a {'data': [...]} payload of flights inside the bounds."""
    box = BoundingBox.parse(bounds)
    rng = random.Random(bounds)
    airports = sorted(AIRPORT_COORDINATES)
    now = datetime.now(timezone.utc)

    flights = []
    for index in range(count):
        origin, dest = rng.sample(airports, 2)
        iata, icao = rng.choice(_MOCK_AIRLINES)
        number = rng.randint(100, 2999)

        lat = rng.uniform(box.south, box.north)
        lon = rng.uniform(box.west, box.east)
        dest_lat, dest_lon = AIRPORT_COORDINATES[dest][:2]
        remaining_km = great_circle_distance_km(lat, lon, dest_lat, dest_lon)
        gspeed = rng.randint(280, 490)

        flights.append({
            'fr24_id': f'mock{index:04x}{number:x}',
            'flight': f'{iata}{number}',
            'callsign': f'{icao}{number}',
            'lat': round(lat, 4),
            'lon': round(lon, 4),
            'track': rng.randint(0, 359),
            'alt': rng.choice([0, 3500, 12000, 24000, 35000, 37000]),
            'gspeed': gspeed,
            # Raw units of 1/64 ft/min
            'vspeed': rng.choice([-24, -8, 0, 0, 0, 10, 28]),
            'squawk': f'{rng.randint(0, 7777):04d}',
            'timestamp': now.isoformat().replace('+00:00', 'Z'),
            'source': 'MOCK',
            'hex': f'{rng.randint(0, 0xFFFFFF):06x}',
            'type': rng.choice(_MOCK_TYPES),
            'reg': f'SE-R{chr(65 + index % 26)}{chr(65 + number % 26)}',
            'painted_as': icao,
            'operating_as': icao,
            'orig_iata': origin,
            'dest_iata': dest,
            'eta': (now + timedelta(hours=remaining_km / (gspeed * 1.852)))
            .isoformat().replace('+00:00', 'Z'),
        })

    logger.info(f'Generated {len(flights)} mock flights for {bounds}')
    return {'data': flights}


def generate_mock_track(flight_id: str, points: int = 20) -> List[dict]:
    """Build a flight-tracks style payload for a mock flight."""
    rng = random.Random(flight_id)
    lat = rng.uniform(-60, 60)
    lon = rng.uniform(-150, 150)
    heading_lat = rng.uniform(-0.05, 0.05)
    heading_lon = rng.uniform(-0.05, 0.05)
    now = datetime.now(timezone.utc)

    tracks = []
    for step in range(points):
        tracks.append({
            'timestamp': (now - timedelta(minutes=points - step)).isoformat().replace('+00:00', 'Z'),
            'lat': round(lat + heading_lat * step, 4),
            'lon': round(lon + heading_lon * step, 4),
            'alt': min(36000, 1500 * step),
        })

    return [{'fr24_id': flight_id, 'tracks': tracks}]
