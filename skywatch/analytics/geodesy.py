"""
Great-circle geometry for route progress.

Progress is a 1-D projection: the share of the origin-to-destination
great-circle distance already covered, measured as the distance from the
origin to the aircraft. It ignores cross-track deviation, so an aircraft
flying a curved or offset route can show a progress value that differs from
the true fraction of its path flown. This is a known approximation.
"""

import math
from numbers import Real
from typing import Optional

EARTH_RADIUS_KM = 6371.0

# Substitute progress for flights without reliable coordinates
DEFAULT_PROGRESS_PERCENT = 40

# Cruise speed assumed when an aircraft reports no usable ground speed
DEFAULT_CRUISE_SPEED_KMH = 800.0

KNOTS_TO_KMH = 1.852
FEET_TO_METERS = 0.3048


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def great_circle_distance_km(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points in kilometers.

    Uses the Haversine formula on a spherical Earth (radius 6371 km).
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a a hair past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def is_valid_coordinate(lat, lon) -> bool:
    """Check that lat/lon are real numbers within WGS84 ranges."""
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, Real):
            return False
        if math.isnan(value):
            return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def route_progress_percent(
    cur_lat: float, cur_lon: float,
    orig_lat: float, orig_lon: float,
    dest_lat: float, dest_lon: float,
) -> Optional[int]:
    """
    Percentage of the route completed, 0-100.

    Returns None if any coordinate is invalid. Origin and destination
    closer than 1 km count as no progress.
    """
    if not (
        is_valid_coordinate(cur_lat, cur_lon)
        and is_valid_coordinate(orig_lat, orig_lon)
        and is_valid_coordinate(dest_lat, dest_lon)
    ):
        return None

    total = great_circle_distance_km(orig_lat, orig_lon, dest_lat, dest_lon)
    if total < 1:
        return 0

    traveled = great_circle_distance_km(orig_lat, orig_lon, cur_lat, cur_lon)
    progress = max(0.0, min(100.0, traveled / total * 100))

    return round_half_up(progress)


def estimate_travel_time(distance_km: float, speed_kmh: Optional[float]) -> str:
    """Format the time needed to cover a distance, e.g. '1h 25m'."""
    if not speed_kmh or speed_kmh <= 0:
        speed_kmh = DEFAULT_CRUISE_SPEED_KMH

    hours = distance_km / speed_kmh
    whole_hours = int(math.floor(hours))
    minutes = round_half_up((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0

    return f'{whole_hours}h {minutes}m'


def knots_to_kmh(knots: Optional[float]) -> Optional[int]:
    if knots is None:
        return None
    return round_half_up(knots * KNOTS_TO_KMH)


def feet_to_meters(feet: Optional[float]) -> Optional[int]:
    if feet is None:
        return None
    return round_half_up(feet * FEET_TO_METERS)
