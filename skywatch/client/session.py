"""
Tracker session - one user's view of the sky.

A TrackerSession owns everything that is per-user state:
- the bounding-box query cache (single slot, rate limited)
- the client-side airport cache
- the trail of the selected flight
- the user's location and the current selection

Nothing here is module-level, so several sessions can coexist in one
process without sharing caches.
"""

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from skywatch.analytics.geodesy import (
    DEFAULT_PROGRESS_PERCENT,
    estimate_travel_time,
    feet_to_meters,
    great_circle_distance_km,
    knots_to_kmh,
    route_progress_percent,
)
from skywatch.cache import FlightQueryCache, monotonic_ms
from skywatch.client.airports import AirportInfoClient
from skywatch.client.proxy import ProxyClient
from skywatch.client.trail import TrailTracker
from skywatch.config import config
from skywatch.errors import UpstreamUnavailable
from skywatch.models.airport import AirportInfo
from skywatch.models.bounds import BoundingBox
from skywatch.models.flight import Coordinate, FlightRecord, flight_key
from skywatch.services.geocoding import DEFAULT_LOCATION_NAME, detect_location
from skywatch.services.reference_data import (
    aircraft_type_name,
    airline_code_from_flight_number,
    airline_name,
    airport_city,
    lookup_local_airport,
)

logger = logging.getLogger(__name__)

# Stockholm Arlanda, used when the user's location can't be determined
DEFAULT_LOCATION: Tuple[float, float] = (59.6519, 17.9186)
DEFAULT_LOCATION_LABEL = 'Arlanda (default)'

NO_FLIGHTS_MESSAGE = 'No flights found in this area.'


@dataclass(frozen=True)
class FlightView:
    """Display-ready flight with route progress and enrichment."""
    flight: FlightRecord

    airline_code: Optional[str]
    airline_name: Optional[str]
    aircraft_type: Optional[str]
    origin_city: str
    dest_city: str
    origin_coord: Optional[Coordinate]
    dest_coord: Optional[Coordinate]

    progress_percent: int
    # True when progress is the default, not computed from coordinates
    progress_estimated: bool

    total_distance_km: Optional[float] = None
    distance_from_origin_km: Optional[float] = None
    distance_to_destination_km: Optional[float] = None
    time_from_origin: Optional[str] = None
    time_to_destination: Optional[str] = None

    ground_speed_kmh: Optional[int] = None
    altitude_m: Optional[int] = None
    vertical_speed_fpm: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = self.flight.to_dict()
        result.update({
            'airline': {'code': self.airline_code, 'name': self.airline_name},
            'aircraft_type_name': self.aircraft_type,
            'progress': {
                'percent': self.progress_percent,
                'estimated': self.progress_estimated,
                'total_distance_km': round(self.total_distance_km, 1) if self.total_distance_km is not None else None,
                'distance_from_origin_km': round(self.distance_from_origin_km, 1) if self.distance_from_origin_km is not None else None,
                'distance_to_destination_km': round(self.distance_to_destination_km, 1) if self.distance_to_destination_km is not None else None,
                'time_from_origin': self.time_from_origin,
                'time_to_destination': self.time_to_destination,
            },
            'display': {
                'ground_speed_kmh': self.ground_speed_kmh,
                'altitude_m': self.altitude_m,
                'vertical_speed_fpm': self.vertical_speed_fpm,
            },
        })
        result['route']['origin_city'] = self.origin_city
        result['route']['destination_city'] = self.dest_city
        return result


def _airport_coordinate(info: Optional[AirportInfo]) -> Optional[Coordinate]:
    if info is None:
        return None
    return Coordinate(lat=info.lat, lon=info.lon)


class TrackerSession:
    """
    Per-user tracker state and display pipeline.

    All network access goes through the proxy client; its failures are
    turned into `error` state and status messages, never raised to the
    rendering layer.
    """

    def __init__(
        self,
        proxy: Optional[ProxyClient] = None,
        location_namer: Optional[Callable[[float, float], Optional[str]]] = None,
        locator: Callable[[], Optional[Tuple[float, float]]] = detect_location,
        executor: Optional[Executor] = None,
        cache_duration_ms: Optional[int] = None,
        min_request_interval_ms: Optional[int] = None,
        max_airport_entries: Optional[int] = None,
        bounds_offset_deg: Optional[float] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.proxy = proxy or ProxyClient()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix='tracker')
        self._location_namer = location_namer or self.proxy.get_location_name
        self._locator = locator
        self.bounds_offset_deg = bounds_offset_deg or config.client.bounds_offset_deg

        self.query_cache = FlightQueryCache(
            self.proxy.get_flights_payload,
            cache_duration_ms=cache_duration_ms,
            min_request_interval_ms=min_request_interval_ms,
            clock=clock,
        )
        self.airports = AirportInfoClient(self.proxy.get_airport, max_entries=max_airport_entries)
        self.trail = TrailTracker(self.proxy.get_flight_track, executor=self._executor)

        self.location: Tuple[float, float] = DEFAULT_LOCATION
        self.location_name = 'Loading...'
        self.flights: List[FlightRecord] = []
        self.selected: Optional[FlightRecord] = None

    # -------------------------------------------------------------------------
    # Location
    # -------------------------------------------------------------------------

    @property
    def bounds(self) -> str:
        lat, lon = self.location
        return BoundingBox.around(lat, lon, self.bounds_offset_deg).to_param()

    def update_location(self, lat: Optional[float] = None, lon: Optional[float] = None) -> List[FlightRecord]:
        """
        Set the user's location (detecting it when not given) and refresh.

        Falls back to Arlanda when detection fails.
        """
        self.location_name = 'Updating...'

        if lat is None or lon is None:
            detected = config.user_location or self._locator()
        else:
            detected = (lat, lon)

        if detected:
            self.location = detected
            self.location_name = self._name_for(*detected)
        else:
            self.location = DEFAULT_LOCATION
            self.location_name = DEFAULT_LOCATION_LABEL

        return self.refresh()

    def _name_for(self, lat: float, lon: float) -> str:
        try:
            return self._location_namer(lat, lon) or DEFAULT_LOCATION_NAME
        except UpstreamUnavailable as e:
            logger.warning(f'Failed to get location name: {e}')
            return DEFAULT_LOCATION_NAME

    # -------------------------------------------------------------------------
    # Flights and selection
    # -------------------------------------------------------------------------

    def refresh(self) -> List[FlightRecord]:
        """Fetch (or reuse) flights for the current bounds."""
        self.flights = self.query_cache.get_flights(self.bounds)
        self._sync_selection()
        return self.flights

    def select(self, flight: FlightRecord) -> None:
        """Select a flight and start loading its trail."""
        self.selected = flight
        if flight.flight_id:
            self.trail.follow(flight.flight_id)
        else:
            self.trail.clear()

    def close_detail(self) -> None:
        self.selected = None
        self.trail.clear()

    def close(self) -> None:
        """Drop the selection and release the worker pool if this session created it."""
        self.close_detail()
        self.trail.close()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def _sync_selection(self) -> None:
        """Point the selection at the fresh record, or drop it if gone."""
        if self.selected is None:
            return

        selected_key = flight_key(self.selected)
        updated = next((f for f in self.flights if flight_key(f) == selected_key), None)

        if updated is None:
            logger.debug(f'Selected flight {selected_key} left the area')
            self.close_detail()
        elif updated is not self.selected:
            previous = self.selected
            self.selected = updated
            if updated.flight_id != previous.flight_id:
                self.select(updated)

    def status_message(self) -> Optional[str]:
        """User-facing status line, or None when flights are shown normally."""
        if self.query_cache.error:
            return self.query_cache.error
        if not self.flights and not self.query_cache.loading:
            return NO_FLIGHTS_MESSAGE
        return None

    # -------------------------------------------------------------------------
    # Display enrichment
    # -------------------------------------------------------------------------

    def _airport(self, code: str) -> Optional[AirportInfo]:
        return self.airports.fetch_airport_info(code) or lookup_local_airport(code)

    def describe(self, flight: FlightRecord) -> FlightView:
        """Build the display view for one flight."""
        origin_info = self._airport(flight.origin_code)
        dest_info = self._airport(flight.dest_code)

        origin_coord = flight.origin_coord or _airport_coordinate(origin_info)
        dest_coord = flight.dest_coord or _airport_coordinate(dest_info)

        code = flight.airline_code or airline_code_from_flight_number(flight.identifier)
        ground_speed_kmh = knots_to_kmh(flight.ground_speed_knots)

        view = dict(
            flight=flight,
            airline_code=code,
            airline_name=airline_name(code),
            aircraft_type=aircraft_type_name(flight.aircraft_type_code),
            origin_city=(
                flight.origin_city
                or (origin_info.city if origin_info else None)
                or airport_city(flight.origin_code)
                or flight.origin_code
            ),
            dest_city=(
                flight.dest_city
                or (dest_info.city if dest_info else None)
                or airport_city(flight.dest_code)
                or flight.dest_code
            ),
            origin_coord=origin_coord,
            dest_coord=dest_coord,
            ground_speed_kmh=ground_speed_kmh,
            altitude_m=feet_to_meters(flight.altitude_feet),
            vertical_speed_fpm=flight.vertical_speed_fpm,
        )

        progress = None
        position = flight.position
        if position and origin_coord and dest_coord:
            progress = route_progress_percent(
                position.lat, position.lon,
                origin_coord.lat, origin_coord.lon,
                dest_coord.lat, dest_coord.lon,
            )

        if progress is None:
            return FlightView(
                progress_percent=DEFAULT_PROGRESS_PERCENT,
                progress_estimated=True,
                **view,
            )

        from_origin = great_circle_distance_km(origin_coord.lat, origin_coord.lon, position.lat, position.lon)
        to_destination = great_circle_distance_km(position.lat, position.lon, dest_coord.lat, dest_coord.lon)

        return FlightView(
            progress_percent=progress,
            progress_estimated=False,
            total_distance_km=great_circle_distance_km(
                origin_coord.lat, origin_coord.lon, dest_coord.lat, dest_coord.lon
            ),
            distance_from_origin_km=from_origin,
            distance_to_destination_km=to_destination,
            time_from_origin=estimate_travel_time(from_origin, ground_speed_kmh),
            time_to_destination=estimate_travel_time(to_destination, ground_speed_kmh),
            **view,
        )

    def describe_all(self, flights: Optional[List[FlightRecord]] = None) -> List[FlightView]:
        """
        Build views for many flights.

        Airport codes are resolved concurrently first; the client cache
        collapses duplicate codes into one lookup each.
        """
        flights = self.flights if flights is None else flights

        codes = {code for f in flights for code in (f.origin_code, f.dest_code)}
        list(self._executor.map(self.airports.fetch_airport_info, sorted(codes)))

        return [self.describe(f) for f in flights]
