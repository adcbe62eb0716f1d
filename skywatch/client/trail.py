"""
Trail loading for the selected flight.

A trail is the recent position history of one flight. Loading it can take
longer than the user takes to pick another flight, so every load carries a
CancellationToken. Selecting a different flight cancels the previous token,
and a result that arrives for a cancelled token is dropped without touching
the current trail.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from skywatch.analytics.geodesy import is_valid_coordinate
from skywatch.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrailPoint:
    """One historical position report."""
    lat: float
    lon: float
    altitude_feet: Optional[float] = None
    timestamp_iso: Optional[str] = None


class CancellationToken:
    """Marks one load as superseded."""

    def __init__(self, flight_id: str):
        self.flight_id = flight_id
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


def parse_track_payload(payload: Any) -> List[TrailPoint]:
    """
    Extract trail points from a flight-tracks response.

    Accepts a list of {'fr24_id', 'tracks': [...]} objects, a single such
    object, or a bare list of points. Points without coordinates are skipped.
    """
    if isinstance(payload, list) and payload and isinstance(payload[0], dict) and 'tracks' in payload[0]:
        raw_points = payload[0].get('tracks') or []
    elif isinstance(payload, dict):
        raw_points = payload.get('tracks') or []
    elif isinstance(payload, list):
        raw_points = payload
    else:
        raw_points = []

    points = []
    for raw in raw_points:
        if not isinstance(raw, dict):
            continue
        try:
            lat = float(raw['lat'])
            lon = float(raw['lon'])
        except (KeyError, TypeError, ValueError):
            continue
        if not is_valid_coordinate(lat, lon):
            continue
        altitude = raw.get('alt')
        points.append(TrailPoint(
            lat=lat,
            lon=lon,
            altitude_feet=float(altitude) if isinstance(altitude, (int, float)) else None,
            timestamp_iso=raw.get('timestamp'),
        ))

    return points


class TrailTracker:
    """Keeps the trail of the currently followed flight."""

    def __init__(
        self,
        fetch_track: Callable[[str], Any],
        executor: Optional[Executor] = None,
    ):
        self._fetch_track = fetch_track
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix='trail')
        self._lock = threading.Lock()
        self._token: Optional[CancellationToken] = None

        self.flight_id: Optional[str] = None
        self.points: List[TrailPoint] = []
        self.error: Optional[str] = None

    def follow(self, flight_id: str) -> Future:
        """
        Start loading the trail for a flight, superseding any earlier load.

        Returns the future of the load; it resolves to True when the result
        was applied and False when it was dropped.
        """
        token = CancellationToken(flight_id)
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = token
            self.flight_id = flight_id
            self.points = []
            self.error = None

        return self._executor.submit(self._load, token)

    def clear(self) -> None:
        """Stop following; any pending load is dropped when it arrives."""
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = None
            self.flight_id = None
            self.points = []
            self.error = None

    def close(self) -> None:
        """Stop following and shut down the load pool if this tracker created it."""
        self.clear()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def _load(self, token: CancellationToken) -> bool:
        error = None
        points: List[TrailPoint] = []
        try:
            points = parse_track_payload(self._fetch_track(token.flight_id))
        except UpstreamUnavailable as e:
            error = f'Failed to load trail: {e}'

        with self._lock:
            if token.cancelled or token is not self._token:
                logger.debug(f'Dropping superseded trail for {token.flight_id}')
                return False
            self.points = points
            self.error = error

        if error:
            logger.warning(error)
        else:
            logger.debug(f'Loaded {len(points)} trail points for {token.flight_id}')
        return True
