"""
Bounding-box query cache and rate limiter.

Sits between the tracker and the flight-position proxy so that map pans,
zooms and polling don't hammer the upstream API:
- Repeated queries for the same bounds within cache_duration_ms are
  answered from memory
- Any new query within min_request_interval_ms of the last network call
  is throttled and answered with the best data already held
- Concurrent callers for the same bounds share a single network call

Design rationale:
The tracker only ever looks at "the current viewport", so the cache is a
single slot holding the last successful result. Writes go through one
in-flight request per bounds key, and a slower, older request never
overwrites a newer result.
"""

import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from skywatch.config import config
from skywatch.errors import UpstreamUnavailable
from skywatch.models.flight import FlightRecord, build_flight_records

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class QueryOutcome(str, Enum):
    """How the last get_flights() call was answered."""
    CACHE_HIT = 'cache_hit'
    THROTTLED = 'throttled'
    FETCHED = 'fetched'
    FAILED = 'failed'


@dataclass(frozen=True)
class BoundsQueryCacheEntry:
    """Most recent successful fetch for one bounding box."""
    bounds: str
    flights: Tuple[FlightRecord, ...]
    fetched_at_ms: float
    # When the producing request started; orders concurrent writers
    requested_at_ms: float


class FlightQueryCache:
    """
    Thread-safe single-slot cache with minimum-interval throttling.

    The fetcher is the flight-position proxy: it takes a bounds string and
    returns the raw JSON payload, raising UpstreamUnavailable on failure.
    """

    def __init__(
        self,
        fetcher: Callable[[str], Any],
        cache_duration_ms: Optional[int] = None,
        min_request_interval_ms: Optional[int] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self._fetcher = fetcher
        self.cache_duration_ms = (
            cache_duration_ms if cache_duration_ms is not None
            else config.query_cache.cache_duration_ms
        )
        self.min_request_interval_ms = (
            min_request_interval_ms if min_request_interval_ms is not None
            else config.query_cache.min_request_interval_ms
        )
        self._clock = clock

        self._entry: Optional[BoundsQueryCacheEntry] = None
        self._in_flight: Dict[str, Future] = {}
        self._last_fetch_time_ms: Optional[float] = None
        self._lock = threading.RLock()

        # Caller-visible state
        self.loading = False
        self.error: Optional[str] = None
        self.last_outcome: Optional[QueryOutcome] = None

        # Statistics
        self._hits = 0
        self._throttled = 0
        self._network_calls = 0

    @property
    def entry(self) -> Optional[BoundsQueryCacheEntry]:
        with self._lock:
            return self._entry

    def get_flights(self, bounds: str) -> List[FlightRecord]:
        """
        Get valid flights for a bounding box.

        Never raises for upstream failures: the error is recorded in
        `error` and the previously cached flights (if any) are returned.
        """
        with self._lock:
            now = self._clock()
            entry = self._entry

            if (
                entry is not None
                and entry.bounds == bounds
                and now - entry.fetched_at_ms < self.cache_duration_ms
            ):
                self._hits += 1
                self.last_outcome = QueryOutcome.CACHE_HIT
                logger.debug(f'Flight cache hit for {bounds}')
                return list(entry.flights)

            pending = self._in_flight.get(bounds)
            if pending is None:
                if (
                    self._last_fetch_time_ms is not None
                    and now - self._last_fetch_time_ms < self.min_request_interval_ms
                ):
                    self._throttled += 1
                    self.last_outcome = QueryOutcome.THROTTLED
                    wait_ms = self.min_request_interval_ms - (now - self._last_fetch_time_ms)
                    logger.warning(
                        f'Throttled flight request for {bounds} '
                        f'(next request allowed in {wait_ms / 1000:.1f}s)'
                    )
                    return list(entry.flights) if entry else []

                pending = Future()
                self._in_flight[bounds] = pending
                self._last_fetch_time_ms = now
                self._network_calls += 1
                self.loading = True
                self.error = None
                owner = True
            else:
                owner = False

        if not owner:
            logger.debug(f'Joining in-flight flight request for {bounds}')
            return list(pending.result())

        return self._fetch(bounds, pending, requested_at_ms=now)

    def _fetch(self, bounds: str, pending: Future, requested_at_ms: float) -> List[FlightRecord]:
        """Issue the network call and publish the result to waiters."""
        try:
            payload = self._fetcher(bounds)
            flights = tuple(build_flight_records(payload))
        except UpstreamUnavailable as e:
            with self._lock:
                self.loading = False
                self.error = f'Failed to load flights: {e}'
                self.last_outcome = QueryOutcome.FAILED
                self._in_flight.pop(bounds, None)
                fallback = self._entry.flights if self._entry else ()
            logger.warning(f'Flight request for {bounds} failed: {e}')
            pending.set_result(fallback)
            return list(fallback)
        except Exception as e:
            with self._lock:
                self.loading = False
                self._in_flight.pop(bounds, None)
            pending.set_exception(e)
            raise

        with self._lock:
            current = self._entry
            if current is None or current.requested_at_ms <= requested_at_ms:
                self._entry = BoundsQueryCacheEntry(
                    bounds=bounds,
                    flights=flights,
                    fetched_at_ms=self._clock(),
                    requested_at_ms=requested_at_ms,
                )
            else:
                logger.debug(f'Discarding superseded result for {bounds}')
            self.loading = False
            self.last_outcome = QueryOutcome.FETCHED
            self._in_flight.pop(bounds, None)

        logger.info(f'Fetched {len(flights)} valid flights for {bounds}')
        pending.set_result(flights)
        return list(flights)

    def clear(self) -> None:
        """Forget the cached entry and throttle state."""
        with self._lock:
            self._entry = None
            self._last_fetch_time_ms = None
            self.error = None

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            return {
                'bounds': self._entry.bounds if self._entry else None,
                'entries': len(self._entry.flights) if self._entry else 0,
                'hits': self._hits,
                'throttled': self._throttled,
                'network_calls': self._network_calls,
                'loading': self.loading,
                'error': self.error,
            }
