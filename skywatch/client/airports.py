"""
Client-side airport cache.

Wraps an airport lookup (normally ProxyClient.get_airport) with a
session-scoped cache that:
- Stores the in-flight request itself, so concurrent callers for the same
  code share one lookup
- Holds at most max_entries codes, evicting the oldest inserted entry
  (lookups never refresh an entry's position)
- Never raises: any failure resolves to None
"""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Dict, Optional

from skywatch.config import config
from skywatch.models.airport import AirportInfo
from skywatch.models.flight import is_placeholder, normalize_identifier_field

logger = logging.getLogger(__name__)


class AirportInfoClient:
    """Session-scoped, de-duplicating airport info cache."""

    def __init__(
        self,
        lookup: Callable[[str], Optional[AirportInfo]],
        max_entries: Optional[int] = None,
    ):
        self._lookup = lookup
        self.max_entries = max_entries or config.airports.max_client_entries

        # Insertion-ordered: the first key is always the oldest entry
        self._cache: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def fetch_airport_info(self, iata_code: Optional[str]) -> Optional[AirportInfo]:
        """
        Airport info for a code, or None.

        Blocks until the lookup (this caller's or a concurrent one) completes.
        """
        if is_placeholder(iata_code):
            return None
        code = normalize_identifier_field(iata_code)

        with self._lock:
            pending = self._cache.get(code)
            owner = pending is None
            if owner:
                if len(self._cache) >= self.max_entries:
                    oldest = next(iter(self._cache))
                    del self._cache[oldest]
                    logger.debug(f'Evicted airport {oldest} from client cache')
                pending = Future()
                self._cache[code] = pending

        if owner:
            try:
                result = self._lookup(code)
            except Exception as e:
                logger.error(f'Error fetching airport info for {code}: {e}')
                result = None
            pending.set_result(result)

        return pending.result()

    def cached_codes(self) -> list:
        """Codes currently held, oldest first."""
        with self._lock:
            return list(self._cache)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
