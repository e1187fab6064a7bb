"""
Single-entry cache for the full employee listing.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from service_employees.app.models import EmployeeRecord


DEFAULT_LISTING_TTL = 60.0


@dataclass(frozen=True)
class CacheEntry:
    """Cached listing and the clock reading it was stored at."""

    employees: Tuple[EmployeeRecord, ...]
    created_at: float

    def is_valid(self, now: float, ttl: float) -> bool:
        return now - self.created_at < ttl


class EmployeeListingCache:
    """Cache-aside store holding at most one entry: the full listing.

    States are Empty, Valid, Expired and Evicted. ``get`` only returns a
    Valid entry and drops an Expired one. ``invalidate`` bumps a generation
    counter; a ``put`` carrying an older generation is discarded, so an
    invalidate always wins over a fetch that started before it.
    """

    CACHE_TYPE = "employees"

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_LISTING_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
        metrics: Optional[MetricsCollector] = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.logger = get_logger("gateway.listing_cache")
        self.metrics = metrics
        self._clock = clock
        self._lock = threading.Lock()
        self._entry: Optional[CacheEntry] = None
        self._generation = 0
        self._stats = {"hits": 0, "misses": 0, "puts": 0, "discarded_puts": 0, "invalidations": 0}

    @property
    def generation(self) -> int:
        """Token to hand back to ``put`` after fetching from upstream."""
        with self._lock:
            return self._generation

    def get(self) -> Optional[List[EmployeeRecord]]:
        """Return the cached listing if it is still valid."""
        with self._lock:
            entry = self._entry
            if entry is not None and not entry.is_valid(self._clock(), self.ttl_seconds):
                self.logger.debug("Cached listing expired", age=self._clock() - entry.created_at)
                self._entry = None
                entry = None

            if entry is None:
                self._stats["misses"] += 1
            else:
                self._stats["hits"] += 1

        self._record("cache_hits_total" if entry is not None else "cache_misses_total")
        return list(entry.employees) if entry is not None else None

    def put(self, employees: Sequence[EmployeeRecord], generation: Optional[int] = None) -> bool:
        """Store a fresh listing. Returns False if an invalidate superseded it."""
        with self._lock:
            if generation is not None and generation != self._generation:
                self._stats["discarded_puts"] += 1
                stored = False
            else:
                self._entry = CacheEntry(employees=tuple(employees), created_at=self._clock())
                self._stats["puts"] += 1
                stored = True

        if not stored:
            self.logger.info("Discarded stale listing; cache was invalidated during fetch")
        return stored

    def invalidate(self) -> None:
        """Drop the cached listing regardless of its state."""
        with self._lock:
            self._entry = None
            self._generation += 1
            self._stats["invalidations"] += 1

        self.logger.info("Employee listing cache invalidated")
        self._record("cache_invalidations_total")

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot of counters and the current entry state."""
        with self._lock:
            entry = self._entry
            now = self._clock()
            if entry is None:
                state = "empty"
                age = None
            else:
                age = now - entry.created_at
                state = "valid" if entry.is_valid(now, self.ttl_seconds) else "expired"
            return {
                "cache_type": self.CACHE_TYPE,
                "state": state,
                "age_seconds": age,
                "ttl_seconds": self.ttl_seconds,
                "size": len(entry.employees) if entry is not None else 0,
                **self._stats,
            }

    def _record(self, metric_name: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, cache_type=self.CACHE_TYPE)
