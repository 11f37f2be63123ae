"""
calhol.core.cache
-----------------
Bounded LRU memo for resolved occurrences.

Two maps share one lock:
  (fingerprint, year)     -> tuple of HolidayOccurrence
  (fingerprint, date key) -> HolidayOccurrence | None

Entries are pure derived data; dropping any of them only costs a recompute.
Concurrent writers racing on one key write identical values, so the last
insert simply wins.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, Hashable, Optional, Tuple

from .types import HolidayOccurrence

_LOGGER = logging.getLogger(__name__)

MISSING: Any = object()


class _LRU:
    def __init__(self, maxsize: int, label: str):
        if maxsize < 1:
            raise ValueError(f"{label} cache size must be >= 1")
        self.maxsize = maxsize
        self.label = label
        self.data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Any:
        if key in self.data:
            self.data.move_to_end(key)
            self.hits += 1
            return self.data[key]
        self.misses += 1
        return MISSING

    def put(self, key: Hashable, value: Any) -> None:
        if key in self.data:
            self.data.move_to_end(key)
        elif len(self.data) >= self.maxsize:
            evicted, _ = self.data.popitem(last=False)
            _LOGGER.debug("Evicted %s cache entry %r", self.label, evicted)
        self.data[key] = value

    def clear(self) -> None:
        self.data.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, Any]:
        total = self.hits + self.misses
        return {
            "size": len(self.data),
            "max_size": self.maxsize,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": 0.0 if total == 0 else self.hits / total,
        }


class ResolutionCache:
    def __init__(self, max_years: int = 256, max_points: int = 4096):
        self._lock = threading.Lock()
        self._years = _LRU(max_years, "year")
        self._points = _LRU(max_points, "point")

    # ---------------------------------------------------------
    # Year-level entries
    # ---------------------------------------------------------

    def get_year(self, fingerprint: Hashable, year: int) -> Optional[Tuple[HolidayOccurrence, ...]]:
        with self._lock:
            value = self._years.get((fingerprint, year))
        if value is MISSING:
            return None
        return value

    def put_year(self, fingerprint: Hashable, year: int, occurrences: Tuple[HolidayOccurrence, ...]) -> None:
        with self._lock:
            self._years.put((fingerprint, year), tuple(occurrences))

    # ---------------------------------------------------------
    # Point lookups (None is a valid cached answer)
    # ---------------------------------------------------------

    def get_point(self, fingerprint: Hashable, d: date) -> Any:
        """Returns the cached answer, or MISSING."""
        with self._lock:
            return self._points.get((fingerprint, d.toordinal()))

    def put_point(self, fingerprint: Hashable, d: date, occurrence: Optional[HolidayOccurrence]) -> None:
        with self._lock:
            self._points.put((fingerprint, d.toordinal()), occurrence)

    # ---------------------------------------------------------

    def clear(self) -> None:
        with self._lock:
            self._years.clear()
            self._points.clear()

    def stats(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {"years": self._years.stats(), "points": self._points.stats()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._years.data) + len(self._points.data)
