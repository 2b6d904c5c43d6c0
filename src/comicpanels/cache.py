"""Page cache for panel detection results.

Keeps recently analyzed pages in memory so that navigating back and forth
through a volume does not re-run detection. Pages are identified by a
digest of their encoded bytes, so one cache can serve several volumes.
"""

from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Hashable, Optional

from .config import PanelDetectionOptions
from .image_utils import BytesLike
from .result import PanelDetectionResult

log = logging.getLogger("Panels")


def page_key(data: BytesLike) -> str:
    """Identify a page by the MD5 digest of its encoded bytes."""
    return hashlib.md5(bytes(data), usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class CachedPanelResult:
    """Cached result with the options it was detected with."""
    result: PanelDetectionResult
    options: PanelDetectionOptions


class PanelCache:
    """Thread-safe LRU cache of page detection results.

    The cache is bound to one set of options: results computed with other
    options are refused, and switching options (e.g. Western to manga
    reading) drops everything. Failed results are not stored so the page
    gets another chance.
    """

    def __init__(self, max_pages: int = 50, options: Optional[PanelDetectionOptions] = None):
        """Initialize panel cache.

        Args:
            max_pages: Maximum number of pages to keep
            options: Options the cache starts bound to. Uses defaults if None.
        """
        self._max_pages = max(1, max_pages)
        self._options = options or PanelDetectionOptions()
        self._entries: "OrderedDict[Hashable, CachedPanelResult]" = OrderedDict()
        self._lock = Lock()

    @property
    def options(self) -> PanelDetectionOptions:
        with self._lock:
            return self._options

    def set_options(self, options: PanelDetectionOptions) -> None:
        """Bind the cache to new options, clearing it if they changed."""
        with self._lock:
            if options != self._options:
                self._entries.clear()
                self._options = options
                log.debug("[Cache] options changed, cache cleared")

    def get(self, key: Hashable) -> Optional[PanelDetectionResult]:
        """Get the cached result for a page, marking it as recently used.

        Args:
            key: Page key, usually ``page_key(page_bytes)``

        Returns:
            Cached result or None if not cached for the current options
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.options != self._options:
                return None
            self._entries.move_to_end(key)
            return entry.result

    def put(self, key: Hashable, result: PanelDetectionResult, options: PanelDetectionOptions) -> bool:
        """Cache a page result computed with ``options``.

        Returns:
            True if stored. Failed results and results computed with other
            options than the cache's current ones are refused.
        """
        with self._lock:
            if not result.success:
                log.debug(f"[Cache] skipping failed result for page {key}")
                return False
            if options != self._options:
                log.debug(f"[Cache] skipping stale result for page {key}")
                return False
            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self._max_pages:
                self._entries.popitem(last=False)
            self._entries[key] = CachedPanelResult(result, options)
            return True

    def invalidate_page(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
