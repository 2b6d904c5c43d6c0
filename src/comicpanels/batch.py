"""Parallel panel detection over many pages.

Used to pre-analyze a whole volume ahead of reading. Each call owns its
thread pool; the detector itself is stateless and shared by the workers.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .cache import PanelCache, page_key
from .config import PanelDetectionOptions
from .detector import PanelDetector
from .image_utils import BytesLike
from .result import PanelDetectionResult

log = logging.getLogger("Panels")

CANCELLED_MESSAGE = "Detection cancelled"


def detect_pages(
    pages: Sequence[BytesLike],
    options: Optional[PanelDetectionOptions] = None,
    *,
    max_workers: int = 2,
    cache: Optional[PanelCache] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[PanelDetectionResult]:
    """Detect panels on every page of a volume.

    Args:
        pages: Encoded page images, in reading order
        options: Detection parameters. Uses defaults if None.
        max_workers: Number of worker threads
        cache: Optional page cache, shared freely between volumes since
            pages are keyed by a digest of their bytes
        cancel_event: When set, pages not yet started resolve to a failed
            "cancelled" result; a page already running completes

    Returns:
        One result per page, in page order
    """
    pages = list(pages)
    options = options or PanelDetectionOptions()
    detector = PanelDetector(options)
    if cache is not None:
        cache.set_options(options)

    keys = [_cache_key(page) for page in pages] if cache is not None else [None] * len(pages)
    results: List[Optional[PanelDetectionResult]] = [None] * len(pages)
    pending = []
    for index, key in enumerate(keys):
        cached = cache.get(key) if key is not None else None
        if cached is not None:
            results[index] = cached
        else:
            pending.append(index)

    def run(index: int) -> PanelDetectionResult:
        if cancel_event is not None and cancel_event.is_set():
            return PanelDetectionResult.failed(CANCELLED_MESSAGE)
        result = detector.detect(pages[index])
        if keys[index] is not None:
            cache.put(keys[index], result, options)
        return result

    start_time = time.perf_counter()
    if pending:
        with ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="panel_detect") as executor:
            for index, result in zip(pending, executor.map(run, pending)):
                results[index] = result

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    failed = sum(1 for r in results if r is not None and not r.success)
    log.info(
        f"[Panels] analyzed {len(pending)}/{len(pages)} pages "
        f"({len(pages) - len(pending)} cached, {failed} failed) in {elapsed_ms:.0f} ms"
    )
    return results


def _cache_key(page: BytesLike) -> Optional[str]:
    # Pages that are not bytes-like skip the cache; detect() reports them
    try:
        return page_key(page)
    except TypeError:
        return None
