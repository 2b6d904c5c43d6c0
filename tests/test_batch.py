"""Tests for parallel volume pre-analysis."""

import threading

import pytest

from comicpanels import (
    MANGA,
    WESTERN,
    PanelCache,
    PanelDetectionOptions,
    PanelDetectionResult,
    detect_pages,
    page_key,
)
from comicpanels.batch import CANCELLED_MESSAGE


@pytest.fixture
def volume(png, page, two_panel_page):
    return [
        png(two_panel_page),
        b"not an image",
        png(page(100, 100)),
        png(page(200, 200, [(50, 50, 150, 150)])),
    ]


def test_results_follow_page_order(volume):
    results = detect_pages(volume, max_workers=3)

    assert [r.success for r in results] == [True, False, True, True]
    assert [r.panel_count for r in results] == [2, 0, 0, 1]
    assert results[0].panels[0].x < results[0].panels[1].x


def test_options_are_applied(volume):
    results = detect_pages(volume, MANGA)
    assert results[0].panels[0].x > results[0].panels[1].x


def test_cache_is_filled_and_reused(volume):
    cache = PanelCache()
    first = detect_pages(volume, cache=cache)

    assert len(cache) == 3
    assert page_key(volume[1]) not in cache

    second = detect_pages(volume, cache=cache)
    assert second[0] is first[0]
    assert second == first


def test_cache_is_rebound_to_new_options(volume):
    cache = PanelCache()
    detect_pages(volume, cache=cache)
    results = detect_pages(volume, MANGA, cache=cache)

    assert cache.options is MANGA
    assert results[0].panels[0].x > results[0].panels[1].x


def test_cancelled_pages_fail(volume):
    cancel = threading.Event()
    cancel.set()
    results = detect_pages(volume, cancel_event=cancel)

    assert all(not r.success for r in results)
    assert all(r.error == CANCELLED_MESSAGE for r in results)


def test_cached_pages_survive_cancellation(volume):
    cache = PanelCache()
    cache.put(page_key(volume[0]), PanelDetectionResult.of([], 1, 1), PanelDetectionOptions())
    cancel = threading.Event()
    cancel.set()

    results = detect_pages(volume, cache=cache, cancel_event=cancel)
    assert results[0].success
    assert not results[1].success


def test_empty_volume():
    assert detect_pages([]) == []


def test_cache_shared_between_volumes(png, page):
    cache = PanelCache()
    first = detect_pages([png(page(200, 200, [(50, 50, 150, 150)]))], cache=cache)
    second = detect_pages([png(page(200, 200))], cache=cache)

    assert first[0].panel_count == 1
    assert second[0].panel_count == 0
    assert len(cache) == 2


def test_stale_result_is_not_served_under_new_options(png, two_panel_page):
    data = png(two_panel_page)
    western = detect_pages([data], WESTERN)[0]
    cache = PanelCache(options=WESTERN)
    cache.set_options(MANGA)
    cache.put(page_key(data), western, WESTERN)

    results = detect_pages([data], MANGA, cache=cache)
    assert results[0].panels[0].x > results[0].panels[1].x
    assert cache.get(page_key(data)) is results[0]
