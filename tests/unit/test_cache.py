"""Tests for ek_api.cache - category name cache."""

import asyncio

import pytest

from ek_api.cache import CategoryCache


class _Loader:
    def __init__(self, result=None, error: Exception | None = None):
        self.calls = 0
        self.result = result if result is not None else {"1": "CPU"}
        self.error = error

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def test_cache_loads_once():
    cache = CategoryCache()
    loader = _Loader()

    assert asyncio.run(cache.get(loader)) == {"1": "CPU"}
    assert asyncio.run(cache.get(loader)) == {"1": "CPU"}
    assert loader.calls == 1


def test_invalidate_forces_reload():
    cache = CategoryCache()
    loader = _Loader()

    asyncio.run(cache.get(loader))
    cache.invalidate()
    asyncio.run(cache.get(loader))

    assert loader.calls == 2


def test_failed_load_is_not_cached():
    cache = CategoryCache()

    with pytest.raises(RuntimeError):
        asyncio.run(cache.get(_Loader(error=RuntimeError("ERP down"))))

    assert not cache.is_loaded
    assert asyncio.run(cache.get(_Loader())) == {"1": "CPU"}


def test_ttl_expiry():
    now = [0.0]
    cache = CategoryCache(ttl_seconds=60, clock=lambda: now[0])
    loader = _Loader()

    asyncio.run(cache.get(loader))
    now[0] = 59.0
    asyncio.run(cache.get(loader))
    assert loader.calls == 1

    now[0] = 61.0
    asyncio.run(cache.get(loader))
    assert loader.calls == 2
