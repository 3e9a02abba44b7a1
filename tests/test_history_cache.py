from __future__ import annotations

import asyncio

import pytest

from crypto_tracker.stores import HistorySeriesCache


@pytest.mark.asyncio
async def test_fetch_if_absent_twice_makes_one_call(provider):
    cache = HistorySeriesCache(provider, days=7)

    first = await cache.fetch_if_absent("solana")
    second = await cache.fetch_if_absent("solana")

    assert provider.series_calls == ["solana"]
    assert first is second
    assert len(first.points) == 8
    assert cache.get("solana") is first
    assert "solana" in cache


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_fetch(provider):
    provider.series_gate = asyncio.Event()
    cache = HistorySeriesCache(provider)

    a = asyncio.create_task(cache.fetch_if_absent("solana"))
    b = asyncio.create_task(cache.fetch_if_absent("solana"))
    await asyncio.sleep(0)
    assert cache.is_pending("solana")
    assert cache.get("solana") is None

    provider.series_gate.set()
    results = await asyncio.gather(a, b)

    assert provider.series_calls == ["solana"]
    assert results[0] is results[1]
    assert not cache.is_pending("solana")


@pytest.mark.asyncio
async def test_failure_leaves_entry_absent_and_next_request_retries(provider):
    cache = HistorySeriesCache(provider)
    provider.fail_series = True

    assert await cache.fetch_if_absent("bitcoin") is None
    assert cache.get("bitcoin") is None

    provider.fail_series = False
    await asyncio.sleep(0)
    series = await cache.fetch_if_absent("bitcoin")

    assert series is not None
    assert provider.series_calls == ["bitcoin", "bitcoin"]


@pytest.mark.asyncio
async def test_listeners_fire_when_a_series_is_cached(provider):
    cache = HistorySeriesCache(provider)
    fired = []
    cache.add_listener(lambda: fired.append(True))

    await cache.fetch_if_absent("ethereum")
    await cache.fetch_if_absent("ethereum")

    assert fired == [True]


@pytest.mark.asyncio
async def test_close_cancels_pending_fetches(provider):
    provider.series_gate = asyncio.Event()
    cache = HistorySeriesCache(provider)

    waiter = asyncio.create_task(cache.fetch_if_absent("solana"))
    await asyncio.sleep(0)
    await cache.close()

    with pytest.raises(asyncio.CancelledError):
        await waiter
    assert cache.get("solana") is None
