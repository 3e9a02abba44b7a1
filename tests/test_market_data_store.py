from __future__ import annotations

import asyncio

import pytest

from conftest import FakeProvider, make_coin
from crypto_tracker.providers import MarketProviderABC
from crypto_tracker.stores import MarketDataStore


class GatedProvider(MarketProviderABC):
    """Each get_top_coins call waits for its own gate and returns its own coins."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = 0

    async def get_top_coins(self, limit):
        gate, coins = self._responses[self.calls]
        self.calls += 1
        await gate.wait()
        return coins

    async def get_price_series(self, coin_id, days):
        raise NotImplementedError


@pytest.mark.asyncio
async def test_refresh_replaces_snapshot(provider, coins):
    store = MarketDataStore(provider, limit=30)
    notified = []
    store.add_listener(lambda: notified.append(store.snapshot.generation))

    assert store.loading is True
    assert await store.refresh() is True

    assert store.loading is False
    assert [c.id for c in store.snapshot.coins] == [c.id for c in coins]
    assert store.snapshot.generation == 1
    assert store.snapshot.fetched_at is not None
    assert notified == [1]


@pytest.mark.asyncio
async def test_refresh_respects_limit(provider):
    store = MarketDataStore(provider, limit=2)
    await store.refresh()
    assert [c.id for c in store.snapshot.coins] == ["bitcoin", "ethereum"]


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_snapshot(provider, coins):
    store = MarketDataStore(provider)
    await store.refresh()
    before = store.snapshot

    provider.fail_top = True
    provider.coins = [make_coin("dogecoin", "Dogecoin", 0.1, 1.0e10)]
    assert await store.refresh() is False

    assert store.snapshot is before
    assert store.generation == 2


@pytest.mark.asyncio
async def test_first_refresh_failure_ends_loading_with_empty_snapshot():
    provider = FakeProvider()
    provider.fail_top = True
    store = MarketDataStore(provider)
    notified = []
    store.add_listener(lambda: notified.append(True))

    assert await store.refresh() is False
    assert store.loading is False
    assert store.snapshot.coins == ()
    assert notified == [True]


@pytest.mark.asyncio
async def test_stale_response_is_discarded():
    old = [make_coin("bitcoin", "Bitcoin", 40000.0, 1.0e12)]
    new = [make_coin("bitcoin", "Bitcoin", 51000.0, 1.0e12)]
    slow_gate, fast_gate = asyncio.Event(), asyncio.Event()
    fast_gate.set()
    store = MarketDataStore(GatedProvider([(slow_gate, old), (fast_gate, new)]))

    slow = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    assert await store.refresh() is True

    slow_gate.set()
    assert await slow is False

    assert store.snapshot.generation == 2
    assert store.snapshot.coins[0].current_price == 51000.0
