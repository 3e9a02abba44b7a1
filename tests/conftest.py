from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from crypto_tracker.db import SQLModelStorage, create_db_engine
from crypto_tracker.providers import MarketProviderABC
from crypto_tracker.schemas import Coin, PricePoint, PriceSeries

BASE_TS = datetime(2024, 3, 1, tzinfo=timezone.utc)


def make_coin(coin_id: str, name: str, price: float, cap: float, change: float = 1.5) -> Coin:
    return Coin(
        id=coin_id,
        name=name,
        image=f"https://assets.example/{coin_id}.png",
        current_price=price,
        price_change_percentage_24h=change,
        market_cap=cap,
    )


def make_series(coin_id: str, days: int = 7, start: float = 100.0) -> PriceSeries:
    points = []
    for i in range(days + 1):
        ts = BASE_TS + timedelta(days=i)
        points.append(PricePoint(timestamp=ts, label=ts.date().isoformat(), price=start + i))
    return PriceSeries(coin_id=coin_id, points=tuple(points))


class FakeProvider(MarketProviderABC):
    """In-process provider that counts calls and can be made to fail or block."""

    def __init__(self, coins: list[Coin] | None = None) -> None:
        self.coins = list(coins or [])
        self.top_calls = 0
        self.series_calls: list[str] = []
        self.fail_top = False
        self.fail_series = False
        self.series_gate: asyncio.Event | None = None
        self.closed = False

    async def get_top_coins(self, limit: int) -> list[Coin]:
        self.top_calls += 1
        if self.fail_top:
            raise httpx.ConnectError("offline")
        return self.coins[:limit]

    async def get_price_series(self, coin_id: str, days: int) -> PriceSeries:
        self.series_calls.append(coin_id)
        if self.series_gate is not None:
            await self.series_gate.wait()
        if self.fail_series:
            raise httpx.ConnectError("offline")
        return make_series(coin_id, days)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def coins() -> list[Coin]:
    return [
        make_coin("bitcoin", "Bitcoin", 50000.0, 1.0e12, change=2.1),
        make_coin("ethereum", "Ethereum", 3000.0, 4.0e11, change=-0.8),
        make_coin("solana", "Solana", 150.0, 7.0e10, change=5.0),
        make_coin("bitcoin-cash", "Bitcoin Cash", 400.0, 8.0e9, change=-3.2),
    ]


@pytest.fixture()
def provider(coins) -> FakeProvider:
    return FakeProvider(coins)


@pytest.fixture()
def storage(tmp_path) -> SQLModelStorage:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'state.db'}")
    yield SQLModelStorage(engine)
    engine.dispose()
