from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from conftest import FakeProvider
from crypto_tracker.config import Settings
from crypto_tracker.container import init_container
from crypto_tracker.main import create_app


@pytest.fixture()
def api(tmp_path, coins):
    provider = FakeProvider(coins)
    settings = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'state.db'}",
        REFRESH_INTERVAL_SECONDS=3600,
    )
    container = init_container(settings)
    container.market_provider.override(providers.Object(provider))
    app = create_app(container)

    with TestClient(app) as client:
        client.post("/market/refresh")
        yield client, provider

    assert provider.closed is True


def test_health(api):
    client, _ = api
    assert client.get("/").json() == {"status": "ok"}


def test_market_list_and_search(api):
    client, _ = api

    rows = client.get("/market").json()
    assert [r["coin"]["id"] for r in rows] == ["bitcoin", "ethereum", "solana", "bitcoin-cash"]

    rows = client.get("/market", params={"search": "ETH"}).json()
    assert [r["coin"]["id"] for r in rows] == ["ethereum"]


def test_manual_refresh_reports_status(api):
    client, provider = api
    assert client.post("/market/refresh").json()["status"] == "refreshed"

    provider.fail_top = True
    body = client.post("/market/refresh").json()
    assert body["status"] == "unchanged"
    assert len(client.get("/market").json()) == 4


def test_portfolio_accumulates_and_values_holdings(api):
    client, _ = api

    client.post("/portfolio/bitcoin", json={"amount": "2"})
    view = client.post("/portfolio/bitcoin", json={"amount": 1}).json()

    assert view["total_value"] == 150000.0
    assert view["rows"][0]["amount"] == 3.0
    assert client.get("/portfolio").json() == view


def test_portfolio_rejects_non_numeric_amount(api):
    client, _ = api

    response = client.post("/portfolio/bitcoin", json={"amount": "lots"})

    assert response.status_code == 422
    assert client.get("/portfolio").json()["rows"] == []


def test_toggle_favorite(api):
    client, _ = api

    assert client.post("/favorites/bitcoin/toggle").json() == {"coin_id": "bitcoin", "favorite": True}
    assert [c["id"] for c in client.get("/favorites").json()] == ["bitcoin"]

    assert client.post("/favorites/bitcoin/toggle").json()["favorite"] is False
    assert client.get("/favorites").json() == []


def test_set_alert(api):
    client, _ = api

    body = client.post("/alerts/ethereum", json={"price": 3000}).json()

    assert body["price"] == 3000.0
    assert body["message"] == "Alert set for Ethereum (ethereum) at $3000"
    assert client.get("/alerts").json()["alerts"] == {"ethereum": 3000.0}
    assert client.post("/alerts/ethereum", json={"price": "later"}).status_code == 422


def test_show_chart_then_load_series_makes_one_call(api):
    client, provider = api

    panels = client.post("/charts/solana").json()
    assert [p["coin_id"] for p in panels] == ["solana"]

    series = client.get("/charts/solana/series").json()
    assert series["coin_id"] == "solana"
    assert len(series["points"]) == 8
    assert provider.series_calls == ["solana"]

    state = client.get("/dashboard").json()
    assert state["active_view"] == "charts"
    assert state["charts"][0]["series"]["coin_id"] == "solana"


def test_series_unavailable(api):
    client, provider = api
    provider.fail_series = True

    assert client.get("/charts/bitcoin/series").status_code == 502


def test_view_selection_and_search(api):
    client, _ = api

    assert client.put("/view/portfolio").json() == {"active_view": "portfolio"}
    assert client.put("/view/settings").status_code == 422

    client.put("/search", json={"text": "sol"})
    state = client.get("/dashboard").json()

    assert state["active_view"] == "portfolio"
    assert [r["coin"]["id"] for r in state["market"]] == ["solana"]


def test_state_persists_across_app_restarts(tmp_path, coins):
    settings = Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'state.db'}", REFRESH_INTERVAL_SECONDS=3600)

    for _ in range(2):
        with TestClient(create_app(_container(settings, coins))) as client:
            client.post("/market/refresh")
            client.post("/portfolio/ethereum", json={"amount": "1.5"})

    with TestClient(create_app(_container(settings, coins))) as client:
        client.post("/market/refresh")
        assert client.get("/portfolio").json()["rows"][0]["amount"] == 3.0


def _container(settings, coins):
    container = init_container(settings)
    container.market_provider.override(providers.Object(FakeProvider(coins)))
    return container


def test_stream_pushes_frames_on_change(api):
    client, _ = api

    with client.websocket_connect("/stream") as ws:
        first = ws.receive_json()
        assert first["active_view"] == "market"

        client.post("/favorites/solana/toggle")
        for _ in range(5):
            frame = ws.receive_json()
            if any(r["is_favorite"] for r in frame["market"]):
                break
        assert [r["coin"]["id"] for r in frame["market"] if r["is_favorite"]] == ["solana"]


@pytest.mark.parametrize("path, body", [
    ("/portfolio/bitcoin", {"amount": True}),
    ("/portfolio/bitcoin", {"amount": None}),
    ("/alerts/bitcoin", {"price": False}),
])
def test_boolean_and_null_numbers_are_rejected(api, path, body):
    client, _ = api

    assert client.post(path, json=body).status_code == 422

    state = client.get("/dashboard").json()
    assert state["portfolio"]["rows"] == []
    assert state["alerts"] == {}
    assert state["alert_message"] is None


def test_series_carries_its_chart_label(api):
    client, _ = api

    series = client.get("/charts/solana/series").json()
    assert series["title"] == "SOLANA Price"

    panel = client.get("/charts").json()[0]
    assert panel["series"]["title"] == "SOLANA Price"


def test_mixed_case_ids_resolve_to_snapshot_coins(api):
    client, _ = api

    assert client.post("/favorites/Bitcoin/toggle").json() == {"coin_id": "bitcoin", "favorite": True}
    assert client.post("/alerts/ETHEREUM", json={"price": 3000}).json()["coin_id"] == "ethereum"
    view = client.post("/portfolio/Solana", json={"amount": "2"}).json()

    assert view["total_value"] == 300.0
    assert view["unpriced"] == []
    assert [c["id"] for c in client.get("/favorites").json()] == ["bitcoin"]
