"""Tests for Binance spot and Simple Earn valuation."""

from __future__ import annotations

import httpx
import pytest

from nin_terminal.core.errors import ConfigurationError, ProviderError
from nin_terminal.services.binance import (
    BinanceClient,
    merge_balances,
    price_in_usdt,
    value_holdings,
)

SPOT = [
    {"asset": "BTC", "free": "0.5", "locked": "0.1"},
    {"asset": "USDT", "free": "100", "locked": "0"},
    {"asset": "DUST", "free": "0", "locked": "0"},
]
TICKERS = [
    {"symbol": "BTCUSDT", "lastPrice": "30000"},
    {"symbol": "ETHBTC", "lastPrice": "0.05"},
]
FLEXIBLE = {"total": 1, "rows": [{"asset": "ETH", "totalAmount": "2"}]}
LOCKED = {"total": 1, "rows": [{"asset": "BTC", "amount": "0.4"}]}


def _router(overrides: dict[str, httpx.Response] | None = None, seen=None):
    responses = {
        "/sapi/v3/asset/getUserAsset": lambda: httpx.Response(200, json=SPOT),
        "/api/v3/ticker/24hr": lambda: httpx.Response(200, json=TICKERS),
        "/sapi/v1/simple-earn/flexible/position": lambda: httpx.Response(200, json=FLEXIBLE),
        "/sapi/v1/simple-earn/locked/position": lambda: httpx.Response(200, json=LOCKED),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if overrides and request.url.path in overrides:
            return overrides[request.url.path]
        return responses[request.url.path]()

    return handler


def _client(settings_factory, handler) -> BinanceClient:
    config = settings_factory(
        BINANCE_API_KEY="test-binance-key", BINANCE_SECRET_KEY="test-binance-secret"
    )
    return BinanceClient(config, transport=httpx.MockTransport(handler))


class TestPricing:
    @pytest.mark.unit
    def test_stablecoins_are_one_dollar(self):
        assert price_in_usdt("USDC", {}) == 1.0

    @pytest.mark.unit
    def test_direct_pair_is_preferred(self):
        prices = {"ETHUSDT": 1600.0, "ETHBTC": 0.05, "BTCUSDT": 30000.0}
        assert price_in_usdt("ETH", prices) == 1600.0

    @pytest.mark.unit
    def test_falls_back_to_btc_cross(self):
        prices = {"ETHBTC": 0.05, "BTCUSDT": 30000.0}
        assert price_in_usdt("ETH", prices) == pytest.approx(1500.0)

    @pytest.mark.unit
    def test_unknown_asset_is_zero(self):
        assert price_in_usdt("NOPE", {"BTCUSDT": 30000.0}) == 0.0


@pytest.mark.unit
def test_merge_balances_adds_earn_positions():
    balances = merge_balances(SPOT, FLEXIBLE["rows"], LOCKED["rows"])

    assert balances["BTC"] == {"free": 0.5, "locked": pytest.approx(0.5)}
    assert balances["ETH"] == {"free": 2.0, "locked": 0.0}
    assert balances["USDT"] == {"free": 100.0, "locked": 0.0}


@pytest.mark.unit
def test_value_holdings_skips_zero_balances_and_sorts():
    balances = merge_balances(SPOT, FLEXIBLE["rows"], LOCKED["rows"])
    prices = {"BTCUSDT": 30000.0, "ETHBTC": 0.05}

    holdings, total = value_holdings(balances, prices)

    assert [h["asset"] for h in holdings] == ["BTC", "ETH", "USDT"]
    assert holdings[0]["usd_value"] == 30000.0
    assert holdings[1]["usd_value"] == 3000.0
    assert total == 33100.0


@pytest.mark.asyncio
async def test_fetch_portfolio_signs_private_requests(settings_factory):
    seen: list[httpx.Request] = []
    client = _client(settings_factory, _router(seen=seen))

    portfolio = await client.fetch_portfolio()

    assert portfolio["total_value_usd"] == 33100.0
    assert portfolio["warnings"] == []
    by_path = {request.url.path: request for request in seen}
    spot_request = by_path["/sapi/v3/asset/getUserAsset"]
    assert spot_request.method == "POST"
    assert spot_request.headers["X-MBX-APIKEY"] == "test-binance-key"
    assert "signature" in spot_request.url.params
    assert "timestamp" in spot_request.url.params
    ticker_request = by_path["/api/v3/ticker/24hr"]
    assert "X-MBX-APIKEY" not in ticker_request.headers
    assert "signature" not in ticker_request.url.params
    assert by_path["/sapi/v1/simple-earn/flexible/position"].url.params["size"] == "100"


@pytest.mark.asyncio
async def test_earn_failure_degrades_with_warning(settings_factory):
    handler = _router(
        {"/sapi/v1/simple-earn/flexible/position": httpx.Response(500, json={"msg": "boom"})}
    )
    client = _client(settings_factory, handler)

    portfolio = await client.fetch_portfolio()

    assert [h["asset"] for h in portfolio["spot"]] == ["BTC", "USDT"]
    assert portfolio["warnings"] == [
        "flexible earn positions unavailable: "
        "Binance API error: 500 Internal Server Error (boom)"
    ]


@pytest.mark.asyncio
async def test_ticker_failure_values_at_zero(settings_factory):
    handler = _router({"/api/v3/ticker/24hr": httpx.Response(429)})
    client = _client(settings_factory, handler)

    portfolio = await client.fetch_portfolio()

    assert portfolio["total_value_usd"] == 100.0
    assert portfolio["warnings"][0].startswith("ticker prices unavailable:")


@pytest.mark.asyncio
async def test_spot_failure_is_fatal(settings_factory):
    handler = _router(
        {
            "/sapi/v3/asset/getUserAsset": httpx.Response(
                401, json={"code": -2015, "msg": "Invalid API-key"}
            )
        }
    )
    client = _client(settings_factory, handler)

    with pytest.raises(ProviderError) as exc_info:
        await client.fetch_portfolio()

    assert exc_info.value.message == (
        "Binance API error: 401 Unauthorized (Invalid API-key)"
    )
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_missing_secret_raises_configuration_error(settings_factory):
    config = settings_factory(BINANCE_API_KEY="key-only")
    client = BinanceClient(config)

    with pytest.raises(ConfigurationError, match="not configured"):
        await client.fetch_portfolio()


@pytest.mark.asyncio
async def test_binance_tool_renders_table_and_partial_data(binance_gateway):
    handler = _router(
        {"/sapi/v1/simple-earn/locked/position": httpx.Response(503)}
    )
    gw = binance_gateway(handler)

    envelope = await gw.execute("getUserBinanceHoldings", {})

    summary = envelope.messages[0].content
    assert summary.startswith("Here are your current Binance holdings:")
    assert "Total Portfolio Value: $21,100.00" in summary
    report = envelope.references[0].content
    assert "| BTC | 0.500000 | 0.100000 | $18,000.00 |" in report
    assert "**Partial data:**" in report
    assert envelope.references[0].metadata["warnings"][0].startswith(
        "locked earn positions unavailable:"
    )


@pytest.mark.asyncio
async def test_binance_tool_spot_failure(binance_gateway):
    handler = _router({"/sapi/v3/asset/getUserAsset": httpx.Response(500)})
    gw = binance_gateway(handler)

    envelope = await gw.execute("getUserBinanceHoldings", {})

    assert envelope.error.kind == "provider"
    assert envelope.messages[0].content == (
        "Error fetching Binance holdings: Binance API error: 500 Internal Server Error"
    )
    assert envelope.references == []
