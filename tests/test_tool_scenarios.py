"""End-to-end tool scenarios through the gateway."""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
@pytest.mark.integration
async def test_screen_stocks_by_sector_returns_only_matching_stocks(gateway):
    envelope = await gateway.execute("screenStocks", {"sector": "IT"})

    stocks = envelope.references[0].metadata["stocks"]
    assert [stock["symbol"] for stock in stocks] == ["TCS", "INFY"]
    assert all(stock["sector"] == "IT" for stock in stocks)
    assert envelope.messages[0].content == (
        f"I've found {len(stocks)} stocks that match your screening criteria."
    )
    assert envelope.references[0].metadata["criteria"] == {"sector": "IT"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_status_provider_failure_has_no_references(groww_gateway):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"status": "FAILURE"})

    gw = groww_gateway(handler)

    envelope = await gw.execute(
        "getGrowwOrderStatus", {"groww_order_id": "GMK39038RDT490CCVRO"}
    )

    assert "Error fetching order status" in envelope.messages[0].content
    assert envelope.messages[0].content == (
        "Error fetching order status: Groww API error: 500 Internal Server Error"
    )
    assert envelope.references == []
    assert envelope.error.kind == "provider"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_portfolio_allocation_is_proportional_to_value(gateway):
    envelope = await gateway.execute(
        "analyzePortfolio",
        {
            "holdings": [
                {"industry": "IT", "currentPrice": 100, "shares": 10},
                {"industry": "Banking", "currentPrice": 50, "shares": 10},
            ]
        },
    )

    metadata = envelope.references[0].metadata
    allocation = metadata["diversification"]["by_industry"]
    assert allocation == {"IT": 66.67, "Banking": 33.33}
    assert sum(allocation.values()) == pytest.approx(100.0, abs=0.01)
    assert metadata["total_value"] == 1500
    assert "highly concentrated" in envelope.messages[0].content


@pytest.mark.asyncio
@pytest.mark.integration
async def test_ltp_table_strips_exchange_prefix(groww_gateway):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "status": "SUCCESS",
                "payload": {"NSE_RELIANCE": 2650, "NSE_TCS": 3400},
            },
        )

    gw = groww_gateway(handler)

    envelope = await gw.execute("getGrowwSymbolsLTP", {"symbols": ["RELIANCE", "TCS"]})

    content = envelope.messages[0].content
    assert content.startswith("Last Traded Prices for 2 symbols:")
    assert "| RELIANCE | ₹2,650.00 |" in content
    assert "| TCS | ₹3,400.00 |" in content
    assert "NSE_" not in envelope.references[0].content

    assert len(seen) == 1
    request = seen[0]
    assert request.url.path == "/v1/live-data/ltp"
    assert request.url.params["exchange_symbols"] == "NSE_RELIANCE,NSE_TCS"
    assert request.url.params["segment"] == "CASH"
