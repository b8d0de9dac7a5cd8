"""Tests for the mock-backed analysis tools."""

from __future__ import annotations

import pytest

from nin_terminal.data import get_fundamentals
from nin_terminal.mcp_server.tooling.analysis_handlers import rsi_signal
from nin_terminal.mcp_server.tooling.market_handlers import market_rsi_signal


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "arguments"),
    [
        ("analyzeFundamentals", {"symbol": "RELIANCE"}),
        ("analyzeTechnicals", {"symbol": "HDFCBANK"}),
        ("analyzeOptions", {"symbol": "INFY"}),
        ("analyzeMarket", {}),
        ("getMarketNews", {}),
        ("screenStocks", {"marketCap": "large"}),
        ("getUserHoldings", {}),
    ],
)
async def test_repeated_calls_return_identical_metadata(gateway, name, arguments):
    first = await gateway.execute(name, arguments)
    second = await gateway.execute(name, arguments)

    assert first.ok
    assert first.references[0].metadata == second.references[0].metadata
    assert first.messages[0].content == second.messages[0].content


@pytest.mark.asyncio
async def test_fundamentals_for_known_symbol(gateway):
    envelope = await gateway.execute("analyzeFundamentals", {"symbol": "RELIANCE"})

    summary = envelope.messages[0].content
    assert summary.startswith(
        "I've analyzed the fundamentals for Reliance Industries Ltd (RELIANCE):"
    )
    assert "**Market Cap**: ₹175,000.00 Cr" in summary
    assert envelope.references[0].title == "Fundamental Analysis for RELIANCE"

    report = envelope.references[0].content
    assert report.startswith(
        "# Fundamental Analysis Report: Reliance Industries Ltd (RELIANCE)"
    )
    for section in ("## Valuation Metrics", "## SWOT Analysis", "## Analyst Consensus"):
        assert section in report


@pytest.mark.asyncio
async def test_fundamentals_for_unknown_symbol_uses_default_profile(gateway):
    envelope = await gateway.execute("analyzeFundamentals", {"symbol": "ZOMATO"})

    metadata = envelope.references[0].metadata
    assert metadata["symbol"] == "ZOMATO"
    assert metadata["name"] == "ZOMATO Ltd"
    assert metadata["sector"] == "Unknown"
    assert metadata["recommendation"]["rating"] == "hold"
    assert len(metadata["strengths"]) == 3
    assert metadata["analyst_ratings"]["buy"] == 5
    assert "**Rating**: Hold" in envelope.references[0].content


@pytest.mark.unit
def test_fundamentals_lookup_returns_private_copy():
    profile = get_fundamentals("RELIANCE")
    profile["name"] = "changed"

    assert get_fundamentals("RELIANCE")["name"] == "Reliance Industries Ltd"


@pytest.mark.asyncio
async def test_fundamentals_percent_metrics_are_not_rescaled(gateway):
    envelope = await gateway.execute("analyzeFundamentals", {"symbol": "ZOMATO"})

    report = envelope.references[0].content
    assert "| Dividend Yield | 2.00% | 2.00% | ◆ In line |" in report
    assert "| Return on Equity | 15.00% | 15.00% | ◆ In line |" in report


@pytest.mark.asyncio
async def test_technicals_summary_and_report(gateway):
    envelope = await gateway.execute("analyzeTechnicals", {"symbol": "RELIANCE"})

    summary = envelope.messages[0].content
    assert summary.startswith("Here's the technical analysis for RELIANCE:")
    assert "**Recommendation**:" in summary
    report = envelope.references[0].content
    assert report.startswith("# Technical Analysis Report: RELIANCE")
    assert "### Moving Averages" in report


@pytest.mark.asyncio
async def test_technicals_for_unknown_symbol_is_neutral(gateway):
    envelope = await gateway.execute("analyzeTechnicals", {"symbol": "ZOMATO"})

    metadata = envelope.references[0].metadata
    assert metadata["symbol"] == "ZOMATO"
    assert metadata["recommendation"]["action"] == "hold"
    assert "Hold for medium-term" in envelope.messages[0].content


@pytest.mark.asyncio
async def test_options_for_unknown_symbol_uses_covered_call(gateway):
    envelope = await gateway.execute("analyzeOptions", {"symbol": "ZOMATO"})

    metadata = envelope.references[0].metadata
    assert [s["name"] for s in metadata["strategies"]] == ["Covered Call"]
    assert metadata["unusual_activity"] == []

    report = envelope.references[0].content
    assert "### 1. Covered Call" in report
    assert "(Exp: 15 Dec 2023)" in report
    assert "## Unusual Options Activity" not in report
    assert envelope.messages[0].content.startswith(
        "I've analyzed the options market for ZOMATO:"
    )


@pytest.mark.asyncio
async def test_uncapped_strategy_has_no_risk_reward_ratio(gateway):
    envelope = await gateway.execute("analyzeOptions", {"symbol": "INFY"})

    report = envelope.references[0].content
    covered_call, protective_put = report.split("### 2. Protective Put")
    assert "- **Risk/Reward Ratio**: 20.33" in covered_call
    assert "- **Max Profit**: Unlimited" in protective_put
    assert "- **Risk/Reward Ratio**: N/A (unlimited profit potential)" in protective_put


@pytest.mark.asyncio
async def test_market_analysis_report_sections(gateway):
    envelope = await gateway.execute("analyzeMarket", {"query": "banks"})

    assert envelope.messages[0].content.startswith("Here's the current market analysis:")
    report = envelope.references[0].content
    for section in (
        "## Market Overview",
        "## Sector Performance",
        "## Technical Indicators",
        "## Recent News Impact",
    ):
        assert section in report


@pytest.mark.asyncio
async def test_market_news_is_dated_from_clock(gateway):
    envelope = await gateway.execute("getMarketNews", {})

    news = envelope.references[0].metadata
    assert [item["date"] for item in news["top_news"]] == [
        "2024-01-15",
        "2024-01-16",
        "2024-01-17",
    ]
    assert envelope.references[0].title == "Market News & Economic Calendar"
    assert envelope.messages[0].content.startswith(
        "Here are today's top market headlines and upcoming economic events:"
    )
    assert "| 2024-01-15 | RBI Maintains Repo Rate at 6.5%" in envelope.references[0].content


@pytest.mark.unit
@pytest.mark.parametrize(
    ("rsi", "expected"), [(75, "Overbought"), (70, "Overbought"), (50, "Neutral"), (25, "Oversold")]
)
def test_rsi_signal(rsi, expected):
    assert rsi_signal(rsi) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("rsi", "expected"), [(71, "OVERBOUGHT"), (70, "NEUTRAL"), (30, "NEUTRAL"), (29.9, "OVERSOLD")]
)
def test_market_rsi_signal(rsi, expected):
    assert market_rsi_signal(rsi) == expected
