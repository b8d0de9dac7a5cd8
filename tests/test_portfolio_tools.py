"""Tests for portfolio analysis, screening and the mock holdings book."""

from __future__ import annotations

import pytest

from nin_terminal.mcp_server.tooling.portfolio_handlers import (
    diversification_description,
    diversification_recommendation,
    industry_allocation,
    summarize_user_holdings,
)
from nin_terminal.schemas.tool_requests import PortfolioHolding


def _holding(industry: str, price: float, shares: float) -> PortfolioHolding:
    return PortfolioHolding(industry=industry, current_price=price, shares=shares)


class TestIndustryAllocation:
    @pytest.mark.unit
    def test_groups_by_industry(self):
        allocation, total = industry_allocation(
            [
                _holding("IT", 100, 5),
                _holding("IT", 100, 5),
                _holding("Pharma", 250, 4),
            ]
        )

        assert allocation == {"IT": 50.0, "Pharma": 50.0}
        assert total == 2000

    @pytest.mark.unit
    def test_empty_portfolio(self):
        assert industry_allocation([]) == ({}, 0.0)

    @pytest.mark.unit
    def test_zero_value_portfolio_does_not_divide_by_zero(self):
        allocation, total = industry_allocation([_holding("IT", 0, 10)])

        assert allocation == {"IT": 0.0}
        assert total == 0.0


class TestDiversification:
    @pytest.mark.unit
    def test_concentrated(self):
        allocation = {"IT": 70.0, "Banking": 30.0}

        assert diversification_description(allocation) == (
            "highly concentrated in a few industries"
        )
        assert "beyond IT" in diversification_recommendation(allocation)

    @pytest.mark.unit
    def test_overweight_industry(self):
        allocation = {"IT": 55.0, "Banking": 25.0, "Pharma": 20.0}

        assert diversification_recommendation(allocation).startswith(
            "You have 55.0% of your portfolio in IT."
        )

    @pytest.mark.unit
    def test_balanced(self):
        allocation = {"IT": 20.0, "Banking": 20.0, "Pharma": 20.0, "FMCG": 20.0, "Auto": 20.0}

        assert diversification_description(allocation) == (
            "well diversified across multiple industries"
        )
        assert diversification_recommendation(allocation) == (
            "Your portfolio is well balanced across industries."
        )


@pytest.mark.asyncio
async def test_portfolio_requires_industry(gateway):
    envelope = await gateway.execute(
        "analyzePortfolio", {"holdings": [{"currentPrice": 100, "shares": 10}]}
    )

    assert envelope.error.kind == "invalid_arguments"
    assert "holdings.0.industry" in envelope.messages[0].content


@pytest.mark.asyncio
async def test_portfolio_report_sections(gateway):
    envelope = await gateway.execute(
        "analyzePortfolio",
        {"holdings": [{"industry": "IT", "current_price": 10, "shares": 1}]},
    )

    report = envelope.references[0].content
    assert "| IT | 100.00% |" in report
    assert "## Risk Metrics" in report
    assert "| Monthly | 3.50% |" in report
    assert envelope.references[0].metadata["risk"]["beta"] == 1.2


class TestScreenStocks:
    @pytest.mark.asyncio
    async def test_no_criteria_returns_whole_universe(self, gateway):
        envelope = await gateway.execute("screenStocks", {})

        assert len(envelope.references[0].metadata["stocks"]) == 5
        assert "No specific criteria applied." in envelope.references[0].content

    @pytest.mark.asyncio
    async def test_sector_match_is_case_insensitive(self, gateway):
        envelope = await gateway.execute("screenStocks", {"sector": "banking"})

        stocks = envelope.references[0].metadata["stocks"]
        assert [s["symbol"] for s in stocks] == ["HDFCBANK"]

    @pytest.mark.asyncio
    async def test_pe_and_dividend_filters(self, gateway):
        envelope = await gateway.execute(
            "screenStocks", {"peRatio": {"max": 25}, "dividend": {"min": 1}}
        )

        stocks = envelope.references[0].metadata["stocks"]
        assert [s["symbol"] for s in stocks] == ["HDFCBANK", "INFY"]
        report = envelope.references[0].content
        assert "- P/E Ratio: max 25" in report
        assert "- Dividend: min 1%" in report

    @pytest.mark.asyncio
    async def test_price_change_period_filter(self, gateway):
        envelope = await gateway.execute(
            "screenStocks", {"priceChange": {"period": "1w", "min": 0}}
        )

        symbols = [s["symbol"] for s in envelope.references[0].metadata["stocks"]]
        assert "SUNPHARMA" not in symbols
        assert len(symbols) == 4

    @pytest.mark.asyncio
    async def test_technical_filters(self, gateway):
        envelope = await gateway.execute(
            "screenStocks",
            {"technicals": {"macd": "bullish", "rsi": {"min": 60}, "movingAverages": "above50"}},
        )

        symbols = [s["symbol"] for s in envelope.references[0].metadata["stocks"]]
        assert symbols == ["RELIANCE", "INFY"]

    @pytest.mark.asyncio
    async def test_price_bounds(self, gateway):
        envelope = await gateway.execute(
            "screenStocks", {"minPrice": 1500, "maxPrice": 2000}
        )

        symbols = [s["symbol"] for s in envelope.references[0].metadata["stocks"]]
        assert symbols == ["HDFCBANK", "INFY"]

    @pytest.mark.asyncio
    async def test_no_match(self, gateway):
        envelope = await gateway.execute("screenStocks", {"sector": "Aviation"})

        assert envelope.messages[0].content == (
            "I've found 0 stocks that match your screening criteria."
        )
        assert envelope.references[0].content == "No stocks match the specified criteria."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tier", "expected"),
        [
            ("large", ["RELIANCE", "TCS", "HDFCBANK", "INFY", "SUNPHARMA"]),
            ("mid", ["SUNPHARMA"]),
            ("small", []),
            ("LARGE", ["RELIANCE", "TCS", "HDFCBANK", "INFY", "SUNPHARMA"]),
        ],
    )
    async def test_market_cap_tiers_share_the_500bn_boundary(self, gateway, tier, expected):
        envelope = await gateway.execute("screenStocks", {"marketCap": tier})

        stocks = envelope.references[0].metadata["stocks"]
        assert [s["symbol"] for s in stocks] == expected
        assert envelope.references[0].metadata["criteria"] == {"market_cap": tier.lower()}

    @pytest.mark.asyncio
    async def test_invalid_market_cap_tier(self, gateway):
        envelope = await gateway.execute("screenStocks", {"marketCap": "giant"})

        assert envelope.error.kind == "invalid_arguments"


class TestUserHoldings:
    @pytest.mark.unit
    def test_summary_totals(self):
        data = summarize_user_holdings()

        assert len(data["holdings"]) == 5
        assert data["total_pnl"] == pytest.approx(3270.13)
        assert data["pnl_percentage"] > 0

    @pytest.mark.asyncio
    async def test_tool_lists_top_holdings_and_table(self, gateway):
        envelope = await gateway.execute("getUserHoldings", {})

        summary = envelope.messages[0].content
        assert summary.startswith("Here are your current holdings:")
        assert "- Tata Consultancy Service (TCS):" in summary
        report = envelope.references[0].content
        assert report.startswith("| Symbol | Name | Industry |")
        assert "| BHARTIARTL | Bharti Airtel | Telecom |" in report
        assert "▼ ₹478.80" in report
