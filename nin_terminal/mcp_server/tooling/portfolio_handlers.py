"""Portfolio analysis, stock screening and the mock holdings book."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

from nin_terminal.data import SCREENER_UNIVERSE, USER_HOLDINGS
from nin_terminal.mcp_server.tooling.formatting import markdown_table
from nin_terminal.mcp_server.tooling.shared import success_envelope, tool_handler
from nin_terminal.schemas.envelope import ResponseEnvelope
from nin_terminal.schemas.tool_requests import (
    AnalyzePortfolioArguments,
    NoArguments,
    PortfolioHolding,
    ScreenStocksArguments,
)

# Placeholder risk and return figures until a pricing history source exists.
MOCK_RISK = {"volatility": 15.2, "beta": 1.2, "sharpe_ratio": 0.8}
MOCK_PERFORMANCE = {"daily": 0.005, "weekly": 0.012, "monthly": 0.035, "yearly": 0.128}


def _plain(value: float) -> str:
    """Render ``20.0`` as ``20`` and ``20.5`` as ``20.5``."""
    return str(int(value)) if float(value).is_integer() else str(value)


# ---------------------------------------------------------------------------
# Portfolio analysis
# ---------------------------------------------------------------------------


def industry_allocation(holdings: list[PortfolioHolding]) -> tuple[dict[str, float], float]:
    """Percent of portfolio value per industry, and the total value."""
    values: dict[str, float] = {}
    for holding in holdings:
        values[holding.industry] = (
            values.get(holding.industry, 0.0) + holding.current_price * holding.shares
        )
    total = sum(values.values())
    if total <= 0:
        return {industry: 0.0 for industry in values}, 0.0
    return {
        industry: round(value / total * 100, 2) for industry, value in values.items()
    }, total


def diversification_description(allocation: dict[str, float]) -> str:
    count = len(allocation)
    if count <= 2:
        return "highly concentrated in a few industries"
    if count <= 4:
        return "moderately diversified across a few industries"
    return "well diversified across multiple industries"


def diversification_recommendation(allocation: dict[str, float]) -> str:
    if not allocation:
        return "Add holdings to get a diversification assessment."
    top_industry = max(allocation, key=lambda industry: allocation[industry])
    top_share = allocation[top_industry]
    if len(allocation) <= 2:
        return (
            "Your portfolio is highly concentrated. Consider diversifying beyond "
            f"{top_industry} to reduce sector-specific risk."
        )
    if top_share > 40:
        return (
            f"You have {top_share:.1f}% of your portfolio in {top_industry}. "
            "Consider reducing this exposure to minimize sector risk."
        )
    return "Your portfolio is well balanced across industries."


def render_portfolio_report(analysis: dict[str, Any]) -> str:
    risk = analysis["risk"]
    performance = analysis["performance"]

    report = "## Industry Diversification\n\n"
    report += markdown_table(
        ["Industry", "Allocation"],
        [
            [industry, f"{share:.2f}%"]
            for industry, share in analysis["diversification"]["by_industry"].items()
        ],
    )
    report += "\n## Risk Metrics\n\n"
    report += markdown_table(
        ["Metric", "Value"],
        [
            ["Volatility", f"{risk['volatility']:.2f}%"],
            ["Beta", f"{risk['beta']:.2f}"],
            ["Sharpe Ratio", f"{risk['sharpe_ratio']:.2f}"],
        ],
    )
    report += "\n## Performance\n\n"
    report += markdown_table(
        ["Timeframe", "Return"],
        [
            [label, f"{performance[key] * 100:.2f}%"]
            for label, key in (
                ("Daily", "daily"),
                ("Weekly", "weekly"),
                ("Monthly", "monthly"),
                ("Yearly", "yearly"),
            )
        ],
    )
    report += "\n## Recommendations\n\n"
    report += f"- **Diversification**: {analysis['diversification']['recommendation']}\n"
    report += f"- **Risk Management**: {risk['recommendation']}\n"
    report += f"- **Performance Improvement**: {performance['recommendation']}\n"
    return report


@tool_handler("Error analyzing portfolio")
async def analyze_portfolio(
    args: AnalyzePortfolioArguments, context: Any
) -> ResponseEnvelope:
    allocation, total_value = industry_allocation(args.holdings)
    analysis = {
        "total_value": round(total_value, 2),
        "diversification": {
            "by_industry": allocation,
            "recommendation": diversification_recommendation(allocation),
        },
        "risk": {
            **MOCK_RISK,
            "recommendation": (
                "Consider adding some defensive stocks to reduce portfolio volatility."
            ),
        },
        "performance": {
            **MOCK_PERFORMANCE,
            "recommendation": (
                "Your portfolio is performing well, but consider rebalancing to "
                "capture growth in the technology sector."
            ),
        },
    }
    summary = (
        "I've analyzed your portfolio and here are the key insights:\n\n"
        f"**Diversification**: Your portfolio is {diversification_description(allocation)}\n\n"
        f"**Risk Profile**: Your portfolio has a beta of {MOCK_RISK['beta']:.2f} "
        f"and a Sharpe ratio of {MOCK_RISK['sharpe_ratio']:.2f}\n\n"
        f"**Performance**: Your portfolio has returned "
        f"{MOCK_PERFORMANCE['monthly'] * 100:.2f}% over the past month"
    )
    return success_envelope(
        summary,
        title="Portfolio Analysis",
        report=render_portfolio_report(analysis),
        metadata=analysis,
    )


# ---------------------------------------------------------------------------
# Screener
# ---------------------------------------------------------------------------

_MARKET_CAP_TIERS: dict[str, Callable[[float], bool]] = {
    "large": lambda cap: cap >= 500_000_000_000,
    "mid": lambda cap: 100_000_000_000 <= cap <= 500_000_000_000,
    "small": lambda cap: 20_000_000_000 <= cap <= 100_000_000_000,
    "micro": lambda cap: cap <= 20_000_000_000,
}


def _in_range(value: float, low: float | None, high: float | None) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _moving_average_matches(rule: str, price: float, ma50: float, ma200: float) -> bool:
    if rule == "above50":
        return price >= ma50
    if rule == "below50":
        return price <= ma50
    if rule == "above200":
        return price >= ma200
    if rule == "below200":
        return price <= ma200
    if rule == "crossover50":
        return price > ma50 > ma200
    if rule == "crossover200":
        return price > ma200 and ma50 < ma200
    return True


def matches_criteria(stock: dict[str, Any], criteria: ScreenStocksArguments) -> bool:
    if criteria.market_cap and not _MARKET_CAP_TIERS[criteria.market_cap](stock["market_cap"]):
        return False
    if criteria.sector and stock["sector"].lower() != criteria.sector.strip().lower():
        return False
    if criteria.pe_ratio and not _in_range(
        stock["pe_ratio"], criteria.pe_ratio.min, criteria.pe_ratio.max
    ):
        return False
    if criteria.dividend and not _in_range(stock["dividend"], criteria.dividend.min, None):
        return False
    if criteria.price_change:
        change = stock["price_change"][criteria.price_change.period]
        if not _in_range(change, criteria.price_change.min, criteria.price_change.max):
            return False
    if criteria.volume and not _in_range(stock["volume"], criteria.volume.min, None):
        return False
    if not _in_range(stock["price"], criteria.min_price, criteria.max_price):
        return False

    technicals = criteria.technicals
    if technicals:
        stock_technicals = stock["technicals"]
        if technicals.rsi and not _in_range(
            stock_technicals["rsi"], technicals.rsi.min, technicals.rsi.max
        ):
            return False
        if technicals.macd and stock_technicals["macd"] != technicals.macd:
            return False
        if technicals.moving_averages:
            averages = stock_technicals["moving_averages"]
            if not _moving_average_matches(
                technicals.moving_averages, stock["price"], averages["ma50"], averages["ma200"]
            ):
                return False
    return True


def _bounds(low: float | None, high: float | None, suffix: str = "") -> str:
    parts = []
    if low is not None:
        parts.append(f"min {_plain(low)}{suffix}")
    if high is not None:
        parts.append(f"max {_plain(high)}{suffix}")
    return ", ".join(parts)


def describe_criteria(criteria: ScreenStocksArguments) -> list[str]:
    lines = []
    if criteria.market_cap:
        lines.append(f"- Market Cap: {criteria.market_cap}")
    if criteria.sector:
        lines.append(f"- Sector: {criteria.sector}")
    if criteria.pe_ratio:
        lines.append(f"- P/E Ratio: {_bounds(criteria.pe_ratio.min, criteria.pe_ratio.max)}")
    if criteria.dividend and criteria.dividend.min is not None:
        lines.append(f"- Dividend: min {_plain(criteria.dividend.min)}%")
    if criteria.price_change:
        change = criteria.price_change
        lines.append(
            f"- {change.period.upper()} Price Change: {_bounds(change.min, change.max, '%')}"
        )
    if criteria.volume and criteria.volume.min is not None:
        lines.append(f"- Volume: min {criteria.volume.min:,.0f}")
    if criteria.min_price is not None or criteria.max_price is not None:
        lines.append(f"- Price: {_bounds(criteria.min_price, criteria.max_price)}")
    if criteria.technicals:
        technicals = criteria.technicals
        if technicals.rsi:
            lines.append(f"- RSI: {_bounds(technicals.rsi.min, technicals.rsi.max)}")
        if technicals.macd:
            lines.append(f"- MACD: {technicals.macd}")
        if technicals.moving_averages:
            lines.append(f"- Moving Averages: {technicals.moving_averages}")
    return lines


def render_screening_report(
    stocks: list[dict[str, Any]], criteria: ScreenStocksArguments
) -> str:
    if not stocks:
        return "No stocks match the specified criteria."

    rows = []
    for stock in stocks:
        month = stock["price_change"]["1m"]
        rows.append(
            [
                stock["symbol"],
                stock["name"],
                stock["sector"],
                f"₹{stock['price']}",
                f"{stock['pe_ratio']:.1f}",
                f"{stock['dividend']:.1f}%",
                f"{'▲' if month >= 0 else '▼'} {abs(month):.1f}%",
                stock["technicals"]["rsi"],
                stock["technicals"]["macd"],
            ]
        )
    report = "## Screening Results\n\n"
    report += markdown_table(
        ["Symbol", "Name", "Sector", "Price", "P/E", "Div %", "1M Change", "RSI", "MACD"],
        rows,
    )
    report += "\n## Applied Criteria\n\n"
    lines = describe_criteria(criteria)
    report += "\n".join(lines) if lines else "No specific criteria applied."
    return report


@tool_handler("Error screening stocks")
async def screen_stocks(args: ScreenStocksArguments, context: Any) -> ResponseEnvelope:
    stocks = [
        copy.deepcopy(stock) for stock in SCREENER_UNIVERSE if matches_criteria(stock, args)
    ]
    return success_envelope(
        f"I've found {len(stocks)} stocks that match your screening criteria.",
        title="Stock Screening Results",
        report=render_screening_report(stocks, args),
        metadata={"stocks": stocks, "criteria": args.applied()},
    )


# ---------------------------------------------------------------------------
# Mock holdings
# ---------------------------------------------------------------------------


def summarize_user_holdings() -> dict[str, Any]:
    holdings = copy.deepcopy(USER_HOLDINGS)
    total_value = sum(h["current_price"] * h["quantity"] for h in holdings)
    total_investment = sum(h["avg_price"] * h["quantity"] for h in holdings)
    total_pnl = sum(h["pnl"] for h in holdings)
    pnl_percentage = total_pnl / total_investment * 100 if total_investment else 0.0
    return {
        "holdings": holdings,
        "total_value": round(total_value, 2),
        "total_pnl": round(total_pnl, 2),
        "pnl_percentage": round(pnl_percentage, 4),
    }


def _signed_rupees(value: float) -> str:
    return f"{'+' if value >= 0 else '-'}₹{abs(value):,.2f}"


def render_user_holdings_table(data: dict[str, Any]) -> str:
    rows = []
    for h in data["holdings"]:
        rows.append(
            [
                h["symbol"],
                h["name"],
                h["industry"],
                f"{h['quantity']:.2f}",
                f"₹{h['current_price']:.2f}",
                f"{'▲' if h['change'] >= 0 else '▼'} {abs(h['change']):.2f}%",
                f"₹{h['avg_price']:.2f}",
                f"{'▲' if h['pnl'] >= 0 else '▼'} ₹{abs(h['pnl']):.2f}",
            ]
        )
    table = markdown_table(
        ["Symbol", "Name", "Industry", "Quantity", "Price", "Change", "Avg Price", "P&L"],
        rows,
    )
    table += f"\n**Total Portfolio Value**: ₹{data['total_value']:,.2f}\n"
    table += (
        f"**Total P&L**: {_signed_rupees(data['total_pnl'])} "
        f"({'+' if data['pnl_percentage'] >= 0 else ''}{data['pnl_percentage']:.2f}%)"
    )
    return table


@tool_handler("Error fetching user holdings")
async def get_user_holdings(args: NoArguments, context: Any) -> ResponseEnvelope:
    data = summarize_user_holdings()
    table = render_user_holdings_table(data)
    top = "\n".join(
        f"- {h['name']} ({h['symbol']}): {h['quantity']:.2f} shares at ₹{h['current_price']:.2f}"
        for h in data["holdings"][:3]
    )
    summary = (
        "Here are your current holdings:\n\n"
        f"Total Portfolio Value: ₹{data['total_value']:,.2f}\n"
        f"Total P&L: {_signed_rupees(data['total_pnl'])} "
        f"({'+' if data['pnl_percentage'] >= 0 else ''}{data['pnl_percentage']:.2f}%)\n\n"
        f"Top Holdings:\n{top}\n\nAll Holdings:\n{table}"
    )
    return success_envelope(
        summary,
        title="User Holdings",
        report=table,
        metadata=data,
    )
