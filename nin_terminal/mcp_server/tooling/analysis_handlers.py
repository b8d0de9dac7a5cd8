"""Fundamental, technical and options analysis over the static tables."""

from __future__ import annotations

from datetime import date
from typing import Any

from nin_terminal.data import get_fundamentals, get_options_analysis, get_technicals
from nin_terminal.mcp_server.tooling.formatting import (
    bullet_list,
    capitalize,
    comparison_icon,
    format_large_number,
    format_percentage,
    format_trend,
    markdown_table,
)
from nin_terminal.mcp_server.tooling.shared import success_envelope, tool_handler
from nin_terminal.schemas.envelope import ResponseEnvelope
from nin_terminal.schemas.tool_requests import SymbolArguments


def _signed_pct(ratio: float, decimals: int = 1) -> str:
    return f"{'+' if ratio >= 0 else ''}{ratio * 100:.{decimals}f}%"


def _target_upside(target: float, current: float) -> str:
    return f"{'+' if target > current else ''}{(target / current - 1) * 100:.1f}%"


# ---------------------------------------------------------------------------
# Fundamentals
# ---------------------------------------------------------------------------


def _financial_rows(metrics: dict[str, Any]) -> list[list[str]]:
    rows = []
    for label, key in (("Revenue", "revenue"), ("Net Income", "net_income")):
        m = metrics[key]
        rows.append(
            [
                label,
                f"₹{format_large_number(m['value'])}",
                format_percentage(m["growth"]),
                format_trend(m["trend"]),
            ]
        )
    eps = metrics["eps"]
    rows.append(
        ["EPS", f"₹{eps['value']:.2f}", format_percentage(eps["growth"]), format_trend(eps["trend"])]
    )
    for label, key in (("Operating Margin", "operating_margin"), ("Net Margin", "net_margin")):
        m = metrics[key]
        rows.append([label, format_percentage(m["value"]), "-", format_trend(m["trend"])])
    return rows


# dividend_yield and roe are stored as percent values, not ratios
_VALUATION_ROWS = (
    ("P/E Ratio", "pe_ratio", "ratio", False),
    ("P/B Ratio", "pb_ratio", "ratio", False),
    ("EV/EBITDA", "ev_to_ebitda", "ratio", False),
    ("Dividend Yield", "dividend_yield", "percent", True),
    ("Return on Equity", "roe", "percent", True),
    ("Debt to Equity", "debt_to_equity", "ratio", False),
)


def _valuation_cell(value: float, unit: str) -> str:
    return f"{value:.2f}%" if unit == "percent" else f"{value:.2f}"


def render_fundamentals_report(analysis: dict[str, Any]) -> str:
    report = f"# Fundamental Analysis Report: {analysis['name']} ({analysis['symbol']})\n\n"

    report += "## Company Overview\n\n"
    report += f"**Sector**: {analysis['sector']} | **Industry**: {analysis['industry']}\n"
    report += (
        f"**Current Price**: ₹{analysis['current_price']} | "
        f"**Market Cap**: ₹{format_large_number(analysis['market_cap'])}\n\n"
    )

    report += "## Financial Performance\n\n"
    report += "### Annual Metrics\n\n"
    report += markdown_table(
        ["Metric", "Value", "YoY Growth", "Trend"],
        _financial_rows(analysis["financials"]["annual"]),
    )
    report += "\n### Quarterly Metrics (Latest Quarter)\n\n"
    report += markdown_table(
        ["Metric", "Value", "QoQ Growth", "Trend"],
        _financial_rows(analysis["financials"]["quarterly"]),
    )

    valuation = analysis["valuation"]
    report += "\n## Valuation Metrics\n\n"
    report += markdown_table(
        ["Metric", "Value", "Industry Average", "Assessment"],
        [
            [
                label,
                _valuation_cell(valuation[key]["value"], unit),
                _valuation_cell(valuation[key]["industry"], unit),
                comparison_icon(
                    valuation[key]["value"], valuation[key]["industry"], higher_is_better
                ),
            ]
            for label, key, unit, higher_is_better in _VALUATION_ROWS
        ],
    )
    report += "\n### Valuation Assessment\n\n"
    report += bullet_list(
        f"**{label}**: {valuation[key]['assessment']}" for label, key, _, _ in _VALUATION_ROWS
    )

    report += "\n## SWOT Analysis\n\n"
    for heading, key in (
        ("Strengths", "strengths"),
        ("Weaknesses", "weaknesses"),
        ("Opportunities", "opportunities"),
        ("Threats", "threats"),
    ):
        report += f"### {heading}\n\n{bullet_list(analysis[key])}\n"

    ratings = analysis["analyst_ratings"]
    total = ratings["buy"] + ratings["hold"] + ratings["sell"]
    report += "## Analyst Consensus\n\n"
    report += (
        f"**Consensus Target Price**: ₹{ratings['consensus_target']} "
        f"({_signed_pct(ratings['upside'])} from current price)\n\n"
    )
    report += markdown_table(
        ["Rating", "Count", "Percentage"],
        [
            [label, ratings[key], f"{(ratings[key] / total * 100) if total else 0:.1f}%"]
            for label, key in (("Buy", "buy"), ("Hold", "hold"), ("Sell", "sell"))
        ],
    )

    recommendation = analysis["recommendation"]
    report += "\n## Investment Recommendation\n\n"
    report += f"**Rating**: {capitalize(recommendation['rating'])}\n\n"
    report += (
        f"**Target Price**: ₹{recommendation['target_price']} "
        f"({_target_upside(recommendation['target_price'], analysis['current_price'])})\n\n"
    )
    report += f"**Reasoning**: {recommendation['reasoning']}\n\n"
    return report


@tool_handler("Error fetching fundamental analysis")
async def analyze_fundamentals(args: SymbolArguments, context: Any) -> ResponseEnvelope:
    analysis = get_fundamentals(args.symbol)
    pe = analysis["valuation"]["pe_ratio"]
    annual = analysis["financials"]["annual"]
    recommendation = analysis["recommendation"]

    summary = (
        f"I've analyzed the fundamentals for {analysis['name']} ({args.symbol}):\n\n"
        f"**Current Price**: ₹{analysis['current_price']} | "
        f"**Market Cap**: ₹{format_large_number(analysis['market_cap'])}\n\n"
        f"**Valuation**: P/E {pe['value']:.2f} "
        f"({'above' if pe['value'] > pe['industry'] else 'below'} industry average "
        f"of {pe['industry']:.2f})\n\n"
        f"**Growth**: Revenue {_signed_pct(annual['revenue']['growth'])} YoY | "
        f"Net Income {_signed_pct(annual['net_income']['growth'])} YoY | "
        f"EPS {_signed_pct(annual['eps']['growth'])} YoY\n\n"
        f"**Recommendation**: {capitalize(recommendation['rating'])} with a target price of "
        f"₹{recommendation['target_price']} "
        f"({_target_upside(recommendation['target_price'], analysis['current_price'])})"
    )
    return success_envelope(
        summary,
        title=f"Fundamental Analysis for {args.symbol}",
        report=render_fundamentals_report(analysis),
        metadata=analysis,
    )


# ---------------------------------------------------------------------------
# Technicals
# ---------------------------------------------------------------------------


def rsi_signal(rsi: float) -> str:
    if rsi >= 70:
        return "Overbought"
    if rsi <= 30:
        return "Oversold"
    return "Neutral"


def _above_below(price: float, level: float) -> str:
    return "Price Above" if price > level else "Price Below"


def render_technicals_report(analysis: dict[str, Any]) -> str:
    price = analysis["price"]
    trends = analysis["trends"]
    indicators = analysis["indicators"]
    arrow = "▲" if price["change"] >= 0 else "▼"

    report = f"# Technical Analysis Report: {analysis['symbol']}\n\n"
    report += "## Price Information\n\n"
    report += (
        f"Current Price: ₹{price['current']} "
        f"({arrow} {abs(price['change']):.2f} / {arrow} {abs(price['percent_change']):.2f}%)\n\n"
    )

    report += "## Trend Analysis\n\n"
    report += f"- Primary Trend: {capitalize(trends['primary'])}\n"
    report += f"- Secondary Trend: {capitalize(trends['secondary'])}\n\n"
    report += "### Support & Resistance Levels\n\n"
    report += f"- Support Levels: {', '.join(f'₹{level}' for level in trends['support'])}\n"
    report += f"- Resistance Levels: {', '.join(f'₹{level}' for level in trends['resistance'])}\n\n"

    rsi = indicators["rsi"]
    macd = indicators["macd"]
    bands = indicators["bollinger_bands"]
    averages = indicators["moving_averages"]
    report += "## Technical Indicators\n\n"
    report += "### RSI (Relative Strength Index)\n\n"
    report += f"Value: {rsi['value']} ({rsi['signal']})\n{rsi_signal(rsi['value'])}\n\n"

    report += "### MACD (Moving Average Convergence Divergence)\n\n"
    report += f"- MACD Line: {macd['value']:.2f}\n"
    report += f"- Signal Line: {macd['signal']:.2f}\n"
    report += f"- Histogram: {macd['histogram']:.2f}\n"
    report += f"- Trend: {capitalize(macd['trend'])}\n\n"

    report += "### Bollinger Bands\n\n"
    report += f"- Upper Band: ₹{bands['upper']}\n"
    report += f"- Middle Band: ₹{bands['middle']}\n"
    report += f"- Lower Band: ₹{bands['lower']}\n"
    report += f"- Band Width: {bands['width']:.2f}%\n"
    report += f"- Signal: {capitalize(bands['signal'])}\n\n"

    report += "### Moving Averages\n\n"
    for days, key in ((20, "ma20"), (50, "ma50"), (100, "ma100"), (200, "ma200")):
        report += (
            f"- {days}-day MA: ₹{averages[key]} "
            f"({_above_below(price['current'], averages[key])})\n"
        )
    return report


@tool_handler("Error fetching technical analysis")
async def analyze_technicals(args: SymbolArguments, context: Any) -> ResponseEnvelope:
    analysis = get_technicals(args.symbol)
    price = analysis["price"]
    trends = analysis["trends"]
    indicators = analysis["indicators"]
    recommendation = analysis["recommendation"]

    summary = (
        f"Here's the technical analysis for {args.symbol}:\n\n"
        f"**Current Price**: ₹{price['current']} "
        f"({'+' if price['change'] >= 0 else ''}{price['change']} / "
        f"{'+' if price['percent_change'] >= 0 else ''}{price['percent_change']}%)\n\n"
        f"**Trend**: {capitalize(trends['primary'])} (primary), "
        f"{capitalize(trends['secondary'])} (secondary)\n\n"
        f"**Key Indicators**: RSI at {indicators['rsi']['value']} "
        f"({indicators['rsi']['signal']}), MACD is {indicators['macd']['trend']}\n\n"
        f"**Recommendation**: {capitalize(recommendation['action'])} for "
        f"{recommendation['timeframe']}-term"
    )
    return success_envelope(
        summary,
        title=f"Technical Analysis for {args.symbol}",
        report=render_technicals_report(analysis),
        metadata=analysis,
    )


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


def _expiry(value: str) -> str:
    d = date.fromisoformat(value)
    return f"{d.day} {d:%b %Y}"


def _payoff(value: Any) -> str:
    return f"₹{value}" if isinstance(value, (int, float)) else "Unlimited"


def render_options_report(analysis: dict[str, Any]) -> str:
    volatility = analysis["volatility"]
    sentiment = analysis["sentiment"]

    report = f"# Options Analysis Report: {analysis['symbol']}\n\n"
    report += "## Market Overview\n\n"
    report += f"**Current Price**: ₹{analysis['current_price']}\n\n"

    report += "## Volatility Analysis\n\n"
    report += f"- **Historical Volatility**: {volatility['historical'] * 100:.2f}%\n"
    report += f"- **Implied Volatility**: {volatility['implied'] * 100:.2f}%\n"
    report += f"- **Volatility Skew**: {capitalize(volatility['skew'])}\n"
    report += f"- **Term Structure**: {capitalize(volatility['term'])}\n\n"
    if volatility["implied"] > volatility["historical"]:
        report += (
            "Implied volatility is higher than historical volatility, suggesting the "
            "market expects more price movement than recent history would indicate.\n\n"
        )
    else:
        report += (
            "Implied volatility is lower than or equal to historical volatility, "
            "suggesting the market expects similar or less price movement compared "
            "to recent history.\n\n"
        )

    report += "## Market Sentiment\n\n"
    report += f"**Put/Call Ratio**: {sentiment['put_call_ratio']:.2f}\n\n"
    report += f"{sentiment['interpretation']}\n\n"

    report += "## Recommended Options Strategies\n\n"
    for index, strategy in enumerate(analysis["strategies"], start=1):
        report += f"### {index}. {strategy['name']}\n\n{strategy['description']}\n\n"
        report += "**Contracts:**\n\n"
        for leg in strategy["contracts"]:
            report += (
                f"- {capitalize(leg['action'])} {leg['type'].upper()} @ ₹{leg['strike']} "
                f"(Exp: {_expiry(leg['expiration'])})\n"
            )
        breakeven = strategy["breakeven"]
        ratio = strategy["risk_reward_ratio"]
        report += "\n**Risk/Reward Profile:**\n\n"
        report += f"- **Max Profit**: {_payoff(strategy['max_profit'])}\n"
        report += f"- **Max Loss**: {_payoff(strategy['max_loss'])}\n"
        report += (
            f"- **Breakeven Point{'s' if len(breakeven) > 1 else ''}**: "
            f"{', '.join(f'₹{point}' for point in breakeven)}\n"
        )
        report += (
            "- **Risk/Reward Ratio**: "
            f"{'N/A (unlimited profit potential)' if ratio == 0 else f'{ratio:.2f}'}\n\n"
        )

    if analysis["unusual_activity"]:
        report += "## Unusual Options Activity\n\n"
        for activity in analysis["unusual_activity"]:
            contract = activity["contract"]
            report += (
                f"### {contract['type'].upper()} @ ₹{contract['strike']} "
                f"(Exp: {_expiry(contract['expiration'])})\n\n"
            )
            report += f"- **Volume**: {activity['volume']:,}\n"
            report += f"- **Open Interest**: {contract['open_interest']:,}\n"
            report += f"- **Volume/OI Ratio**: {activity['open_interest_ratio']:.2f}\n"
            report += f"- **Implied Volatility**: {contract['implied_volatility'] * 100:.2f}%\n\n"
            report += f"**Analysis**: {activity['description']}\n\n"
    return report


@tool_handler("Error fetching options analysis")
async def analyze_options(args: SymbolArguments, context: Any) -> ResponseEnvelope:
    analysis = get_options_analysis(args.symbol)
    volatility = analysis["volatility"]
    top_strategies = ", ".join(s["name"] for s in analysis["strategies"][:2])

    summary = (
        f"I've analyzed the options market for {args.symbol}:\n\n"
        f"**Current Price**: ₹{analysis['current_price']}\n\n"
        f"**Implied Volatility**: {volatility['implied'] * 100:.2f}% "
        f"({'higher' if volatility['implied'] > volatility['historical'] else 'lower'} "
        "than historical)\n\n"
        f"**Market Sentiment**: {analysis['sentiment']['interpretation']}\n\n"
        f"**Recommended Strategies**: {top_strategies}"
    )
    return success_envelope(
        summary,
        title=f"Options Analysis for {args.symbol}",
        report=render_options_report(analysis),
        metadata=analysis,
    )
