"""Market overview and news feed."""

from __future__ import annotations

from typing import Any

from nin_terminal.data import build_market_news, get_market_overview
from nin_terminal.mcp_server.tooling.formatting import capitalize, markdown_table
from nin_terminal.mcp_server.tooling.shared import success_envelope, tool_handler
from nin_terminal.schemas.envelope import ResponseEnvelope
from nin_terminal.schemas.tool_requests import QueryArguments

_IMPACT_ICONS = {"positive": "🟢", "negative": "🔴"}


def market_rsi_signal(rsi: float) -> str:
    if rsi > 70:
        return "OVERBOUGHT"
    if rsi < 30:
        return "OVERSOLD"
    return "NEUTRAL"


def _arrow(change: float) -> str:
    return "▲" if change >= 0 else "▼"


def render_market_report(analysis: dict[str, Any]) -> str:
    overview = analysis["overview"]
    sectors = analysis["sectors"]
    technicals = analysis["technical_indicators"]

    report = "## Market Overview\n\n"
    report += markdown_table(
        ["Index", "Value", "Change", "% Change"],
        [
            [
                name,
                f"{data['value']:,}",
                f"{_arrow(data['change'])} {abs(data['change']):.2f}",
                f"{_arrow(data['change'])} {abs(data['percent_change']):.2f}%",
            ]
            for name, data in overview["key_indices"].items()
        ],
    )

    report += "\n## Sector Performance\n\n### Top Performing Sectors\n\n"
    report += markdown_table(
        ["Sector", "Change"],
        [[s["name"], f"▲ {s['change']:.2f}%"] for s in sectors["top_performing"]],
    )
    report += "\n### Worst Performing Sectors\n\n"
    report += markdown_table(
        ["Sector", "Change"],
        [[s["name"], f"▼ {abs(s['change']):.2f}%"] for s in sectors["worst_performing"]],
    )

    rows = [
        ["RSI", f"{technicals['rsi']:.2f}", market_rsi_signal(technicals["rsi"])],
        ["MACD", "-", technicals["macd"].upper()],
    ]
    rows.extend(
        [f"{period} MA", f"{data['value']:,}", data["signal"].upper()]
        for period, data in technicals["moving_averages"].items()
    )
    report += "\n## Technical Indicators\n\n"
    report += markdown_table(["Indicator", "Value", "Signal"], rows)

    report += "\n## Recent News Impact\n\n"
    report += markdown_table(
        ["Headline", "Impact", "Source"],
        [
            [
                news["headline"],
                f"{_IMPACT_ICONS.get(news['impact'], '⚪')} {capitalize(news['impact'])}",
                news["source"],
            ]
            for news in analysis["news_impact"]["recent_news"]
        ],
    )
    return report


@tool_handler("Error fetching market analysis")
async def analyze_market(args: QueryArguments, context: Any) -> ResponseEnvelope:
    analysis = get_market_overview()
    summary = (
        "Here's the current market analysis:\n\n"
        f"**Market Overview**: The market is currently showing "
        f"{analysis['overview']['market_trend']} trends. {analysis['overview']['summary']}\n\n"
        f"**Sector Performance**: {analysis['sectors']['analysis']}\n\n"
        f"**Technical Outlook**: {analysis['technical_indicators']['analysis']}"
    )
    return success_envelope(
        summary,
        title="Market Analysis",
        report=render_market_report(analysis),
        metadata=analysis,
    )


def render_news_report(news: dict[str, Any]) -> str:
    return markdown_table(
        ["Date", "Headline", "Source"],
        [[item["date"], item["title"], item["source"]] for item in news["top_news"]],
    )


@tool_handler("Error fetching market news")
async def get_market_news(args: QueryArguments, context: Any) -> ResponseEnvelope:
    news = build_market_news(context.clock().date())
    headlines = "\n".join(
        f"- {item['title']} ({item['source']})" for item in news["top_news"][:3]
    )
    events = "\n".join(
        f"- {event['date']} | {event['country']}: {event['title']} (Impact: {event['impact']})"
        for event in news["economic_calendar"][:3]
    )
    summary = (
        "Here are today's top market headlines and upcoming economic events:\n\n"
        f"**Top Headlines**:\n{headlines}\n\n"
        f"**Upcoming Economic Events**:\n{events}"
    )
    return success_envelope(
        summary,
        title="Market News & Economic Calendar",
        report=render_news_report(news),
        metadata=news,
    )
