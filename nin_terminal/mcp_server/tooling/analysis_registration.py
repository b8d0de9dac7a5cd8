"""Analysis and market MCP tool registration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nin_terminal.mcp_server.gateway import TOOL_SPECS, get_gateway
from nin_terminal.mcp_server.tooling.shared import compact_arguments

if TYPE_CHECKING:
    from fastmcp import FastMCP

ANALYSIS_TOOL_NAMES: set[str] = {
    "analyzeFundamentals",
    "analyzeTechnicals",
    "analyzeOptions",
    "analyzeMarket",
    "getMarketNews",
    "screenStocks",
}


def register_analysis_tools(mcp: FastMCP) -> None:
    @mcp.tool(
        name="analyzeFundamentals",
        description=TOOL_SPECS["analyzeFundamentals"].description,
    )
    async def analyze_fundamentals(symbol: str) -> dict[str, Any]:
        envelope = await get_gateway().execute("analyzeFundamentals", {"symbol": symbol})
        return envelope.to_payload()

    @mcp.tool(
        name="analyzeTechnicals",
        description=TOOL_SPECS["analyzeTechnicals"].description,
    )
    async def analyze_technicals(symbol: str) -> dict[str, Any]:
        envelope = await get_gateway().execute("analyzeTechnicals", {"symbol": symbol})
        return envelope.to_payload()

    @mcp.tool(
        name="analyzeOptions",
        description=TOOL_SPECS["analyzeOptions"].description,
    )
    async def analyze_options(symbol: str) -> dict[str, Any]:
        envelope = await get_gateway().execute("analyzeOptions", {"symbol": symbol})
        return envelope.to_payload()

    @mcp.tool(
        name="analyzeMarket",
        description=TOOL_SPECS["analyzeMarket"].description,
    )
    async def analyze_market(query: str = "") -> dict[str, Any]:
        envelope = await get_gateway().execute("analyzeMarket", {"query": query})
        return envelope.to_payload()

    @mcp.tool(
        name="getMarketNews",
        description=TOOL_SPECS["getMarketNews"].description,
    )
    async def get_market_news(query: str = "") -> dict[str, Any]:
        envelope = await get_gateway().execute("getMarketNews", {"query": query})
        return envelope.to_payload()

    @mcp.tool(
        name="screenStocks",
        description=(
            f"{TOOL_SPECS['screenStocks'].description} "
            "market_cap is large, mid, small or micro. "
            "Range filters take {min, max}; price_change also takes period "
            "(1d/1w/1m/3m/6m/1y); technicals takes rsi {min, max}, macd "
            "(bullish/bearish) and moving_averages "
            "(above50/below50/above200/below200/crossover50/crossover200)."
        ),
    )
    async def screen_stocks(
        market_cap: str | None = None,
        sector: str | None = None,
        pe_ratio: dict[str, Any] | None = None,
        dividend: dict[str, Any] | None = None,
        price_change: dict[str, Any] | None = None,
        volume: dict[str, Any] | None = None,
        technicals: dict[str, Any] | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "screenStocks",
            compact_arguments(
                market_cap=market_cap,
                sector=sector,
                pe_ratio=pe_ratio,
                dividend=dividend,
                price_change=price_change,
                volume=volume,
                technicals=technicals,
                min_price=min_price,
                max_price=max_price,
            ),
        )
        return envelope.to_payload()


__all__ = ["ANALYSIS_TOOL_NAMES", "register_analysis_tools"]
