"""Portfolio and holdings MCP tool registration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nin_terminal.mcp_server.gateway import TOOL_SPECS, get_gateway

if TYPE_CHECKING:
    from fastmcp import FastMCP

PORTFOLIO_TOOL_NAMES: set[str] = {
    "analyzePortfolio",
    "getUserHoldings",
    "getUserBinanceHoldings",
    "getGrowwHoldings",
    "getGrowwPositions",
    "getGrowwUserMargin",
}


def register_portfolio_tools(mcp: FastMCP) -> None:
    @mcp.tool(
        name="analyzePortfolio",
        description=(
            f"{TOOL_SPECS['analyzePortfolio'].description} Each holding needs "
            "industry, shares and current_price; symbol, avg_price, sector and "
            "market_cap are optional."
        ),
    )
    async def analyze_portfolio(holdings: list[dict[str, Any]]) -> dict[str, Any]:
        envelope = await get_gateway().execute("analyzePortfolio", {"holdings": holdings})
        return envelope.to_payload()

    @mcp.tool(
        name="getUserHoldings",
        description=TOOL_SPECS["getUserHoldings"].description,
    )
    async def get_user_holdings() -> dict[str, Any]:
        envelope = await get_gateway().execute("getUserHoldings", {})
        return envelope.to_payload()

    @mcp.tool(
        name="getUserBinanceHoldings",
        description=TOOL_SPECS["getUserBinanceHoldings"].description,
    )
    async def get_user_binance_holdings() -> dict[str, Any]:
        envelope = await get_gateway().execute("getUserBinanceHoldings", {})
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwHoldings",
        description=TOOL_SPECS["getGrowwHoldings"].description,
    )
    async def get_groww_holdings() -> dict[str, Any]:
        envelope = await get_gateway().execute("getGrowwHoldings", {})
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwPositions",
        description=f"{TOOL_SPECS['getGrowwPositions'].description} segment is CASH or FNO.",
    )
    async def get_groww_positions(
        segment: str = "CASH",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute("getGrowwPositions", {"segment": segment})
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwUserMargin",
        description=TOOL_SPECS["getGrowwUserMargin"].description,
    )
    async def get_groww_user_margin() -> dict[str, Any]:
        envelope = await get_gateway().execute("getGrowwUserMargin", {})
        return envelope.to_payload()


__all__ = ["PORTFOLIO_TOOL_NAMES", "register_portfolio_tools"]
