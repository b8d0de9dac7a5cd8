"""Groww live market data MCP tool registration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nin_terminal.mcp_server.gateway import TOOL_SPECS, get_gateway

if TYPE_CHECKING:
    from fastmcp import FastMCP

MARKET_DATA_TOOL_NAMES: set[str] = {
    "getGrowwSymbolsLTP",
    "getGrowwSymbolsOHLC",
    "getGrowwSymbolQuote",
}


def register_market_data_tools(mcp: FastMCP) -> None:
    @mcp.tool(
        name="getGrowwSymbolsLTP",
        description=(
            f"{TOOL_SPECS['getGrowwSymbolsLTP'].description} segment is CASH or FNO; "
            "exchange is NSE or BSE."
        ),
    )
    async def get_groww_symbols_ltp(
        symbols: list[str],
        segment: str = "CASH",
        exchange: str = "NSE",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "getGrowwSymbolsLTP",
            {"symbols": symbols, "segment": segment, "exchange": exchange},
        )
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwSymbolsOHLC",
        description=(
            f"{TOOL_SPECS['getGrowwSymbolsOHLC'].description} segment is CASH or FNO; "
            "exchange is NSE or BSE."
        ),
    )
    async def get_groww_symbols_ohlc(
        symbols: list[str],
        segment: str = "CASH",
        exchange: str = "NSE",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "getGrowwSymbolsOHLC",
            {"symbols": symbols, "segment": segment, "exchange": exchange},
        )
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwSymbolQuote",
        description=(
            f"{TOOL_SPECS['getGrowwSymbolQuote'].description} segment is CASH or FNO; "
            "exchange is NSE or BSE."
        ),
    )
    async def get_groww_symbol_quote(
        symbol: str,
        exchange: str = "NSE",
        segment: str = "CASH",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "getGrowwSymbolQuote",
            {"symbol": symbol, "exchange": exchange, "segment": segment},
        )
        return envelope.to_payload()


__all__ = ["MARKET_DATA_TOOL_NAMES", "register_market_data_tools"]
