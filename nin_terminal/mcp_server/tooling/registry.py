"""Tool registration orchestration for MCP server."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nin_terminal.mcp_server.tooling.analysis_registration import register_analysis_tools
from nin_terminal.mcp_server.tooling.market_data_registration import (
    register_market_data_tools,
)
from nin_terminal.mcp_server.tooling.orders_registration import register_order_tools
from nin_terminal.mcp_server.tooling.portfolio_registration import (
    register_portfolio_tools,
)

if TYPE_CHECKING:
    from fastmcp import FastMCP


def register_all_tools(mcp: FastMCP) -> None:
    register_analysis_tools(mcp)
    register_portfolio_tools(mcp)
    register_market_data_tools(mcp)
    register_order_tools(mcp)


__all__ = ["register_all_tools"]
