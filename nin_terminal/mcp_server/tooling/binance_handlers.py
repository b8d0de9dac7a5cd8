"""Binance spot and Simple Earn holdings."""

from __future__ import annotations

from typing import Any

from nin_terminal.mcp_server.tooling.formatting import markdown_table
from nin_terminal.mcp_server.tooling.shared import success_envelope, tool_handler
from nin_terminal.schemas.envelope import ResponseEnvelope
from nin_terminal.schemas.tool_requests import NoArguments


def render_binance_holdings(portfolio: dict[str, Any]) -> str:
    holdings = portfolio["spot"]
    if not holdings:
        return "No balances found in your Binance account."
    table = markdown_table(
        ["Asset", "Free", "Locked", "USD Value"],
        [
            [
                h["asset"],
                f"{h['free']:.6f}",
                f"{h['locked']:.6f}",
                f"${h['usd_value']:,.2f}",
            ]
            for h in holdings
        ],
    )
    if portfolio.get("warnings"):
        table += "\n**Partial data:**\n"
        table += "".join(f"- {warning}\n" for warning in portfolio["warnings"])
    return table


@tool_handler("Error fetching Binance holdings")
async def get_user_binance_holdings(args: NoArguments, context: Any) -> ResponseEnvelope:
    portfolio = await context.binance.fetch_portfolio()
    table = render_binance_holdings(portfolio)
    summary = (
        "Here are your current Binance holdings:\n\n"
        f"Total Portfolio Value: ${portfolio['total_value_usd']:,.2f}\n\n"
        f"{table}"
    )
    return success_envelope(
        summary,
        title="Binance Holdings",
        report=table,
        metadata=portfolio,
    )
