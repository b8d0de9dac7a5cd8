"""Name-based tool dispatch.

Every entry point (MCP tools, the HTTP umbrella route) goes through
``ToolGateway.execute``. It validates arguments against the tool's model,
runs the handler under the configured timeout, and always returns an
envelope.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from nin_terminal.core.config import Settings, settings
from nin_terminal.core.errors import ErrorKind
from nin_terminal.core.timezone import now_ist
from nin_terminal.mcp_server.tooling import (
    analysis_handlers,
    binance_handlers,
    groww_handlers,
    market_handlers,
    portfolio_handlers,
)
from nin_terminal.mcp_server.tooling.shared import Handler, failure_envelope
from nin_terminal.schemas.envelope import ResponseEnvelope
from nin_terminal.schemas.tool_requests import (
    TOOL_ARGUMENT_MODELS,
    ToolArguments,
    parse_tool_request,
)
from nin_terminal.services.binance import BinanceClient
from nin_terminal.services.groww import GrowwClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolContext:
    """Shared, read-only dependencies handed to every handler."""

    settings: Settings
    groww: GrowwClient
    binance: BinanceClient
    clock: Callable[[], datetime] = field(default=now_ist)

    @classmethod
    def from_settings(cls, config: Settings) -> ToolContext:
        return cls(
            settings=config,
            groww=GrowwClient(config),
            binance=BinanceClient(config),
        )


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    arguments_model: type[ToolArguments]
    handler: Handler


_TOOLS: tuple[tuple[str, str, Handler], ...] = (
    (
        "analyzeFundamentals",
        "Fundamental analysis of an NSE stock: financials, valuation, SWOT and analyst consensus.",
        analysis_handlers.analyze_fundamentals,
    ),
    (
        "analyzeMarket",
        "Overview of Indian market indices, sector performance, technical indicators and news impact.",
        market_handlers.analyze_market,
    ),
    (
        "getMarketNews",
        "Top market headlines, sector news and the upcoming economic calendar.",
        market_handlers.get_market_news,
    ),
    (
        "analyzeOptions",
        "Options market analysis for a stock: volatility, sentiment, strategies and unusual activity.",
        analysis_handlers.analyze_options,
    ),
    (
        "analyzePortfolio",
        "Industry diversification, risk and performance review of a list of holdings.",
        portfolio_handlers.analyze_portfolio,
    ),
    (
        "screenStocks",
        "Screen stocks by market cap, sector, valuation, dividend, price change, volume and technicals.",
        portfolio_handlers.screen_stocks,
    ),
    (
        "analyzeTechnicals",
        "Technical analysis of a stock: trend, support/resistance, RSI, MACD, Bollinger bands, moving averages.",
        analysis_handlers.analyze_technicals,
    ),
    (
        "getUserHoldings",
        "Current demo portfolio holdings with value and P&L.",
        portfolio_handlers.get_user_holdings,
    ),
    (
        "getUserBinanceHoldings",
        "Binance spot and Simple Earn balances valued in USD.",
        binance_handlers.get_user_binance_holdings,
    ),
    (
        "getGrowwHoldings",
        "Demat holdings in the connected Groww account.",
        groww_handlers.get_groww_holdings,
    ),
    (
        "getGrowwPositions",
        "Open positions in the connected Groww account, by segment.",
        groww_handlers.get_groww_positions,
    ),
    (
        "getGrowwSymbolsLTP",
        "Last traded prices for up to 50 symbols from Groww.",
        groww_handlers.get_groww_symbols_ltp,
    ),
    (
        "getGrowwSymbolsOHLC",
        "Open, high, low and close for up to 50 symbols from Groww.",
        groww_handlers.get_groww_symbols_ohlc,
    ),
    (
        "getGrowwSymbolQuote",
        "Full quote with market depth for one symbol from Groww.",
        groww_handlers.get_groww_symbol_quote,
    ),
    (
        "placeGrowwOrder",
        "Place a new order on Groww.",
        groww_handlers.place_groww_order,
    ),
    (
        "modifyGrowwOrder",
        "Modify quantity, price or trigger price of an open Groww order.",
        groww_handlers.modify_groww_order,
    ),
    (
        "cancelGrowwOrder",
        "Cancel an open Groww order.",
        groww_handlers.cancel_groww_order,
    ),
    (
        "getGrowwOrderStatus",
        "Status and details of a Groww order.",
        groww_handlers.get_groww_order_status,
    ),
    (
        "getGrowwUserMargin",
        "Available and used margin in the connected Groww account.",
        groww_handlers.get_groww_user_margin,
    ),
    (
        "getGrowwOrderMargin",
        "Margin required for one order or a basket of orders on Groww.",
        groww_handlers.get_groww_order_margin,
    ),
)

TOOL_SPECS: dict[str, ToolSpec] = {
    name: ToolSpec(name, description, TOOL_ARGUMENT_MODELS[name], handler)
    for name, description, handler in _TOOLS
}

TOOL_NAMES: tuple[str, ...] = tuple(TOOL_SPECS)


def format_validation_error(exc: ValidationError) -> str:
    """One ``field: reason`` entry per error, without the union tag prefix."""
    parts = []
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if "arguments" in loc:
            loc = loc[loc.index("arguments") + 1 :]
        field_path = ".".join(str(part) for part in loc) or "arguments"
        parts.append(f"{field_path}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


class ToolGateway:
    def __init__(self, context: ToolContext, specs: dict[str, ToolSpec] | None = None):
        self._context = context
        self._specs = specs if specs is not None else TOOL_SPECS

    def describe(self) -> list[dict[str, str]]:
        return [
            {"name": spec.name, "description": spec.description}
            for spec in self._specs.values()
        ]

    async def execute(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ResponseEnvelope:
        spec = self._specs.get(name)
        if spec is None:
            logger.warning("Unknown tool requested: %s", name)
            return failure_envelope(
                f'I\'m sorry, the tool "{name}" is not available.',
                ErrorKind.INVALID_TOOL,
            )

        try:
            request = parse_tool_request(name, arguments)
        except ValidationError as exc:
            details = format_validation_error(exc)
            logger.info("Invalid arguments for %s: %s", name, details)
            return failure_envelope(
                f"Invalid arguments for {name}: {details}",
                ErrorKind.INVALID_ARGUMENTS,
            )

        timeout = self._context.settings.TOOL_TIMEOUT_SECONDS
        try:
            return await asyncio.wait_for(
                spec.handler(request.arguments, self._context), timeout=timeout
            )
        except asyncio.TimeoutError:
            prefix = spec.handler.failure_prefix(request.arguments)  # type: ignore[attr-defined]
            logger.warning("%s: timed out after %ss", prefix, timeout)
            return failure_envelope(
                f"{prefix}: timed out after {timeout:g}s", ErrorKind.TIMEOUT
            )


_gateway: ToolGateway | None = None


def get_gateway() -> ToolGateway:
    global _gateway
    if _gateway is None:
        _gateway = ToolGateway(ToolContext.from_settings(settings))
    return _gateway


def reset_gateway() -> None:
    global _gateway
    _gateway = None


__all__ = [
    "TOOL_NAMES",
    "TOOL_SPECS",
    "ToolContext",
    "ToolGateway",
    "ToolSpec",
    "format_validation_error",
    "get_gateway",
    "reset_gateway",
]
