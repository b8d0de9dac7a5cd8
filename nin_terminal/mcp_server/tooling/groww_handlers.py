"""Groww portfolio, live data, order and margin tools."""

from __future__ import annotations

import logging
import re
from typing import Any

from nin_terminal.mcp_server.tooling.formatting import (
    format_currency,
    markdown_table,
    strip_exchange_prefix,
)
from nin_terminal.mcp_server.tooling.shared import success_envelope, tool_handler
from nin_terminal.schemas.envelope import ResponseEnvelope
from nin_terminal.schemas.tool_requests import (
    ModifyOrderArguments,
    NoArguments,
    OrderIdArguments,
    OrderMarginArguments,
    PlaceOrderArguments,
    QuoteArguments,
    SegmentArguments,
    SymbolsArguments,
)

logger = logging.getLogger(__name__)

HOLDINGS_SHOWN = 20
DEPTH_LEVELS_SHOWN = 3

_OHLC_PAIR_RE = re.compile(r"\s*(\w+)\s*:\s*([-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?\d+)?)\s*")


def _num(data: dict[str, Any] | None, key: str) -> float:
    value = (data or {}).get(key)
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


def _money(value: Any) -> str:
    if isinstance(value, (int, float)):
        return format_currency(value)
    return "-"


def _payload(body: dict[str, Any]) -> dict[str, Any]:
    payload = body.get("payload")
    return payload if isinstance(payload, dict) else {}


# ---------------------------------------------------------------------------
# Holdings and positions
# ---------------------------------------------------------------------------


def render_holdings_table(holdings: list[dict[str, Any]]) -> str:
    if not holdings:
        return "No holdings found in your Groww account."
    rows = []
    for holding in holdings[:HOLDINGS_SHOWN]:
        quantity = _num(holding, "quantity")
        average_price = _num(holding, "average_price")
        rows.append(
            [
                holding.get("trading_symbol", "-"),
                holding.get("quantity", 0),
                format_currency(average_price),
                format_currency(quantity * average_price),
                holding.get("demat_free_quantity", 0),
            ]
        )
    table = "**Current Holdings:**\n\n"
    table += markdown_table(
        ["Symbol", "Quantity", "Avg Price", "Current Value", "Free Qty"], rows
    )
    if len(holdings) > HOLDINGS_SHOWN:
        table += f"\n... and {len(holdings) - HOLDINGS_SHOWN} more holdings."
    return table


@tool_handler("Error fetching Groww holdings")
async def get_groww_holdings(args: NoArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_holdings()
    holdings = _payload(body).get("holdings") or []
    total_value = sum(_num(h, "quantity") * _num(h, "average_price") for h in holdings)
    table = render_holdings_table(holdings)
    summary = (
        "Here are your current Groww holdings:\n\n"
        f"Total Holdings: {len(holdings)} stocks\n"
        f"Total Investment Value: {format_currency(total_value)}\n\n"
        f"{table}"
    )
    return success_envelope(
        summary, title="Groww Holdings Data", report=table, metadata=body
    )


def render_positions_table(positions: list[dict[str, Any]]) -> str:
    if not positions:
        return "No positions found in your Groww account."
    table = "**Current Positions:**\n\n"
    table += markdown_table(
        ["Symbol", "Qty", "Net Price", "Credit Qty", "Debit Qty", "Product", "Exchange"],
        [
            [
                p.get("trading_symbol", "-"),
                p.get("quantity", 0),
                format_currency(_num(p, "net_price")),
                p.get("credit_quantity", 0),
                p.get("debit_quantity", 0),
                p.get("product", "-"),
                p.get("exchange", "-"),
            ]
            for p in positions
        ],
    )
    return table


@tool_handler("Error fetching Groww positions")
async def get_groww_positions(args: SegmentArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_positions(args.segment)
    positions = _payload(body).get("positions") or []
    table = render_positions_table(positions)
    summary = (
        f"Here are your current Groww positions for {args.segment}:\n\n"
        f"Total Positions: {len(positions)}\n\n"
        f"{table}"
    )
    return success_envelope(
        summary, title="Groww Positions Data", report=table, metadata=body
    )


# ---------------------------------------------------------------------------
# Live data
# ---------------------------------------------------------------------------


def render_ltp_table(ltp: dict[str, Any]) -> str:
    table = "**Last Traded Prices:**\n\n"
    table += markdown_table(
        ["Symbol", "LTP"],
        [[strip_exchange_prefix(symbol), _money(price)] for symbol, price in ltp.items()],
    )
    return table


@tool_handler("Error fetching LTP data")
async def get_groww_symbols_ltp(args: SymbolsArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_ltp(args.symbols, args.exchange, args.segment)
    table = render_ltp_table(_payload(body))
    return success_envelope(
        f"Last Traded Prices for {len(args.symbols)} symbols:\n\n{table}",
        title="Groww LTP Data",
        report=table,
        metadata=body,
    )


def parse_ohlc(value: Any) -> dict[str, float] | None:
    """Accept a mapping or Groww's ``{open: 1,high: 2,low: 0.5,close: 1.5}`` string."""
    if isinstance(value, dict):
        fields = value
    elif isinstance(value, str):
        fields = {}
        for pair in value.strip().strip("{}").split(","):
            match = _OHLC_PAIR_RE.fullmatch(pair)
            if match is None:
                return None
            fields[match.group(1)] = float(match.group(2))
    else:
        return None
    try:
        return {key: float(fields.get(key) or 0) for key in ("open", "high", "low", "close")}
    except (TypeError, ValueError):
        return None


def render_ohlc_table(ohlc: dict[str, Any]) -> str:
    rows = []
    for symbol, raw in ohlc.items():
        parsed = parse_ohlc(raw)
        name = strip_exchange_prefix(symbol)
        if parsed is None:
            rows.append([name, "-", "-", "-", "-"])
        else:
            rows.append(
                [name] + [format_currency(parsed[k]) for k in ("open", "high", "low", "close")]
            )
    table = "**OHLC Data:**\n\n"
    table += markdown_table(["Symbol", "Open", "High", "Low", "Close"], rows)
    return table


@tool_handler("Error fetching OHLC data")
async def get_groww_symbols_ohlc(args: SymbolsArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_ohlc(args.symbols, args.exchange, args.segment)
    table = render_ohlc_table(_payload(body))
    return success_envelope(
        f"OHLC Data for {len(args.symbols)} symbols:\n\n{table}",
        title="Groww OHLC Data",
        report=table,
        metadata=body,
    )


def _depth_lines(title: str, levels: list[dict[str, Any]]) -> str:
    text = f"**{title}:**\n"
    for index, level in enumerate(levels[:DEPTH_LEVELS_SHOWN], start=1):
        text += f"{index}. {_money(level.get('price'))} ({level.get('quantity', 0)})\n"
    return text


def render_quote(symbol: str, quote: dict[str, Any]) -> str:
    text = f"**{symbol} - Detailed Quote:**\n\n"
    text += "**Price Information:**\n"
    text += f"- Last Price: {_money(quote.get('last_price'))}\n"
    text += (
        f"- Day Change: {_money(quote.get('day_change'))} "
        f"({_num(quote, 'day_change_perc'):.2f}%)\n"
    )
    text += f"- Bid: {_money(quote.get('bid_price'))} ({quote.get('bid_quantity', 0)})\n"
    text += f"- Ask: {_money(quote.get('offer_price'))} ({quote.get('offer_quantity', 0)})\n\n"

    text += "**Trading Information:**\n"
    text += f"- Volume: {int(_num(quote, 'volume')):,}\n"
    text += f"- High: {_money(quote.get('high_trade_range'))}\n"
    text += f"- Low: {_money(quote.get('low_trade_range'))}\n"
    text += f"- 52W High: {_money(quote.get('week_52_high'))}\n"
    text += f"- 52W Low: {_money(quote.get('week_52_low'))}\n\n"

    text += "**Circuit Limits:**\n"
    text += f"- Upper: {_money(quote.get('upper_circuit_limit'))}\n"
    text += f"- Lower: {_money(quote.get('lower_circuit_limit'))}\n\n"

    if quote.get("market_cap"):
        text += f"**Market Cap:** {_money(quote['market_cap'])}\n\n"

    depth = quote.get("depth") or {}
    if depth.get("buy"):
        text += _depth_lines("Top 3 Bid Levels", depth["buy"]) + "\n"
    if depth.get("sell"):
        text += _depth_lines("Top 3 Ask Levels", depth["sell"])
    return text


@tool_handler(lambda args: f"Error fetching quote for {args.symbol}")
async def get_groww_symbol_quote(args: QuoteArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_quote(args.symbol, args.exchange, args.segment)
    text = render_quote(args.symbol, _payload(body))
    return success_envelope(
        f"Detailed Quote for {args.symbol}:\n\n{text}",
        title=f"Groww Quote - {args.symbol}",
        report=text,
        metadata=body,
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


def _remark_line(order: dict[str, Any]) -> str:
    return f"Remark: {order['remark']}" if order.get("remark") else ""


def build_order_body(args: PlaceOrderArguments) -> dict[str, Any]:
    body: dict[str, Any] = {
        "trading_symbol": args.trading_symbol,
        "quantity": args.quantity,
        "validity": args.validity,
        "exchange": args.exchange,
        "segment": args.segment,
        "product": args.product,
        "order_type": args.order_type,
        "transaction_type": args.transaction_type,
        "order_reference_id": args.order_reference_id,
    }
    if args.price is not None:
        body["price"] = args.price
    if args.trigger_price is not None:
        body["trigger_price"] = args.trigger_price
    return body


@tool_handler(
    lambda args: f"Error placing order (reference {args.order_reference_id})"
)
async def place_groww_order(args: PlaceOrderArguments, context: Any) -> ResponseEnvelope:
    order_reference_id = args.order_reference_id
    logger.info(
        "Placing Groww order: %s %s %s x%d ref=%s",
        args.transaction_type,
        args.order_type,
        args.trading_symbol,
        args.quantity,
        order_reference_id,
    )
    body = await context.groww.place_order(build_order_body(args))
    order = _payload(body)
    summary = (
        "Order placed successfully!\n\n"
        f"Order ID: {order.get('groww_order_id', '-')}\n"
        f"Status: {order.get('order_status', '-')}\n"
        f"Symbol: {args.trading_symbol}\n"
        f"Quantity: {args.quantity}\n"
        f"Type: {args.transaction_type} {args.order_type}\n"
        f"{_remark_line(order)}"
    )
    metadata = dict(body)
    metadata["order_reference_id"] = order_reference_id
    return success_envelope(
        summary.rstrip("\n"),
        title="Order Placement Response",
        report=f"Order placement details (reference {order_reference_id})",
        metadata=metadata,
    )


@tool_handler("Error modifying order")
async def modify_groww_order(args: ModifyOrderArguments, context: Any) -> ResponseEnvelope:
    request = args.model_dump(exclude_none=True)
    body = await context.groww.modify_order(request)
    order = _payload(body)
    summary = (
        "Order modified successfully!\n\n"
        f"Order ID: {order.get('groww_order_id', args.groww_order_id)}\n"
        f"Status: {order.get('order_status', '-')}\n"
        f"{_remark_line(order)}"
    )
    return success_envelope(
        summary.rstrip("\n"),
        title="Order Modification Response",
        report="Order modification details",
        metadata=body,
    )


@tool_handler("Error cancelling order")
async def cancel_groww_order(args: OrderIdArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.cancel_order(args.groww_order_id, args.segment)
    order = _payload(body)
    summary = (
        "Order cancelled successfully!\n\n"
        f"Order ID: {order.get('groww_order_id', args.groww_order_id)}\n"
        f"Status: {order.get('order_status', '-')}\n"
        f"{_remark_line(order)}"
    )
    return success_envelope(
        summary.rstrip("\n"),
        title="Order Cancellation Response",
        report="Order cancellation details",
        metadata=body,
    )


def render_order_detail(order: dict[str, Any]) -> str:
    text = f"**Order Details - {order.get('groww_order_id', '-')}**\n\n"
    text += "**Basic Information:**\n"
    text += f"- Symbol: {order.get('trading_symbol', '-')}\n"
    text += f"- Type: {order.get('transaction_type', '-')} {order.get('order_type', '-')}\n"
    text += f"- Status: {order.get('order_status', '-')}\n"
    text += f"- Exchange: {order.get('exchange', '-')} ({order.get('segment', '-')})\n"
    text += f"- Product: {order.get('product', '-')}\n\n"

    text += "**Quantity & Price:**\n"
    text += f"- Quantity: {order.get('quantity', 0)}\n"
    if order.get("filled_quantity") is not None:
        text += f"- Filled: {order['filled_quantity']}\n"
    if order.get("remaining_quantity") is not None:
        text += f"- Pending: {order['remaining_quantity']}\n"
    text += f"- Price: {format_currency(_num(order, 'price'))}\n"
    if order.get("trigger_price"):
        text += f"- Trigger Price: {_money(order['trigger_price'])}\n"
    if order.get("average_fill_price"):
        text += f"- Average Fill Price: {_money(order['average_fill_price'])}\n"
    text += f"- Validity: {order.get('validity', '-')}\n\n"

    if order.get("created_at"):
        text += f"**Timing:**\n- Created: {order['created_at']}\n"
        if order.get("exchange_time"):
            text += f"- Exchange Time: {order['exchange_time']}\n"
        if order.get("trade_date"):
            text += f"- Trade Date: {order['trade_date']}\n"
        text += "\n"

    if order.get("amo_status"):
        text += f"**AMO Status:** {order['amo_status']}\n"
    if order.get("remark"):
        text += f"**Remark:** {order['remark']}\n"
    return text


@tool_handler("Error fetching order status")
async def get_groww_order_status(args: OrderIdArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_order_detail(args.groww_order_id, args.segment)
    text = render_order_detail(_payload(body))
    return success_envelope(
        text,
        title=f"Order Details - {args.groww_order_id}",
        report=text,
        metadata=body,
    )


# ---------------------------------------------------------------------------
# Margins
# ---------------------------------------------------------------------------

_EQUITY_MARGIN_LINES = (
    ("Net Equity Margin Used", "net_equity_margin_used"),
    ("CNC Balance Available", "cnc_balance_available"),
    ("CNC Margin Used", "cnc_margin_used"),
    ("MIS Balance Available", "mis_balance_available"),
    ("MIS Margin Used", "mis_margin_used"),
)

_FNO_MARGIN_LINES = (
    ("Net F&O Margin Used", "net_fno_margin_used"),
    ("Future Balance Available", "future_balance_available"),
    ("Option Buy Balance", "option_buy_balance_available"),
    ("Option Sell Balance", "option_sell_balance_available"),
    ("SPAN Margin Used", "span_margin_used"),
    ("Exposure Margin Used", "exposure_margin_used"),
)

# Only shown when non-zero.
_ORDER_MARGIN_LINES = (
    ("CNC Margin Required", "cash_cnc_margin_required"),
    ("MIS Margin Required", "cash_mis_margin_required"),
    ("Exposure Required", "exposure_required"),
    ("SPAN Required", "span_required"),
    ("Option Buy Premium", "option_buy_premium"),
    ("Physical Delivery Margin", "physical_delivery_margin_requirement"),
)


def render_user_margin(margin: dict[str, Any]) -> str:
    equity = margin.get("equity_margin_details") or {}
    fno = margin.get("fno_margin_details") or {}

    text = "**Account Margin Overview:**\n\n"
    text += "**Cash & Collateral:**\n"
    text += f"- Clear Cash: {format_currency(_num(margin, 'clear_cash'))}\n"
    text += f"- Net Margin Used: {format_currency(_num(margin, 'net_margin_used'))}\n"
    text += f"- Collateral Available: {format_currency(_num(margin, 'collateral_available'))}\n"
    text += f"- Collateral Used: {format_currency(_num(margin, 'collateral_used'))}\n"
    if _num(margin, "adhoc_margin") > 0:
        text += f"- Adhoc Margin: {format_currency(_num(margin, 'adhoc_margin'))}\n"
    text += "\n**Equity Trading:**\n"
    for label, key in _EQUITY_MARGIN_LINES:
        text += f"- {label}: {format_currency(_num(equity, key))}\n"
    text += "\n**F&O Trading:**\n"
    for label, key in _FNO_MARGIN_LINES:
        text += f"- {label}: {format_currency(_num(fno, key))}\n"
    text += "\n**Charges:**\n"
    text += f"- Brokerage & Charges: {format_currency(_num(margin, 'brokerage_and_charges'))}\n"
    return text


@tool_handler("Error fetching user margin")
async def get_groww_user_margin(args: NoArguments, context: Any) -> ResponseEnvelope:
    body = await context.groww.get_user_margin()
    text = render_user_margin(_payload(body))
    return success_envelope(
        f"Your current Groww margin details:\n\n{text}",
        title="Groww User Margin",
        report=text,
        metadata=body,
    )


def render_order_margin(margin: dict[str, Any], args: OrderMarginArguments) -> str:
    text = ""
    if len(args.orders) == 1:
        order = args.orders[0]
        text += "**Order Details:**\n"
        text += f"- Symbol: {order.trading_symbol}\n"
        text += f"- Type: {order.transaction_type} {order.order_type}\n"
        text += f"- Quantity: {order.quantity}\n"
        text += f"- Price: {format_currency(order.price)}\n"
        text += f"- Product: {order.product}\n"
        text += f"- Exchange: {order.exchange} ({order.segment})\n\n"
    else:
        text += f"**Basket of {len(args.orders)} Orders:**\n"
        for index, order in enumerate(args.orders, start=1):
            text += (
                f"{index}. {order.trading_symbol} - {order.transaction_type} "
                f"{order.quantity} @ {format_currency(order.price)} "
                f"({format_currency(order.quantity * order.price)})\n"
            )
        text += "\n"

    text += "**Margin Requirements:**\n"
    text += f"- Total Requirement: {format_currency(_num(margin, 'total_requirement'))}\n"
    for label, key in _ORDER_MARGIN_LINES:
        if _num(margin, key) > 0:
            text += f"- {label}: {format_currency(_num(margin, key))}\n"
    text += f"- Brokerage & Charges: {format_currency(_num(margin, 'brokerage_and_charges'))}\n"
    return text


@tool_handler("Error calculating order margin")
async def get_groww_order_margin(
    args: OrderMarginArguments, context: Any
) -> ResponseEnvelope:
    legs = [order.model_dump() for order in args.orders]
    body = await context.groww.get_order_margin(legs, args.segment)
    text = render_order_margin(_payload(body), args)
    count = f"{len(args.orders)} orders" if len(args.orders) > 1 else "order"
    return success_envelope(
        f"Margin requirement for {count}:\n\n{text}",
        title="Groww Order Margin",
        report=text,
        metadata=body,
    )
