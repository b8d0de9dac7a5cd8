"""Groww order and margin MCP tool registration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from nin_terminal.mcp_server.gateway import TOOL_SPECS, get_gateway
from nin_terminal.mcp_server.tooling.shared import compact_arguments

if TYPE_CHECKING:
    from fastmcp import FastMCP

ORDER_TOOL_NAMES: set[str] = {
    "placeGrowwOrder",
    "modifyGrowwOrder",
    "cancelGrowwOrder",
    "getGrowwOrderStatus",
    "getGrowwOrderMargin",
}


def register_order_tools(mcp: FastMCP) -> None:
    @mcp.tool(
        name="placeGrowwOrder",
        description=(
            f"{TOOL_SPECS['placeGrowwOrder'].description} order_type is MARKET, LIMIT, "
            "SL or SL_M and transaction_type is BUY or SELL. validity is DAY or IOC, "
            "exchange NSE or BSE, segment CASH or FNO, product CNC, MIS or NRML. "
            "LIMIT and SL orders need price; SL and SL_M need trigger_price. "
            "Pass order_reference_id "
            "(8-20 alphanumerics) to make a retry reconcilable; one is generated "
            "otherwise and returned in metadata."
        ),
    )
    async def place_groww_order(
        trading_symbol: str,
        quantity: int,
        order_type: str,
        transaction_type: str,
        price: float | None = None,
        trigger_price: float | None = None,
        validity: str = "DAY",
        exchange: str = "NSE",
        segment: str = "CASH",
        product: str = "CNC",
        order_reference_id: str | None = None,
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "placeGrowwOrder",
            compact_arguments(
                trading_symbol=trading_symbol,
                quantity=quantity,
                order_type=order_type,
                transaction_type=transaction_type,
                price=price,
                trigger_price=trigger_price,
                validity=validity,
                exchange=exchange,
                segment=segment,
                product=product,
                order_reference_id=order_reference_id,
            ),
        )
        return envelope.to_payload()

    @mcp.tool(
        name="modifyGrowwOrder",
        description=(
            f"{TOOL_SPECS['modifyGrowwOrder'].description} order_type is MARKET, "
            "LIMIT, SL or SL_M; segment is CASH or FNO."
        ),
    )
    async def modify_groww_order(
        groww_order_id: str,
        order_type: str,
        quantity: int | None = None,
        price: float | None = None,
        trigger_price: float | None = None,
        segment: str = "CASH",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "modifyGrowwOrder",
            compact_arguments(
                groww_order_id=groww_order_id,
                order_type=order_type,
                quantity=quantity,
                price=price,
                trigger_price=trigger_price,
                segment=segment,
            ),
        )
        return envelope.to_payload()

    @mcp.tool(
        name="cancelGrowwOrder",
        description=f"{TOOL_SPECS['cancelGrowwOrder'].description} segment is CASH or FNO.",
    )
    async def cancel_groww_order(
        groww_order_id: str,
        segment: str = "CASH",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "cancelGrowwOrder", {"groww_order_id": groww_order_id, "segment": segment}
        )
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwOrderStatus",
        description=f"{TOOL_SPECS['getGrowwOrderStatus'].description} segment is CASH or FNO.",
    )
    async def get_groww_order_status(
        groww_order_id: str,
        segment: str = "CASH",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "getGrowwOrderStatus", {"groww_order_id": groww_order_id, "segment": segment}
        )
        return envelope.to_payload()

    @mcp.tool(
        name="getGrowwOrderMargin",
        description=(
            f"{TOOL_SPECS['getGrowwOrderMargin'].description} Each order needs "
            "trading_symbol, quantity and transaction_type; price, exchange, "
            "segment, product and order_type are optional. segment is CASH or FNO."
        ),
    )
    async def get_groww_order_margin(
        orders: list[dict[str, Any]],
        segment: str = "CASH",
    ) -> dict[str, Any]:
        envelope = await get_gateway().execute(
            "getGrowwOrderMargin", {"orders": orders, "segment": segment}
        )
        return envelope.to_payload()


__all__ = ["ORDER_TOOL_NAMES", "register_order_tools"]
