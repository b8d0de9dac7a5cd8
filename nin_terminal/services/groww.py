"""Groww trading API client.

Every call is a single authenticated request. Non-2xx responses and bodies
whose ``status`` is not ``SUCCESS`` raise ``ProviderError``. A missing API
key raises ``ConfigurationError`` when a call is attempted.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nin_terminal.core.config import Settings
from nin_terminal.core.errors import ConfigurationError, ProviderError, ToolTimeoutError

logger = logging.getLogger(__name__)

API_VERSION = "1.0"

HOLDINGS_URL = "/v1/holdings/user"
POSITIONS_URL = "/v1/positions/user"
LTP_URL = "/v1/live-data/ltp"
OHLC_URL = "/v1/live-data/ohlc"
QUOTE_URL = "/v1/live-data/quote"
ORDER_CREATE_URL = "/v1/order/create"
ORDER_MODIFY_URL = "/v1/order/modify"
ORDER_CANCEL_URL = "/v1/order/cancel"
ORDER_DETAIL_URL = "/v1/order/detail/{order_id}"
USER_MARGIN_URL = "/v1/margins/detail/user"
ORDER_MARGIN_URL = "/v1/margins/detail/orders"


def _failure_detail(body: Any) -> str | None:
    """Pull a human readable reason out of a non-SUCCESS Groww body."""
    if not isinstance(body, dict):
        return None
    payload = body.get("payload")
    if isinstance(payload, dict) and payload.get("remark"):
        return str(payload["remark"])
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def exchange_symbols(symbols: list[str], exchange: str) -> str:
    """``["RELIANCE", "TCS"]`` -> ``"NSE_RELIANCE,NSE_TCS"``."""
    return ",".join(f"{exchange}_{symbol}" for symbol in symbols)


class GrowwClient:
    def __init__(
        self,
        config: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = config.GROWW_API_KEY
        self._base_url = config.GROWW_BASE_URL.rstrip("/")
        self._timeout = config.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "X-API-VERSION": API_VERSION,
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        failure: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        require_payload: bool = False,
    ) -> dict[str, Any]:
        if not self._api_key:
            raise ConfigurationError("Groww API key not configured")

        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as cli:
            try:
                res = await cli.request(
                    method, path, params=params, json=json, headers=self._headers()
                )
            except httpx.TimeoutException as exc:
                raise ToolTimeoutError(f"Groww API timed out: {method} {path}") from exc
            except httpx.HTTPError as exc:
                raise ProviderError(f"Groww API request failed: {exc}") from exc

        if res.is_error:
            logger.warning(
                "Groww API error: %s %s -> %s", method, path, res.status_code
            )
            raise ProviderError(
                f"Groww API error: {res.status_code} {res.reason_phrase}",
                status_code=res.status_code,
            )

        try:
            body = res.json()
        except ValueError as exc:
            raise ProviderError("Groww API returned a non-JSON body") from exc

        if not isinstance(body, dict) or body.get("status") != "SUCCESS":
            detail = _failure_detail(body)
            raise ProviderError(f"{failure}: {detail}" if detail else failure)
        if require_payload and not body.get("payload"):
            raise ProviderError(f"{failure}: empty payload")
        return body

    # --- portfolio -------------------------------------------------------

    async def get_holdings(self) -> dict[str, Any]:
        return await self._request(
            "GET", HOLDINGS_URL, failure="Failed to fetch Groww holdings"
        )

    async def get_positions(self, segment: str | None = None) -> dict[str, Any]:
        params = {"segment": segment} if segment else None
        return await self._request(
            "GET", POSITIONS_URL, params=params, failure="Failed to fetch Groww positions"
        )

    # --- live data -------------------------------------------------------

    async def get_ltp(
        self, symbols: list[str], exchange: str = "NSE", segment: str = "CASH"
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            LTP_URL,
            params={
                "segment": segment,
                "exchange_symbols": exchange_symbols(symbols, exchange),
            },
            failure="Failed to fetch Groww LTP data",
        )

    async def get_ohlc(
        self, symbols: list[str], exchange: str = "NSE", segment: str = "CASH"
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            OHLC_URL,
            params={
                "segment": segment,
                "exchange_symbols": exchange_symbols(symbols, exchange),
            },
            failure="Failed to fetch Groww OHLC data",
        )

    async def get_quote(
        self, symbol: str, exchange: str = "NSE", segment: str = "CASH"
    ) -> dict[str, Any]:
        return await self._request(
            "GET",
            QUOTE_URL,
            params={"exchange": exchange, "segment": segment, "trading_symbol": symbol},
            failure="Failed to fetch Groww quote data",
            require_payload=True,
        )

    # --- orders ----------------------------------------------------------

    async def place_order(self, order: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "POST",
            ORDER_CREATE_URL,
            json=order,
            failure="Failed to place order",
            require_payload=True,
        )

    async def modify_order(self, order: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "POST",
            ORDER_MODIFY_URL,
            json=order,
            failure="Failed to modify order",
            require_payload=True,
        )

    async def cancel_order(self, groww_order_id: str, segment: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            ORDER_CANCEL_URL,
            json={"segment": segment, "groww_order_id": groww_order_id},
            failure="Failed to cancel order",
            require_payload=True,
        )

    async def get_order_detail(self, groww_order_id: str, segment: str) -> dict[str, Any]:
        return await self._request(
            "GET",
            ORDER_DETAIL_URL.format(order_id=groww_order_id),
            params={"segment": segment},
            failure="Failed to fetch order details",
            require_payload=True,
        )

    # --- margins ---------------------------------------------------------

    async def get_user_margin(self) -> dict[str, Any]:
        return await self._request(
            "GET",
            USER_MARGIN_URL,
            failure="Failed to fetch Groww user margin",
            require_payload=True,
        )

    async def get_order_margin(
        self, orders: list[dict[str, Any]], segment: str = "CASH"
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            ORDER_MARGIN_URL,
            params={"segment": segment},
            json=orders,
            failure="Failed to fetch Groww order margin",
            require_payload=True,
        )
