"""Binance spot and Simple Earn balances, valued in USD."""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import logging
import time
from typing import Any
from urllib.parse import urlencode

import httpx

from nin_terminal.core.config import Settings
from nin_terminal.core.errors import (
    ConfigurationError,
    ProviderError,
    ToolError,
    ToolTimeoutError,
)

logger = logging.getLogger(__name__)

USER_ASSET_URL = "/sapi/v3/asset/getUserAsset"
TICKER_24HR_URL = "/api/v3/ticker/24hr"
FLEXIBLE_POSITION_URL = "/sapi/v1/simple-earn/flexible/position"
LOCKED_POSITION_URL = "/sapi/v1/simple-earn/locked/position"

STABLECOINS = frozenset({"USDT", "BUSD", "USDC", "TUSD", "FDUSD"})

# Simple Earn endpoints page at 100 rows.
_EARN_PAGE_SIZE = 100


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def price_in_usdt(asset: str, prices: dict[str, float]) -> float:
    """USDT price of ``asset``: direct pair first, then via BTC. 0.0 when unknown."""
    if asset in STABLECOINS:
        return 1.0
    direct = prices.get(f"{asset}USDT")
    if direct:
        return direct
    via_btc = prices.get(f"{asset}BTC")
    btc_usdt = prices.get("BTCUSDT")
    if via_btc and btc_usdt:
        return via_btc * btc_usdt
    return 0.0


def merge_balances(
    spot_assets: list[dict[str, Any]],
    flexible_rows: list[dict[str, Any]],
    locked_rows: list[dict[str, Any]],
) -> dict[str, dict[str, float]]:
    """Combine spot balances with Simple Earn principal.

    Flexible positions are redeemable on demand and count as ``free``.
    Locked positions count as ``locked``.
    """
    combined: dict[str, dict[str, float]] = {}

    def _slot(asset: str) -> dict[str, float]:
        return combined.setdefault(asset, {"free": 0.0, "locked": 0.0})

    for row in spot_assets:
        asset = row.get("asset")
        if not asset:
            continue
        slot = _slot(asset)
        slot["free"] += _to_float(row.get("free"))
        slot["locked"] += _to_float(row.get("locked"))

    for row in flexible_rows:
        amount = _to_float(row.get("totalAmount"))
        if row.get("asset") and amount > 0:
            _slot(row["asset"])["free"] += amount

    for row in locked_rows:
        amount = _to_float(row.get("amount"))
        if row.get("asset") and amount > 0:
            _slot(row["asset"])["locked"] += amount

    return combined


def value_holdings(
    balances: dict[str, dict[str, float]], prices: dict[str, float]
) -> tuple[list[dict[str, Any]], float]:
    """Price every non-zero balance. Returns holdings sorted by USD value, and the total."""
    holdings: list[dict[str, Any]] = []
    total_value_usd = 0.0
    for asset, balance in balances.items():
        total = balance["free"] + balance["locked"]
        if total <= 0:
            continue
        price = price_in_usdt(asset, prices)
        usd_value = total * price
        total_value_usd += usd_value
        holdings.append(
            {
                "asset": asset,
                "free": balance["free"],
                "locked": balance["locked"],
                "price_in_usdt": round(price, 8),
                "usd_value": round(usd_value, 2),
            }
        )
    holdings.sort(key=lambda h: h["usd_value"], reverse=True)
    return holdings, round(total_value_usd, 2)


class BinanceClient:
    def __init__(
        self,
        config: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = config.BINANCE_API_KEY
        self._secret_key = config.BINANCE_SECRET_KEY
        self._base_url = config.BINANCE_BASE_URL.rstrip("/")
        self._recv_window = config.BINANCE_RECV_WINDOW
        self._timeout = config.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._secret_key)

    def _sign(self, params: dict[str, Any]) -> str:
        query = urlencode(params)
        signature = hmac.new(
            self._secret_key.encode(), query.encode(), hashlib.sha256
        ).hexdigest()
        return f"{query}&signature={signature}"

    async def _request(
        self,
        cli: httpx.AsyncClient,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        signed: bool = False,
    ) -> Any:
        headers: dict[str, str] = {}
        url = path
        if signed:
            signed_params = dict(params or {})
            signed_params["recvWindow"] = self._recv_window
            signed_params["timestamp"] = int(time.time() * 1000)
            url = f"{path}?{self._sign(signed_params)}"
            params = None
            headers["X-MBX-APIKEY"] = self._api_key

        try:
            res = await cli.request(method, url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise ToolTimeoutError(f"Binance API timed out: {method} {path}") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Binance API request failed: {exc}") from exc

        if res.is_error:
            detail = ""
            try:
                body = res.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("msg"):
                detail = f" ({body['msg']})"
            raise ProviderError(
                f"Binance API error: {res.status_code} {res.reason_phrase}{detail}",
                status_code=res.status_code,
            )
        try:
            return res.json()
        except ValueError as exc:
            raise ProviderError("Binance API returned a non-JSON body") from exc

    async def _spot_assets(self, cli: httpx.AsyncClient) -> list[dict[str, Any]]:
        data = await self._request(cli, "POST", USER_ASSET_URL, signed=True)
        if not isinstance(data, list):
            raise ProviderError("Unexpected Binance user asset response")
        return data

    async def _ticker_prices(self, cli: httpx.AsyncClient) -> dict[str, float]:
        data = await self._request(cli, "GET", TICKER_24HR_URL)
        prices: dict[str, float] = {}
        for ticker in data if isinstance(data, list) else []:
            symbol = ticker.get("symbol")
            last_price = _to_float(ticker.get("lastPrice"))
            if symbol and last_price:
                prices[symbol] = last_price
        return prices

    async def _earn_rows(self, cli: httpx.AsyncClient, path: str) -> list[dict[str, Any]]:
        data = await self._request(
            cli, "GET", path, params={"size": _EARN_PAGE_SIZE}, signed=True
        )
        rows = data.get("rows") if isinstance(data, dict) else None
        return rows if isinstance(rows, list) else []

    async def fetch_portfolio(self) -> dict[str, Any]:
        """Spot plus Simple Earn holdings.

        Spot balances are required. Price and Earn sources degrade to empty
        on failure and are reported in ``warnings``.
        """
        if not self.configured:
            raise ConfigurationError("Binance API key or secret key not configured")

        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as cli:
            spot, prices, flexible, locked = await asyncio.gather(
                self._spot_assets(cli),
                self._ticker_prices(cli),
                self._earn_rows(cli, FLEXIBLE_POSITION_URL),
                self._earn_rows(cli, LOCKED_POSITION_URL),
                return_exceptions=True,
            )

        if isinstance(spot, BaseException):
            if isinstance(spot, ToolError):
                raise spot
            raise ProviderError(f"Failed to fetch Binance spot assets: {spot}") from spot

        warnings: list[str] = []

        def _degrade(result: Any, source: str, empty: Any) -> Any:
            if isinstance(result, BaseException):
                logger.warning("Binance %s unavailable: %s", source, result)
                warnings.append(f"{source} unavailable: {result}")
                return empty
            return result

        prices = _degrade(prices, "ticker prices", {})
        flexible = _degrade(flexible, "flexible earn positions", [])
        locked = _degrade(locked, "locked earn positions", [])

        balances = merge_balances(spot, flexible, locked)
        holdings, total_value_usd = value_holdings(balances, prices)
        logger.info(
            "Binance portfolio valued: assets=%d total_usd=%.2f",
            len(holdings),
            total_value_usd,
        )
        return {
            "spot": holdings,
            "total_value_usd": total_value_usd,
            "warnings": warnings,
        }
