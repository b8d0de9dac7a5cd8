"""Typed argument models for every tool, plus the tagged ``ToolRequest`` union.

Argument models accept both snake_case and camelCase keys, so HTTP callers
that send ``minPrice`` or ``currentPrice`` validate the same as MCP callers.
"""

from __future__ import annotations

import re
import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    create_model,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


def _upper(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


def _lower(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


Symbol = Annotated[
    str, StringConstraints(strip_whitespace=True, to_upper=True, min_length=1)
]
Segment = Annotated[Literal["CASH", "FNO"], BeforeValidator(_upper)]
Exchange = Annotated[Literal["NSE", "BSE"], BeforeValidator(_upper)]
OrderType = Annotated[Literal["MARKET", "LIMIT", "SL", "SL_M"], BeforeValidator(_upper)]
TransactionType = Annotated[Literal["BUY", "SELL"], BeforeValidator(_upper)]
Product = Annotated[Literal["CNC", "MIS", "NRML"], BeforeValidator(_upper)]
Validity = Annotated[Literal["DAY", "IOC"], BeforeValidator(_upper)]
MarketCapTier = Annotated[
    Literal["large", "mid", "small", "micro"], BeforeValidator(_lower)
]

# Groww: 8-20 alphanumerics with at most two hyphens.
_ORDER_REFERENCE_RE = re.compile(r"^[A-Za-z0-9]+(?:-[A-Za-z0-9]+){0,2}$")


def new_order_reference_id() -> str:
    """Alphanumeric, 16 characters: inside Groww's 8-20 limit."""
    return f"NT{uuid.uuid4().hex[:14].upper()}"


class ToolArguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class NoArguments(ToolArguments):
    pass


# ---------------------------------------------------------------------------
# Analysis tools
# ---------------------------------------------------------------------------


class SymbolArguments(ToolArguments):
    symbol: Symbol = Field(..., description="NSE trading symbol, e.g. RELIANCE")


class QueryArguments(ToolArguments):
    query: str = Field("", description="Free-text market query or filter")


class PortfolioHolding(ToolArguments):
    symbol: str | None = None
    shares: float = Field(..., ge=0)
    current_price: float = Field(..., ge=0)
    avg_price: float | None = Field(None, ge=0)
    industry: str = Field(..., min_length=1)
    sector: str | None = None
    market_cap: float | None = None


class AnalyzePortfolioArguments(ToolArguments):
    holdings: list[PortfolioHolding] = Field(default_factory=list)


class Range(ToolArguments):
    min: float | None = None
    max: float | None = None


class MinOnly(ToolArguments):
    min: float | None = None


class PriceChangeFilter(Range):
    period: Literal["1d", "1w", "1m", "3m", "6m", "1y"]


class TechnicalFilter(ToolArguments):
    rsi: Range | None = None
    macd: Literal["bullish", "bearish"] | None = None
    moving_averages: (
        Literal["above50", "below50", "above200", "below200", "crossover50", "crossover200"]
        | None
    ) = None


class ScreenStocksArguments(ToolArguments):
    market_cap: MarketCapTier | None = None
    sector: str | None = None
    pe_ratio: Range | None = None
    dividend: MinOnly | None = None
    price_change: PriceChangeFilter | None = None
    volume: MinOnly | None = None
    technicals: TechnicalFilter | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)

    def applied(self) -> dict[str, Any]:
        """Criteria actually supplied, for echoing back in results."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Groww tools
# ---------------------------------------------------------------------------


class SegmentArguments(ToolArguments):
    segment: Segment = "CASH"


class SymbolsArguments(ToolArguments):
    symbols: list[Symbol] = Field(..., min_length=1, max_length=50)
    segment: Segment = "CASH"
    exchange: Exchange = "NSE"


class QuoteArguments(ToolArguments):
    symbol: Symbol
    exchange: Exchange = "NSE"
    segment: Segment = "CASH"


def _check_prices(order_type: str, price: float | None, trigger_price: float | None) -> None:
    if order_type in ("LIMIT", "SL") and price is None:
        raise ValueError(f"price is required for {order_type} orders")
    if order_type in ("SL", "SL_M") and trigger_price is None:
        raise ValueError(f"trigger_price is required for {order_type} orders")


class PlaceOrderArguments(ToolArguments):
    trading_symbol: Symbol
    quantity: int = Field(..., gt=0)
    price: float | None = Field(None, gt=0)
    trigger_price: float | None = Field(None, gt=0)
    validity: Validity = "DAY"
    exchange: Exchange = "NSE"
    segment: Segment = "CASH"
    product: Product = "CNC"
    order_type: OrderType
    transaction_type: TransactionType
    # set before dispatch so failures and timeouts can name it
    order_reference_id: str = Field(default_factory=new_order_reference_id)

    @field_validator("order_reference_id", mode="before")
    @classmethod
    def validate_reference_id(cls, v: Any) -> Any:
        if v is None:
            return new_order_reference_id()
        if (
            not isinstance(v, str)
            or not 8 <= len(v) <= 20
            or not _ORDER_REFERENCE_RE.match(v)
        ):
            raise ValueError(
                "order_reference_id must be 8-20 alphanumeric characters "
                "with at most two hyphens"
            )
        return v

    @model_validator(mode="after")
    def validate_prices(self) -> PlaceOrderArguments:
        _check_prices(self.order_type, self.price, self.trigger_price)
        return self


class ModifyOrderArguments(ToolArguments):
    groww_order_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("groww_order_id", "growwOrderId", "order_id", "orderId"),
    )
    quantity: int | None = Field(None, gt=0)
    price: float | None = Field(None, gt=0)
    trigger_price: float | None = Field(None, gt=0)
    order_type: OrderType
    segment: Segment = "CASH"

    @model_validator(mode="after")
    def validate_prices(self) -> ModifyOrderArguments:
        _check_prices(self.order_type, self.price, self.trigger_price)
        return self


class OrderIdArguments(ToolArguments):
    groww_order_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("groww_order_id", "growwOrderId", "order_id", "orderId"),
    )
    segment: Segment = "CASH"


class OrderMarginLeg(ToolArguments):
    trading_symbol: Symbol
    quantity: int = Field(..., gt=0)
    price: float = Field(0, ge=0)
    exchange: Exchange = "NSE"
    segment: Segment = "CASH"
    product: Product = "CNC"
    order_type: OrderType = "MARKET"
    transaction_type: TransactionType


class OrderMarginArguments(ToolArguments):
    orders: list[OrderMarginLeg] = Field(..., min_length=1)
    segment: Segment = "CASH"


# ---------------------------------------------------------------------------
# Tagged union
# ---------------------------------------------------------------------------

TOOL_ARGUMENT_MODELS: dict[str, type[ToolArguments]] = {
    "analyzeFundamentals": SymbolArguments,
    "analyzeMarket": QueryArguments,
    "getMarketNews": QueryArguments,
    "analyzeOptions": SymbolArguments,
    "analyzePortfolio": AnalyzePortfolioArguments,
    "screenStocks": ScreenStocksArguments,
    "analyzeTechnicals": SymbolArguments,
    "getUserHoldings": NoArguments,
    "getUserBinanceHoldings": NoArguments,
    "getGrowwHoldings": NoArguments,
    "getGrowwPositions": SegmentArguments,
    "getGrowwSymbolsLTP": SymbolsArguments,
    "getGrowwSymbolsOHLC": SymbolsArguments,
    "getGrowwSymbolQuote": QuoteArguments,
    "placeGrowwOrder": PlaceOrderArguments,
    "modifyGrowwOrder": ModifyOrderArguments,
    "cancelGrowwOrder": OrderIdArguments,
    "getGrowwOrderStatus": OrderIdArguments,
    "getGrowwUserMargin": NoArguments,
    "getGrowwOrderMargin": OrderMarginArguments,
}


def _tagged_variant(name: str, arguments_model: type[ToolArguments]) -> type[BaseModel]:
    return create_model(
        f"{name[0].upper()}{name[1:]}Request",
        __config__=ConfigDict(frozen=True),
        name=(Literal[name], ...),
        arguments=(arguments_model, ...),
    )


TOOL_REQUEST_VARIANTS: dict[str, type[BaseModel]] = {
    name: _tagged_variant(name, model) for name, model in TOOL_ARGUMENT_MODELS.items()
}

ToolRequest = Annotated[
    Union[tuple(TOOL_REQUEST_VARIANTS.values())],  # type: ignore[valid-type]
    Field(discriminator="name"),
]

_TOOL_REQUEST_ADAPTER: TypeAdapter[Any] = TypeAdapter(ToolRequest)


def parse_tool_request(name: str, arguments: dict[str, Any] | None) -> Any:
    """Validate ``name`` and ``arguments`` into the matching tagged request.

    Raises ``pydantic.ValidationError`` for an unknown tag or bad arguments.
    """
    return _TOOL_REQUEST_ADAPTER.validate_python(
        {"name": name, "arguments": arguments or {}}
    )
