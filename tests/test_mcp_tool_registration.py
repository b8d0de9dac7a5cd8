import httpx
import pytest
from fastmcp import Client, FastMCP

import nin_terminal.mcp_server.gateway as gateway_module

from nin_terminal.mcp_server.gateway import TOOL_NAMES, TOOL_SPECS
from nin_terminal.mcp_server.tooling.analysis_registration import (
    ANALYSIS_TOOL_NAMES,
    register_analysis_tools,
)
from nin_terminal.mcp_server.tooling.market_data_registration import (
    MARKET_DATA_TOOL_NAMES,
    register_market_data_tools,
)
from nin_terminal.mcp_server.tooling.orders_registration import (
    ORDER_TOOL_NAMES,
    register_order_tools,
)
from nin_terminal.mcp_server.tooling.portfolio_registration import (
    PORTFOLIO_TOOL_NAMES,
    register_portfolio_tools,
)
from nin_terminal.mcp_server.tooling.registry import register_all_tools


class DummyMCP:
    def __init__(self) -> None:
        self.tools: dict[str, object] = {}
        self.descriptions: dict[str, str] = {}

    def tool(self, name: str, description: str):
        def decorator(func):
            self.tools[name] = func
            self.descriptions[name] = description
            return func

        return decorator


@pytest.mark.unit
def test_register_all_tools_registers_all_available_tools() -> None:
    mcp = DummyMCP()

    register_all_tools(mcp)

    assert set(mcp.tools) == set(TOOL_NAMES)
    assert len(TOOL_NAMES) == 20


@pytest.mark.unit
def test_domain_registration_is_incremental() -> None:
    mcp = DummyMCP()

    register_analysis_tools(mcp)
    assert set(mcp.tools) == ANALYSIS_TOOL_NAMES

    register_portfolio_tools(mcp)
    assert set(mcp.tools) == ANALYSIS_TOOL_NAMES | PORTFOLIO_TOOL_NAMES

    register_market_data_tools(mcp)
    register_order_tools(mcp)
    assert set(mcp.tools) == (
        ANALYSIS_TOOL_NAMES
        | PORTFOLIO_TOOL_NAMES
        | MARKET_DATA_TOOL_NAMES
        | ORDER_TOOL_NAMES
    )


@pytest.mark.unit
def test_domain_tool_groups_do_not_overlap() -> None:
    groups = [
        ANALYSIS_TOOL_NAMES,
        PORTFOLIO_TOOL_NAMES,
        MARKET_DATA_TOOL_NAMES,
        ORDER_TOOL_NAMES,
    ]
    assert sum(len(group) for group in groups) == len(TOOL_NAMES)


@pytest.mark.unit
def test_registered_descriptions_start_with_gateway_description() -> None:
    mcp = DummyMCP()

    register_all_tools(mcp)

    for name, description in mcp.descriptions.items():
        assert description.startswith(TOOL_SPECS[name].description)


@pytest.mark.asyncio
async def test_registered_tool_returns_envelope_payload(monkeypatch) -> None:
    mcp = DummyMCP()
    register_all_tools(mcp)
    monkeypatch.setattr(gateway_module, "_gateway", None)

    payload = await mcp.tools["getUserHoldings"]()

    assert payload["messages"][0]["role"] == "assistant"
    assert payload["references"][0]["title"] == "User Holdings"
    assert "error" not in payload


def _fastmcp_with_tools() -> FastMCP:
    mcp = FastMCP("nin-terminal-test")
    register_all_tools(mcp)
    return mcp


@pytest.mark.integration
@pytest.mark.asyncio
async def test_lowercase_segment_reaches_gateway_over_mcp(monkeypatch, groww_gateway):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "SUCCESS", "payload": {"positions": []}})

    monkeypatch.setattr(gateway_module, "_gateway", groww_gateway(handler))

    async with Client(_fastmcp_with_tools()) as client:
        result = await client.call_tool("getGrowwPositions", {"segment": "cash"})

    payload = result.structured_content
    assert result.is_error is False
    assert seen[0].url.params["segment"] == "CASH"
    assert payload["messages"][0]["content"].startswith(
        "Here are your current Groww positions for CASH:"
    )
    assert "error" not in payload


@pytest.mark.integration
@pytest.mark.asyncio
async def test_bad_transaction_type_returns_envelope_over_mcp(monkeypatch, gateway):
    monkeypatch.setattr(gateway_module, "_gateway", gateway)

    async with Client(_fastmcp_with_tools()) as client:
        result = await client.call_tool(
            "placeGrowwOrder",
            {
                "trading_symbol": "TCS",
                "quantity": 1,
                "order_type": "market",
                "transaction_type": "hold",
            },
        )

    payload = result.structured_content
    assert result.is_error is False
    assert payload["references"] == []
    assert payload["error"]["kind"] == "invalid_arguments"
    content = payload["messages"][0]["content"]
    assert content.startswith("Invalid arguments for placeGrowwOrder: ")
    assert "Input should be 'BUY' or 'SELL'" in content
