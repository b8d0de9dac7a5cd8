"""Tests for the descriptor routes, prompt and resource."""

from __future__ import annotations

import httpx
import pytest
from starlette.applications import Starlette
from starlette.routing import Route

import nin_terminal.mcp_server.gateway as gateway_module
from nin_terminal.mcp_server.gateway import TOOL_NAMES
from nin_terminal.mcp_server.manifest import (
    MANIFEST_ROUTES,
    build_openapi_document,
    market_analysis_prompt,
    register_manifest,
)


@pytest.fixture
def client(monkeypatch, gateway):
    monkeypatch.setattr(gateway_module, "_gateway", gateway)
    app = Starlette(
        routes=[
            Route(path, endpoint, methods=methods)
            for path, methods, endpoint in MANIFEST_ROUTES
        ]
    )
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    )


@pytest.mark.asyncio
async def test_healthz(client):
    async with client:
        res = await client.get("/healthz")

    assert res.status_code == 200
    assert res.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_manifest_points_at_openapi(client):
    async with client:
        res = await client.get("/api/manifest.json")

    body = res.json()
    assert body["schema_version"] == "v1"
    assert body["name"] == "NIN Terminal"
    assert body["api"]["url"] == "http://testserver/api/openapi.json"


@pytest.mark.asyncio
async def test_openapi_enumerates_tools(client):
    async with client:
        res = await client.get("/api/openapi.json")

    body = res.json()
    operation = body["paths"]["/claude/mcp"]["post"]
    assert operation["operationId"] == "executeMcpTool"
    schema = operation["requestBody"]["content"]["application/json"]["schema"]
    assert schema["properties"]["name"]["enum"] == list(TOOL_NAMES)


@pytest.mark.unit
def test_openapi_servers_use_base_url():
    document = build_openapi_document("https://terminal.example")

    assert document["servers"] == [{"url": "https://terminal.example/api"}]


@pytest.mark.asyncio
async def test_mcp_config_lists_tools(client):
    async with client:
        res = await client.get("/api/mcp-config")

    tools = res.json()["tools"]
    assert [tool["name"] for tool in tools] == list(TOOL_NAMES)


@pytest.mark.asyncio
async def test_execute_tool_success(client):
    async with client:
        res = await client.post(
            "/api/claude/mcp",
            json={"name": "screenStocks", "arguments": {"sector": "IT"}},
        )

    assert res.status_code == 200
    body = res.json()
    assert "error" not in body
    assert len(body["references"][0]["metadata"]["stocks"]) == 2


@pytest.mark.asyncio
async def test_execute_unknown_tool_is_bad_request(client):
    async with client:
        res = await client.post("/api/claude/mcp", json={"name": "assessRisk"})

    assert res.status_code == 400
    body = res.json()
    assert body["error"]["kind"] == "invalid_tool"
    assert body["references"] == []


@pytest.mark.asyncio
async def test_execute_provider_failure_stays_conversational(client):
    async with client:
        res = await client.post("/api/claude/mcp", json={"name": "getGrowwHoldings"})

    assert res.status_code == 200
    assert res.json()["error"]["kind"] == "configuration"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [b"not json", b"[1, 2]", b'{"arguments": {}}', b'{"name": "screenStocks", "arguments": []}'],
)
async def test_execute_malformed_body(client, content):
    async with client:
        res = await client.post(
            "/api/claude/mcp",
            content=content,
            headers={"Content-Type": "application/json"},
        )

    assert res.status_code == 400
    assert res.json()["error"]["kind"] == "invalid_arguments"


@pytest.mark.unit
def test_market_analysis_prompt_defaults():
    assert market_analysis_prompt() == (
        "Generate a comprehensive daily analysis of the overall market, including key "
        "trends, notable movers, and potential opportunities. Include relevant technical "
        "and fundamental factors."
    )
    assert market_analysis_prompt("IT sector", "weekly").startswith(
        "Generate a comprehensive weekly analysis of the IT sector,"
    )


class DummyMCP:
    def __init__(self) -> None:
        self.routes: dict[str, list[str]] = {}
        self.prompts: dict[str, object] = {}
        self.resources: dict[str, object] = {}

    def custom_route(self, path: str, methods: list[str]):
        def decorator(func):
            self.routes[path] = methods
            return func

        return decorator

    def prompt(self, name: str, description: str):
        def decorator(func):
            self.prompts[name] = func
            return func

        return decorator

    def resource(self, uri: str, **kwargs):
        def decorator(func):
            self.resources[uri] = func
            return func

        return decorator


@pytest.mark.unit
def test_register_manifest():
    mcp = DummyMCP()

    register_manifest(mcp)

    assert mcp.routes["/api/claude/mcp"] == ["POST"]
    assert set(mcp.routes) == {path for path, _, _ in MANIFEST_ROUTES}
    assert "market-analysis" in mcp.prompts

    snapshot = mcp.resources["resource://market-data"]()
    assert [index["name"] for index in snapshot["indices"]][:1] == ["NIFTY 50"]
