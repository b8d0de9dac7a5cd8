"""Descriptor routes, the market-analysis prompt and the market-data resource.

The HTTP routes are FastMCP custom routes, served next to the MCP endpoint
when the server runs over SSE or streamable HTTP.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from starlette.requests import Request
from starlette.responses import JSONResponse

from nin_terminal import __version__
from nin_terminal.core.config import settings
from nin_terminal.core.errors import ErrorKind
from nin_terminal.data import get_index_snapshot
from nin_terminal.mcp_server.gateway import TOOL_NAMES, get_gateway

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastmcp import FastMCP

logger = logging.getLogger(__name__)

SERVICE_TITLE = "NIN Terminal"
SERVICE_DESCRIPTION = "Financial analysis and brokerage tools for Indian markets"

# Caller mistakes; everything else keeps the conversational 200.
_CLIENT_ERROR_KINDS = {ErrorKind.INVALID_TOOL.value, ErrorKind.INVALID_ARGUMENTS.value}


def _base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


async def healthz(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "service": settings.MCP_SERVER_NAME})


async def manifest(request: Request) -> JSONResponse:
    base = _base_url(request)
    return JSONResponse(
        {
            "schema_version": "v1",
            "name": SERVICE_TITLE,
            "description": SERVICE_DESCRIPTION,
            "auth": {"type": "none"},
            "api": {"type": "openapi", "url": f"{base}/api/openapi.json"},
            "mcp_server": {
                "name": settings.MCP_SERVER_NAME,
                "description": f"{SERVICE_DESCRIPTION} via MCP",
                "transport": settings.MCP_TYPE,
                "path": settings.MCP_PATH,
            },
        }
    )


def build_openapi_document(base_url: str) -> dict[str, Any]:
    envelope_schema = {
        "type": "object",
        "required": ["messages", "references"],
        "properties": {
            "messages": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "role": {"type": "string"},
                        "content": {"type": "string"},
                    },
                },
            },
            "references": {"type": "array", "items": {"type": "object"}},
            "error": {
                "type": "object",
                "properties": {
                    "kind": {"type": "string", "enum": [kind.value for kind in ErrorKind]},
                    "message": {"type": "string"},
                },
            },
        },
    }
    return {
        "openapi": "3.0.0",
        "info": {
            "title": f"{SERVICE_TITLE} API",
            "description": SERVICE_DESCRIPTION,
            "version": __version__,
        },
        "servers": [{"url": f"{base_url}/api"}],
        "paths": {
            "/claude/mcp": {
                "post": {
                    "summary": "Execute an MCP tool",
                    "operationId": "executeMcpTool",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "required": ["name"],
                                    "properties": {
                                        "name": {
                                            "type": "string",
                                            "description": "The name of the tool to execute",
                                            "enum": list(TOOL_NAMES),
                                        },
                                        "arguments": {
                                            "type": "object",
                                            "description": "Tool arguments, snake_case or camelCase",
                                        },
                                    },
                                }
                            }
                        },
                    },
                    "responses": {
                        "200": {
                            "description": "Tool executed; provider failures are reported in the envelope",
                            "content": {"application/json": {"schema": envelope_schema}},
                        },
                        "400": {
                            "description": "Unknown tool, invalid arguments or malformed body",
                            "content": {"application/json": {"schema": envelope_schema}},
                        },
                    },
                }
            }
        },
    }


async def openapi(request: Request) -> JSONResponse:
    return JSONResponse(build_openapi_document(_base_url(request)))


async def mcp_config(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "name": settings.MCP_SERVER_NAME,
            "version": __version__,
            "description": SERVICE_DESCRIPTION,
            "tools": get_gateway().describe(),
        }
    )


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        {
            "messages": [{"role": "assistant", "content": message}],
            "references": [],
            "error": {"kind": ErrorKind.INVALID_ARGUMENTS.value, "message": message},
        },
        status_code=400,
    )


async def execute_tool(request: Request) -> JSONResponse:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _bad_request("Request body must be a JSON object")

    if not isinstance(body, dict) or not isinstance(body.get("name"), str):
        return _bad_request('Request body must include a string "name"')
    arguments = body.get("arguments")
    if arguments is not None and not isinstance(arguments, dict):
        return _bad_request('"arguments" must be an object')

    envelope = await get_gateway().execute(body["name"], arguments)
    status_code = 400 if envelope.error and envelope.error.kind in _CLIENT_ERROR_KINDS else 200
    return JSONResponse(envelope.to_payload(), status_code=status_code)


MANIFEST_ROUTES: tuple[tuple[str, list[str], Callable[[Request], Awaitable[JSONResponse]]], ...] = (
    ("/healthz", ["GET"], healthz),
    ("/api/manifest.json", ["GET"], manifest),
    ("/api/openapi.json", ["GET"], openapi),
    ("/api/mcp-config", ["GET"], mcp_config),
    ("/api/claude/mcp", ["POST"], execute_tool),
)


def market_analysis_prompt(sector: str | None = None, timeframe: str | None = None) -> str:
    sector = sector or "overall market"
    timeframe = timeframe or "daily"
    return (
        f"Generate a comprehensive {timeframe} analysis of the {sector}, including key "
        "trends, notable movers, and potential opportunities. Include relevant technical "
        "and fundamental factors."
    )


def register_manifest(mcp: FastMCP) -> None:
    for path, methods, endpoint in MANIFEST_ROUTES:
        mcp.custom_route(path, methods=methods)(endpoint)

    mcp.prompt(
        name="market-analysis",
        description="Generate a market analysis report for a sector and timeframe",
    )(market_analysis_prompt)

    @mcp.resource(
        "resource://market-data",
        name="market-data",
        description="Snapshot of NIFTY 50, SENSEX and NIFTY BANK",
        mime_type="application/json",
    )
    def market_data() -> dict[str, Any]:
        return get_index_snapshot()

    logger.debug("Registered %d descriptor routes", len(MANIFEST_ROUTES))


__all__ = [
    "MANIFEST_ROUTES",
    "build_openapi_document",
    "market_analysis_prompt",
    "register_manifest",
]
