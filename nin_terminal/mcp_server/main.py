import logging

from nin_terminal import __version__
from nin_terminal.core.config import settings
from nin_terminal.monitoring.sentry import capture_exception, init_sentry

# ──────────────────────────────────────────────────────────────────────
# 1) Sentry MUST be initialised BEFORE FastMCP is instantiated.
#
#    MCPIntegration.setup_once() patches the low-level server's call_tool
#    decorator. FastMCP.__init__() registers its tool handler through that
#    decorator, so a handler registered before Sentry patches it is never
#    instrumented and no tools/call or httpx spans reach the trace.
# ──────────────────────────────────────────────────────────────────────
init_sentry(
    service_name="nin-terminal-mcp",
    enable_httpx=True,
    enable_mcp=True,
)

# 2) Now it is safe to create the FastMCP instance and register tools.
from fastmcp import FastMCP  # noqa: E402

from nin_terminal.mcp_server.manifest import register_manifest  # noqa: E402
from nin_terminal.mcp_server.sentry_middleware import (  # noqa: E402
    McpSentryTracingMiddleware,
)
from nin_terminal.mcp_server.tooling.registry import register_all_tools  # noqa: E402

mcp = FastMCP(
    name=settings.MCP_SERVER_NAME,
    instructions=(
        "Financial analysis tools for Indian markets plus Groww and Binance "
        "brokerage access (fundamentals, technicals, options, market overview, "
        "news, screening, holdings, live quotes, order placement and margins). "
        "Every tool answers with conversational messages and references."
    ),
    version=__version__,
)

register_all_tools(mcp)
register_manifest(mcp)

# 3) Fallback middleware for transports the native integration does not wrap.
_SENTRY_MIDDLEWARE_REGISTERED = False


def _register_sentry_middleware() -> None:
    global _SENTRY_MIDDLEWARE_REGISTERED
    if _SENTRY_MIDDLEWARE_REGISTERED:
        return
    mcp.add_middleware(McpSentryTracingMiddleware())
    _SENTRY_MIDDLEWARE_REGISTERED = True


_register_sentry_middleware()


def main() -> None:
    log_level_name = str(getattr(settings, "LOG_LEVEL", "INFO") or "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    missing = settings.missing_credentials()
    if missing:
        # broker tools answer with a configuration error until these are set
        for name in missing:
            logging.error("Missing broker credential: %s", name)

    mcp_type = settings.MCP_TYPE
    mcp_host = settings.MCP_HOST
    mcp_port = settings.MCP_PORT
    mcp_path = settings.MCP_PATH

    logging.info(
        f"Starting MCP server: type={mcp_type} host={mcp_host} port={mcp_port} path={mcp_path}"
    )

    try:
        if mcp_type == "stdio":
            mcp.run(transport="stdio")
        elif mcp_type == "sse":
            mcp.run(transport="sse", host=mcp_host, port=mcp_port, path=mcp_path)
        elif mcp_type == "streamable-http":
            mcp.run(
                transport="streamable-http", host=mcp_host, port=mcp_port, path=mcp_path
            )
        else:
            raise ValueError(f"Unsupported MCP_TYPE: {mcp_type}")
    except Exception as exc:
        capture_exception(
            exc,
            mcp_type=mcp_type,
            mcp_host=mcp_host,
            mcp_port=mcp_port,
            mcp_path=mcp_path,
        )
        raise


if __name__ == "__main__":
    main()
