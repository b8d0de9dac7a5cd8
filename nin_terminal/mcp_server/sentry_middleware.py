"""Sentry tracing middleware for FastMCP tool calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import sentry_sdk
from fastmcp.server.middleware.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from mcp.types import CallToolResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastmcp.tools.tool import ToolResult as ToolResultType

logger = logging.getLogger(__name__)

_ACTION_PRIORITY = ("transaction_type", "order_type", "segment")


def _extract_action(arguments: dict[str, Any] | None) -> str | None:
    """Action label from tool arguments: transaction_type > order_type > segment."""
    if not arguments:
        return None
    for key in _ACTION_PRIORITY:
        if (value := arguments.get(key)) is not None:
            return str(value)
    return None


def _structured_content(result: Any) -> dict[str, Any] | None:
    if isinstance(result, ToolResult):
        structured = result.structured_content
    elif isinstance(result, tuple) and len(result) == 2:
        structured = result[1]
    else:
        return None
    if not isinstance(structured, dict):
        return None
    # FastMCP wraps non-object return values under "result"
    nested = structured.get("result")
    if "messages" not in structured and isinstance(nested, dict):
        return nested
    return structured


def _error_kind(result: Any) -> str | None:
    """Envelope error kind of a tool result, or None when the call succeeded."""
    if isinstance(result, CallToolResult):
        return "internal" if result.isError else None
    structured = _structured_content(result)
    if structured is None:
        return None
    error = structured.get("error")
    if isinstance(error, dict):
        return str(error.get("kind") or "internal")
    if error or structured.get("isError"):
        return "internal"
    return None


def _is_error_result(result: Any) -> bool:
    return _error_kind(result) is not None


class McpSentryTracingMiddleware(Middleware):
    """Sentry tracing for MCP tool calls.

    Names the transaction ``mcp.<toolName>``, opens a child span per call,
    tags tool name and order action, and marks envelopes that carry an
    ``error`` as failed.
    """

    async def on_call_tool(
        self,
        context: MiddlewareContext[Any],
        call_next: Callable[[MiddlewareContext[Any]], Awaitable[ToolResultType]],
    ) -> ToolResultType:
        message = context.message
        tool_name = getattr(message, "name", "unknown")
        arguments = getattr(message, "arguments", None)
        action = _extract_action(arguments if isinstance(arguments, dict) else None)
        transaction_name = f"mcp.{tool_name}"

        scope = sentry_sdk.get_current_scope()
        scope.set_transaction_name(transaction_name, source="custom")
        scope.set_tag("mcp.tool_name", tool_name)
        scope.set_tag("mcp.method", "tools/call")
        if action:
            scope.set_tag("mcp.action", action)

        if scope.span is not None:
            return await self._run_tool_span(
                context, call_next, tool_name, action, arguments, transaction=None
            )

        # stdio transport has no surrounding request span
        with sentry_sdk.start_transaction(
            name=transaction_name,
            op="mcp.request",
            source="custom",
        ) as transaction:
            transaction.set_tag("mcp.tool_name", tool_name)
            if action:
                transaction.set_tag("mcp.action", action)
            return await self._run_tool_span(
                context, call_next, tool_name, action, arguments, transaction=transaction
            )

    async def _run_tool_span(
        self,
        context: MiddlewareContext[Any],
        call_next: Callable[[MiddlewareContext[Any]], Awaitable[ToolResultType]],
        tool_name: str,
        action: str | None,
        arguments: Any,
        transaction: Any | None,
    ) -> ToolResultType:
        span_name = f"{tool_name}:{action}" if action else tool_name
        with sentry_sdk.start_span(op="mcp.tool", name=span_name) as span:
            span.set_tag("mcp.tool_name", tool_name)
            if action:
                span.set_tag("mcp.action", action)
            if isinstance(arguments, dict) and arguments:
                span.set_data("argument_keys", sorted(arguments))

            try:
                result = await call_next(context)
            except Exception as exc:
                span.set_status("internal_error")
                span.set_data("error_type", type(exc).__name__)
                if transaction is not None:
                    transaction.set_status("internal_error")
                raise

            error_kind = _error_kind(result)
            status = "internal_error" if error_kind else "ok"
            span.set_status(status)
            if error_kind:
                span.set_tag("mcp.error_kind", error_kind)
                logger.debug("Tool %s returned error kind=%s", tool_name, error_kind)
            if transaction is not None:
                transaction.set_status(status)
            return result
