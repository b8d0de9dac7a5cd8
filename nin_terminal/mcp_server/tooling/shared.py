"""Envelope builders and the error boundary shared by every tool handler."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from nin_terminal.core.errors import ErrorKind, ToolError
from nin_terminal.monitoring.sentry import capture_exception
from nin_terminal.schemas.envelope import (
    Message,
    Reference,
    ResponseEnvelope,
    ToolErrorInfo,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Any], Awaitable[ResponseEnvelope]]

# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


def success_envelope(
    summary: str,
    *,
    title: str,
    report: str,
    metadata: dict[str, Any] | None,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        messages=[Message(role="assistant", content=summary)],
        references=[
            Reference(type="text", title=title, content=report, metadata=metadata)
        ],
    )


def failure_envelope(message: str, kind: ErrorKind) -> ResponseEnvelope:
    return ResponseEnvelope(
        messages=[Message(role="assistant", content=message)],
        references=[],
        error=ToolErrorInfo(kind=kind, message=message),
    )


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------


def tool_handler(
    failure_prefix: str | Callable[[Any], str],
) -> Callable[[Handler], Handler]:
    """Turn exceptions raised by a handler into a failure envelope.

    ``failure_prefix`` may be a callable taking the validated arguments, for
    messages that name the requested symbol. The resolved prefix is exposed as
    ``handler.failure_prefix(args)`` so the gateway can word timeouts the same
    way.
    """

    def resolve(args: Any) -> str:
        if callable(failure_prefix):
            return failure_prefix(args)
        return failure_prefix

    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(args: Any, context: Any) -> ResponseEnvelope:
            try:
                return await func(args, context)
            except ToolError as exc:
                prefix = resolve(args)
                logger.warning("%s [%s]: %s", prefix, exc.kind.value, exc.message)
                return failure_envelope(f"{prefix}: {exc.message}", exc.kind)
            except Exception as exc:
                prefix = resolve(args)
                logger.exception("%s: unexpected error in %s", prefix, func.__name__)
                capture_exception(exc, handler=func.__name__)
                return failure_envelope(f"{prefix}: {exc}", ErrorKind.INTERNAL)

        wrapper.failure_prefix = resolve  # type: ignore[attr-defined]
        return wrapper

    return decorator


def compact_arguments(**arguments: Any) -> dict[str, Any]:
    """Drop unset optional parameters so argument-model defaults apply."""
    return {key: value for key, value in arguments.items() if value is not None}


__all__ = [
    "Handler",
    "compact_arguments",
    "failure_envelope",
    "success_envelope",
    "tool_handler",
]
