"""Sentry initialization and capture helpers for the MCP server."""

from __future__ import annotations

import logging
import os
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.httpx import HttpxIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

try:
    from sentry_sdk.integrations.mcp import MCPIntegration
except ImportError:  # pragma: no cover - dependent on sentry-sdk version
    MCPIntegration = None

from nin_terminal.core.config import settings

logger = logging.getLogger(__name__)

_initialized = False

# Broker credentials travel in headers and query strings.
_SENSITIVE_KEYWORDS = (
    "authorization",
    "x-mbx-apikey",
    "x-api-key",
    "api_key",
    "apikey",
    "secret",
    "signature",
    "token",
    "password",
    "cookie",
)


def _is_sensitive_key(key: str) -> bool:
    key_lower = key.lower()
    return any(keyword in key_lower for keyword in _SENSITIVE_KEYWORDS)


def _sanitize_in_place(value: Any, parent_key: str | None = None) -> Any:
    if parent_key and _is_sensitive_key(parent_key):
        return "[Filtered]"

    if isinstance(value, dict):
        for key, nested_value in list(value.items()):
            if _is_sensitive_key(str(key)):
                value[key] = "[Filtered]"
                continue
            value[key] = _sanitize_in_place(nested_value, str(key))
        return value

    if isinstance(value, list):
        for index, item in enumerate(value):
            value[index] = _sanitize_in_place(item, parent_key)
        return value

    if isinstance(value, tuple):
        return tuple(_sanitize_in_place(item, parent_key) for item in value)

    return value


def _is_healthcheck_breadcrumb(crumb: dict[str, Any]) -> bool:
    message = crumb.get("message")
    return (
        crumb.get("category") == "uvicorn.access"
        and isinstance(message, str)
        and "/healthz" in message
    )


def _before_send(
    event: dict[str, Any], hint: dict[str, Any]
) -> dict[str, Any] | None:
    del hint
    return _sanitize_in_place(event)


def _before_breadcrumb(
    crumb: dict[str, Any], hint: dict[str, Any]
) -> dict[str, Any] | None:
    del hint
    if _is_healthcheck_breadcrumb(crumb):
        return None
    return _sanitize_in_place(crumb)


def init_sentry(
    service_name: str,
    enable_httpx: bool = False,
    enable_mcp: bool = False,
) -> bool:
    """Initialize Sentry once per process. Returns whether Sentry is active."""
    global _initialized

    if _initialized:
        return True

    dsn = (settings.SENTRY_DSN or "").strip()
    if not dsn:
        logger.info("Sentry disabled: SENTRY_DSN is empty")
        return False

    environment = settings.SENTRY_ENVIRONMENT or settings.ENVIRONMENT
    release = settings.SENTRY_RELEASE or os.getenv("GITHUB_SHA")
    log_event_level = logging.ERROR if settings.SENTRY_ENABLE_LOG_EVENTS else None

    integrations: list[Any] = [
        LoggingIntegration(level=logging.INFO, event_level=log_event_level)
    ]
    if enable_httpx:
        integrations.append(HttpxIntegration())
    if enable_mcp:
        if MCPIntegration is None:
            logger.warning(
                "Sentry MCP integration unavailable in current sentry-sdk version"
            )
        else:
            integrations.append(MCPIntegration())

    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=release,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            send_default_pii=settings.SENTRY_SEND_DEFAULT_PII,
            integrations=integrations,
            before_send=_before_send,
            before_breadcrumb=_before_breadcrumb,
        )
        sentry_sdk.set_tag("service", service_name)
        sentry_sdk.set_tag("app", "nin-terminal")
        _initialized = True
        logger.info(
            "Sentry initialized: service=%s environment=%s", service_name, environment
        )
        return True
    except Exception:
        logger.exception("Failed to initialize Sentry for service=%s", service_name)
        return False


def capture_exception(exc: BaseException, **context: Any) -> None:
    """Capture an exception with additional context if Sentry is initialized."""
    if not _initialized:
        return

    try:
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_extra(str(key), _sanitize_in_place(value, str(key)))
            sentry_sdk.capture_exception(exc)
    except Exception:
        logger.exception("Failed to capture exception in Sentry")
