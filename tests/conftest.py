"""
Pytest configuration and common fixtures for nin-terminal tests.
"""

import os
from collections.abc import Callable
from datetime import datetime

import httpx
import pytest


def _ensure_test_env() -> None:
    """Keep tests independent of a developer's real broker credentials."""
    default_env_values = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "GROWW_API_KEY": "",
        "BINANCE_API_KEY": "",
        "BINANCE_SECRET_KEY": "",
        "SENTRY_DSN": "",
        "MCP_TYPE": "stdio",
    }
    for key, value in default_env_values.items():
        os.environ.setdefault(key, value)


_ensure_test_env()

from nin_terminal.core.config import Settings  # noqa: E402
from nin_terminal.core.timezone import IST  # noqa: E402
from nin_terminal.mcp_server.gateway import ToolContext, ToolGateway  # noqa: E402
from nin_terminal.services.binance import BinanceClient  # noqa: E402
from nin_terminal.services.groww import GrowwClient  # noqa: E402

FIXED_NOW = datetime(2024, 1, 15, 10, 30, tzinfo=IST)

MockHandler = Callable[[httpx.Request], httpx.Response]


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line(
        "markers", "integration: tests that drive the full tool pipeline"
    )
    config.addinivalue_line("markers", "slow: tests that wait on timeouts")


def make_settings(**overrides) -> Settings:
    values = {
        "GROWW_API_KEY": "",
        "BINANCE_API_KEY": "",
        "BINANCE_SECRET_KEY": "",
        "SENTRY_DSN": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_context(
    config: Settings | None = None,
    groww_handler: MockHandler | None = None,
    binance_handler: MockHandler | None = None,
) -> ToolContext:
    config = config or make_settings()
    groww_transport = httpx.MockTransport(groww_handler) if groww_handler else None
    binance_transport = (
        httpx.MockTransport(binance_handler) if binance_handler else None
    )
    return ToolContext(
        settings=config,
        groww=GrowwClient(config, transport=groww_transport),
        binance=BinanceClient(config, transport=binance_transport),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def app_settings() -> Settings:
    return make_settings()


@pytest.fixture
def gateway() -> ToolGateway:
    """Gateway over unconfigured providers, for the mock-backed tools."""
    return ToolGateway(make_context())


@pytest.fixture
def groww_gateway():
    """Build a gateway whose Groww client answers through ``handler``."""

    def _build(handler: MockHandler, **overrides) -> ToolGateway:
        config = make_settings(GROWW_API_KEY="test-groww-key", **overrides)
        return ToolGateway(make_context(config, groww_handler=handler))

    return _build


@pytest.fixture
def binance_gateway():
    """Build a gateway whose Binance client answers through ``handler``."""

    def _build(handler: MockHandler) -> ToolGateway:
        config = make_settings(
            BINANCE_API_KEY="test-binance-key",
            BINANCE_SECRET_KEY="test-binance-secret",
        )
        return ToolGateway(make_context(config, binance_handler=handler))

    return _build


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def context_factory():
    return make_context
