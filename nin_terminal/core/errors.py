"""Typed tool errors.

Clients and handlers raise these. The tool boundary turns them into a
failure envelope, so callers can branch on ``ErrorKind`` instead of
parsing message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_TOOL = "invalid_tool"
    INVALID_ARGUMENTS = "invalid_arguments"
    PROVIDER = "provider"
    CONFIGURATION = "configuration"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class ToolError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProviderError(ToolError):
    kind = ErrorKind.PROVIDER

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(ToolError):
    kind = ErrorKind.CONFIGURATION


class ToolTimeoutError(ToolError):
    kind = ErrorKind.TIMEOUT
