from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Groww
    GROWW_API_KEY: str = ""
    GROWW_BASE_URL: str = "https://api.groww.in"

    # Binance
    BINANCE_API_KEY: str = ""
    BINANCE_SECRET_KEY: str = ""
    BINANCE_BASE_URL: str = "https://api.binance.com"
    BINANCE_RECV_WINDOW: int = 5000

    # Timeouts (seconds)
    HTTP_TIMEOUT_SECONDS: float = 10.0
    TOOL_TIMEOUT_SECONDS: float = 30.0

    # MCP transport
    MCP_SERVER_NAME: str = "nin-terminal-mcp"
    MCP_TYPE: Literal["stdio", "sse", "streamable-http"] = "stdio"
    MCP_HOST: str = "0.0.0.0"
    MCP_PORT: int = 8765
    MCP_PATH: str = "/mcp"

    # Sentry
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str | None = None
    SENTRY_RELEASE: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1
    SENTRY_SEND_DEFAULT_PII: bool = False
    SENTRY_ENABLE_LOG_EVENTS: bool = True

    @field_validator(
        "GROWW_API_KEY", "BINANCE_API_KEY", "BINANCE_SECRET_KEY", mode="before"
    )
    @classmethod
    def strip_credential(cls, v: object) -> object:
        # whitespace-only keys count as unset
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def groww_configured(self) -> bool:
        return bool(self.GROWW_API_KEY)

    @property
    def binance_configured(self) -> bool:
        return bool(self.BINANCE_API_KEY and self.BINANCE_SECRET_KEY)

    def missing_credentials(self) -> list[str]:
        """Return the environment variables of providers that are not configured."""
        missing: list[str] = []
        if not self.groww_configured:
            missing.append("GROWW_API_KEY")
        if not self.BINANCE_API_KEY:
            missing.append("BINANCE_API_KEY")
        if not self.BINANCE_SECRET_KEY:
            missing.append("BINANCE_SECRET_KEY")
        return missing

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_parse_none_str="None",
        extra="ignore",
    )


settings = Settings()  # process-wide singleton, built once at import
