from nin_terminal.schemas.envelope import (
    Message,
    Reference,
    ResponseEnvelope,
    ToolErrorInfo,
)

__all__ = ["Message", "Reference", "ResponseEnvelope", "ToolErrorInfo"]
