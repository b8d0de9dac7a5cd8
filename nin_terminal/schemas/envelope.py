"""Response envelope returned by every tool call."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from nin_terminal.core.errors import ErrorKind


class Message(BaseModel):
    """A chat message addressed to the calling assistant."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: str
    name: str | None = None


class Reference(BaseModel):
    """Structured attachment carrying the full result of a tool call."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text", "image", "file", "code"] = "text"
    title: str
    content: str
    url: str | None = None
    metadata: dict[str, Any] | None = None


class ToolErrorInfo(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: ErrorKind
    message: str


class ResponseEnvelope(BaseModel):
    """Messages plus references. Present on success and on failure alike."""

    model_config = ConfigDict(frozen=True)

    messages: list[Message] = Field(..., min_length=1)
    references: list[Reference] = Field(default_factory=list)
    error: ToolErrorInfo | None = Field(
        default=None, description="Set only when the call failed"
    )

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_payload(self) -> dict[str, Any]:
        """Serialize for MCP and HTTP clients, omitting unset optional fields.

        Only envelope-level fields are pruned. ``metadata`` is passed through
        as is, None values included.
        """
        payload = self.model_dump(mode="json")
        for message in payload["messages"]:
            if message.get("name") is None:
                message.pop("name", None)
        for reference in payload["references"]:
            for key in ("url", "metadata"):
                if reference.get(key) is None:
                    reference.pop(key, None)
        if payload.get("error") is None:
            payload.pop("error", None)
        return payload
