"""Pydantic models for the chat completions client."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_as_empty(value: Any) -> Any:
    """JSON null decodes to the empty string for text fields."""
    return "" if value is None else value


class ChatMessage(BaseModel):
    """A single message of a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(..., description="Message role: system, user or assistant")
    content: str = Field(default="", description="Message text")

    @field_validator("content", mode="before")
    @classmethod
    def content_null_as_empty(cls, value: Any) -> Any:
        return _null_as_empty(value)


class ChatCompletionRequest(BaseModel):
    """Request body for the chat completions endpoint.

    Optional generation parameters default to their zero value; fields left
    at the default are dropped from the wire form rather than sent as zeros.
    """

    model: str = Field(..., description="Model identifier")
    messages: list[ChatMessage] = Field(..., description="Conversation messages")
    max_tokens: int = Field(default=0)
    temperature: float = Field(default=0.0)
    top_p: float = Field(default=0.0)
    n: int = Field(default=0)
    stream: bool = Field(default=False)
    stop: list[str] = Field(default_factory=list)
    presence_penalty: float = Field(default=0.0)
    frequency_penalty: float = Field(default=0.0)
    logit_bias: dict[str, int] = Field(default_factory=dict)
    user: str = Field(default="")

    def to_payload(self) -> dict[str, Any]:
        """Wire representation with default-valued fields omitted.

        ``model`` and ``messages`` are always present.
        """
        payload = self.model_dump(exclude_defaults=True)
        payload["model"] = self.model
        payload["messages"] = [msg.model_dump() for msg in self.messages]
        return payload


class Usage(BaseModel):
    """Token usage information."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionChoice(BaseModel):
    """One generated alternative of a completion."""

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Response from the chat completions endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[ChatCompletionChoice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)


class ChatCompletionDelta(BaseModel):
    """Incremental content of a streamed choice."""

    role: str | None = None
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def content_null_as_empty(cls, value: Any) -> Any:
        return _null_as_empty(value)


class ChatCompletionStreamChoice(BaseModel):
    """Streamed choice carrying a delta instead of a full message."""

    index: int = 0
    delta: ChatCompletionDelta = Field(default_factory=ChatCompletionDelta)
    finish_reason: str | None = None


class ChatCompletionStreamResponse(BaseModel):
    """Event decoded from one SSE data frame of a completion stream."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[ChatCompletionStreamChoice] = Field(default_factory=list)


class APIErrorDetail(BaseModel):
    """Error object returned by the API."""

    message: str = ""
    type: str | None = None
    param: str | None = None
    code: str | int | None = None


class ErrorResponse(BaseModel):
    """Error envelope returned with non-2xx responses."""

    error: APIErrorDetail | None = None
