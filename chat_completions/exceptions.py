"""Chat completions client exceptions."""


class ChatClientError(Exception):
    """Base exception for chat completions client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidModelError(ChatClientError):
    """Requested model is not accepted by the chat completions endpoint.

    Raised by the request builder, before any network activity.
    """

    def __init__(self, model: str, allowed_models: frozenset[str]) -> None:
        allowed = ", ".join(sorted(allowed_models))
        super().__init__(f"Model '{model}' is not supported, expected one of: {allowed}")
        self.model = model
        self.allowed_models = allowed_models


class RequestError(ChatClientError):
    """Non-2xx response whose error body could not be parsed.

    Carries the status code and the parse failure (``cause``), which is None
    when the body was valid JSON but held no error object.
    """

    def __init__(self, status_code: int, cause: Exception | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Request failed with status {status_code}{detail}", status_code=status_code)
        self.cause = cause


class APIError(ChatClientError):
    """Error reported by the API in its error envelope."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        type: str | None = None,
        param: str | None = None,
        code: str | int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.type = type
        self.param = param
        self.code = code

    def __str__(self) -> str:
        return f"status code {self.status_code}, message: {self.message}"


class AuthenticationError(APIError):
    """Authentication failed (401)."""

    pass


class RateLimitError(APIError):
    """Rate limit exceeded (429)."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        type: str | None = None,
        param: str | None = None,
        code: str | int | None = None,
    ) -> None:
        super().__init__(message, status_code=429, type=type, param=param, code=code)
        self.retry_after = retry_after


class ServerError(APIError):
    """Server error (5xx)."""

    pass


class ResponseDecodeError(ChatClientError):
    """A successful response body could not be decoded into a completion."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Could not decode completion response: {body[:200]}", status_code=status_code)
        self.body = body


class StreamError(ChatClientError):
    """Base exception for failures while consuming a completion stream.

    Any StreamError is fatal to the streaming session; start a new stream
    to recover.
    """

    pass


class TooManyEmptyStreamMessagesError(StreamError):
    """Stream sent more consecutive non-data lines than the configured limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Chat stream has sent too many empty messages (limit {limit})")
        self.limit = limit


class StreamDecodeError(StreamError):
    """A data frame could not be decoded into a stream event."""

    def __init__(self, data: str) -> None:
        super().__init__(f"Could not decode stream event: {data[:200]}")
        self.data = data


class IncompleteStreamError(StreamError):
    """Response body ended before the [DONE] sentinel was received."""

    def __init__(self) -> None:
        super().__init__("Chat stream ended before [DONE] was received")


class EndOfStream(Exception):
    """Normal end of a completion stream ([DONE] observed).

    Not a ChatClientError: callers tell a finished stream apart from a
    failed one by catching this separately.
    """

    def __init__(self) -> None:
        super().__init__("end of stream")
