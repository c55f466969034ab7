"""Sync and async clients for the chat completions API."""

import logging
from collections.abc import Iterable
from typing import Any

import httpx
from pydantic import ValidationError

from chat_completions.config import get_settings
from chat_completions.constants import CHAT_COMPLETION_MODELS, CHAT_COMPLETIONS_PATH
from chat_completions.exceptions import (
    APIError,
    AuthenticationError,
    RateLimitError,
    RequestError,
    ResponseDecodeError,
    ServerError,
)
from chat_completions.models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ErrorResponse,
)
from chat_completions.request import build_chat_request_body
from chat_completions.stream import AsyncChatCompletionStream, ChatCompletionStream

logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json"
_EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


def _parse_retry_after(response: httpx.Response) -> float | None:
    retry_after = response.headers.get("Retry-After")
    if not retry_after:
        return None
    try:
        return float(retry_after)
    except ValueError:
        return None


def _handle_error(response: httpx.Response) -> None:
    """Raise appropriate exception for error responses.

    The body must already be read.
    """
    status = response.status_code
    logger.warning("Chat completions request failed with status %d", status)

    try:
        error_response = ErrorResponse.model_validate_json(response.content)
    except ValidationError as e:
        raise RequestError(status, e) from e

    error = error_response.error
    if error is None:
        raise RequestError(status)

    details: dict[str, Any] = {"type": error.type, "param": error.param, "code": error.code}
    if status == 401:
        raise AuthenticationError(error.message, status_code=401, **details)
    elif status == 429:
        raise RateLimitError(error.message, retry_after=_parse_retry_after(response), **details)
    elif status >= 500:
        raise ServerError(error.message, status_code=status, **details)
    else:
        raise APIError(error.message, status_code=status, **details)


def _decode_completion(response: httpx.Response) -> ChatCompletionResponse:
    try:
        return ChatCompletionResponse.model_validate_json(response.content)
    except ValidationError as e:
        logger.warning("Could not decode chat completion response: %s", e)
        raise ResponseDecodeError(response.status_code, response.text) from e


class _ClientConfigMixin:
    """Connection settings shared by the sync and async clients."""

    def _configure(
        self,
        api_key: str | None,
        base_url: str | None,
        organization: str | None,
        timeout: float | None,
        empty_messages_limit: int | None,
        allowed_models: Iterable[str] | None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.api_key
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.organization = organization if organization is not None else settings.organization
        self.timeout = timeout if timeout is not None else settings.timeout
        self.empty_messages_limit = (
            empty_messages_limit
            if empty_messages_limit is not None
            else settings.empty_messages_limit
        )
        self.allowed_models = (
            frozenset(allowed_models) if allowed_models is not None else CHAT_COMPLETION_MODELS
        )

    def _full_url(self, suffix: str) -> str:
        return f"{self.base_url}{suffix}"

    def _headers(self, *, stream: bool = False) -> dict[str, str]:
        headers = {
            "Content-Type": _JSON_CONTENT_TYPE,
            "Authorization": f"Bearer {self.api_key}",
        }
        if stream:
            headers["Accept"] = _EVENT_STREAM_CONTENT_TYPE
            headers["Cache-Control"] = "no-cache"
            headers["Connection"] = "keep-alive"
        else:
            headers["Accept"] = _JSON_CONTENT_TYPE
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers


def _request_timeout(timeout: float | None) -> Any:
    return timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT


class ChatClient(_ClientConfigMixin):
    """Synchronous client for the chat completions API.

    Example:
        client = ChatClient(api_key="sk-...")
        response = client.create_chat_completion(
            ChatCompletionRequest(
                model="gpt-3.5-turbo",
                messages=[{"role": "user", "content": "Hello!"}],
            )
        )
        print(response.choices[0].message.content)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        organization: str | None = None,
        timeout: float | None = None,
        empty_messages_limit: int | None = None,
        allowed_models: Iterable[str] | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Arguments left as None fall back to ClientSettings (OPENAI_* env).

        Args:
            api_key: Bearer token for the Authorization header.
            base_url: API base URL, e.g. https://api.openai.com/v1.
            organization: Optional organization sent as OpenAI-Organization.
            timeout: Default request timeout in seconds.
            empty_messages_limit: Non-data lines tolerated per stream receive.
            allowed_models: Admissible chat model identifiers.
            http_client: Transport to use. Not closed by this client.
        """
        self._configure(
            api_key, base_url, organization, timeout, empty_messages_limit, allowed_models
        )
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.Client:
        """Get or create httpx client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def create_chat_completion(
        self,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionResponse:
        """Create a completion for the chat messages.

        Args:
            request: Completion request.
            timeout: Per-call timeout in seconds, overriding the client default.

        Returns:
            ChatCompletionResponse decoded from the response body.

        Raises:
            InvalidModelError: If the model is not allowed (no request is sent).
            AuthenticationError: If authentication fails.
            RateLimitError: If rate limit is exceeded.
            ServerError: If server returns 5xx error.
            APIError: For other errors reported by the API.
            RequestError: If the error response could not be parsed.
            ResponseDecodeError: If a successful response body is malformed.
            httpx.HTTPError: On transport failure.
        """
        body = build_chat_request_body(request, allowed_models=self.allowed_models)
        client = self._get_client()

        logger.debug("POST %s model=%s stream=False", CHAT_COMPLETIONS_PATH, request.model)
        response = client.post(
            self._full_url(CHAT_COMPLETIONS_PATH),
            content=body,
            headers=self._headers(),
            timeout=_request_timeout(timeout),
        )

        if not response.is_success:
            _handle_error(response)

        return _decode_completion(response)

    def create_chat_completion_stream(
        self,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionStream:
        """Create a completion with streaming support.

        Tokens are sent back as data-only server-sent events as they become
        available, with the stream terminated by a ``data: [DONE]`` message.
        The caller owns the returned stream and must close it.

        Args:
            request: Completion request. Its stream flag is forced on.
            timeout: Per-call timeout in seconds, overriding the client default.

        Returns:
            ChatCompletionStream over the open response.

        Raises:
            Same as create_chat_completion.
        """
        body = build_chat_request_body(request, stream=True, allowed_models=self.allowed_models)
        client = self._get_client()

        logger.debug("POST %s model=%s stream=True", CHAT_COMPLETIONS_PATH, request.model)
        http_request = client.build_request(
            "POST",
            self._full_url(CHAT_COMPLETIONS_PATH),
            content=body,
            headers=self._headers(stream=True),
            timeout=_request_timeout(timeout),
        )
        response = client.send(http_request, stream=True)

        if not response.is_success:
            try:
                response.read()
                _handle_error(response)
            finally:
                response.close()

        logger.debug("Chat stream opened")
        return ChatCompletionStream(response, self.empty_messages_limit)


class AsyncChatClient(_ClientConfigMixin):
    """Async client for the chat completions API.

    Example:
        async with AsyncChatClient(api_key="sk-...") as client:
            stream = await client.create_chat_completion_stream(request)
            async with stream:
                async for event in stream:
                    print(event.choices[0].delta.content, end="", flush=True)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        organization: str | None = None,
        timeout: float | None = None,
        empty_messages_limit: int | None = None,
        allowed_models: Iterable[str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client. Arguments match ChatClient."""
        self._configure(
            api_key, base_url, organization, timeout, empty_messages_limit, allowed_models
        )
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create httpx async client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncChatClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def create_chat_completion(
        self,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> ChatCompletionResponse:
        """Create a completion for the chat messages.

        Cancelling the awaiting task cancels the in-flight request.
        See ChatClient.create_chat_completion.
        """
        body = build_chat_request_body(request, allowed_models=self.allowed_models)
        client = await self._get_client()

        logger.debug("POST %s model=%s stream=False", CHAT_COMPLETIONS_PATH, request.model)
        response = await client.post(
            self._full_url(CHAT_COMPLETIONS_PATH),
            content=body,
            headers=self._headers(),
            timeout=_request_timeout(timeout),
        )

        if not response.is_success:
            _handle_error(response)

        return _decode_completion(response)

    async def create_chat_completion_stream(
        self,
        request: ChatCompletionRequest,
        *,
        timeout: float | None = None,
    ) -> AsyncChatCompletionStream:
        """Create a completion with streaming support.

        See ChatClient.create_chat_completion_stream.
        """
        body = build_chat_request_body(request, stream=True, allowed_models=self.allowed_models)
        client = await self._get_client()

        logger.debug("POST %s model=%s stream=True", CHAT_COMPLETIONS_PATH, request.model)
        http_request = client.build_request(
            "POST",
            self._full_url(CHAT_COMPLETIONS_PATH),
            content=body,
            headers=self._headers(stream=True),
            timeout=_request_timeout(timeout),
        )
        response = await client.send(http_request, stream=True)

        if not response.is_success:
            try:
                await response.aread()
                _handle_error(response)
            finally:
                await response.aclose()

        logger.debug("Chat stream opened")
        return AsyncChatCompletionStream(response, self.empty_messages_limit)
