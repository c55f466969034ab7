"""Chat Completions Python client.

Provides sync and async clients for the chat completions API, with
server-sent event streaming.

Example usage:

    # Sync client
    from chat_completions import ChatClient, ChatCompletionRequest

    client = ChatClient(api_key="sk-...")
    response = client.create_chat_completion(
        ChatCompletionRequest(
            model="gpt-3.5-turbo",
            messages=[{"role": "user", "content": "Hello!"}],
        )
    )
    print(response.choices[0].message.content)

    # Streaming
    with client.create_chat_completion_stream(request) as stream:
        for event in stream:
            print(event.choices[0].delta.content, end="", flush=True)

    # Async client
    from chat_completions import AsyncChatClient

    async with AsyncChatClient(api_key="sk-...") as client:
        stream = await client.create_chat_completion_stream(request)
        async with stream:
            while True:
                try:
                    event = await stream.recv()
                except EndOfStream:
                    break
                print(event.choices[0].delta.content, end="", flush=True)
"""

from chat_completions.client import AsyncChatClient, ChatClient
from chat_completions.config import ClientSettings, get_settings
from chat_completions.constants import (
    CHAT_COMPLETION_MODELS,
    DEFAULT_CHAT_MODEL,
    DEFAULT_EMPTY_MESSAGES_LIMIT,
    GPT3_DOT5_TURBO,
    GPT3_DOT5_TURBO_0301,
)
from chat_completions.exceptions import (
    APIError,
    AuthenticationError,
    ChatClientError,
    EndOfStream,
    IncompleteStreamError,
    InvalidModelError,
    RateLimitError,
    RequestError,
    ResponseDecodeError,
    ServerError,
    StreamDecodeError,
    StreamError,
    TooManyEmptyStreamMessagesError,
)
from chat_completions.models import (
    APIErrorDetail,
    ChatCompletionChoice,
    ChatCompletionDelta,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatCompletionStreamChoice,
    ChatCompletionStreamResponse,
    ChatMessage,
    ErrorResponse,
    Usage,
)
from chat_completions.request import build_chat_request_body, validate_model
from chat_completions.stream import (
    AsyncChatCompletionStream,
    ChatCompletionStream,
    StreamState,
)

__version__ = "0.1.0"
__all__ = [
    # Clients
    "ChatClient",
    "AsyncChatClient",
    # Streams
    "ChatCompletionStream",
    "AsyncChatCompletionStream",
    "StreamState",
    # Configuration
    "ClientSettings",
    "get_settings",
    # Model constants
    "GPT3_DOT5_TURBO",
    "GPT3_DOT5_TURBO_0301",
    "CHAT_COMPLETION_MODELS",
    "DEFAULT_CHAT_MODEL",
    "DEFAULT_EMPTY_MESSAGES_LIMIT",
    # Request building
    "build_chat_request_body",
    "validate_model",
    # Models
    "APIErrorDetail",
    "ChatCompletionChoice",
    "ChatCompletionDelta",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatCompletionStreamChoice",
    "ChatCompletionStreamResponse",
    "ChatMessage",
    "ErrorResponse",
    "Usage",
    # Exceptions
    "ChatClientError",
    "InvalidModelError",
    "RequestError",
    "ResponseDecodeError",
    "APIError",
    "AuthenticationError",
    "RateLimitError",
    "ServerError",
    "StreamError",
    "TooManyEmptyStreamMessagesError",
    "StreamDecodeError",
    "IncompleteStreamError",
    "EndOfStream",
]
