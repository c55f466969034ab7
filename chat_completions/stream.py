"""Server-sent event readers for streamed chat completions.

A stream owns the open HTTP response it was created from. Each ``recv`` call
reads lines until it can return one decoded event:

- lines not starting with ``data: `` are keep-alives/comments and are skipped,
  up to ``empty_messages_limit`` of them per call;
- ``data: [DONE]`` finishes the stream and every later ``recv`` raises
  EndOfStream;
- any other data frame is decoded into a ChatCompletionStreamResponse.

Iterating a stream to its end closes it; otherwise call ``close``/``aclose``
or use it as a context manager.

Streams are single-consumer. Nothing reads ahead in the background, and
cancellation between lines is only as prompt as the transport's own reads
and timeouts.
"""

import logging
from collections.abc import AsyncIterator, Iterator
from enum import Enum
from typing import Any

import httpx
from pydantic import ValidationError

from chat_completions.constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from chat_completions.exceptions import (
    EndOfStream,
    IncompleteStreamError,
    StreamDecodeError,
    TooManyEmptyStreamMessagesError,
)
from chat_completions.models import ChatCompletionStreamResponse

logger = logging.getLogger(__name__)


class StreamState(str, Enum):
    """Lifecycle state of a completion stream."""

    OPEN = "open"
    FINISHED = "finished"


def _frame_data(line: str) -> str | None:
    """Return the payload of a data frame, or None for any other line."""
    line = line.strip()
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX) :]


class _BaseStream:
    """State shared by the sync and async stream readers."""

    def __init__(self, response: httpx.Response, empty_messages_limit: int) -> None:
        self._response = response
        self._empty_messages_limit = empty_messages_limit
        self._state = StreamState.OPEN
        self._closed = False

    @property
    def response(self) -> httpx.Response:
        """Underlying HTTP response (status, headers). Owned by the stream."""
        return self._response

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def finished(self) -> bool:
        """Whether the [DONE] sentinel has been received."""
        return self._state is StreamState.FINISHED

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_finished(self) -> None:
        if self._state is StreamState.FINISHED:
            raise EndOfStream()

    def _count_empty_message(self, count: int) -> int:
        count += 1
        if count > self._empty_messages_limit:
            logger.warning(
                "Chat stream exceeded empty message limit (%d)", self._empty_messages_limit
            )
            raise TooManyEmptyStreamMessagesError(self._empty_messages_limit)
        return count

    def _decode(self, data: str) -> ChatCompletionStreamResponse:
        """Turn a data frame payload into an event, or finish on [DONE]."""
        if data == SSE_DONE_SENTINEL:
            self._state = StreamState.FINISHED
            logger.debug("Chat stream finished")
            raise EndOfStream()

        try:
            return ChatCompletionStreamResponse.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Could not decode chat stream event: %s", e)
            raise StreamDecodeError(data) from e

    def _end_of_body(self) -> IncompleteStreamError:
        logger.warning("Chat stream body ended before [DONE]")
        return IncompleteStreamError()


class ChatCompletionStream(_BaseStream):
    """Blocking reader over a streamed chat completion.

    Example:
        with client.create_chat_completion_stream(request) as stream:
            for event in stream:
                print(event.choices[0].delta.content, end="", flush=True)
    """

    def __init__(self, response: httpx.Response, empty_messages_limit: int) -> None:
        super().__init__(response, empty_messages_limit)
        self._lines: Iterator[str] = response.iter_lines()

    def recv(self) -> ChatCompletionStreamResponse:
        """Receive the next event.

        Returns:
            The next decoded ChatCompletionStreamResponse.

        Raises:
            EndOfStream: [DONE] was received, now or by an earlier call.
            TooManyEmptyStreamMessagesError: Too many consecutive non-data lines.
            StreamDecodeError: The data frame is not a valid stream event.
            IncompleteStreamError: The body ended without [DONE].
            httpx.HTTPError: The transport failed while reading.
        """
        self._check_finished()

        empty_messages = 0
        while True:
            try:
                line = next(self._lines)
            except StopIteration:
                raise self._end_of_body() from None

            data = _frame_data(line)
            if data is None:
                empty_messages = self._count_empty_message(empty_messages)
                continue

            return self._decode(data)

    def close(self) -> None:
        """Release the response body. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._response.close()
        logger.debug("Chat stream closed")

    def __iter__(self) -> Iterator[ChatCompletionStreamResponse]:
        return self

    def __next__(self) -> ChatCompletionStreamResponse:
        try:
            return self.recv()
        except EndOfStream:
            self.close()
            raise StopIteration from None

    def __enter__(self) -> "ChatCompletionStream":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncChatCompletionStream(_BaseStream):
    """Asyncio reader over a streamed chat completion.

    Example:
        async with await client.create_chat_completion_stream(request) as stream:
            async for event in stream:
                print(event.choices[0].delta.content, end="", flush=True)
    """

    def __init__(self, response: httpx.Response, empty_messages_limit: int) -> None:
        super().__init__(response, empty_messages_limit)
        self._lines: AsyncIterator[str] = response.aiter_lines()

    async def recv(self) -> ChatCompletionStreamResponse:
        """Receive the next event.

        Same contract as ChatCompletionStream.recv.
        """
        self._check_finished()

        empty_messages = 0
        while True:
            try:
                line = await self._lines.__anext__()
            except StopAsyncIteration:
                raise self._end_of_body() from None

            data = _frame_data(line)
            if data is None:
                empty_messages = self._count_empty_message(empty_messages)
                continue

            return self._decode(data)

    async def aclose(self) -> None:
        """Release the response body. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._response.aclose()
        logger.debug("Chat stream closed")

    def __aiter__(self) -> AsyncIterator[ChatCompletionStreamResponse]:
        return self

    async def __anext__(self) -> ChatCompletionStreamResponse:
        try:
            return await self.recv()
        except EndOfStream:
            await self.aclose()
            raise StopAsyncIteration from None

    async def __aenter__(self) -> "AsyncChatCompletionStream":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
