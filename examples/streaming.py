#!/usr/bin/env python3
"""Streaming example using the chat completions client."""

import asyncio

from chat_completions import (
    GPT3_DOT5_TURBO,
    AsyncChatClient,
    ChatCompletionRequest,
    EndOfStream,
)


async def main() -> None:
    """Demonstrate streaming completion with explicit receive calls."""
    request = ChatCompletionRequest(
        model=GPT3_DOT5_TURBO,
        messages=[{"role": "user", "content": "Write a haiku about coding."}],
    )

    async with AsyncChatClient() as client:
        print("Streaming response: ", end="", flush=True)

        stream = await client.create_chat_completion_stream(request)
        async with stream:
            while True:
                try:
                    event = await stream.recv()
                except EndOfStream:
                    print("\n\n[stream finished]")
                    break

                choice = event.choices[0]
                print(choice.delta.content, end="", flush=True)
                if choice.finish_reason:
                    print(f"\n\n[Finished: {choice.finish_reason}]", end="")


if __name__ == "__main__":
    asyncio.run(main())
