#!/usr/bin/env python3
"""Basic completion example using the chat completions client."""

from chat_completions import GPT3_DOT5_TURBO, ChatClient, ChatCompletionRequest


def main() -> None:
    """Demonstrate a single completion. Reads OPENAI_API_KEY from the environment."""
    with ChatClient() as client:
        response = client.create_chat_completion(
            ChatCompletionRequest(
                model=GPT3_DOT5_TURBO,
                messages=[{"role": "user", "content": "What is 2 + 2?"}],
                max_tokens=32,
            )
        )

        print(f"Response: {response.choices[0].message.content}")
        print(f"Model: {response.model}")
        print(f"Tokens: {response.usage.prompt_tokens} in, {response.usage.completion_tokens} out")


if __name__ == "__main__":
    main()
