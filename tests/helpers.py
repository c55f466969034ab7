"""Constants and builders shared by the test modules."""

import json

BASE_URL = "http://localhost:8003/v1"
COMPLETIONS_URL = f"{BASE_URL}/chat/completions"
API_KEY = "test-key"


def stream_chunk(content: str, finish_reason: str | None = None, index: int = 0) -> str:
    """JSON of one chat.completion.chunk event."""
    return json.dumps(
        {
            "id": "chatcmpl-123",
            "object": "chat.completion.chunk",
            "created": 1677652288,
            "model": "gpt-3.5-turbo-0301",
            "choices": [
                {"index": index, "delta": {"content": content}, "finish_reason": finish_reason}
            ],
        }
    )


def sse_body(*frames: str) -> bytes:
    """Encode data frames as an SSE body terminated by [DONE]."""
    lines = [f"data: {frame}\n\n" for frame in frames]
    lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()
