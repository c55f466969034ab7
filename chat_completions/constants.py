"""Model constants for the chat completions client.

Single source of truth for the chat model identifiers the client accepts.
Update here when the API admits new chat models.
"""

# GPT-3.5 chat models
GPT3_DOT5_TURBO = "gpt-3.5-turbo"
GPT3_DOT5_TURBO_0301 = "gpt-3.5-turbo-0301"

# Models accepted by the chat completions endpoint
CHAT_COMPLETION_MODELS: frozenset[str] = frozenset({GPT3_DOT5_TURBO, GPT3_DOT5_TURBO_0301})

DEFAULT_CHAT_MODEL = GPT3_DOT5_TURBO

# Endpoint
DEFAULT_BASE_URL = "https://api.openai.com/v1"
CHAT_COMPLETIONS_PATH = "/chat/completions"

# Transport defaults
DEFAULT_TIMEOUT = 600.0

# Consecutive non-data SSE lines tolerated in one receive call
DEFAULT_EMPTY_MESSAGES_LIMIT = 300

# SSE framing
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"
