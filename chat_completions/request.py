"""Request building for the chat completions endpoint."""

import json
from collections.abc import Iterable

from chat_completions.constants import CHAT_COMPLETION_MODELS
from chat_completions.exceptions import InvalidModelError
from chat_completions.models import ChatCompletionRequest


def validate_model(model: str, allowed_models: Iterable[str] = CHAT_COMPLETION_MODELS) -> None:
    """Raise InvalidModelError unless ``model`` is in the admissible set."""
    allowed = frozenset(allowed_models)
    if model not in allowed:
        raise InvalidModelError(model, allowed)


def build_chat_request_body(
    request: ChatCompletionRequest,
    *,
    stream: bool = False,
    allowed_models: Iterable[str] = CHAT_COMPLETION_MODELS,
) -> bytes:
    """Validate a request and serialize it to JSON bytes.

    Args:
        request: The completion request.
        stream: Force the stream flag on. The flag is always present in the
            body of a streaming request.
        allowed_models: Admissible model identifiers.

    Returns:
        UTF-8 encoded JSON body.

    Raises:
        InvalidModelError: If the model is not in ``allowed_models``.
    """
    validate_model(request.model, allowed_models)

    payload = request.to_payload()
    if stream:
        payload["stream"] = True

    return json.dumps(payload).encode("utf-8")
