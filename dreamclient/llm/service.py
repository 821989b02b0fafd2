"""Prompt-to-payload adapter for chat completions.

Architectural role:
    Turns client settings plus one prompt into the chat-completions request
    body, and pulls the answer text back out of the decoded response.

Model call flow:
    training context + prompt -> `build_completion_payload` -> transport
    (`dreamclient.llm.client`) -> `extract_completion_text`.

Token behavior:
    `max_tokens` is fixed per model family (`CHAT_MAX_TOKENS` /
    `LEGACY_MAX_TOKENS`). No prompt-size enforcement happens here.

Parameter handling:
    Sampling options are attached only for legacy completion models, with
    defaults resolved for every unset value. Chat-family requests never carry
    them.

Determinism:
    Payload construction is deterministic for fixed inputs and settings.
"""

import logging
from typing import Any, Sequence

from dreamclient.core.types import ClientSettings, ErrorKind, Result
from dreamclient.llm.provider_config import CHAT_MAX_TOKENS, LEGACY_MAX_TOKENS


logger = logging.getLogger(__name__)


def build_messages(prompt: str, training_context: Sequence[str], prompt_role: str) -> list[dict[str, str]]:
    """Build the two-turn conversation: joined system context, then the prompt."""
    return [
        {"role": "system", "content": " ".join(training_context)},
        {"role": prompt_role, "content": prompt},
    ]


def build_completion_payload(
    settings: ClientSettings,
    prompt: str,
    training_context: Sequence[str],
) -> dict[str, Any]:
    """Build the chat-completions request body.

    Args:
        settings: Immutable client configuration.
        prompt: Prompt turn content.
        training_context: Strings joined with single spaces into the system turn.

    Returns:
        JSON-serializable request payload.
    """
    payload = {
        "messages": build_messages(prompt, training_context, settings.prompt_role),
        "model": settings.model,
        "max_tokens": CHAT_MAX_TOKENS if settings.is_chat_model else LEGACY_MAX_TOKENS,
    }

    if not settings.is_chat_model and settings.tuning is not None:
        payload.update(settings.tuning.resolved())

    return payload


def extract_completion_text(data: dict[str, Any]) -> Result:
    """Return the first choice's message content from a decoded response.

    Failure scenarios:
        Missing `choices`, an empty list, or a choice without string message
        content yields a `RESPONSE_SHAPE` failure.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        logger.warning("No completion data was returned. Check your API key.")
        return Result.failure(ErrorKind.RESPONSE_SHAPE, "Response has no completion choices")

    if not isinstance(content, str):
        logger.warning("Completion content was not text: %s", type(content).__name__)
        return Result.failure(ErrorKind.RESPONSE_SHAPE, "Completion content is not text")

    return Result.success(content)
