"""Image request construction and response parsing.

Role in pipeline:
    - Receives prompt/size/count from `core.engine.DreamClient.images`.
    - Truncates the prompt and serializes the size string.
    - Extracts image URLs from the decoded provider response.

Size validation:
    - No validation that `width x height` is a size the remote API accepts.
    - Count limits are enforced by the caller before any payload is built.

Prompt handling:
    Prompts up to `MAX_PROMPT_CHARS` pass unchanged. Longer prompts are cut to
    the first `TRUNCATED_PROMPT_CHARS` characters without any warning.

Determinism:
    Pure functions of their inputs.
"""

import logging
from typing import Any

from dreamclient.core.types import ErrorKind, Result
from dreamclient.llm.provider_config import MAX_PROMPT_CHARS, TRUNCATED_PROMPT_CHARS


logger = logging.getLogger(__name__)


def format_prompt(prompt: str) -> str:
    if len(prompt) <= MAX_PROMPT_CHARS:
        return prompt
    return prompt[:TRUNCATED_PROMPT_CHARS]


def format_size(width: int, height: int) -> str:
    return f"{width}x{height}"


def build_image_payload(prompt: str, width: int, height: int, count: int) -> dict[str, Any]:
    """Build the image-generation request body."""
    return {
        "prompt": format_prompt(prompt),
        "n": count,
        "size": format_size(width, height),
    }


def extract_image_urls(data: dict[str, Any], count: int) -> Result:
    """Extract generated image URL(s) from a decoded response.

    Args:
        data: Decoded response object.
        count: Number of images that was requested.

    Returns:
        - `count == 1`: success with the first URL string.
        - `count > 1`: success with URLs in response order, possibly empty.
        - `RESPONSE_SHAPE` failure when `data` is missing or malformed.
    """
    items = data.get("data")
    if not isinstance(items, list) or (count == 1 and not items):
        logger.warning("No image data was returned. Check your API key.")
        return Result.failure(ErrorKind.RESPONSE_SHAPE, "Response has no image data")

    try:
        urls = [item["url"] for item in items]
    except (KeyError, TypeError):
        logger.warning("Image response item without url")
        return Result.failure(ErrorKind.RESPONSE_SHAPE, "Image item has no url")

    if count == 1:
        return Result.success(urls[0])
    return Result.success(urls)
