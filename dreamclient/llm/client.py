"""HTTP transport primitive for completion and image requests.

Architectural role:
    Issues one JSON POST to a fixed endpoint and parses the JSON response.
    This is the single place where transport, status and decode failures are
    caught and classified.

Model invocation flow:
    `core.engine.DreamClient` -> request builder (`llm.service` /
    `image.service`) -> `apost_json` (async, httpx) or `post_json`
    (blocking, requests) -> `Result`.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once.

Timeout behavior:
    `timeout=None` waits until the transport resolves or errors.

Failure handling model:
    Nothing is raised to callers. Failures are logged once and returned as a
    `Result` carrying an `ErrorKind`:
        - connection/transport errors -> `NETWORK`
        - non-2xx HTTP status -> `REMOTE_STATUS` (status code kept)
        - body that is not a JSON object -> `DECODE`

Security considerations:
    The API key is only placed in the `Authorization` header and is never
    included in log lines or error messages.
"""

import json
import logging
from typing import Any

import httpx
import requests

from dreamclient.core.types import ErrorKind, Result


logger = logging.getLogger(__name__)


def build_headers(api_key: str) -> dict[str, str]:
    """Return JSON content headers plus bearer authorization."""
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def _status_failure(url: str, status_code: int) -> Result:
    logger.error("Request to %s failed with HTTP status %d", url, status_code)
    return Result.failure(
        ErrorKind.REMOTE_STATUS,
        f"HTTP ERROR ({status_code})",
        status_code=status_code,
    )


def _decode_body(url: str, body: str) -> Result:
    """Parse a response body into a JSON object result."""
    try:
        data = json.loads(body)
    except ValueError:
        logger.error("Response from %s was not valid JSON", url)
        return Result.failure(ErrorKind.DECODE, "Response body is not valid JSON")

    if not isinstance(data, dict):
        logger.error("Response from %s was not a JSON object", url)
        return Result.failure(ErrorKind.DECODE, "Response body is not a JSON object")

    return Result.success(data)


async def apost_json(
    url: str,
    payload: dict[str, Any],
    api_key: str,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Result:
    """POST `payload` as JSON without blocking the event loop.

    Args:
        url: Endpoint URL.
        payload: JSON-serializable request body.
        api_key: Bearer token.
        timeout: Seconds before the request is abandoned, `None` for no limit.
        transport: Optional httpx transport (used for mocking).

    Returns:
        `Result` with the decoded JSON object, or a classified failure.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers=build_headers(api_key),
            transport=transport,
        ) as client:
            response = await client.post(url, json=payload)
    except httpx.HTTPError as exc:
        logger.error("Request to %s failed: %s", url, type(exc).__name__)
        return Result.failure(ErrorKind.NETWORK, "REQUEST FAILED")

    if response.is_error:
        return _status_failure(url, response.status_code)

    return _decode_body(url, response.text)


def post_json(
    url: str,
    payload: dict[str, Any],
    api_key: str,
    timeout: float | None = None,
) -> Result:
    """Blocking counterpart of `apost_json` built on `requests`."""
    try:
        response = requests.post(
            url,
            headers=build_headers(api_key),
            json=payload,
            timeout=timeout,
        )
    except requests.exceptions.RequestException as exc:
        logger.error("Request to %s failed: %s", url, type(exc).__name__)
        return Result.failure(ErrorKind.NETWORK, "REQUEST FAILED")

    if not response.ok:
        return _status_failure(url, response.status_code)

    return _decode_body(url, response.text)
