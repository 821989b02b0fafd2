"""Client engine for chat completions and image generation.

Architectural role:
    `DreamClient` is the component callers embed. It captures immutable
    settings at construction, builds one request per call through the
    `llm.service` / `image.service` adapters and dispatches it through the
    `llm.client` transport.

Request lifecycle (`complete`):
    1. Build the system + prompt conversation and family-specific payload.
    2. POST to the chat-completions endpoint.
    3. Extract the first choice's message content.
    4. Invoke the callback on success only; always return a `Result`.

Request lifecycle (`images`):
    1. Reject `count > MAX_IMAGES` with a warning (no request, no callback).
    2. Truncate prompt, serialize size, POST to the image endpoint.
    3. Extract one URL (`count == 1`) or the ordered URL list.
    4. Invoke the callback on success only; always return a `Result`.

Concurrency:
    Async operations suspend only around the HTTP call. Settings are frozen,
    so concurrent calls share no mutable state. `*_sync` variants block the
    calling thread and use the `requests` transport.

Error handling strategy:
    Transport, decode, status and response-shape failures are logged and
    returned as failure results; the callback is skipped. Exceptions raised
    by the callback itself propagate to the caller.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Mapping, Sequence

import httpx

from dreamclient.core.types import (
    ClientSettings,
    ErrorKind,
    ModelFamily,
    Result,
    TuningOptions,
)
from dreamclient.image.service import build_image_payload, extract_image_urls
from dreamclient.llm.client import apost_json, post_json
from dreamclient.llm.provider_config import (
    COMPLETIONS_URL,
    DEFAULT_PROMPT_ROLE,
    IMAGES_URL,
    MAX_IMAGES,
    PROMPT_ROLES,
)
from dreamclient.llm.service import build_completion_payload, extract_completion_text


logger = logging.getLogger(__name__)

Callback = Callable[[Any], Any]


class DreamClient:
    """Stateless client for one model on an OpenAI-compatible API.

    Args:
        api_key: Bearer token passed through unchanged.
        model: Model identifier; decides the request shape.
        options: Optional mapping with `temperature`, `top_p`,
            `frequency_penalty`, `presence_penalty`. Only kept for legacy
            completion models.
        family: Explicit `ModelFamily` override for identifiers the registry
            does not know.
        prompt_role: Role of the prompt turn, `"assistant"` (historical wire
            shape) or `"user"`.
        timeout: Transport timeout in seconds; `None` waits indefinitely.
        completions_url: Override for the chat-completions endpoint.
        images_url: Override for the image-generation endpoint.
        transport: Optional `httpx.AsyncBaseTransport` for the async path.

    Raises:
        ValueError: Empty model identifier, unknown family or prompt role.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        options: Mapping[str, Any] | None = None,
        *,
        family: ModelFamily | str | None = None,
        prompt_role: str = DEFAULT_PROMPT_ROLE,
        timeout: float | None = None,
        completions_url: str | None = None,
        images_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not model:
            raise ValueError("model identifier is required")
        if prompt_role not in PROMPT_ROLES:
            raise ValueError(f"prompt_role must be one of {PROMPT_ROLES}, got {prompt_role!r}")

        resolved_family = ModelFamily.detect(model, family)
        tuning = None
        if resolved_family is ModelFamily.LEGACY_COMPLETION:
            tuning = TuningOptions.from_mapping(options)

        self._settings = ClientSettings(
            api_key=api_key,
            model=model,
            family=resolved_family,
            tuning=tuning,
            completions_url=completions_url or COMPLETIONS_URL,
            images_url=images_url or IMAGES_URL,
            prompt_role=prompt_role,
            timeout=timeout,
        )
        self._transport = transport

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def model(self) -> str:
        return self._settings.model

    @property
    def family(self) -> ModelFamily:
        return self._settings.family

    @property
    def is_chat_model(self) -> bool:
        return self._settings.is_chat_model

    def __repr__(self) -> str:
        return f"DreamClient(model={self.model!r}, family={self.family.value!r})"

    # ============================================================
    # Async operations
    # ============================================================

    async def complete(
        self,
        prompt: str,
        training_context: Sequence[str],
        callback: Callback | None = None,
    ) -> Result:
        """Generate a completion for `prompt` with `training_context` as system turn.

        Returns:
            `Result` holding the first choice's text, or a failure.
        """
        payload = build_completion_payload(self._settings, prompt, training_context)
        response = await self._apost(self._settings.completions_url, payload)
        result = self._completion_result(response)
        await self._anotify(callback, result)
        return result

    async def image(
        self,
        prompt: str,
        width: int,
        height: int,
        callback: Callback | None = None,
    ) -> Result:
        """Generate one image; success value is a single URL string."""
        return await self.images(prompt, width, height, 1, callback)

    async def images(
        self,
        prompt: str,
        width: int,
        height: int,
        count: int,
        callback: Callback | None = None,
    ) -> Result:
        """Generate `count` images (at most `MAX_IMAGES`).

        Returns:
            `Result` with one URL when `count == 1`, else the ordered URL list.
            `count > MAX_IMAGES` returns a `VALIDATION` failure without any
            request or callback.
        """
        rejected = self._check_count(count)
        if rejected is not None:
            return rejected

        payload = build_image_payload(prompt, width, height, count)
        response = await self._apost(self._settings.images_url, payload)
        result = self._images_result(response, count)
        await self._anotify(callback, result)
        return result

    # ============================================================
    # Blocking operations
    # ============================================================

    def complete_sync(
        self,
        prompt: str,
        training_context: Sequence[str],
        callback: Callback | None = None,
    ) -> Result:
        """Blocking variant of `complete`."""
        payload = build_completion_payload(self._settings, prompt, training_context)
        response = post_json(
            self._settings.completions_url,
            payload,
            self._settings.api_key,
            timeout=self._settings.timeout,
        )
        result = self._completion_result(response)
        self._run_notify(callback, result)
        return result

    def image_sync(
        self,
        prompt: str,
        width: int,
        height: int,
        callback: Callback | None = None,
    ) -> Result:
        """Blocking variant of `image`."""
        return self.images_sync(prompt, width, height, 1, callback)

    def images_sync(
        self,
        prompt: str,
        width: int,
        height: int,
        count: int,
        callback: Callback | None = None,
    ) -> Result:
        """Blocking variant of `images`."""
        rejected = self._check_count(count)
        if rejected is not None:
            return rejected

        payload = build_image_payload(prompt, width, height, count)
        response = post_json(
            self._settings.images_url,
            payload,
            self._settings.api_key,
            timeout=self._settings.timeout,
        )
        result = self._images_result(response, count)
        self._run_notify(callback, result)
        return result

    # ============================================================
    # Helpers
    # ============================================================

    async def _apost(self, url: str, payload: dict[str, Any]) -> Result:
        return await apost_json(
            url,
            payload,
            self._settings.api_key,
            timeout=self._settings.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _check_count(count: int) -> Result | None:
        if count > MAX_IMAGES:
            logger.warning("No more than %d images are allowed (requested %d).", MAX_IMAGES, count)
            return Result.failure(
                ErrorKind.VALIDATION,
                f"No more than {MAX_IMAGES} images are allowed",
            )
        return None

    @staticmethod
    def _completion_result(response: Result) -> Result:
        # Transport failures are already logged by `llm.client`.
        if not response.ok:
            return response
        return extract_completion_text(response.value)

    @staticmethod
    def _images_result(response: Result, count: int) -> Result:
        if not response.ok:
            return response
        return extract_image_urls(response.value, count)

    @staticmethod
    def _notify(callback: Callback | None, result: Result) -> Any:
        if callback is None or not result.ok:
            return None
        return callback(result.value)

    def _run_notify(self, callback: Callback | None, result: Result) -> None:
        """Invoke the callback from blocking code, running coroutine callbacks to completion.

        Edge cases:
            Calling from an already running event loop propagates `asyncio.run`
            limitations.
        """
        outcome = self._notify(callback, result)
        if inspect.isawaitable(outcome):
            asyncio.run(outcome)

    async def _anotify(self, callback: Callback | None, result: Result) -> None:
        outcome = self._notify(callback, result)
        if inspect.isawaitable(outcome):
            await outcome
