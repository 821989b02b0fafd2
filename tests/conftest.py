"""Pytest configuration and shared fixtures for dreamclient tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

# Register anyio pytest plugin for async test support
pytest_plugins = ("anyio",)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def json_transport() -> Callable[..., RecordingTransport]:
    """Factory for a transport that answers every request with `body`."""

    def factory(body: Any, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=body))

    return factory


@pytest.fixture
def completion_body() -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": "Hi there."}}]}


@pytest.fixture
def image_body() -> Callable[[int], dict[str, Any]]:
    def factory(count: int) -> dict[str, Any]:
        return {"data": [{"url": f"https://images.example/{i}.png"} for i in range(count)]}

    return factory
