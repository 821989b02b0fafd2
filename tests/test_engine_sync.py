import json

import pytest

from dreamclient import DreamClient, ErrorKind
from dreamclient.llm import client as transport


class _FakeResponse:
    def __init__(self, body, status_code=200):
        self.status_code = status_code
        self.text = json.dumps(body)
        self.ok = status_code < 400


@pytest.fixture
def fake_post(monkeypatch):
    """Replace `requests.post` and record outgoing payloads."""
    state = {"body": None, "status": 200, "calls": []}

    def post(url, headers=None, json=None, timeout=None):
        state["calls"].append({"url": url, "json": json, "timeout": timeout})
        return _FakeResponse(state["body"], state["status"])

    monkeypatch.setattr(transport.requests, "post", post)
    return state


def test_complete_sync_invokes_callback(fake_post, completion_body):
    fake_post["body"] = completion_body
    client = DreamClient("sk-test", "text-babbage-001", {"top_p": 0.4}, timeout=30)
    received = []

    result = client.complete_sync("Hello", ["Be brief."], received.append)

    assert received == ["Hi there."]
    assert result.value == "Hi there."
    call = fake_post["calls"][0]
    assert call["timeout"] == 30
    assert call["json"]["top_p"] == 0.4
    assert call["json"]["temperature"] == 0.7
    assert call["json"]["max_tokens"] == 512


def test_images_sync_returns_ordered_urls(fake_post, image_body):
    fake_post["body"] = image_body(2)
    client = DreamClient("sk-test", "gpt-4")

    result = client.images_sync("prompt", 512, 512, 2)

    assert result.value == ["https://images.example/0.png", "https://images.example/1.png"]


def test_image_sync_returns_single_url(fake_post, image_body):
    fake_post["body"] = image_body(1)
    client = DreamClient("sk-test", "gpt-4")

    result = client.image_sync("prompt", 1024, 1024)

    assert result.value == "https://images.example/0.png"
    assert fake_post["calls"][0]["json"]["size"] == "1024x1024"


def test_images_sync_rejects_count_over_limit(fake_post):
    client = DreamClient("sk-test", "gpt-4")
    received = []

    result = client.images_sync("prompt", 512, 512, 12, received.append)

    assert fake_post["calls"] == []
    assert received == []
    assert result.error.kind is ErrorKind.VALIDATION


def test_complete_sync_failure_skips_callback(fake_post):
    fake_post["body"] = {"error": {"message": "Rate limit"}}
    fake_post["status"] = 429
    client = DreamClient("sk-test", "gpt-4")
    received = []

    result = client.complete_sync("Hello", [], received.append)

    assert received == []
    assert result.error.status_code == 429


def test_complete_sync_runs_coroutine_callback(fake_post, completion_body):
    fake_post["body"] = completion_body
    client = DreamClient("sk-test", "gpt-4")
    received = []

    async def on_text(text):
        received.append(text)

    result = client.complete_sync("Hello", [], on_text)

    assert result.ok
    assert received == ["Hi there."]


def test_images_sync_runs_coroutine_callback(fake_post, image_body):
    fake_post["body"] = image_body(2)
    client = DreamClient("sk-test", "gpt-4")
    received = []

    async def on_urls(urls):
        received.append(urls)

    client.images_sync("prompt", 512, 512, 2, on_urls)

    assert received == [["https://images.example/0.png", "https://images.example/1.png"]]


def test_failed_request_is_logged_once(fake_post, caplog):
    fake_post["body"] = {"error": {"message": "Server error"}}
    fake_post["status"] = 500
    client = DreamClient("sk-test", "gpt-4")

    client.images_sync("prompt", 512, 512, 2)

    assert len([r for r in caplog.records if r.levelname in ("WARNING", "ERROR")]) == 1
