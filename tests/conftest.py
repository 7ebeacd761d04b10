"""Pytest configuration and fixtures for Consigliere tests."""

import json

import httpx
import pytest

from consigliere.backends import Backend, LiteLLMBackend
from consigliere.dispatcher import Dispatcher


class RecordingBackend(Backend):
    """Backend that records calls and returns a canned response."""

    name = "recording"

    def __init__(self, response: str = "Model says hi"):
        self.response = response
        self.calls = []

    async def invoke(self, agent, prompt):
        self.calls.append((agent, prompt))
        return self.response


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def dispatcher(backend: RecordingBackend) -> Dispatcher:
    return Dispatcher(backend)


@pytest.fixture
def completion_body() -> dict:
    """Minimal OpenAI-style chat completion response."""
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Proxy answer"},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture
def captured_requests() -> list:
    return []


@pytest.fixture
def make_proxy_backend(captured_requests):
    """Build a LiteLLMBackend whose HTTP traffic is answered by a handler."""

    def _make(status_code=200, body=None, text=None, api_key=None, base_url="http://proxy.test"):
        def handler(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, content=json.dumps(body).encode(),
                                  headers={"Content-Type": "application/json"})

        return LiteLLMBackend(
            base_url=base_url,
            api_key=api_key,
            transport=httpx.MockTransport(handler),
        )

    return _make
