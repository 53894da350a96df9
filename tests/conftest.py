"""Global fixtures for the autotestgen test suite.

No test talks to the network: HTTP traffic goes through ``httpx.MockTransport``
and the environment is supplied through ``EnvironmentProvider``.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from autotestgen.config.credentials import CredentialManager, EnvironmentProvider


def chat_reply(content: str, **extra: Any) -> dict[str, Any]:
    """Build a chat completions response body."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 9, "completion_tokens": 12, "total_tokens": 21},
        **extra,
    }


def completion_reply(text: str, **extra: Any) -> dict[str, Any]:
    """Build a text completions response body."""
    return {
        "id": "cmpl-123",
        "object": "text_completion",
        "created": 1677652288,
        "model": "text-davinci-003",
        "choices": [{"text": text, "index": 0, "logprobs": None, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12},
        **extra,
    }


class RecordingClientFactory:
    """Stand-in for ``httpx.Client`` that records how clients are built.

    Clients are backed by a MockTransport; the ``proxy`` argument is recorded
    but not passed on, since httpx would otherwise mount a real proxy transport.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.calls: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def __call__(self, **kwargs: Any) -> httpx.Client:
        self.calls.append(kwargs)
        client_kwargs = {k: v for k, v in kwargs.items() if k != "proxy"}
        return httpx.Client(transport=httpx.MockTransport(self._handle), **client_kwargs)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def credentials() -> Callable[..., CredentialManager]:
    """Factory for credential managers over a fixed environment."""

    def _make(api_key: str | None = "sk-test", proxy: str | None = None) -> CredentialManager:
        environ: dict[str, str] = {}
        if api_key is not None:
            environ["OPENAI_API_KEY"] = api_key
        if proxy is not None:
            environ["HTTP_PROXY"] = proxy
        return CredentialManager(EnvironmentProvider(environ))

    return _make


@pytest.fixture
def json_responder() -> Callable[..., RecordingClientFactory]:
    """Factory for client factories that answer every request with a JSON body."""

    def _make(body: Any, status_code: int = 200) -> RecordingClientFactory:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body)

        return RecordingClientFactory(handler)

    return _make
