"""Tests for backend selection."""

import pytest

from autotestgen.adapters.codegen import ChatBackend, CompletionBackend, create_backend
from autotestgen.config.models import AutoTestGenConfig


def test_default_is_chat():
    assert isinstance(create_backend(), ChatBackend)


def test_config_selects_completion():
    config = AutoTestGenConfig(
        backend="completion",
        completion={"model": "gpt-3.5-turbo-instruct"},
        extraction={"language": "rust"},
        transport={"timeout": 10.0},
    )

    backend = create_backend(config)

    assert isinstance(backend, CompletionBackend)
    assert backend.model == "gpt-3.5-turbo-instruct"
    assert backend.request.max_tokens == 1024
    assert backend.language == "rust"
    assert backend.transport_config.timeout == 10.0


def test_kind_overrides_config():
    backend = create_backend(AutoTestGenConfig(backend="completion"), kind="chat")
    assert isinstance(backend, ChatBackend)


def test_each_call_returns_a_fresh_session():
    first = create_backend()
    first.initialize("S")

    second = create_backend()

    assert second is not first
    assert second.messages == []


def test_unknown_kind():
    with pytest.raises(ValueError, match="Unknown backend"):
        create_backend(kind="telepathy")
