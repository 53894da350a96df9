"""Request and response shapes for the chat and completion endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    """Chat request body; the whole conversation is resent every call."""

    model: str
    messages: list[ChatMessage] = Field(default_factory=list)


class Usage(BaseModel):
    """Token accounting. Informational only."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    object: str | None = None
    created: int
    choices: list[ChatChoice]
    usage: Usage | None = None


class CompletionRequest(BaseModel):
    """Single-prompt request body."""

    model: str
    prompt: str = ""
    max_tokens: int = 1024
    temperature: float = 0.0


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str
    index: int = 0
    logprobs: Any | None = None
    finish_reason: str | None = None


class CompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    object: str | None = None
    created: int
    model: str | None = None
    choices: list[CompletionChoice]
    usage: Usage | None = None
