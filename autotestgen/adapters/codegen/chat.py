"""Multi-turn chat backend."""

from __future__ import annotations

import logging
from typing import Any

from ...config.credentials import CredentialManager
from ...config.models import (
    CHAT_COMPLETIONS_URL,
    DEFAULT_CHAT_MODEL,
    AutoTestGenConfig,
    TransportConfig,
)
from ...ports.codegen_error import CodeGenError
from ..transport.http import ClientFactory, post_json
from .common import extract_code_block, parse_response
from .schemas import ChatCompletionResponse, ChatMessage, ChatRequest, Role

logger = logging.getLogger(__name__)


class ChatBackend:
    """
    Generation session backed by a role-tagged conversation.

    The instruction becomes a ``system`` turn, every piece of context a
    ``user`` turn, and each reply is appended back as an ``assistant`` turn.
    The remote service is stateless, so every request carries the entire
    conversation.
    """

    BACKEND = "chat"
    URL = CHAT_COMPLETIONS_URL
    MODEL = DEFAULT_CHAT_MODEL

    def __init__(
        self,
        model: str | None = None,
        *,
        url: str | None = None,
        language: str = "python",
        credential_manager: CredentialManager | None = None,
        transport_config: TransportConfig | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.url = url or self.URL
        self.language = language
        self.credential_manager = credential_manager or CredentialManager()
        self.transport_config = transport_config or TransportConfig()
        self.client_factory = client_factory
        self.chat = ChatRequest(model=model or self.MODEL)
        self.response: ChatCompletionResponse | None = None

    @classmethod
    def create(cls, **kwargs: Any) -> ChatBackend:
        """Start a new session with an empty conversation."""
        return cls(**kwargs)

    @classmethod
    def from_config(cls, config: AutoTestGenConfig, **kwargs: Any) -> ChatBackend:
        return cls(
            config.chat.model,
            url=config.chat.url,
            language=config.extraction.language,
            transport_config=config.transport,
            **kwargs,
        )

    @property
    def model(self) -> str:
        return self.chat.model

    @property
    def messages(self) -> list[ChatMessage]:
        return self.chat.messages

    def _add_message(self, role: Role, content: str) -> None:
        self.chat.messages.append(ChatMessage(role=role, content=content))

    def initialize(self, system_prompt: str) -> None:
        self._add_message(Role.SYSTEM, system_prompt)

    def add_context(self, text: str) -> None:
        self._add_message(Role.USER, text)

    def _completion(self) -> None:
        body = post_json(
            self.url,
            self.chat.model_dump_json(),
            self.credential_manager,
            transport_config=self.transport_config,
            client_factory=self.client_factory,
        )
        response = parse_response(body, ChatCompletionResponse)
        content = response.choices[0].message.content

        logger.info(f"Response from {self.model}:\n{content}")

        self.response = response
        self._add_message(Role.ASSISTANT, content)

    def extract_code(self) -> str:
        """Extract the code block from the most recent message."""
        return extract_code_block(self.messages[-1].content, self.language)

    def generate(self) -> str:
        try:
            self._completion()
            return self.extract_code()
        except CodeGenError as e:
            e.backend = e.backend or self.BACKEND
            e.model = e.model or self.model
            logger.error(f"Chat generation failed: {e.message}")
            raise
