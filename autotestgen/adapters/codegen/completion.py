"""Single-prompt completion backend."""

from __future__ import annotations

import logging
from typing import Any

from ...config.credentials import CredentialManager
from ...config.models import (
    DEFAULT_COMPLETION_MODEL,
    TEXT_COMPLETIONS_URL,
    AutoTestGenConfig,
    TransportConfig,
)
from ...ports.codegen_error import CodeGenError, ExtractionError
from ..transport.http import ClientFactory, post_json
from .common import extract_code_block, parse_response
from .schemas import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)


class CompletionBackend:
    """
    Generation session backed by one growing prompt string.

    Instruction and context are appended to the same buffer, each preceded
    by a newline; ordering alone carries meaning. The output cap and a zero
    temperature are fixed so repeated runs give the same output.
    """

    BACKEND = "completion"
    URL = TEXT_COMPLETIONS_URL
    MODEL = DEFAULT_COMPLETION_MODEL
    MAX_TOKENS = 1024
    TEMPERATURE = 0.0

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
        self.request = CompletionRequest(
            model=model or self.MODEL,
            prompt="",
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
        )
        self.response: CompletionResponse | None = None

    @classmethod
    def create(cls, **kwargs: Any) -> CompletionBackend:
        """Start a new session with an empty prompt."""
        return cls(**kwargs)

    @classmethod
    def from_config(cls, config: AutoTestGenConfig, **kwargs: Any) -> CompletionBackend:
        return cls(
            config.completion.model,
            url=config.completion.url,
            language=config.extraction.language,
            transport_config=config.transport,
            **kwargs,
        )

    @property
    def model(self) -> str:
        return self.request.model

    @property
    def prompt(self) -> str:
        return self.request.prompt

    def _add_prompt(self, content: str) -> None:
        self.request.prompt += "\n" + content

    def initialize(self, system_prompt: str) -> None:
        self._add_prompt(system_prompt)

    def add_context(self, text: str) -> None:
        self._add_prompt(text)

    def _completion(self) -> None:
        body = post_json(
            self.url,
            self.request.model_dump_json(),
            self.credential_manager,
            transport_config=self.transport_config,
            client_factory=self.client_factory,
        )
        response = parse_response(body, CompletionResponse)

        logger.info(f"Response from {self.model}:\n{response.choices[0].text}")

        self.response = response

    def extract_code(self) -> str:
        """Extract the code block from the first choice of the stored response."""
        if self.response is None:
            raise ExtractionError("No response")
        return extract_code_block(self.response.choices[0].text, self.language)

    def generate(self) -> str:
        try:
            self._completion()
            return self.extract_code()
        except CodeGenError as e:
            e.backend = e.backend or self.BACKEND
            e.model = e.model or self.model
            logger.error(f"Completion generation failed: {e.message}")
            raise
