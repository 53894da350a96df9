"""Port interface shared by every code-generation backend."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class CodeGenPort(Protocol):
    """Capability set used by the orchestrator without knowing the strategy.

    A backend instance is one generation session: it is created empty,
    receives an instruction and any amount of context, then produces one
    code fragment per `generate` call.
    """

    @abstractmethod
    def initialize(self, system_prompt: str) -> None:
        """Record the session's top-level instruction."""
        ...

    @abstractmethod
    def add_context(self, text: str) -> None:
        """Append additional information to the session."""
        ...

    @abstractmethod
    def generate(self) -> str:
        """Perform one round trip and return the extracted code fragment.

        Raises:
            ConfigurationError: The API credential is not available.
            TransportError: The network call could not complete.
            ProtocolError: The reply did not match the expected shape.
            ExtractionError: No fenced code block was found in the reply.
        """
        ...
