"""Error taxonomy for code-generation sessions.

Every failure a backend can surface derives from `CodeGenError`, which keeps
the offending text (response body or model output) around so callers can
report it. Underlying library exceptions are preserved through exception
chaining (``raise ... from e``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(eq=False)
class CodeGenError(Exception):
    """Base error raised at the public boundary of a generation backend.

    Attributes:
        message: Human-friendly error summary.
        backend: Backend key ("chat" or "completion") when known.
        model: Model identifier used for the request.
        status_code: HTTP status code if the remote service replied.
        raw: Offending text (raw body or generated message) for diagnosis.
        metadata: Additional structured details (e.g. failing response
            fields under "fields").
    """

    message: str
    backend: str | None = None
    model: str | None = None
    status_code: int | None = None
    raw: str | None = None
    metadata: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.backend:
            parts.append(f"backend={self.backend}")
        if self.model:
            parts.append(f"model={self.model}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        name = type(self).__name__
        text = f"{name}({' '.join(parts)}): {self.message}" if parts else f"{name}: {self.message}"
        if self.raw:
            text = f"{text}\n{self.raw}"
        return text


class ConfigurationError(CodeGenError):
    """Missing credential or invalid configuration. Raised before any network call."""


class TransportError(CodeGenError):
    """The network round trip could not complete (DNS, connect, TLS, timeout, I/O)."""


class ProtocolError(CodeGenError):
    """The remote reply did not match the expected response shape."""


class ExtractionError(CodeGenError):
    """No fenced code block could be isolated from the generated text."""
