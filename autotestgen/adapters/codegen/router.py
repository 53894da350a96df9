"""Backend selection."""

from __future__ import annotations

from typing import Any, Literal

from ...config.models import AutoTestGenConfig
from ...ports.codegen_port import CodeGenPort
from .chat import ChatBackend
from .completion import CompletionBackend

BackendKind = Literal["chat", "completion"]

BACKENDS: dict[str, type[ChatBackend] | type[CompletionBackend]] = {
    ChatBackend.BACKEND: ChatBackend,
    CompletionBackend.BACKEND: CompletionBackend,
}


def create_backend(
    config: AutoTestGenConfig | None = None,
    kind: BackendKind | None = None,
    **kwargs: Any,
) -> CodeGenPort:
    """Create a fresh generation session for the configured strategy.

    Args:
        config: Configuration to draw models, endpoints and transport settings from.
        kind: Overrides ``config.backend`` when given.
        **kwargs: Passed to the backend constructor (e.g. ``credential_manager``).
    """
    config = config or AutoTestGenConfig()
    kind = kind or config.backend
    try:
        backend_cls = BACKENDS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown backend: {kind!r} (expected one of {', '.join(BACKENDS)})"
        ) from None
    return backend_cls.from_config(config, **kwargs)
