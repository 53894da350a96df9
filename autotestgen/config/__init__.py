"""Configuration management for autotestgen."""

from .credentials import CredentialManager, Credentials, EnvironmentProvider
from .loader import ConfigLoader, load_config
from .models import (
    AutoTestGenConfig,
    ChatBackendConfig,
    CompletionBackendConfig,
    ExtractionConfig,
    TransportConfig,
)

__all__ = [
    "AutoTestGenConfig",
    "ChatBackendConfig",
    "CompletionBackendConfig",
    "TransportConfig",
    "ExtractionConfig",
    "ConfigLoader",
    "load_config",
    "CredentialManager",
    "Credentials",
    "EnvironmentProvider",
]
