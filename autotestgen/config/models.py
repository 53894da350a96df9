"""Configuration models for autotestgen."""

from typing import Literal

from pydantic import BaseModel, Field

CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
TEXT_COMPLETIONS_URL = "https://api.openai.com/v1/completions"
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_COMPLETION_MODEL = "text-davinci-003"


class ChatBackendConfig(BaseModel):
    """Configuration for the multi-turn chat backend."""

    model: str = Field(default=DEFAULT_CHAT_MODEL, min_length=1, description="Chat model identifier")
    url: str = Field(default=CHAT_COMPLETIONS_URL, description="Chat completions endpoint")


class CompletionBackendConfig(BaseModel):
    """Configuration for the single-prompt completion backend."""

    model: str = Field(
        default=DEFAULT_COMPLETION_MODEL, min_length=1, description="Completion model identifier"
    )
    url: str = Field(default=TEXT_COMPLETIONS_URL, description="Text completions endpoint")


class TransportConfig(BaseModel):
    """Configuration for the HTTP transport."""

    timeout: float = Field(
        default=180.0, gt=0.0, le=3600.0, description="Request timeout in seconds"
    )
    max_retries: int = Field(
        default=0, ge=0, le=5, description="Retries for transport failures only"
    )
    backoff_base: float = Field(
        default=1.0, ge=0.0, le=60.0, description="Initial backoff delay in seconds"
    )


class ExtractionConfig(BaseModel):
    """Configuration for pulling code out of model output."""

    language: str = Field(
        default="python", min_length=1, description="Language tag expected on the opening fence"
    )


class AutoTestGenConfig(BaseModel):
    """Main autotestgen configuration."""

    backend: Literal["chat", "completion"] = Field(
        default="chat", description="Generation strategy"
    )
    chat: ChatBackendConfig = Field(default_factory=ChatBackendConfig)
    completion: CompletionBackendConfig = Field(default_factory=CompletionBackendConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
