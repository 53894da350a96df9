"""
Port interfaces for the autotestgen system.

The orchestrator depends only on these contracts; concrete backends live in
`autotestgen.adapters`.
"""

from .codegen_error import (
    CodeGenError,
    ConfigurationError,
    ExtractionError,
    ProtocolError,
    TransportError,
)
from .codegen_port import CodeGenPort

__all__ = [
    "CodeGenPort",
    "CodeGenError",
    "ConfigurationError",
    "TransportError",
    "ProtocolError",
    "ExtractionError",
]
