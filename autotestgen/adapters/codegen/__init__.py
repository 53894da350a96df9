from .chat import ChatBackend
from .common import extract_code_block, parse_response
from .completion import CompletionBackend
from .router import create_backend

__all__ = [
    "ChatBackend",
    "CompletionBackend",
    "create_backend",
    "extract_code_block",
    "parse_response",
]
