"""Application layer: orchestration of generation sessions."""

from .generate_usecase import GenerateUseCase, parse_test_names
from .source import extract_function_source, render_test_module

__all__ = [
    "GenerateUseCase",
    "parse_test_names",
    "extract_function_source",
    "render_test_module",
]
