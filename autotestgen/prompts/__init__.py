"""Prompt templates for autotestgen."""

from .templates import (
    system_prompt_generation,
    user_prompt_function,
    user_prompt_test_name,
)

__all__ = [
    "system_prompt_generation",
    "user_prompt_function",
    "user_prompt_test_name",
]
