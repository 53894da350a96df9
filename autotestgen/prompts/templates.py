"""
Prompt templates for test generation sessions.

The system prompt pins the output framing: exactly one fenced code block
tagged with the target language, since only that block is kept.
"""

from __future__ import annotations


def system_prompt_generation(language: str = "python", framework: str = "pytest") -> str:
    """Top-level instruction for a generation session."""
    return (
        f"You are an expert {language} test engineer.\n"
        f"You write a single {framework} test function for the function provided by the user.\n"
        "The user gives you the function under test and the exact name of the test to write.\n\n"
        "OUTPUT REQUIREMENTS:\n"
        f"- Reply with exactly one code block opened with ```{language} and closed with ```.\n"
        "- The block contains only the test function, using the exact test name requested.\n"
        "- Do not redefine the function under test and do not add imports for it.\n"
        "- Keep any explanation outside the code block."
    )


def user_prompt_function(function_source: str, language: str = "python") -> str:
    """Context turn carrying the function under test."""
    return f"Function under test:\n```{language}\n{function_source.strip()}\n```"


def user_prompt_test_name(test_name: str) -> str:
    """Context turn naming the test to generate."""
    return f"Write the test function `{test_name}`."
