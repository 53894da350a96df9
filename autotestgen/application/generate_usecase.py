"""
Generate Use Case - one generation session per requested test.

For every test name a fresh backend is created, primed with the system
prompt, the function under test and the test name, then asked to generate.
A failure only affects the test it belongs to.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from ..domain.models import GeneratedTest
from ..ports.codegen_error import CodeGenError, ConfigurationError
from ..ports.codegen_port import CodeGenPort
from ..prompts.templates import (
    system_prompt_generation,
    user_prompt_function,
    user_prompt_test_name,
)

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], CodeGenPort]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_test_names(text: str | Iterable[str]) -> list[str]:
    """Parse a comma-separated list of test names.

    Duplicates are dropped, keeping the first occurrence.

        test_valid, test_div_by_zero

    Raises:
        ValueError: If a name is not a valid identifier.
    """
    raw = text.split(",") if isinstance(text, str) else list(text)
    names: list[str] = []
    for item in raw:
        name = item.strip()
        if not name:
            continue
        if not _IDENTIFIER.match(name):
            raise ValueError(f"Invalid test name: {name!r}")
        if name not in names:
            names.append(name)
    return names


class GenerateUseCase:
    """Drive one backend session per test name and collect the results."""

    def __init__(
        self,
        backend_factory: BackendFactory,
        language: str = "python",
        framework: str = "pytest",
    ) -> None:
        """
        Args:
            backend_factory: Returns a new, empty backend on every call.
            language: Target language, used in prompts.
            framework: Test framework named in the system prompt.
        """
        self._backend_factory = backend_factory
        self._language = language
        self._framework = framework

    def generate_test(self, function_source: str, test_name: str) -> str:
        """Generate a single test and return its code.

        Raises:
            CodeGenError: Any failure from the backend, unchanged.
        """
        backend = self._backend_factory()
        backend.initialize(system_prompt_generation(self._language, self._framework))
        backend.add_context(user_prompt_function(function_source, self._language))
        backend.add_context(user_prompt_test_name(test_name))
        return backend.generate()

    def generate_tests(
        self, function_source: str, test_names: Iterable[str]
    ) -> list[GeneratedTest]:
        """Generate every requested test, in order.

        Configuration errors (such as a missing credential) abort the whole
        run, since every remaining session would fail the same way.
        """
        results: list[GeneratedTest] = []
        for test_name in test_names:
            logger.info(f"Generating {test_name}")
            try:
                code = self.generate_test(function_source, test_name)
            except ConfigurationError:
                raise
            except CodeGenError as e:
                logger.error(f"Failed to generate {test_name}: {e.message}")
                results.append(GeneratedTest(test_name=test_name, error_message=str(e)))
                continue
            results.append(GeneratedTest(test_name=test_name, code=code))
        return results
