"""Locating functions in Python sources and splicing generated tests into a module."""

from __future__ import annotations

import ast
import logging
import textwrap
from pathlib import Path
from typing import Iterable

from ..domain.models import GeneratedTest

logger = logging.getLogger(__name__)

_FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def _find_function(body: list[ast.stmt], parts: list[str]) -> _FunctionNode | None:
    head, rest = parts[0], parts[1:]
    for node in body:
        if rest and isinstance(node, ast.ClassDef) and node.name == head:
            return _find_function(node.body, rest)
        if not rest and isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == head:
            return node
    return None


def extract_function_source(path: str | Path, function_name: str) -> str:
    """Return the source of a function (decorators included), dedented.

    Methods are addressed as ``ClassName.method``.

    Raises:
        ValueError: If the file does not parse or the function is not found.
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as e:
        raise ValueError(f"Cannot parse {path}: {e}") from e

    node = _find_function(tree.body, function_name.split("."))
    if node is None:
        raise ValueError(f"Function {function_name!r} not found in {path}")

    start = min([node.lineno] + [d.lineno for d in node.decorator_list])
    lines = source.splitlines()[start - 1 : node.end_lineno]
    logger.debug(f"Found {function_name} at {path}:{start}")
    return textwrap.dedent("\n".join(lines))


def render_test_module(
    module_name: str, function_name: str, results: Iterable[GeneratedTest]
) -> str:
    """Splice generated tests into a pytest module.

    Failed tests are kept as a comment so the gap stays visible.
    """
    import_name = function_name.split(".")[0]
    blocks = [f"from {module_name} import {import_name}"]
    for result in results:
        if result.success:
            blocks.append(result.code)
        else:
            reason = next(iter((result.error_message or "").splitlines()), "")
            blocks.append(f"# {result.test_name}: generation failed: {reason}")
    return "\n\n\n".join(blocks) + "\n"
