"""Helpers shared by the generation backends: response parsing and code extraction."""

from __future__ import annotations

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ...ports.codegen_error import ExtractionError, ProtocolError

FENCE = "```"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def parse_response(body: str, response_model: type[ResponseT]) -> ResponseT:
    """Validate a raw response body against the expected shape.

    Raises:
        ProtocolError: If the body is not JSON, does not match the model,
            or carries no choices.
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Response body is not valid JSON: {e}", raw=body) from e

    try:
        response = response_model.model_validate(data)
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ProtocolError(
            f"Response does not match {response_model.__name__}: {e}",
            raw=body,
            metadata={"fields": fields},
        ) from e

    # Only choice 0 is consumed; the rest are ignored.
    if not getattr(response, "choices", None):
        raise ProtocolError(
            "Response contains no choices", raw=body, metadata={"fields": ["choices"]}
        )
    return response


def extract_code_block(text: str, language: str) -> str:
    """Return the first fenced block tagged with `language`, trimmed.

    Anything before the opening fence and after its closing fence is
    discarded. This is two plain splits, not a markdown parse.

    Raises:
        ExtractionError: If the tagged opening fence or the closing fence is missing.
    """
    _, opened, remainder = text.partition(f"{FENCE}{language}")
    if not opened:
        raise ExtractionError("no code block start found", raw=text)

    code, closed, _ = remainder.partition(FENCE)
    if not closed:
        raise ExtractionError("no code block end found", raw=text)

    return code.strip()
