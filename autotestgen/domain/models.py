"""
Domain models for the autotestgen system.

These models carry the outcome of each generation session back to the
caller; the sessions themselves are discarded once their code is extracted.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GeneratedTest(BaseModel):
    """
    Result of generating one named test.

    Exactly one of `code` and `error_message` is set.
    """

    model_config = ConfigDict(frozen=True)

    test_name: str = Field(..., description="Name of the requested test function")
    code: str | None = Field(None, description="Extracted test source")
    error_message: str | None = Field(None, description="Why generation failed")

    @model_validator(mode="after")
    def _check_outcome(self) -> "GeneratedTest":
        if (self.code is None) == (self.error_message is None):
            raise ValueError("Exactly one of code and error_message must be set")
        return self

    @property
    def success(self) -> bool:
        return self.code is not None
