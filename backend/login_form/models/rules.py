"""
Field rule models shared by the server validator, the generated form
markup and the `/rules` metadata endpoint.
"""
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldRule(BaseModel):
    """
    Constraint attached to one form field.

    `pattern` uses the HTML5 `pattern` attribute contract: the whole value
    must match. A rule without a pattern places no constraint on the field.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    pattern: str | None = None
    help_text: str = ""
    # where the browser script renders help text relative to the form
    placement: Literal["prepend", "append"] = "append"

    @field_validator("pattern")
    @classmethod
    def _must_compile(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid regular expression: {exc}") from exc
        return value
