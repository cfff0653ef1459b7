"""
Dedicated result models for the login endpoint
(kept separate from the field rule models).
"""
from enum import Enum

from pydantic import BaseModel


class ValidationResult(BaseModel):
    """Outcome of checking a single field against its rule."""
    field: str
    valid: bool
    help_text: str | None = None


class AuthOutcome(str, Enum):
    INCOMPLETE = "incomplete"
    INVALID = "invalid"
    PASSED = "passed"


class AuthenticationResponse(BaseModel):
    """
    Plain-text answer of POST /login plus the branch that produced it.
    """
    outcome: AuthOutcome
    message: str
