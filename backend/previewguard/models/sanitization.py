"""Sanitizer pipeline result model."""

from pydantic import BaseModel, Field


class SanitizationResult(BaseModel):
    """Successful sanitizer output. ``code`` always passes the minimal validator."""

    code: str
    attempts: int
    fixes_applied: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
