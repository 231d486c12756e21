"""Validation models: error categories, findings, and the result shapes of every validator.

All validation is deterministic: same input → same output, no randomness, no LLM calls.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Forbidden pattern categories reported by the full validator."""

    IMPORT = "import"
    EXPORT = "export"
    DIRECTIVE = "directive"
    TYPESCRIPT = "typescript-annotation"
    DANGEROUS = "dangerous"    # Never auto-fixed
    SYNTAX = "syntax"          # Balance / length problems, never auto-fixed
    MARKDOWN = "markdown"


# Categories the auto-fixer knows how to strip mechanically
FIXABLE_TYPES = {
    ErrorType.IMPORT,
    ErrorType.EXPORT,
    ErrorType.DIRECTIVE,
    ErrorType.MARKDOWN,
    ErrorType.TYPESCRIPT,
}


class ValidationError(BaseModel):
    """A single validation finding."""

    model_config = ConfigDict(use_enum_values=True)

    type: ErrorType
    message: str
    line: Optional[int] = None  # 1-based line of the first occurrence
    fixable: bool = False


class ValidationResult(BaseModel):
    """Output of the full validator."""

    valid: bool
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class AutoFixResult(BaseModel):
    """Output of the deterministic repair pass."""

    code: str
    fixes_applied: list[str] = Field(default_factory=list)
    remaining_errors: list[ValidationError] = Field(default_factory=list)


class ValidateAndFixResult(BaseModel):
    """Validate first, auto-fix only when needed."""

    code: str
    valid: bool
    fixes_applied: list[str] = Field(default_factory=list)
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class MinimalValidationResult(BaseModel):
    """Output of the fast safety/shape check used inside the sanitizer loop.

    ``code`` is the input with markdown fences and the trailing sentinel
    comment stripped, whether or not it is valid.
    """

    valid: bool
    has_critical_errors: bool
    errors: list[str] = Field(default_factory=list)
    code: str


class BraceBalance(BaseModel):
    """Signed delimiter counts. Positive = missing closers, negative = extra closers."""

    curly: int = 0
    paren: int = 0
    bracket: int = 0

    @property
    def balanced(self) -> bool:
        return self.curly == 0 and self.paren == 0 and self.bracket == 0
