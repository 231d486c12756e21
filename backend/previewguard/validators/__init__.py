"""Preview code validators — deterministic safety and shape checks for generated components.

Usage:
    from previewguard.validators import validate_minimal, validate_and_fix

    result = validate_minimal(llm_output)
    if not result.valid:
        # Send result.errors back to the LLM on the next attempt
"""

from previewguard.validators.autofix import auto_fix_code, validate_and_fix
from previewguard.validators.balance import check_brace_balance, strip_comments_and_strings
from previewguard.validators.engine import ValidationEngine, validation_engine, validate_sanitized_code
from previewguard.validators.minimal import validate_minimal
from previewguard.validators.models import (
    AutoFixResult,
    BraceBalance,
    ErrorType,
    MinimalValidationResult,
    ValidateAndFixResult,
    ValidationError,
    ValidationResult,
)
from previewguard.validators.shape import looks_like_react_code

__all__ = [
    "AutoFixResult",
    "BraceBalance",
    "ErrorType",
    "MinimalValidationResult",
    "ValidateAndFixResult",
    "ValidationEngine",
    "ValidationError",
    "ValidationResult",
    "auto_fix_code",
    "check_brace_balance",
    "looks_like_react_code",
    "strip_comments_and_strings",
    "validate_and_fix",
    "validate_minimal",
    "validate_sanitized_code",
    "validation_engine",
]
