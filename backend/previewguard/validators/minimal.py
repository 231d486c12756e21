"""Minimal validator — the fast, authoritative safety/shape check used inside the sanitizer loop.

Every check runs on every call and all failures are collected, so the LLM
gets the complete list of problems on the next attempt.
"""

from previewguard.validators.balance import check_brace_balance, strip_comments_and_strings
from previewguard.validators.balance_validator import describe_imbalance
from previewguard.validators.models import MinimalValidationResult
from previewguard.validators.patterns import (
    CANONICAL_COMPONENT,
    DANGEROUS_CALLS,
    END_SENTINEL,
    MARKDOWN_FENCE_END,
    MARKDOWN_FENCE_START,
    PREVIEW_DECLARATION,
)

# Code-only characters required for a "successful" response
MIN_CODE_LENGTH = 30


def strip_wrappers(code: str) -> str:
    """Remove a surrounding markdown fence and a trailing END OF CODE comment."""
    cleaned = code.strip()
    cleaned = MARKDOWN_FENCE_START.sub("", cleaned, count=1)

    # Fence and sentinel can appear in either order at the tail
    previous = None
    while cleaned != previous:
        previous = cleaned
        cleaned = MARKDOWN_FENCE_END.sub("", cleaned, count=1)
        cleaned = END_SENTINEL.sub("", cleaned, count=1).strip()
    return cleaned


def validate_minimal(code: str) -> MinimalValidationResult:
    """Check dangerous calls, balance, the Preview declaration, and length."""
    cleaned = strip_wrappers(code)
    errors: list[str] = []

    # 1. Dangerous constructs: always blocking, never auto-fixed
    for pattern, label in DANGEROUS_CALLS:
        if pattern.search(cleaned):
            errors.append(f"Dangerous code detected: {label} is not allowed")

    # 2. Delimiter balance
    balance = check_brace_balance(cleaned)
    if balance.curly != 0:
        errors.append(f"Unbalanced curly braces: {describe_imbalance(balance.curly, 'brace')}")
    if balance.paren != 0:
        errors.append(f"Unbalanced parentheses: {describe_imbalance(balance.paren, 'paren')}")

    # 3. Canonical component
    if not PREVIEW_DECLARATION.search(cleaned):
        errors.append(
            f"Missing component named exactly '{CANONICAL_COMPONENT}' "
            f"(expected 'function {CANONICAL_COMPONENT}(' or 'const {CANONICAL_COMPONENT} =')"
        )

    # 4. Non-trivial body
    if len(strip_comments_and_strings(cleaned).strip()) < MIN_CODE_LENGTH:
        errors.append("Code appears to be empty or too short")

    return MinimalValidationResult(
        valid=len(errors) == 0,
        has_critical_errors=len(errors) > 0,
        errors=errors,
        code=cleaned,
    )
