"""Auto-fixer — deterministic, rule-based repair of preview code.

Every rewrite is a FixRule from the rule tables, applied in a fixed order.
Running the fixer on its own output applies nothing new.
"""

import structlog

from previewguard.validators.engine import validate_sanitized_code
from previewguard.validators.models import AutoFixResult, ValidateAndFixResult
from previewguard.validators.patterns import (
    ALTERNATE_COMPONENT_NAMES,
    CANONICAL_COMPONENT,
    EXCESS_BLANK_LINES,
    FIX_RULES_AFTER_RENAME,
    FIX_RULES_BEFORE_RENAME,
    FixRule,
    declaration_patterns,
)

logger = structlog.get_logger()


def _apply_rules(code: str, rules: list[FixRule], fixes_applied: list[str]) -> str:
    for rule in rules:
        code, count = rule.pattern.subn(rule.replacement, code)
        if count:
            fixes_applied.append(rule.description.format(count=count))
    return code


def _has_canonical_component(code: str) -> bool:
    return any(p.search(code) for p in declaration_patterns(CANONICAL_COMPONENT))


def _rename_component(code: str, fixes_applied: list[str]) -> str:
    """Rename the first alternate component declaration to Preview."""
    if _has_canonical_component(code):
        return code

    for name in ALTERNATE_COMPONENT_NAMES:
        patterns = declaration_patterns(name)
        if not any(p.search(code) for p in patterns):
            continue
        for pattern in patterns:
            code = pattern.sub(rf"\g<1>{CANONICAL_COMPONENT}", code, count=1)
        fixes_applied.append(f"Renamed component from {name} to {CANONICAL_COMPONENT}")
        break

    return code


def auto_fix_code(code: str) -> AutoFixResult:
    """Strip residual module/type syntax, rename the component, and re-validate."""
    fixes_applied: list[str] = []

    fixed = _apply_rules(code, FIX_RULES_BEFORE_RENAME, fixes_applied)
    fixed = _rename_component(fixed, fixes_applied)
    fixed = _apply_rules(fixed, FIX_RULES_AFTER_RENAME, fixes_applied)

    # Clean up empty lines (but keep some structure)
    fixed = EXCESS_BLANK_LINES.sub("\n\n\n", fixed).strip()

    validation = validate_sanitized_code(fixed)

    logger.info(
        "auto_fix_complete",
        fixes_applied=len(fixes_applied),
        remaining_errors=len(validation.errors),
        original_length=len(code),
        fixed_length=len(fixed),
    )

    return AutoFixResult(
        code=fixed,
        fixes_applied=fixes_applied,
        remaining_errors=validation.errors,
    )


def validate_and_fix(code: str) -> ValidateAndFixResult:
    """Validate first; only auto-fix when the code is not already valid."""
    initial = validate_sanitized_code(code)

    if initial.valid:
        return ValidateAndFixResult(
            code=code,
            valid=True,
            fixes_applied=[],
            errors=[],
            warnings=initial.warnings,
        )

    fix_result = auto_fix_code(code)

    return ValidateAndFixResult(
        code=fix_result.code,
        valid=len(fix_result.remaining_errors) == 0,
        fixes_applied=fix_result.fixes_applied,
        errors=fix_result.remaining_errors,
        warnings=initial.warnings,
    )
