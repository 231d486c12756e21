"""Validation Engine — runs the full rule-based validator chain over preview code.

This is the deep, independent validation path. It needs no LLM and is what the
auto-fixer re-runs after every repair pass.

Usage:
    result = validate_sanitized_code(code)
    if not result.valid:
        fixed = auto_fix_code(code)
"""

import time
from typing import Optional

import structlog

from previewguard.validators.base import BaseValidator
from previewguard.validators.models import ErrorType, ValidationError, ValidationResult

from previewguard.validators.forbidden_pattern_validator import ForbiddenPatternValidator
from previewguard.validators.balance_validator import BalanceValidator
from previewguard.validators.content_validator import ComponentNameValidator, ContentLengthValidator

logger = structlog.get_logger()


class ValidationEngine:
    """Runs the validator chain in order and merges findings into one ValidationResult.

    A validator that raises is reported as a non-fixable syntax error rather
    than aborting the run, so the caller always gets a complete result.
    """

    def __init__(self, validators: Optional[list[BaseValidator]] = None):
        """Use ``validators`` when given, otherwise the default chain."""
        self.validators = validators or self._default_validators()

    @staticmethod
    def _default_validators() -> list[BaseValidator]:
        """Create the default validator chain in execution order."""
        return [
            ForbiddenPatternValidator(),  # imports, exports, directives, types, dangerous, markdown
            BalanceValidator(),           # curly / paren balance
            ContentLengthValidator(),     # non-trivial body
            ComponentNameValidator(),     # warning only
        ]

    def validate(self, code: str) -> ValidationResult:
        """Run all validators against the code and produce a result.

        Args:
            code: Component source

        Returns:
            ValidationResult, valid only when no validator reported an error
        """
        start_time = time.perf_counter()

        all_errors: list[ValidationError] = []
        warnings: list[str] = []
        validator_timings: dict[str, float] = {}

        for validator in self.validators:
            v_start = time.perf_counter()
            try:
                all_errors.extend(validator.validate(code))
                warnings.extend(validator.warnings(code))
            except Exception as e:
                logger.error(
                    "validator_failed",
                    validator=validator.name,
                    error=str(e),
                )
                # Reported as a finding; the remaining validators still run
                all_errors.append(ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validator '{validator.name}' crashed: {str(e)}",
                    fixable=False,
                ))
            finally:
                v_duration = (time.perf_counter() - v_start) * 1000
                validator_timings[validator.name] = round(v_duration, 2)

        result = ValidationResult(
            valid=len(all_errors) == 0,
            errors=all_errors,
            warnings=warnings,
        )

        total_duration = (time.perf_counter() - start_time) * 1000

        logger.debug(
            "validation_complete",
            valid=result.valid,
            total_errors=len(all_errors),
            total_warnings=len(warnings),
            code_length=len(code),
            duration_ms=round(total_duration, 2),
            validator_timings=validator_timings,
        )

        return result

    def add_validator(self, validator: BaseValidator) -> None:
        """Add a custom validator to the chain."""
        self.validators.append(validator)

    def remove_validator(self, validator_name: str) -> None:
        """Remove a validator by name."""
        self.validators = [v for v in self.validators if v.name != validator_name]


# Module-level singleton
validation_engine = ValidationEngine()


def validate_sanitized_code(code: str) -> ValidationResult:
    """Validate sanitized preview code with the default validator chain."""
    return validation_engine.validate(code)
