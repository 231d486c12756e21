"""Forbidden Pattern Validator — residual module, directive, type-only and dangerous syntax."""

from previewguard.validators.base import BaseValidator
from previewguard.validators.models import ValidationError
from previewguard.validators.patterns import FORBIDDEN_PATTERNS, find_line_number


class ForbiddenPatternValidator(BaseValidator):
    """Flags every occurrence of every pattern in the FORBIDDEN_PATTERNS table."""

    def __init__(self, patterns=None):
        self.patterns = patterns or FORBIDDEN_PATTERNS

    @property
    def name(self) -> str:
        return "ForbiddenPatternValidator"

    def validate(self, code: str) -> list[ValidationError]:
        errors = []

        for category, patterns in self.patterns.items():
            for pattern in patterns:
                for match in pattern.finditer(code):
                    fragment = match.group(0)
                    errors.append(self._error(
                        error_type=category,
                        message=f'Found forbidden {category.value}: "{self._preview_snippet(fragment)}"',
                        line=find_line_number(code, fragment, start=match.start()),
                    ))

        return errors
