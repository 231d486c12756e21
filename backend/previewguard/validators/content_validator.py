"""Content validators — non-trivial body length and canonical component naming."""

import re

from previewguard.validators.base import BaseValidator
from previewguard.validators.models import ErrorType, ValidationError
from previewguard.validators.patterns import (
    CANONICAL_COMPONENT,
    COMPONENT_NAME_PATTERNS,
    PREVIEW_DECLARATION,
)

LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")

# Below this many non-comment characters the code cannot be a real component
MIN_BODY_LENGTH = 50


class ContentLengthValidator(BaseValidator):
    """Rejects empty or near-empty code."""

    def __init__(self, min_length: int = MIN_BODY_LENGTH):
        self.min_length = min_length

    @property
    def name(self) -> str:
        return "ContentLengthValidator"

    def validate(self, code: str) -> list[ValidationError]:
        stripped = BLOCK_COMMENT.sub("", LINE_COMMENT.sub("", code)).strip()
        if len(stripped) < self.min_length:
            return [self._error(
                error_type=ErrorType.SYNTAX,
                message="Code appears to be empty or too short",
            )]
        return []


class ComponentNameValidator(BaseValidator):
    """Warns when the primary component is not yet called Preview. Never blocks."""

    @property
    def name(self) -> str:
        return "ComponentNameValidator"

    def validate(self, code: str) -> list[ValidationError]:
        return []

    def warnings(self, code: str) -> list[str]:
        if PREVIEW_DECLARATION.search(code):
            return []

        for pattern in COMPONENT_NAME_PATTERNS:
            match = pattern.search(code)
            if match and match.group(1) != CANONICAL_COMPONENT:
                return [
                    f'Component named "{match.group(1)}" instead of "{CANONICAL_COMPONENT}" '
                    f"- will need renaming"
                ]
        return []
