"""Base validator — abstract class implementing the Strategy Pattern.

Each validator is a standalone, independently testable unit.
New validators are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Optional

from previewguard.validators.models import ErrorType, FIXABLE_TYPES, ValidationError


class BaseValidator(ABC):
    """Abstract base for all preview code validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() returns a list of ValidationError (empty = no issues)
        - warnings() returns non-blocking notes (default: none)
        - No LLM calls, no network calls, no randomness
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def validate(self, code: str) -> list[ValidationError]:
        """Run validation checks against the code.

        Args:
            code: Component source as it would be handed to the preview compiler

        Returns:
            List of ValidationError findings (empty if no issues)
        """
        ...

    def warnings(self, code: str) -> list[str]:
        """Non-blocking findings. Override in subclasses."""
        return []

    # ── Helper Methods ──

    def _error(
        self,
        error_type: ErrorType,
        message: str,
        line: Optional[int] = None,
        fixable: Optional[bool] = None,
    ) -> ValidationError:
        """Convenience method to create a ValidationError."""
        if fixable is None:
            fixable = error_type in FIXABLE_TYPES
        return ValidationError(
            type=error_type,
            message=message,
            line=line,
            fixable=fixable,
        )

    @staticmethod
    def _preview_snippet(text: str, limit: int = 50) -> str:
        """Shorten a matched fragment for error messages."""
        return text[:limit] + ("..." if len(text) > limit else "")
