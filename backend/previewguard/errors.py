"""Terminal sanitization failure raised to callers once the pipeline gives up."""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Why an attempt (or the whole submission) failed."""

    SHAPE_REJECTED = "shape_rejected"        # Terminal, zero attempts
    EMPTY_RESPONSE = "empty_response"
    TRUNCATED = "truncated"
    VALIDATION_FAILED = "validation_failed"
    SERVICE_ERROR = "service_error"


class SanitizationError(Exception):
    """Raised when code cannot be turned into a safe preview.

    Callers must treat this as "do not render" and never fall back to the raw input.
    """

    code = "SANITIZATION_FAILED"

    def __init__(
        self,
        message: str,
        details: list[str],
        attempts: int,
        debug_info: str = "",
        reason: FailureKind = FailureKind.VALIDATION_FAILED,
        line: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = list(details)
        self.attempts = attempts
        self.debug_info = debug_info
        self.reason = reason
        self.line = line

    def to_dict(self) -> dict:
        """JSON body for the HTTP failure contract."""
        body = {
            "error": self.message,
            "code": self.code,
            "reason": self.reason.value,
            "details": self.details,
            "attempts": self.attempts,
        }
        if self.line is not None:
            body["line"] = self.line
        return body
