"""Sanitizer Agent — turns untrusted generated React code into a safe preview component.

Flow per submission:
    shape gate ──fail──▶ SanitizationError (0 attempts, no LLM call)
        │
        ▼
    [LLM transform → minimal validator] × up to MAX_SANITIZE_ATTEMPTS
        │                          │
        ▼                          ▼
    SanitizationResult       SanitizationError (last attempt's errors only)
"""

import time
from dataclasses import dataclass, field
from typing import Optional

import structlog
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from previewguard.config import get_settings
from previewguard.errors import FailureKind, SanitizationError
from previewguard.models.sanitization import SanitizationResult
from previewguard.services.prompts import get_sanitize_prompt
from previewguard.services.transformer import ChatModelTransformer, CodeTransformer, CompletionStatus
from previewguard.validators.minimal import validate_minimal
from previewguard.validators.shape import looks_like_react_code

logger = structlog.get_logger()

LLM_FIX_MARKER = "llm_sanitization"

# Characters of the last raw output kept in debug_info
DEBUG_TAIL_CHARS = 200

SHAPE_REJECTION_DETAIL = (
    "Code must contain a component declaration, JSX markup, "
    "and a return statement that returns JSX"
)


class _AttemptFailed(Exception):
    """One attempt failed; tenacity retries on this."""

    def __init__(self, kind: FailureKind, warnings: list[str]):
        super().__init__(kind.value)
        self.kind = kind
        self.warnings = warnings


@dataclass
class _AttemptLog:
    """What the most recent attempt left behind."""

    warnings: list[str] = field(default_factory=list)
    completion_status: Optional[CompletionStatus] = None
    raw_output: str = ""


def _log_retry(retry_state) -> None:
    failure = retry_state.outcome.exception()
    logger.warning(
        "sanitize_retry",
        attempt=retry_state.attempt_number,
        reason=failure.kind.value if isinstance(failure, _AttemptFailed) else type(failure).__name__,
    )


class SanitizerAgent:
    """Bounded-retry orchestration around the code transformer and the minimal validator."""

    def __init__(
        self,
        transformer: Optional[CodeTransformer] = None,
        max_attempts: Optional[int] = None,
        instruction: Optional[str] = None,
    ):
        self.transformer = transformer or ChatModelTransformer()
        self.max_attempts = max_attempts or get_settings().MAX_SANITIZE_ATTEMPTS
        self._instruction = instruction

    @property
    def instruction(self) -> str:
        """System instruction; the shared prompt library unless overridden."""
        return self._instruction or get_sanitize_prompt()

    def build_user_message(self, raw_code: str, previous_errors: Optional[list[str]] = None) -> str:
        """Raw code with its line count, plus the previous attempt's errors on retries."""
        line_count = raw_code.count("\n") + 1
        message = f"Sanitize this React component ({line_count} lines):\n\n{raw_code}"

        if previous_errors:
            error_list = "\n".join(f"- {e}" for e in previous_errors)
            message += (
                "\n\nYour previous attempt failed validation with these errors:\n"
                f"{error_list}\n"
                "Fix every error listed above and return the complete component."
            )
        return message

    async def sanitize(self, raw_code: str) -> SanitizationResult:
        """Run the pipeline.

        Raises:
            SanitizationError: shape gate failed, or every attempt failed
        """
        if not looks_like_react_code(raw_code):
            logger.warning("sanitize_shape_rejected", input_length=len(raw_code))
            raise SanitizationError(
                message="Input does not look like a React component",
                details=[SHAPE_REJECTION_DETAIL],
                attempts=0,
                debug_info=f"input_length={len(raw_code)}",
                reason=FailureKind.SHAPE_REJECTED,
            )

        start_time = time.time()
        log = _AttemptLog()
        result: Optional[SanitizationResult] = None

        logger.info("sanitize_started", input_length=len(raw_code), max_attempts=self.max_attempts)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                retry=retry_if_exception_type(_AttemptFailed),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    result = await self._attempt(raw_code, attempt.retry_state.attempt_number, log)
        except _AttemptFailed as failure:
            tail = log.raw_output[-DEBUG_TAIL_CHARS:]
            status = log.completion_status.value if log.completion_status else "none"
            logger.error(
                "sanitize_exhausted",
                attempts=self.max_attempts,
                reason=failure.kind.value,
                errors=len(log.warnings),
                duration_seconds=round(time.time() - start_time, 2),
            )
            raise SanitizationError(
                message=f"Code sanitization failed after {self.max_attempts} attempt(s)",
                details=log.warnings,
                attempts=self.max_attempts,
                debug_info=(
                    f"completion_status={status}, output_length={len(log.raw_output)}, "
                    f"output_tail={tail!r}"
                ),
                reason=failure.kind,
            ) from failure

        logger.info(
            "sanitize_succeeded",
            attempts=result.attempts,
            output_length=len(result.code),
            duration_seconds=round(time.time() - start_time, 2),
        )
        return result

    async def _attempt(self, raw_code: str, attempt_number: int, log: _AttemptLog) -> SanitizationResult:
        """One transform + validate round. Raises _AttemptFailed on any failure."""
        # Feedback reflects only the immediately preceding attempt
        previous_errors = log.warnings if attempt_number > 1 else None
        user_message = self.build_user_message(raw_code, previous_errors)
        instruction = self.instruction

        try:
            response = await self.transformer.transform(instruction, user_message)
        except Exception as e:
            log.completion_status = None
            log.raw_output = ""
            self._fail(log, attempt_number, FailureKind.SERVICE_ERROR, [f"Sanitizer service error: {e}"])

        log.completion_status = response.completion_status
        log.raw_output = response.text or ""

        if not log.raw_output.strip():
            self._fail(log, attempt_number, FailureKind.EMPTY_RESPONSE, ["Sanitizer returned an empty response"])

        if response.completion_status == CompletionStatus.LENGTH:
            self._fail(
                log,
                attempt_number,
                FailureKind.TRUNCATED,
                [f"Sanitizer output was truncated at {len(log.raw_output)} characters (token limit reached)"],
            )

        validation = validate_minimal(log.raw_output)
        if not validation.valid:
            self._fail(log, attempt_number, FailureKind.VALIDATION_FAILED, validation.errors)

        return SanitizationResult(
            code=validation.code,
            attempts=attempt_number,
            fixes_applied=[LLM_FIX_MARKER],
            warnings=[],
        )

    @staticmethod
    def _fail(log: _AttemptLog, attempt_number: int, kind: FailureKind, warnings: list[str]) -> None:
        # Replace, never accumulate: the next prompt and the final error see only this attempt
        log.warnings = list(warnings)
        logger.warning(
            "sanitize_attempt_failed",
            attempt=attempt_number,
            reason=kind.value,
            errors=warnings,
            completion_status=log.completion_status.value if log.completion_status else None,
            output_length=len(log.raw_output),
        )
        raise _AttemptFailed(kind, log.warnings)
