"""Previews API — sanitize generated React code and validate code deterministically."""

from fastapi import APIRouter, Depends

import structlog

from previewguard.agents.sanitizer import SanitizerAgent
from previewguard.api.deps import get_sanitizer, require_admin
from previewguard.models.requests import SanitizePreviewRequest, ValidateCodeRequest
from previewguard.models.responses import (
    SanitizationErrorResponse,
    SanitizePreviewResponse,
    ValidateCodeResponse,
)
from previewguard.validators import validate_and_fix, validate_minimal, validate_sanitized_code

logger = structlog.get_logger()

router = APIRouter(prefix="/previews", dependencies=[Depends(require_admin)])


@router.post(
    "/sanitize",
    response_model=SanitizePreviewResponse,
    responses={422: {"model": SanitizationErrorResponse}},
)
async def sanitize_preview(
    request_body: SanitizePreviewRequest,
    sanitizer: SanitizerAgent = Depends(get_sanitizer),
):
    """Sanitize raw component code with the LLM and validate it for the preview sandbox.

    Blocks until the pipeline finishes. A SanitizationError is turned into a
    422 response by the global handler; the raw code is never echoed back.
    """
    with structlog.contextvars.bound_contextvars(client_id=request_body.client_id):
        result = await sanitizer.sanitize(request_body.raw_code)

        logger.info(
            "preview_sanitized",
            attempts=result.attempts,
            input_length=len(request_body.raw_code),
            output_length=len(result.code),
        )

    return SanitizePreviewResponse(
        code=result.code,
        attempts=result.attempts,
        fixes_applied=result.fixes_applied,
        warnings=result.warnings,
        line_count=result.code.count("\n") + 1,
    )


@router.post("/validate", response_model=ValidateCodeResponse)
async def validate_preview_code(request_body: ValidateCodeRequest):
    """Run the rule-based validator; with auto_fix, repair what can be repaired mechanically."""
    if request_body.auto_fix:
        fixed = validate_and_fix(request_body.code)
        return ValidateCodeResponse(
            code=fixed.code,
            valid=fixed.valid,
            fixes_applied=fixed.fixes_applied,
            errors=fixed.errors,
            warnings=fixed.warnings,
            minimal=validate_minimal(fixed.code),
        )

    result = validate_sanitized_code(request_body.code)
    return ValidateCodeResponse(
        code=request_body.code,
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings,
        minimal=validate_minimal(request_body.code),
    )
