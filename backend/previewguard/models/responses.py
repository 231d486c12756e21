"""API response models."""

from pydantic import BaseModel
from typing import Optional, Literal

from previewguard.validators.models import MinimalValidationResult, ValidationError


class SanitizePreviewResponse(BaseModel):
    """Sanitized preview code, ready for the rendering sandbox."""

    code: str
    attempts: int
    fixes_applied: list[str] = []
    warnings: list[str] = []
    line_count: int


class ValidateCodeResponse(BaseModel):
    """Deterministic validation (and repair) outcome."""

    code: str
    valid: bool
    fixes_applied: list[str] = []
    errors: list[ValidationError] = []
    warnings: list[str] = []
    minimal: Optional[MinimalValidationResult] = None


class SanitizationErrorResponse(BaseModel):
    """Body returned when sanitization fails. Never contains the raw input."""

    error: str
    code: Literal["SANITIZATION_FAILED"] = "SANITIZATION_FAILED"
    reason: str
    details: list[str] = []
    attempts: int
    line: Optional[int] = None


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
