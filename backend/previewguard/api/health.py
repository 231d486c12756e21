"""Health check endpoint."""

import time
from fastapi import APIRouter

from previewguard.config import get_settings
from previewguard.models.responses import HealthResponse, HealthDependency
from previewguard.services.prompts import get_sanitize_prompt

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """System health check with dependency status."""
    dependencies = {}

    # Check sanitizer prompt
    try:
        start = time.time()
        get_sanitize_prompt()
        latency = (time.time() - start) * 1000
        dependencies["sanitizer_prompt"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))
    except OSError as e:
        dependencies["sanitizer_prompt"] = HealthDependency(status="unhealthy", message=str(e))

    # Check LLM configuration (no call is made)
    if get_settings().LLM_API_KEY:
        dependencies["llm"] = HealthDependency(status="healthy")
    else:
        dependencies["llm"] = HealthDependency(status="degraded", message="LLM_API_KEY is not set")

    # Overall status
    all_healthy = all(d.status == "healthy" for d in dependencies.values())
    any_unhealthy = any(d.status == "unhealthy" for d in dependencies.values())

    if all_healthy:
        status = "healthy"
    elif any_unhealthy:
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
