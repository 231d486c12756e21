"""API request models."""

from pydantic import BaseModel, Field
from typing import Optional


class SanitizePreviewRequest(BaseModel):
    """Request to sanitize generated React code for a live preview."""

    raw_code: str = Field(
        ...,
        min_length=10,
        max_length=200_000,
        description="Component source produced by the design generator",
        examples=[
            "export default function HomePage() {\n"
            "  return <main className='p-8'><h1>Welcome</h1></main>\n"
            "}"
        ],
    )
    client_id: Optional[str] = Field(default=None, max_length=64, description="Client the preview is for")


class ValidateCodeRequest(BaseModel):
    """Request to run the deterministic validator (and optionally the auto-fixer)."""

    code: str = Field(..., min_length=1, max_length=200_000)
    auto_fix: bool = True
