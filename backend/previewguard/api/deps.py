"""Shared API dependencies — admin authentication and the sanitizer instance."""

from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from previewguard.agents.sanitizer import SanitizerAgent
from previewguard.config import get_settings

API_KEY_NAME = "X-API-KEY"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


async def require_admin(api_key: Optional[str] = Security(api_key_header)) -> Optional[str]:
    """Only admins may publish previews. No key configured = open (local development)."""
    expected = get_settings().ADMIN_API_KEY
    if not expected:
        return None
    if api_key == expected:
        return api_key
    raise HTTPException(status_code=403, detail="Could not validate credentials")


@lru_cache
def get_sanitizer() -> SanitizerAgent:
    return SanitizerAgent()
