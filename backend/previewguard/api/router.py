"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from previewguard.api.health import router as health_router
from previewguard.api.previews import router as previews_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Preview sanitization and validation
api_router.include_router(previews_router, tags=["Previews"])
