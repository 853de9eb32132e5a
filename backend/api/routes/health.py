"""
Health check endpoint.
"""

from fastapi import APIRouter

from config.settings import settings

router = APIRouter(prefix="/api", tags=["health"])

VERSION = "1.0.0"


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "code-explainer",
        "version": VERSION,
        "provider": settings.LLM_PROVIDER,
    }


@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Code Explainer API",
        "docs": "/docs",
    }
