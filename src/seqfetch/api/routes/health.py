"""Health check routes."""

from fastapi import APIRouter

from seqfetch.api.deps import DispatcherDep, SettingsDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: SettingsDep, dispatcher: DispatcherDep):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.env,
        "pending_jobs": dispatcher.pending,
    }


@router.get("/")
async def root(settings: SettingsDep):
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
