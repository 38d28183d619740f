"""API routes."""

from .health import router as health_router
from .downloads import router as downloads_router

__all__ = [
    "health_router",
    "downloads_router",
]
