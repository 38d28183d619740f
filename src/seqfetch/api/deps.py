"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from seqfetch.config import Settings
from seqfetch.workers import JobDispatcher


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_dispatcher(request: Request) -> JobDispatcher:
    """Dispatcher set up by the app lifespan (or injected by tests)."""
    return request.app.state.dispatcher


# ─────────────────────────────────────────────────────────────────────────────
# Type aliases for cleaner signatures
# ─────────────────────────────────────────────────────────────────────────────

SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DispatcherDep = Annotated[JobDispatcher, Depends(get_dispatcher)]
