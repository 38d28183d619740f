"""Configuration package."""

from .settings import (
    CallbackSettings,
    DispatchSettings,
    NCBISettings,
    Settings,
    StorageSettings,
    settings,
)

__all__ = [
    "Settings",
    "NCBISettings",
    "CallbackSettings",
    "StorageSettings",
    "DispatchSettings",
    "settings",
]
