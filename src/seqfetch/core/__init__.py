"""Core module - exceptions, logging."""

from .exceptions import (
    SeqFetchException,
    JobQueueFullError,
    DownloadError,
    RequestBuildError,
    UnsupportedMoleculeTypeError,
    UnsafePathError,
    StorageError,
    FetchError,
    CallbackError,
    install_exception_handlers,
)
from .logging import (
    setup_logging,
    get_logger,
    bind_context,
    clear_context,
)

__all__ = [
    # Exceptions
    "SeqFetchException",
    "JobQueueFullError",
    "DownloadError",
    "RequestBuildError",
    "UnsupportedMoleculeTypeError",
    "UnsafePathError",
    "StorageError",
    "FetchError",
    "CallbackError",
    "install_exception_handlers",
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
