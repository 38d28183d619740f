"""SeqFetch custom exceptions and error handlers."""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from seqfetch.core.logging import get_logger

logger = get_logger("seqfetch")


# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions
# ─────────────────────────────────────────────────────────────────────────────

class SeqFetchException(Exception):
    """Base exception for SeqFetch."""

    def __init__(
        self,
        message: str,
        code: str = "SEQFETCH_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class JobQueueFullError(SeqFetchException):
    """Dispatcher refused a job because its bound is reached."""

    def __init__(self, limit: int):
        super().__init__(
            message=f"Too many jobs in flight (limit: {limit})",
            code="JOB_QUEUE_FULL",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"limit": limit},
        )


# ─────────────────────────────────────────────────────────────────────────────
# Download failures
#
# Raised inside the executor task only. None of these reach an HTTP client;
# the stage tells log readers where the job stopped.
# ─────────────────────────────────────────────────────────────────────────────

class DownloadError(SeqFetchException):
    """Base class for failures while executing a download job."""

    stage = "download"

    def __init__(self, message: str, code: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, details=details)


class RequestBuildError(DownloadError):
    """The outbound efetch request could not be constructed."""

    stage = "request"

    def __init__(self, message: str, url: str | None = None):
        super().__init__(
            message=message,
            code="REQUEST_BUILD_ERROR",
            details={"url": url} if url else {},
        )


class UnsupportedMoleculeTypeError(DownloadError):
    """A molecule type other than nucleotide/protein reached the executor."""

    stage = "request"

    def __init__(self, molecule_type: Any):
        super().__init__(
            message=f"Invalid molecule type {molecule_type!r}, ignoring request",
            code="UNSUPPORTED_MOLECULE_TYPE",
            details={"molecule_type": str(molecule_type)},
        )


class UnsafePathError(DownloadError):
    """The computed output path would leave the output directory."""

    stage = "storage"

    def __init__(self, path: str):
        super().__init__(
            message=f"Refusing to write outside the output directory: {path}",
            code="UNSAFE_PATH",
            details={"path": path},
        )


class StorageError(DownloadError):
    """Directory creation, file creation or a write failed."""

    stage = "storage"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
            details={"path": path} if path else {},
        )


class FetchError(DownloadError):
    """The efetch request failed, timed out or its body could not be read."""

    stage = "fetch"

    def __init__(self, message: str, url: str | None = None):
        super().__init__(
            message=message,
            code="FETCH_ERROR",
            details={"url": url} if url else {},
        )


class CallbackError(DownloadError):
    """The completion callback could not be delivered."""

    stage = "callback"

    def __init__(self, message: str, url: str | None = None):
        super().__init__(
            message=message,
            code="CALLBACK_ERROR",
            details={"url": url} if url else {},
        )


# ─────────────────────────────────────────────────────────────────────────────
# Exception Handlers
# ─────────────────────────────────────────────────────────────────────────────

def install_exception_handlers(app: FastAPI, include_trace: bool = False) -> None:
    """Install exception handlers on FastAPI app."""

    @app.exception_handler(SeqFetchException)
    async def seqfetch_exception_handler(request: Request, exc: SeqFetchException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP_ERROR",
                "message": str(exc.detail),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", error=str(exc))
        content = {
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }
        if include_trace:
            content["trace"] = traceback.format_exc()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )
