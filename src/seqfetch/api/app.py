"""FastAPI application factory."""

import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from seqfetch.config import Settings, settings as default_settings
from seqfetch.core.exceptions import install_exception_handlers
from seqfetch.core.logging import bind_context, clear_context, get_logger, setup_logging
from seqfetch.services import DownloadExecutor
from seqfetch.workers import JobDispatcher


# Initialize logging early
setup_logging(
    level="DEBUG" if default_settings.debug else default_settings.log_level,
    json_format=default_settings.is_production(),
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting SeqFetch",
        version=settings.app_version,
        env=settings.env,
        efetch_url=settings.ncbi.efetch_url,
        callback_url=settings.callback.url,
    )

    # Startup
    http_client = None
    if app.state.dispatcher is None:
        http_client = httpx.AsyncClient()
        executor = DownloadExecutor.from_settings(http_client, settings)
        app.state.dispatcher = JobDispatcher(
            executor,
            max_pending=settings.dispatch.max_pending_jobs,
        )

    logger.info("SeqFetch started successfully")

    yield

    # Shutdown
    dispatcher: JobDispatcher = app.state.dispatcher
    logger.info("Shutting down SeqFetch", pending_jobs=dispatcher.pending)
    abandoned = await dispatcher.drain(settings.dispatch.shutdown_grace_period)
    if abandoned:
        logger.warning("Abandoning unfinished downloads", count=abandoned)
    if http_client is not None:
        await http_client.aclose()
    logger.info("SeqFetch shutdown complete")


def create_app(
    settings: Settings | None = None,
    dispatcher: JobDispatcher | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Overrides the environment-derived settings
        dispatcher: Pre-built dispatcher; when omitted the lifespan builds
            one around a shared httpx client
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="NCBI sequence record downloader",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    # Exception handlers
    install_exception_handlers(app, include_trace=settings.debug)

    # Request context middleware for structured logging
    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()

    # Include routers
    from seqfetch.api.routes import health_router, downloads_router

    app.include_router(health_router)
    app.include_router(downloads_router, prefix=settings.api_prefix)

    return app


# Application instance
app = create_app()
