"""SeqFetch entry point."""

import uvicorn

from seqfetch.config import settings


def main():
    """Run the SeqFetch API server."""
    uvicorn.run(
        "seqfetch.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
