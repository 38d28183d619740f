"""SeqFetch Services."""

from .storage import OutputLocation, StorageService
from .downloader import DownloadExecutor, DownloadResult

__all__ = [
    # Local storage
    "OutputLocation",
    "StorageService",
    # Job execution
    "DownloadExecutor",
    "DownloadResult",
]
