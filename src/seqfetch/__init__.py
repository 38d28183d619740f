"""SeqFetch - asynchronous NCBI record downloader with completion callbacks."""

__version__ = "1.0.0"
