"""Download job execution: fetch a record from NCBI, store it, report back."""

import asyncio
from dataclasses import dataclass

import httpx

from seqfetch.config import Settings
from seqfetch.core.exceptions import DownloadError
from seqfetch.core.logging import bind_context, get_logger
from seqfetch.integrations import CallbackNotifier, EntrezClient
from seqfetch.schemas import DownloadJob
from seqfetch.services.storage import StorageService

logger = get_logger(__name__)


@dataclass
class DownloadResult:
    """Outcome of one job run; `error` is None when every step succeeded."""
    job: DownloadJob
    bytes_written: int = 0
    notified: bool = False
    error: DownloadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stage(self) -> str:
        """Stage the job stopped at, or "completed"."""
        return self.error.stage if self.error else "completed"


class DownloadExecutor:
    """
    Runs one download job end to end.

    Steps:
    1. Build the efetch request for the job's molecule type
    2. Record `{callback_id}/{accession}{ext}` as the job's filename
    3. Create the job directory and the output file
    4. Stream the record into the file
    5. POST the job to the callback URL

    A failure in steps 1-4 stops the job before the callback. A failed
    callback leaves the record on disk.
    """

    def __init__(
        self,
        entrez: EntrezClient,
        notifier: CallbackNotifier,
        storage: StorageService,
    ):
        self.entrez = entrez
        self.notifier = notifier
        self.storage = storage

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient, settings: Settings) -> "DownloadExecutor":
        return cls(
            entrez=EntrezClient(http_client, settings.ncbi),
            notifier=CallbackNotifier(http_client, settings.callback),
            storage=StorageService(settings.storage),
        )

    async def fetch(self, job: DownloadJob) -> int:
        """
        Download the job's record to disk and set `job.filename`.

        Returns:
            Number of bytes written

        Raises:
            DownloadError: any failure before the record is fully written
        """
        request = self.entrez.build_request(job.accession or "", job.molecule_type)

        # locate resolves symlinks on disk
        location = await asyncio.to_thread(
            self.storage.locate, job.callback_id, job.accession, job.molecule_type
        )
        job.filename = location.filename

        await self.storage.ensure_directory(location.directory)
        async with self.storage.open_output(location.path) as out:
            return await self.entrez.download(request, out, self.storage.chunk_size)

    async def run(self, job: DownloadJob) -> DownloadResult:
        """Execute the job, logging instead of raising on failure."""
        bind_context(
            accession=job.accession,
            callback_id=job.callback_id,
            molecule_type=getattr(job.molecule_type, "value", job.molecule_type),
        )
        result = DownloadResult(job=job)

        try:
            result.bytes_written = await self.fetch(job)
            logger.info(
                "Record downloaded",
                filename=job.filename,
                bytes=result.bytes_written,
            )

            await self.notifier.notify(job)
            result.notified = True
        except DownloadError as e:
            result.error = e
            logger.error(
                "Download job stopped",
                stage=e.stage,
                error=e.code,
                message=e.message,
                **e.details,
            )

        return result
