"""Background dispatch for download jobs.

Jobs run as asyncio tasks on the server's own event loop. Submitting a job
returns immediately; the submitter gets no handle and no completion signal.
"""

import asyncio

from seqfetch.core.exceptions import JobQueueFullError
from seqfetch.core.logging import get_logger
from seqfetch.schemas import DownloadJob
from seqfetch.services import DownloadExecutor

logger = get_logger(__name__)


class JobDispatcher:
    """Fire-and-forget task spawner for DownloadExecutor.run."""

    def __init__(self, executor: DownloadExecutor, max_pending: int = 0):
        """
        Args:
            executor: Runs each submitted job
            max_pending: Refuse new jobs while this many are running (0 = no limit)
        """
        self.executor = executor
        self.max_pending = max_pending
        # Strong references only; the event loop keeps weak ones
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of jobs still running."""
        return len(self._tasks)

    def submit(self, job: DownloadJob) -> None:
        """
        Start `job` in the background and return at once.

        Raises:
            JobQueueFullError: a bound is configured and reached
        """
        if self.max_pending and len(self._tasks) >= self.max_pending:
            raise JobQueueFullError(self.max_pending)

        task = asyncio.create_task(
            self.executor.run(job),
            name=f"download:{job.callback_id}/{job.accession}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Download task cancelled", task=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Download task crashed", task=task.get_name(), exc_info=exc)

    async def drain(self, timeout: float | None = None) -> int:
        """
        Wait for running jobs to finish.

        Returns:
            Number of jobs still running when the timeout expired
        """
        if not self._tasks:
            return 0
        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)
        return len(still_running)


__all__ = ["JobDispatcher"]
