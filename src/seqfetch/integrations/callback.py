"""Completion callback delivery."""

import logging

import httpx

from seqfetch.config import CallbackSettings
from seqfetch.core.exceptions import CallbackError
from seqfetch.schemas import DownloadJob

logger = logging.getLogger(__name__)


class CallbackNotifier:
    """Tells the job's owner that its record is on disk."""

    def __init__(self, http_client: httpx.AsyncClient, callback: CallbackSettings):
        self.http_client = http_client
        self.url = callback.url
        self.timeout = callback.timeout

    async def notify(self, job: DownloadJob) -> httpx.Response:
        """
        POST the job (with its filename) as JSON to the callback URL.

        Only connection-level failures raise; the receiver's status code is
        logged and otherwise ignored.

        Raises:
            CallbackError: the request could not be delivered
        """
        try:
            response = await self.http_client.post(
                self.url,
                json=job.to_payload(),
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            raise CallbackError(f"Callback failed: {str(e) or type(e).__name__}", self.url) from e

        if response.is_error:
            logger.warning(f"Callback receiver answered HTTP {response.status_code}")
        else:
            logger.info(f"Callback delivered for {job.filename}")
        return response
