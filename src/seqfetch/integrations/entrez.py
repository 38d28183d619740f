"""
NCBI Entrez efetch Integration Module
Downloads sequence records (GenBank or FASTA) by accession.
API Documentation: https://www.ncbi.nlm.nih.gov/books/NBK25499/#chapter4.EFetch
"""

import asyncio
import logging
from typing import Any, Protocol

import httpx

from seqfetch.config import NCBISettings
from seqfetch.core.exceptions import (
    FetchError,
    RequestBuildError,
    StorageError,
    UnsupportedMoleculeTypeError,
)
from seqfetch.models import MoleculeType

logger = logging.getLogger(__name__)


class AsyncWritable(Protocol):
    async def write(self, data: bytes) -> Any: ...


class EntrezClient:
    """
    efetch client for one record per request.

    No API key is required. Without one NCBI allows 3 requests per second;
    this client does not throttle, callers are expected to stay under it.
    """

    def __init__(self, http_client: httpx.AsyncClient, ncbi: NCBISettings):
        """
        Initialize efetch client.

        Args:
            http_client: Shared async HTTP client
            ncbi: Endpoint, tool name, API key and timeout
        """
        self.http_client = http_client
        self.url = ncbi.efetch_url
        self.tool = ncbi.tool
        self.api_key = ncbi.api_key
        self.timeout = ncbi.timeout

    def efetch_params(self, accession: str, molecule_type: MoleculeType) -> dict[str, str]:
        """
        Query parameters for fetching `accession`.

        Raises:
            UnsupportedMoleculeTypeError: molecule_type is not a known variant
        """
        if not isinstance(molecule_type, MoleculeType):
            raise UnsupportedMoleculeTypeError(molecule_type)

        params = {
            "tool": self.tool,
            "retmode": "text",
            "id": accession,
            "db": molecule_type.database,
            "rettype": molecule_type.rettype,
        }
        if self.api_key:
            params["api_key"] = self.api_key
        return params

    def build_request(self, accession: str, molecule_type: MoleculeType) -> httpx.Request:
        """
        Build the efetch GET request.

        Raises:
            UnsupportedMoleculeTypeError: molecule_type is not a known variant
            RequestBuildError: the configured endpoint is not a usable URL
        """
        params = self.efetch_params(accession, molecule_type)
        try:
            return self.http_client.build_request(
                "GET", self.url, params=params, timeout=self.timeout
            )
        except (httpx.InvalidURL, ValueError) as e:
            raise RequestBuildError(f"Cannot build efetch request: {e}", self.url) from e

    async def download(
        self,
        request: httpx.Request,
        out: AsyncWritable,
        chunk_size: int = 64 * 1024,
    ) -> int:
        """
        Send `request` and stream the response body into `out`.

        The whole round trip, body included, shares one timeout budget.
        A non-2xx response is logged but its body is still written, NCBI
        reports lookup errors in the body.

        Returns:
            Number of bytes written

        Raises:
            FetchError: network error, timeout, or broken response stream
            StorageError: writing to `out` failed
        """
        try:
            return await asyncio.wait_for(
                self._stream_into(request, out, chunk_size),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise FetchError(
                f"efetch did not complete within {self.timeout}s", str(request.url)
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(
                f"efetch failed: {str(e) or type(e).__name__}", str(request.url)
            ) from e

    async def _stream_into(
        self,
        request: httpx.Request,
        out: AsyncWritable,
        chunk_size: int,
    ) -> int:
        response = await self.http_client.send(request, stream=True)
        try:
            if response.is_error:
                logger.warning(
                    f"efetch returned HTTP {response.status_code} for {request.url.params.get('id')}"
                )

            written = 0
            async for chunk in response.aiter_bytes(chunk_size):
                try:
                    await out.write(chunk)
                except OSError as e:
                    raise StorageError(f"Failed to write record: {e}") from e
                written += len(chunk)
            return written
        finally:
            await response.aclose()
