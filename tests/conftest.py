"""
Pytest configuration for SeqFetch tests
This file configures paths and fixtures for all tests
"""
import asyncio
import os
import sys
from pathlib import Path

import httpx
import pytest

# Get the project root directory
PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"

# Add project directories to Python path
sys.path.insert(0, str(SRC_DIR))

# Set environment variables for testing
os.environ["ENV"] = "testing"

from seqfetch.config import (  # noqa: E402
    CallbackSettings,
    DispatchSettings,
    NCBISettings,
    Settings,
    StorageSettings,
)
from seqfetch.services import DownloadExecutor  # noqa: E402

EFETCH_URL = "https://eutils.test/entrez/eutils/efetch.fcgi"
CALLBACK_URL = "http://callback.test/api/v1.0/downloaded"

GENBANK_RECORD = b"""LOCUS       AB123456                 120 bp    DNA     linear   BCT 01-JAN-2020
DEFINITION  Test record.
ACCESSION   AB123456
ORIGIN
        1 atgaaacgca ttagcaccac cattaccacc accatcacca ttaccacagg taacggtgcg
       61 ggctgacgcg tacaggaaac acagaaaaaa gcccgcacct gacagtgcgg gctttttttt
//
"""

FASTA_RECORD = b""">WP_000000001.1 test protein
MKRISTTITTTITITTGNGAG
"""


# Configure pytest
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


class FakeNCBI:
    """
    httpx MockTransport handler standing in for efetch and the callback
    receiver. Every request is recorded.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.records = {"nucleotide": GENBANK_RECORD, "protein": FASTA_RECORD}
        self.efetch_status = 200
        self.efetch_error: Exception | None = None
        self.efetch_delay: float = 0.0
        self.callback_error: Exception | None = None
        self.callback_status = 200

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "eutils.test":
            if self.efetch_delay:
                await asyncio.sleep(self.efetch_delay)
            if self.efetch_error is not None:
                raise self.efetch_error
            db = request.url.params.get("db")
            return httpx.Response(self.efetch_status, content=self.records.get(db, b""))

        if request.url.host == "callback.test":
            if self.callback_error is not None:
                raise self.callback_error
            return httpx.Response(self.callback_status)

        return httpx.Response(404)

    @property
    def efetch_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "eutils.test"]

    @property
    def callback_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "callback.test"]


# Shared fixtures
@pytest.fixture
def output_dir(tmp_path) -> Path:
    """Directory job folders are created under"""
    path = tmp_path / "downloads"
    path.mkdir()
    return path


@pytest.fixture
def settings(output_dir) -> Settings:
    """Settings pointing at the fake endpoints and a temp output dir"""
    return Settings(
        env="testing",
        ncbi=NCBISettings(efetch_url=EFETCH_URL),
        callback=CallbackSettings(url=CALLBACK_URL),
        storage=StorageSettings(output_dir=output_dir),
        dispatch=DispatchSettings(shutdown_grace_period=1.0),
    )


@pytest.fixture
def fake_ncbi() -> FakeNCBI:
    return FakeNCBI()


@pytest.fixture
def http_client(fake_ncbi) -> httpx.AsyncClient:
    """Async client whose traffic goes to FakeNCBI (no sockets, nothing to close)"""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_ncbi))


@pytest.fixture
def executor(http_client, settings) -> DownloadExecutor:
    return DownloadExecutor.from_settings(http_client, settings)
