"""
Integration Tests for API Endpoints

Covers:
1. Download submission is acknowledged before the job runs
2. Completed jobs leave a record on disk and send a callback
3. Malformed payloads are rejected without side effects
4. Health endpoints and application lifespan
"""

import json

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from seqfetch.api.app import create_app
from seqfetch.config import DispatchSettings
from seqfetch.workers import JobDispatcher
from seqfetch.services import DownloadExecutor

DOWNLOAD_URL = "/api/v1.0/download"


@pytest.fixture
def dispatcher(executor) -> JobDispatcher:
    return JobDispatcher(executor)


@pytest_asyncio.fixture
async def client(settings, dispatcher):
    """API client talking to the app in-process"""
    app = create_app(settings, dispatcher=dispatcher)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://seqfetch.test") as api:
        yield api


class TestDownloadEndpoint:
    """Tests for POST /api/v1.0/download"""

    @pytest.mark.asyncio
    async def test_accepts_and_completes_nucleotide_job(
        self, client, dispatcher, fake_ncbi, output_dir
    ):
        """Test 202 echo without filename, then file and callback"""
        response = await client.post(
            DOWNLOAD_URL,
            json={"accession": "AB123456", "callback_id": "job1", "molecule_type": "nucleotide"},
        )

        assert response.status_code == 202
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "accession": "AB123456",
            "callback_id": "job1",
            "molecule_type": "nucleotide",
        }

        assert await dispatcher.drain(timeout=5) == 0

        record = output_dir / "job1" / "AB123456.gbk"
        assert record.read_bytes() == fake_ncbi.records["nucleotide"]

        [callback] = fake_ncbi.callback_requests
        assert json.loads(callback.content)["filename"] == "job1/AB123456.gbk"

    @pytest.mark.asyncio
    async def test_protein_job(self, client, dispatcher, fake_ncbi, output_dir):
        """Test protein jobs query db=protein and write .fa"""
        response = await client.post(
            DOWNLOAD_URL,
            json={"accession": "WP_000000001.1", "callback_id": "job2", "molecule_type": "protein"},
        )
        await dispatcher.drain(timeout=5)

        assert response.status_code == 202
        [efetch] = fake_ncbi.efetch_requests
        assert efetch.url.params["db"] == "protein"
        assert efetch.url.params["rettype"] == "fasta"
        assert (output_dir / "job2" / "WP_000000001.1.fa").exists()

    @pytest.mark.asyncio
    async def test_unknown_molecule_type_treated_as_nucleotide(
        self, client, dispatcher, fake_ncbi, output_dir
    ):
        """Test "banana" behaves exactly like nucleotide"""
        response = await client.post(
            DOWNLOAD_URL,
            json={"accession": "AB123456", "callback_id": "job3", "molecule_type": "banana"},
        )
        await dispatcher.drain(timeout=5)

        assert response.status_code == 202
        assert response.json()["molecule_type"] == "nucleotide"
        [efetch] = fake_ncbi.efetch_requests
        assert efetch.url.params["db"] == "nucleotide"
        assert (output_dir / "job3" / "AB123456.gbk").exists()

    @pytest.mark.asyncio
    async def test_email_forwarded_to_callback(self, client, dispatcher, fake_ncbi):
        """Test email is echoed and passed through untouched"""
        response = await client.post(
            DOWNLOAD_URL,
            json={"accession": "AB1", "callback_id": "job4", "email": "not-an-email"},
        )
        await dispatcher.drain(timeout=5)

        assert response.json()["email"] == "not-an-email"
        [callback] = fake_ncbi.callback_requests
        assert json.loads(callback.content)["email"] == "not-an-email"

    @pytest.mark.asyncio
    async def test_empty_job_accepted(self, client, dispatcher):
        """Test no emptiness checks happen at submission"""
        response = await client.post(DOWNLOAD_URL, content=b"{}")
        await dispatcher.drain(timeout=5)

        assert response.status_code == 202
        assert response.json() == {"molecule_type": "nucleotide"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        b"",
        b"{not json",
        b"[1, 2, 3]",
        b"null",
        b'{"accession": 42}',
    ])
    async def test_malformed_body_rejected(self, client, dispatcher, fake_ncbi, output_dir, body):
        """Test 400 with empty body and no side effects"""
        response = await client.post(
            DOWNLOAD_URL, content=body, headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.content == b""
        assert dispatcher.pending == 0
        await dispatcher.drain(timeout=5)
        assert fake_ncbi.requests == []
        assert list(output_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_fetch_failure_sends_no_callback(
        self, client, dispatcher, fake_ncbi, output_dir
    ):
        """Test the submitter still gets 202 and no callback is made"""
        fake_ncbi.efetch_error = httpx.ConnectError("network unreachable")

        response = await client.post(
            DOWNLOAD_URL, json={"accession": "AB123456", "callback_id": "job5"}
        )
        await dispatcher.drain(timeout=5)

        assert response.status_code == 202
        assert fake_ncbi.callback_requests == []
        assert (output_dir / "job5" / "AB123456.gbk").stat().st_size == 0

    @pytest.mark.asyncio
    async def test_get_not_allowed(self, client):
        """Test only POST is routed"""
        response = await client.get(DOWNLOAD_URL)

        assert response.status_code == 405


class TestBoundedDispatch:
    """Tests for the optional in-flight limit"""

    @pytest.mark.asyncio
    async def test_full_dispatcher_returns_503(self, settings, executor, fake_ncbi):
        """Test a bound of one rejects a concurrent second job"""
        fake_ncbi.efetch_delay = 0.2
        dispatcher = JobDispatcher(executor, max_pending=1)
        app = create_app(settings, dispatcher=dispatcher)

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://seqfetch.test"
        ) as api:
            first = await api.post(DOWNLOAD_URL, json={"accession": "AB1", "callback_id": "j"})
            second = await api.post(DOWNLOAD_URL, json={"accession": "AB2", "callback_id": "j"})
            await dispatcher.drain(timeout=5)

        assert first.status_code == 202
        assert second.status_code == 503
        assert second.json()["error"] == "JOB_QUEUE_FULL"


class TestHealthEndpoints:
    """Tests for health check endpoints"""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["app"] == "SeqFetch"
        assert data["environment"] == "testing"
        assert data["pending_jobs"] == 0

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["app"] == "SeqFetch"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestLifespan:
    """Tests for startup and shutdown"""

    def test_lifespan_builds_dispatcher(self, settings):
        """Test the app wires its own dispatcher when none is injected"""
        app = create_app(settings.model_copy(update={
            "dispatch": DispatchSettings(max_pending_jobs=3, shutdown_grace_period=0.1),
        }))

        with TestClient(app) as client:
            response = client.get("/health")
            dispatcher = app.state.dispatcher

        assert response.status_code == 200
        assert response.json()["pending_jobs"] == 0
        assert isinstance(dispatcher, JobDispatcher)
        assert isinstance(dispatcher.executor, DownloadExecutor)
        assert dispatcher.max_pending == 3
