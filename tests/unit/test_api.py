"""Tests for the HTTP API."""

import io

import httpx
import pytest
import starlette.datastructures
from fastapi import FastAPI, UploadFile
from fastapi.testclient import TestClient

from docuchat import __version__
from docuchat.api.routes import read_upload, router
from docuchat.clients.service import ServiceClient
from docuchat.core.exceptions import TooLarge
from docuchat.documents.config import IngestionConfig
from docuchat.main import create_app
from docuchat.session import Session


CONFIG = IngestionConfig()


@pytest.fixture
def api_client(backend, pdf_parser):
    """Test client over a router bound to a fake-backed session."""
    service_client = ServiceClient("http://backend.test", transport=httpx.MockTransport(backend.handle))
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.state.session = Session(service_client, pdf_parser=pdf_parser)

    with TestClient(app) as client:
        yield client


def upload(client, filename="notes.txt", content=b"hello world", media_type="text/plain"):
    return client.post("/api/v1/document", files={"file": (filename, content, media_type)})


class TestDocumentRoutes:
    """Tests for document upload."""

    def test_upload_text(self, api_client, backend):
        """Test uploading returns the summary and the greeting."""
        response = upload(api_client)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["filename"] == "notes.txt"
        assert data["extraction"] == "content"
        assert data["char_count"] == 11
        assert data["summary"]["bullets"] == ["first point", "second point"]
        assert data["messages"] == [{"role": "assistant", "content": CONFIG.GREETING}]
        assert backend.summarize_requests == [{"text": "hello world"}]

    def test_upload_image_placeholder(self, api_client):
        """Test images are accepted with placeholder text."""
        response = upload(api_client, "scan.png", b"\x89PNG", "image/png")

        assert response.status_code == 200
        assert response.json()["extraction"] == "placeholder"

    def test_unsupported_format(self, api_client):
        """Test unsupported uploads return 415."""
        response = upload(api_client, "page.html", b"<html>", "text/html")

        assert response.status_code == 415
        assert response.json()["detail"] == "Please upload a valid file (PDF, DOC, DOCX, TXT)"

    def test_too_large(self, api_client, backend):
        """Test oversize uploads return 413."""
        response = upload(api_client, content=b"x" * (10 * 1024 * 1024 + 1))

        assert response.status_code == 413
        assert backend.requests == []

    def test_too_large_is_not_buffered(self, api_client, backend, monkeypatch):
        """Test oversize uploads are refused without reading the whole body."""
        limit = CONFIG.MAX_DOCUMENT_SIZE_BYTES
        read_sizes = []
        original_read = starlette.datastructures.UploadFile.read

        async def recording_read(self, size=-1):
            read_sizes.append(size)
            return await original_read(self, size)

        monkeypatch.setattr(starlette.datastructures.UploadFile, "read", recording_read)

        response = upload(api_client, content=b"x" * (limit + 4096))

        assert response.status_code == 413
        assert all(0 <= size <= limit + 1 for size in read_sizes)
        assert backend.requests == []

    def test_summarization_failure(self, api_client, backend):
        """Test summary failures return 502 and leave the session idle."""
        backend.summarize = lambda request, body: httpx.Response(500, json={"error": "x"})

        response = upload(api_client)

        assert response.status_code == 502
        assert response.json()["detail"] == "x"
        assert api_client.get("/api/v1/session").json()["status"] == "idle"

    def test_malformed_summary(self, api_client, backend):
        """Test an unmappable summary returns 502 with a message."""
        backend.summarize = lambda request, body: httpx.Response(200, json={"bullets": 7})

        response = upload(api_client)

        assert response.status_code == 502
        assert "bullets" in response.json()["detail"]

    def test_no_text_in_pdf(self, api_client, backend, make_pdf_parser):
        """Test image-only PDFs return 422."""
        api_client.app.state.session = Session(
            ServiceClient("http://backend.test", transport=httpx.MockTransport(backend.handle)),
            pdf_parser=make_pdf_parser(pages=[[""]]),
        )

        response = upload(api_client, "scan.pdf", b"%PDF-1.4", "application/pdf")

        assert response.status_code == 422
        assert "scanned" in response.json()["detail"]


class TestChatRoutes:
    """Tests for chat and session routes."""

    def test_chat_before_upload(self, api_client):
        """Test chatting without a document is a conflict."""
        response = api_client.post("/api/v1/chat", json={"message": "hi"})

        assert response.status_code == 409

    def test_chat_round_trip(self, api_client):
        """Test a question returns the reply and full history."""
        upload(api_client)

        response = api_client.post("/api/v1/chat", json={"message": "What is it?"})

        assert response.status_code == 200
        data = response.json()
        assert data["reply"] == {"role": "assistant", "content": "Answer 4"}
        assert [m["role"] for m in data["messages"]] == ["assistant", "user", "assistant"]

    def test_blank_message(self, api_client):
        """Test blank questions return 400."""
        upload(api_client)

        response = api_client.post("/api/v1/chat", json={"message": "   "})

        assert response.status_code == 400

    def test_chat_failure_is_fallback(self, api_client, backend):
        """Test chat service errors still return 200 with the apology."""
        upload(api_client)
        backend.chat = lambda request, body: httpx.Response(503)

        response = api_client.post("/api/v1/chat", json={"message": "q"})

        assert response.status_code == 200
        assert response.json()["reply"]["content"] == CONFIG.FALLBACK_REPLY

    def test_reset(self, api_client):
        """Test reset returns an empty idle session."""
        upload(api_client)
        api_client.post("/api/v1/chat", json={"message": "q"})

        response = api_client.post("/api/v1/reset")

        assert response.status_code == 200
        assert response.json() == {
            "status": "idle",
            "filename": None,
            "media_type": None,
            "extraction": None,
            "char_count": 0,
            "summary": None,
            "messages": [],
        }


class TestApplication:
    """Tests for the assembled application."""

    def test_health_and_lifespan(self):
        """Test the app starts with an idle session."""
        with TestClient(create_app()) as client:
            health = client.get("/api/v1/health")
            state = client.get("/api/v1/session")
            root = client.get("/")

        assert health.json() == {"status": "ok", "version": __version__}
        assert state.json()["status"] == "idle"
        assert root.json()["name"] == "DocuChat API"


class TestReadUpload:
    """Tests for bounded upload reads."""

    @pytest.mark.asyncio
    async def test_within_limit(self):
        """Test uploads at the limit are returned whole."""
        upload_file = UploadFile(file=io.BytesIO(b"0123456789"))

        assert await read_upload(upload_file, 10) == b"0123456789"

    @pytest.mark.asyncio
    async def test_undeclared_size_over_limit(self):
        """Test uploads without a declared size stop after limit + 1 bytes."""
        stream = io.BytesIO(b"x" * 1000)
        upload_file = UploadFile(file=stream)

        with pytest.raises(TooLarge) as exc_info:
            await read_upload(upload_file, 10)

        assert exc_info.value.limit_bytes == 10
        assert stream.tell() == 11

    @pytest.mark.asyncio
    async def test_declared_size_over_limit(self):
        """Test a declared oversize upload is refused before reading."""
        stream = io.BytesIO(b"x" * 100)
        upload_file = UploadFile(file=stream, size=100)

        with pytest.raises(TooLarge):
            await read_upload(upload_file, 10)

        assert stream.tell() == 0
