"""Pytest fixtures for testing."""

import json
from typing import Any, AsyncIterator, Awaitable, Callable

import httpx
import pytest
import pytest_asyncio

from docuchat.clients.service import ServiceClient
from docuchat.documents.config import IngestionConfig
from docuchat.documents.models import TextFragment
from docuchat.documents.pdf import PdfPages, PdfParser
from docuchat.session import Session


BASE_URL = "http://backend.test"

SUMMARY_PAYLOAD = {
    "short": "A short summary.",
    "detailed": "A much more detailed summary.",
    "bullets": ["first point", "second point"],
    "insights": ["an insight"],
    "keywords": ["alpha", "beta"],
}


class FakePdfPages(PdfPages):
    """In-memory paginated document."""

    def __init__(self, pages: list[list[str]], fail_on_page: int | None = None):
        self._pages = pages
        self._fail_on_page = fail_on_page
        self.requested: list[int] = []
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self._pages)

    async def get_fragments(self, page_number: int) -> list[TextFragment]:
        self.requested.append(page_number)
        if page_number == self._fail_on_page:
            raise RuntimeError("corrupt content stream")
        return [
            TextFragment(text=text, x=float(i * 10), y=0.0)
            for i, text in enumerate(self._pages[page_number - 1])
        ]

    async def close(self) -> None:
        self.closed = True


class FakePdfParser(PdfParser):
    """Parser returning fixed pages, or failing on open."""

    def __init__(
        self,
        pages: list[list[str]] | None = None,
        open_error: Exception | None = None,
        fail_on_page: int | None = None,
    ):
        self._pages = pages or []
        self._open_error = open_error
        self._fail_on_page = fail_on_page
        self.open_calls = 0
        self.opened: FakePdfPages | None = None

    async def open(self, data: bytes) -> PdfPages:
        self.open_calls += 1
        if self._open_error is not None:
            raise self._open_error
        self.opened = FakePdfPages(self._pages, fail_on_page=self._fail_on_page)
        return self.opened


Handler = Callable[[httpx.Request, dict[str, Any]], httpx.Response | Awaitable[httpx.Response]]


class FakeBackend:
    """Records requests and serves summarize/chat responses."""

    def __init__(self):
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self.summarize: Handler = lambda request, body: httpx.Response(200, json=SUMMARY_PAYLOAD)
        self.chat: Handler = self._default_chat

    @staticmethod
    def _default_chat(request: httpx.Request, body: dict[str, Any]) -> httpx.Response:
        return httpx.Response(200, json={"content": f"Answer {len(body['messages'])}"})

    @property
    def chat_requests(self) -> list[dict[str, Any]]:
        return [body for path, body in self.requests if path == "/api/chat"]

    @property
    def summarize_requests(self) -> list[dict[str, Any]]:
        return [body for path, body in self.requests if path == "/api/summarize"]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append((request.url.path, body))

        if request.url.path == "/api/summarize":
            response = self.summarize(request, body)
        elif request.url.path == "/api/chat":
            response = self.chat(request, body)
        else:
            return httpx.Response(404, json={"error": "not found"})

        if not isinstance(response, httpx.Response):
            response = await response
        return response


@pytest.fixture
def ingestion_config() -> IngestionConfig:
    """Default pipeline configuration."""
    return IngestionConfig()


@pytest.fixture
def backend() -> FakeBackend:
    """Fake summarization/chat backend."""
    return FakeBackend()


@pytest_asyncio.fixture
async def service_client(backend: FakeBackend) -> AsyncIterator[ServiceClient]:
    """Service client wired to the fake backend."""
    client = ServiceClient(BASE_URL, transport=httpx.MockTransport(backend.handle))
    yield client
    await client.close()


@pytest.fixture
def pdf_parser() -> FakePdfParser:
    """Two-page PDF parser."""
    return FakePdfParser(pages=[["Page", "one", "text"], ["Page", "two", "text"]])


@pytest.fixture
def session(
    service_client: ServiceClient,
    pdf_parser: FakePdfParser,
    ingestion_config: IngestionConfig,
) -> Session:
    """Idle session against the fake backend."""
    return Session(service_client, config=ingestion_config, pdf_parser=pdf_parser)


@pytest.fixture
def make_pdf_parser() -> Callable[..., FakePdfParser]:
    """Factory for parsers with custom pages or failures."""
    return FakePdfParser
