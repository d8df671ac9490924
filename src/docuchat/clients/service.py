"""HTTP client for the summarization and chat backend.

Each call is a single request with a success/failure outcome; nothing is
retried here.
"""

from typing import Any

import httpx

from docuchat.core.exceptions import ServiceError
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class ServiceClient:
    """
    Async JSON-over-HTTP client for the backend services.

    Non-success responses, transport failures and undecodable bodies all
    surface as ``ServiceError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            base_url: Base URL of the backend
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use ``httpx.MockTransport``)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST a JSON payload and return the decoded JSON body.

        Args:
            path: Endpoint path relative to the base URL
            payload: Request body

        Returns:
            Decoded response object

        Raises:
            ServiceError: On any non-success outcome
        """
        client = await self._get_client()

        try:
            response = await client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise ServiceError(f"Request to {path} failed: {e}") from e

        if not response.is_success:
            raise ServiceError(
                self._error_message(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError(
                f"Invalid JSON from {path}", status_code=response.status_code
            ) from e

        if not isinstance(data, dict):
            raise ServiceError(
                f"Unexpected response from {path}", status_code=response.status_code
            )

        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        """Service-reported ``error`` field, if the body carries one."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return None
