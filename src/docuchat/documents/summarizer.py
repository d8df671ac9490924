"""Summarization request construction and response mapping."""

from typing import Any

from docuchat.clients.service import ServiceClient
from docuchat.core.exceptions import ServiceError, SummarizationFailed
from docuchat.documents.models import SummaryRecord
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class DocumentSummarizer:
    """
    One-shot summarization of extracted document text.

    The full text is sent; only the chat path truncates.
    """

    def __init__(self, client: ServiceClient, path: str = "/api/summarize"):
        """
        Initialize summarizer.

        Args:
            client: Backend service client
            path: Summarization endpoint path
        """
        self._client = client
        self._path = path

    @staticmethod
    def build_request(text: str) -> dict[str, Any]:
        """Build the summarization request body."""
        return {"text": text}

    async def summarize(self, text: str) -> SummaryRecord:
        """
        Summarize document text.

        Args:
            text: Extracted document text

        Returns:
            SummaryRecord (absent response fields are empty)

        Raises:
            SummarizationFailed: If the service call does not succeed or the
                response cannot be mapped
        """
        try:
            data = await self._client.post_json(self._path, self.build_request(text))
        except ServiceError as e:
            logger.error(
                "Summary generation failed",
                status_code=e.status_code,
                error=e.message,
            )
            raise SummarizationFailed(e.message) from e

        try:
            summary = SummaryRecord.from_dict(data)
        except ValueError as e:
            logger.error("Malformed summary response", error=str(e))
            raise SummarizationFailed(str(e)) from e

        logger.info(
            "Summary generated",
            chars=len(text),
            bullets=len(summary.bullets),
            keywords=len(summary.keywords),
        )
        return summary
