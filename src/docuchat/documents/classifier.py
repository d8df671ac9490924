"""Format classification and upload validation."""

from docuchat.core.exceptions import TooLarge, UnsupportedFormat
from docuchat.documents.config import IngestionConfig
from docuchat.documents.models import Document, DocumentFormat
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class FormatClassifier:
    """
    Validate a document against the accepted formats and size ceiling.

    Runs before any extraction; pure and side-effect free.
    """

    def __init__(self, config: IngestionConfig | None = None):
        self._config = config or IngestionConfig()

    def classify(self, document: Document) -> DocumentFormat:
        """
        Classify a document into its extraction format.

        Args:
            document: Candidate document

        Returns:
            The format the document will be extracted as

        Raises:
            UnsupportedFormat: If the media type is not accepted
            TooLarge: If the document exceeds the size ceiling
        """
        media_type = document.media_type.split(";", 1)[0].strip().lower()
        doc_format = self._config.FORMAT_BY_CONTENT_TYPE.get(media_type)

        if doc_format is None:
            logger.info("Rejected document", reason="unsupported_format", media_type=media_type)
            raise UnsupportedFormat(media_type=media_type)

        if document.size_bytes > self._config.MAX_DOCUMENT_SIZE_BYTES:
            logger.info(
                "Rejected document",
                reason="too_large",
                size_bytes=document.size_bytes,
                limit_bytes=self._config.MAX_DOCUMENT_SIZE_BYTES,
            )
            raise TooLarge(
                size_bytes=document.size_bytes,
                limit_bytes=self._config.MAX_DOCUMENT_SIZE_BYTES,
            )

        return doc_format
