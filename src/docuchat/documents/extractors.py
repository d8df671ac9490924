"""Per-format text extraction strategies.

Each document format has one extractor class registered against its
``DocumentFormat``. Supporting a new format means registering a new class;
the dispatch in ``DocumentTextExtractor`` does not change.
"""

from abc import ABC, abstractmethod
from typing import Type

from docuchat.core.exceptions import ExtractionFailed, NoExtractableText, ReadError
from docuchat.documents.config import IngestionConfig
from docuchat.documents.models import (
    Document,
    DocumentFormat,
    ExtractedText,
    ExtractionKind,
)
from docuchat.documents.pdf import PdfParser, PdfPlumberParser
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class TextExtractor(ABC):
    """Base class for format-specific extractors."""

    format: DocumentFormat

    def __init__(self, config: IngestionConfig, pdf_parser: PdfParser | None = None):
        self._config = config
        self._pdf_parser = pdf_parser

    @abstractmethod
    async def extract(self, document: Document) -> ExtractedText:
        """
        Convert a classified document into plain text.

        Raises:
            ExtractionError: If no text could be produced
        """
        ...


class ExtractorRegistry:
    """
    Registry mapping document formats to extractor classes.

    Usage:
        @ExtractorRegistry.register(DocumentFormat.PDF)
        class PdfExtractor(TextExtractor):
            ...
    """

    _extractors: dict[DocumentFormat, Type[TextExtractor]] = {}

    @classmethod
    def register(cls, doc_format: DocumentFormat):
        """Decorator to register an extractor for a format."""

        def decorator(extractor_class: Type[TextExtractor]) -> Type[TextExtractor]:
            if doc_format in cls._extractors:
                logger.warning(f"Overwriting extractor: {doc_format.value}")
            extractor_class.format = doc_format
            cls._extractors[doc_format] = extractor_class
            return extractor_class

        return decorator

    @classmethod
    def get(cls, doc_format: DocumentFormat) -> Type[TextExtractor]:
        """
        Get the extractor class for a format.

        Raises:
            KeyError: If no extractor is registered
        """
        if doc_format not in cls._extractors:
            raise KeyError(f"Extractor not found: {doc_format.value}")
        return cls._extractors[doc_format]

    @classmethod
    def formats(cls) -> list[DocumentFormat]:
        """Formats with a registered extractor."""
        return list(cls._extractors)


@ExtractorRegistry.register(DocumentFormat.TEXT)
class PlainTextExtractor(TextExtractor):
    """Decodes the raw bytes verbatim."""

    async def extract(self, document: Document) -> ExtractedText:
        try:
            text = document.content.decode(self._config.TEXT_ENCODING)
        except (UnicodeDecodeError, LookupError) as e:
            raise ReadError(f"Failed to read text file: {e}") from e
        return ExtractedText(text=text, format=self.format)


@ExtractorRegistry.register(DocumentFormat.PDF)
class PdfExtractor(TextExtractor):
    """
    Walks pages in ascending order, joining each page's fragments with
    single spaces and ending every page with a newline.
    """

    async def extract(self, document: Document) -> ExtractedText:
        parser = self._pdf_parser or PdfPlumberParser()

        try:
            pages = await parser.open(document.content)
        except Exception as e:
            logger.error("PDF open failed", filename=document.filename, error=str(e))
            raise ExtractionFailed(cause=e) from e

        page_texts: list[str] = []
        try:
            # Ascending page order reproduces reading order
            for page_number in range(1, pages.page_count + 1):
                fragments = await pages.get_fragments(page_number)
                page_texts.append(" ".join(f.text for f in fragments) + "\n")
        except Exception as e:
            logger.error(
                "PDF page walk failed",
                filename=document.filename,
                page=len(page_texts) + 1,
                error=str(e),
            )
            raise ExtractionFailed(cause=e) from e
        finally:
            await pages.close()

        text = "".join(page_texts)
        if not text.strip():
            raise NoExtractableText()

        logger.debug("Extracted PDF text", pages=len(page_texts), chars=len(text))
        return ExtractedText(text=text, format=self.format)


class PlaceholderExtractor(TextExtractor):
    """Succeeds with a fixed notice for formats without an extraction backend."""

    placeholder_field: str = ""

    async def extract(self, document: Document) -> ExtractedText:
        logger.info(
            "Using placeholder text",
            format=self.format.value,
            media_type=document.media_type,
        )
        return ExtractedText(
            text=getattr(self._config, self.placeholder_field),
            format=self.format,
            kind=ExtractionKind.PLACEHOLDER,
        )


@ExtractorRegistry.register(DocumentFormat.IMAGE)
class ImageExtractor(PlaceholderExtractor):
    """JPEG/PNG: OCR is not implemented."""

    placeholder_field = "IMAGE_PLACEHOLDER"


@ExtractorRegistry.register(DocumentFormat.WORD)
class WordExtractor(PlaceholderExtractor):
    """DOC/DOCX: no word-processor backend."""

    placeholder_field = "WORD_PLACEHOLDER"


class DocumentTextExtractor:
    """Dispatches a classified document to its registered extractor."""

    def __init__(
        self,
        config: IngestionConfig | None = None,
        pdf_parser: PdfParser | None = None,
    ):
        self._config = config or IngestionConfig()
        self._pdf_parser = pdf_parser

    async def extract(self, document: Document, doc_format: DocumentFormat) -> ExtractedText:
        """
        Extract text from a document already classified as ``doc_format``.

        Raises:
            ReadError: Plain text could not be decoded
            NoExtractableText: PDF had no text
            ExtractionFailed: PDF could not be parsed
        """
        extractor_class = ExtractorRegistry.get(doc_format)
        extractor = extractor_class(self._config, pdf_parser=self._pdf_parser)
        return await extractor.extract(document)
