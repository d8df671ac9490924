"""Ingestion pipeline configuration."""

from dataclasses import dataclass, field

from docuchat.documents.models import DocumentFormat


def _default_formats() -> dict[str, DocumentFormat]:
    return {
        "application/pdf": DocumentFormat.PDF,
        "application/msword": DocumentFormat.WORD,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.WORD,
        "text/plain": DocumentFormat.TEXT,
        "image/jpeg": DocumentFormat.IMAGE,
        "image/jpg": DocumentFormat.IMAGE,  # non-standard, sent by some browsers
        "image/png": DocumentFormat.IMAGE,
    }


@dataclass
class IngestionConfig:
    """Document ingestion and chat context configuration."""

    # Validation
    FORMAT_BY_CONTENT_TYPE: dict[str, DocumentFormat] = field(default_factory=_default_formats)
    MAX_DOCUMENT_SIZE_BYTES: int = 10 * 1024 * 1024  # 10 MiB

    # Extraction
    TEXT_ENCODING: str = "utf-8"
    IMAGE_PLACEHOLDER: str = (
        "[Image support requires OCR which is not yet implemented. "
        "Please upload a PDF or text file.]"
    )
    WORD_PLACEHOLDER: str = (
        "[DOC/DOCX support requires additional libraries not yet installed. "
        "Please upload a PDF or text file.]"
    )

    # Chat context
    CHAT_CONTEXT_MAX_CHARS: int = 20_000
    CHAT_HISTORY_LIMIT: int | None = None  # None replays every prior turn

    GREETING: str = "Hello! I've analyzed your document. Ask me anything about it!"
    FRAMING_PROMPT: str = (
        "You are a helpful assistant answering questions about this document. "
        "Only use information from the document to answer questions."
        "\n\nDocument:\n{document}"
    )
    ACKNOWLEDGEMENT: str = (
        "I understand. I will answer questions based only on the document content provided."
    )
    FALLBACK_REPLY: str = "Sorry, I encountered an error. Please try again."

    @property
    def accepted_content_types(self) -> tuple[str, ...]:
        """Media types that pass classification."""
        return tuple(self.FORMAT_BY_CONTENT_TYPE)


# Default configuration instance
default_config = IngestionConfig()
