"""Document validation, text extraction and summarization."""

from docuchat.documents.classifier import FormatClassifier
from docuchat.documents.config import IngestionConfig
from docuchat.documents.extractors import (
    DocumentTextExtractor,
    ExtractorRegistry,
    TextExtractor,
)
from docuchat.documents.models import (
    Document,
    DocumentFormat,
    ExtractedText,
    ExtractionKind,
    SummaryRecord,
    TextFragment,
)
from docuchat.documents.pdf import PdfPages, PdfParser, PdfPlumberParser
from docuchat.documents.summarizer import DocumentSummarizer

__all__ = [
    # Config
    "IngestionConfig",
    # Models
    "Document",
    "DocumentFormat",
    "ExtractedText",
    "ExtractionKind",
    "SummaryRecord",
    "TextFragment",
    # Validation / extraction
    "FormatClassifier",
    "TextExtractor",
    "ExtractorRegistry",
    "DocumentTextExtractor",
    "PdfParser",
    "PdfPages",
    "PdfPlumberParser",
    # Summarization
    "DocumentSummarizer",
]
