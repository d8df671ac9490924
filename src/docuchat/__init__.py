"""Document ingestion and conversational Q&A over extracted text."""

__version__ = "0.1.0"
