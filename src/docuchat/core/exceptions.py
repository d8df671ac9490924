"""Domain exceptions for the document chat pipeline."""


class DocuChatError(Exception):
    """Base exception for all pipeline errors."""

    default_message = "Document processing failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# -----------------------------------------------------------------------------
# Validation (raised before any extraction work)
# -----------------------------------------------------------------------------


class DocumentRejected(DocuChatError):
    """Document failed format classification."""


class UnsupportedFormat(DocumentRejected):
    """Media type is not in the accepted allow-list."""

    default_message = "Please upload a valid file (PDF, DOC, DOCX, TXT)"

    def __init__(self, message: str | None = None, media_type: str | None = None):
        super().__init__(message)
        self.media_type = media_type


class TooLarge(DocumentRejected):
    """Document exceeds the size ceiling."""

    default_message = "File size must be less than 10MB"

    def __init__(
        self,
        message: str | None = None,
        size_bytes: int = 0,
        limit_bytes: int = 0,
    ):
        super().__init__(message)
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------


class ExtractionError(DocuChatError):
    """Text could not be extracted from an accepted document."""


class ReadError(ExtractionError):
    """Raw bytes could not be consumed or decoded as text."""

    default_message = "Failed to read text file"


class NoExtractableText(ExtractionError):
    """Document parsed but yielded no text (typically scanned/image-only PDFs)."""

    default_message = "No text found in PDF (it might be scanned/image-based)"


class ExtractionFailed(ExtractionError):
    """Parser failed while opening or walking the document."""

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        if message is None and cause is not None:
            message = f"Failed to extract text from PDF: {cause}"
        super().__init__(message)
        self.cause = cause


# -----------------------------------------------------------------------------
# Remote services
# -----------------------------------------------------------------------------


class ServiceError(DocuChatError):
    """Remote service returned a non-success outcome."""

    default_message = "API request failed"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SummarizationFailed(DocuChatError):
    """Summarization service call did not produce a summary."""

    default_message = "API request failed"


# -----------------------------------------------------------------------------
# Conversation and session
# -----------------------------------------------------------------------------


class SubmissionRejected(DocuChatError):
    """User message was not accepted; conversation state is unchanged."""


class ConversationNotReady(SubmissionRejected):
    """No summarized document is loaded yet."""

    default_message = "Upload a document before asking questions"


class ResponsePending(SubmissionRejected):
    """A chat call is already in flight for this conversation."""

    default_message = "Still waiting for the previous answer"


class EmptyMessage(SubmissionRejected):
    """Message is empty or whitespace only."""

    default_message = "Message must not be empty"


class SessionBusy(DocuChatError):
    """Another operation is in flight for the session."""

    default_message = "Session is busy processing another request"


class IngestionSuperseded(DocuChatError):
    """Session was reset or re-ingested while this ingestion was in flight."""

    default_message = "Document processing was superseded by a newer request"
