"""Session aggregate tying ingestion, summary and conversation together."""

from dataclasses import dataclass
from enum import Enum

from docuchat.clients.service import ServiceClient
from docuchat.config.settings import Settings
from docuchat.conversation import ChatTurn, ConversationContextManager, ConversationStatus
from docuchat.core.exceptions import (
    ConversationNotReady,
    DocuChatError,
    IngestionSuperseded,
    SessionBusy,
)
from docuchat.documents.classifier import FormatClassifier
from docuchat.documents.config import IngestionConfig
from docuchat.documents.extractors import DocumentTextExtractor
from docuchat.documents.models import Document, ExtractedText, SummaryRecord
from docuchat.documents.pdf import PdfParser
from docuchat.documents.summarizer import DocumentSummarizer
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class SessionStatus(str, Enum):
    """Session lifecycle state."""

    IDLE = "idle"                            # No document
    INGESTING = "ingesting"                  # Classify/extract/summarize in flight
    READY = "ready"                          # Summarized, accepting questions
    AWAITING_RESPONSE = "awaiting_response"  # Chat call in flight


@dataclass(frozen=True)
class SessionContext:
    """Everything derived from the current document; replaced as a unit."""

    document: Document
    extracted: ExtractedText
    summary: SummaryRecord
    conversation: ConversationContextManager


class Session:
    """
    The single live document session.

    Ingesting a document discards the previous context before any work
    starts and installs the new one only once summarization succeeds, so
    callers never observe a half-built session. ``reset`` wins over any
    in-flight work: late results are dropped.
    """

    def __init__(
        self,
        client: ServiceClient,
        config: IngestionConfig | None = None,
        pdf_parser: PdfParser | None = None,
        summarize_path: str = "/api/summarize",
        chat_path: str = "/api/chat",
    ):
        """
        Initialize an idle session.

        Args:
            client: Backend service client shared by summarization and chat
            config: Ingestion/chat configuration
            pdf_parser: PDF backend (pdfplumber if omitted)
            summarize_path: Summarization endpoint path
            chat_path: Chat endpoint path
        """
        self._config = config or IngestionConfig()
        self._client = client
        self._chat_path = chat_path
        self._classifier = FormatClassifier(self._config)
        self._extractor = DocumentTextExtractor(self._config, pdf_parser=pdf_parser)
        self._summarizer = DocumentSummarizer(client, path=summarize_path)

        self._context: SessionContext | None = None
        self._ingesting = False
        self._epoch = 0

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: ServiceClient | None = None,
        pdf_parser: PdfParser | None = None,
    ) -> "Session":
        """Build a session wired to the configured backend."""
        if client is None:
            client = ServiceClient(
                settings.service_base_url,
                timeout=settings.request_timeout_seconds,
            )
        config = IngestionConfig(CHAT_HISTORY_LIMIT=settings.chat_history_limit)
        return cls(
            client,
            config=config,
            pdf_parser=pdf_parser,
            summarize_path=settings.summarize_path,
            chat_path=settings.chat_path,
        )

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        if self._ingesting:
            return SessionStatus.INGESTING
        if self._context is None:
            return SessionStatus.IDLE
        if self._context.conversation.status is ConversationStatus.AWAITING_RESPONSE:
            return SessionStatus.AWAITING_RESPONSE
        return SessionStatus.READY

    @property
    def max_document_bytes(self) -> int:
        """Size ceiling applied to uploads."""
        return self._config.MAX_DOCUMENT_SIZE_BYTES

    @property
    def document(self) -> Document | None:
        return self._context.document if self._context else None

    @property
    def extracted_text(self) -> str:
        return self._context.extracted.text if self._context else ""

    @property
    def extraction(self) -> ExtractedText | None:
        return self._context.extracted if self._context else None

    @property
    def summary(self) -> SummaryRecord | None:
        return self._context.summary if self._context else None

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return self._context.conversation.turns if self._context else ()

    @property
    def last_chat_error(self) -> Exception | None:
        """Underlying cause of the most recent fallback reply, for diagnostics."""
        return self._context.conversation.last_error if self._context else None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def ingest(self, document: Document) -> SummaryRecord:
        """
        Replace the current document: classify, extract, summarize.

        Args:
            document: Uploaded document

        Returns:
            The new document's summary

        Raises:
            SessionBusy: Another ingestion or a chat call is in flight
            DocumentRejected: Format or size validation failed
            ExtractionError: Text could not be extracted
            SummarizationFailed: Summarization service call failed
            IngestionSuperseded: Session was reset while this call was running
        """
        if self.status in (SessionStatus.INGESTING, SessionStatus.AWAITING_RESPONSE):
            raise SessionBusy()

        self._context = None
        self._epoch += 1
        epoch = self._epoch
        self._ingesting = True

        log = logger.bind(filename=document.filename, media_type=document.media_type)
        try:
            doc_format = self._classifier.classify(document)
            extracted = await self._extractor.extract(document, doc_format)
            summary = await self._summarizer.summarize(extracted.text)
        except DocuChatError as e:
            log.warning("Ingestion failed", error=e.message, error_type=type(e).__name__)
            if epoch != self._epoch:
                raise IngestionSuperseded() from e
            raise
        finally:
            if epoch == self._epoch:
                self._ingesting = False

        if epoch != self._epoch:
            log.info("Discarding superseded ingestion")
            raise IngestionSuperseded()

        self._context = SessionContext(
            document=document,
            extracted=extracted,
            summary=summary,
            conversation=ConversationContextManager(
                extracted.text,
                self._client,
                path=self._chat_path,
                config=self._config,
            ),
        )
        log.info(
            "Document ingested",
            format=doc_format.value,
            kind=extracted.kind.value,
            chars=len(extracted.text),
        )
        return summary

    async def ask(self, text: str) -> ChatTurn:
        """
        Ask a question about the current document.

        Returns:
            The assistant's reply turn (fallback text if the chat call failed)

        Raises:
            SessionBusy: Ingestion in flight
            ConversationNotReady: No document loaded
            EmptyMessage: Message is empty or whitespace only
            ResponsePending: Previous question still awaiting a reply
        """
        if self._ingesting:
            raise SessionBusy()
        if self._context is None:
            raise ConversationNotReady()
        return await self._context.conversation.submit(text)

    def reset(self) -> None:
        """Drop the document, text, summary and conversation together."""
        self._context = None
        self._ingesting = False
        self._epoch += 1
        logger.info("Session reset")
