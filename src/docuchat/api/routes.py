"""FastAPI routes for document upload and chat."""

from fastapi import APIRouter, HTTPException, UploadFile

from docuchat import __version__
from docuchat.api.dependencies import SessionDep
from docuchat.api.models import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    SessionResponse,
    SummaryResponse,
    TurnResponse,
)
from docuchat.core.exceptions import (
    ConversationNotReady,
    DocuChatError,
    EmptyMessage,
    ExtractionError,
    IngestionSuperseded,
    ResponsePending,
    SessionBusy,
    SummarizationFailed,
    TooLarge,
    UnsupportedFormat,
)
from docuchat.documents.models import Document
from docuchat.session import Session
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)
router = APIRouter()

# Most specific first
ERROR_STATUS_CODES: tuple[tuple[type[DocuChatError], int], ...] = (
    (UnsupportedFormat, 415),
    (TooLarge, 413),
    (ExtractionError, 422),
    (SummarizationFailed, 502),
    (EmptyMessage, 400),
    (ResponsePending, 409),
    (ConversationNotReady, 409),
    (SessionBusy, 409),
    (IngestionSuperseded, 409),
)


def to_http_error(error: DocuChatError) -> HTTPException:
    """Map a pipeline error to an HTTP error with its message as detail."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=500, detail=error.message)


def session_snapshot(session: Session) -> SessionResponse:
    """Build the session response model."""
    document = session.document
    extraction = session.extraction
    summary = session.summary
    return SessionResponse(
        status=session.status.value,
        filename=document.filename if document else None,
        media_type=document.media_type if document else None,
        extraction=extraction.kind.value if extraction else None,
        char_count=len(session.extracted_text),
        summary=SummaryResponse.from_record(summary) if summary else None,
        messages=[TurnResponse.from_turn(t) for t in session.turns],
    )


async def read_upload(file: UploadFile, limit_bytes: int) -> bytes:
    """
    Read an upload, refusing to buffer more than ``limit_bytes``.

    Raises:
        TooLarge: If the declared or actual size exceeds the limit
    """
    if file.size is not None and file.size > limit_bytes:
        raise TooLarge(size_bytes=file.size, limit_bytes=limit_bytes)

    content = await file.read(limit_bytes + 1)
    if len(content) > limit_bytes:
        raise TooLarge(size_bytes=len(content), limit_bytes=limit_bytes)
    return content


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.post("/document", response_model=SessionResponse)
async def upload_document(file: UploadFile, session: SessionDep) -> SessionResponse:
    """
    Upload a document, replacing the current one.

    The document is validated, converted to text and summarized before
    the response is returned. On failure the session is left empty.
    """
    try:
        content = await read_upload(file, session.max_document_bytes)
    except DocuChatError as e:
        raise to_http_error(e) from e

    document = Document(
        content=content,
        media_type=file.content_type or "application/octet-stream",
        filename=file.filename or "",
    )

    try:
        await session.ingest(document)
    except DocuChatError as e:
        raise to_http_error(e) from e

    return session_snapshot(session)


@router.post("/chat", response_model=ChatResponse)
async def chat(chat_request: ChatRequest, session: SessionDep) -> ChatResponse:
    """
    Ask a question about the current document.

    Service failures are answered with an apology turn rather than an
    error status.
    """
    try:
        reply = await session.ask(chat_request.message)
    except DocuChatError as e:
        raise to_http_error(e) from e

    return ChatResponse(
        reply=TurnResponse.from_turn(reply),
        messages=[TurnResponse.from_turn(t) for t in session.turns],
    )


@router.get("/session", response_model=SessionResponse)
async def get_session_state(session: SessionDep) -> SessionResponse:
    """Current session snapshot."""
    return session_snapshot(session)


@router.post("/reset", response_model=SessionResponse)
async def reset_session(session: SessionDep) -> SessionResponse:
    """Discard the current document and conversation."""
    session.reset()
    return session_snapshot(session)
