"""API request/response models."""

from typing import Literal

from pydantic import BaseModel, Field

from docuchat.conversation import ChatTurn
from docuchat.documents.models import SummaryRecord


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    message: str = Field(description="Question about the current document")


class TurnResponse(BaseModel):
    """One conversation turn."""

    role: Literal["user", "assistant"]
    content: str

    @classmethod
    def from_turn(cls, turn: ChatTurn) -> "TurnResponse":
        return cls(role=turn.role, content=turn.content)


class SummaryResponse(BaseModel):
    """Structured document summary."""

    short: str = ""
    detailed: str = ""
    bullets: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: SummaryRecord) -> "SummaryResponse":
        return cls(**record.to_dict())


class SessionResponse(BaseModel):
    """Snapshot of the live session."""

    status: str
    filename: str | None = None
    media_type: str | None = None
    extraction: Literal["content", "placeholder"] | None = None
    char_count: int = 0
    summary: SummaryResponse | None = None
    messages: list[TurnResponse] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    reply: TurnResponse
    messages: list[TurnResponse]


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str
