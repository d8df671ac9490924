"""Conversation history models."""

from datetime import datetime, timezone
from typing import Iterator, Literal

from pydantic import BaseModel, Field


Role = Literal["user", "assistant"]


class ChatTurn(BaseModel):
    """A single conversation turn."""

    model_config = {"frozen": True}

    role: Role
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_message(self) -> dict[str, str]:
        """Wire form sent to the chat service."""
        return {"role": self.role, "content": self.content}


class ConversationState:
    """
    Append-only, chronologically ordered chat history.

    Turns are never edited or removed; a new session gets a new state.
    """

    def __init__(self) -> None:
        self._turns: list[ChatTurn] = []

    def append(self, turn: ChatTurn) -> None:
        """Add a turn at the end of the history."""
        self._turns.append(turn)

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        """Snapshot of all turns, oldest first."""
        return tuple(self._turns)

    def to_messages_list(self, limit: int | None = None) -> list[dict[str, str]]:
        """
        Convert to list of message dicts.

        Args:
            limit: Keep only the most recent ``limit`` turns (None keeps all)
        """
        turns = self._turns
        if limit is not None:
            turns = turns[max(len(turns) - limit, 0):]
        return [t.to_message() for t in turns]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ChatTurn]:
        return iter(tuple(self._turns))
