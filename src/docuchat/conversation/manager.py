"""Chat context assembly and turn handling."""

from enum import Enum
from typing import Any

from docuchat.clients.service import ServiceClient
from docuchat.core.exceptions import EmptyMessage, ResponsePending, ServiceError
from docuchat.conversation.models import ChatTurn, ConversationState
from docuchat.documents.config import IngestionConfig
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class ConversationStatus(str, Enum):
    """Conversation lifecycle state."""

    READY = "ready"                          # Accepting a new user message
    AWAITING_RESPONSE = "awaiting_response"  # Chat call in flight


class ConversationContextManager:
    """
    Owns the chat history for one summarized document.

    The chat service is stateless, so every call carries the full context:
    a framing message with the (truncated) document, an acknowledgement,
    the replayed history and the new user message. At most one call is in
    flight; failed calls become a fallback assistant turn.
    """

    def __init__(
        self,
        document_text: str,
        client: ServiceClient,
        path: str = "/api/chat",
        config: IngestionConfig | None = None,
    ):
        """
        Initialize and seed the conversation with the greeting turn.

        Args:
            document_text: Extracted text the conversation is about
            client: Backend service client
            path: Chat endpoint path
            config: Ingestion/chat configuration
        """
        self._config = config or IngestionConfig()
        self._document_text = document_text
        self._client = client
        self._path = path
        self._state = ConversationState()
        self._state.append(ChatTurn(role="assistant", content=self._config.GREETING))
        self._status = ConversationStatus.READY
        self.last_error: Exception | None = None

    @property
    def status(self) -> ConversationStatus:
        return self._status

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return self._state.turns

    def framing_messages(self) -> list[dict[str, str]]:
        """The document framing pair that opens every chat request."""
        document = self._document_text[: self._config.CHAT_CONTEXT_MAX_CHARS]
        return [
            {
                "role": "user",
                "content": self._config.FRAMING_PROMPT.format(document=document),
            },
            {"role": "assistant", "content": self._config.ACKNOWLEDGEMENT},
        ]

    def build_messages(self, content: str) -> list[dict[str, str]]:
        """
        Assemble the outbound message list for a new user message.

        The current history is replayed as-is; ``content`` is appended last.
        """
        return [
            *self.framing_messages(),
            *self._state.to_messages_list(limit=self._config.CHAT_HISTORY_LIMIT),
            {"role": "user", "content": content},
        ]

    async def submit(self, text: str) -> ChatTurn:
        """
        Send a user message and record the assistant's reply.

        Args:
            text: User message

        Returns:
            The assistant turn appended (a fallback turn if the call failed)

        Raises:
            EmptyMessage: Message is empty or whitespace only
            ResponsePending: A previous message is still awaiting its reply
        """
        if self._status is ConversationStatus.AWAITING_RESPONSE:
            raise ResponsePending()

        content = (text or "").strip()
        if not content:
            raise EmptyMessage()

        messages = self.build_messages(content)
        self._state.append(ChatTurn(role="user", content=content))
        self._status = ConversationStatus.AWAITING_RESPONSE

        try:
            reply = await self._request_reply(messages)
        finally:
            self._status = ConversationStatus.READY

        self._state.append(reply)
        return reply

    async def _request_reply(self, messages: list[dict[str, Any]]) -> ChatTurn:
        """Call the chat service; any failure yields the fallback turn."""
        try:
            data = await self._client.post_json(self._path, {"messages": messages})
            answer = data.get("content")
            if not isinstance(answer, str):
                raise ServiceError("Chat response has no content")
        except Exception as e:
            self.last_error = e
            logger.error(
                "Chat request failed",
                error=str(e),
                error_type=type(e).__name__,
                message_count=len(messages),
            )
            return ChatTurn(role="assistant", content=self._config.FALLBACK_REPLY)

        self.last_error = None
        logger.debug("Chat reply received", message_count=len(messages), chars=len(answer))
        return ChatTurn(role="assistant", content=answer)
