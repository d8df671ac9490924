"""Multi-turn chat context over an extracted document."""

from docuchat.conversation.manager import ConversationContextManager, ConversationStatus
from docuchat.conversation.models import ChatTurn, ConversationState

__all__ = [
    "ChatTurn",
    "ConversationState",
    "ConversationContextManager",
    "ConversationStatus",
]
