"""Domain entities."""

from cagchat.domain.entities.context import (
    DocumentSummary,
    EnhancedContext,
    Entity,
    LanguageTag,
    MemoryItem,
    MessageStructure,
    Sentiment,
    TopicItem,
)
from cagchat.domain.entities.conversation import (
    Conversation,
    TitleHistoryEntry,
    TitleState,
)
from cagchat.domain.entities.message import Message, Role
from cagchat.domain.entities.template import Template

__all__ = [
    "Conversation",
    "DocumentSummary",
    "EnhancedContext",
    "Entity",
    "LanguageTag",
    "MemoryItem",
    "Message",
    "MessageStructure",
    "Role",
    "Sentiment",
    "Template",
    "TitleHistoryEntry",
    "TitleState",
    "TopicItem",
]
