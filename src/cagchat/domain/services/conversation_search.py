"""Full-text search over conversations."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cagchat.domain.entities.conversation import Conversation
from cagchat.domain.entities.message import Message

SNIPPET_CONTEXT = 30


@dataclass(frozen=True)
class SearchResult:
    """A conversation matching a search term."""

    id: str
    title: str | None
    message_count: int
    snippet: str


def find_snippet(messages: Sequence[Message], term: str) -> str:
    """Text around the first case-insensitive occurrence of ``term``.

    Args:
        messages: Messages to search, in order.
        term: Search term.

    Returns:
        Up to 30 characters on each side of the match, with ``...`` where
        the message was cut. Empty if no message contains the term.
    """
    needle = term.lower()
    if not needle:
        return ""

    for message in messages:
        content = message.content or ""
        index = content.lower().find(needle)
        if index < 0:
            continue
        start = max(0, index - SNIPPET_CONTEXT)
        end = min(len(content), index + len(needle) + SNIPPET_CONTEXT)
        snippet = content[start:end]
        if start > 0:
            snippet = "..." + snippet
        if end < len(content):
            snippet += "..."
        return snippet
    return ""


def search_conversations(
    conversations: Iterable[Conversation], term: str
) -> list[SearchResult]:
    """Conversations whose title or messages contain ``term``."""
    needle = term.strip().lower()
    if not needle:
        return []

    results = []
    for conversation in conversations:
        in_title = bool(conversation.title) and needle in conversation.title.lower()
        in_messages = any(needle in (m.content or "").lower() for m in conversation.messages)
        if not (in_title or in_messages):
            continue
        results.append(
            SearchResult(
                id=conversation.id,
                title=conversation.title,
                message_count=len(conversation.messages),
                snippet=find_snippet(conversation.messages, needle),
            )
        )
    return results
