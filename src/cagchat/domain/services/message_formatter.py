"""Formatting utilities for system prompt sections and chat history."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from cagchat.domain.entities.context import DocumentSummary, Entity, MemoryItem
from cagchat.domain.entities.message import Message
from cagchat.domain.languages import LanguageProfile

MAX_DOCUMENT_CONCEPTS = 5


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with ``...``."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_entity(entity: Entity) -> str:
    """Format an entity as ``- name (type): description``."""
    text = f"- {entity.name} ({entity.type or 'unknown'})"
    if entity.description:
        text += f": {entity.description}"
    return text


def format_entities(entities: Sequence[Entity]) -> str:
    return "\n".join(format_entity(e) for e in entities)


def format_document(document: DocumentSummary, profile: LanguageProfile) -> str:
    """Format a document as ``- name: summary [Key concepts: a, b]``."""
    text = f"- {document.name}: {document.summary}"
    if document.key_concepts:
        concepts = ", ".join(document.key_concepts[:MAX_DOCUMENT_CONCEPTS])
        text += f" [{profile.concepts_label}: {concepts}]"
    return text


def format_documents(documents: Sequence[DocumentSummary], profile: LanguageProfile) -> str:
    return "\n".join(format_document(d, profile) for d in documents)


def format_memory_item(
    item: MemoryItem,
    profile: LanguageProfile,
    preview_length: int = 100,
    max_entities: int = 3,
) -> str:
    """Format a remembered exchange with a short preview of the user message.

    Returns:
        Formatted string like ``- User asked about: "..." [Entities: a, b]``.
    """
    preview = truncate(item.user_message or "", preview_length)
    text = f'- {profile.memory_label}: "{preview}"'
    if item.entity_names:
        names = ", ".join(item.entity_names[:max_entities])
        text += f" [{profile.entities_label}: {names}]"
    return text


def format_memory_items(
    items: Sequence[MemoryItem],
    profile: LanguageProfile,
    preview_length: int = 100,
    max_entities: int = 3,
) -> str:
    return "\n".join(
        format_memory_item(item, profile, preview_length, max_entities)
        for item in items
    )


def _history_entry(message: Message | Mapping[str, Any]) -> dict[str, str] | None:
    if isinstance(message, Message):
        return {"role": message.role.value, "content": message.content}
    if isinstance(message, Mapping):
        role = message.get("role") or "user"
        role = "assistant" if role == "bot" else str(role)
        return {"role": role, "content": message.get("content", "")}
    return None


def trim_history(messages: Any, limit: int = 10) -> list[dict[str, str]]:
    """Keep the last ``limit`` messages as role/content dicts.

    ``bot`` roles become ``assistant``; content passes through verbatim.

    Args:
        messages: Stored messages, oldest first. Anything but a list is empty.
        limit: Maximum number of messages to keep.

    Returns:
        OpenAI-format message list.
    """
    if not isinstance(messages, list) or limit <= 0:
        return []
    entries = (_history_entry(m) for m in messages[-limit:])
    return [entry for entry in entries if entry is not None]


_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"\W+")


def _significant_words(text: str) -> set[str]:
    return {w for w in _NON_WORD.split(text) if len(w) > 3}


def are_texts_very_similar(first: str | None, second: str | None) -> bool:
    """Check whether two prompts say essentially the same thing.

    After collapsing whitespace and case, the texts are similar when one
    contains the other, or when more than 70% of the words longer than
    three characters are shared, relative to the larger word set.
    """
    if not first or not second:
        return False

    a = _WHITESPACE.sub(" ", first.lower()).strip()
    b = _WHITESPACE.sub(" ", second.lower()).strip()
    if a in b or b in a:
        return True

    words_a = _significant_words(a)
    words_b = _significant_words(b)
    largest = max(len(words_a), len(words_b))
    if largest == 0:
        return False
    return len(words_a & words_b) / largest > 0.7
