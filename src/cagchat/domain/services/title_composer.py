"""Compose conversation titles from questions, topics and message text."""

import re
import unicodedata
from collections.abc import Mapping, Sequence
from typing import Any

from cagchat.config.models import TitleConfig
from cagchat.domain.entities.message import Message
from cagchat.domain.languages import LanguageProfile
from cagchat.domain.services.text_analysis import TextAnalysis

ELLIPSIS = "..."
MAX_TITLE_TOPICS = 3


def capitalize_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def fold_accents(text: str) -> str:
    """Strip diacritics (``qué`` -> ``que``)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def fit_length(text: str, max_length: int) -> str:
    """Cut ``text`` at the last word boundary so that it fits ``max_length``.

    An ellipsis is appended when something was cut; it counts toward the
    limit.
    """
    if len(text) <= max_length:
        return text
    budget = max(0, max_length - len(ELLIPSIS))
    cut = text[: budget + 1]
    space = cut.rfind(" ")
    head = cut[:space] if space > 0 else text[:budget]
    return head.rstrip(" ,;:") + ELLIPSIS


def join_items(items: Sequence[str], conjunction: str) -> str:
    """``a``, ``a y b``, ``a, b y c``."""
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def user_contents(messages: Sequence[Message | Mapping[str, Any]]) -> list[str]:
    """Texts of the user messages, accepting entities or role/content dicts."""
    contents = []
    for message in messages:
        if isinstance(message, Message):
            if message.is_user:
                contents.append(message.content)
        elif isinstance(message, Mapping) and message.get("role", "user") == "user":
            contents.append(str(message.get("content") or ""))
    return contents


class TitleComposer:
    """Turn the first user message of a conversation into a title.

    Decision order, first match wins: no user message gives the default
    title; a question is used directly (truncated when long); detected
    topics give a topic title; anything else is trimmed down to its most
    significant words.
    """

    def __init__(self, analysis: TextAnalysis, config: TitleConfig | None = None) -> None:
        self._analysis = analysis
        self._config = config or TitleConfig()

    def compose(
        self,
        messages: Sequence[Message | Mapping[str, Any]],
        language: str | None = None,
    ) -> str:
        """Generate a title for a conversation.

        Args:
            messages: Conversation messages in chronological order, as
                entities or plain role/content dicts.
            language: Force a language instead of detecting it.

        Returns:
            Title no longer than the configured maximum.
        """
        user_messages = user_contents(messages)
        if not user_messages:
            return self._analysis.profile(language).default_title

        first = user_messages[0]
        code = language or self._analysis.detect_language(first)
        profile = self._analysis.profile(code)

        if self.is_question(first, profile):
            return self.from_question(first, profile)

        topics = self._analysis.topics(first, profile.code)
        if topics:
            return self.from_topics(topics, profile)

        return self.from_message(first, profile)

    def is_question(self, text: str, profile: LanguageProfile) -> bool:
        """Ends with ``?`` or opens with an interrogative, ignoring accents."""
        stripped = text.strip()
        if not stripped:
            return False
        if stripped.endswith("?"):
            return True

        opening = fold_accents(stripped.lower()).lstrip("¿¡ ")
        for word in profile.interrogatives:
            if re.match(rf"{re.escape(fold_accents(word))}\b", opening):
                return True
        return False

    def from_question(self, question: str, profile: LanguageProfile) -> str:
        """Use a question as title, cutting it at a word boundary if long."""
        clean = question.strip()
        if not clean:
            return profile.default_title

        max_length = self._config.max_title_length
        if len(clean) <= max_length:
            return capitalize_first(clean)

        # room for the longest ending, "...?"
        budget = max_length - len(ELLIPSIS) - 1
        words = clean.split()
        kept: list[str] = []
        for word in words:
            if len(kept) >= self._config.max_question_words:
                break
            if len(" ".join([*kept, word])) > budget:
                break
            kept.append(word)

        title = " ".join(kept) if kept else clean[:budget]
        if len(kept) < len(words):
            title += ELLIPSIS if title.endswith("?") else ELLIPSIS + "?"
        return capitalize_first(title)

    def from_topics(self, topics: Sequence[str], profile: LanguageProfile) -> str:
        """Title naming up to three topics."""
        if not topics:
            return profile.default_title

        shown = list(topics[:MAX_TITLE_TOPICS])
        if len(shown) == 1:
            title = f"{profile.topic_prefix} {shown[0]}"
        else:
            title = join_items(shown, profile.conjunction)
        return self.finalize(title)

    def from_message(self, message: str, profile: LanguageProfile) -> str:
        """Trim an arbitrary message down to a short title.

        The first three words are always kept so the title reads naturally;
        after that short and common words are dropped.
        """
        clean = message.strip()
        if not clean:
            return profile.default_title

        max_length = min(
            self._config.max_message_title_length, self._config.max_title_length
        )
        if len(clean) <= max_length:
            return capitalize_first(clean)

        budget = max_length - len(ELLIPSIS)
        words = clean.split()
        kept: list[str] = []
        for word in words:
            if len(kept) >= self._config.max_message_title_words:
                break
            if len(" ".join([*kept, word])) > budget:
                break
            if len(word) <= 2 or word.lower() in profile.common_words:
                if len(kept) < 3:
                    kept.append(word)
                continue
            kept.append(word)

        title = " ".join(kept) if kept else clean[:budget].rstrip()
        if len(kept) < len(words):
            title += ELLIPSIS
        return capitalize_first(title)

    def from_entities(self, names: Sequence[str], profile: LanguageProfile) -> str:
        """Title naming the people or organizations discussed."""
        return self.finalize(
            f"{profile.topic_prefix} {join_items(names, profile.conjunction)}"
        )

    def from_words(self, words: Sequence[str], profile: LanguageProfile) -> str:
        """Title from significant words."""
        if len(words) == 1:
            return self.finalize(f"{profile.topic_prefix} {words[0]}")
        return self.finalize(", ".join(words))

    def finalize(self, title: str) -> str:
        return capitalize_first(fit_length(title, self._config.max_title_length))
