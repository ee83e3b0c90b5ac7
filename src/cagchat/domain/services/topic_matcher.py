"""Topic detection against a categorized topic corpus."""

import re

from cagchat.domain.languages import LanguageProfile


class TopicMatcher:
    """Find corpus topics mentioned in free text.

    Per topic, the first of these that succeeds records the base topic name:

    1. the topic occurs as a substring;
    2. topics longer than three characters match on word boundaries;
    3. a derived form (plural, adverb, adjective, ...) occurs as a substring.

    Derived forms are computed once per profile.
    """

    def __init__(self, profile: LanguageProfile) -> None:
        self._profile = profile
        self._topics = profile.topics
        self._boundaries = {
            topic: re.compile(rf"\b{re.escape(topic)}\b", re.IGNORECASE)
            for topic in self._topics
            if len(topic) > 3
        }
        self._derivations = {
            topic: profile.derive_forms(topic) for topic in self._boundaries
        }

    @property
    def language(self) -> str:
        return self._profile.code

    def match(self, text: str | None) -> list[str]:
        """Return matched topics in corpus order, without duplicates.

        Args:
            text: Text to analyze.

        Returns:
            Base topic names.
        """
        if not text:
            return []

        lower = text.lower()
        return [topic for topic in self._topics if self._matches(topic, lower)]

    def _matches(self, topic: str, lower: str) -> bool:
        if topic in lower:
            return True
        boundary = self._boundaries.get(topic)
        if boundary is None:
            return False
        if boundary.search(lower):
            return True
        return any(form in lower for form in self._derivations[topic])
