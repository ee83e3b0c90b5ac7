"""Shared, read-only text analysis tools for every supported language."""

from cagchat.domain.languages import LanguageProfile, LanguageRegistry
from cagchat.domain.services.language_detector import LanguageDetector
from cagchat.domain.services.topic_matcher import TopicMatcher
from cagchat.domain.services.word_ranker import SignificantWordRanker


class TextAnalysis:
    """Language detector plus per-language topic matchers and word rankers.

    Everything is built once from the registry and never mutated, so one
    instance can serve any number of conversations concurrently.
    """

    def __init__(self, registry: LanguageRegistry) -> None:
        self._registry = registry
        self._detector = LanguageDetector(registry)
        self._matchers = {p.code: TopicMatcher(p) for p in registry}
        self._rankers = {p.code: SignificantWordRanker(p) for p in registry}

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    def detect_language(self, text: str | None) -> str:
        return self._detector.detect(text)

    def profile(self, code: str | None) -> LanguageProfile:
        return self._registry.get(code)

    def topics(self, text: str | None, code: str | None) -> list[str]:
        """Topics of ``text``; empty for languages without a corpus."""
        profile = self._registry.get(code)
        return self._matchers[profile.code].match(text)

    def significant_words(
        self, text: str | None, code: str | None, limit: int = 5
    ) -> list[str]:
        profile = self._registry.get(code)
        return self._rankers[profile.code].rank(text, limit)
