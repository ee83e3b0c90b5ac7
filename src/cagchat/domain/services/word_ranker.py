"""TF-IDF ranking of significant words."""

import math
import re

from cagchat.domain.languages import LanguageProfile

CORPUS_SIZE = 1000

_NON_WORD = re.compile(r"[^\w\s]")


class SignificantWordRanker:
    """Rank the words of a text by TF-IDF against a simulated corpus.

    Document frequencies come from the profile's static table. Terms missing
    from it get a heuristic estimate where longer and more technical words
    count as rarer.
    """

    def __init__(self, profile: LanguageProfile, corpus_size: int = CORPUS_SIZE) -> None:
        self._profile = profile
        self._corpus_size = corpus_size

    def tokenize(self, text: str) -> list[str]:
        """Lower-cased tokens longer than three characters, stop words removed."""
        cleaned = _NON_WORD.sub(" ", text.lower())
        return [
            token
            for token in cleaned.split()
            if len(token) > 3 and token not in self._profile.common_words
        ]

    def estimate_document_frequency(self, word: str) -> float:
        """Estimate how many documents of the corpus contain ``word``."""
        length_factor = max(1.0, 10 - len(word) / 2)

        specialization = 100
        if word.endswith(self._profile.technical_suffixes):
            specialization = 60
        elif word.startswith(self._profile.common_prefixes):
            specialization = 200

        return min(500.0, max(10.0, specialization * length_factor))

    def document_frequency(self, word: str) -> float:
        known = self._profile.document_frequency.get(word)
        if known:
            return known
        return self.estimate_document_frequency(word)

    def scores(self, text: str | None) -> dict[str, float]:
        """TF-IDF score of every token, in order of first appearance."""
        if not text:
            return {}
        tokens = self.tokenize(text)
        if not tokens:
            return {}

        counts: dict[str, int] = {}
        for token in tokens:
            counts[token] = counts.get(token, 0) + 1

        total = len(tokens)
        return {
            term: (count / total)
            * math.log(self._corpus_size / (self.document_frequency(term) + 1))
            for term, count in counts.items()
        }

    def rank(self, text: str | None, limit: int = 5) -> list[str]:
        """Return the ``limit`` best-scoring words, best first.

        Ties keep the order in which the words first appear in the text.
        """
        scores = self.scores(text)
        ranked = sorted(scores, key=lambda term: scores[term], reverse=True)
        return ranked[:limit]
