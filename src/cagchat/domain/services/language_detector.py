"""Marker-word language detection."""

import re

from cagchat.domain.languages import LanguageProfile, LanguageRegistry


def _marker_pattern(profile: LanguageProfile) -> re.Pattern[str]:
    alternation = "|".join(re.escape(m) for m in profile.markers)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def _special_pattern(profile: LanguageProfile) -> re.Pattern[str] | None:
    if not profile.special_chars:
        return None
    return re.compile(f"[{re.escape(profile.special_chars)}]", re.IGNORECASE)


class LanguageDetector:
    """Pick the language whose marker words occur most often in a text.

    Each profile scores one point per marker-word occurrence, plus its
    special-character bonus when any of its characteristic characters
    appears. Ties go to the registry's default language.
    """

    def __init__(self, registry: LanguageRegistry) -> None:
        self._registry = registry
        self._patterns = {
            p.code: (_marker_pattern(p), _special_pattern(p)) for p in registry
        }

    def score(self, text: str, code: str) -> int:
        """Score ``text`` against one language."""
        markers, special = self._patterns[code]
        score = len(markers.findall(text.lower()))
        if special is not None and special.search(text):
            score += self._registry.get(code).special_char_bonus
        return score

    def detect(self, text: str | None) -> str:
        """Detect the language code of ``text``.

        Args:
            text: Text to analyze.

        Returns:
            Language code; the default language for empty input.
        """
        default = self._registry.default.code
        if not isinstance(text, str) or not text.strip():
            return default

        best_code = default
        best_score = self.score(text, default)
        for profile in self._registry:
            if profile.code == default:
                continue
            score = self.score(text, profile.code)
            if score > best_score:
                best_code, best_score = profile.code, score
        return best_code
