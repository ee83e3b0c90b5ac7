"""Language profile: per-language data plus derivation strategy."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class LanguageProfile:
    """Immutable bundle of everything language-specific.

    Attributes:
        code: ISO language code.
        name: Language name as shown to the model.
        common_words: Stop words ignored by word ranking and title trimming.
        interrogatives: Words that open a question.
        default_title: Title of a conversation without user messages.
        generic_titles: Placeholder titles that always warrant regeneration.
        topic_prefix: Prefix of single-topic titles ("Conversación sobre").
        other_topics_text: Localized "and other topics" phrase.
        conjunction: Word joining the last two items of a list.
        default_system_prompt: One-line assistant persona used as last resort.
        markers: Frequent words used for language detection.
        special_chars: Characters that hint strongly at this language.
        special_char_bonus: Score added when any special character appears.
        topic_corpus: Category name to topic names.
        document_frequency: Simulated document frequency per term.
        technical_suffixes: Suffixes of specialized (rare) terms.
        common_prefixes: Prefixes of everyday (frequent) terms.
        derive_forms: Inflected and derived forms of a base topic name.
        memory_label: Label of remembered user messages in the prompt.
        concepts_label: Label of document key concepts in the prompt.
        entities_label: Label of memory entities in the prompt.
    """

    code: str
    name: str
    common_words: frozenset[str]
    interrogatives: tuple[str, ...]
    default_title: str
    generic_titles: tuple[str, ...]
    topic_prefix: str
    other_topics_text: str
    conjunction: str
    default_system_prompt: str
    markers: tuple[str, ...]
    derive_forms: Callable[[str], list[str]]
    topic_corpus: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    document_frequency: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    special_chars: str = ""
    special_char_bonus: int = 0
    technical_suffixes: tuple[str, ...] = ()
    common_prefixes: tuple[str, ...] = ()
    memory_label: str = "User asked about"
    concepts_label: str = "Key concepts"
    entities_label: str = "Entities"

    @property
    def topics(self) -> list[str]:
        """All topic names in corpus order, without duplicates."""
        seen: dict[str, None] = {}
        for names in self.topic_corpus.values():
            for name in names:
                seen.setdefault(name, None)
        return list(seen)


def freeze_corpus(corpus: Mapping[str, Iterable[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({k: tuple(v) for k, v in corpus.items()})


class LanguageRegistry:
    """Dispatch table from language code to profile.

    Unknown codes resolve to the default profile.
    """

    def __init__(self, profiles: Iterable[LanguageProfile], default: str) -> None:
        self._profiles = {p.code: p for p in profiles}
        if default not in self._profiles:
            raise ValueError(f"Default language '{default}' has no profile")
        self._default = default

    @property
    def default(self) -> LanguageProfile:
        return self._profiles[self._default]

    @property
    def codes(self) -> list[str]:
        return list(self._profiles)

    def get(self, code: str | None) -> LanguageProfile:
        if code is None:
            return self.default
        return self._profiles.get(code, self.default)

    def __contains__(self, code: object) -> bool:
        return code in self._profiles

    def __iter__(self):
        return iter(self._profiles.values())

    def generic_titles(self) -> set[str]:
        """Placeholder titles of every registered language."""
        return {t for p in self._profiles.values() for t in p.generic_titles}
