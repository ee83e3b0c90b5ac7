"""Language profiles."""

from cagchat.domain.languages.english import ENGLISH
from cagchat.domain.languages.profile import LanguageProfile, LanguageRegistry
from cagchat.domain.languages.spanish import SPANISH

DEFAULT_LANGUAGE = "es"


def build_default_registry(default: str = DEFAULT_LANGUAGE) -> LanguageRegistry:
    """Registry with the bundled Spanish and English profiles.

    Args:
        default: Code used for unknown languages and ties.

    Returns:
        LanguageRegistry instance.
    """
    return LanguageRegistry([SPANISH, ENGLISH], default=default)


__all__ = [
    "DEFAULT_LANGUAGE",
    "ENGLISH",
    "LanguageProfile",
    "LanguageRegistry",
    "SPANISH",
    "build_default_registry",
]
