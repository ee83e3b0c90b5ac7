"""Common fixtures for domain tests."""

import pytest

from cagchat.domain.languages import LanguageRegistry, build_default_registry
from cagchat.domain.services import TextAnalysis


@pytest.fixture(scope="session")
def registry() -> LanguageRegistry:
    """Spanish-default registry of the bundled languages."""
    return build_default_registry()


@pytest.fixture(scope="session")
def analysis(registry: LanguageRegistry) -> TextAnalysis:
    """Shared text analysis tools."""
    return TextAnalysis(registry)
