"""Common fixtures for LLM infrastructure tests."""

import pytest

from cagchat.config.models import PersonaConfig
from cagchat.domain.languages import LanguageRegistry, build_default_registry
from cagchat.domain.services import TemplateStore
from cagchat.infrastructure.llm import PromptAssembler
from cagchat.infrastructure.persistence import DEFAULT_TEMPLATES


@pytest.fixture
def persona_config() -> PersonaConfig:
    """Create test persona config."""
    return PersonaConfig(
        name="asistente",
        system_prompt="Responde siempre con ejemplos prácticos de código.",
    )


@pytest.fixture
def registry() -> LanguageRegistry:
    """Spanish-default language registry."""
    return build_default_registry()


@pytest.fixture
def template_store() -> TemplateStore:
    """Store holding the default templates."""
    return TemplateStore(DEFAULT_TEMPLATES)


@pytest.fixture
def assembler(
    template_store: TemplateStore,
    registry: LanguageRegistry,
    persona_config: PersonaConfig,
) -> PromptAssembler:
    """Assembler over the default templates."""
    return PromptAssembler(template_store, registry, persona=persona_config)


@pytest.fixture
def base_prompt(template_store: TemplateStore) -> str:
    """Content of the base system template."""
    return template_store.get("system_base").content


@pytest.fixture
def format_prompt(template_store: TemplateStore) -> str:
    """Content of the format instructions template."""
    return template_store.get("format_instructions").content
