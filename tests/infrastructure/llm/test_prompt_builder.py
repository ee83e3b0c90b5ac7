"""Tests for PromptAssembler."""

import logging
from typing import Any
from unittest.mock import Mock, patch

import pytest

from cagchat.config import ContextLimits, PersonaConfig
from cagchat.domain.entities import Template
from cagchat.domain.languages import LanguageRegistry, build_default_registry
from cagchat.domain.services import TemplateStore
from cagchat.infrastructure.llm import PromptAssembler
from cagchat.infrastructure.persistence import DEFAULT_TEMPLATES


def store_without(*names: str) -> TemplateStore:
    return TemplateStore(t for t in DEFAULT_TEMPLATES if t.name not in names)


def system_content(messages: list[dict[str, str]]) -> str:
    assert messages[0]["role"] == "system"
    return messages[0]["content"]


@pytest.fixture
def full_context() -> dict[str, Any]:
    """Context map exercising every section."""
    return {
        "currentMessage": "¿Cómo despliego Django?",
        "entities": [
            {
                "name": "Django",
                "type": "technology",
                "description": "Framework web de Python",
                "confidence": 0.9,
            }
        ],
        "documents": [
            {
                "name": "guia.pdf",
                "summary": "Guía de despliegue",
                "keyConcepts": ["docker", "nginx"],
            }
        ],
        "memory": {
            "shortTerm": [
                {
                    "userMessage": "¿Qué es Docker?",
                    "entities": [{"name": "Docker"}],
                    "relevance": 0.9,
                }
            ]
        },
        "messageStructure": {"isQuestion": True},
        "language": "en",
        "recentMessages": [
            {"role": "user", "content": "Hola"},
            {"role": "bot", "content": "¡Hola! ¿En qué te ayudo?"},
        ],
    }


class TestBuildPrompt:
    """build_prompt tests."""

    def test_empty_context(
        self,
        assembler: PromptAssembler,
        base_prompt: str,
        format_prompt: str,
        persona_config: PersonaConfig,
    ) -> None:
        """Test that an empty context gives base, format and persona sections."""
        messages = assembler.build_prompt({}, None)

        assert messages == [
            {
                "role": "system",
                "content": "\n\n".join(
                    [base_prompt, format_prompt, persona_config.system_prompt]
                ),
            }
        ]

    def test_section_order(
        self,
        assembler: PromptAssembler,
        full_context: dict[str, Any],
        base_prompt: str,
        format_prompt: str,
        persona_config: PersonaConfig,
    ) -> None:
        """Test that every section appears, in order."""
        content = system_content(assembler.build_prompt(full_context, None))

        markers = [
            base_prompt,
            format_prompt,
            "- Django (technology): Framework web de Python",
            "- guia.pdf: Guía de despliegue [Conceptos clave: docker, nginx]",
            '- Usuario preguntó sobre: "¿Qué es Docker?" [Entidades: Docker]',
            'pregunta de tipo "general"',
            "Responde en English (en).",
            persona_config.system_prompt,
        ]
        positions = [content.index(marker) for marker in markers]
        assert positions == sorted(positions)
        assert "{{" not in content

    def test_history_follows_system_message(
        self, assembler: PromptAssembler, full_context: dict[str, Any]
    ) -> None:
        """Test that history is appended with bot mapped to assistant."""
        messages = assembler.build_prompt(full_context, None)

        assert messages[1:] == [
            {"role": "user", "content": "Hola"},
            {"role": "assistant", "content": "¡Hola! ¿En qué te ayudo?"},
        ]

    def test_history_trimmed(self, assembler: PromptAssembler) -> None:
        """Test that at most ten history messages are sent."""
        history = [{"role": "user", "content": str(i)} for i in range(12)]

        messages = assembler.build_prompt({"recentMessages": history}, None)

        assert len(messages) == 11
        assert messages[1]["content"] == "2"

    def test_configured_history_limit(
        self, template_store: TemplateStore, registry: LanguageRegistry
    ) -> None:
        """Test the configurable history limit."""
        assembler = PromptAssembler(
            template_store, registry, limits=ContextLimits(max_history_messages=3)
        )
        history = [{"role": "user", "content": str(i)} for i in range(12)]

        messages = assembler.build_prompt({"recentMessages": history}, None)

        assert [m["content"] for m in messages[1:]] == ["9", "10", "11"]

    def test_entity_cap_applied(self, assembler: PromptAssembler) -> None:
        """Test that the prompt lists at most eight entities."""
        context_map = {
            "entities": [
                {"name": f"E{i}", "type": "concept", "confidence": 0.9}
                for i in range(20)
            ]
        }

        content = system_content(assembler.build_prompt(context_map, None))

        assert content.count("(concept)") == 8


class TestUserSystemPrompt:
    """User-supplied system prompt tests."""

    def test_user_prompt_overrides_persona(
        self, assembler: PromptAssembler, persona_config: PersonaConfig
    ) -> None:
        """Test that user_config replaces the persona prompt."""
        content = system_content(
            assembler.build_prompt({}, {"system_prompt": "Habla como un pirata."})
        )

        assert content.endswith("Habla como un pirata.")
        assert persona_config.system_prompt not in content

    def test_similar_prompt_not_repeated(
        self, assembler: PromptAssembler, base_prompt: str
    ) -> None:
        """Test that a prompt very similar to the base is skipped."""
        content = system_content(
            assembler.build_prompt({}, {"system_prompt": base_prompt.upper()})
        )

        assert content.lower().count(base_prompt.lower()) == 1

    def test_non_mapping_user_config_ignored(
        self, assembler: PromptAssembler, persona_config: PersonaConfig
    ) -> None:
        """Test that a user config that is not a mapping counts as empty."""
        content = system_content(assembler.build_prompt({}, "Habla como un pirata."))

        assert persona_config.system_prompt in content
        assert "pirata" not in content

    def test_non_mapping_user_config_basic_prompt(
        self, assembler: PromptAssembler, persona_config: PersonaConfig
    ) -> None:
        """Test the basic prompt with a user config that is not a mapping."""
        assert assembler.build_basic_prompt([], ["system_prompt"]) == [
            {"role": "system", "content": persona_config.system_prompt}
        ]

    def test_without_any_user_prompt(
        self, template_store: TemplateStore, registry: LanguageRegistry
    ) -> None:
        """Test a prompt without persona or user prompt."""
        assembler = PromptAssembler(template_store, registry)

        content = system_content(assembler.build_prompt({}, None))

        assert content.endswith(template_store.get("format_instructions").content)


class TestStateDirective:
    """Conversational-state directive tests."""

    def test_complex_question_with_urgency(self, assembler: PromptAssembler) -> None:
        """Test question type, complexity and tone hints."""
        context_map = {
            "messageStructure": {"isQuestion": True, "complexity": "complex"},
            "questionType": "howto",
            "sentiment": {"sentiment": "urgent"},
        }

        content = system_content(assembler.build_prompt(context_map, None))

        assert 'El usuario está haciendo una pregunta de tipo "howto".' in content
        assert "proporciona una respuesta detallada" in content
        assert "sé conciso y directo" in content

    def test_command_with_confusion(self, assembler: PromptAssembler) -> None:
        """Test the command hint and the confused tone."""
        context_map = {
            "messageStructure": {"isCommand": True},
            "sentiment": {"sentiment": "confused"},
        }

        content = system_content(assembler.build_prompt(context_map, None))

        assert "El usuario está solicitando una acción específica." in content
        assert "explica con claridad" in content

    def test_no_directive_for_statements(self, assembler: PromptAssembler) -> None:
        """Test that plain statements get no directive, even with a tone."""
        context_map = {
            "messageStructure": {"isQuestion": False, "isCommand": False},
            "sentiment": {"sentiment": "urgent"},
        }

        content = system_content(assembler.build_prompt(context_map, None))

        assert "urgencia" not in content
        assert "El usuario está" not in content

    def test_english_directive(self, template_store: TemplateStore) -> None:
        """Test the directive of an English-default assembler."""
        assembler = PromptAssembler(template_store, build_default_registry("en"))

        content = system_content(
            assembler.build_prompt({"messageStructure": {"isQuestion": True}}, None)
        )

        assert 'The user is asking a "general" question.' in content


class TestLanguageDirective:
    """Language directive tests."""

    def test_default_language_has_no_directive(self, assembler: PromptAssembler) -> None:
        """Test that the default language needs no directive."""
        content = system_content(assembler.build_prompt({"language": "es"}, None))

        assert "Responde en" not in content

    def test_named_language(self, assembler: PromptAssembler) -> None:
        """Test a language with an explicit name."""
        content = system_content(
            assembler.build_prompt({"language": {"code": "fr", "name": "Français"}}, None)
        )

        assert "Responde en Français (fr)." in content

    def test_unknown_language_without_name(self, assembler: PromptAssembler) -> None:
        """Test that the code is used when no name is known."""
        content = system_content(assembler.build_prompt({"language": "fr"}, None))

        assert "Responde en fr (fr)." in content


class TestDegradation:
    """Section and whole-prompt fallback tests."""

    def test_missing_entity_template(
        self,
        registry: LanguageRegistry,
        full_context: dict[str, Any],
        base_prompt: str,
        format_prompt: str,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that a missing section template only drops that section."""
        assembler = PromptAssembler(store_without("entity_processing"), registry)

        with caplog.at_level(logging.WARNING):
            content = system_content(assembler.build_prompt(full_context, None))

        assert content.startswith(base_prompt)
        assert format_prompt in content
        assert "Django" not in content
        assert "guia.pdf" in content
        assert "entity_processing" in caplog.text

    def test_missing_format_template(
        self, registry: LanguageRegistry, base_prompt: str
    ) -> None:
        """Test that format instructions are optional."""
        assembler = PromptAssembler(store_without("format_instructions"), registry)

        assert system_content(assembler.build_prompt({}, None)) == base_prompt

    def test_missing_base_template(
        self, registry: LanguageRegistry, persona_config: PersonaConfig
    ) -> None:
        """Test that a missing base template leaves only the persona line."""
        assembler = PromptAssembler(
            store_without("system_base"), registry, persona=persona_config
        )

        messages = assembler.build_prompt({"recentMessages": [{"role": "user", "content": "Hola"}]}, None)

        assert messages == [
            {"role": "system", "content": persona_config.system_prompt},
            {"role": "user", "content": "Hola"},
        ]

    def test_missing_base_template_without_persona(
        self, registry: LanguageRegistry
    ) -> None:
        """Test the built-in persona line."""
        assembler = PromptAssembler(TemplateStore(), registry)

        assert system_content(assembler.build_prompt({}, None)) == (
            "Eres un asistente amable y útil que responde de forma clara y organizada."
        )

    def test_failing_section_is_skipped(
        self, assembler: PromptAssembler, full_context: dict[str, Any]
    ) -> None:
        """Test that an unexpected section error only drops that section."""
        with patch(
            "cagchat.infrastructure.llm.prompt_builder.format_documents",
            side_effect=RuntimeError("boom"),
        ):
            content = system_content(assembler.build_prompt(full_context, None))

        assert "guia.pdf" not in content
        assert "Django" in content
        assert "Docker" in content

    def test_unknown_placeholder_kept(self, registry: LanguageRegistry) -> None:
        """Test that custom templates keep unknown placeholders."""
        store = TemplateStore(
            [
                Template(name="system_base", content="Base"),
                Template(name="entity_processing", content="{{entities}}\n{{firma}}"),
            ]
        )
        assembler = PromptAssembler(store, registry)
        context_map = {"entities": [{"name": "Ada", "type": "person", "confidence": 1}]}

        content = system_content(assembler.build_prompt(context_map, None))

        assert content == "Base\n\n- Ada (person)\n{{firma}}"

    @pytest.mark.parametrize("context_map", ["texto", 42, ["a"]])
    def test_malformed_context(
        self,
        assembler: PromptAssembler,
        persona_config: PersonaConfig,
        context_map: Any,
    ) -> None:
        """Test that a malformed context map falls back to the basic prompt."""
        messages = assembler.build_prompt(context_map, None)

        assert messages == [{"role": "system", "content": persona_config.system_prompt}]

    def test_normalization_failure_keeps_history(
        self,
        template_store: TemplateStore,
        registry: LanguageRegistry,
        persona_config: PersonaConfig,
    ) -> None:
        """Test that the fallback still sends the raw history."""
        normalizer = Mock()
        normalizer.normalize.side_effect = RuntimeError("boom")
        assembler = PromptAssembler(
            template_store, registry, persona=persona_config, normalizer=normalizer
        )
        context_map = {"recentMessages": [{"role": "bot", "content": "Hola"}]}

        messages = assembler.build_prompt(context_map, None)

        assert messages == [
            {"role": "system", "content": persona_config.system_prompt},
            {"role": "assistant", "content": "Hola"},
        ]

    def test_none_context(
        self, assembler: PromptAssembler, persona_config: PersonaConfig
    ) -> None:
        """Test that no context gives the basic prompt."""
        assert assembler.build_prompt(None, None) == [
            {"role": "system", "content": persona_config.system_prompt}
        ]


class TestEnglishPrompt:
    """Prompt labels of an English-default assembler."""

    def test_labels(self, template_store: TemplateStore) -> None:
        """Test memory and concept labels."""
        assembler = PromptAssembler(template_store, build_default_registry("en"))
        context_map = {
            "documents": [{"name": "a.txt", "summary": "S", "keyConcepts": ["x"]}],
            "memory": {"longTerm": [{"userMessage": "Hi", "relevance": 0.9}]},
        }

        content = system_content(assembler.build_prompt(context_map, None))

        assert "- a.txt: S [Key concepts: x]" in content
        assert '- User asked about: "Hi"' in content


class TestBuildBasicPrompt:
    """build_basic_prompt tests."""

    def test_basic_prompt(
        self, assembler: PromptAssembler, persona_config: PersonaConfig
    ) -> None:
        """Test persona line plus trimmed history."""
        history = [{"role": "user", "content": str(i)} for i in range(11)]

        messages = assembler.build_basic_prompt(history)

        assert messages[0] == {"role": "system", "content": persona_config.system_prompt}
        assert len(messages) == 11
