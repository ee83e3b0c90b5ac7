"""Context-augmented prompt assembly."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from cagchat.config.models import ContextLimits, PersonaConfig
from cagchat.domain.entities.context import EnhancedContext
from cagchat.domain.exceptions import TemplateNotFoundError
from cagchat.domain.languages import LanguageProfile, LanguageRegistry
from cagchat.domain.services.context_normalizer import ContextNormalizer
from cagchat.domain.services.message_formatter import (
    are_texts_very_similar,
    format_documents,
    format_entities,
    format_memory_items,
    trim_history,
)
from cagchat.domain.services.placeholders import fill_placeholders
from cagchat.domain.services.template_store import TemplateStore
from cagchat.infrastructure.llm.templates import (
    create_jinja_env,
    select_language_template,
)
from cagchat.infrastructure.persistence.default_templates import (
    DOCUMENT_CONTEXT,
    ENTITY_PROCESSING,
    FORMAT_INSTRUCTIONS,
    MEMORY_CONTEXT,
    SYSTEM_BASE,
)

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class PromptSettings:
    """Effective settings of one prompt build.

    Attributes:
        system_prompt: User-level system prompt, appended unless it repeats
            the base template.
    """

    system_prompt: str | None = None


class PromptAssembler:
    """Build the message list sent to the model.

    The system message is the base template followed by optional sections:
    format instructions, entities, documents, memory, a conversational-state
    directive, a language directive and the user's own system prompt. A
    section that fails is skipped on its own. If the context map cannot be
    normalized at all, a basic prompt (persona line plus history) is used.
    """

    def __init__(
        self,
        template_store: TemplateStore,
        registry: LanguageRegistry,
        persona: PersonaConfig | None = None,
        limits: ContextLimits | None = None,
        normalizer: ContextNormalizer | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            template_store: Loaded prompt templates.
            registry: Language profiles; the default one sets the prompt language.
            persona: Persona whose system prompt is the base user setting.
            limits: Context caps and thresholds.
            normalizer: Context normalizer (built from ``limits`` if omitted).
        """
        self._templates = template_store
        self._registry = registry
        self._persona = persona
        self._limits = limits or ContextLimits()
        self._normalizer = normalizer or ContextNormalizer(self._limits)
        self._jinja_env = create_jinja_env()
        self._sections: tuple[Callable[[EnhancedContext], str | None], ...] = (
            self._format_section,
            self._entity_section,
            self._document_section,
            self._memory_section,
            self._state_section,
            self._language_section,
        )

    @property
    def profile(self) -> LanguageProfile:
        return self._registry.default

    def build_prompt(
        self, context_map: Any, user_config: Mapping[str, Any] | None = None
    ) -> list[dict[str, str]]:
        """Build the context-augmented message list.

        Args:
            context_map: Raw context map from the analysis services.
            user_config: Per-user settings overriding the persona
                (``system_prompt``).

        Returns:
            Messages, the first one with role ``system``.
        """
        if context_map is None:
            return self.build_basic_prompt([], user_config)

        settings = self._settings(user_config)

        try:
            context = self._normalizer.normalize(context_map)
            system_message = self._build_system_message(context, settings)
            history = trim_history(
                context.recent_messages, self._limits.max_history_messages
            )
        except Exception:
            logger.exception("Failed to build context prompt, using basic prompt")
            recent = []
            if isinstance(context_map, Mapping):
                recent = context_map.get("recentMessages") or context_map.get(
                    "recent_messages", []
                )
            return self.build_basic_prompt(recent, user_config)

        return [{"role": "system", "content": system_message}, *history]

    def build_basic_prompt(
        self, messages: Any, user_config: Mapping[str, Any] | None = None
    ) -> list[dict[str, str]]:
        """Persona line plus trimmed history, without any enrichment."""
        settings = self._settings(user_config)
        return [
            {"role": "system", "content": self._fallback_system_line(settings)},
            *trim_history(messages, self._limits.max_history_messages),
        ]

    def _settings(self, user_config: Mapping[str, Any] | None) -> PromptSettings:
        system_prompt = self._persona.system_prompt if self._persona else None
        if isinstance(user_config, Mapping) and user_config.get("system_prompt"):
            system_prompt = str(user_config["system_prompt"])
        return PromptSettings(system_prompt=system_prompt)

    def _fallback_system_line(self, settings: PromptSettings) -> str:
        return settings.system_prompt or self.profile.default_system_prompt

    def _build_system_message(
        self, context: EnhancedContext, settings: PromptSettings
    ) -> str:
        try:
            base = self._templates.get(SYSTEM_BASE).content
        except TemplateNotFoundError:
            logger.error("Base system template missing, using persona line")
            return self._fallback_system_line(settings)

        parts = [base]
        for build_section in self._sections:
            try:
                section = build_section(context)
            except TemplateNotFoundError as e:
                logger.warning("Skipping prompt section: %s", e)
                continue
            except Exception:
                logger.exception("Prompt section %s failed", build_section.__name__)
                continue
            if section:
                parts.append(section)

        if settings.system_prompt and not are_texts_very_similar(
            base, settings.system_prompt
        ):
            parts.append(settings.system_prompt)

        return SECTION_SEPARATOR.join(parts)

    def _format_section(self, context: EnhancedContext) -> str | None:
        if FORMAT_INSTRUCTIONS not in self._templates:
            return None
        return self._templates.get(FORMAT_INSTRUCTIONS).content

    def _entity_section(self, context: EnhancedContext) -> str | None:
        if not context.entities:
            return None
        return self._fill(
            ENTITY_PROCESSING, {"entities": lambda: format_entities(context.entities)}
        )

    def _document_section(self, context: EnhancedContext) -> str | None:
        if not context.documents:
            return None
        return self._fill(
            DOCUMENT_CONTEXT,
            {"documents": lambda: format_documents(context.documents, self.profile)},
        )

    def _memory_section(self, context: EnhancedContext) -> str | None:
        if not context.memory:
            return None
        return self._fill(
            MEMORY_CONTEXT,
            {
                "memory_items": lambda: format_memory_items(
                    context.memory,
                    self.profile,
                    self._limits.memory_preview_length,
                    self._limits.max_memory_entities,
                )
            },
        )

    def _fill(self, template_name: str, renderers: Mapping[str, Callable[[], str]]) -> str:
        return fill_placeholders(self._templates.get(template_name).content, renderers)

    def _state_section(self, context: EnhancedContext) -> str | None:
        structure = context.message_structure
        if structure is None or not (structure.is_question or structure.is_command):
            return None

        template = select_language_template(
            self._jinja_env, "state_directive", self.profile.code, "es"
        )
        text = template.render(
            is_question=structure.is_question,
            is_command=structure.is_command,
            question_type=context.question_type or "general",
            complex=structure.complexity == "complex",
            tone=context.sentiment.label if context.sentiment else None,
        )
        return text.strip() or None

    def _language_section(self, context: EnhancedContext) -> str | None:
        language = context.language
        if language is None or language.code == self.profile.code:
            return None

        name = language.name
        if not name and language.code in self._registry:
            name = self._registry.get(language.code).name
        template = select_language_template(
            self._jinja_env, "language_directive", self.profile.code, "es"
        )
        return template.render(
            language_name=name or language.code, language_code=language.code
        ).strip()
