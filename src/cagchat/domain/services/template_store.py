"""Read-only snapshot of the prompt templates."""

import logging
from collections.abc import Iterable
from types import MappingProxyType

from cagchat.domain.entities.template import Template
from cagchat.domain.exceptions import TemplateNotFoundError
from cagchat.domain.repositories import TemplateRepository

logger = logging.getLogger(__name__)


class TemplateStore:
    """Templates loaded once and never modified afterwards.

    Build one with :meth:`load` at startup; rebuild it to pick up edits.
    """

    def __init__(self, templates: Iterable[Template] = ()) -> None:
        self._templates = MappingProxyType({t.name: t for t in templates})

    @classmethod
    def load(cls, repository: TemplateRepository) -> "TemplateStore":
        """Snapshot every template the repository can read."""
        templates = repository.find_all()
        logger.info("Loaded %d prompt templates", len(templates))
        return cls(templates)

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def get(self, name: str) -> Template:
        """Return a template by name.

        Raises:
            TemplateNotFoundError: If no template has that name.
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)
        return template

    def __contains__(self, name: object) -> bool:
        return name in self._templates
