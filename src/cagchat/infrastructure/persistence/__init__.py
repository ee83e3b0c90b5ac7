"""Persistence layer."""

from cagchat.infrastructure.persistence.default_templates import DEFAULT_TEMPLATES
from cagchat.infrastructure.persistence.exceptions import (
    PersistenceError,
    TemplateStorageError,
)
from cagchat.infrastructure.persistence.template_repository import (
    FileTemplateRepository,
    sanitize_template_name,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "FileTemplateRepository",
    "PersistenceError",
    "TemplateStorageError",
    "sanitize_template_name",
]
