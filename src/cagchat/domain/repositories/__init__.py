"""Domain repositories."""

from cagchat.domain.repositories.template_repository import TemplateRepository

__all__ = ["TemplateRepository"]
