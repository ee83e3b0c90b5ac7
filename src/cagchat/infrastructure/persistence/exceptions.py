"""Persistence-related exceptions."""


class PersistenceError(Exception):
    """Base exception for persistence-related errors."""


class TemplateStorageError(PersistenceError):
    """Template directory could not be prepared or written."""
