"""Prompt template entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Template:
    """A named prompt template.

    ``content`` may contain placeholder tokens such as ``{{entities}}``.
    """

    name: str
    content: str
