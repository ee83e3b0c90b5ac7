"""Placeholder substitution for prompt templates."""

import re
from collections.abc import Callable, Mapping

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")

Renderer = Callable[[], str]


def fill_placeholders(content: str, renderers: Mapping[str, Renderer]) -> str:
    """Replace ``{{name}}`` tokens using ``renderers``.

    Each renderer is called at most once, in the mapping's order, and only
    if its placeholder appears in ``content``. Unknown placeholders are left
    verbatim.

    Args:
        content: Template content.
        renderers: Placeholder name to a function producing its text.

    Returns:
        Content with known placeholders replaced.
    """
    present = {m.group(1) for m in PLACEHOLDER_PATTERN.finditer(content)}
    values = {name: render() for name, render in renderers.items() if name in present}

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return values[name]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, content)
