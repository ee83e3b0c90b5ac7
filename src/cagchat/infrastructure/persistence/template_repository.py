"""JSON file implementation of TemplateRepository."""

import json
import logging
import re
from pathlib import Path

from cagchat.domain.entities.template import Template
from cagchat.infrastructure.persistence.default_templates import DEFAULT_TEMPLATES
from cagchat.infrastructure.persistence.exceptions import TemplateStorageError

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-z0-9_]", re.IGNORECASE)


def sanitize_template_name(name: str) -> str:
    """Make a template name safe to use as a file name."""
    return _UNSAFE_NAME_CHARS.sub("_", name).lower()


class FileTemplateRepository:
    """One ``<name>.json`` file per template, holding ``{name, content}``."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize the repository.

        Args:
            directory: Directory holding the template files.
        """
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def seed_defaults(self) -> bool:
        """Create the directory with the default templates if it is missing.

        Returns:
            True if the directory was created.

        Raises:
            TemplateStorageError: If the directory cannot be written.
        """
        if self._directory.exists():
            return False
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            for template in DEFAULT_TEMPLATES:
                self._write(template)
        except OSError as e:
            raise TemplateStorageError(
                f"Cannot create templates in {self._directory}: {e}"
            ) from e
        logger.info("Default prompt templates created in %s", self._directory)
        return True

    def find_by_name(self, name: str) -> Template | None:
        path = self._path(name)
        if not path.exists():
            return None
        return self._read(path)

    def find_all(self) -> list[Template]:
        if not self._directory.is_dir():
            return []
        templates = []
        for path in sorted(self._directory.glob("*.json")):
            template = self._read(path)
            if template is not None:
                templates.append(template)
        return templates

    def save(self, name: str, content: str) -> bool:
        if not name or not content:
            return False
        template = Template(name=sanitize_template_name(name), content=content)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            self._write(template)
        except OSError as e:
            logger.error("Failed to save template %s: %s", name, e)
            return False
        return True

    def _path(self, name: str) -> Path:
        return self._directory / f"{sanitize_template_name(name)}.json"

    def _write(self, template: Template) -> None:
        data = {"name": template.name, "content": template.content}
        self._path(template.name).write_text(
            json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
        )

    def _read(self, path: Path) -> Template | None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Template(name=str(data.get("name") or path.stem), content=data["content"])
        except (OSError, ValueError, KeyError, AttributeError) as e:
            logger.warning("Skipping unreadable template %s: %s", path.name, e)
            return None
