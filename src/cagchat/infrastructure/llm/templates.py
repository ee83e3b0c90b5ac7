"""Jinja2 template utilities for prompt directives."""

from jinja2 import Environment, PackageLoader, Template, select_autoescape


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for prompt directive templates.

    Templates are loaded from the cagchat.infrastructure.llm.templates
    package directory.

    Returns:
        Configured Jinja2 environment.
    """
    return Environment(
        loader=PackageLoader("cagchat.infrastructure.llm", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def select_language_template(
    env: Environment, name: str, language: str, fallback: str
) -> Template:
    """Get ``<name>_<language>.j2``, falling back to the fallback language.

    Args:
        env: Jinja2 environment.
        name: Template base name.
        language: Preferred language code.
        fallback: Language code used when no template exists for ``language``.

    Returns:
        The first template found.
    """
    return env.select_template([f"{name}_{language}.j2", f"{name}_{fallback}.j2"])
