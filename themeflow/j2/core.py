from collections.abc import Iterable, Mapping
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as Jinja2TemplateError,
    select_autoescape,
)

from themeflow.j2.exceptions import TemplateRenderError
from themeflow.logger import logger
from themeflow.templates.resolver import ResolvedTemplate


class TemplateRenderer:
    """Renders resolved templates with Jinja2.

    The environment loader searches every root in priority order, so
    ``{% extends "base.html" %}`` or ``{% include %}`` inside a child theme
    template picks the child's copy first and falls back to the parent's.
    The resolved template itself is always loaded from the root it was
    resolved in.
    """

    def __init__(self, roots: Iterable[str], environment: Environment | None = None):
        """
        Args:
            roots: Template roots, highest priority first.
            environment: A preconfigured environment. When given, its loader is kept.
        """
        self.roots = [str(root) for root in roots]
        self.environment = environment or Environment(
            loader=FileSystemLoader(self.roots),
            undefined=StrictUndefined,
            autoescape=select_autoescape(["html", "htm", "xml"]),
            extensions=["jinja2.ext.loopcontrols"],
        )

    def render(self, resolved: ResolvedTemplate, context: Mapping[str, Any] | None = None) -> str:
        """Render a resolved template.

        Raises:
            TemplateRenderError: If loading or rendering fails.
        """
        try:
            template = FileSystemLoader(resolved.root).load(self.environment, resolved.name)
            output = template.render(dict(context or {}))
        except Jinja2TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render '{resolved.identifier}': {e.__class__.__name__}: {e}"
            ) from e
        logger.debug(f"Rendered '{resolved.identifier}' ({len(output)} chars)")
        return output

    def render_string(self, source: str, context: Mapping[str, Any] | None = None) -> str:
        """Render an inline template string with the same environment.

        Raises:
            TemplateRenderError: If compiling or rendering fails.
        """
        try:
            return self.environment.from_string(source).render(dict(context or {}))
        except Jinja2TemplateError as e:
            raise TemplateRenderError(f"Failed to render template string: {e}", template=source) from e
