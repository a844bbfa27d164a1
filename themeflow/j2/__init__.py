"""ThemeFlow Jinja2 rendering package."""

from themeflow.j2.core import TemplateRenderer
from themeflow.j2.exceptions import RenderError, TemplateRenderError

__all__ = [
    "RenderError",
    "TemplateRenderError",
    "TemplateRenderer",
]
