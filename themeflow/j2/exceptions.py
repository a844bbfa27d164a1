"""Jinja2-specific exceptions for ThemeFlow."""

from themeflow.exceptions import ThemeFlowError


class RenderError(ThemeFlowError):
    """Base exception for rendering errors."""


class TemplateRenderError(RenderError):
    """
    Exception class for template rendering errors.
    """

    def __init__(self, message: str = "", template: str = ""):
        # Truncate very long inline templates
        template_preview = template[:97] + "..." if len(template) > 100 else template  # noqa: PLR2004

        context = f" Template: '{template_preview}'" if template else ""
        super().__init__(f"{message}{context}")
        self.template = template
