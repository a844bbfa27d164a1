from collections.abc import Sequence

from themeflow.exceptions import ThemeFlowError


class TemplateError(ThemeFlowError):
    """Base exception class for template resolution errors."""


class TemplateRuleError(TemplateError):
    """Raised when a rule table contains an invalid pattern."""

    def __init__(self, message: str = "", category: str = "", pattern: str = ""):
        self.category = category
        self.pattern = pattern
        context = f"Rule '{category}' pattern '{pattern}': " if pattern else ""
        super().__init__(f"{context}{message}")


class InvalidDescriptorError(TemplateError, ValueError):
    """Raised when a content descriptor is built from invalid data."""


class TemplateNotFoundError(TemplateError):
    """Raised when no candidate and no fallback exist in any root."""

    def __init__(self, candidates: Sequence[str], roots: Sequence[str], fallback: str | None = None):
        self.candidates = list(candidates)
        self.roots = list(roots)
        self.fallback = fallback
        tried = ", ".join(self.candidates) or "<none>"
        searched = ", ".join(self.roots) or "<none>"
        message = f"No template found. Tried candidates [{tried}] in roots [{searched}]"
        if fallback:
            message += f"; fallback '{fallback}' is missing too"
        super().__init__(message)
