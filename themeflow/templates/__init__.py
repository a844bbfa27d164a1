"""Template resolution for ThemeFlow.

Turns a content descriptor into the most specific template that exists
across an ordered set of override roots.
"""

from themeflow.templates.descriptor import ContentDescriptor
from themeflow.templates.exceptions import (
    InvalidDescriptorError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuleError,
)
from themeflow.templates.existence import (
    CallableExistenceCheck,
    ExistenceCheck,
    FileSystemExistenceCheck,
    InMemoryExistenceCheck,
)
from themeflow.templates.resolver import ResolvedTemplate, TemplateResolver
from themeflow.templates.rules import TemplateRuleTable

__all__ = [
    "CallableExistenceCheck",
    "ContentDescriptor",
    "ExistenceCheck",
    "FileSystemExistenceCheck",
    "InMemoryExistenceCheck",
    "InvalidDescriptorError",
    "ResolvedTemplate",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateResolver",
    "TemplateRuleError",
    "TemplateRuleTable",
]
