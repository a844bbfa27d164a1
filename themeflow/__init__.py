"""ThemeFlow: action/filter hooks and template hierarchy resolution for themes."""

from themeflow.builder import ThemeFlowBuilder
from themeflow.constants import ContentType, LifecycleHook
from themeflow.hooks import HookRegistry
from themeflow.settings import ThemeFlowSettings
from themeflow.templates import ContentDescriptor, ResolvedTemplate, TemplateResolver, TemplateRuleTable
from themeflow.themeflow import ThemeFlow

__all__ = [
    "ContentDescriptor",
    "ContentType",
    "HookRegistry",
    "LifecycleHook",
    "ResolvedTemplate",
    "TemplateResolver",
    "TemplateRuleTable",
    "ThemeFlow",
    "ThemeFlowBuilder",
    "ThemeFlowSettings",
]
