from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from themeflow.constants import SETUP_HOOKS, LifecycleHook
from themeflow.exceptions import ImmutableAttributeError
from themeflow.hooks import HookRegistry, load_hook_callbacks, load_hook_modules
from themeflow.j2 import TemplateRenderer
from themeflow.logger import logger
from themeflow.settings import ThemeFlowSettings
from themeflow.templates import (
    ContentDescriptor,
    ExistenceCheck,
    FileSystemExistenceCheck,
    ResolvedTemplate,
    TemplateResolver,
    TemplateRuleTable,
)


class ThemeFlow:
    """
    ThemeFlow ties a hook registry, a template resolver and a renderer together
    the way a theme is structured: setup code attaches callbacks to lifecycle
    hooks once, then every request resolves and renders a template.

    The lifecycle typically involves:
    1. Initialization with settings (the registry, rules and resolver are built)
    2. setup(): hook modules and dotted callbacks are registered, then the
       setup actions fire in order: after_setup, init, register_widgets,
       enqueue_assets. The registry is frozen afterwards unless disabled.
    3. resolve()/render() per request, with the template_* filters and the
       before/after_template_render actions fired around them.

    The registry and the resolver share no state; ThemeFlow is the only place
    where they meet.
    """

    def __init__(
        self,
        settings: ThemeFlowSettings,
        registry: HookRegistry | None = None,
        existence_check: ExistenceCheck | Callable[[str, str], bool] | None = None,
        renderer: TemplateRenderer | None = None,
    ):
        """
        Args:
            settings: ThemeFlow settings.
            registry: Hook registry to use. A fresh one is created if omitted.
            existence_check: How template existence is checked. Defaults to the file system.
            renderer: Template renderer. Defaults to a Jinja2 renderer over the template roots.
        """
        self._settings = settings
        self._registry = registry or HookRegistry()
        self._rules = TemplateRuleTable(settings.template_rules, settings.default_patterns)
        self._resolver = TemplateResolver(
            rules=self._rules,
            roots=settings.template_roots,
            exists=existence_check or FileSystemExistenceCheck(),
            fallback=settings.fallback_template,
            cache=settings.cache_existence,
        )
        self._renderer = renderer or TemplateRenderer(settings.template_roots)
        self._is_setup = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(roots={list(self._resolver.roots)}, setup={self._is_setup})"

    ###########################################################################
    # Lifecycle
    ###########################################################################

    def setup(self) -> "ThemeFlow":
        """Load hook callbacks and fire the setup actions.

        Calling setup() again is a no-op.

        Returns:
            The ThemeFlow instance, for chaining.

        Raises:
            HookError: If a hook module or callback can't be loaded, or a setup callback fails.
        """
        if self._is_setup:
            logger.debug("ThemeFlow setup already done, skipping")
            return self

        hook_dirs = []
        for dir_path in self._settings.local_hooks:
            if Path(dir_path).is_dir():
                hook_dirs.append(dir_path)
            else:
                logger.debug(f"Hooks directory does not exist, skipping: {dir_path}")

        modules = load_hook_modules(self._registry, hook_dirs)
        callbacks = load_hook_callbacks(self._registry, self._settings.hook_callbacks)
        logger.info(f"Loaded {modules} hook module(s) and {callbacks} hook callback(s)")

        for hook_name in SETUP_HOOKS:
            self._registry.dispatch_action(hook_name, self)

        if self._settings.freeze_after_setup:
            self._registry.freeze()

        self._is_setup = True
        return self

    @property
    def is_setup(self) -> bool:
        return self._is_setup

    ###########################################################################
    # Resolution and rendering
    ###########################################################################

    def candidates(self, descriptor: ContentDescriptor) -> list[str]:
        """Rule table candidates after the template_candidates filter."""
        return self._registry.apply_filter(
            LifecycleHook.TEMPLATE_CANDIDATES, self._resolver.candidates(descriptor), descriptor
        )

    def resolve(self, descriptor: ContentDescriptor) -> ResolvedTemplate:
        """Resolve a descriptor, letting template_include replace the result.

        Raises:
            TemplateNotFoundError: If neither a candidate nor the fallback exists.
            CallbackFailureError: If a filter callback fails.
        """
        resolved = self._resolver.resolve_candidates(self.candidates(descriptor))
        resolved = self._registry.apply_filter(LifecycleHook.TEMPLATE_INCLUDE, resolved, descriptor)
        logger.debug(f"Resolved '{descriptor}' to '{resolved}'")
        return resolved

    def render(self, descriptor: ContentDescriptor, context: Mapping[str, Any] | None = None) -> str:
        """Resolve and render a descriptor.

        Raises:
            TemplateNotFoundError: If neither a candidate nor the fallback exists.
            TemplateRenderError: If Jinja2 fails.
            CallbackFailureError: If a hook callback fails.
        """
        resolved = self.resolve(descriptor)
        render_context = self._registry.apply_filter(
            LifecycleHook.TEMPLATE_CONTEXT, dict(context or {}), descriptor, resolved
        )

        self._registry.dispatch_action(LifecycleHook.BEFORE_TEMPLATE_RENDER, resolved, descriptor)
        output = self._renderer.render(resolved, render_context)
        output = self._registry.apply_filter(LifecycleHook.RENDERED_OUTPUT, output, descriptor, resolved)
        self._registry.dispatch_action(LifecycleHook.AFTER_TEMPLATE_RENDER, resolved, descriptor)
        return output

    ###########################################################################
    # Read-only components
    ###########################################################################

    @property
    def settings(self) -> ThemeFlowSettings:
        return self._settings

    @settings.setter
    def settings(self, value: Any) -> None:
        raise ImmutableAttributeError("Settings cannot be replaced, build a new ThemeFlow instead.")

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    @registry.setter
    def registry(self, value: Any) -> None:
        raise ImmutableAttributeError("Hook registry cannot be set directly.")

    @property
    def resolver(self) -> TemplateResolver:
        return self._resolver

    @resolver.setter
    def resolver(self, value: Any) -> None:
        raise ImmutableAttributeError("Template resolver cannot be set directly.")

    @property
    def rules(self) -> TemplateRuleTable:
        return self._rules

    @property
    def renderer(self) -> TemplateRenderer:
        return self._renderer

