from collections.abc import Callable
from pathlib import Path

from themeflow.exceptions import InitializationError, ResourceError, SettingsError
from themeflow.hooks import HookRegistry
from themeflow.j2 import TemplateRenderer
from themeflow.settings import ThemeFlowSettings
from themeflow.templates import ExistenceCheck, TemplateRuleError
from themeflow.themeflow import ThemeFlow


class ThemeFlowBuilder:
    """
    Builder class for constructing ThemeFlow objects with a fluent interface.

    Usage Examples:
        # Basic usage
        themeflow = ThemeFlowBuilder().with_settings_path("themeflow.yaml").build()

        # Injecting collaborators, e.g. in tests
        themeflow = (
            ThemeFlowBuilder()
            .with_settings_object(settings)
            .with_registry(registry)
            .with_existence_check(InMemoryExistenceCheck({"child": ["single.html"]}))
            .build()
        )

    Order of preference for building a ThemeFlowSettings object:
      1. with_settings_object()
      2. with_settings_path()
      3. ThemeFlowSettings.load() default resolution (env var, then themeflow.yaml)
    """

    def __init__(self):
        self._settings: ThemeFlowSettings | None = None
        self._registry: HookRegistry | None = None
        self._existence_check: ExistenceCheck | Callable[[str, str], bool] | None = None
        self._renderer: TemplateRenderer | None = None

    def with_settings_object(self, settings_object: ThemeFlowSettings) -> "ThemeFlowBuilder":
        """
        Set the ThemeFlowSettings object for the builder.

        Returns:
            The builder instance for method chaining.
        """
        self._settings = settings_object
        return self

    def with_settings_path(self, settings_path: str | Path) -> "ThemeFlowBuilder":
        """
        Load settings from a YAML file. Ignored if a settings object was already set.

        Returns:
            The builder instance for method chaining.

        Raises:
            InitializationError: If the settings can't be loaded.
        """
        if not self._settings:
            try:
                self._settings = ThemeFlowSettings.load(settings_file=str(settings_path))
            except (SettingsError, ResourceError) as e:
                raise InitializationError(f"Failed to load settings from '{settings_path}': {e}") from e
        return self

    def with_registry(self, registry: HookRegistry) -> "ThemeFlowBuilder":
        """
        Use an existing hook registry, e.g. one shared with other components.

        Returns:
            The builder instance for method chaining.
        """
        self._registry = registry
        return self

    def with_existence_check(
        self, existence_check: ExistenceCheck | Callable[[str, str], bool]
    ) -> "ThemeFlowBuilder":
        """
        Replace the file system existence check.

        Returns:
            The builder instance for method chaining.
        """
        self._existence_check = existence_check
        return self

    def with_renderer(self, renderer: TemplateRenderer) -> "ThemeFlowBuilder":
        """
        Replace the default Jinja2 renderer.

        Returns:
            The builder instance for method chaining.
        """
        self._renderer = renderer
        return self

    def build(self) -> ThemeFlow:
        """
        Build the ThemeFlow object. setup() is not called.

        Returns:
            The ThemeFlow object.

        Raises:
            InitializationError: If settings can't be loaded or the rule table is invalid.
        """
        if not self._settings:
            try:
                self._settings = ThemeFlowSettings.load()
            except (SettingsError, ResourceError) as e:
                raise InitializationError(f"Failed to load settings: {e}") from e

        try:
            return ThemeFlow(
                settings=self._settings,
                registry=self._registry,
                existence_check=self._existence_check,
                renderer=self._renderer,
            )
        except TemplateRuleError as e:
            raise InitializationError(f"Invalid template rules: {e}", component="ThemeFlowBuilder") from e
